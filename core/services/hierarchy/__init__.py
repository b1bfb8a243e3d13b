from .edits import EDITABLE_FIELDS, update_activity
from .flatten import flatten, sibling_sort_key
from .models import RootMeta
from .normalize import normalize

__all__ = [
    "normalize",
    "flatten",
    "sibling_sort_key",
    "update_activity",
    "EDITABLE_FIELDS",
    "RootMeta",
]
