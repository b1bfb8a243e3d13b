from .engine import apply_action, parse_action
from .models import DEFAULT_POLICY, CompressionPolicy

__all__ = ["apply_action", "parse_action", "CompressionPolicy", "DEFAULT_POLICY"]
