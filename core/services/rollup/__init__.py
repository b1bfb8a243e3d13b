from .engine import rollup

__all__ = ["rollup"]
