"""plang: a tree-walking interpreter for a minimal imperative language."""

from plang.driver import check_source, parse_source, run_source

__version__ = "0.1.0"

__all__ = ["check_source", "parse_source", "run_source", "__version__"]
