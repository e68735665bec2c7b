"""State kept between action invocations."""

from .selections import TestSelectionCache, default_cache_path

__all__ = ["TestSelectionCache", "default_cache_path"]
