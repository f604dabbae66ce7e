"""Dataset specification core: immutable, namespaced dataset configuration trees."""

__version__ = "0.1.0"
