"""Concrete adapters behind the interfaces in ``src.interfaces``."""
