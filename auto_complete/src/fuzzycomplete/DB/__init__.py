from .api import UsageStore, make_store

__all__ = ["UsageStore", "make_store"]
