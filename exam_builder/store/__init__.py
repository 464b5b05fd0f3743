from .entity_store import EntityStore, kind_of

__all__ = ["EntityStore", "kind_of"]
