from .manager import CompositionManager

__all__ = ["CompositionManager"]
