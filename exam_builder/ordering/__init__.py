from .engine import QuestionOrderingEngine
from .layout import QuestionLayout, Slot

__all__ = ["QuestionOrderingEngine", "QuestionLayout", "Slot"]
