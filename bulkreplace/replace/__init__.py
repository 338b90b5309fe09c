from .engine import ReplaceEngine
from .matcher import Substitution

__all__ = ["ReplaceEngine", "Substitution"]
