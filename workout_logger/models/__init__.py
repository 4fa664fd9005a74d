from .workout import OperationResult, UnitChange, UnitType, Workout

__all__ = [
    "OperationResult",
    "UnitChange",
    "UnitType",
    "Workout",
]
