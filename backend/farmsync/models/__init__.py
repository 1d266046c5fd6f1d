from .farm import Farm, Crop
from .task import Task
from .finance import Expense, Income
from ..core.database import Base
__all__ = [
    "Farm",
    "Crop",
    "Task",
    "Expense",
    "Income",
    "Base"
]
