"""FarmSync backend: farms, crops, tasks, expenses, income and weather advice."""

__version__ = "1.0.0"
