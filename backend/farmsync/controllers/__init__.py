from farmsync.controllers.base import PageController, PageState, Notification
from farmsync.controllers.dashboard import DashboardController
from farmsync.controllers.farms import FarmsController, FarmDetailsController
from farmsync.controllers.crops import CropsController
from farmsync.controllers.tasks import TasksController
from farmsync.controllers.finance import ExpensesController, IncomeController
from farmsync.controllers.weather import WeatherController

__all__ = [
    "PageController",
    "PageState",
    "Notification",
    "DashboardController",
    "FarmsController",
    "FarmDetailsController",
    "CropsController",
    "TasksController",
    "ExpensesController",
    "IncomeController",
    "WeatherController",
]
