# backend/farmsync/controllers/farms.py

from typing import Any, Dict

from farmsync.controllers.base import PageController, PageState
from farmsync.services import filter_service as fs
from farmsync.services.aggregate_service import sum_amounts


class FarmsController(PageController):
    page = "farms"
    sources = ("farms", "crops")
    error_message = "Failed to load farms"

    def view_model(self) -> Dict[str, Any]:
        crops = self.data.get("crops", [])
        farms = [
            {**f, "crop_count": len(fs.filter_by_field(crops, "farm_id", f.get("id")))}
            for f in self.data.get("farms", [])
        ]
        return {"farms": farms, "total": len(farms)}


class FarmDetailsController(PageController):
    """
    One farm plus its crops, tasks and expenses. The farm is looked up first;
    related lists are only fetched once it is known to exist.
    """

    page = "farm_details"
    sources = ("crops", "tasks", "expenses")
    error_message = "Failed to load farm details. Please try again."
    not_found_message = "Farm not found. This field might not exist in your records."

    def __init__(self, gateways, farm_id: str):
        super().__init__(gateways)
        self.farm_id = farm_id
        self.farm = None
        self.not_found = False

    async def load(self) -> PageState:
        if not self._mounted:
            return self.state
        self.state = PageState.loading
        self.not_found = False

        if not self.farm_id:
            self.fail("Invalid farm ID provided")
            self.not_found = True
            return self.state

        farm = await self.gateways.farms.get_by_id(self.farm_id)
        if not self._mounted:
            return self.state
        if farm is None:
            self.not_found = True
            self.fail(self.not_found_message)
            return self.state

        self.farm = farm
        return await super().load()

    def after_load(self) -> None:
        for source in self.sources:
            self.data[source] = fs.filter_by_field(self.data[source], "farm_id", self.farm_id)

    def view_model(self) -> Dict[str, Any]:
        crops = self.data.get("crops", [])
        tasks = fs.sort_tasks(self.data.get("tasks", []))
        expenses = fs.sort_by_date_descending(self.data.get("expenses", []))
        return {
            "farm": self.farm,
            "crops": crops,
            "tasks": tasks,
            "expenses": expenses,
            "stats": {
                "total_crops": len(crops),
                "pending_tasks": sum(1 for t in tasks if not fs.is_task_completed(t)),
                "total_expenses": sum_amounts(expenses),
            },
        }
