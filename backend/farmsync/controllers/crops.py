# backend/farmsync/controllers/crops.py

from typing import Any, Dict

from farmsync.controllers.base import PageController
from farmsync.services import filter_service as fs
from farmsync.services.categories import GROWTH_STAGES, lookup
from farmsync.services.export_service import farm_name


class CropsController(PageController):
    page = "crops"
    sources = ("crops", "farms")
    error_message = "Failed to load crops"

    def view_model(self, stage_group: str = fs.StageGroup.all.value) -> Dict[str, Any]:
        crops = self.data.get("crops", [])
        farms = self.data.get("farms", [])
        visible = fs.filter_crops_by_stage_group(crops, stage_group)
        return {
            "filter": fs.StageGroup(stage_group).value,
            "counts": fs.count_by_stage_group(crops),
            "crops": [
                {
                    **c,
                    "farm_name": farm_name(c.get("farm_id"), farms),
                    "stage": lookup(GROWTH_STAGES, c.get("growth_stage")).as_dict(),
                }
                for c in visible
            ],
            "farms": farms,
        }
