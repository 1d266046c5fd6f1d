# backend/farmsync/api/records.py

"""
CRUD routers for the five entities.

Request bodies are validated by FastAPI against the create / update schemas
(422 before any gateway call). A gateway answering None / False maps to 404
for id-based calls, 400 for a rejected create and 503 for a failed listing.
"""

from typing import List, Optional, Type

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from farmsync.api.deps import get_gateways
from farmsync.controllers.tasks import TasksController
from farmsync.crud.gateways import Gateways
from farmsync.schemas.farm import FarmCreate, FarmUpdate, FarmOut, CropCreate, CropUpdate, CropOut
from farmsync.schemas.task import TaskCreate, TaskUpdate, TaskOut
from farmsync.schemas.finance import (
    ExpenseCreate, ExpenseUpdate, ExpenseOut,
    IncomeCreate, IncomeUpdate, IncomeOut,
)
from farmsync.services.filter_service import filter_by_field


def crud_router(
    source: str,
    label: str,
    create_schema: Type[BaseModel],
    update_schema: Type[BaseModel],
    out_schema: Type[BaseModel],
) -> APIRouter:
    router = APIRouter(prefix=f"/{source}", tags=[source])
    not_found = f"{label} not found"

    @router.get("", response_model=List[out_schema])
    async def list_records(
        farm_id: Optional[str] = None,
        gateways: Gateways = Depends(get_gateways),
    ):
        records = await gateways.get(source).get_all()
        if records is None:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=f"Failed to load {source}")
        if farm_id is not None:
            records = filter_by_field(records, "farm_id", farm_id)
        return records

    @router.get("/{record_id}", response_model=out_schema)
    async def get_record(record_id: str, gateways: Gateways = Depends(get_gateways)):
        record = await gateways.get(source).get_by_id(record_id)
        if record is None:
            raise HTTPException(status_code=404, detail=not_found)
        return record

    @router.post("", response_model=out_schema, status_code=status.HTTP_201_CREATED)
    async def create_record(payload: create_schema, gateways: Gateways = Depends(get_gateways)):
        record = await gateways.get(source).create(payload)
        if record is None:
            raise HTTPException(status_code=400, detail=f"Failed to save {label.lower()}")
        return record

    @router.put("/{record_id}", response_model=out_schema)
    async def update_record(record_id: str, payload: update_schema, gateways: Gateways = Depends(get_gateways)):
        record = await gateways.get(source).update(record_id, payload)
        if record is None:
            raise HTTPException(status_code=404, detail=not_found)
        return record

    @router.delete("/{record_id}", status_code=status.HTTP_200_OK)
    async def delete_record(record_id: str, gateways: Gateways = Depends(get_gateways)):
        if not await gateways.get(source).delete(record_id):
            raise HTTPException(status_code=404, detail=not_found)
        return {"ok": True, "deleted": record_id}

    return router


farms_router = crud_router("farms", "Farm", FarmCreate, FarmUpdate, FarmOut)
crops_router = crud_router("crops", "Crop", CropCreate, CropUpdate, CropOut)
tasks_router = crud_router("tasks", "Task", TaskCreate, TaskUpdate, TaskOut)
expenses_router = crud_router("expenses", "Expense", ExpenseCreate, ExpenseUpdate, ExpenseOut)
income_router = crud_router("income", "Income", IncomeCreate, IncomeUpdate, IncomeOut)


# ============================================================
# Task completion toggle
# ============================================================
@tasks_router.post("/{task_id}/toggle", response_model=TaskOut)
async def toggle_task(task_id: str, gateways: Gateways = Depends(get_gateways)):
    controller = TasksController(gateways)
    task = await controller.toggle_complete(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


routers = [farms_router, crops_router, tasks_router, expenses_router, income_router]
