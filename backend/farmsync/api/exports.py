# backend/farmsync/api/exports.py

from datetime import date, datetime
from typing import Optional
import enum

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from farmsync.api.deps import get_gateways
from farmsync.core.logger import get_logger
from farmsync.crud.gateways import Gateways
from farmsync.services import export_service as ex
from farmsync.services import filter_service as fs
from farmsync.services.categories import ALL

logger = get_logger("api.exports")

router = APIRouter(prefix="/exports", tags=["exports"])


class ExportEntity(str, enum.Enum):
    crops = "crops"
    expenses = "expenses"
    income = "income"


class ExportFormat(str, enum.Enum):
    csv = "csv"
    html = "html"
    xlsx = "xlsx"


MEDIA_TYPES = {
    ExportFormat.csv: "text/csv",
    ExportFormat.html: "text/html",
    ExportFormat.xlsx: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}

FORMATTERS = {
    (ExportEntity.crops, ExportFormat.csv): ex.export_crops_csv,
    (ExportEntity.crops, ExportFormat.html): ex.export_crops_html,
    (ExportEntity.crops, ExportFormat.xlsx): ex.export_crops_xlsx,
    (ExportEntity.expenses, ExportFormat.csv): ex.export_expenses_csv,
    (ExportEntity.expenses, ExportFormat.html): ex.export_expenses_html,
    (ExportEntity.expenses, ExportFormat.xlsx): ex.export_expenses_xlsx,
    (ExportEntity.income, ExportFormat.csv): ex.export_income_csv,
    (ExportEntity.income, ExportFormat.html): ex.export_income_html,
    (ExportEntity.income, ExportFormat.xlsx): ex.export_income_xlsx,
}


async def _load(gateways: Gateways, name: str):
    records = await gateways.get(name).get_all()
    if records is None:
        raise HTTPException(status_code=503, detail=f"Failed to load {name}")
    return records


@router.get("/{entity}.{fmt}")
async def export_records(
    entity: ExportEntity,
    fmt: ExportFormat,
    category: str = ALL,
    date_range: fs.DateRange = fs.DateRange.all_time,
    start: Optional[date] = None,
    end: Optional[date] = None,
    stage: fs.StageGroup = fs.StageGroup.all,
    year: Optional[int] = Query(default=None, ge=1900, le=9999),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    auto_print: bool = False,
    gateways: Gateways = Depends(get_gateways),
):
    farms = await _load(gateways, "farms")
    crops = await _load(gateways, "crops")

    if entity is ExportEntity.crops:
        args = (fs.filter_crops_by_stage_group(crops, stage.value), farms)
    elif entity is ExportEntity.expenses:
        expenses = fs.filter_by_category(await _load(gateways, "expenses"), category)
        expenses = fs.filter_by_date_range(expenses, date_range.value, start=start, end=end)
        args = (fs.sort_by_date_descending(expenses), farms)
    else:
        income = fs.filter_by_period(await _load(gateways, "income"), year, month)
        args = (fs.sort_by_date_descending(income), farms, crops)

    formatter = FORMATTERS[(entity, fmt)]
    if fmt is ExportFormat.html:
        body = formatter(*args, auto_print=auto_print)
    else:
        body = formatter(*args)

    filename = f"{entity.value}-{datetime.now():%Y-%m-%d}.{fmt.value}"
    logger.info(
        "Export generated: %s", filename,
        extra={"entity": entity.value, "state": fmt.value},
    )

    headers = {}
    if fmt is not ExportFormat.html:
        headers["Content-Disposition"] = f'attachment; filename="{filename}"'
    return Response(content=body, media_type=MEDIA_TYPES[fmt], headers=headers)
