from datetime import date

import pytest
from pydantic import ValidationError

from farmsync.schemas.base import normalize_keys, to_snake
from farmsync.schemas.farm import CropCreate, CropUpdate, FarmCreate, FarmUpdate
from farmsync.schemas.finance import ExpenseCreate, ExpenseUpdate, IncomeCreate, IncomeUpdate
from farmsync.schemas.task import TaskCreate, TaskOut, TaskUpdate


@pytest.mark.parametrize(
    "key, expected",
    [("farmId", "farm_id"), ("FarmId", "farm_id"), ("Id", "id"), ("ID", "id"), ("size_unit", "size_unit")],
)
def test_to_snake(key, expected):
    assert to_snake(key) == expected


def test_normalize_keys_passes_non_dicts():
    obj = object()
    assert normalize_keys(obj) is obj


def test_farm_accepts_mixed_casing():
    farm = FarmCreate.model_validate({"Name": "North", "size": 3, "sizeUnit": "hectares", "location": "Here"})
    assert farm.name == "North"
    assert farm.size_unit == "hectares"


@pytest.mark.parametrize("size", [0, -1])
def test_farm_size_must_be_positive(size):
    with pytest.raises(ValidationError):
        FarmCreate(name="North", size=size, location="Here")


def test_required_strings_are_trimmed():
    with pytest.raises(ValidationError):
        FarmCreate(name="   ", size=1, location="Here")
    assert FarmCreate(name="  North ", size=1, location="Here").name == "North"


def test_crop_defaults():
    crop = CropCreate(farm_id="f1", name="Corn", planting_date="2024-04-01")
    assert crop.growth_stage == "planted"
    assert crop.planting_date == date(2024, 4, 1)


def test_crop_rejects_unknown_stage():
    with pytest.raises(ValidationError):
        CropCreate(farm_id="f1", name="Corn", planting_date="2024-04-01", growth_stage="sprouting")


def test_expense_amount_and_date_validation():
    with pytest.raises(ValidationError):
        ExpenseCreate(farm_id="f1", category="seeds", amount=0, date="2024-01-01")
    with pytest.raises(ValidationError):
        ExpenseCreate(farm_id="f1", category="seeds", amount=5, date="yesterday")


def test_income_source_defaults_to_crop_sales():
    income = IncomeCreate(description="Corn", amount=10, date="2024-01-01")
    assert income.source == "crop_sales"


def test_task_completed_flag_maps_to_status():
    assert TaskCreate(farm_id="f1", type="Watering", completed=True).status == "completed"
    assert TaskCreate(farm_id="f1", type="Watering", completed=False).status == "pending"


def test_task_explicit_status_wins():
    task = TaskCreate(farm_id="f1", type="Watering", status="on_hold", completed=True)
    assert task.status == "on_hold"


def test_task_completed_flag_is_not_stored():
    dumped = TaskCreate(farm_id="f1", type="Watering", completed=True).model_dump()
    assert "completed" not in dumped
    assert dumped["priority"] == "medium"


def test_task_update_from_completed_only():
    update = TaskUpdate(completed=True)
    assert update.model_dump(exclude_unset=True) == {"status": "completed"}


def test_task_out_derives_completed():
    out = TaskOut(id="t1", farm_id="f1", type="Weeding", status="completed")
    assert out.model_dump()["completed"] is True
    assert TaskOut(id="t1", farm_id="f1", type="Weeding", status="in_progress").completed is False


@pytest.mark.parametrize(
    "schema, body",
    [
        (FarmUpdate, {"size": None}),
        (FarmUpdate, {"name": None}),
        (CropUpdate, {"growthStage": None}),
        (TaskUpdate, {"status": None}),
        (TaskUpdate, {"status": None, "completed": True}),
        (ExpenseUpdate, {"amount": None}),
        (IncomeUpdate, {"source": None}),
    ],
)
def test_update_rejects_null_for_required_columns(schema, body):
    with pytest.raises(ValidationError):
        schema.model_validate(body)


def test_update_allows_null_for_optional_columns():
    assert CropUpdate(expected_harvest_date=None).model_dump(exclude_unset=True) == {"expected_harvest_date": None}
    assert IncomeUpdate.model_validate({"cropId": None}).model_dump(exclude_unset=True) == {"crop_id": None}
    assert FarmUpdate().model_dump(exclude_unset=True) == {}
