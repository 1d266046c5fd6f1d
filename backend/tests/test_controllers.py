import asyncio
from datetime import datetime, timezone

import pytest

from farmsync.controllers import (
    DashboardController,
    ExpensesController,
    FarmDetailsController,
    FarmsController,
    IncomeController,
    PageState,
    TasksController,
    WeatherController,
)
from farmsync.schemas.farm import CropCreate, CropUpdate, FarmCreate, FarmUpdate
from farmsync.schemas.finance import ExpenseCreate, ExpenseUpdate, IncomeCreate, IncomeUpdate
from farmsync.schemas.task import TaskCreate, TaskUpdate
from farmsync.services.weather_service import WeatherService


class FakeGateway:
    """In-memory stand-in for EntityGateway with switchable failures."""

    def __init__(self, name, create_schema, update_schema, records=None):
        self.name = name
        self.create_schema = create_schema
        self.update_schema = update_schema
        self.records = [dict(r) for r in (records or [])]
        self.fail_reads = False
        self.fail_writes = False
        self.calls = []
        self.gate = None

    async def get_all(self):
        self.calls.append("get_all")
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_reads:
            return None
        return [dict(r) for r in self.records]

    async def get_by_id(self, record_id):
        for r in self.records:
            if r["id"] == record_id:
                return dict(r)
        return None

    async def create(self, data):
        self.calls.append("create")
        if self.fail_writes:
            return None
        record = {"id": f"{self.name}-{len(self.records) + 1}", **data.model_dump()}
        self.records.append(record)
        return dict(record)

    async def update(self, record_id, data):
        self.calls.append("update")
        if self.fail_writes:
            return None
        for r in self.records:
            if r["id"] == record_id:
                r.update(data.model_dump(exclude_unset=True))
                if "status" in r:
                    r["completed"] = r["status"] == "completed"
                return dict(r)
        return None

    async def delete(self, record_id):
        self.calls.append("delete")
        if self.fail_writes:
            return False
        before = len(self.records)
        self.records = [r for r in self.records if r["id"] != record_id]
        return len(self.records) < before


class FakeGateways:
    def __init__(self):
        self.farms = FakeGateway("farm", FarmCreate, FarmUpdate, [
            {"id": "f1", "name": "Green Valley", "size": 10, "size_unit": "acres", "location": "X"},
            {"id": "f2", "name": "Hilltop", "size": 4, "size_unit": "hectares", "location": "Y"},
        ])
        self.crops = FakeGateway("crop", CropCreate, CropUpdate, [
            {"id": "c1", "farm_id": "f1", "name": "Corn", "growth_stage": "growing"},
            {"id": "c2", "farm_id": "f1", "name": "Beans", "growth_stage": "harvested"},
        ])
        self.tasks = FakeGateway("task", TaskCreate, TaskUpdate, [
            {"id": "t1", "farm_id": "f1", "type": "Watering", "status": "pending",
             "completed": False, "due_date": "2024-03-16T09:00:00"},
            {"id": "t2", "farm_id": "f2", "type": "Weeding", "status": "completed",
             "completed": True, "due_date": "2024-03-01T09:00:00"},
        ])
        self.expenses = FakeGateway("expense", ExpenseCreate, ExpenseUpdate, [
            {"id": "e1", "farm_id": "f1", "category": "seeds", "amount": 100, "date": "2024-03-02"},
            {"id": "e2", "farm_id": "f1", "category": "fuel", "amount": 50, "date": "2024-03-05"},
            {"id": "e3", "farm_id": "f2", "category": "labor", "amount": 30, "date": "2024-01-10"},
        ])
        self.income = FakeGateway("income", IncomeCreate, IncomeUpdate, [
            {"id": "i1", "farm_id": "f1", "crop_id": "c1", "source": "crop_sales",
             "amount": 500, "date": "2024-03-03", "description": "Corn"},
        ])
        self.weather = WeatherService(location="Test Farm")

    def get(self, name):
        try:
            return getattr(self, name)
        except AttributeError:
            raise KeyError(name) from None


async def settle():
    for _ in range(5):
        await asyncio.sleep(0)


@pytest.fixture
def gw():
    return FakeGateways()


# ----------------------------
# Lifecycle
# ----------------------------
async def test_load_reaches_ready(gw):
    page = FarmsController(gw)
    assert page.state is PageState.idle
    assert await page.load() is PageState.ready
    vm = page.view_model()
    counts = {f["id"]: f["crop_count"] for f in vm["farms"]}
    assert counts == {"f1": 2, "f2": 0}


async def test_failed_source_sets_error_and_retry_recovers(gw):
    gw.crops.fail_reads = True
    page = FarmsController(gw)
    assert await page.load() is PageState.error
    assert page.error == "Failed to load farms"
    assert page.notifications[-1].level == "error"

    gw.crops.fail_reads = False
    assert await page.retry() is PageState.ready
    assert page.error is None


async def test_raising_source_sets_error(gw):
    async def boom():
        raise RuntimeError("db down")

    gw.expenses.get_all = boom
    page = ExpensesController(gw)
    assert await page.load() is PageState.error


async def test_sources_load_concurrently(gw):
    gate = asyncio.Event()
    gw.farms.gate = gate
    gw.crops.gate = gate
    page = FarmsController(gw)

    task = asyncio.create_task(page.load())
    await settle()
    # both fetches started before either finished
    assert gw.farms.calls == ["get_all"] and gw.crops.calls == ["get_all"]
    assert page.state is PageState.loading
    gate.set()
    assert await task is PageState.ready


async def test_unmounted_page_ignores_in_flight_load(gw):
    gate = asyncio.Event()
    gw.farms.gate = gate
    page = FarmsController(gw)

    task = asyncio.create_task(page.load())
    await settle()
    page.unmount()
    gate.set()
    await task

    assert page.data == {}
    assert page.state is not PageState.ready


# ----------------------------
# Mutations
# ----------------------------
async def test_create_appends_confirmed_record(gw):
    page = FarmsController(gw)
    await page.load()
    record = await page.create("farms", {"name": "New", "size": 2, "location": "Z"})
    assert record is not None
    assert [f["id"] for f in page.data["farms"]] == ["f1", "f2", record["id"]]
    assert page.notifications[-1].message == "Farm created successfully!"


async def test_invalid_create_never_reaches_gateway(gw):
    page = FarmsController(gw)
    await page.load()
    assert await page.create("farms", {"name": "", "size": -1}) is None
    assert "create" not in gw.farms.calls
    assert page.notifications[-1].level == "error"


async def test_failed_update_leaves_state_untouched(gw):
    page = FarmsController(gw)
    await page.load()
    before = [dict(f) for f in page.data["farms"]]
    gw.farms.fail_writes = True

    assert await page.update("farms", "f1", {"name": "Renamed"}) is None
    assert page.data["farms"] == before
    assert page.notifications[-1].message == "Failed to save farm"


async def test_update_replaces_by_id(gw):
    page = FarmsController(gw)
    await page.load()
    await page.update("farms", "f2", {"name": "Hilltop East"})
    assert [f["name"] for f in page.data["farms"]] == ["Green Valley", "Hilltop East"]


async def test_null_required_field_never_reaches_gateway(gw):
    page = TasksController(gw)
    await page.load()
    assert await page.update("tasks", "t1", {"status": None}) is None
    assert "update" not in gw.tasks.calls
    assert page.data["tasks"][0]["status"] == "pending"
    assert page.notifications[-1].message == "Please fill in all required fields"


def test_notifications_are_stamped_in_utc(gw):
    note = FarmsController(gw).notify("info", "Saved")
    assert note.created_at.tzinfo is timezone.utc
    assert note.as_dict()["created_at"].endswith("+00:00")


async def test_delete_removes_and_missing_id_is_noop(gw):
    page = FarmsController(gw)
    await page.load()
    assert await page.delete("farms", "f1") is True
    assert [f["id"] for f in page.data["farms"]] == ["f2"]

    # gone on the server and not in the list: nothing changes locally
    assert await page.delete("farms", "f1") is False
    assert [f["id"] for f in page.data["farms"]] == ["f2"]


async def test_delete_of_id_only_on_server_keeps_local_list(gw):
    page = FarmsController(gw)
    await page.load()
    gw.farms.records.append({"id": "f9", "name": "Elsewhere", "size": 1, "size_unit": "acres"})
    assert await page.delete("farms", "f9") is True
    assert [f["id"] for f in page.data["farms"]] == ["f1", "f2"]


async def test_toggle_complete(gw):
    page = TasksController(gw)
    await page.load()
    updated = await page.toggle_complete("t1")
    assert updated["status"] == "completed"
    assert page.notifications[-1].message == "Task completed!"

    reopened = await page.toggle_complete("t1")
    assert reopened["status"] == "pending"
    assert page.notifications[-1].message == "Task reopened!"


async def test_toggle_unknown_task(gw):
    page = TasksController(gw)
    await page.load()
    assert await page.toggle_complete("nope") is None


# ----------------------------
# View models
# ----------------------------
async def test_dashboard_stats(gw):
    page = DashboardController(gw)
    await page.load()
    vm = page.view_model(now=datetime(2024, 3, 15, 8, 0))

    assert vm["stats"] == {
        "total_farms": 2,
        "active_crops": 2,
        "pending_tasks": 1,
        "monthly_expenses": 150,
    }
    assert [e["id"] for e in vm["recent_expenses"]] == ["e2", "e1", "e3"]
    assert vm["recent_expenses"][0]["farm_name"] == "Green Valley"
    assert [t["id"] for t in vm["upcoming_tasks"]] == ["t1"]
    assert vm["weather"]["location"] == "Test Farm"


async def test_farm_details(gw):
    page = FarmDetailsController(gw, "f1")
    assert await page.load() is PageState.ready
    vm = page.view_model()
    assert vm["farm"]["name"] == "Green Valley"
    assert [c["id"] for c in vm["crops"]] == ["c1", "c2"]
    assert [e["id"] for e in vm["expenses"]] == ["e2", "e1"]
    assert vm["stats"]["total_expenses"] == 150


async def test_farm_details_not_found(gw):
    page = FarmDetailsController(gw, "missing")
    assert await page.load() is PageState.error
    assert page.not_found
    assert page.error.startswith("Farm not found")
    assert gw.crops.calls == []


async def test_expenses_filters_and_breakdown(gw):
    page = ExpensesController(gw)
    await page.load()
    vm = page.view_model(category="all", date_range="this_month", now=datetime(2024, 3, 20))
    assert [e["id"] for e in vm["expenses"]] == ["e2", "e1"]
    assert vm["stats"]["total"] == 150
    assert vm["stats"]["top_category"] == "Seeds & Plants"
    assert {b["value"]: b["total"] for b in vm["by_category"]} == {"seeds": 100, "fuel": 50}


async def test_expenses_default_to_this_month(gw):
    page = ExpensesController(gw)
    await page.load()
    vm = page.view_model(now=datetime(2024, 1, 20))
    assert vm["filters"]["date_range"] == "this_month"
    assert [e["id"] for e in vm["expenses"]] == ["e3"]


async def test_income_page(gw):
    page = IncomeController(gw)
    await page.load()
    vm = page.view_model(year=2024, month=3)
    assert vm["totals"]["total_income"] == 500
    assert vm["totals"]["total_expenses"] == 150
    assert vm["totals"]["net_profit"] == 350
    assert vm["income"][0]["crop_name"] == "Corn"
    assert vm["available_years"] == [2024]
    assert vm["monthly_trend"][2]["profit"] == 350


async def test_weather_page(gw):
    page = WeatherController(gw)
    assert await page.load() is PageState.ready
    vm = page.view_model()
    assert len(vm["forecast"]) == 5
    assert vm["stats"]["todays_high"] == vm["forecast"][0]["high_temp"]
    assert all("color" in a for a in vm["advice"])
