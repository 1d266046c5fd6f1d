# backend/farmsync/core/seed_demo.py

from datetime import date, datetime, timedelta

from farmsync.core.logger import get_logger

logger = get_logger("seed")


DEMO_FARMS = [
    {"name": "Green Valley Farm", "size": 120, "size_unit": "acres", "location": "Fresno, CA"},
    {"name": "Riverbend Orchard", "size": 35, "size_unit": "hectares", "location": "Yakima, WA"},
]

# (farm index, name, variety, field, days since planting, days to harvest, stage)
DEMO_CROPS = [
    (0, "Tomatoes", "Roma", "North Field", 60, 20, "fruiting"),
    (0, "Corn", "Sweet Gold", "East Field", 90, 5, "ready_to_harvest"),
    (0, "Lettuce", "Butterhead", "Greenhouse 1", 20, 25, "growing"),
    (1, "Apples", "Honeycrisp", "Block A", 200, 30, "flowering"),
]

# (farm index, crop index or None, type, description, days from today, priority, status)
DEMO_TASKS = [
    (0, 0, "Watering", "Drip irrigation check on tomato rows", 1, "high", "pending"),
    (0, 1, "Harvesting", "Harvest sweet corn in East Field", 4, "high", "pending"),
    (0, None, "Equipment Maintenance", "Service the tractor", -2, "medium", "pending"),
    (1, 3, "Pest Control", "Inspect orchard for codling moth", 6, "medium", "in_progress"),
    (1, None, "Soil Testing", "Send soil samples to lab", -10, "low", "completed"),
]

# (farm index, category, amount, days ago, description)
DEMO_EXPENSES = [
    (0, "seeds", 450.00, 3, "Tomato and lettuce seed order"),
    (0, "fertilizer", 320.50, 12, "Organic compost delivery"),
    (0, "fuel", 180.25, 20, "Diesel for tractor"),
    (1, "labor", 1200.00, 8, "Seasonal pruning crew"),
    (1, "equipment", 899.99, 45, "Replacement sprayer"),
]

# (farm index, crop index or None, source, amount, days ago, description)
DEMO_INCOME = [
    (0, 1, "crop_sales", 2400.00, 5, "Sweet corn wholesale"),
    (0, 0, "direct_sales", 650.00, 15, "Farmers market tomatoes"),
    (1, 3, "contracts", 5200.00, 40, "Cider mill contract"),
    (1, None, "subsidies", 1500.00, 60, "Conservation program payment"),
]


async def seed_demo_data(gateways) -> bool:
    """
    Populate demo records through the gateways.
    Skipped when any farm already exists; returns True when data was written.
    """
    existing = await gateways.farms.get_all()
    if existing is None:
        logger.warning("Skipping demo seed: farms could not be listed")
        return False
    if existing:
        logger.info("Skipping demo seed: %d farms already present", len(existing))
        return False

    today = date.today()
    now = datetime.now().replace(hour=9, minute=0, second=0, microsecond=0)

    # 1. Farms
    farms = [await gateways.farms.create(f) for f in DEMO_FARMS]

    # 2. Crops
    crops = []
    for fi, name, variety, field, planted_ago, harvest_in, stage in DEMO_CROPS:
        crops.append(await gateways.crops.create({
            "farm_id": farms[fi]["id"],
            "name": name,
            "variety": variety,
            "field": field,
            "planting_date": today - timedelta(days=planted_ago),
            "expected_harvest_date": today + timedelta(days=harvest_in),
            "growth_stage": stage,
        }))

    # 3. Tasks
    for fi, ci, kind, desc, due_in, priority, status in DEMO_TASKS:
        await gateways.tasks.create({
            "farm_id": farms[fi]["id"],
            "crop_id": crops[ci]["id"] if ci is not None else None,
            "type": kind,
            "description": desc,
            "due_date": now + timedelta(days=due_in),
            "priority": priority,
            "status": status,
        })

    # 4. Finance
    for fi, category, amount, ago, desc in DEMO_EXPENSES:
        await gateways.expenses.create({
            "farm_id": farms[fi]["id"],
            "category": category,
            "amount": amount,
            "date": today - timedelta(days=ago),
            "description": desc,
        })

    for fi, ci, source, amount, ago, desc in DEMO_INCOME:
        await gateways.income.create({
            "farm_id": farms[fi]["id"],
            "crop_id": crops[ci]["id"] if ci is not None else None,
            "source": source,
            "amount": amount,
            "date": today - timedelta(days=ago),
            "description": desc,
        })

    logger.info("Demo data seeded", extra={"entity": "farm", "state": "seeded"})
    return True
