import os
import tempfile

# settings are read at import time: point them at a scratch dir first
_TMP = tempfile.mkdtemp(prefix="farmsync-tests-")
DB_PATH = os.path.join(_TMP, "api.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{DB_PATH}"
os.environ["LOG_DIR"] = os.path.join(_TMP, "logs")
os.environ["SEED_DEMO_DATA"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from farmsync.core.database import Base, build_engine, build_session_factory  # noqa: E402
from farmsync.crud.gateways import build_gateways  # noqa: E402
from farmsync.services.weather_service import WeatherService  # noqa: E402
import farmsync.models  # noqa: E402,F401


@pytest.fixture
async def gateways(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'gateways.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield build_gateways(build_session_factory(engine), WeatherService(location="Test Farm"))

    await engine.dispose()


@pytest.fixture
def client():
    from farmsync.main import app

    if os.path.exists(DB_PATH):
        os.remove(DB_PATH)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def farm_payload():
    return {"name": "Green Valley", "size": 50, "size_unit": "acres", "location": "Fresno, CA"}
