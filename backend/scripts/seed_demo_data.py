import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

# ------------------------------------------------------------
# Make the backend package importable when run as a script
# ------------------------------------------------------------
ROOT_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT_DIR))

load_dotenv()

from farmsync.core.database import engine, Base, AsyncSessionLocal  # noqa: E402
from farmsync.core.seed_demo import seed_demo_data  # noqa: E402
from farmsync.crud.gateways import build_gateways  # noqa: E402
import farmsync.models  # noqa: E402,F401


async def main() -> bool:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        return await seed_demo_data(build_gateways(AsyncSessionLocal))
    finally:
        await engine.dispose()


# ------------------------------------------------------------
# Script Entrypoint
# ------------------------------------------------------------
if __name__ == "__main__":
    print("\n=== FARMSYNC DEMO DATA ===")
    seeded = asyncio.run(main())
    print("Demo data inserted." if seeded else "Database already has farms; nothing to do.")
