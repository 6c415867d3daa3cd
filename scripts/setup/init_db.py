# scripts/setup/init_db.py
"""
Initialize storage — creates the key-value table and seeds the default
price table if none is saved yet.
Run once before first launch.
Usage: python scripts/setup/init_db.py
"""

import asyncio
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from parking_ledger.database import create_tables, engine, SessionLocal
from parking_ledger.config import settings
from parking_ledger.services.price_config_service import default_price_config
from parking_ledger.services.storage_service import KeyValueStorage, PRICE_CONFIG_KEY
from parking_ledger.utils.json_parser import dump_json
from sqlalchemy import inspect, text


async def seed_price_table(storage: KeyValueStorage) -> bool:
    if await storage.get_item(PRICE_CONFIG_KEY) is not None:
        return False
    await storage.set_item(PRICE_CONFIG_KEY, dump_json(default_price_config().to_storage()))
    return True


def main():
    print("🗄️  Parking Ledger Storage Initialization")
    print("=" * 40)
    print(f"📡 Database: {settings.DATABASE_URL}")

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("✅ Database connection OK")
    except Exception as e:
        print(f"❌ Cannot connect to database: {e}")
        sys.exit(1)

    print("\n📋 Creating tables...")
    create_tables()
    tables = inspect(engine).get_table_names()
    print(f"✅ Tables: {', '.join(tables)}")

    if asyncio.run(seed_price_table(KeyValueStorage(SessionLocal))):
        print(f"💲 Default price table saved: {default_price_config().to_storage()}")
    else:
        print("💲 Existing price table kept")

    print("\n🎉 Storage ready! You can now start the backend:")
    print("   uvicorn parking_ledger.main:app --host 0.0.0.0 --port 8080 --reload")


if __name__ == "__main__":
    main()
