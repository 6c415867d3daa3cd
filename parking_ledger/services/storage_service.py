# parking_ledger/services/storage_service.py
"""
Durable key-value storage for the ledger.
Each key holds one JSON document. Reads never raise (failures are logged and
reported as a missing value); writes raise PersistenceError.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from parking_ledger.exceptions import PersistenceError
from parking_ledger.models.kv_entry import KeyValueEntry
from parking_ledger.utils.logger import get_logger

logger = get_logger(__name__)

HOURLY_KEY = "hourlyVehicles"
SUBSCRIPTION_KEY = "subscriptionVehicles"
REVENUE_KEY = "revenueTotal"
PRICE_CONFIG_KEY = "priceConfig"


class KeyValueStorage:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    async def get_item(self, key: str) -> Optional[str]:
        db = self._session_factory()
        try:
            entry = db.get(KeyValueEntry, key)
            return entry.value if entry else None
        except SQLAlchemyError as e:
            logger.error(f"Storage read failed for '{key}': {e}", exc_info=True)
            return None
        finally:
            db.close()

    async def set_item(self, key: str, value: str):
        """Insert or replace a document. Always commits immediately."""
        db = self._session_factory()
        try:
            entry = db.get(KeyValueEntry, key)
            now = datetime.now(timezone.utc).replace(tzinfo=None)
            if entry:
                entry.value = value
                entry.updated_at = now
            else:
                db.add(KeyValueEntry(key=key, value=value, updated_at=now))
            db.commit()
            logger.debug(f"Saved '{key}' ({len(value)} chars)")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Storage write failed for '{key}': {e}", exc_info=True)
            raise PersistenceError(f"Could not save '{key}': {e}") from e
        finally:
            db.close()

    def ping(self) -> bool:
        db = self._session_factory()
        try:
            db.execute(text("SELECT 1"))
            return True
        finally:
            db.close()
