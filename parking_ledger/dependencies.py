# parking_ledger/dependencies.py
"""
Process-wide ledger wiring.
init_ledger() runs once at startup; routers receive the instances through
the get_* FastAPI dependencies (overridden in tests).
"""

from typing import Optional

from sqlalchemy.orm import sessionmaker

from parking_ledger.database import SessionLocal
from parking_ledger.services.ledger_store import LedgerStore
from parking_ledger.services.price_config_service import PriceConfigService
from parking_ledger.services.storage_service import KeyValueStorage

_storage: Optional[KeyValueStorage] = None
_price_service: Optional[PriceConfigService] = None
_ledger: Optional[LedgerStore] = None


async def init_ledger(session_factory: sessionmaker = SessionLocal) -> LedgerStore:
    global _storage, _price_service, _ledger
    _storage = KeyValueStorage(session_factory)
    _price_service = PriceConfigService(_storage)
    await _price_service.load()
    _ledger = LedgerStore(_storage, lambda: _price_service.current)
    await _ledger.load()
    return _ledger


def get_storage() -> KeyValueStorage:
    if _storage is None:
        raise RuntimeError("Ledger not initialised — call init_ledger() first")
    return _storage


def get_price_service() -> PriceConfigService:
    if _price_service is None:
        raise RuntimeError("Ledger not initialised — call init_ledger() first")
    return _price_service


def get_ledger() -> LedgerStore:
    if _ledger is None:
        raise RuntimeError("Ledger not initialised — call init_ledger() first")
    return _ledger
