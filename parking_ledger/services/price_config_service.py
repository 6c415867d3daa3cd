# parking_ledger/services/price_config_service.py
"""
Settings authority for the price table.
Loads the saved PriceConfig (or the defaults from settings) and owns the
password-gated edit. The ledger only ever reads `current`.
"""

import hmac
from typing import Mapping

from parking_ledger.config import settings
from parking_ledger.exceptions import AuthorizationError, ValidationError
from parking_ledger.services.price_table import PriceConfig
from parking_ledger.services.storage_service import KeyValueStorage, PRICE_CONFIG_KEY
from parking_ledger.utils.json_parser import safe_parse_json, dump_json
from parking_ledger.utils.logger import get_logger

logger = get_logger(__name__)


def default_price_config() -> PriceConfig:
    return PriceConfig.from_storage(settings.DEFAULT_PRICE_CONFIG)


class PriceConfigService:
    def __init__(self, storage: KeyValueStorage, admin_password: str = None):
        self._storage = storage
        self._admin_password = admin_password if admin_password is not None else settings.ADMIN_PASSWORD
        self._current = default_price_config()

    @property
    def current(self) -> PriceConfig:
        return self._current

    async def load(self) -> PriceConfig:
        """Read the saved table. Anything unreadable falls back to defaults."""
        data = safe_parse_json(await self._storage.get_item(PRICE_CONFIG_KEY))
        if not isinstance(data, dict):
            logger.info("No saved price table — using defaults")
            self._current = default_price_config()
            return self._current
        try:
            self._current = PriceConfig.from_storage(data)
        except ValidationError as e:
            logger.error(f"Saved price table is invalid ({e.message}) — using defaults")
            self._current = default_price_config()
        return self._current

    def check_password(self, password: str):
        if not hmac.compare_digest(str(password or ""), self._admin_password):
            logger.warning("Rejected price table edit: wrong password")
            raise AuthorizationError("Incorrect password")

    async def update(self, values: Mapping, password: str) -> PriceConfig:
        """
        Authenticated edit. Non-digits are stripped from each field as the
        operator types; a field left empty rejects the whole edit.
        Persisted immediately.
        """
        self.check_password(password)
        merged = {**self._current.to_storage(), **dict(values)}
        new_config = PriceConfig.from_storage(merged, strip_non_digits=True)
        self._current = new_config
        await self._storage.set_item(PRICE_CONFIG_KEY, dump_json(new_config.to_storage()))
        logger.info(f"Price table updated: {new_config.to_storage()}")
        return new_config
