# parking_ledger/models/kv_entry.py
"""
Key-value table backing the ledger.
One row per storage key (hourlyVehicles, subscriptionVehicles, revenueTotal,
priceConfig); the value column holds the JSON-encoded document.
"""

from sqlalchemy import Column, String, DateTime, Text
from parking_ledger.database import Base


class KeyValueEntry(Base):
    __tablename__ = "kv_store"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    def __repr__(self):
        return f"<KeyValueEntry {self.key} ({len(self.value or '')} chars)>"
