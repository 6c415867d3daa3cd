# Parking Ledger — Database Models
# Import all models here for SQLAlchemy discovery

from parking_ledger.models.kv_entry import KeyValueEntry   # noqa
