# parking_ledger/exceptions.py
"""
Ledger error taxonomy.
Raised by the services, mapped to HTTP status codes in main.py.
"""

from typing import Optional


class LedgerError(Exception):
    """Base class for every error the ledger reports to the operator."""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LedgerError):
    """Malformed or incomplete plate, missing or invalid field. No state change."""
    status_code = 400


class CapacityError(LedgerError):
    """Type-specific limit reached."""
    status_code = 409

    def __init__(self, vehicle_type, current_count: int, limit: int, message: Optional[str] = None):
        self.vehicle_type = vehicle_type
        self.current_count = current_count
        self.limit = limit
        super().__init__(message or (
            f"Capacity reached for {getattr(vehicle_type, 'value', vehicle_type)}: "
            f"current {current_count}, limit {limit}"
        ))


class NotFoundError(LedgerError):
    """No active entry for the plate."""
    status_code = 404


class PersistenceError(LedgerError):
    """Durable write failed. The in-memory state has already changed."""
    status_code = 503


class AuthorizationError(LedgerError):
    """Wrong admin password on a protected edit."""
    status_code = 401
