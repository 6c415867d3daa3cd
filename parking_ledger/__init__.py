# Parking Ledger — hourly and subscription parking accounting
__version__ = "1.0.0"
