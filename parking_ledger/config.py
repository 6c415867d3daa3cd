# parking_ledger/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Database ──────────────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite:///./parking_ledger.db"

    # ── Network ───────────────────────────────────────────────────────────
    BACKEND_IP: str = "0.0.0.0"
    BACKEND_PORT: int = 8080

    # ── Security ──────────────────────────────────────────────────────────
    API_KEY: Optional[str] = None        # Set in .env to enable auth on API endpoints
    ADMIN_PASSWORD: str = "1234"         # Unlocks price/capacity edits

    # ── Display ───────────────────────────────────────────────────────────
    DISPLAY_TIMEZONE: str = "America/Bogota"

    # ── Default price table (used until one is saved) ─────────────────────
    DEFAULT_MAX_MOTOS: int = 50
    DEFAULT_MAX_CARROS: int = 30
    DEFAULT_PRECIO_HORA_MOTOS: int = 2000
    DEFAULT_PRECIO_HORA_CARROS: int = 5000
    DEFAULT_PRECIO_MES_MOTOS: int = 40000
    DEFAULT_PRECIO_MES_CARROS: int = 100000

    @property
    def DEFAULT_PRICE_CONFIG(self) -> dict:
        return {
            "maxMotos": self.DEFAULT_MAX_MOTOS,
            "maxCarros": self.DEFAULT_MAX_CARROS,
            "precioHoraMotos": self.DEFAULT_PRECIO_HORA_MOTOS,
            "precioHoraCarros": self.DEFAULT_PRECIO_HORA_CARROS,
            "precioMesMotos": self.DEFAULT_PRECIO_MES_MOTOS,
            "precioMesCarros": self.DEFAULT_PRECIO_MES_CARROS,
        }

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_MAX_BYTES: int = 5 * 1024 * 1024
    LOG_BACKUP_COUNT: int = 10

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
