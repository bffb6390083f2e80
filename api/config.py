"""
Configuration management for the REIT Analytics API.

Defaults live on the Settings class; any of them can be overridden through
environment variables or a .env file at the repository root.
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

BASE_DIR: Path = Path(__file__).parent.parent
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings:
    """API server configuration."""

    # Paths
    BASE_DIR: Path = BASE_DIR
    SNAPSHOT_FILE: str = os.getenv("REIT_SNAPSHOT_FILE", str(BASE_DIR / "data" / "reits.json"))
    HISTORY_FILE: str = os.getenv("REIT_HISTORY_FILE", str(BASE_DIR / "data" / "history.json"))

    # Server
    API_TITLE: str = "REIT Analytics API"
    API_DESCRIPTION: str = "REST API for REIT snapshots, price history and DDM valuation"
    API_VERSION: str = "1.0.0"
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))

    # CORS
    CORS_ORIGINS: List[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    # Valuation defaults (decimals, 0.08 = 8%)
    DEFAULT_DISCOUNT_RATE: float = float(os.getenv("DEFAULT_DISCOUNT_RATE", "0.08"))
    DEFAULT_GROWTH_RATE: float = float(os.getenv("DEFAULT_GROWTH_RATE", "0.02"))
    SENSITIVITY_STEP: float = float(os.getenv("SENSITIVITY_STEP", "0.01"))

    # Client
    API_URL: str = os.getenv("REIT_API_URL", f"http://localhost:{PORT}")


settings = Settings()
