# backend configuration
# loads env vars for mongodb, cors, and practice defaults used by the dashboard

import os
from pathlib import Path
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# load .env from project root
load_dotenv(Path(__file__).parent.parent.parent / ".env")


class Settings(BaseSettings):
    # mongodb
    MONGODB_URI: str = os.getenv("MONGODB_URI", "")
    MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "bloom_db")

    # cors
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:5173")

    # practitioner defaults
    DEFAULT_TIMEZONE: str = os.getenv("DEFAULT_TIMEZONE", "Australia/Sydney")

    # client defaults: standard mhcp referral is 10 funded sessions
    DEFAULT_MHCP_TOTAL_SESSIONS: int = 10

    # targets for a typical full-time practice, used when a view has no value
    DEFAULT_WEEKLY_SESSION_TARGET: int = 25
    DEFAULT_WEEKLY_REVENUE_TARGET: float = 5500.0
    DEFAULT_MONTHLY_REVENUE_TARGET: float = 22000.0
    DEFAULT_AVERAGE_SESSION_VALUE: float = 220.0

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
