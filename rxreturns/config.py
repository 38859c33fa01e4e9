"""Configuration and settings."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Paths
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"
OUTPUT_DIR = PROJECT_ROOT / "output"
CONFIG_DIR = PROJECT_ROOT / "config"

# Ensure directories exist
DATA_DIR.mkdir(parents=True, exist_ok=True)
OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

# Database
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{(DATA_DIR / 'rxreturns.sqlite').as_posix()}")
SEED_DEMO_DATA = os.getenv("SEED_DEMO_DATA", "true").lower() == "true"

# Logging
LOG_DIR = OUTPUT_DIR / "logs"
LOG_FILE = LOG_DIR / "app.jsonl"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
VERBOSE_LOGGING = os.getenv("VERBOSE_LOGGING", "false").lower() == "true"
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "true").lower() == "true"

# Ensure log directory exists
LOG_DIR.mkdir(parents=True, exist_ok=True)

# HTTP API
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))

# Header carrying the authenticated pharmacy id (set by the auth gateway in front of the API)
PHARMACY_ID_HEADER = os.getenv("PHARMACY_ID_HEADER", "X-Pharmacy-Id")

# Optimization: distributor price data older than this is flagged unavailable
STALE_AFTER_DAYS = int(os.getenv("STALE_AFTER_DAYS", "30"))

# Subscription plans (distributor caps per tier)
PLANS_CONFIG_PATH = CONFIG_DIR / "plans.yaml"
DEFAULT_PLAN_ID = os.getenv("DEFAULT_PLAN_ID", "free")
