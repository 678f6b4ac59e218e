import os
import sys
from pathlib import Path
from dotenv import load_dotenv

# .env lives next to the exe when frozen, otherwise at the project root
if getattr(sys, "frozen", False):
    BASE_DIR = Path(sys.executable).parent
else:
    BASE_DIR = Path(__file__).resolve().parents[2]

load_dotenv(dotenv_path=BASE_DIR / ".env")


def _as_bool(value: str) -> bool:
    return str(value).strip().lower() in ("1", "true", "yes", "on")


# ---------------------
# Database
# ---------------------
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./backoffice.db")
DB_ECHO = _as_bool(os.getenv("DB_ECHO", "false"))
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "10"))

# ---------------------
# Payments
# ---------------------
# how many times a payment is re-allocated after a concurrent charge update
ALLOCATION_MAX_ATTEMPTS = max(1, int(os.getenv("ALLOCATION_MAX_ATTEMPTS", "3")))

# ---------------------
# Server
# ---------------------
APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
APP_PORT = int(os.getenv("APP_PORT", "5001"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:8080,http://127.0.0.1:8080",
    ).split(",")
    if o.strip()
]
