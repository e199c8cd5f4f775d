# marketfresh/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/marketfresh.sqlite")
DB_CONNECT_ATTEMPTS = int(os.getenv("DB_CONNECT_ATTEMPTS", 3))
SEED_DEMO_DATA = _as_bool(os.getenv("SEED_DEMO_DATA", "true"))
PAYMENT_PROVIDER = os.getenv("PAYMENT_PROVIDER", "mock")
CORS_ORIGIN = os.getenv("CORS_ORIGIN", "http://localhost:3000")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 4000))
MAX_BODY_BYTES = int(os.getenv("MAX_BODY_BYTES", 1024 * 1024))
