# app/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./storefront.db")
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
CATALOG_SERVICE_URL = os.getenv("CATALOG_SERVICE_URL", "http://catalog-service:8000")
CATALOG_TIMEOUT_SECONDS = float(os.getenv("CATALOG_TIMEOUT_SECONDS", 2))
CATALOG_RETRY_ATTEMPTS = int(os.getenv("CATALOG_RETRY_ATTEMPTS", 3))
# redis | memory
CART_BACKEND = os.getenv("CART_BACKEND", "redis")
CART_TTL_SECONDS = int(os.getenv("CART_TTL_SECONDS", 30 * 24 * 60 * 60))
CURRENCY_LABEL = os.getenv("CURRENCY_LABEL", "RWF")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
