# storefront/utils.py
# Shared helpers: logging setup, id generation and row shaping.

import logging
import time
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from decouple import config

LOG_LEVEL = config("LOG_LEVEL", default="INFO").upper()

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("storefront")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_product_id() -> str:
    """Millisecond timestamp, used when the caller supplies no product id."""
    return str(int(time.time() * 1000))


def rename_keys(row: Optional[Mapping[str, Any]], mapping: Mapping[str, str]) -> Optional[dict]:
    """Copy a row dict, renaming storage column names to API field names."""
    if row is None:
        return None
    return {mapping.get(k, k): v for k, v in row.items()}
