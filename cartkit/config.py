"""
Cart configuration from environment variables.

Read once at import; tests override by patching the module attributes.
"""

import os
import warnings


def _get_int(key: str, default: int) -> int:
    """Integer env var; a malformed value falls back to the default."""
    v = os.environ.get(key)
    if v is None or v.strip() == "":
        return default
    try:
        return int(v)
    except ValueError:
        warnings.warn(f"{key}={v!r} is not an integer, using {default}", RuntimeWarning)
        return default


# Which store backs the default cart: "memory", "file" or "redis".
# Left empty, no store is available and Cart() without a store fails.
CART_STORE = os.environ.get("CART_STORE", "").strip().lower()

# Single key the whole cart snapshot lives under
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "cartItems")

# FileStore location
CART_FILE_PATH = os.environ.get("CART_FILE_PATH", os.path.join("data", "cart.json"))

# Redis expiry for the snapshot, seconds (0 = no expiry)
CART_TTL = _get_int("CART_TTL", 86400)

# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")
