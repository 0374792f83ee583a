"""
Configuration module for the OceanEye identification service.

Contains the remote endpoint, network limits, and constants used throughout the application.
Environment variables can override defaults for production deployment.
"""
import os


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment ("1", "true", "yes", "on")."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# -------------------- RECORD SOURCE --------------------
# Firebase Realtime Database export holding the species records.
# The whole document is fetched on every lookup (no cache).
RECORDS_URL = os.getenv(
    "OCEANEYE_RECORDS_URL",
    "https://oceaneye-17058-default-rtdb.firebaseio.com/.json"
)

# Request timeout in seconds
REQUEST_TIMEOUT = float(os.getenv("OCEANEYE_REQUEST_TIMEOUT", "10"))

# Treat two records sharing a digest as a malformed document
REJECT_DUPLICATE_DIGESTS = _env_flag("OCEANEYE_REJECT_DUPLICATE_DIGESTS", True)

# -------------------- IMAGE CONFIG --------------------
# Uploads are re-encoded to this format before hashing so the digest
# matches the ones stored alongside the records.
CANONICAL_IMAGE_FORMAT = "PNG"

# Re-encode uploads before hashing (disable to hash the raw upload bytes)
CANONICALIZE_UPLOADS = _env_flag("OCEANEYE_CANONICALIZE_UPLOADS", True)

# Largest accepted upload in bytes
MAX_UPLOAD_BYTES = 20 * 1024 * 1024

# -------------------- LOGGING CONFIG --------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
