"""
Configuration settings for the BigID generator.
"""

import os
from datetime import datetime


def parse_base_time(text):
    """Turn an ISO-8601 string into a timezone-aware datetime.

    Naive values are interpreted in the local timezone of the process.

    Args:
        text (str): ISO-8601 date/time, e.g. "2015-06-06 00:00:00"

    Returns:
        datetime: An aware datetime
    """
    value = datetime.fromisoformat(text.strip())
    if value.tzinfo is None:
        value = value.astimezone()
    return value


# Clock base: every timestamp field is measured in milliseconds from here.
# Changing it invalidates the create times of previously issued IDs.
DEFAULT_BASE_TIME = "2015-06-06 00:00:00"
BASE_TIME = parse_base_time(os.getenv("BIGID_BASE_TIME", DEFAULT_BASE_TIME))

# Shard used when a caller does not pass one (0-255)
SHARD_ID = int(os.getenv("BIGID_SHARD_ID", 0))

# Reject out-of-range shard IDs instead of truncating them to 8 bits
STRICT_SHARD_ID = os.getenv("BIGID_STRICT_SHARD_ID", "False").lower() == "true"

# HTTP service settings
API = {
    "title": "BigID Service",
    "version": "1.0.0",
    "host": os.getenv("HOST", "0.0.0.0"),
    "port": int(os.getenv("PORT", 8000)),
    "debug": os.getenv("DEBUG", "False").lower() == "true",
}

# Logging configuration
LOGGING = {
    "level": os.getenv("LOG_LEVEL", "INFO"),
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}
