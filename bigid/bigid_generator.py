import time
import logging
import threading
from datetime import datetime, timedelta, timezone

from bigid.config import BASE_TIME
from bigid.models import BigID, DecodedBigID, ShardIDError

logger = logging.getLogger(__name__)

# Bit lengths for each section, least significant first
SEQUENCE_BITS = 10
SHARD_ID_BITS = 8
TIMESTAMP_BITS = 40
RESERVED_BITS = 4
VERSION_BITS = 2

# Maximum values for each section
MAX_SEQUENCE = -1 ^ (-1 << SEQUENCE_BITS)      # 1023
MAX_SHARD_ID = -1 ^ (-1 << SHARD_ID_BITS)      # 255
MAX_TIMESTAMP = -1 ^ (-1 << TIMESTAMP_BITS)    # ~34.8 years of milliseconds
MAX_RESERVED = -1 ^ (-1 << RESERVED_BITS)      # 15
MAX_VERSION = -1 ^ (-1 << VERSION_BITS)        # 3

# Bit shifts for each section
SHARD_ID_SHIFT = SEQUENCE_BITS
TIMESTAMP_SHIFT = SHARD_ID_SHIFT + SHARD_ID_BITS
RESERVED_SHIFT = TIMESTAMP_SHIFT + TIMESTAMP_BITS
VERSION_SHIFT = RESERVED_SHIFT + RESERVED_BITS

UINT64_MASK = (1 << 64) - 1

FORMAT_VERSION = 1

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _current_millis():
    return time.time_ns() // 1_000_000


def _millis_since_unix_epoch(moment):
    return (moment - _UNIX_EPOCH) // timedelta(milliseconds=1)


def compose(version, reserved, timestamp, shard_id, sequence):
    """Pack the five fields into a 64-bit pattern.

    Each field is masked to its width, so oversized values are truncated
    rather than rejected.

    Returns:
        int: The unsigned 64-bit value
    """
    return (
        ((version & MAX_VERSION) << VERSION_SHIFT) |
        ((reserved & MAX_RESERVED) << RESERVED_SHIFT) |
        ((timestamp & MAX_TIMESTAMP) << TIMESTAMP_SHIFT) |
        ((shard_id & MAX_SHARD_ID) << SHARD_ID_SHIFT) |
        (sequence & MAX_SEQUENCE)
    )


def split_fields(big_id):
    """Split an identifier into its raw bit fields.

    Negative values are read as their two's complement bit pattern.

    Args:
        big_id (int): Any 64-bit value

    Returns:
        dict: version, reserved, timestamp, shard_id and sequence
    """
    bits = big_id & UINT64_MASK
    return {
        "version": (bits >> VERSION_SHIFT) & MAX_VERSION,
        "reserved": (bits >> RESERVED_SHIFT) & MAX_RESERVED,
        "timestamp": (bits >> TIMESTAMP_SHIFT) & MAX_TIMESTAMP,
        "shard_id": (bits >> SHARD_ID_SHIFT) & MAX_SHARD_ID,
        "sequence": bits & MAX_SEQUENCE,
    }


def extract_shard_id(big_id):
    """Return the shard field (bits 10-17) of any 64-bit value."""
    return ((big_id & UINT64_MASK) >> SHARD_ID_SHIFT) & MAX_SHARD_ID


def placeholder(shard_id):
    """Build a shard-only sentinel ID: shard bits set, everything else zero.

    Reads no clock and consumes no sequence value.
    """
    return BigID((shard_id & MAX_SHARD_ID) << SHARD_ID_SHIFT)


def format_create_time(base_time, timestamp):
    """Render base_time + timestamp ms as ISO-8601 in the base's UTC offset."""
    # Fixed offset and always 3 fractional digits. Services that render in local
    # time with trailing zeros trimmed show the same instant in a different form.
    return (base_time + timedelta(milliseconds=timestamp)).isoformat(timespec="milliseconds")


def decode(big_id, base_time=BASE_TIME):
    """Decode any 64-bit value into its logical fields.

    Args:
        big_id (int): The identifier to decode
        base_time (datetime): Clock base the timestamp field is relative to

    Returns:
        DecodedBigID: The decoded fields plus the derived create time
    """
    fields = split_fields(big_id)
    return DecodedBigID(
        create_time=format_create_time(base_time, fields["timestamp"]),
        **fields
    )


class SequenceCounter:
    """Monotonic counter advanced with a single increment-and-fetch.

    The counter is never reset. Consumers keep only its low bits, so it
    wraps from their point of view.
    """

    def __init__(self, start=0):
        self._value = start
        self._lock = threading.Lock()

    def increment(self):
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self):
        return self._value


class BigIDGenerator:
    """BigID generator

    64-bit ID broken down into (most significant first):
    - 2 bits: version, always 1
    - 4 bits: reserved, always 0
    - 40 bits: timestamp (milliseconds since the clock base)
    - 8 bits: shard ID
    - 10 bits: sequence number

    Shard IDs outside 0-255 are truncated to their low 8 bits unless the
    generator is strict. The sequence wraps at 1024 with no wait for the
    next millisecond, so more than 1024 IDs per millisecond on one shard
    produce duplicates.
    """

    def __init__(self, base_time=None, clock=None, strict=False):
        """Initialize the ID generator

        Args:
            base_time (datetime, optional): Aware clock base, defaults to config.BASE_TIME
            clock (callable, optional): Returns current Unix time in milliseconds
            strict (bool): Reject shard IDs outside 0-255 instead of truncating
        """
        self.base_time = base_time if base_time is not None else BASE_TIME
        if self.base_time.tzinfo is None:
            raise ValueError("base_time must be timezone-aware")

        self.clock = clock or _current_millis
        self.strict = strict
        self.counter = SequenceCounter()
        self._base_millis = _millis_since_unix_epoch(self.base_time)

        logger.info(f"Initialized BigID generator with base time {self.base_time.isoformat()} (strict={strict})")

    def _check_shard_id(self, shard_id):
        if 0 <= shard_id <= MAX_SHARD_ID:
            return shard_id
        if self.strict:
            raise ShardIDError(f"Shard ID must be between 0 and {MAX_SHARD_ID}, got {shard_id}")
        logger.debug(f"Truncating shard ID {shard_id} to {shard_id & MAX_SHARD_ID}")
        return shard_id & MAX_SHARD_ID

    def elapsed_millis(self):
        """Milliseconds elapsed since the clock base"""
        return self.clock() - self._base_millis

    def generate(self, shard_id):
        """Generate the next ID for a shard

        Args:
            shard_id (int): Shard identity (0-255)

        Returns:
            BigID: A new identifier
        """
        shard_id = self._check_shard_id(shard_id)
        sequence = self.counter.increment()
        timestamp = self.elapsed_millis()

        big_id = BigID(compose(FORMAT_VERSION, 0, timestamp, shard_id, sequence))
        logger.debug(f"Generated ID: {big_id}")
        return big_id

    def placeholder(self, shard_id):
        """Shard-only sentinel ID, subject to this generator's shard policy"""
        return placeholder(self._check_shard_id(shard_id))

    def decode(self, big_id):
        """Decode an ID against this generator's clock base"""
        return decode(big_id, self.base_time)
