"""Distributed, time-ordered 64-bit identifiers."""

from bigid.bigid_generator import (
    BigIDGenerator,
    SequenceCounter,
    compose,
    decode,
    extract_shard_id,
    placeholder,
    split_fields,
)
from bigid.models import BigID, DecodedBigID, ParseError, ShardIDError

__all__ = [
    "BigID",
    "BigIDGenerator",
    "DecodedBigID",
    "ParseError",
    "SequenceCounter",
    "ShardIDError",
    "compose",
    "decode",
    "extract_shard_id",
    "placeholder",
    "split_fields",
]
