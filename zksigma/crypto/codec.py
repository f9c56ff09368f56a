"""
zksigma Canonical Codec

Proofs are written as fixed concatenations of 32-byte chunks, one per
field, in declaration order. Parsing is strict: exact length, canonical
scalars, valid points.
"""

from typing import List, Sequence, Union

from zksigma.constants import UNIT_LEN
from zksigma.crypto.group import GroupElement, Scalar
from zksigma.errors import DeserializationError

_Bytes = Union[bytes, bytearray, memoryview]


def split_chunks(data: _Bytes, count: int) -> List[bytes]:
    """Split ``data`` into exactly ``count`` chunks of UNIT_LEN bytes."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise DeserializationError(f"expected bytes, got {type(data).__name__}")
    expected = count * UNIT_LEN
    if len(data) != expected:
        raise DeserializationError(
            f"expected {expected} bytes, got {len(data)}",
            details={"expected": expected, "actual": len(data)},
        )
    data = bytes(data)
    return [data[i * UNIT_LEN:(i + 1) * UNIT_LEN] for i in range(count)]


def point_from_slice(chunk: _Bytes) -> bytes:
    """Check that ``chunk`` decodes to a group element and return it."""
    GroupElement.decompress(chunk)
    return bytes(chunk)


def scalar_from_slice(chunk: _Bytes) -> Scalar:
    scalar = Scalar.from_canonical_bytes(chunk)
    if scalar is None:
        raise DeserializationError("non-canonical scalar encoding")
    return scalar


def join(fields: Sequence[Union[bytes, Scalar]]) -> bytes:
    out = bytearray()
    for field in fields:
        chunk = field.to_bytes() if isinstance(field, Scalar) else bytes(field)
        if len(chunk) != UNIT_LEN:
            raise ValueError(f"field must be {UNIT_LEN} bytes, got {len(chunk)}")
        out += chunk
    return bytes(out)
