"""
zksigma Group and Scalar Arithmetic

Prime-order subgroup of edwards25519 through libsodium (PyNaCl).

- Scalar: element of Z_L, backed by a wipeable bytearray
- GroupElement: point of the order-L subgroup
- Multiscalar multiplication (fixed-time and variable-time)

Wire form of a point is its compressed edwards25519 encoding, except that
the identity is written as 32 zero bytes. The zero string is a small-order
point in plain edwards25519 and never a member of the subgroup, so the
mapping stays one-to-one.
"""

from __future__ import annotations
import hmac
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence, Union

import nacl.bindings
import nacl.exceptions
import nacl.utils

from zksigma.constants import (
    CURVE_ORDER,
    POINT_SIZE,
    SCALAR_SIZE,
    WIDE_SCALAR_SIZE,
    U64_MAX,
    ED25519_IDENTITY,
    IDENTITY_ENCODING,
)
from zksigma.errors import DeserializationError, MultiscalarMulError

BytesLike = Union[bytes, bytearray, memoryview]


# ============================================================================
# SCALARS
# ============================================================================

class Scalar:
    """
    Scalar modulo the group order L.

    Always stored reduced, 32 bytes little-endian. The backing buffer is a
    bytearray so that secret values can be overwritten with zeroize().
    """

    __slots__ = ("_data",)

    def __init__(self, data: BytesLike):
        if len(data) != SCALAR_SIZE:
            raise ValueError(f"Scalar must be {SCALAR_SIZE} bytes, got {len(data)}")
        self._data = bytearray(data)

    # -- constructors --------------------------------------------------------

    @classmethod
    def zero(cls) -> Scalar:
        return cls(bytes(SCALAR_SIZE))

    @classmethod
    def one(cls) -> Scalar:
        return cls.from_int(1)

    @classmethod
    def from_int(cls, value: int) -> Scalar:
        """Reduce an arbitrary integer (negative allowed) into Z_L."""
        return cls((value % CURVE_ORDER).to_bytes(SCALAR_SIZE, "little"))

    @classmethod
    def from_u64(cls, value: int) -> Scalar:
        """Embed an unsigned 64-bit amount. Always below L, so never reduced."""
        if not 0 <= value <= U64_MAX:
            raise ValueError(f"u64 value out of range: {value}")
        return cls(value.to_bytes(SCALAR_SIZE, "little"))

    @classmethod
    def random(cls) -> Scalar:
        """Uniform non-zero scalar: 64 random bytes reduced modulo L."""
        while True:
            s = cls.from_bytes_mod_order_wide(nacl.utils.random(WIDE_SCALAR_SIZE))
            if not s.is_zero():
                return s

    @classmethod
    def from_canonical_bytes(cls, data: BytesLike) -> Optional[Scalar]:
        """Decode 32 bytes; None if the length is wrong or the value is >= L."""
        if len(data) != SCALAR_SIZE:
            return None
        if int.from_bytes(data, "little") >= CURVE_ORDER:
            return None
        return cls(data)

    @classmethod
    def from_bytes_mod_order_wide(cls, data: BytesLike) -> Scalar:
        """Reduce 64 uniformly random bytes modulo L."""
        if len(data) != WIDE_SCALAR_SIZE:
            raise ValueError(f"Wide scalar must be {WIDE_SCALAR_SIZE} bytes, got {len(data)}")
        return cls(nacl.bindings.crypto_core_ed25519_scalar_reduce(bytes(data)))

    # -- arithmetic ----------------------------------------------------------

    def __add__(self, other: Scalar) -> Scalar:
        return Scalar(nacl.bindings.crypto_core_ed25519_scalar_add(bytes(self._data), bytes(other._data)))

    def __sub__(self, other: Scalar) -> Scalar:
        return Scalar(nacl.bindings.crypto_core_ed25519_scalar_sub(bytes(self._data), bytes(other._data)))

    def __neg__(self) -> Scalar:
        return Scalar(nacl.bindings.crypto_core_ed25519_scalar_negate(bytes(self._data)))

    def __mul__(self, other):
        if isinstance(other, Scalar):
            return Scalar(nacl.bindings.crypto_core_ed25519_scalar_mul(bytes(self._data), bytes(other._data)))
        if isinstance(other, GroupElement):
            return other._mul(self)
        return NotImplemented

    def invert(self) -> Scalar:
        if self.is_zero():
            raise ZeroDivisionError("cannot invert the zero scalar")
        return Scalar(nacl.bindings.crypto_core_ed25519_scalar_invert(bytes(self._data)))

    # -- inspection ----------------------------------------------------------

    def is_zero(self) -> bool:
        return hmac.compare_digest(self._data, bytes(SCALAR_SIZE))

    def to_bytes(self) -> bytes:
        return bytes(self._data)

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def __int__(self) -> int:
        return int.from_bytes(self._data, "little")

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Scalar):
            return hmac.compare_digest(self._data, other._data)
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        # Never print scalar contents, they may be secret.
        return "Scalar(...)"

    def zeroize(self) -> None:
        """Overwrite the backing buffer with zeros."""
        for i in range(len(self._data)):
            self._data[i] = 0


@contextmanager
def zeroizing(*scalars: Scalar) -> Iterator[None]:
    """Wipe every given scalar when the block exits, however it exits."""
    try:
        yield
    finally:
        for s in scalars:
            if s is not None:
                s.zeroize()


# ============================================================================
# GROUP ELEMENTS
# ============================================================================

class GroupElement:
    """
    Element of the prime-order subgroup of edwards25519.

    Internally holds libsodium's compressed encoding; the identity is held
    as (x = 0, y = 1) and only mapped to the zero string at the wire boundary.
    """

    __slots__ = ("_point",)

    def __init__(self, point: bytes):
        self._point = point

    @classmethod
    def identity(cls) -> GroupElement:
        return cls(ED25519_IDENTITY)

    @classmethod
    def base(cls) -> GroupElement:
        """Standard edwards25519 base point."""
        return cls(nacl.bindings.crypto_scalarmult_ed25519_base_noclamp(Scalar.one().to_bytes()))

    @classmethod
    def decompress(cls, data: BytesLike) -> GroupElement:
        """
        Decode a wire point.

        Accepts the zero string (identity) or any encoding libsodium reports
        as canonical, on the curve, in the prime-order subgroup and not of
        small order.
        """
        if len(data) != POINT_SIZE:
            raise DeserializationError(f"point must be {POINT_SIZE} bytes, got {len(data)}")
        data = bytes(data)
        if data == IDENTITY_ENCODING:
            return cls.identity()
        if not nacl.bindings.crypto_core_ed25519_is_valid_point(data):
            raise DeserializationError("invalid point encoding")
        return cls(data)

    @classmethod
    def try_decompress(cls, data: BytesLike) -> Optional[GroupElement]:
        try:
            return cls.decompress(data)
        except DeserializationError:
            return None

    def compress(self) -> bytes:
        if self.is_identity():
            return IDENTITY_ENCODING
        return self._point

    def is_identity(self) -> bool:
        return self._point == ED25519_IDENTITY

    # -- arithmetic ----------------------------------------------------------

    def __add__(self, other: GroupElement) -> GroupElement:
        if not isinstance(other, GroupElement):
            return NotImplemented
        if self.is_identity():
            return other
        if other.is_identity():
            return self
        return GroupElement(nacl.bindings.crypto_core_ed25519_add(self._point, other._point))

    def __sub__(self, other: GroupElement) -> GroupElement:
        if not isinstance(other, GroupElement):
            return NotImplemented
        if other.is_identity():
            return self
        return GroupElement(nacl.bindings.crypto_core_ed25519_sub(self._point, other._point))

    def __neg__(self) -> GroupElement:
        return GroupElement.identity() - self

    def __rmul__(self, scalar):
        if isinstance(scalar, Scalar):
            return self._mul(scalar)
        return NotImplemented

    def _mul(self, scalar: Scalar) -> GroupElement:
        # libsodium refuses a zero scalar and an identity operand; both
        # give the identity in the group.
        if scalar.is_zero() or self.is_identity():
            return GroupElement.identity()
        return GroupElement(
            nacl.bindings.crypto_scalarmult_ed25519_noclamp(scalar.to_bytes(), self._point)
        )

    def __eq__(self, other: object) -> bool:
        if isinstance(other, GroupElement):
            return self._point == other._point
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._point)

    def __repr__(self) -> str:
        return f"GroupElement({self.compress().hex()[:16]}...)"


# ============================================================================
# MULTISCALAR MULTIPLICATION
# ============================================================================

def _check_lengths(scalars: Sequence[Scalar], points: Sequence[GroupElement]) -> None:
    if len(scalars) != len(points):
        raise ValueError(f"scalar/point count mismatch: {len(scalars)} != {len(points)}")


def multiscalar_mul(
    scalars: Sequence[Scalar],
    points: Sequence[GroupElement],
) -> GroupElement:
    """
    Compute sum(s_i * P_i), evaluating every term.

    Used where scalars depend on secrets.
    """
    _check_lengths(scalars, points)
    result = GroupElement.identity()
    try:
        for s, p in zip(scalars, points):
            result = result + s * p
    except nacl.exceptions.RuntimeError as e:
        raise MultiscalarMulError(str(e)) from e
    return result


def vartime_multiscalar_mul(
    scalars: Sequence[Scalar],
    points: Sequence[GroupElement],
) -> GroupElement:
    """
    Compute sum(s_i * P_i), skipping zero terms.

    Only for public inputs: running time depends on the values.
    """
    _check_lengths(scalars, points)
    result = GroupElement.identity()
    try:
        for s, p in zip(scalars, points):
            if s.is_zero() or p.is_identity():
                continue
            result = result + s * p
    except nacl.exceptions.RuntimeError as e:
        raise MultiscalarMulError(str(e)) from e
    return result
