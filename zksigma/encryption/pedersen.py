"""
zksigma Pedersen Commitments

C = x*G + r*H where:
- x is the committed amount
- r is the opening
- G is the Ed25519 base point, H is hash-derived and independent of G
"""

from __future__ import annotations
import hashlib
import logging
import struct
from dataclasses import dataclass
from typing import Optional, Tuple

import nacl.bindings

from zksigma.constants import (
    H_GENERATOR_SEED,
    H_GENERATOR_MAX_ATTEMPTS,
    PEDERSEN_COMMITMENT_LEN,
    PEDERSEN_OPENING_LEN,
)
from zksigma.crypto.group import GroupElement, Scalar
from zksigma.errors import DeserializationError

logger = logging.getLogger(__name__)


# ============================================================================
# GENERATORS
# ============================================================================

def hash_to_point(seed: bytes) -> GroupElement:
    """
    Hash a seed to a prime-order group element.

    Try-and-increment: SHA3-256(seed || u32le(counter)) until libsodium
    accepts the candidate as a valid subgroup point.
    """
    for counter in range(H_GENERATOR_MAX_ATTEMPTS):
        candidate = hashlib.sha3_256(seed + struct.pack("<I", counter)).digest()
        if nacl.bindings.crypto_core_ed25519_is_valid_point(candidate):
            logger.debug(f"hash_to_point succeeded after {counter + 1} attempts")
            return GroupElement(candidate)
    raise RuntimeError(f"hash to point failed after {H_GENERATOR_MAX_ATTEMPTS} attempts")


class PedersenGenerators:
    """Pedersen generators G and H, computed once."""

    _G: Optional[GroupElement] = None
    _H: Optional[GroupElement] = None

    @classmethod
    def get_G(cls) -> GroupElement:
        if cls._G is None:
            cls._G = GroupElement.base()
        return cls._G

    @classmethod
    def get_H(cls) -> GroupElement:
        if cls._H is None:
            cls._H = hash_to_point(H_GENERATOR_SEED)
        return cls._H


def G() -> GroupElement:
    return PedersenGenerators.get_G()


def H() -> GroupElement:
    return PedersenGenerators.get_H()


# ============================================================================
# OPENINGS AND COMMITMENTS
# ============================================================================

class PedersenOpening:
    """Randomness r of a commitment. Secret; wipe with zeroize()."""

    __slots__ = ("_scalar",)

    def __init__(self, scalar: Scalar):
        self._scalar = scalar

    @classmethod
    def new_rand(cls) -> PedersenOpening:
        return cls(Scalar.random())

    def get_scalar(self) -> Scalar:
        return self._scalar

    def to_bytes(self) -> bytes:
        return self._scalar.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> PedersenOpening:
        if len(data) != PEDERSEN_OPENING_LEN:
            raise DeserializationError(f"opening must be {PEDERSEN_OPENING_LEN} bytes, got {len(data)}")
        scalar = Scalar.from_canonical_bytes(data)
        if scalar is None:
            raise DeserializationError("non-canonical opening")
        return cls(scalar)

    def zeroize(self) -> None:
        self._scalar.zeroize()

    def __add__(self, other: PedersenOpening) -> PedersenOpening:
        return PedersenOpening(self._scalar + other._scalar)

    def __sub__(self, other: PedersenOpening) -> PedersenOpening:
        return PedersenOpening(self._scalar - other._scalar)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PedersenOpening):
            return self._scalar == other._scalar
        return NotImplemented

    def __repr__(self) -> str:
        return "PedersenOpening(...)"


@dataclass(frozen=True)
class PedersenCommitment:
    """Commitment point C."""

    point: GroupElement

    def get_point(self) -> GroupElement:
        return self.point

    def to_bytes(self) -> bytes:
        return self.point.compress()

    @classmethod
    def from_bytes(cls, data: bytes) -> PedersenCommitment:
        if len(data) != PEDERSEN_COMMITMENT_LEN:
            raise DeserializationError(
                f"commitment must be {PEDERSEN_COMMITMENT_LEN} bytes, got {len(data)}"
            )
        return cls(GroupElement.decompress(data))

    def __add__(self, other: PedersenCommitment) -> PedersenCommitment:
        return PedersenCommitment(self.point + other.point)

    def __sub__(self, other: PedersenCommitment) -> PedersenCommitment:
        return PedersenCommitment(self.point - other.point)


class Pedersen:
    """Pedersen commitment scheme."""

    @staticmethod
    def new(amount: int) -> Tuple[PedersenCommitment, PedersenOpening]:
        """Commit to a u64 amount with fresh randomness."""
        opening = PedersenOpening.new_rand()
        return Pedersen.with_opening(amount, opening), opening

    @staticmethod
    def with_opening(amount: int, opening: PedersenOpening) -> PedersenCommitment:
        x = Scalar.from_u64(amount)
        return PedersenCommitment(x * G() + opening.get_scalar() * H())

