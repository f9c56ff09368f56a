"""
zksigma Fiat-Shamir Transcript

Running SHAKE-256 state. Every operation is absorbed as

    op || u32le(len(label)) || label || u64le(len(message)) || message

so the absorbed stream decodes back to exactly one operation history.
Challenges are squeezed from a copy of the state and then absorbed, which
makes a repeated label yield a fresh value.
"""

import hashlib
import struct
from typing import Union

from zksigma.constants import (
    TRANSCRIPT_PROTOCOL_LABEL,
    TRANSCRIPT_OP_APPEND,
    TRANSCRIPT_OP_CHALLENGE,
    MAX_LABEL_SIZE,
    MAX_CHALLENGE_BYTES,
    WIDE_SCALAR_SIZE,
    DOMAIN_ZERO_CIPHERTEXT,
    DOMAIN_CIPHERTEXT_COMMITMENT_EQUALITY,
    DOMAIN_CIPHERTEXT_CIPHERTEXT_EQUALITY,
)
from zksigma.crypto.group import GroupElement, Scalar
from zksigma.errors import TranscriptError

_Bytes = Union[bytes, bytearray]


class Transcript:
    """Append-only, order-sensitive Fiat-Shamir transcript."""

    __slots__ = ("_state",)

    def __init__(self, label: bytes):
        self._state = hashlib.shake_256(TRANSCRIPT_PROTOCOL_LABEL)
        self.append_message(b"dom-sep", label)

    def clone(self) -> "Transcript":
        other = Transcript.__new__(Transcript)
        other._state = self._state.copy()
        return other

    # ------------------------------------------------------------------
    # Absorbing
    # ------------------------------------------------------------------

    def _absorb(self, op: bytes, label: _Bytes, message: _Bytes) -> None:
        if not isinstance(label, (bytes, bytearray)):
            raise TranscriptError(f"label must be bytes, got {type(label).__name__}")
        if not isinstance(message, (bytes, bytearray)):
            raise TranscriptError(f"message must be bytes, got {type(message).__name__}")
        if len(label) > MAX_LABEL_SIZE:
            raise TranscriptError("label too long")

        self._state.update(op)
        self._state.update(struct.pack("<I", len(label)))
        self._state.update(label)
        self._state.update(struct.pack("<Q", len(message)))
        self._state.update(message)

    def append_message(self, label: bytes, message: _Bytes) -> None:
        self._absorb(TRANSCRIPT_OP_APPEND, label, message)

    def append_u64(self, label: bytes, value: int) -> None:
        if not 0 <= value < 2**64:
            raise TranscriptError(f"u64 value out of range: {value}")
        self.append_message(label, struct.pack("<Q", value))

    def domain_separator(self, label: bytes) -> None:
        self.append_message(b"dom-sep", label)

    def append_point(self, label: bytes, point: _Bytes) -> None:
        """Absorb a compressed point as-is."""
        self.append_message(label, point)

    def append_scalar(self, label: bytes, scalar: Scalar) -> None:
        self.append_message(label, scalar.to_bytes())

    def validate_and_append_point(self, label: bytes, point: _Bytes) -> GroupElement:
        """
        Decompress a point, then absorb its encoding.

        Raises DeserializationError before touching the state if the
        encoding is not a valid group element.
        """
        element = GroupElement.decompress(point)
        self.append_message(label, bytes(point))
        return element

    # ------------------------------------------------------------------
    # Challenges
    # ------------------------------------------------------------------

    def challenge_bytes(self, label: bytes, length: int) -> bytes:
        if not isinstance(length, int) or not 0 < length <= MAX_CHALLENGE_BYTES:
            raise TranscriptError(f"invalid challenge length: {length}")

        self._absorb(TRANSCRIPT_OP_CHALLENGE, label, struct.pack("<Q", length))
        output = self._state.copy().digest(length)
        self._state.update(output)
        return output

    def challenge_scalar(self, label: bytes) -> Scalar:
        return Scalar.from_bytes_mod_order_wide(self.challenge_bytes(label, WIDE_SCALAR_SIZE))

    # ------------------------------------------------------------------
    # Protocol domain separators
    # ------------------------------------------------------------------

    def zero_ciphertext_proof_domain_separator(self) -> None:
        self.domain_separator(DOMAIN_ZERO_CIPHERTEXT)

    def ciphertext_commitment_equality_proof_domain_separator(self) -> None:
        self.domain_separator(DOMAIN_CIPHERTEXT_COMMITMENT_EQUALITY)

    def ciphertext_ciphertext_equality_proof_domain_separator(self) -> None:
        self.domain_separator(DOMAIN_CIPHERTEXT_CIPHERTEXT_EQUALITY)
