"""
zksigma Twisted ElGamal

Keys: secret s, public P = s^-1 * H.
Ciphertext of x under P with opening r:
    C = x*G + r*H     (Pedersen commitment)
    D = r*P           (decrypt handle)
Decryption recovers x*G = C - s*D. Recovering x itself (discrete log)
is not provided.
"""

from __future__ import annotations
from dataclasses import dataclass

from zksigma.constants import (
    ELGAMAL_PUBKEY_LEN,
    ELGAMAL_SECRET_KEY_LEN,
    ELGAMAL_CIPHERTEXT_LEN,
    DECRYPT_HANDLE_LEN,
)
from zksigma.crypto.group import GroupElement, Scalar
from zksigma.encryption.pedersen import (
    H,
    Pedersen,
    PedersenCommitment,
    PedersenOpening,
)
from zksigma.errors import DeserializationError


# ============================================================================
# KEYS
# ============================================================================

class ElGamalSecretKey:
    """Secret scalar s. Wipe with zeroize() when done."""

    __slots__ = ("_scalar",)

    def __init__(self, scalar: Scalar):
        self._scalar = scalar

    @classmethod
    def new_rand(cls) -> ElGamalSecretKey:
        return cls(Scalar.random())

    def get_scalar(self) -> Scalar:
        return self._scalar

    def to_bytes(self) -> bytes:
        return self._scalar.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> ElGamalSecretKey:
        if len(data) != ELGAMAL_SECRET_KEY_LEN:
            raise DeserializationError(
                f"secret key must be {ELGAMAL_SECRET_KEY_LEN} bytes, got {len(data)}"
            )
        scalar = Scalar.from_canonical_bytes(data)
        if scalar is None:
            raise DeserializationError("non-canonical secret key")
        return cls(scalar)

    def decrypt_to_point(self, ciphertext: ElGamalCiphertext) -> GroupElement:
        """Return x*G for the encrypted amount x."""
        return ciphertext.commitment.get_point() - self._scalar * ciphertext.handle.get_point()

    def zeroize(self) -> None:
        self._scalar.zeroize()

    def __repr__(self) -> str:
        return "ElGamalSecretKey(...)"


@dataclass(frozen=True)
class ElGamalPubkey:
    """Public key P."""

    point: GroupElement

    @classmethod
    def new(cls, secret: ElGamalSecretKey) -> ElGamalPubkey:
        s = secret.get_scalar()
        if s.is_zero():
            raise ValueError("secret key must be non-zero")
        return cls(s.invert() * H())

    def get_point(self) -> GroupElement:
        return self.point

    def encrypt(self, amount: int) -> ElGamalCiphertext:
        """Encrypt with fresh randomness."""
        opening = PedersenOpening.new_rand()
        try:
            return self.encrypt_with(amount, opening)
        finally:
            opening.zeroize()

    def encrypt_with(self, amount: int, opening: PedersenOpening) -> ElGamalCiphertext:
        return ElGamalCiphertext(
            commitment=Pedersen.with_opening(amount, opening),
            handle=self.decrypt_handle(opening),
        )

    def decrypt_handle(self, opening: PedersenOpening) -> DecryptHandle:
        return DecryptHandle(opening.get_scalar() * self.point)

    def to_bytes(self) -> bytes:
        return self.point.compress()

    @classmethod
    def from_bytes(cls, data: bytes) -> ElGamalPubkey:
        if len(data) != ELGAMAL_PUBKEY_LEN:
            raise DeserializationError(f"pubkey must be {ELGAMAL_PUBKEY_LEN} bytes, got {len(data)}")
        return cls(GroupElement.decompress(data))


class ElGamalKeypair:
    """
    Public/secret key pair.

    Usable as a context manager; the secret is wiped on exit.
    """

    __slots__ = ("_public", "_secret")

    def __init__(self, public: ElGamalPubkey, secret: ElGamalSecretKey):
        self._public = public
        self._secret = secret

    @classmethod
    def new_rand(cls) -> ElGamalKeypair:
        secret = ElGamalSecretKey.new_rand()
        return cls(ElGamalPubkey.new(secret), secret)

    @classmethod
    def from_secret(cls, secret: ElGamalSecretKey) -> ElGamalKeypair:
        return cls(ElGamalPubkey.new(secret), secret)

    def pubkey(self) -> ElGamalPubkey:
        return self._public

    def secret(self) -> ElGamalSecretKey:
        return self._secret

    def zeroize(self) -> None:
        self._secret.zeroize()

    def __enter__(self) -> ElGamalKeypair:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.zeroize()

    def __repr__(self) -> str:
        return f"ElGamalKeypair(pubkey={self._public.to_bytes().hex()[:16]}...)"


# ============================================================================
# CIPHERTEXTS
# ============================================================================

@dataclass(frozen=True)
class DecryptHandle:
    """Handle D = r*P."""

    point: GroupElement

    def get_point(self) -> GroupElement:
        return self.point

    def to_bytes(self) -> bytes:
        return self.point.compress()

    @classmethod
    def from_bytes(cls, data: bytes) -> DecryptHandle:
        if len(data) != DECRYPT_HANDLE_LEN:
            raise DeserializationError(f"handle must be {DECRYPT_HANDLE_LEN} bytes, got {len(data)}")
        return cls(GroupElement.decompress(data))

    def __add__(self, other: DecryptHandle) -> DecryptHandle:
        return DecryptHandle(self.point + other.point)

    def __sub__(self, other: DecryptHandle) -> DecryptHandle:
        return DecryptHandle(self.point - other.point)


@dataclass(frozen=True)
class ElGamalCiphertext:
    """Ciphertext (C, D)."""

    commitment: PedersenCommitment
    handle: DecryptHandle

    def to_bytes(self) -> bytes:
        return self.commitment.to_bytes() + self.handle.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> ElGamalCiphertext:
        if len(data) != ELGAMAL_CIPHERTEXT_LEN:
            raise DeserializationError(
                f"ciphertext must be {ELGAMAL_CIPHERTEXT_LEN} bytes, got {len(data)}"
            )
        half = ELGAMAL_CIPHERTEXT_LEN // 2
        return cls(
            commitment=PedersenCommitment.from_bytes(data[:half]),
            handle=DecryptHandle.from_bytes(data[half:]),
        )

    @classmethod
    def zero(cls) -> ElGamalCiphertext:
        """All-zero ciphertext: the trivial encryption of 0."""
        identity = GroupElement.identity()
        return cls(PedersenCommitment(identity), DecryptHandle(identity))

    def __add__(self, other: ElGamalCiphertext) -> ElGamalCiphertext:
        return ElGamalCiphertext(self.commitment + other.commitment, self.handle + other.handle)

    def __sub__(self, other: ElGamalCiphertext) -> ElGamalCiphertext:
        return ElGamalCiphertext(self.commitment - other.commitment, self.handle - other.handle)
