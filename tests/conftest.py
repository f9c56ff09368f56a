"""
zksigma Test Fixtures
"""

import nacl.bindings
import pytest

from zksigma.crypto.group import GroupElement
from zksigma.crypto.transcript import Transcript
from zksigma.encryption import ElGamalKeypair, ElGamalPubkey, ElGamalSecretKey
from zksigma.encryption.pedersen import G


FIELD_PRIME = 2**255 - 19
EDWARDS_D = (-121665 * pow(121666, FIELD_PRIME - 2, FIELD_PRIME)) % FIELD_PRIME

# Point of order 8 on edwards25519
TORSION_POINT = bytes.fromhex(
    "26e8958fc2b227b045c3f489f2ef98f0d5dfac05d3c63339b13802886d53fc05"
)


def _off_curve_encoding() -> bytes:
    """Smallest y for which no x satisfies the curve equation."""
    y = 2
    while True:
        u = (y * y - 1) % FIELD_PRIME
        v = (EDWARDS_D * y * y + 1) % FIELD_PRIME
        x2 = u * pow(v, FIELD_PRIME - 2, FIELD_PRIME) % FIELD_PRIME
        if pow(x2, (FIELD_PRIME - 1) // 2, FIELD_PRIME) == FIELD_PRIME - 1:
            return y.to_bytes(32, "little")
        y += 1


@pytest.fixture
def keypair() -> ElGamalKeypair:
    """Fresh random keypair."""
    with ElGamalKeypair.new_rand() as kp:
        yield kp


@pytest.fixture
def second_keypair() -> ElGamalKeypair:
    with ElGamalKeypair.new_rand() as kp:
        yield kp


@pytest.fixture
def identity_keypair() -> ElGamalKeypair:
    """Keypair whose public key is the group identity (all-zero encoding)."""
    public = ElGamalPubkey.from_bytes(bytes(32))
    return ElGamalKeypair(public, ElGamalSecretKey.new_rand())


@pytest.fixture
def transcripts():
    """Matching prover and verifier transcripts."""
    return Transcript(b"Test"), Transcript(b"Test")


@pytest.fixture(params=["small-order", "non-canonical-y", "off-curve", "mixed-order"])
def invalid_point(request) -> bytes:
    """Encodings that are never valid wire points."""
    if request.param == "small-order":
        # (0, 1) under libsodium's own encoding; only the zero string is the identity
        return b"\x01" + bytes(31)
    if request.param == "non-canonical-y":
        return (FIELD_PRIME + 1).to_bytes(32, "little")
    if request.param == "off-curve":
        return _off_curve_encoding()
    return nacl.bindings.crypto_core_ed25519_add(G().compress(), TORSION_POINT)


@pytest.fixture
def non_canonical_scalar() -> bytes:
    from zksigma.constants import CURVE_ORDER
    return CURVE_ORDER.to_bytes(32, "little")


@pytest.fixture
def identity() -> GroupElement:
    return GroupElement.identity()
