"""
zksigma Encryption

Twisted ElGamal and Pedersen commitments consumed by the sigma proofs.
"""

from zksigma.encryption.pedersen import (
    G,
    H,
    Pedersen,
    PedersenCommitment,
    PedersenOpening,
)
from zksigma.encryption.elgamal import (
    DecryptHandle,
    ElGamalCiphertext,
    ElGamalKeypair,
    ElGamalPubkey,
    ElGamalSecretKey,
)

__all__ = [
    "G",
    "H",
    "Pedersen",
    "PedersenCommitment",
    "PedersenOpening",
    "DecryptHandle",
    "ElGamalCiphertext",
    "ElGamalKeypair",
    "ElGamalPubkey",
    "ElGamalSecretKey",
]
