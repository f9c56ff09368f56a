"""
zksigma - Zero-knowledge sigma proofs for twisted ElGamal

Non-interactive proofs (Fiat-Shamir) relating ElGamal ciphertexts and
Pedersen commitments on the edwards25519 prime-order subgroup:

- Ciphertext-commitment equality
- Ciphertext-ciphertext equality
- Zero ciphertext
"""

__version__ = "0.1.0"

from zksigma.errors import (
    ErrorCode,
    ZkSigmaError,
    TranscriptError,
    DeserializationError,
    MultiscalarMulError,
    ConfigError,
    SigmaProofVerificationError,
    EqualityProofVerificationError,
    ZeroCiphertextProofVerificationError,
)
from zksigma.config import ProofConfig, LogConfig, setup_logging
from zksigma.crypto import Scalar, GroupElement, Transcript
from zksigma.encryption import (
    Pedersen,
    PedersenCommitment,
    PedersenOpening,
    DecryptHandle,
    ElGamalCiphertext,
    ElGamalKeypair,
    ElGamalPubkey,
    ElGamalSecretKey,
)
from zksigma.sigma_proofs import (
    CiphertextCommitmentEqualityProof,
    CiphertextCiphertextEqualityProof,
    ZeroCiphertextProof,
)
from zksigma.proof_data import (
    ZeroCiphertextProofContext,
    ZeroCiphertextProofData,
    CiphertextCommitmentEqualityProofContext,
    CiphertextCommitmentEqualityProofData,
    CiphertextCiphertextEqualityProofContext,
    CiphertextCiphertextEqualityProofData,
)

__all__ = [
    "__version__",
    # Errors
    "ErrorCode",
    "ZkSigmaError",
    "TranscriptError",
    "DeserializationError",
    "MultiscalarMulError",
    "ConfigError",
    "SigmaProofVerificationError",
    "EqualityProofVerificationError",
    "ZeroCiphertextProofVerificationError",
    # Config
    "ProofConfig",
    "LogConfig",
    "setup_logging",
    # Primitives
    "Scalar",
    "GroupElement",
    "Transcript",
    # Encryption
    "Pedersen",
    "PedersenCommitment",
    "PedersenOpening",
    "DecryptHandle",
    "ElGamalCiphertext",
    "ElGamalKeypair",
    "ElGamalPubkey",
    "ElGamalSecretKey",
    # Proofs
    "CiphertextCommitmentEqualityProof",
    "CiphertextCiphertextEqualityProof",
    "ZeroCiphertextProof",
    # Proof data
    "ZeroCiphertextProofContext",
    "ZeroCiphertextProofData",
    "CiphertextCommitmentEqualityProofContext",
    "CiphertextCommitmentEqualityProofData",
    "CiphertextCiphertextEqualityProofContext",
    "CiphertextCiphertextEqualityProofData",
]
