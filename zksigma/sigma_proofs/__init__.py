"""
zksigma Sigma Proofs

- CiphertextCommitmentEqualityProof: ciphertext and commitment hold the same amount
- CiphertextCiphertextEqualityProof: two ciphertexts hold the same amount
- ZeroCiphertextProof: ciphertext encrypts 0
"""

from zksigma.sigma_proofs.ciphertext_commitment_equality import CiphertextCommitmentEqualityProof
from zksigma.sigma_proofs.ciphertext_ciphertext_equality import CiphertextCiphertextEqualityProof
from zksigma.sigma_proofs.zero_ciphertext import ZeroCiphertextProof

__all__ = [
    "CiphertextCommitmentEqualityProof",
    "CiphertextCiphertextEqualityProof",
    "ZeroCiphertextProof",
]
