"""
zksigma Zero-Ciphertext Proof Tests
"""

from dataclasses import replace

import pytest

from zksigma.constants import ZERO_CIPHERTEXT_PROOF_LEN
from zksigma.crypto.group import GroupElement
from zksigma.crypto.transcript import Transcript
from zksigma.encryption import (
    DecryptHandle,
    ElGamalCiphertext,
    Pedersen,
    PedersenCommitment,
    PedersenOpening,
)
from zksigma.errors import ErrorCode, ZeroCiphertextProofVerificationError
from zksigma.sigma_proofs import ZeroCiphertextProof

pytestmark = pytest.mark.timeout(60)


def prove(keypair, ciphertext):
    return ZeroCiphertextProof.new(keypair, ciphertext, Transcript(b"Test"))


def check(proof, keypair, ciphertext):
    proof.verify(keypair.pubkey(), ciphertext, Transcript(b"Test"))


class TestZeroCiphertext:
    """Completeness, soundness and degenerate ciphertexts."""

    def test_encryption_of_zero(self, keypair):
        ciphertext = keypair.pubkey().encrypt(0)
        check(prove(keypair, ciphertext), keypair, ciphertext)

    def test_encryption_of_one_rejects(self, keypair):
        ciphertext = keypair.pubkey().encrypt(1)
        with pytest.raises(ZeroCiphertextProofVerificationError) as exc:
            check(prove(keypair, ciphertext), keypair, ciphertext)
        assert exc.value.code == ErrorCode.ALGEBRAIC_RELATION

    def test_difference_of_equal_ciphertexts(self, keypair):
        """ct(5) - ct(5) is an encryption of zero."""
        ciphertext = keypair.pubkey().encrypt(5) - keypair.pubkey().encrypt(5)
        check(prove(keypair, ciphertext), keypair, ciphertext)

    def test_all_zero_ciphertext(self, keypair):
        ciphertext = ElGamalCiphertext.from_bytes(bytes(64))
        check(prove(keypair, ciphertext), keypair, ciphertext)

    def test_zero_commitment_only_rejects(self, keypair):
        """Commitment zeroed, handle kept."""
        opening = PedersenOpening.new_rand()
        ciphertext = ElGamalCiphertext(
            commitment=PedersenCommitment.from_bytes(bytes(32)),
            handle=keypair.pubkey().decrypt_handle(opening),
        )
        with pytest.raises(ZeroCiphertextProofVerificationError):
            check(prove(keypair, ciphertext), keypair, ciphertext)

    def test_zero_handle_only_rejects(self, keypair):
        """Handle zeroed, commitment kept."""
        commitment, _ = Pedersen.new(0)
        ciphertext = ElGamalCiphertext(
            commitment=commitment,
            handle=DecryptHandle(GroupElement.identity()),
        )
        with pytest.raises(ZeroCiphertextProofVerificationError):
            check(prove(keypair, ciphertext), keypair, ciphertext)

    def test_identity_pubkey_rejects(self, identity_keypair):
        ciphertext = identity_keypair.pubkey().encrypt(0)
        with pytest.raises(ZeroCiphertextProofVerificationError) as exc:
            check(prove(identity_keypair, ciphertext), identity_keypair, ciphertext)
        assert exc.value.code == ErrorCode.ALGEBRAIC_RELATION

    def test_wrong_pubkey_rejects(self, keypair, second_keypair):
        ciphertext = keypair.pubkey().encrypt(0)
        with pytest.raises(ZeroCiphertextProofVerificationError):
            check(prove(keypair, ciphertext), second_keypair, ciphertext)

    def test_transcript_binding(self, keypair):
        ciphertext = keypair.pubkey().encrypt(0)
        proof = prove(keypair, ciphertext)
        with pytest.raises(ZeroCiphertextProofVerificationError):
            proof.verify(keypair.pubkey(), ciphertext, Transcript(b"Other"))


class TestSerialization:

    def test_roundtrip(self, keypair):
        ciphertext = keypair.pubkey().encrypt(0)
        proof = prove(keypair, ciphertext)
        data = proof.to_bytes()
        assert len(data) == ZERO_CIPHERTEXT_PROOF_LEN

        decoded = ZeroCiphertextProof.from_bytes(data)
        assert decoded == proof
        check(decoded, keypair, ciphertext)

    def test_truncated(self, keypair):
        proof = prove(keypair, keypair.pubkey().encrypt(0))
        with pytest.raises(ZeroCiphertextProofVerificationError) as exc:
            ZeroCiphertextProof.from_bytes(proof.to_bytes()[:64])
        assert exc.value.code == ErrorCode.DESERIALIZATION

    def test_non_canonical_z(self, keypair, non_canonical_scalar):
        proof = prove(keypair, keypair.pubkey().encrypt(0))
        data = proof.to_bytes()[:64] + non_canonical_scalar
        with pytest.raises(ZeroCiphertextProofVerificationError) as exc:
            ZeroCiphertextProof.from_bytes(data)
        assert exc.value.code == ErrorCode.DESERIALIZATION

    @pytest.mark.parametrize("field", ["Y_P", "Y_D"])
    def test_verify_rejects_invalid_point(self, keypair, invalid_point, field):
        ciphertext = keypair.pubkey().encrypt(0)
        forged = replace(prove(keypair, ciphertext), **{field: invalid_point})
        with pytest.raises(ZeroCiphertextProofVerificationError) as exc:
            check(forged, keypair, ciphertext)
        assert exc.value.code == ErrorCode.DESERIALIZATION
