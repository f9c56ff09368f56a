"""
zksigma Ciphertext-Commitment Equality Proof Tests
"""

import logging
from dataclasses import replace

import pytest

from zksigma.constants import U64_MAX, CIPHERTEXT_COMMITMENT_EQUALITY_PROOF_LEN
from zksigma.crypto.group import Scalar
from zksigma.crypto.transcript import Transcript
from zksigma.encryption import (
    ElGamalCiphertext,
    Pedersen,
    PedersenCommitment,
    PedersenOpening,
)
from zksigma.errors import (
    EqualityProofVerificationError,
    ErrorCode,
    SigmaProofVerificationError,
)
from zksigma.sigma_proofs import CiphertextCommitmentEqualityProof

pytestmark = pytest.mark.timeout(60)


def prove_and_verify(keypair, ciphertext, commitment, opening, amount):
    prover_transcript = Transcript(b"Test")
    verifier_transcript = Transcript(b"Test")
    proof = CiphertextCommitmentEqualityProof.new(
        keypair, ciphertext, opening, amount, prover_transcript
    )
    proof.verify(keypair.pubkey(), ciphertext, commitment, verifier_transcript)
    return proof


class TestCompleteness:
    """Honest proofs verify."""

    @pytest.mark.parametrize("amount", [0, 1, 55, U64_MAX])
    def test_amounts(self, keypair, amount):
        ciphertext = keypair.pubkey().encrypt(amount)
        commitment, opening = Pedersen.new(amount)
        prove_and_verify(keypair, ciphertext, commitment, opening, amount)

    def test_random_amount(self, keypair):
        amount = int.from_bytes(Scalar.random().to_bytes()[:8], "little")
        ciphertext = keypair.pubkey().encrypt(amount)
        commitment, opening = Pedersen.new(amount)
        prove_and_verify(keypair, ciphertext, commitment, opening, amount)

    def test_proof_verifies_repeatedly(self, keypair):
        ciphertext = keypair.pubkey().encrypt(7)
        commitment, opening = Pedersen.new(7)
        proof = prove_and_verify(keypair, ciphertext, commitment, opening, 7)
        proof.verify(keypair.pubkey(), ciphertext, commitment, Transcript(b"Test"))


class TestSoundness:
    """Proofs of false statements are rejected."""

    def test_different_amounts(self, keypair):
        """Ciphertext of 55 against a commitment to 77."""
        ciphertext = keypair.pubkey().encrypt(55)
        commitment, opening = Pedersen.new(77)

        proof = CiphertextCommitmentEqualityProof.new(
            keypair, ciphertext, opening, 55, Transcript(b"Test")
        )
        with pytest.raises(EqualityProofVerificationError) as exc:
            proof.verify(keypair.pubkey(), ciphertext, commitment, Transcript(b"Test"))
        assert exc.value.code == ErrorCode.ALGEBRAIC_RELATION

    def test_recommit_with_same_opening(self, keypair):
        """Proof for 55 does not verify against a commitment to 77 with the same opening."""
        ciphertext = keypair.pubkey().encrypt(55)
        commitment, opening = Pedersen.new(55)
        proof = prove_and_verify(keypair, ciphertext, commitment, opening, 55)

        other = Pedersen.with_opening(77, opening)
        with pytest.raises(EqualityProofVerificationError) as exc:
            proof.verify(keypair.pubkey(), ciphertext, other, Transcript(b"Test"))
        assert exc.value.code == ErrorCode.ALGEBRAIC_RELATION

    def test_transcript_binding(self, keypair):
        """Verifier transcript that absorbed other public data rejects."""
        ciphertext = keypair.pubkey().encrypt(55)
        commitment, opening = Pedersen.new(55)

        prover_transcript = Transcript(b"Test")
        prover_transcript.append_message(b"ciphertext", ciphertext.to_bytes())
        proof = CiphertextCommitmentEqualityProof.new(
            keypair, ciphertext, opening, 55, prover_transcript
        )

        verifier_transcript = Transcript(b"Test")
        verifier_transcript.append_message(b"ciphertext", bytes(64))
        with pytest.raises(EqualityProofVerificationError) as exc:
            proof.verify(keypair.pubkey(), ciphertext, commitment, verifier_transcript)
        assert exc.value.code == ErrorCode.ALGEBRAIC_RELATION

    def test_tampered_response(self, keypair):
        ciphertext = keypair.pubkey().encrypt(3)
        commitment, opening = Pedersen.new(3)
        proof = prove_and_verify(keypair, ciphertext, commitment, opening, 3)

        forged = replace(proof, z_x=proof.z_x + Scalar.one())
        with pytest.raises(EqualityProofVerificationError):
            forged.verify(keypair.pubkey(), ciphertext, commitment, Transcript(b"Test"))

    def test_rejection_is_logged(self, keypair, caplog):
        ciphertext = keypair.pubkey().encrypt(55)
        commitment, opening = Pedersen.new(77)
        proof = CiphertextCommitmentEqualityProof.new(
            keypair, ciphertext, opening, 55, Transcript(b"Test")
        )
        with caplog.at_level(logging.DEBUG, logger="zksigma"):
            with pytest.raises(SigmaProofVerificationError):
                proof.verify(keypair.pubkey(), ciphertext, commitment, Transcript(b"Test"))
        assert "rejected" in caplog.text
        assert keypair.secret().to_bytes().hex() not in caplog.text


class TestEdgeCases:
    """Degenerate statements."""

    def test_identity_pubkey_rejects(self, identity_keypair):
        ciphertext = identity_keypair.pubkey().encrypt(55)
        commitment, opening = Pedersen.new(55)

        proof = CiphertextCommitmentEqualityProof.new(
            identity_keypair, ciphertext, opening, 55, Transcript(b"Test")
        )
        with pytest.raises(EqualityProofVerificationError) as exc:
            proof.verify(identity_keypair.pubkey(), ciphertext, commitment, Transcript(b"Test"))
        assert exc.value.code == ErrorCode.ALGEBRAIC_RELATION

    def test_all_zero_ciphertext_and_commitment(self, keypair):
        ciphertext = ElGamalCiphertext.from_bytes(bytes(64))
        commitment = PedersenCommitment.from_bytes(bytes(32))
        opening = PedersenOpening.from_bytes(bytes(32))
        prove_and_verify(keypair, ciphertext, commitment, opening, 0)

    def test_all_zero_commitment_real_ciphertext(self, keypair):
        ciphertext = keypair.pubkey().encrypt(0)
        commitment = PedersenCommitment.from_bytes(bytes(32))
        opening = PedersenOpening.from_bytes(bytes(32))
        prove_and_verify(keypair, ciphertext, commitment, opening, 0)

    def test_all_zero_ciphertext_real_commitment(self, keypair):
        ciphertext = ElGamalCiphertext.from_bytes(bytes(64))
        commitment, opening = Pedersen.new(0)
        prove_and_verify(keypair, ciphertext, commitment, opening, 0)


class TestSerialization:
    """Wire format."""

    @pytest.fixture
    def statement(self, keypair):
        ciphertext = keypair.pubkey().encrypt(55)
        commitment, opening = Pedersen.new(55)
        proof = CiphertextCommitmentEqualityProof.new(
            keypair, ciphertext, opening, 55, Transcript(b"Test")
        )
        return keypair, ciphertext, commitment, proof

    def test_roundtrip(self, statement):
        keypair, ciphertext, commitment, proof = statement
        data = proof.to_bytes()
        assert len(data) == CIPHERTEXT_COMMITMENT_EQUALITY_PROOF_LEN

        decoded = CiphertextCommitmentEqualityProof.from_bytes(data)
        assert decoded == proof
        decoded.verify(keypair.pubkey(), ciphertext, commitment, Transcript(b"Test"))

    @pytest.mark.parametrize("length", [0, 32, 191, 193, 224])
    def test_wrong_length(self, statement, length):
        data = (statement[3].to_bytes() * 2)[:length]
        with pytest.raises(EqualityProofVerificationError) as exc:
            CiphertextCommitmentEqualityProof.from_bytes(data)
        assert exc.value.code == ErrorCode.DESERIALIZATION

    @pytest.mark.parametrize("index", [0, 1, 2])
    def test_invalid_point(self, statement, invalid_point, index):
        data = bytearray(statement[3].to_bytes())
        data[index * 32:(index + 1) * 32] = invalid_point
        with pytest.raises(EqualityProofVerificationError) as exc:
            CiphertextCommitmentEqualityProof.from_bytes(bytes(data))
        assert exc.value.code == ErrorCode.DESERIALIZATION

    @pytest.mark.parametrize("index", [3, 4, 5])
    def test_non_canonical_scalar(self, statement, non_canonical_scalar, index):
        data = bytearray(statement[3].to_bytes())
        data[index * 32:(index + 1) * 32] = non_canonical_scalar
        with pytest.raises(EqualityProofVerificationError) as exc:
            CiphertextCommitmentEqualityProof.from_bytes(bytes(data))
        assert exc.value.code == ErrorCode.DESERIALIZATION

    def test_verify_rejects_invalid_point(self, statement, invalid_point):
        """A proof built in memory with a bad point fails verification cleanly."""
        keypair, ciphertext, commitment, proof = statement
        forged = replace(proof, Y_1=invalid_point)
        with pytest.raises(EqualityProofVerificationError) as exc:
            forged.verify(keypair.pubkey(), ciphertext, commitment, Transcript(b"Test"))
        assert exc.value.code == ErrorCode.DESERIALIZATION
