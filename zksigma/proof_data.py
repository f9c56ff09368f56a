"""
zksigma Proof Data

A proof bundled with the public statement it speaks about. The context
appends every public element to a fresh transcript before the proof is
created or checked, so a proof cannot be replayed against other keys,
ciphertexts or commitments.

Wire form: context bytes followed by proof bytes.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from zksigma.config import ProofConfig
from zksigma.constants import (
    CONTEXT_LABEL_ZERO_CIPHERTEXT,
    CONTEXT_LABEL_CIPHERTEXT_COMMITMENT_EQUALITY,
    CONTEXT_LABEL_CIPHERTEXT_CIPHERTEXT_EQUALITY,
    ELGAMAL_PUBKEY_LEN,
    ELGAMAL_CIPHERTEXT_LEN,
    PEDERSEN_COMMITMENT_LEN,
    ZERO_CIPHERTEXT_PROOF_LEN,
    CIPHERTEXT_COMMITMENT_EQUALITY_PROOF_LEN,
    CIPHERTEXT_CIPHERTEXT_EQUALITY_PROOF_LEN,
)
from zksigma.crypto.transcript import Transcript
from zksigma.encryption.elgamal import ElGamalCiphertext, ElGamalKeypair, ElGamalPubkey
from zksigma.encryption.pedersen import PedersenCommitment, PedersenOpening
from zksigma.errors import (
    DeserializationError,
    EqualityProofVerificationError,
    ZeroCiphertextProofVerificationError,
    check_pubkey_not_identity,
    verification_errors,
)
from zksigma.sigma_proofs import (
    CiphertextCiphertextEqualityProof,
    CiphertextCommitmentEqualityProof,
    ZeroCiphertextProof,
)


def _config(config: Optional[ProofConfig]) -> ProofConfig:
    return config if config is not None else ProofConfig.default()


def _split(data: bytes, sizes) -> list:
    if len(data) != sum(sizes):
        raise DeserializationError(f"expected {sum(sizes)} bytes, got {len(data)}")
    out = []
    offset = 0
    for size in sizes:
        out.append(bytes(data[offset:offset + size]))
        offset += size
    return out


# ============================================================================
# ZERO CIPHERTEXT
# ============================================================================

@dataclass(frozen=True)
class ZeroCiphertextProofContext:
    pubkey: ElGamalPubkey
    ciphertext: ElGamalCiphertext

    SIZE = ELGAMAL_PUBKEY_LEN + ELGAMAL_CIPHERTEXT_LEN

    def new_transcript(self, config: Optional[ProofConfig] = None) -> Transcript:
        transcript = Transcript(_config(config).label_or(CONTEXT_LABEL_ZERO_CIPHERTEXT))
        transcript.append_message(b"pubkey", self.pubkey.to_bytes())
        transcript.append_message(b"ciphertext", self.ciphertext.to_bytes())
        return transcript

    def to_bytes(self) -> bytes:
        return self.pubkey.to_bytes() + self.ciphertext.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> ZeroCiphertextProofContext:
        pubkey, ciphertext = _split(data, [ELGAMAL_PUBKEY_LEN, ELGAMAL_CIPHERTEXT_LEN])
        return cls(ElGamalPubkey.from_bytes(pubkey), ElGamalCiphertext.from_bytes(ciphertext))


@dataclass(frozen=True)
class ZeroCiphertextProofData:
    context: ZeroCiphertextProofContext
    proof: ZeroCiphertextProof

    @classmethod
    def new(
        cls,
        keypair: ElGamalKeypair,
        ciphertext: ElGamalCiphertext,
        config: Optional[ProofConfig] = None,
    ) -> ZeroCiphertextProofData:
        context = ZeroCiphertextProofContext(keypair.pubkey(), ciphertext)
        proof = ZeroCiphertextProof.new(keypair, ciphertext, context.new_transcript(config))
        return cls(context, proof)

    def verify_proof(self, config: Optional[ProofConfig] = None) -> None:
        """Raises ZeroCiphertextProofVerificationError on rejection."""
        config = _config(config)
        if config.reject_identity_pubkeys:
            check_pubkey_not_identity(self.context.pubkey, ZeroCiphertextProofVerificationError)
        self.proof.verify(
            self.context.pubkey,
            self.context.ciphertext,
            self.context.new_transcript(config),
        )

    def to_bytes(self) -> bytes:
        return self.context.to_bytes() + self.proof.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> ZeroCiphertextProofData:
        with verification_errors(ZeroCiphertextProofVerificationError):
            context, proof = _split(data, [ZeroCiphertextProofContext.SIZE, ZERO_CIPHERTEXT_PROOF_LEN])
            return cls(
                ZeroCiphertextProofContext.from_bytes(context),
                ZeroCiphertextProof.from_bytes(proof),
            )


# ============================================================================
# CIPHERTEXT-COMMITMENT EQUALITY
# ============================================================================

@dataclass(frozen=True)
class CiphertextCommitmentEqualityProofContext:
    pubkey: ElGamalPubkey
    ciphertext: ElGamalCiphertext
    commitment: PedersenCommitment

    SIZE = ELGAMAL_PUBKEY_LEN + ELGAMAL_CIPHERTEXT_LEN + PEDERSEN_COMMITMENT_LEN

    def new_transcript(self, config: Optional[ProofConfig] = None) -> Transcript:
        transcript = Transcript(_config(config).label_or(CONTEXT_LABEL_CIPHERTEXT_COMMITMENT_EQUALITY))
        transcript.append_message(b"pubkey", self.pubkey.to_bytes())
        transcript.append_message(b"ciphertext", self.ciphertext.to_bytes())
        transcript.append_message(b"commitment", self.commitment.to_bytes())
        return transcript

    def to_bytes(self) -> bytes:
        return self.pubkey.to_bytes() + self.ciphertext.to_bytes() + self.commitment.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> CiphertextCommitmentEqualityProofContext:
        pubkey, ciphertext, commitment = _split(
            data, [ELGAMAL_PUBKEY_LEN, ELGAMAL_CIPHERTEXT_LEN, PEDERSEN_COMMITMENT_LEN]
        )
        return cls(
            ElGamalPubkey.from_bytes(pubkey),
            ElGamalCiphertext.from_bytes(ciphertext),
            PedersenCommitment.from_bytes(commitment),
        )


@dataclass(frozen=True)
class CiphertextCommitmentEqualityProofData:
    context: CiphertextCommitmentEqualityProofContext
    proof: CiphertextCommitmentEqualityProof

    @classmethod
    def new(
        cls,
        keypair: ElGamalKeypair,
        ciphertext: ElGamalCiphertext,
        commitment: PedersenCommitment,
        opening: PedersenOpening,
        amount: int,
        config: Optional[ProofConfig] = None,
    ) -> CiphertextCommitmentEqualityProofData:
        context = CiphertextCommitmentEqualityProofContext(keypair.pubkey(), ciphertext, commitment)
        proof = CiphertextCommitmentEqualityProof.new(
            keypair, ciphertext, opening, amount, context.new_transcript(config)
        )
        return cls(context, proof)

    def verify_proof(self, config: Optional[ProofConfig] = None) -> None:
        """Raises EqualityProofVerificationError on rejection."""
        config = _config(config)
        if config.reject_identity_pubkeys:
            check_pubkey_not_identity(self.context.pubkey, EqualityProofVerificationError)
        self.proof.verify(
            self.context.pubkey,
            self.context.ciphertext,
            self.context.commitment,
            self.context.new_transcript(config),
        )

    def to_bytes(self) -> bytes:
        return self.context.to_bytes() + self.proof.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> CiphertextCommitmentEqualityProofData:
        with verification_errors(EqualityProofVerificationError):
            context, proof = _split(
                data,
                [CiphertextCommitmentEqualityProofContext.SIZE, CIPHERTEXT_COMMITMENT_EQUALITY_PROOF_LEN],
            )
            return cls(
                CiphertextCommitmentEqualityProofContext.from_bytes(context),
                CiphertextCommitmentEqualityProof.from_bytes(proof),
            )


# ============================================================================
# CIPHERTEXT-CIPHERTEXT EQUALITY
# ============================================================================

@dataclass(frozen=True)
class CiphertextCiphertextEqualityProofContext:
    first_pubkey: ElGamalPubkey
    second_pubkey: ElGamalPubkey
    first_ciphertext: ElGamalCiphertext
    second_ciphertext: ElGamalCiphertext

    SIZE = 2 * ELGAMAL_PUBKEY_LEN + 2 * ELGAMAL_CIPHERTEXT_LEN

    def new_transcript(self, config: Optional[ProofConfig] = None) -> Transcript:
        transcript = Transcript(_config(config).label_or(CONTEXT_LABEL_CIPHERTEXT_CIPHERTEXT_EQUALITY))
        transcript.append_message(b"first-pubkey", self.first_pubkey.to_bytes())
        transcript.append_message(b"second-pubkey", self.second_pubkey.to_bytes())
        transcript.append_message(b"first-ciphertext", self.first_ciphertext.to_bytes())
        transcript.append_message(b"second-ciphertext", self.second_ciphertext.to_bytes())
        return transcript

    def to_bytes(self) -> bytes:
        return (
            self.first_pubkey.to_bytes()
            + self.second_pubkey.to_bytes()
            + self.first_ciphertext.to_bytes()
            + self.second_ciphertext.to_bytes()
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> CiphertextCiphertextEqualityProofContext:
        first_pubkey, second_pubkey, first_ciphertext, second_ciphertext = _split(
            data,
            [ELGAMAL_PUBKEY_LEN, ELGAMAL_PUBKEY_LEN, ELGAMAL_CIPHERTEXT_LEN, ELGAMAL_CIPHERTEXT_LEN],
        )
        return cls(
            ElGamalPubkey.from_bytes(first_pubkey),
            ElGamalPubkey.from_bytes(second_pubkey),
            ElGamalCiphertext.from_bytes(first_ciphertext),
            ElGamalCiphertext.from_bytes(second_ciphertext),
        )


@dataclass(frozen=True)
class CiphertextCiphertextEqualityProofData:
    context: CiphertextCiphertextEqualityProofContext
    proof: CiphertextCiphertextEqualityProof

    @classmethod
    def new(
        cls,
        first_keypair: ElGamalKeypair,
        second_pubkey: ElGamalPubkey,
        first_ciphertext: ElGamalCiphertext,
        second_ciphertext: ElGamalCiphertext,
        second_opening: PedersenOpening,
        amount: int,
        config: Optional[ProofConfig] = None,
    ) -> CiphertextCiphertextEqualityProofData:
        context = CiphertextCiphertextEqualityProofContext(
            first_keypair.pubkey(), second_pubkey, first_ciphertext, second_ciphertext
        )
        proof = CiphertextCiphertextEqualityProof.new(
            first_keypair,
            second_pubkey,
            first_ciphertext,
            second_opening,
            amount,
            context.new_transcript(config),
        )
        return cls(context, proof)

    def verify_proof(self, config: Optional[ProofConfig] = None) -> None:
        """Raises EqualityProofVerificationError on rejection."""
        config = _config(config)
        if config.reject_identity_pubkeys:
            check_pubkey_not_identity(self.context.first_pubkey, EqualityProofVerificationError)
            check_pubkey_not_identity(self.context.second_pubkey, EqualityProofVerificationError)
        self.proof.verify(
            self.context.first_pubkey,
            self.context.second_pubkey,
            self.context.first_ciphertext,
            self.context.second_ciphertext,
            self.context.new_transcript(config),
        )

    def to_bytes(self) -> bytes:
        return self.context.to_bytes() + self.proof.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> CiphertextCiphertextEqualityProofData:
        with verification_errors(EqualityProofVerificationError):
            context, proof = _split(
                data,
                [CiphertextCiphertextEqualityProofContext.SIZE, CIPHERTEXT_CIPHERTEXT_EQUALITY_PROOF_LEN],
            )
            return cls(
                CiphertextCiphertextEqualityProofContext.from_bytes(context),
                CiphertextCiphertextEqualityProof.from_bytes(proof),
            )
