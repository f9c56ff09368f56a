"""
Zero-ciphertext proof.

Proves that a ciphertext encrypts 0. The only witness is the decryption
key s. For C = r*H and D = r*P:

    z*P == c*H + Y_P
    z*D == c*C + Y_D
"""

from __future__ import annotations
import logging
from dataclasses import dataclass

from zksigma.constants import ZERO_CIPHERTEXT_PROOF_LEN, UNIT_LEN
from zksigma.crypto import codec
from zksigma.crypto.group import GroupElement, Scalar, multiscalar_mul, zeroizing
from zksigma.crypto.transcript import Transcript
from zksigma.encryption.elgamal import ElGamalCiphertext, ElGamalKeypair, ElGamalPubkey
from zksigma.encryption.pedersen import H
from zksigma.errors import (
    ErrorCode,
    ZeroCiphertextProofVerificationError,
    verification_errors,
)

logger = logging.getLogger(__name__)

PROOF_CHUNKS = ZERO_CIPHERTEXT_PROOF_LEN // UNIT_LEN


@dataclass(frozen=True)
class ZeroCiphertextProof:
    Y_P: bytes
    Y_D: bytes
    z: Scalar

    @classmethod
    def new(
        cls,
        keypair: ElGamalKeypair,
        ciphertext: ElGamalCiphertext,
        transcript: Transcript,
    ) -> ZeroCiphertextProof:
        """Create a proof that ``ciphertext`` encrypts 0 under ``keypair``."""
        transcript.zero_ciphertext_proof_domain_separator()

        P = keypair.pubkey().get_point()
        D = ciphertext.handle.get_point()
        s = keypair.secret().get_scalar()

        y = Scalar.random()
        with zeroizing(y):
            Y_P = (y * P).compress()
            Y_D = (y * D).compress()

            transcript.append_point(b"Y_P", Y_P)
            transcript.append_point(b"Y_D", Y_D)

            c = transcript.challenge_scalar(b"c")
            transcript.challenge_scalar(b"w")

            z = c * s + y

        return cls(Y_P=Y_P, Y_D=Y_D, z=z)

    def verify(
        self,
        pubkey: ElGamalPubkey,
        ciphertext: ElGamalCiphertext,
        transcript: Transcript,
    ) -> None:
        try:
            with verification_errors(ZeroCiphertextProofVerificationError):
                self._verify(pubkey, ciphertext, transcript)
        except ZeroCiphertextProofVerificationError as e:
            logger.debug(f"Zero-ciphertext proof rejected: {e.reason}")
            raise

    def _verify(
        self,
        pubkey: ElGamalPubkey,
        ciphertext: ElGamalCiphertext,
        transcript: Transcript,
    ) -> None:
        transcript.zero_ciphertext_proof_domain_separator()

        P = pubkey.get_point()
        C = ciphertext.commitment.get_point()
        D = ciphertext.handle.get_point()

        # Y_D is absorbed as given and only decoded for the final check
        Y_P = transcript.validate_and_append_point(b"Y_P", self.Y_P)
        transcript.append_point(b"Y_D", self.Y_D)

        c = transcript.challenge_scalar(b"c")

        transcript.append_scalar(b"z", self.z)
        w = transcript.challenge_scalar(b"w")

        Y_D = GroupElement.decompress(self.Y_D)

        check = multiscalar_mul(
            [self.z, -c, -Scalar.one(), w * self.z, -(w * c), -w],
            [P, H(), Y_P, D, C, Y_D],
        )

        if not check.is_identity():
            raise ZeroCiphertextProofVerificationError(ErrorCode.ALGEBRAIC_RELATION)

    # -- wire format ---------------------------------------------------------

    def to_bytes(self) -> bytes:
        return codec.join([self.Y_P, self.Y_D, self.z])

    @classmethod
    def from_bytes(cls, data: bytes) -> ZeroCiphertextProof:
        with verification_errors(ZeroCiphertextProofVerificationError):
            chunks = codec.split_chunks(data, PROOF_CHUNKS)
            return cls(
                Y_P=codec.point_from_slice(chunks[0]),
                Y_D=codec.point_from_slice(chunks[1]),
                z=codec.scalar_from_slice(chunks[2]),
            )
