"""
Ciphertext-commitment equality proof.

Proves that an ElGamal ciphertext and a Pedersen commitment hold the same
amount. The prover knows the decryption key for the ciphertext and the
opening of the commitment.

Verification batches three relations with powers of a random weight w:

    z_s*P           == c*H + Y_0
    z_x*G + z_s*D   == c*C_ciphertext + Y_1
    z_x*G + z_r*H   == c*C_commitment + Y_2

Sound by the hardness of discrete log, zero-knowledge in the random
oracle model.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass

from zksigma.constants import CIPHERTEXT_COMMITMENT_EQUALITY_PROOF_LEN, UNIT_LEN
from zksigma.crypto import codec
from zksigma.crypto.group import (
    Scalar,
    multiscalar_mul,
    vartime_multiscalar_mul,
    zeroizing,
)
from zksigma.crypto.transcript import Transcript
from zksigma.encryption.elgamal import ElGamalCiphertext, ElGamalKeypair, ElGamalPubkey
from zksigma.encryption.pedersen import G, H, PedersenCommitment, PedersenOpening
from zksigma.errors import (
    ErrorCode,
    EqualityProofVerificationError,
    verification_errors,
)

logger = logging.getLogger(__name__)

PROOF_CHUNKS = CIPHERTEXT_COMMITMENT_EQUALITY_PROOF_LEN // UNIT_LEN


@dataclass(frozen=True)
class CiphertextCommitmentEqualityProof:
    """Masking points (compressed) and response scalars."""

    Y_0: bytes
    Y_1: bytes
    Y_2: bytes
    z_s: Scalar
    z_x: Scalar
    z_r: Scalar

    @classmethod
    def new(
        cls,
        keypair: ElGamalKeypair,
        ciphertext: ElGamalCiphertext,
        opening: PedersenOpening,
        amount: int,
        transcript: Transcript,
    ) -> CiphertextCommitmentEqualityProof:
        """
        Create a proof.

        The public key, ciphertext and commitment are not appended here;
        the caller binds them into the transcript beforehand.

        Args:
            keypair: Keypair the ciphertext is encrypted under
            ciphertext: Ciphertext of ``amount``
            opening: Opening of the Pedersen commitment to ``amount``
            amount: Unsigned 64-bit amount held by both
            transcript: Fiat-Shamir transcript
        """
        transcript.ciphertext_commitment_equality_proof_domain_separator()

        P = keypair.pubkey().get_point()
        D = ciphertext.handle.get_point()

        s = keypair.secret().get_scalar()
        r = opening.get_scalar()
        x = Scalar.from_u64(amount)

        y_s = Scalar.random()
        y_x = Scalar.random()
        y_r = Scalar.random()

        with zeroizing(x, y_s, y_x, y_r):
            Y_0 = (y_s * P).compress()
            Y_1 = multiscalar_mul([y_x, y_s], [G(), D]).compress()
            Y_2 = multiscalar_mul([y_x, y_r], [G(), H()]).compress()

            transcript.append_point(b"Y_0", Y_0)
            transcript.append_point(b"Y_1", Y_1)
            transcript.append_point(b"Y_2", Y_2)

            c = transcript.challenge_scalar(b"c")
            transcript.challenge_scalar(b"w")

            z_s = c * s + y_s
            z_x = c * x + y_x
            z_r = c * r + y_r

        return cls(Y_0=Y_0, Y_1=Y_1, Y_2=Y_2, z_s=z_s, z_x=z_x, z_r=z_r)

    def verify(
        self,
        pubkey: ElGamalPubkey,
        ciphertext: ElGamalCiphertext,
        commitment: PedersenCommitment,
        transcript: Transcript,
    ) -> None:
        """
        Verify the proof.

        Raises:
            EqualityProofVerificationError: proof rejected
        """
        try:
            with verification_errors(EqualityProofVerificationError):
                self._verify(pubkey, ciphertext, commitment, transcript)
        except EqualityProofVerificationError as e:
            logger.debug(f"Ciphertext-commitment equality proof rejected: {e.reason}")
            raise

    def _verify(
        self,
        pubkey: ElGamalPubkey,
        ciphertext: ElGamalCiphertext,
        commitment: PedersenCommitment,
        transcript: Transcript,
    ) -> None:
        transcript.ciphertext_commitment_equality_proof_domain_separator()

        P = pubkey.get_point()
        C_ciphertext = ciphertext.commitment.get_point()
        D = ciphertext.handle.get_point()
        C_commitment = commitment.get_point()

        Y_0 = transcript.validate_and_append_point(b"Y_0", self.Y_0)
        Y_1 = transcript.validate_and_append_point(b"Y_1", self.Y_1)
        Y_2 = transcript.validate_and_append_point(b"Y_2", self.Y_2)

        c = transcript.challenge_scalar(b"c")

        transcript.append_scalar(b"z_s", self.z_s)
        transcript.append_scalar(b"z_x", self.z_x)
        transcript.append_scalar(b"z_r", self.z_r)
        w = transcript.challenge_scalar(b"w")
        ww = w * w

        check = vartime_multiscalar_mul(
            [
                self.z_s,           # z_s
                -c,                 # -c
                -Scalar.one(),      # -1
                w * self.z_x,       # w * z_x
                w * self.z_s,       # w * z_s
                -(w * c),           # -w * c
                -w,                 # -w
                ww * self.z_x,      # ww * z_x
                ww * self.z_r,      # ww * z_r
                -(ww * c),          # -ww * c
                -ww,                # -ww
            ],
            [
                P,
                H(),
                Y_0,
                G(),
                D,
                C_ciphertext,
                Y_1,
                G(),
                H(),
                C_commitment,
                Y_2,
            ],
        )

        if not check.is_identity():
            raise EqualityProofVerificationError(ErrorCode.ALGEBRAIC_RELATION)

    # -- wire format ---------------------------------------------------------

    def to_bytes(self) -> bytes:
        return codec.join([self.Y_0, self.Y_1, self.Y_2, self.z_s, self.z_x, self.z_r])

    @classmethod
    def from_bytes(cls, data: bytes) -> CiphertextCommitmentEqualityProof:
        with verification_errors(EqualityProofVerificationError):
            chunks = codec.split_chunks(data, PROOF_CHUNKS)
            return cls(
                Y_0=codec.point_from_slice(chunks[0]),
                Y_1=codec.point_from_slice(chunks[1]),
                Y_2=codec.point_from_slice(chunks[2]),
                z_s=codec.scalar_from_slice(chunks[3]),
                z_x=codec.scalar_from_slice(chunks[4]),
                z_r=codec.scalar_from_slice(chunks[5]),
            )
