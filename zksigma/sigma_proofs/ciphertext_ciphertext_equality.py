"""
Ciphertext-ciphertext equality proof.

Proves that two ElGamal ciphertexts, possibly under different public keys,
hold the same amount. The prover knows the decryption key of the first
ciphertext and the opening of the second.

Verified relations, batched with 1, w, w^2, w^3:

    z_s*P_first               == c*H + Y_0
    z_x*G + z_s*D_first       == c*C_first + Y_1
    z_x*G + z_r*H             == c*C_second + Y_2
    z_r*P_second              == c*D_second + Y_3
"""

from __future__ import annotations
import logging
from dataclasses import dataclass

from zksigma.constants import CIPHERTEXT_CIPHERTEXT_EQUALITY_PROOF_LEN, UNIT_LEN
from zksigma.crypto import codec
from zksigma.crypto.group import (
    Scalar,
    multiscalar_mul,
    vartime_multiscalar_mul,
    zeroizing,
)
from zksigma.crypto.transcript import Transcript
from zksigma.encryption.elgamal import ElGamalCiphertext, ElGamalKeypair, ElGamalPubkey
from zksigma.encryption.pedersen import G, H, PedersenOpening
from zksigma.errors import (
    ErrorCode,
    EqualityProofVerificationError,
    verification_errors,
)

logger = logging.getLogger(__name__)

PROOF_CHUNKS = CIPHERTEXT_CIPHERTEXT_EQUALITY_PROOF_LEN // UNIT_LEN


@dataclass(frozen=True)
class CiphertextCiphertextEqualityProof:
    Y_0: bytes
    Y_1: bytes
    Y_2: bytes
    Y_3: bytes
    z_s: Scalar
    z_x: Scalar
    z_r: Scalar

    @classmethod
    def new(
        cls,
        first_keypair: ElGamalKeypair,
        second_pubkey: ElGamalPubkey,
        first_ciphertext: ElGamalCiphertext,
        second_opening: PedersenOpening,
        amount: int,
        transcript: Transcript,
    ) -> CiphertextCiphertextEqualityProof:
        """
        Create a proof.

        Public keys and ciphertexts must already be in the transcript.
        """
        transcript.ciphertext_ciphertext_equality_proof_domain_separator()

        P_first = first_keypair.pubkey().get_point()
        D_first = first_ciphertext.handle.get_point()
        P_second = second_pubkey.get_point()

        s = first_keypair.secret().get_scalar()
        r = second_opening.get_scalar()
        x = Scalar.from_u64(amount)

        y_s = Scalar.random()
        y_x = Scalar.random()
        y_r = Scalar.random()

        with zeroizing(x, y_s, y_x, y_r):
            Y_0 = (y_s * P_first).compress()
            Y_1 = multiscalar_mul([y_x, y_s], [G(), D_first]).compress()
            Y_2 = multiscalar_mul([y_x, y_r], [G(), H()]).compress()
            Y_3 = (y_r * P_second).compress()

            transcript.append_point(b"Y_0", Y_0)
            transcript.append_point(b"Y_1", Y_1)
            transcript.append_point(b"Y_2", Y_2)
            transcript.append_point(b"Y_3", Y_3)

            c = transcript.challenge_scalar(b"c")
            transcript.challenge_scalar(b"w")

            z_s = c * s + y_s
            z_x = c * x + y_x
            z_r = c * r + y_r

        return cls(Y_0=Y_0, Y_1=Y_1, Y_2=Y_2, Y_3=Y_3, z_s=z_s, z_x=z_x, z_r=z_r)

    def verify(
        self,
        first_pubkey: ElGamalPubkey,
        second_pubkey: ElGamalPubkey,
        first_ciphertext: ElGamalCiphertext,
        second_ciphertext: ElGamalCiphertext,
        transcript: Transcript,
    ) -> None:
        """Verify the proof, raising EqualityProofVerificationError on rejection."""
        try:
            with verification_errors(EqualityProofVerificationError):
                self._verify(first_pubkey, second_pubkey, first_ciphertext, second_ciphertext, transcript)
        except EqualityProofVerificationError as e:
            logger.debug(f"Ciphertext-ciphertext equality proof rejected: {e.reason}")
            raise

    def _verify(
        self,
        first_pubkey: ElGamalPubkey,
        second_pubkey: ElGamalPubkey,
        first_ciphertext: ElGamalCiphertext,
        second_ciphertext: ElGamalCiphertext,
        transcript: Transcript,
    ) -> None:
        transcript.ciphertext_ciphertext_equality_proof_domain_separator()

        P_first = first_pubkey.get_point()
        C_first = first_ciphertext.commitment.get_point()
        D_first = first_ciphertext.handle.get_point()

        P_second = second_pubkey.get_point()
        C_second = second_ciphertext.commitment.get_point()
        D_second = second_ciphertext.handle.get_point()

        Y_0 = transcript.validate_and_append_point(b"Y_0", self.Y_0)
        Y_1 = transcript.validate_and_append_point(b"Y_1", self.Y_1)
        Y_2 = transcript.validate_and_append_point(b"Y_2", self.Y_2)
        Y_3 = transcript.validate_and_append_point(b"Y_3", self.Y_3)

        c = transcript.challenge_scalar(b"c")

        transcript.append_scalar(b"z_s", self.z_s)
        transcript.append_scalar(b"z_x", self.z_x)
        transcript.append_scalar(b"z_r", self.z_r)
        w = transcript.challenge_scalar(b"w")
        ww = w * w
        www = w * ww

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
                www * self.z_r,     # www * z_r
                -(www * c),         # -www * c
                -www,               # -www
            ],
            [
                P_first,
                H(),
                Y_0,
                G(),
                D_first,
                C_first,
                Y_1,
                G(),
                H(),
                C_second,
                Y_2,
                P_second,
                D_second,
                Y_3,
            ],
        )

        if not check.is_identity():
            raise EqualityProofVerificationError(ErrorCode.ALGEBRAIC_RELATION)

    # -- wire format ---------------------------------------------------------

    def to_bytes(self) -> bytes:
        return codec.join([
            self.Y_0, self.Y_1, self.Y_2, self.Y_3,
            self.z_s, self.z_x, self.z_r,
        ])

    @classmethod
    def from_bytes(cls, data: bytes) -> CiphertextCiphertextEqualityProof:
        with verification_errors(EqualityProofVerificationError):
            chunks = codec.split_chunks(data, PROOF_CHUNKS)
            return cls(
                Y_0=codec.point_from_slice(chunks[0]),
                Y_1=codec.point_from_slice(chunks[1]),
                Y_2=codec.point_from_slice(chunks[2]),
                Y_3=codec.point_from_slice(chunks[3]),
                z_s=codec.scalar_from_slice(chunks[4]),
                z_x=codec.scalar_from_slice(chunks[5]),
                z_r=codec.scalar_from_slice(chunks[6]),
            )
