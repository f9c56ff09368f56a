"""
zksigma Error Handling

All error codes and exception classes.
"""

from contextlib import contextmanager
from enum import IntEnum
from typing import Any, Iterator, Optional, Type


class ErrorCode(IntEnum):
    """Library error codes."""

    # 1xxx - Proof verification
    ALGEBRAIC_RELATION = 1001
    DESERIALIZATION = 1002
    MULTISCALAR_MUL = 1003
    TRANSCRIPT = 1004
    PUBKEY_IS_IDENTITY = 1005

    # 2xxx - Configuration
    INVALID_CONFIG = 2001


_DEFAULT_MESSAGES = {
    ErrorCode.ALGEBRAIC_RELATION: "required algebraic relation does not hold",
    ErrorCode.DESERIALIZATION: "malformed proof",
    ErrorCode.MULTISCALAR_MUL: "multiscalar multiplication failed",
    ErrorCode.TRANSCRIPT: "transcript failed to produce a challenge",
    ErrorCode.PUBKEY_IS_IDENTITY: "public key is the identity",
    ErrorCode.INVALID_CONFIG: "invalid configuration",
}


class ZkSigmaError(Exception):
    """Base exception for all zksigma errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str = "",
        details: Optional[Any] = None
    ):
        self.code = code
        self.message = message or _DEFAULT_MESSAGES[code]
        self.details = details
        super().__init__(f"[{code.value}] {self.message}")

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict."""
        result = {
            "code": self.code.value,
            "name": self.code.name,
            "message": self.message,
        }
        if self.details is not None:
            result["details"] = self.details
        return result


# ==============================================================================
# Low-level errors
# ==============================================================================

class TranscriptError(ZkSigmaError):
    def __init__(self, message: str = "", details: Any = None):
        super().__init__(ErrorCode.TRANSCRIPT, message, details)


class DeserializationError(ZkSigmaError):
    def __init__(self, message: str = "", details: Any = None):
        super().__init__(ErrorCode.DESERIALIZATION, message, details)


class MultiscalarMulError(ZkSigmaError):
    def __init__(self, message: str = "", details: Any = None):
        super().__init__(ErrorCode.MULTISCALAR_MUL, message, details)


class ConfigError(ZkSigmaError):
    def __init__(self, message: str = "", details: Any = None):
        super().__init__(ErrorCode.INVALID_CONFIG, message, details)


# ==============================================================================
# Proof verification errors
# ==============================================================================

class SigmaProofVerificationError(ZkSigmaError):
    """
    A sigma proof was rejected.

    The code tells malformed input (DESERIALIZATION) apart from a
    well-formed proof of a false statement (ALGEBRAIC_RELATION). Callers
    that do not need the distinction treat every instance as "rejected".
    """

    proof_name = "sigma proof"

    def __init__(self, code: ErrorCode, message: str = "", details: Any = None):
        reason = message or _DEFAULT_MESSAGES[code]
        super().__init__(code, f"{self.proof_name} verification failed: {reason}", details)
        self.reason = reason

    @classmethod
    def from_error(cls, err: ZkSigmaError) -> "SigmaProofVerificationError":
        """Wrap a low-level error into this verification error type."""
        if isinstance(err, SigmaProofVerificationError):
            return cls(err.code, err.reason, err.details)
        return cls(err.code, err.message, err.details)


class EqualityProofVerificationError(SigmaProofVerificationError):
    proof_name = "equality proof"


class ZeroCiphertextProofVerificationError(SigmaProofVerificationError):
    proof_name = "zero-ciphertext proof"


@contextmanager
def verification_errors(
    error_cls: Type[SigmaProofVerificationError],
) -> Iterator[None]:
    """
    Rewrap low-level errors raised in the block as ``error_cls``.

    Errors that already have type ``error_cls`` pass through untouched.
    """
    try:
        yield
    except error_cls:
        raise
    except (TranscriptError, DeserializationError, MultiscalarMulError,
            SigmaProofVerificationError) as e:
        raise error_cls.from_error(e) from e


def check_pubkey_not_identity(
    pubkey: Any,
    error_cls: Type[SigmaProofVerificationError] = SigmaProofVerificationError,
) -> None:
    """
    Reject a public key equal to the group identity.

    The verifiers never call this: an identity key already fails the
    algebraic check. It exists for callers that want the explicit reason.
    """
    if pubkey.get_point().is_identity():
        raise error_cls(ErrorCode.PUBKEY_IS_IDENTITY)
