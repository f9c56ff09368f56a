"""
zksigma Cryptographic Primitives

Group arithmetic, Fiat-Shamir transcript and the canonical proof codec.
"""

from zksigma.crypto.group import (
    Scalar,
    GroupElement,
    multiscalar_mul,
    vartime_multiscalar_mul,
    zeroizing,
)
from zksigma.crypto.transcript import Transcript

__all__ = [
    "Scalar",
    "GroupElement",
    "multiscalar_mul",
    "vartime_multiscalar_mul",
    "zeroizing",
    "Transcript",
]
