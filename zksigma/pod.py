"""
zksigma Text Encoding

Base64 wrappers for anything with to_bytes()/from_bytes(): keys,
ciphertexts, commitments, proofs and proof data.
"""

import base64
import binascii
from typing import Type, TypeVar

from zksigma.errors import DeserializationError

T = TypeVar("T")


def to_base64(obj) -> str:
    return base64.b64encode(obj.to_bytes()).decode("ascii")


def from_base64(cls: Type[T], text: str) -> T:
    """
    Decode ``text`` and hand the bytes to ``cls.from_bytes``.

    Raises:
        DeserializationError: text is not strict base64
    """
    try:
        data = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DeserializationError(f"invalid base64: {e}") from e
    return cls.from_bytes(data)
