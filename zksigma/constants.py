"""
zksigma Constants

All protocol constants defined here for single source of truth.
"""

from typing import Final

# ==============================================================================
# GROUP PARAMETERS (edwards25519 prime-order subgroup)
# ==============================================================================

# Group order L
CURVE_ORDER: Final[int] = 2**252 + 27742317777372353535851937790883648493

POINT_SIZE: Final[int] = 32                     # Compressed point
SCALAR_SIZE: Final[int] = 32                    # Canonical scalar
WIDE_SCALAR_SIZE: Final[int] = 64               # Input to wide reduction
UNIT_LEN: Final[int] = 32                       # Wire chunk width

U64_MAX: Final[int] = 2**64 - 1

# libsodium's compressed encoding of the neutral element (x = 0, y = 1)
ED25519_IDENTITY: Final[bytes] = b"\x01" + bytes(31)

# Wire encoding of the neutral element
IDENTITY_ENCODING: Final[bytes] = bytes(POINT_SIZE)

# ==============================================================================
# GENERATORS
# ==============================================================================

# Pedersen generator H (hash-derived, nothing-up-my-sleeve)
H_GENERATOR_SEED: Final[bytes] = b"zksigma Pedersen H Generator v1"
H_GENERATOR_MAX_ATTEMPTS: Final[int] = 1024

# ==============================================================================
# TRANSCRIPT
# ==============================================================================

TRANSCRIPT_PROTOCOL_LABEL: Final[bytes] = b"zksigma-transcript-v1"
TRANSCRIPT_OP_APPEND: Final[bytes] = b"\x01"
TRANSCRIPT_OP_CHALLENGE: Final[bytes] = b"\x02"
MAX_LABEL_SIZE: Final[int] = 2**32 - 1
MAX_CHALLENGE_BYTES: Final[int] = 1024

# Domain separation tags
DOMAIN_ZERO_CIPHERTEXT: Final[bytes] = b"zero-ciphertext-proof-v1"
DOMAIN_CIPHERTEXT_COMMITMENT_EQUALITY: Final[bytes] = b"ciphertext-commitment-equality-proof-v1"
DOMAIN_CIPHERTEXT_CIPHERTEXT_EQUALITY: Final[bytes] = b"ciphertext-ciphertext-equality-proof-v1"

# Transcript labels for statement contexts
CONTEXT_LABEL_ZERO_CIPHERTEXT: Final[bytes] = b"zero-ciphertext-instruction"
CONTEXT_LABEL_CIPHERTEXT_COMMITMENT_EQUALITY: Final[bytes] = b"ciphertext-commitment-equality-instruction"
CONTEXT_LABEL_CIPHERTEXT_CIPHERTEXT_EQUALITY: Final[bytes] = b"ciphertext-ciphertext-equality-instruction"

# ==============================================================================
# WIRE SIZES
# ==============================================================================

ELGAMAL_PUBKEY_LEN: Final[int] = POINT_SIZE
ELGAMAL_SECRET_KEY_LEN: Final[int] = SCALAR_SIZE
ELGAMAL_CIPHERTEXT_LEN: Final[int] = 2 * POINT_SIZE
PEDERSEN_COMMITMENT_LEN: Final[int] = POINT_SIZE
PEDERSEN_OPENING_LEN: Final[int] = SCALAR_SIZE
DECRYPT_HANDLE_LEN: Final[int] = POINT_SIZE

ZERO_CIPHERTEXT_PROOF_LEN: Final[int] = UNIT_LEN * 3
CIPHERTEXT_COMMITMENT_EQUALITY_PROOF_LEN: Final[int] = UNIT_LEN * 6
CIPHERTEXT_CIPHERTEXT_EQUALITY_PROOF_LEN: Final[int] = UNIT_LEN * 7
