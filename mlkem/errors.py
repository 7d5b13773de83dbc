# Copyright (c) 2026 Signer — MIT License

"""ML-KEM error kinds.

Both are raised before any cryptographic computation starts.  They derive
from ``ValueError`` so callers that catch ``ValueError`` keep working.
"""


class MlKemError(ValueError):
    """Base class for all ML-KEM input errors."""


class InputLengthError(MlKemError):
    """A seed, key, message or ciphertext has the wrong length for the level."""


class InvalidKeyError(MlKemError):
    """A key failed a FIPS 203 §7 input check (modulus check / hash check)."""
