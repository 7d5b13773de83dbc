# Copyright (c) 2026 Signer — MIT License

"""ML-KEM (FIPS 203) — pure-Python module-lattice key encapsulation.

Security levels:
    ML-KEM-512   (FIPS 203) — NIST Level 1.
    ML-KEM-768   (FIPS 203) — NIST Level 3.
    ML-KEM-1024  (FIPS 203) — NIST Level 5.

Usage:
    kem = MlKem(ML_KEM_768)
    ek, dk = kem.generate_keypair()
    ct, ss_sender = kem.encap(ek)
    ss_receiver = kem.decap(ct, dk)

Randomness is injected through a RandomSource; SystemRandomSource is the
default and DeterministicRandomSource exists for reproducible tests.
"""

from .errors import MlKemError, InputLengthError, InvalidKeyError
from .params import (
    ParameterSet, ML_KEM_512, ML_KEM_768, ML_KEM_1024, PARAMETER_SETS,
    get_params,
)
from .random_source import (
    RandomSource, SystemRandomSource, DeterministicRandomSource,
)
from .hashes import HashSuite, FIPS203_HASHES
from .ct import ct_equal
from .ml_kem import (
    MlKem, keygen_internal, encaps_internal, decaps_internal,
    ek_modulus_check, dk_hash_check,
)

__all__ = [
    # Errors
    "MlKemError", "InputLengthError", "InvalidKeyError",
    # Parameters
    "ParameterSet", "ML_KEM_512", "ML_KEM_768", "ML_KEM_1024",
    "PARAMETER_SETS", "get_params",
    # Collaborators
    "RandomSource", "SystemRandomSource", "DeterministicRandomSource",
    "HashSuite", "FIPS203_HASHES", "ct_equal",
    # KEM
    "MlKem", "keygen_internal", "encaps_internal", "decaps_internal",
    "ek_modulus_check", "dk_hash_check",
]
