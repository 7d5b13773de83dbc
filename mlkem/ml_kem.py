# Copyright (c) 2026 Signer — MIT License

"""ML-KEM — FIPS 203 post-quantum key encapsulation mechanism.

One engine for all three security levels, parametrised by a ParameterSet:

    Level         EK      DK      CT    SS
    ML-KEM-512     800   1,632    768   32
    ML-KEM-768   1,184   2,400  1,088   32
    ML-KEM-1024  1,568   3,168  1,568   32

Operates over the polynomial ring Z_q[X]/(X^256 + 1) where q = 3329.
Assumption: Module Learning With Errors (MLWE) hardness.

Public API:
    MlKem(params, random_source).generate_keypair()  -> (ek, dk)
    MlKem(params).derive_keypair(seed)                -> (ek, dk)
    MlKem(params).encap(ek, m=None)                   -> (ct, shared_secret)
    MlKem(params).decap(ct, dk)                       -> shared_secret

Implicit rejection: decap returns J(z || ct) when the re-encryption of the
decrypted message does not reproduce ct.  The comparison reads every byte
of both ciphertexts and the result is applied through a branchless byte
selection, so both paths take the same time and decap never raises for a
ciphertext of the right length.
"""

import logging

from .codec import is_canonical_12
from .ct import ct_equal, ct_select_bytes
from .errors import InputLengthError, InvalidKeyError
from .hashes import FIPS203_HASHES
from .k_pke import k_pke_decrypt, k_pke_encrypt, k_pke_keygen
from .params import ML_KEM_768, MSG_SIZE, SEED_SIZE, get_params
from .random_source import default_random_source

logger = logging.getLogger(__name__)


# ── FIPS 203 Input Validation (§7.1 – §7.3) ──────────────────────

def ek_modulus_check(params, ek: bytes) -> bool:
    """FIPS 203 §7.2: Encapsulation key type and modulus check.

    Verifies every 12-bit coefficient in t_hat encodes a value in [0, q-1]
    by decoding and re-encoding and comparing to the original.
    """
    if len(ek) != params.ek_size:
        return False
    return is_canonical_12(ek[:params.dk_pke_size])


def dk_hash_check(params, dk: bytes, hashes=FIPS203_HASHES) -> bool:
    """FIPS 203 §7.3: Decapsulation key hash check.

    Verifies H(ek) stored inside dk matches a fresh hash of the embedded ek.
    """
    if len(dk) != params.dk_size:
        return False
    ek, h, _ = _split_dk(params, dk)
    return ct_equal(hashes.h(ek), h)


def _split_dk(params, dk):
    """dk = dk_pke || ek || h || z  ->  (ek, h, z)."""
    off = params.dk_pke_size
    ek = dk[off:off + params.ek_size]
    off += params.ek_size
    return ek, dk[off:off + 32], dk[off + 32:off + 64]


def _require_length(what, data, expected):
    if len(data) != expected:
        logger.debug("rejected %s of %d bytes (expected %d)",
                     what, len(data), expected)
        raise InputLengthError(
            f"invalid {what} length: expected {expected} bytes, got {len(data)}"
        )


# ── Internal (deterministic) algorithms ──────────────────────────

def keygen_internal(params, d, z, hashes=FIPS203_HASHES):
    """FIPS 203 Algorithm 16: ML-KEM.KeyGen_internal.

    Args:
        d: 32-byte seed for K-PKE key generation.
        z: 32-byte implicit rejection secret.

    Returns:
        (ek, dk) with dk = dk_pke || ek || H(ek) || z.
    """
    ek, dk_pke = k_pke_keygen(params, d, hashes)
    dk = dk_pke + ek + hashes.h(ek) + z

    if len(ek) != params.ek_size:
        raise RuntimeError(
            f"{params.name} EK must be {params.ek_size} bytes, got {len(ek)}")
    if len(dk) != params.dk_size:
        raise RuntimeError(
            f"{params.name} DK must be {params.dk_size} bytes, got {len(dk)}")
    return ek, dk


def encaps_internal(params, ek, m, hashes=FIPS203_HASHES):
    """FIPS 203 Algorithm 17: ML-KEM.Encaps_internal.

    Returns:
        (ct, shared_secret)
    """
    # (K, r) = G(m || H(ek))
    shared_secret, r = hashes.g(m + hashes.h(ek))
    ct = k_pke_encrypt(params, ek, m, r, hashes)

    if len(ct) != params.ct_size:
        raise RuntimeError(
            f"{params.name} ciphertext must be {params.ct_size} bytes, "
            f"got {len(ct)}")
    return ct, shared_secret


def decaps_internal(params, dk, ct, hashes=FIPS203_HASHES):
    """FIPS 203 Algorithm 18: ML-KEM.Decaps_internal.

    Never fails: returns K' when ct re-encrypts exactly, otherwise the
    implicit rejection key J(z || ct).
    """
    dk_pke = dk[:params.dk_pke_size]
    ek, h, z = _split_dk(params, dk)

    m_prime = k_pke_decrypt(params, dk_pke, ct)

    # (K', r') = G(m' || h)
    k_prime, r_prime = hashes.g(m_prime + h)

    # Implicit rejection value (always computed).
    k_bar = hashes.j(z + ct)

    ct_prime = k_pke_encrypt(params, ek, m_prime, r_prime, hashes)

    # Constant-time selection: K' if ct == ct', else K_bar.
    flag = ct_equal(ct, ct_prime)
    return ct_select_bytes(flag, k_prime, k_bar)


# ── Public API ───────────────────────────────────────────────────

class MlKem:
    """ML-KEM at one security level.

    Holds only configuration (parameter set, random source, hash suite);
    no key material or other state is retained between calls.
    """

    def __init__(self, params=ML_KEM_768, random_source=None,
                 hashes=FIPS203_HASHES):
        self.params = get_params(params)
        if random_source is None:
            random_source = default_random_source()
        self.random_source = random_source
        self.hashes = hashes

    def __repr__(self):
        return f"MlKem({self.params.name})"

    @property
    def ek_size(self):
        return self.params.ek_size

    @property
    def dk_size(self):
        return self.params.dk_size

    @property
    def ct_size(self):
        return self.params.ct_size

    @property
    def ss_size(self):
        return self.params.ss_size

    def generate_keypair(self):
        """FIPS 203 Algorithm 19: ML-KEM.KeyGen with fresh randomness.

        Draws d then z (32 bytes each) from the random source.
        """
        d = self.random_source.random_bytes(32)
        z = self.random_source.random_bytes(32)
        return keygen_internal(self.params, d, z, self.hashes)

    def derive_keypair(self, seed):
        """Deterministic key generation from a 64-byte seed d || z.

        Identical seeds always yield byte-identical (ek, dk).
        """
        _require_length("seed", seed, SEED_SIZE)
        seed = bytes(seed)
        return keygen_internal(self.params, seed[:32], seed[32:], self.hashes)

    def encap(self, ek, m=None):
        """FIPS 203 Algorithm 20: ML-KEM.Encaps.

        Args:
            ek: Encapsulation key.
            m: Optional 32-byte message, for reproducible tests.  Drawn
               from the random source when omitted.

        Returns:
            (ct, shared_secret)

        Raises:
            InputLengthError: If ek or m has the wrong length.
            InvalidKeyError: If ek fails the FIPS 203 modulus check.
        """
        _require_length("encapsulation key", ek, self.params.ek_size)
        ek = bytes(ek)
        if not ek_modulus_check(self.params, ek):
            logger.debug("%s: encapsulation key failed modulus check",
                         self.params.name)
            raise InvalidKeyError("invalid encapsulation key")

        if m is None:
            m = self.random_source.random_bytes(MSG_SIZE)
        _require_length("message", m, MSG_SIZE)
        return encaps_internal(self.params, ek, bytes(m), self.hashes)

    def decap(self, ct, dk):
        """FIPS 203 Algorithm 21: ML-KEM.Decaps.

        Total for any ciphertext of the correct length: an invalid
        ciphertext yields the implicit rejection key, never an exception.
        dk is trusted as locally generated; only its length is checked
        (``dk_hash_check`` is available to callers who want more).

        Raises:
            InputLengthError: If ct or dk has the wrong length.
        """
        _require_length("ciphertext", ct, self.params.ct_size)
        _require_length("decapsulation key", dk, self.params.dk_size)
        return decaps_internal(self.params, bytes(dk), bytes(ct), self.hashes)
