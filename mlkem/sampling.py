# Copyright (c) 2026 Signer — MIT License

"""Sampling algorithms (FIPS 203 Section 4.2.2).

SampleNTT draws a uniform NTT-domain polynomial from an XOF by rejection;
SamplePolyCBD draws small noise from a centered binomial distribution.
"""

import logging

from .ct import ct_mod_q
from .hashes import FIPS203_HASHES, SHAKE128_RATE
from .params import N, Q

logger = logging.getLogger(__name__)

# SampleNTT consumes one XOF block (56 three-byte groups) at a time.
_BLOCK_SIZE = SHAKE128_RATE
# Three blocks are enough for 256 coefficients with overwhelming probability.
_TYPICAL_BLOCKS = 3


def sample_ntt(stream):
    """FIPS 203 Algorithm 7: SampleNTT.

    *stream* is any object with ``read(n) -> bytes`` (an XOF instance).
    Each 3-byte group yields two 12-bit candidates; candidates >= q are
    discarded.  Blocks are read until exactly 256 coefficients have been
    accepted, with no iteration cap.

    Timing note: rejection sampling operates on *public* randomness (rho is
    part of the encapsulation key), so data-dependent loop counts do not
    leak secret information.
    """
    coeffs = []
    blocks = 0
    while len(coeffs) < N:
        buf = stream.read(_BLOCK_SIZE)
        blocks += 1
        for pos in range(0, _BLOCK_SIZE, 3):
            d1 = buf[pos] | ((buf[pos + 1] & 0x0f) << 8)
            d2 = (buf[pos + 1] >> 4) | (buf[pos + 2] << 4)
            if d1 < Q and len(coeffs) < N:
                coeffs.append(d1)
            if d2 < Q and len(coeffs) < N:
                coeffs.append(d2)
    if blocks > _TYPICAL_BLOCKS:
        logger.debug("SampleNTT needed %d XOF blocks", blocks)
    return coeffs


def sample_cbd(data, eta):
    """FIPS 203 Algorithm 8: SamplePolyCBD_eta. Centered binomial distribution.

    Each coefficient = (b_0 + ... + b_{eta-1}) - (b_eta + ... + b_{2eta-1})
    over consecutive bits of *data* (64 * eta bytes).

    Uses popcount over 2*eta-bit chunks rather than expanding into a per-bit
    list.  The subtraction is offset by +q to keep the value non-negative for
    constant-time Barrett reduction.
    """
    if len(data) != 64 * eta:
        raise ValueError(
            f"SamplePolyCBD_{eta}: expected {64 * eta} bytes, got {len(data)}"
        )
    stream = int.from_bytes(data, "little")
    bits_per_coeff = 2 * eta
    chunk_mask = (1 << bits_per_coeff) - 1
    half_mask = (1 << eta) - 1

    f = []
    for _ in range(N):
        chunk = stream & chunk_mask
        stream >>= bits_per_coeff
        a_sum = (chunk & half_mask).bit_count()
        b_sum = (chunk >> eta).bit_count()
        f.append(ct_mod_q(a_sum + Q - b_sum))
    return f


def generate_matrix(rho, k, transpose=False, hashes=FIPS203_HASHES):
    """Expand rho into the k x k NTT-domain matrix A_hat (or its transpose).

    A_hat[i][j] = SampleNTT(XOF(rho, j, i)).
    """
    a_hat = [[None] * k for _ in range(k)]
    for i in range(k):
        for j in range(k):
            if transpose:
                a_hat[i][j] = sample_ntt(hashes.xof(rho, i, j))
            else:
                a_hat[i][j] = sample_ntt(hashes.xof(rho, j, i))
    return a_hat


def sample_noise_vector(seed, eta, k, counter, hashes=FIPS203_HASHES):
    """Sample k CBD polynomials with PRF counters counter .. counter+k-1.

    Returns the vector and the next unused counter.
    """
    vec = []
    for _ in range(k):
        vec.append(sample_cbd(hashes.prf(eta, seed, counter), eta))
        counter += 1
    return vec, counter
