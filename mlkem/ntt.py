# Copyright (c) 2026 Signer — MIT License

"""Arithmetic in R_q = Z_q[X]/(X^256 + 1) and its NTT (FIPS 203 Section 4.3).

Polynomials are plain lists of 256 ints in [0, q).  Every reduction goes
through the constant-time Barrett helpers in ``ct``.
"""

from .ct import ct_mod_q
from .params import N, Q


# ── NTT Constants ────────────────────────────────────────────────

def _bitrev7(n):
    """Reverse the lower 7 bits of an integer."""
    r = 0
    for _ in range(7):
        r = (r << 1) | (n & 1)
        n >>= 1
    return r


# 17 is a primitive 256th root of unity mod 3329:
# 17^128 ≡ -1 (mod 3329) and 17^256 ≡ 1 (mod 3329).
# Note: there is no primitive 512th root of unity in Z_q for q = 3329.
ROOT = 17

# Precompute 128 zetas in bit-reversed order (FIPS 203 Section 4.3).
ZETAS = [pow(ROOT, _bitrev7(i), Q) for i in range(128)]

# gamma_i = zeta^(2*BitRev7(i) + 1) for the 128 degree-1 factors X^2 - gamma_i.
GAMMAS = [pow(ROOT, 2 * _bitrev7(i) + 1, Q) for i in range(128)]

# Multiplicative inverse of 128 mod q (for inverse NTT scaling).
# 128 * 3303 = 422784 = 127 * 3329 + 1 ≡ 1 (mod 3329).
N_INV = 3303


def zero_poly():
    return [0] * N


# ── Transform ────────────────────────────────────────────────────

def ntt(f):
    """FIPS 203 Algorithm 9: polynomial -> NTT domain. Works on a copy."""
    a = list(f)
    k = 1
    length = 128
    while length >= 2:
        start = 0
        while start < N:
            zeta = ZETAS[k]
            k += 1
            for j in range(start, start + length):
                t = ct_mod_q(zeta * a[j + length])
                a[j + length] = ct_mod_q(a[j] + Q - t)
                a[j] = ct_mod_q(a[j] + t)
            start += 2 * length
        length >>= 1
    return a


def ntt_inv(f):
    """FIPS 203 Algorithm 10: NTT domain -> polynomial. Works on a copy."""
    a = list(f)
    k = 127
    length = 2
    while length <= 128:
        start = 0
        while start < N:
            zeta = ZETAS[k]
            k -= 1
            for j in range(start, start + length):
                t = a[j]
                a[j] = ct_mod_q(t + a[j + length])
                a[j + length] = ct_mod_q(
                    zeta * ct_mod_q(a[j + length] + Q - t)
                )
            start += 2 * length
        length <<= 1
    return [ct_mod_q(x * N_INV) for x in a]


# ── Multiplication in the NTT domain ─────────────────────────────

def base_case_multiply(a0, a1, b0, b1, gamma):
    """Multiply two degree-1 polynomials modulo (X^2 - gamma).

    FIPS 203 Algorithm 12: BaseCaseMultiply.
    (a0 + a1*X)(b0 + b1*X) mod (X^2 - gamma) =
        (a0*b0 + a1*b1*gamma) + (a0*b1 + a1*b0)*X

    Intermediate products are reduced via Barrett reduction to keep
    operands bounded below q^2 at each multiplication step.
    """
    c0 = ct_mod_q(
        ct_mod_q(a0 * b0)
        + ct_mod_q(ct_mod_q(a1 * b1) * gamma)
    )
    c1 = ct_mod_q(ct_mod_q(a0 * b1) + ct_mod_q(a1 * b0))
    return c0, c1


def multiply_ntts(f, g):
    """FIPS 203 Algorithm 11: MultiplyNTTs.

    The NTT domain consists of 128 independent pairs, pair i living in
    Z_q[X]/(X^2 - gamma_i).
    """
    h = [0] * N
    for i in range(128):
        h[2*i], h[2*i+1] = base_case_multiply(
            f[2*i], f[2*i+1], g[2*i], g[2*i+1], GAMMAS[i])
    return h


def poly_add(a, b):
    return [ct_mod_q(a[i] + b[i]) for i in range(N)]


def poly_sub(a, b):
    # Add Q before subtracting to keep the value non-negative for Barrett.
    return [ct_mod_q(a[i] + Q - b[i]) for i in range(N)]


# ── Vectors and matrices (lists of NTT-domain polynomials) ───────

def vector_ntt(v):
    return [ntt(p) for p in v]


def vector_ntt_inv(v):
    return [ntt_inv(p) for p in v]


def vector_add(a, b):
    return [poly_add(x, y) for x, y in zip(a, b)]


def inner_product_ntt(a, b):
    """sum_i a[i] * b[i], all operands in the NTT domain."""
    acc = zero_poly()
    for x, y in zip(a, b):
        acc = poly_add(acc, multiply_ntts(x, y))
    return acc


def matrix_vector_ntt(m, v):
    """Row-by-row product m * v in the NTT domain."""
    return [inner_product_ntt(row, v) for row in m]
