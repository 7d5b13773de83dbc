# Copyright (c) 2026 Signer — MIT License

"""Constant-time utilities.

These primitives eliminate data-dependent timing channels that Python's
built-in arithmetic operators (%, //) and ``==`` on bytes would otherwise
introduce.

Barrett reduction replaces variable-time division with fixed-point
multiplication and a single branchless conditional subtraction.
Branchless selection replaces if/else on secret-dependent values.
Byte-string equality goes through libsodium's ``sodium_memcmp`` (PyNaCl),
which always reads the full length.

While the CPython interpreter cannot provide hardware-level constant-time
guarantees (GC pauses, object allocation, dynamic dispatch), these helpers
remove the *algorithmic* timing channels.
"""

from nacl.bindings import sodium_memcmp

from .params import Q

# Barrett constant: floor(2^25 / 3329) = 10079.
# Verified: 10079 * 3329 = 33,552,991 < 2^25 = 33,554,432.
# Approximation error for x < q^2: x / 2^25 < 11,082,241 / 33,554,432 < 1.
_BARRETT_SHIFT = 25
_BARRETT_MULT = 10079


def ct_mod_q(x):
    """Constant-time Barrett reduction: x mod q for 0 <= x < q^2.

    Valid for inputs in [0, q^2) = [0, 11,082,241).
    """
    t = (x * _BARRETT_MULT) >> _BARRETT_SHIFT
    r = x - t * Q
    # r is in [0, 2q).  Branchless conditional subtraction:
    r_sub = r - Q
    # Python's arithmetic right-shift propagates the sign bit.
    # For r < q: r_sub < 0, so (r_sub >> 15) & 1 == 1.
    # For r >= q: r_sub >= 0, so (r_sub >> 15) & 1 == 0.
    # (Safe because |r_sub| < 2^13 < 2^15.)
    sign = (r_sub >> 15) & 1
    mask = (-sign) & 0xFFFF          # 0xFFFF when r < q, 0x0000 otherwise
    return (r & mask) | (r_sub & (mask ^ 0xFFFF))


def ct_div_q(x):
    """Constant-time floor(x / q) for 0 <= x < 2^23.

    Used by compression to replace variable-time ``//`` division by q.
    Same Barrett approximation with a +1 correction when the quotient
    is underestimated.  The bound covers d = 11 (ML-KEM-1024):
    3328 * 2^11 + 1664 < 2^23.
    """
    t = (x * _BARRETT_MULT) >> _BARRETT_SHIFT
    r = x - t * Q
    adj = r - Q
    # sign == 1 when adj < 0, meaning t is already exact.
    sign = (adj >> 15) & 1
    return t + 1 - sign


def ct_select_bytes(flag, a, b):
    """Return *a* if flag is truthy, *b* otherwise.  Constant-time.

    Expands *flag* (0/1 or bool) into a per-byte mask without any
    data-dependent branch.  Both *a* and *b* are always fully read.
    """
    f = int(bool(flag)) & 1
    # f=1 → m=0xFF (select a), f=0 → m=0x00 (select b).
    m = ((f - 1) & 0xFF) ^ 0xFF
    nm = m ^ 0xFF
    return bytes((ai & m) | (bi & nm) for ai, bi in zip(a, b))


def ct_equal(a, b):
    """Full-length constant-time byte comparison.

    Every byte of both inputs is compared whatever the position of the
    first difference.  Lengths are public and compared separately.
    """
    return sodium_memcmp(bytes(a), bytes(b))
