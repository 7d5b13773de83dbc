# Copyright (c) 2026 Signer — MIT License

"""Byte encoding and compression (FIPS 203 Section 4.2.1)."""

from .ct import ct_div_q, ct_equal, ct_mod_q
from .params import N, Q


# ── Byte encoding / decoding ────────────────────────────────────

def byte_encode(f, d):
    """FIPS 203 Algorithm 5: ByteEncode_d.

    Encode 256 integers into a byte string, least-significant bit first.
    For d < 12 the coefficients are masked to d bits (constant-time); for
    d = 12 they are reduced mod q via Barrett reduction.

    Uses an integer bit-accumulator instead of materialising a bit list.
    """
    mask = (1 << d) - 1
    acc = 0
    bit_pos = 0
    for coeff in f:
        # Branch on d (public parameter, not secret data).
        val = ct_mod_q(coeff) if d == 12 else (coeff & mask)
        acc |= val << bit_pos
        bit_pos += d
    return acc.to_bytes(32 * d, "little")


def byte_decode(data, d):
    """FIPS 203 Algorithm 6: ByteDecode_d.

    Decode a byte string into 256 integers.  For d < 12 the values are
    masked to d bits; for d = 12 they are reduced mod q so every decoded
    coefficient lies in [0, q).  Whether the input was canonical is checked
    separately by ``is_canonical_12``.
    """
    expected = 32 * d
    if len(data) != expected:
        raise ValueError(
            f"ByteDecode_{d}: expected {expected} bytes, got {len(data)}"
        )
    mask = (1 << d) - 1
    acc = int.from_bytes(data, "little")
    f = []
    for _ in range(N):
        raw = acc & mask
        f.append(ct_mod_q(raw) if d == 12 else raw)
        acc >>= d
    return f


def is_canonical_12(data):
    """True when every 12-bit field of *data* is < q.

    Decodes and re-encodes each 384-byte polynomial and compares with the
    input in constant time; a field >= q is reduced on decode and therefore
    re-encodes to different bytes.
    """
    if len(data) % 384:
        return False
    canonical = b"".join(
        byte_encode(byte_decode(data[i:i + 384], 12), 12)
        for i in range(0, len(data), 384)
    )
    return ct_equal(canonical, data)


def encode_vector(v, d):
    return b"".join(byte_encode(p, d) for p in v)


def decode_vector(data, k, d):
    size = 32 * d
    if len(data) != size * k:
        raise ValueError(
            f"ByteDecode_{d}: expected {size * k} bytes, got {len(data)}"
        )
    return [byte_decode(data[size * i:size * (i + 1)], d) for i in range(k)]


# ── Compression / decompression ──────────────────────────────────

def compress(x, d):
    """Compress_d: round(2^d / q * x) mod 2^d.  Constant-time.

    Uses Barrett division (ct_div_q) instead of Python's variable-time
    ``//`` operator.  The final mod 2^d is a constant-time bit-mask.
    """
    m = 1 << d
    numerator = x * m + (Q >> 1)
    return ct_div_q(numerator) & (m - 1)


def decompress(y, d):
    """Decompress_d: round(q / 2^d * y).

    Division by 2^d is a constant-time right-shift.
    """
    m = 1 << d
    return (y * Q + (m >> 1)) >> d


def compress_poly(f, d):
    return [compress(c, d) for c in f]


def decompress_poly(f, d):
    return [decompress(c, d) for c in f]
