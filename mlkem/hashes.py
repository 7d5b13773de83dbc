# Copyright (c) 2026 Signer — MIT License

"""Symmetric primitives used by ML-KEM (FIPS 203 Section 4.1).

    H(s)        = SHA3-256(s)
    G(c)        = SHA3-512(c) split into two 32-byte halves
    J(s)        = SHAKE-256(s, 32)
    PRF_eta(s, b) = SHAKE-256(s || b, 64 * eta)
    XOF(rho, i, j) = SHAKE-128(rho || i || j), read as a stream

The engine only relies on the input/output contract of these functions, so
a different ``HashSuite`` can be injected (tests use this to feed the
uniform sampler pathological streams).
"""

import hashlib


# SHAKE-128 rate in bytes; one "block" of XOF output.
SHAKE128_RATE = 168


class ShakeStream:
    """Sequential reader over a SHAKE output stream.

    hashlib's SHAKE objects only expose ``digest(length)``, which recomputes
    from the start.  The buffer is regrown by doubling so reading an
    arbitrarily long stream stays amortised linear.
    """

    def __init__(self, shake, initial=SHAKE128_RATE * 5):
        self._shake = shake
        self._buf = shake.digest(initial)
        self._pos = 0

    def read(self, length):
        end = self._pos + length
        if end > len(self._buf):
            self._buf = self._shake.digest(max(end, 2 * len(self._buf)))
        out = self._buf[self._pos:end]
        self._pos = end
        return out

    @property
    def position(self):
        return self._pos


class HashSuite:
    """FIPS 203 hash functions backed by hashlib SHA-3 / SHAKE."""

    def h(self, data):
        return hashlib.sha3_256(data).digest()

    def g(self, data):
        out = hashlib.sha3_512(data).digest()
        return out[:32], out[32:]

    def j(self, data):
        return hashlib.shake_256(data).digest(32)

    def prf(self, eta, seed, b):
        return hashlib.shake_256(seed + bytes([b])).digest(64 * eta)

    def xof(self, rho, i, j):
        return ShakeStream(hashlib.shake_128(rho + bytes([i, j])))


FIPS203_HASHES = HashSuite()
