# Copyright (c) 2026 Signer — MIT License

"""Random byte sources injected into key generation and encapsulation.

The engine never reaches for a global RNG: production code binds
``SystemRandomSource`` and tests bind ``DeterministicRandomSource``.
"""

import hashlib
import os

from .hashes import ShakeStream


class RandomSource:
    """Capability producing random bytes."""

    def random_bytes(self, n):
        raise NotImplementedError


class SystemRandomSource(RandomSource):
    """Operating-system CSPRNG (``os.urandom``)."""

    def random_bytes(self, n):
        return os.urandom(n)


class DeterministicRandomSource(RandomSource):
    """Seed-expanding generator: SHAKE-128(seed) read sequentially.

    With the default empty seed this is the RNG of the pq-crystals
    accumulated test vectors (SHAKE-128 with no input).  Never use it
    outside tests.
    """

    def __init__(self, seed=b""):
        self._stream = ShakeStream(hashlib.shake_128(bytes(seed)))

    def random_bytes(self, n):
        return self._stream.read(n)


def default_random_source():
    return SystemRandomSource()
