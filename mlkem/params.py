# Copyright (c) 2026 Signer — MIT License

"""ML-KEM parameter sets (FIPS 203 Table 2).

    Level         k   eta1  eta2  du  dv    EK     DK     CT
    ML-KEM-512    2   3     2     10  4     800   1632    768
    ML-KEM-768    3   2     2     10  4    1184   2400   1088
    ML-KEM-1024   4   2     2     11  5    1568   3168   1568
"""

from typing import NamedTuple

N = 256                # Polynomial degree
Q = 3329               # Prime modulus
SS_SIZE = 32           # Shared secret length
SEED_SIZE = 64         # d || z
MSG_SIZE = 32          # Encapsulation randomness m


class ParameterSet(NamedTuple):
    name: str
    k: int
    eta1: int
    eta2: int
    du: int
    dv: int

    @property
    def n(self):
        return N

    @property
    def q(self):
        return Q

    @property
    def dk_pke_size(self):
        return 384 * self.k

    @property
    def ek_size(self):
        return 384 * self.k + 32

    @property
    def dk_size(self):
        # dk_pke || ek || H(ek) || z
        return 768 * self.k + 96

    @property
    def c1_size(self):
        return 32 * self.du * self.k

    @property
    def c2_size(self):
        return 32 * self.dv

    @property
    def ct_size(self):
        return self.c1_size + self.c2_size

    @property
    def ss_size(self):
        return SS_SIZE


ML_KEM_512 = ParameterSet("ML-KEM-512", k=2, eta1=3, eta2=2, du=10, dv=4)
ML_KEM_768 = ParameterSet("ML-KEM-768", k=3, eta1=2, eta2=2, du=10, dv=4)
ML_KEM_1024 = ParameterSet("ML-KEM-1024", k=4, eta1=2, eta2=2, du=11, dv=5)

PARAMETER_SETS = {
    512: ML_KEM_512,
    768: ML_KEM_768,
    1024: ML_KEM_1024,
}


def get_params(level):
    """Look up a parameter set by level.

    Accepts a ParameterSet, an int (512 / 768 / 1024), or a name such as
    "768", "ML-KEM-768" or "mlkem768".
    """
    if isinstance(level, ParameterSet):
        return level
    key = level
    if isinstance(level, str):
        digits = level.upper().replace("ML-KEM-", "").replace("MLKEM", "").strip()
        if not digits.isdigit():
            raise ValueError(f"Unknown ML-KEM parameter set: {level!r}")
        key = int(digits)
    try:
        return PARAMETER_SETS[key]
    except (KeyError, TypeError):
        raise ValueError(f"Unknown ML-KEM parameter set: {level!r}") from None
