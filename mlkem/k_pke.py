# Copyright (c) 2026 Signer — MIT License

"""K-PKE — the deterministic public-key encryption scheme under ML-KEM.

FIPS 203 Section 5.  Not IND-CCA secure on its own; only ``ml_kem`` should
call it.
"""

from .codec import (
    byte_decode, byte_encode, compress_poly, decode_vector,
    decompress_poly, encode_vector,
)
from .hashes import FIPS203_HASHES
from .ntt import (
    inner_product_ntt, matrix_vector_ntt, ntt_inv, poly_add, poly_sub,
    vector_add, vector_ntt, vector_ntt_inv,
)
from .sampling import generate_matrix, sample_cbd, sample_noise_vector


def k_pke_keygen(params, d, hashes=FIPS203_HASHES):
    """FIPS 203 Algorithm 13: K-PKE.KeyGen.

    Args:
        params: ParameterSet.
        d: 32-byte seed.

    Returns:
        (ek_pke, dk_pke): Encryption key and decryption key bytes.
    """
    k = params.k
    rho, sigma = hashes.g(d + bytes([k]))

    a_hat = generate_matrix(rho, k, hashes=hashes)

    # s uses PRF counters 0..k-1, e uses k..2k-1
    s, counter = sample_noise_vector(sigma, params.eta1, k, 0, hashes)
    e, _ = sample_noise_vector(sigma, params.eta1, k, counter, hashes)
    s_hat = vector_ntt(s)
    e_hat = vector_ntt(e)

    # t_hat = A_hat * s_hat + e_hat (all in NTT domain)
    t_hat = vector_add(matrix_vector_ntt(a_hat, s_hat), e_hat)

    ek_pke = encode_vector(t_hat, 12) + rho
    dk_pke = encode_vector(s_hat, 12)
    return ek_pke, dk_pke


def k_pke_encrypt(params, ek_pke, m, r, hashes=FIPS203_HASHES):
    """FIPS 203 Algorithm 14: K-PKE.Encrypt.

    Args:
        params: ParameterSet.
        ek_pke: Encryption key bytes.
        m: 32-byte message.
        r: 32-byte randomness.

    Returns:
        ct: Ciphertext bytes, c1 = Compress_du(u) || c2 = Compress_dv(v).
    """
    k = params.k
    t_hat = decode_vector(ek_pke[:384 * k], k, 12)
    rho = ek_pke[384 * k:]

    a_hat_t = generate_matrix(rho, k, transpose=True, hashes=hashes)

    # y uses counters 0..k-1, e1 uses k..2k-1, e2 uses 2k
    y, counter = sample_noise_vector(r, params.eta1, k, 0, hashes)
    e1, counter = sample_noise_vector(r, params.eta2, k, counter, hashes)
    e2 = sample_cbd(hashes.prf(params.eta2, r, counter), params.eta2)
    y_hat = vector_ntt(y)

    # u = NTT^-1(A_hat^T * y_hat) + e1
    u = vector_add(vector_ntt_inv(matrix_vector_ntt(a_hat_t, y_hat)), e1)

    # v = NTT^-1(t_hat . y_hat) + e2 + Decompress_1(m)
    mu = decompress_poly(byte_decode(m, 1), 1)
    v = poly_add(poly_add(ntt_inv(inner_product_ntt(t_hat, y_hat)), e2), mu)

    c1 = encode_vector([compress_poly(p, params.du) for p in u], params.du)
    c2 = byte_encode(compress_poly(v, params.dv), params.dv)
    return c1 + c2


def k_pke_decrypt(params, dk_pke, ct):
    """FIPS 203 Algorithm 15: K-PKE.Decrypt.

    Deterministic and total: every ciphertext of the right length decrypts
    to some 32-byte message.
    """
    k = params.k
    c1 = ct[:params.c1_size]
    c2 = ct[params.c1_size:]

    u = [decompress_poly(p, params.du) for p in decode_vector(c1, k, params.du)]
    v = decompress_poly(byte_decode(c2, params.dv), params.dv)
    s_hat = decode_vector(dk_pke, k, 12)

    # w = v - NTT^-1(s_hat . NTT(u))
    w = poly_sub(v, ntt_inv(inner_product_ntt(s_hat, vector_ntt(u))))
    return byte_encode(compress_poly(w, 1), 1)
