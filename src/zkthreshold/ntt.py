"""
Stockham NTT algorithm
which is much faster than recursive NTT with divide-and-conquer
Source: https://github.com/pdroalves/fft_ntt_comparison/blob/master/stockham/stockham_ntt.py
"""

from .constant import BN254_SCALAR_GENERATOR
from .utils import is_power_of_two

_omega_cache = {}


def get_primitive_root(n, p, generator=BN254_SCALAR_GENERATOR):
    """Return primitive `n`-th root of unity over Fp"""
    assert (p - 1) % n == 0, f"Domain of size {n} is not supported by the field"

    omega = pow(generator, (p - 1) // n, p)

    assert pow(omega, n, p) == 1
    assert n == 1 or pow(omega, n // 2, p) != 1, "Root of unity is not primitive"

    return omega


def build_omega(n, p):
    """Return powers of the `n`-th root of unity and of its inverse"""
    if (n, p) in _omega_cache:
        return _omega_cache[(n, p)]

    omega = get_primitive_root(n, p)
    omega_inv = pow(omega, -1, p)

    w = [1] * n
    w_inv = [1] * n
    for j in range(1, n):
        w[j] = w[j - 1] * omega % p
        w_inv[j] = w_inv[j - 1] * omega_inv % p

    _omega_cache[(n, p)] = (w, w_inv)
    return w, w_inv


def ntt(data, p):
    """Evaluate polynomial with coefficients `data` over the domain of size `len(data)`"""
    w, _ = build_omega(len(data), p)
    return _stockham(data, w, p)


def intt(data, p):
    """Interpolate evaluations `data` over the domain of size `len(data)` into coefficients"""
    n = len(data)
    _, w_inv = build_omega(n, p)

    ninv = pow(n, -1, p)
    return [ninv * v % p for v in _stockham(data, w_inv, p)]


def _stockham(data, w, p):
    N = len(data)
    assert N > 0 and is_power_of_two(N)

    R = 2
    Ns = 1
    a = [x % p for x in data]
    b = [0] * N
    while Ns < N:
        for j in range(N // R):
            _iteration(j, N, R, Ns, a, b, w, p)
        a, b = b, a
        Ns = Ns * R

    return a


def _iteration(j, N, R, Ns, data0, data1, w, p):
    w_index = ((j % Ns) * N) // (Ns * R)

    u = data0[j]
    v = data0[j + N // R] * w[w_index] % p

    idx = (j // Ns) * Ns * R + (j % Ns)
    data1[idx] = (u + v) % p
    data1[idx + Ns] = (u - v) % p
