import pytest

from zkthreshold.array import SparseArray
from zkthreshold.constant import BN254_SCALAR_FIELD
from zkthreshold.ntt import build_omega, get_primitive_root, intt, ntt
from zkthreshold.polynomial import (
    PolynomialRing,
    evaluate_lagrange_coefficients,
    evaluate_vanishing_polynomial,
    vanishing_polynomial,
)

p = BN254_SCALAR_FIELD


def test_univariate_polynomial():

    a = PolynomialRing([1, 2, 3], p)
    b = PolynomialRing([2, 3, 4], p)

    assert (a + b).coeffs() == [3, 5, 7]
    assert (b - a).coeffs() == [1, 1, 1]
    assert (a * b).coeffs() == [2, 7, 16, 17, 12]
    assert (a * 2).coeffs() == [2, 4, 6]
    assert (-a).coeffs() == [p - 1, p - 2, p - 3]

    q, r = (a * b) / a
    assert q.coeffs() == b.coeffs()
    assert r.is_zero()

    assert a(2) == (1 + 2 * 2 + 2**2 * 3) % p
    assert b(2) == (2 + 2 * 3 + 2**2 * 4) % p

    assert PolynomialRing([], p).is_zero()
    assert PolynomialRing([], p).coeffs() == [0]
    assert a.degree() == 2


def test_ntt():
    for n in (1, 2, 4, 8, 16):
        coeffs = [(i * 7 + 3) % p for i in range(n)]
        evals = ntt(coeffs, p)

        w, _ = build_omega(n, p)
        poly = PolynomialRing(coeffs, p)
        assert evals == [poly(x) for x in w]

        assert intt(evals, p) == coeffs


def test_primitive_root():
    omega = get_primitive_root(8, p)
    assert pow(omega, 8, p) == 1
    assert pow(omega, 4, p) != 1


def test_interpolation_and_vanishing_polynomial():
    evals = [5, 0, 7, 1]
    poly = PolynomialRing.from_evaluations(evals, p)

    w, _ = build_omega(4, p)
    assert [poly(x) for x in w] == evals

    z = vanishing_polynomial(4, p)
    assert all(z(x) == 0 for x in w)
    assert z(3) == evaluate_vanishing_polynomial(4, 3, p) == (3**4 - 1) % p

    q, r = (poly * z).divide_by_vanishing_poly(4)
    assert q.coeffs() == poly.coeffs()
    assert r.is_zero()

    _, r = poly.divide_by_vanishing_poly(2)
    assert not r.is_zero()


def test_lagrange_coefficients():
    n = 8
    x = 123456789
    evals = [3, 1, 4, 1, 5, 9, 2, 6]

    coeffs = evaluate_lagrange_coefficients(n, x, p)
    poly = PolynomialRing.from_evaluations(evals, p)

    assert sum(c * e for c, e in zip(coeffs, evals)) % p == poly(x)

    # x inside the domain selects the matching basis polynomial
    w, _ = build_omega(n, p)
    assert evaluate_lagrange_coefficients(n, w[3], p) == [0, 0, 0, 1, 0, 0, 0, 0]


def test_sparse_array():
    m = SparseArray([[(0, 1), (2, 3)], [(1, p - 1)], []], 3, 3, p)

    assert m.dot([1, 2, 3]) == [10, p - 2, 0]
    assert m.column_dot([1, 1, 5]) == [1, p - 1, 3]

    m.append_row(2, [(0, 4), (1, 0)])
    assert m.dot([1, 2, 3]) == [10, p - 2, 4]
    assert len(m.triplets) == 4

    with pytest.raises(AssertionError):
        m.append_row(3, [(0, 1)])
