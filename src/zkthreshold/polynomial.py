# pylint: disable=no-name-in-module
from flint import (
    fmpz_mod_poly,
    fmpz_mod_poly_ctx,
    fmpz_mod_ctx,
)

from .ntt import build_omega, intt
from .utils import batch_modinv


class PolynomialRing:
    def __init__(self, arg, p):
        """
        Initialize the polynomial with coefficients.

        coeffs: List of coefficients, where coeffs[i] is the coefficient of x^i.
        p: Prime number representing the finite field.
        """
        self.p = int(p)
        self.fmpz_p = fmpz_mod_ctx(self.p)

        if isinstance(arg, fmpz_mod_poly):
            self.poly = arg
        elif isinstance(arg, (list, tuple)):
            self.poly = fmpz_mod_poly_ctx(self.fmpz_p)([int(c) % self.p for c in arg])
        else:
            raise TypeError(f"Invalid polynomial argument: {type(arg)}")

    def coeffs(self):
        """Return the list of coefficents of the polynomial."""
        coeffs = self.poly.coeffs() or [0]
        return [int(x) for x in coeffs]

    def degree(self):
        """Return the degree of the polynomial."""
        return len(self.coeffs()) - 1

    def is_zero(self):
        """Return the boolean whether the polynomial is equal to zero"""
        return self.poly.is_zero()

    def __bool__(self):
        return not self.is_zero()

    def __str__(self):
        return str(self.poly)

    def __repr__(self):
        return self.__str__()

    def __add__(self, other):
        return PolynomialRing(self.poly + other.poly, self.p)

    def __neg__(self):
        return PolynomialRing(-self.poly, self.p)

    def __sub__(self, other):
        return PolynomialRing(self.poly - other.poly, self.p)

    def __mul__(self, other):
        if isinstance(other, PolynomialRing):
            return PolynomialRing(self.poly * other.poly, self.p)
        elif isinstance(other, int):
            return PolynomialRing(self.poly * other, self.p)
        raise TypeError(f"Invalid operand: {type(other)}")

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        """
        Divide two polynomials.
        Return quotient and remainder
        """
        if other.is_zero():
            raise ZeroDivisionError("Division by zero")

        q, r = divmod(self.poly, other.poly)
        return PolynomialRing(q, self.p), PolynomialRing(r, self.p)

    def divide_by_vanishing_poly(self, domain: int):
        """Divide by `x^domain - 1`, return quotient and remainder"""
        return self / vanishing_polynomial(domain, self.p)

    def __call__(self, point: int) -> int:
        if isinstance(point, int):
            return int(self.poly(point))
        raise TypeError(f"Invalid argument: {point}")

    @classmethod
    def from_evaluations(cls, evals: list, p: int):
        """Interpolate evaluations over the roots-of-unity domain of size `len(evals)`"""
        return cls(intt(evals, p), p)


def vanishing_polynomial(domain: int, p: int):
    """Generate polynomial `Z = x^n - 1` vanishing on the `n`-th roots of unity"""
    return PolynomialRing([-1] + [0] * (domain - 1) + [1], p)


def evaluate_vanishing_polynomial(domain, x, p):
    """
    Evaluate vanishing polynomial defined by this domain at the point `x`.
    """
    return (pow(x, domain, p) - 1) % p


def evaluate_lagrange_coefficients(domain, x, p):
    """
    Evaluate all the lagrange polynomials defined by this domain at the point `x`.

    L_j(x) = (x^n - 1) / n * w^j / (x - w^j)
    """
    w, _ = build_omega(domain, p)

    z = evaluate_vanishing_polynomial(domain, x, p)
    if z == 0:
        # x is inside the domain
        return [1 if w_j == x % p else 0 for w_j in w]

    denominators = batch_modinv([(x - w_j) % p for w_j in w], p)
    z_div_n = z * pow(domain, -1, p) % p

    return [z_div_n * w_j * d % p for w_j, d in zip(w, denominators)]
