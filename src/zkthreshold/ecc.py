from enum import Enum

from joblib import Parallel, delayed
from py_ecc import optimized_bn128
from py_ecc.fields import (
    optimized_bn128_FQ,
    optimized_bn128_FQ2,
    optimized_bn128_FQ12,
)

from .constant import BN254_MODULUS, BN254_SCALAR_FIELD, FIELD_ELEMENT_SIZE
from .errors import DeserializationError
from .utils import get_n_jobs, split_list


class CurveType(Enum):
    BN128 = optimized_bn128
    BN254 = optimized_bn128
    ALT_BN128 = optimized_bn128


class CurveFQ(Enum):
    BN128 = optimized_bn128_FQ
    BN254 = optimized_bn128_FQ
    ALT_BN128 = optimized_bn128_FQ


class CurveFQ2(Enum):
    BN128 = optimized_bn128_FQ2
    BN254 = optimized_bn128_FQ2
    ALT_BN128 = optimized_bn128_FQ2


class CurveFQ12(Enum):
    BN128 = optimized_bn128_FQ12
    BN254 = optimized_bn128_FQ12
    ALT_BN128 = optimized_bn128_FQ12


class CurvePointSize(Enum):
    BN128 = FIELD_ELEMENT_SIZE
    BN254 = FIELD_ELEMENT_SIZE
    ALT_BN128 = FIELD_ELEMENT_SIZE


# batches below this size are multiplied in-process
PARALLEL_THRESHOLD = 64


def _mul(point, scalar):
    return point * scalar


class EllipticCurve:
    def __init__(self, curve: str = "BN254"):
        self.name = curve
        self.curve = CurveType[curve].value.optimized_curve
        self.order = BN254_SCALAR_FIELD
        self.field_modulus = BN254_MODULUS
        self._pairing = CurveType[curve].value.optimized_pairing

    def G1(self):
        """
        Return generator G1 of the curve
        """
        return CurvePoint(self.curve.G1, self.name)

    def G2(self):
        """
        Return generator G2 of the curve
        """
        return CurvePoint(self.curve.G2, self.name)

    def Z1(self):
        """Return point at infinity of G1"""
        return CurvePoint(self.curve.Z1, self.name)

    def Z2(self):
        """Return point at infinity of G2"""
        return CurvePoint(self.curve.Z2, self.name)

    def miller_loop(self, a, b):
        """Miller loop of `e(a, b)` without final exponentiation"""
        return self._pairing.pairing(b.point, a.point, final_exponentiate=False)

    def final_exponentiate(self, f):
        return self._pairing.final_exponentiate(f)

    def pairing(self, a, b):
        """
        Compute pairing, that is `e(a, b)`, where `a in G1` and `b in G2`
        """
        return self._pairing.pairing(b.point, a.point)

    def multi_pairing(self, a: list, b: list):
        """
        Perform pairing of e(a[i], b[i]) in batch
        and compute its product
        """
        assert len(a) == len(b), "Length of a and b must be equal"

        f = CurveFQ12[self.name].value.one()
        for g1, g2 in zip(a, b):
            f = f * self.miller_loop(g1, g2)

        return self.final_exponentiate(f)

    def batch_mul(self, g, s):
        """
        Perform EC multiplication in parallel batch
        where g is Elliptic Curve point(s) and s is scalars
        """
        if not isinstance(g, list):
            g = [g] * len(s)

        if len(g) == 0:
            return []

        if len(s) < PARALLEL_THRESHOLD:
            return [point * scalar for point, scalar in zip(g, s)]

        return Parallel(n_jobs=get_n_jobs())(
            delayed(_mul)(point, scalar) for point, scalar in zip(g, s)
        )

    def multiexp(self, g, s):
        """
        Perform Multi-Scalar-Multiplication (MSM)
        to compute sum of g[i] * s[i] where g is
        Elliptic Curve point and s is scalar
        """
        assert len(g) > 0

        if len(s) < len(g):
            g = g[: len(s)]

        # zero scalars contribute nothing
        pairs = [(p, x % self.order) for p, x in zip(g, s) if x % self.order != 0]

        total = g[0] * 0
        if not pairs:
            return total

        for point in self.batch_mul([p for p, _ in pairs], [x for _, x in pairs]):
            total += point

        return total

    def from_bytes(self, b: bytes):
        """
        Construct point from uncompressed little-endian serialization,
        64 bytes for G1 and 128 bytes for G2
        """
        return CurvePoint.from_bytes(b, self.name)

    def from_bytes_be(self, b: bytes):
        """
        Construct point from alt_bn128 (EIP-197) big-endian serialization
        """
        return CurvePoint.from_bytes_be(b, self.name)

    def __call__(self, x, y):
        fq = CurveFQ[self.name].value
        fq2 = CurveFQ2[self.name].value

        if isinstance(x, (tuple, list)) and isinstance(y, (tuple, list)):
            point = (fq2(list(x)), fq2(list(y)), fq2.one())
            b = self.curve.b2
        else:
            point = (fq(x), fq(y), fq.one())
            b = self.curve.b

        if not self.curve.is_on_curve(point, b):
            raise DeserializationError("Point is not on curve")

        return CurvePoint(point, self.name)


class CurvePoint:
    def __init__(self, point: tuple, crv: str = "BN254"):
        self.name = crv
        self.point = point

    @property
    def curve(self):
        return CurveType[self.name].value.optimized_curve

    @property
    def is_g2(self) -> bool:
        return isinstance(self.point[0], CurveFQ2[self.name].value)

    def __add__(self, other):
        if not isinstance(other, CurvePoint):
            raise TypeError(
                f"Addition of {type(self)} with {type(other)} is not allowed"
            )

        return CurvePoint(self.curve.add(self.point, other.point), self.name)

    def __radd__(self, other):
        # allows builtin sum() starting from 0
        if other == 0:
            return self
        return self.__add__(other)

    def __sub__(self, other):
        return self.__add__(-other)

    def __mul__(self, other):
        if not isinstance(other, int):
            raise TypeError(
                f"Multiplication of {type(self)} with {type(other)} is not allowed"
            )

        return CurvePoint(
            self.curve.multiply(self.point, other % BN254_SCALAR_FIELD), self.name
        )

    def __rmul__(self, other):
        return self.__mul__(other)

    def __neg__(self):
        return CurvePoint(self.curve.neg(self.point), self.name)

    def __eq__(self, other):
        if not isinstance(other, CurvePoint):
            return NotImplemented
        return self.curve.eq(self.point, other.point)

    def __hash__(self):
        return hash(self.to_bytes())

    def __str__(self) -> str:
        if self.is_zero():
            return "O"
        return f"{self.normalize()}"

    def __repr__(self) -> str:
        return self.__str__()

    def is_zero(self) -> bool:
        return self.curve.is_inf(self.point)

    def is_on_curve(self) -> bool:
        b = self.curve.b2 if self.is_g2 else self.curve.b
        return self.curve.is_on_curve(self.point, b)

    def is_in_subgroup(self) -> bool:
        """Check `order * P == O`, assuming the point is on curve"""
        if not self.is_g2:
            # G1 of BN254 has cofactor 1
            return True
        return self.curve.is_inf(self.curve.multiply(self.point, BN254_SCALAR_FIELD))

    def is_valid(self) -> bool:
        """Non-zero point on curve and in the prime order subgroup"""
        return not self.is_zero() and self.is_on_curve() and self.is_in_subgroup()

    def normalize(self) -> tuple:
        """Return affine coordinates as integers"""
        x, y = self.curve.normalize(self.point)
        if self.is_g2:
            return tuple(int(c) for c in x.coeffs), tuple(int(c) for c in y.coeffs)
        return int(x), int(y)

    def _coordinates(self) -> list:
        """Affine coordinates flattened into `[x, y]` or `[x.c0, x.c1, y.c0, y.c1]`"""
        if self.is_zero():
            return [0] * (4 if self.is_g2 else 2)

        x, y = self.normalize()
        if self.is_g2:
            return [x[0], x[1], y[0], y[1]]
        return [x, y]

    def to_bytes(self) -> bytes:
        """Uncompressed serialization, little-endian coordinates"""
        n = CurvePointSize[self.name].value
        return b"".join(c.to_bytes(n, "little") for c in self._coordinates())

    def to_bytes_be(self) -> bytes:
        """Uncompressed alt_bn128 (EIP-197) serialization, big-endian coordinates"""
        n = CurvePointSize[self.name].value
        coords = self._coordinates()
        if self.is_g2:
            coords = [coords[1], coords[0], coords[3], coords[2]]
        return b"".join(c.to_bytes(n, "big") for c in coords)

    @classmethod
    def _from_coordinates(cls, coords: list, crv: str):
        E = EllipticCurve(crv)

        if any(c >= E.field_modulus for c in coords):
            raise DeserializationError("Coordinate exceeds base field modulus")

        if all(c == 0 for c in coords):
            return E.Z2() if len(coords) == 4 else E.Z1()

        if len(coords) == 4:
            return E((coords[0], coords[1]), (coords[2], coords[3]))
        return E(coords[0], coords[1])

    @classmethod
    def from_bytes(cls, b: bytes, crv: str = "BN254"):
        """Parse uncompressed little-endian serialization"""
        n = CurvePointSize[crv].value
        if len(b) not in (n * 2, n * 4):
            raise DeserializationError(
                f"Point size of {n * 2} or {n * 4} expected, got {len(b)}"
            )

        coords = [int.from_bytes(c, "little") for c in split_list(bytes(b), n)]
        return cls._from_coordinates(coords, crv)

    @classmethod
    def from_bytes_be(cls, b: bytes, crv: str = "BN254"):
        """Parse alt_bn128 (EIP-197) big-endian serialization"""
        n = CurvePointSize[crv].value
        if len(b) not in (n * 2, n * 4):
            raise DeserializationError(
                f"Point size of {n * 2} or {n * 4} expected, got {len(b)}"
            )

        coords = [int.from_bytes(c, "big") for c in split_list(bytes(b), n)]
        if len(coords) == 4:
            coords = [coords[1], coords[0], coords[3], coords[2]]
        return cls._from_coordinates(coords, crv)


def gt_to_bytes(f) -> bytes:
    """Serialize target group element (Fq12) as 12 little-endian coefficients"""
    return b"".join(int(c).to_bytes(FIELD_ELEMENT_SIZE, "little") for c in f.coeffs)


def gt_from_bytes(b: bytes, crv: str = "BN254"):
    """Parse target group element (Fq12) serialized by `gt_to_bytes`"""
    if len(b) != FIELD_ELEMENT_SIZE * 12:
        raise DeserializationError(
            f"Target group element must be {FIELD_ELEMENT_SIZE * 12} bytes"
        )

    coeffs = [int.from_bytes(c, "little") for c in split_list(bytes(b), FIELD_ELEMENT_SIZE)]
    if any(c >= BN254_MODULUS for c in coeffs):
        raise DeserializationError("Coefficient exceeds base field modulus")

    return CurveFQ12[crv].value(coeffs)
