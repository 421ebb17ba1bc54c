"""Keys and proof of the Groth16 protocol with their canonical byte forms"""

from ..constant import G1_POINT_SIZE, G2_POINT_SIZE, GT_ELEMENT_SIZE
from ..ecc import CurvePoint, EllipticCurve, gt_from_bytes, gt_to_bytes
from ..errors import DeserializationError
from ..utils import read_vec_len, split_list, write_vec_len


def _read(data: bytes, offset: int, size: int):
    if len(data) < offset + size:
        raise DeserializationError(
            f"Expected {size} bytes at offset {offset}, buffer has {len(data)}"
        )
    return data[offset : offset + size], offset + size


def _read_point(data: bytes, offset: int, size: int, crv: str):
    block, offset = _read(data, offset, size)
    return CurvePoint.from_bytes(block, crv), offset


def _read_points(data: bytes, offset: int, size: int, crv: str):
    try:
        n, offset = read_vec_len(data, offset)
    except ValueError as exc:
        raise DeserializationError(str(exc)) from exc

    blocks, offset = _read(data, offset, n * size)
    return [CurvePoint.from_bytes(b, crv) for b in split_list(blocks, size)], offset


def _write_points(points: list) -> bytes:
    return write_vec_len(len(points)) + b"".join(p.to_bytes() for p in points)


def _ensure_consumed(data: bytes, offset: int, name: str):
    if offset != len(data):
        raise DeserializationError(
            f"{len(data) - offset} trailing bytes after {name}"
        )


class Proof:

    def __init__(self, A, B, C):
        self.A = A
        self.B = B
        self.C = C

    def __str__(self):
        return f"A = {self.A}\nB = {self.B}\nC = {self.C}"

    def __repr__(self):
        return self.__str__()

    def __eq__(self, other):
        if not isinstance(other, Proof):
            return NotImplemented
        return self.A == other.A and self.B == other.B and self.C == other.C

    @classmethod
    def from_bytes(cls, s: bytes, crv="BN254"):
        """Parse Proof from serialized bytes"""
        total = G1_POINT_SIZE * 2 + G2_POINT_SIZE
        if len(s) != total:
            raise DeserializationError(f"Length of the Proof must equal {total} bytes")

        A, offset = _read_point(s, 0, G1_POINT_SIZE, crv)
        B, offset = _read_point(s, offset, G2_POINT_SIZE, crv)
        C, _ = _read_point(s, offset, G1_POINT_SIZE, crv)

        return Proof(A, B, C)

    def to_bytes(self) -> bytes:
        """Return bytes representation of the Proof"""
        return self.A.to_bytes() + self.B.to_bytes() + self.C.to_bytes()


class VerifyingKey:
    def __init__(
        self,
        alpha_G1,  # vk_alpha_1
        beta_G2,  # vk_beta_2
        gamma_G2,  # vk_gamma_2
        delta_G2,  # vk_delta_2
        IC,  # gamma_abc_g1
    ):
        self.alpha_1 = alpha_G1
        self.beta_2 = beta_G2
        self.gamma_2 = gamma_G2
        self.delta_2 = delta_G2
        self.ic = IC

    @property
    def n_public(self):
        """Number of public inputs, excluding the constant one"""
        return len(self.ic) - 1

    @classmethod
    def _from_buffer(cls, s: bytes, offset: int, crv: str):
        alpha_1, offset = _read_point(s, offset, G1_POINT_SIZE, crv)
        beta_2, offset = _read_point(s, offset, G2_POINT_SIZE, crv)
        gamma_2, offset = _read_point(s, offset, G2_POINT_SIZE, crv)
        delta_2, offset = _read_point(s, offset, G2_POINT_SIZE, crv)
        ic, offset = _read_points(s, offset, G1_POINT_SIZE, crv)

        return VerifyingKey(alpha_1, beta_2, gamma_2, delta_2, ic), offset

    @classmethod
    def from_bytes(cls, s: bytes, crv="BN254"):
        """Construct VerifyingKey from bytes"""
        vk, offset = cls._from_buffer(bytes(s), 0, crv)
        _ensure_consumed(s, offset, "VerifyingKey")
        return vk

    def to_bytes(self) -> bytes:
        """Return bytes representation of the VerifyingKey"""
        return (
            self.alpha_1.to_bytes()
            + self.beta_2.to_bytes()
            + self.gamma_2.to_bytes()
            + self.delta_2.to_bytes()
            + _write_points(self.ic)
        )


class PreparedVerifyingKey:
    """
    Verifying key with `e(alpha, beta)` precomputed and
    `gamma`, `delta` negated for a single multi-pairing check
    """

    def __init__(self, vk: VerifyingKey, alpha_beta, gamma_2_neg, delta_2_neg):
        self.vk = vk
        self.alpha_beta = alpha_beta
        self.gamma_2_neg = gamma_2_neg
        self.delta_2_neg = delta_2_neg

    @classmethod
    def _from_buffer(cls, s: bytes, offset: int, crv: str):
        vk, offset = VerifyingKey._from_buffer(s, offset, crv)
        block, offset = _read(s, offset, GT_ELEMENT_SIZE)
        alpha_beta = gt_from_bytes(block, crv)
        gamma_2_neg, offset = _read_point(s, offset, G2_POINT_SIZE, crv)
        delta_2_neg, offset = _read_point(s, offset, G2_POINT_SIZE, crv)

        return PreparedVerifyingKey(vk, alpha_beta, gamma_2_neg, delta_2_neg), offset

    @classmethod
    def from_bytes(cls, s: bytes, crv="BN254"):
        """Construct PreparedVerifyingKey from bytes"""
        pvk, offset = cls._from_buffer(bytes(s), 0, crv)
        _ensure_consumed(s, offset, "PreparedVerifyingKey")
        return pvk

    def to_bytes(self) -> bytes:
        """Return bytes representation of the PreparedVerifyingKey"""
        return (
            self.vk.to_bytes()
            + gt_to_bytes(self.alpha_beta)
            + self.gamma_2_neg.to_bytes()
            + self.delta_2_neg.to_bytes()
        )


def prepare_verifying_key(vk: VerifyingKey, crv="BN254") -> PreparedVerifyingKey:
    """Precompute `e(alpha, beta)` and negate `gamma` and `delta`"""
    E = EllipticCurve(crv)
    return PreparedVerifyingKey(
        vk, E.pairing(vk.alpha_1, vk.beta_2), -vk.gamma_2, -vk.delta_2
    )


class ProvingKey:
    def __init__(
        self,
        vk: VerifyingKey,
        beta_G1,
        delta_G1,
        a_query,
        b1_query,
        b2_query,
        h_query,
        l_query,
    ):
        """
        Args:
            vk: verifying key generated alongside
            beta_G1, delta_G1: `beta` and `delta` in G1
            a_query: `u_i(tau)` in G1 for every variable
            b1_query, b2_query: `v_i(tau)` in G1 and G2 for every variable
            h_query: `tau^i * t(tau) / delta` in G1
            l_query: `(beta*u_i + alpha*v_i + w_i)(tau) / delta`
                in G1 for every private variable
        """
        self.vk = vk
        self.beta_1 = beta_G1
        self.delta_1 = delta_G1
        self.a_query = a_query
        self.b1_query = b1_query
        self.b2_query = b2_query
        self.h_query = h_query
        self.l_query = l_query

    @property
    def alpha_1(self):
        return self.vk.alpha_1

    @property
    def beta_2(self):
        return self.vk.beta_2

    @property
    def delta_2(self):
        return self.vk.delta_2

    @classmethod
    def from_bytes(cls, s: bytes, crv="BN254"):
        """Construct ProvingKey from bytes"""
        s = bytes(s)
        vk, offset = VerifyingKey._from_buffer(s, 0, crv)
        beta_1, offset = _read_point(s, offset, G1_POINT_SIZE, crv)
        delta_1, offset = _read_point(s, offset, G1_POINT_SIZE, crv)

        a_query, offset = _read_points(s, offset, G1_POINT_SIZE, crv)
        b1_query, offset = _read_points(s, offset, G1_POINT_SIZE, crv)
        b2_query, offset = _read_points(s, offset, G2_POINT_SIZE, crv)
        h_query, offset = _read_points(s, offset, G1_POINT_SIZE, crv)
        l_query, offset = _read_points(s, offset, G1_POINT_SIZE, crv)

        _ensure_consumed(s, offset, "ProvingKey")

        return ProvingKey(
            vk, beta_1, delta_1, a_query, b1_query, b2_query, h_query, l_query
        )

    def to_bytes(self) -> bytes:
        """Return bytes representation of the ProvingKey"""
        return (
            self.vk.to_bytes()
            + self.beta_1.to_bytes()
            + self.delta_1.to_bytes()
            + _write_points(self.a_query)
            + _write_points(self.b1_query)
            + _write_points(self.b2_query)
            + _write_points(self.h_query)
            + _write_points(self.l_query)
        )
