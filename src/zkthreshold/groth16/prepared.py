"""
Verifier for hosts that only expose the alt_bn128 (EIP-197) pairing check.

The Groth16 equation is rearranged as

    e(-A, B) * e(P, gamma) * e(C, delta) * e(alpha, beta) == 1

and packed into one flat buffer of four (G1, G2) pairs in big-endian
layout. The pairing primitive is injected so that the buffer can be
forwarded to a host precompile; `alt_bn128_pairing` evaluates it in
software.
"""

import logging

from ..codec import g1_to_be, g2_to_be
from ..constant import G1_POINT_SIZE, G2_POINT_SIZE, PAIRING_ELEMENT_SIZE
from ..ecc import CurveFQ12, CurvePoint, EllipticCurve
from ..errors import (
    DeserializationError,
    InvalidG1Length,
    InvalidG2Length,
    InvalidPublicInputsLength,
    PairingVerificationError,
)
from .package import ProofPackage, ProofPackagePrepared
from .serialization import PreparedVerifyingKey, Proof, VerifyingKey

logger = logging.getLogger(__name__)

PAIRING_RESULT_SIZE = 32


def _check_g1(b: bytes) -> bytes:
    if len(b) != G1_POINT_SIZE:
        raise InvalidG1Length(f"G1 point must be {G1_POINT_SIZE} bytes, got {len(b)}")
    return bytes(b)


def _check_g2(b: bytes) -> bytes:
    if len(b) != G2_POINT_SIZE:
        raise InvalidG2Length(f"G2 point must be {G2_POINT_SIZE} bytes, got {len(b)}")
    return bytes(b)


def alt_bn128_pairing(data: bytes, crv="BN254") -> bytes:
    """
    Software alt_bn128 pairing check.

    Input is a sequence of `G1 (64) || G2 (128)` big-endian pairs.
    Return 32 bytes big-endian `1` if the product of pairings equals one, `0` otherwise.
    Raise `ValueError` on malformed input.
    """
    if len(data) % PAIRING_ELEMENT_SIZE != 0:
        raise ValueError(
            f"Pairing input must be a multiple of {PAIRING_ELEMENT_SIZE} bytes, got {len(data)}"
        )

    E = EllipticCurve(crv)

    f = CurveFQ12[crv].value.one()
    for i in range(0, len(data), PAIRING_ELEMENT_SIZE):
        g1 = CurvePoint.from_bytes_be(data[i : i + G1_POINT_SIZE], crv)
        g2 = CurvePoint.from_bytes_be(data[i + G1_POINT_SIZE : i + PAIRING_ELEMENT_SIZE], crv)

        if not g2.is_in_subgroup():
            raise ValueError("G2 point is not in the correct subgroup")

        f = f * E.miller_loop(g1, g2)

    ok = E.final_exponentiate(f) == CurveFQ12[crv].value.one()

    return int(ok).to_bytes(PAIRING_RESULT_SIZE, "big")


class Groth16VerifyingKeyPrepared:
    """Verifying key points in alt_bn128 big-endian layout"""

    def __init__(self, vk_alpha_g1, vk_beta_g2, vk_gamma_g2, vk_delta_g2):
        self.vk_alpha_g1 = _check_g1(vk_alpha_g1)
        self.vk_beta_g2 = _check_g2(vk_beta_g2)
        self.vk_gamma_g2 = _check_g2(vk_gamma_g2)
        self.vk_delta_g2 = _check_g2(vk_delta_g2)

    def __eq__(self, other):
        if not isinstance(other, Groth16VerifyingKeyPrepared):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    @classmethod
    def from_verifying_key(cls, vk):
        """Convert `VerifyingKey` (or `PreparedVerifyingKey`) into alt_bn128 layout"""
        if isinstance(vk, PreparedVerifyingKey):
            vk = vk.vk

        return cls(
            g1_to_be(vk.alpha_1.to_bytes()),
            g2_to_be(vk.beta_2.to_bytes()),
            g2_to_be(vk.gamma_2.to_bytes()),
            g2_to_be(vk.delta_2.to_bytes()),
        )

    def to_bytes(self) -> bytes:
        return self.vk_alpha_g1 + self.vk_beta_g2 + self.vk_gamma_g2 + self.vk_delta_g2


class Groth16VerifierPrepared:
    """
    Proof and prepared public input in alt_bn128 layout,
    with `proof_a` already negated

    Args:
        proof_a: -A in G1 (64 bytes)
        proof_b: B in G2 (128 bytes)
        proof_c: C in G1 (64 bytes)
        prepared_public_inputs: prepared input point in G1 (64 bytes)
        verifying_key: `Groth16VerifyingKeyPrepared`
    """

    SIZE = G1_POINT_SIZE * 4 + G2_POINT_SIZE * 4

    def __init__(
        self,
        proof_a: bytes,
        proof_b: bytes,
        proof_c: bytes,
        prepared_public_inputs: bytes,
        verifying_key: Groth16VerifyingKeyPrepared,
    ):
        self.proof_a = _check_g1(proof_a)
        self.proof_b = _check_g2(proof_b)
        self.proof_c = _check_g1(proof_c)

        if len(prepared_public_inputs) != G1_POINT_SIZE:
            raise InvalidPublicInputsLength(
                f"Prepared public input must be {G1_POINT_SIZE} bytes, "
                f"got {len(prepared_public_inputs)}"
            )
        self.prepared_public_inputs = bytes(prepared_public_inputs)
        self.verifying_key = verifying_key

    def pairing_input(self) -> bytes:
        """Flat buffer of the four (G1, G2) pairs"""
        return b"".join(
            [
                self.proof_a,
                self.proof_b,
                self.prepared_public_inputs,
                self.verifying_key.vk_gamma_g2,
                self.proof_c,
                self.verifying_key.vk_delta_g2,
                self.verifying_key.vk_alpha_g1,
                self.verifying_key.vk_beta_g2,
            ]
        )

    def verify(self, pairing=alt_bn128_pairing) -> bool:
        """
        Run the pairing check through `pairing`, a callable taking the
        flat buffer and returning the 32-byte big-endian result
        """
        data = self.pairing_input()
        logger.debug("Invoking pairing check with %d bytes", len(data))

        try:
            result = pairing(data)
        except Exception as exc:
            logger.warning("Pairing primitive failed: %s", exc)
            raise PairingVerificationError() from exc

        if not isinstance(result, (bytes, bytearray)) or len(result) != PAIRING_RESULT_SIZE:
            raise PairingVerificationError("Malformed pairing result")

        value = int.from_bytes(result, "big")
        if value not in (0, 1):
            raise PairingVerificationError("Malformed pairing result")

        if value == 1:
            logger.info("Proof verified by pairing check")
        else:
            logger.warning("Pairing check failed, proof rejected")

        return value == 1

    def verify_and_record(self, pairing=alt_bn128_pairing):
        """
        Verify and return `(ok, prepared_public_inputs)`, the value
        a host records once the proof is accepted
        """
        return self.verify(pairing), self.prepared_public_inputs

    def to_bytes(self) -> bytes:
        """Serialize into the fixed-size instruction payload"""
        return (
            self.proof_a
            + self.proof_b
            + self.proof_c
            + self.prepared_public_inputs
            + self.verifying_key.to_bytes()
        )

    @classmethod
    def from_bytes(cls, data: bytes):
        if len(data) != cls.SIZE:
            raise DeserializationError(
                f"Verifier payload must be {cls.SIZE} bytes, got {len(data)}"
            )

        sizes = [
            G1_POINT_SIZE,
            G2_POINT_SIZE,
            G1_POINT_SIZE,
            G1_POINT_SIZE,
            G1_POINT_SIZE,
            G2_POINT_SIZE,
            G2_POINT_SIZE,
            G2_POINT_SIZE,
        ]
        parts = []
        start = 0
        for size in sizes:
            parts.append(bytes(data[start : start + size]))
            start += size

        vk = Groth16VerifyingKeyPrepared(*parts[4:])
        return cls(parts[0], parts[1], parts[2], parts[3], vk)


def _build(proof: Proof, prepared_input: CurvePoint, vk: VerifyingKey):
    return Groth16VerifierPrepared(
        g1_to_be((-proof.A).to_bytes()),
        g2_to_be(proof.B.to_bytes()),
        g1_to_be(proof.C.to_bytes()),
        g1_to_be(prepared_input.to_bytes()),
        Groth16VerifyingKeyPrepared.from_verifying_key(vk),
    )


def build_verifier(package: ProofPackagePrepared, crv="BN254") -> Groth16VerifierPrepared:
    """Negate proof A and convert every point of `package` into alt_bn128 layout"""
    if len(package.public_inputs) != G1_POINT_SIZE:
        raise InvalidPublicInputsLength()
    return build_verifier_from_native(package.to_native(crv))


def build_verifier_from_native(package: ProofPackage) -> Groth16VerifierPrepared:
    return _build(
        package.proof, package.public_inputs, package.prepared_verifying_key.vk
    )
