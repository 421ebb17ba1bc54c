"""Verification module of Groth16 protocol"""

import logging

from ..codec import bytes_to_field
from ..ecc import CurvePoint, EllipticCurve
from ..errors import (
    DeserializationError,
    IncompatibleVerifyingKeyWithNrPublicInputs,
    InvalidProof,
    InvalidPublicInput,
    VerificationFailed,
)
from .package import ProofPackage, ProofPackageLite, ProofPackagePrepared
from .serialization import (
    PreparedVerifyingKey,
    Proof,
    VerifyingKey,
    prepare_verifying_key,
)

logger = logging.getLogger(__name__)


def is_valid_point(point: CurvePoint) -> bool:
    """Non-zero point on curve and in the correct subgroup"""
    return isinstance(point, CurvePoint) and point.is_valid()


def is_valid_proof(proof: Proof) -> bool:
    return is_valid_point(proof.A) and is_valid_point(proof.B) and is_valid_point(proof.C)


def prepare_inputs(vk: VerifyingKey, public_inputs: list, crv="BN254") -> CurvePoint:
    """
    Compute `ic[0] + sum(x_i * ic[i+1])`

    Args:
        vk: `VerifyingKey` (or `PreparedVerifyingKey`)
        public_inputs: field elements, either as int or 32 bytes little-endian
    """
    if isinstance(vk, PreparedVerifyingKey):
        vk = vk.vk

    if len(public_inputs) + 1 != len(vk.ic):
        raise IncompatibleVerifyingKeyWithNrPublicInputs(
            f"Verifying key expects {len(vk.ic) - 1} public inputs, got {len(public_inputs)}"
        )

    scalars = [1]
    for x in public_inputs:
        if isinstance(x, int):
            scalars.append(x)
            continue

        try:
            scalars.append(bytes_to_field(x))
        except DeserializationError as exc:
            raise InvalidPublicInput(f"Invalid public input: {exc}") from exc

    return EllipticCurve(crv).multiexp(vk.ic, scalars)


def _check_pairing(pvk: PreparedVerifyingKey, proof: Proof, prepared_input, crv):
    E = EllipticCurve(crv)

    # e(A, B) * e(P, -gamma) * e(C, -delta) == e(alpha, beta)
    try:
        result = E.multi_pairing(
            [proof.A, prepared_input, proof.C],
            [proof.B, pvk.gamma_2_neg, pvk.delta_2_neg],
        )
    except (AssertionError, ArithmeticError, TypeError) as exc:
        raise VerificationFailed() from exc

    ok = result == pvk.alpha_beta
    if ok:
        logger.info("Proof verified")
    else:
        logger.warning("Pairing check failed, proof rejected")

    return ok


def verify(
    proof: Proof, prepared_input: CurvePoint, vk: VerifyingKey, crv="BN254"
) -> bool:
    """
    Verify proof against an already prepared public input point,
    `vk` is either `VerifyingKey` or `PreparedVerifyingKey`

    Return:
        `True` if the pairing check holds, `False` otherwise
    """
    if not is_valid_point(prepared_input):
        raise InvalidPublicInput("Prepared public input is not a valid G1 point")

    if not is_valid_proof(proof):
        raise InvalidProof()

    if isinstance(vk, PreparedVerifyingKey):
        pvk = vk
    else:
        try:
            pvk = prepare_verifying_key(vk, crv)
        except (AttributeError, AssertionError, ArithmeticError, TypeError) as exc:
            raise VerificationFailed() from exc

    return _check_pairing(pvk, proof, prepared_input, crv)


def verify_proof_package(package, crv="BN254") -> bool:
    """
    Verify any of the packages produced by `generate_proof_package`

    Args:
        package: `ProofPackage`, `ProofPackagePrepared` or `ProofPackageLite`
    """
    if isinstance(package, ProofPackagePrepared):
        package = package.to_native(crv)
    elif isinstance(package, ProofPackageLite):
        pvk = PreparedVerifyingKey.from_bytes(package.verifying_key, crv)
        package = ProofPackage(
            Proof.from_bytes(package.proof, crv),
            prepare_inputs(pvk, package.public_inputs, crv),
            pvk,
        )

    if not is_valid_proof(package.proof):
        raise InvalidProof()

    if not is_valid_point(package.public_inputs):
        raise InvalidPublicInput("Prepared public input is not a valid G1 point")

    return _check_pairing(
        package.prepared_verifying_key, package.proof, package.public_inputs, crv
    )


def verify_with_inputs(vk: VerifyingKey, public_inputs: list, proof: Proof, crv="BN254"):
    """Prepare `public_inputs` and verify `proof` against them"""
    return verify(proof, prepare_inputs(vk, public_inputs, crv), vk, crv)


class Verifier:
    """
    Verifier object

    Args:
        key: `VerifyingKey` from trusted setup
        curve: `BN254`
    """

    def __init__(self, key: VerifyingKey, curve: str = "BN254"):
        self.key = key
        self.E = EllipticCurve(curve)
        self.pvk = prepare_verifying_key(key, curve)

    def verify(self, proof: Proof, public_witness: list) -> bool:
        """
        Verify proof by providing public witness,
        prefixed by the constant one as returned by `generate_witness`
        """
        if len(self.key.ic) != len(public_witness):
            raise IncompatibleVerifyingKeyWithNrPublicInputs(
                "Length of IC and public_witness must be equal"
            )

        if not is_valid_proof(proof):
            raise InvalidProof()

        sum_gamma_witness = self.E.multiexp(self.key.ic, public_witness)

        return _check_pairing(self.pvk, proof, sum_gamma_witness, self.E.name)
