"""Proving module of Groth16 protocol"""

import logging

from ..circuit import InequalityCircuit
from ..codec import bytes_to_field
from ..constant import MAX_PUBLIC_INPUTS
from ..ecc import EllipticCurve
from ..errors import (
    CircuitError,
    CircuitValidationFailed,
    DeserializationError,
    InvalidProvingKey,
    InvalidPublicInput,
    ProofGenerationFailed,
    SynthesisError,
)
from ..qap import QAP
from ..r1cs import ConstraintSystem
from ..utils import get_random_int
from .package import ProofPackage, ProofPackageLite, ProofPackagePrepared
from .serialization import Proof, ProvingKey, VerifyingKey, prepare_verifying_key
from .verifier import prepare_inputs

logger = logging.getLogger(__name__)


class Prover:
    """
    Prover object

    Args:
        qap: QAP to be proved from
        key: `ProvingKey` from trusted setup
        curve: `BN254`
    """

    def __init__(self, qap: QAP, key: ProvingKey, curve: str = "BN254"):

        self.qap = qap
        self.key = key
        self.E = EllipticCurve(curve)
        self.order = self.E.order

        if key.delta_1.is_zero() or key.delta_2.is_zero():
            raise InvalidProvingKey("Key delta_1 or delta_2 is zero element!")

    def prove(self, public_witness: list, private_witness: list) -> Proof:
        """
        Prove statement from QAP by providing public and private witness
        """
        if len(self.key.l_query) != len(private_witness):
            raise InvalidProvingKey("Length of l_query and private_witness must be equal")

        witness = public_witness + private_witness
        if len(self.key.a_query) != len(witness):
            raise InvalidProvingKey("Length of a_query and witness must be equal")

        try:
            _, _, _, H = self.qap.evaluate_witness(witness)
        except ValueError as exc:
            raise ProofGenerationFailed(
                "Failed to evaluate with the given witness"
            ) from exc

        r = get_random_int(self.order - 1)
        s = get_random_int(self.order - 1)

        A = (
            self.E.multiexp(self.key.a_query, witness)
            + self.key.alpha_1
            + (self.key.delta_1 * r)
        )
        B1 = (
            self.E.multiexp(self.key.b1_query, witness)
            + self.key.beta_1
            + (self.key.delta_1 * s)
        )
        B2 = (
            self.E.multiexp(self.key.b2_query, witness)
            + self.key.beta_2
            + (self.key.delta_2 * s)
        )
        HZ = self.E.multiexp(self.key.h_query, H.coeffs())

        if len(private_witness) > 0:
            sum_delta_witness = self.E.multiexp(self.key.l_query, private_witness)
        else:  # all inputs are public
            sum_delta_witness = self.E.Z1()

        C = (
            HZ
            + sum_delta_witness
            + (A * s)
            + (B1 * r)
            + (-self.key.delta_1 * (r * s % self.order))
        )

        return Proof(A, B2, C)


def validate_public_input(b: bytes) -> int:
    """Decode 32 bytes little-endian public input into a canonical field element"""
    try:
        return bytes_to_field(b)
    except DeserializationError as exc:
        raise InvalidPublicInput(f"Invalid public input: {exc}") from exc


def _synthesize(circuit: InequalityCircuit) -> ConstraintSystem:
    try:
        cs = ConstraintSystem()
        circuit.generate_constraints(cs)
    except (CircuitError, SynthesisError) as exc:
        raise CircuitValidationFailed(f"Circuit validation failed: {exc}") from exc

    return cs


def validate_proving_key(pk: ProvingKey, circuit: InequalityCircuit) -> ConstraintSystem:
    """
    Check that `circuit` synthesizes and that `pk` was generated for its shape

    Return:
        the synthesized `ConstraintSystem`
    """
    cs = _synthesize(circuit)

    if not pk.a_query or not pk.l_query:
        raise InvalidProvingKey("Proving key queries are empty")

    if (
        len(pk.a_query) != cs.num_variables()
        or len(pk.b1_query) != cs.num_variables()
        or len(pk.b2_query) != cs.num_variables()
        or len(pk.l_query) != cs.num_witness_variables()
        or len(pk.vk.ic) != cs.num_instance_variables()
    ):
        raise InvalidProvingKey("Proving key does not match the circuit shape")

    return cs


def _prove(pk: ProvingKey, cs: ConstraintSystem, curve: str) -> Proof:
    try:
        cs.check_satisfied()
    except SynthesisError as exc:
        logger.warning("Witness does not satisfy the circuit: %s", exc)
        raise ProofGenerationFailed(str(exc)) from exc

    qap = QAP(EllipticCurve(curve).order)
    qap.from_r1cs(cs)

    if len(pk.h_query) != qap.domain - 1:
        raise InvalidProvingKey("Proving key does not match the QAP domain")

    public_witness, private_witness = cs.generate_witness()
    proof = Prover(qap, pk, curve).prove(public_witness, private_witness)

    logger.debug("Proof generated over domain %d", qap.domain)

    return proof


def prove(pk: ProvingKey, circuit: InequalityCircuit, curve="BN254") -> Proof:
    """Synthesize assigned `circuit` and prove it"""
    cs = validate_proving_key(pk, circuit)
    return _prove(pk, cs, curve)


def generate_proof_package(
    pk: ProvingKey,
    vk: VerifyingKey,
    circuit: InequalityCircuit,
    public_inputs: list,
    curve="BN254",
):
    """
    Generate proof and package it in three equivalent encodings

    Args:
        pk: `ProvingKey`
        vk: `VerifyingKey` generated alongside `pk`
        circuit: assigned circuit
        public_inputs: list of 32 bytes little-endian public inputs

    Return:
        (ProofPackageLite, ProofPackagePrepared, ProofPackage)
    """
    cs = validate_proving_key(pk, circuit)

    if vk.to_bytes() != pk.vk.to_bytes():
        raise InvalidProvingKey("Verifying key was not generated alongside the proving key")

    public_inputs_fr = [validate_public_input(x) for x in public_inputs]

    if len(public_inputs_fr) > MAX_PUBLIC_INPUTS:
        raise InvalidPublicInput(
            f"Too many public inputs: maximum {MAX_PUBLIC_INPUTS}, got {len(public_inputs_fr)}"
        )

    # instance variables include the constant one
    expected = cs.num_instance_variables() - 1
    if len(public_inputs_fr) != expected:
        raise InvalidPublicInput(
            "Number of public inputs doesn't match circuit: "
            f"expected {expected}, got {len(public_inputs_fr)}"
        )

    proof = _prove(pk, cs, curve)

    pvk = prepare_verifying_key(vk, curve)
    prepared_input = prepare_inputs(vk, public_inputs_fr, curve)

    proof_bytes = proof.to_bytes()
    pvk_bytes = pvk.to_bytes()

    logger.info(
        "Proof package generated for %s with %d public inputs",
        circuit.__class__.__name__,
        len(public_inputs_fr),
    )

    return (
        ProofPackageLite(proof_bytes, [bytes(x) for x in public_inputs], pvk_bytes),
        ProofPackagePrepared(proof_bytes, prepared_input.to_bytes(), pvk_bytes),
        ProofPackage(proof, prepared_input, pvk),
    )
