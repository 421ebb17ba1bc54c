import pytest

from zkthreshold.circuit import (
    InequalityCircuit,
    PublicInequalityCircuit,
    TokenVerificationCircuit,
)
from zkthreshold.codec import field_to_bytes
from zkthreshold.constant import BN254_SCALAR_FIELD
from zkthreshold.ecc import EllipticCurve
from zkthreshold.errors import (
    CircuitValidationFailed,
    IncompatibleVerifyingKeyWithNrPublicInputs,
    InvalidProof,
    InvalidProvingKey,
    InvalidPublicInput,
    ProofGenerationFailed,
    VerificationFailed,
)
from zkthreshold.groth16 import (
    PreparedVerifyingKey,
    Proof,
    ProofPackageLite,
    ProofPackagePrepared,
    ProvingKey,
    Prover,
    Setup,
    Verifier,
    VerifyingKey,
    build_verifier,
    generate_proof_package,
    load_keys,
    prepare_inputs,
    prepare_verifying_key,
    prove,
    validate_proving_key,
    validate_public_input,
    verify,
    verify_proof_package,
    verify_with_inputs,
)
from zkthreshold.groth16 import prover as prover_module
from zkthreshold.groth16.setup import save_keys_to
from zkthreshold.qap import QAP
from zkthreshold.utils import get_random_int


def test_groth16_bn254(keys, proof_packages):
    _, vk = keys
    lite, prepared, native = proof_packages

    assert verify_proof_package(native)
    assert verify_proof_package(prepared)
    assert verify_proof_package(lite)

    assert verify(native.proof, native.public_inputs, vk)
    assert verify_with_inputs(vk, [500], native.proof)


def test_verify_accepts_prepared_key(keys, proof_packages):
    _, vk = keys
    _, _, native = proof_packages

    assert verify(native.proof, native.public_inputs, prepare_verifying_key(vk))
    assert verify(native.proof, native.public_inputs, native.prepared_verifying_key)

    with pytest.raises(VerificationFailed):
        verify(native.proof, native.public_inputs, object())


def test_packages_hold_the_same_proof(proof_packages):
    lite, prepared, native = proof_packages

    assert lite.proof == prepared.proof == native.proof.to_bytes()
    assert lite.verifying_key == prepared.verifying_key
    # prover value stays private
    assert lite.public_inputs == [field_to_bytes(500)]
    assert prepared.public_inputs == native.public_inputs.to_bytes()
    assert len(prepared.public_inputs) == 64


def test_package_transport_encoding(proof_packages):
    lite, prepared, _ = proof_packages

    lite_bytes = lite.to_bytes()
    decoded = ProofPackageLite.from_bytes(lite_bytes)
    assert decoded.to_bytes() == lite_bytes
    assert decoded.public_inputs == lite.public_inputs

    prepared_bytes = prepared.to_bytes()
    # u32 length prefix before the 256 bytes proof
    assert prepared_bytes[:4] == (256).to_bytes(4, "little")

    decoded = ProofPackagePrepared.from_bytes(prepared_bytes)
    assert decoded.to_bytes() == prepared_bytes
    assert verify_proof_package(decoded)


def test_lite_package_with_non_canonical_input(proof_packages):
    lite, _, _ = proof_packages

    package = ProofPackageLite(lite.proof, [b"\xff" * 32], lite.verifying_key)
    with pytest.raises(InvalidPublicInput):
        verify_proof_package(package)


def test_equal_values(keys):
    pk, vk = keys
    circuit = InequalityCircuit(500, 500)

    _, prepared, native = generate_proof_package(pk, vk, circuit, circuit.public_inputs())
    assert verify_proof_package(native)
    assert build_verifier(prepared).verify()


def test_false_claim_fails_to_prove(keys):
    pk, vk = keys
    circuit = InequalityCircuit(500, 1000)

    with pytest.raises(ProofGenerationFailed):
        generate_proof_package(pk, vk, circuit, circuit.public_inputs())

    with pytest.raises(ProofGenerationFailed):
        prove(pk, circuit)


def test_public_input_validation(keys):
    pk, vk = keys
    circuit = InequalityCircuit(1000, 500)

    # prover value is not a public input
    with pytest.raises(InvalidPublicInput):
        generate_proof_package(
            pk, vk, circuit, [field_to_bytes(1000), field_to_bytes(500)]
        )

    with pytest.raises(InvalidPublicInput):
        generate_proof_package(pk, vk, circuit, [field_to_bytes(1)] * 11)

    with pytest.raises(InvalidPublicInput):
        generate_proof_package(pk, vk, circuit, [b"\xff" * 32])

    assert validate_public_input(field_to_bytes(500)) == 500
    with pytest.raises(InvalidPublicInput):
        validate_public_input(BN254_SCALAR_FIELD.to_bytes(32, "little"))


def test_proving_key_validation(keys, public_keys):
    pk, _ = keys
    public_pk, _ = public_keys

    validate_proving_key(pk, InequalityCircuit(1000, 500))
    validate_proving_key(public_pk, PublicInequalityCircuit(1000, 500))

    with pytest.raises(InvalidProvingKey):
        validate_proving_key(public_pk, InequalityCircuit(1000, 500))

    with pytest.raises(CircuitValidationFailed):
        validate_proving_key(pk, InequalityCircuit(public_value=500))

    empty = ProvingKey(pk.vk, pk.beta_1, pk.delta_1, [], [], [], pk.h_query, [])
    with pytest.raises(InvalidProvingKey):
        validate_proving_key(empty, InequalityCircuit(1000, 500))


def test_mismatched_verifying_key_is_rejected_before_proving(
    keys, public_keys, monkeypatch
):
    pk, vk = keys
    _, public_vk = public_keys
    circuit = InequalityCircuit(1000, 500)

    def no_proving(*args, **kwargs):
        raise AssertionError("proving must not start")

    monkeypatch.setattr(prover_module, "_prove", no_proving)

    with pytest.raises(InvalidProvingKey):
        generate_proof_package(pk, public_vk, circuit, circuit.public_inputs())

    # same shape, different setup
    other_vk = VerifyingKey(vk.alpha_1 * 2, vk.beta_2, vk.gamma_2, vk.delta_2, vk.ic)
    with pytest.raises(InvalidProvingKey):
        generate_proof_package(pk, other_vk, circuit, circuit.public_inputs())


def test_tampered_public_input(keys, proof_packages):
    _, vk = keys
    _, _, native = proof_packages

    assert not verify_with_inputs(vk, [499], native.proof)
    assert not verify_with_inputs(vk, [501], native.proof)


def test_unrelated_proof_is_rejected(keys, proof_packages):
    _, vk = keys
    _, _, native = proof_packages
    E = EllipticCurve()

    random_proof = Proof(
        E.G1() * get_random_int(E.order - 1),
        E.G2() * get_random_int(E.order - 1),
        E.G1() * get_random_int(E.order - 1),
    )
    assert not verify(random_proof, native.public_inputs, vk)


def test_invalid_points_are_typed_errors(keys, proof_packages):
    _, vk = keys
    _, _, native = proof_packages
    E = EllipticCurve()

    zero_proof = Proof(E.Z1(), E.Z2(), E.Z1())
    with pytest.raises(InvalidProof):
        verify(zero_proof, native.public_inputs, vk)

    with pytest.raises(InvalidPublicInput):
        verify(native.proof, E.Z1(), vk)


def test_prepare_inputs(keys, proof_packages):
    _, vk = keys
    _, _, native = proof_packages

    assert prepare_inputs(vk, [500]) == native.public_inputs
    assert prepare_inputs(vk, [field_to_bytes(500)]) == native.public_inputs
    assert prepare_inputs(vk, [0]) == vk.ic[0]

    with pytest.raises(IncompatibleVerifyingKeyWithNrPublicInputs):
        prepare_inputs(vk, [1000, 500])

    with pytest.raises(InvalidPublicInput):
        prepare_inputs(vk, [BN254_SCALAR_FIELD.to_bytes(32, "little")])


def test_verifier_object(keys):
    pk, vk = keys
    circuit = InequalityCircuit(70000, 1)
    proof = prove(pk, circuit)

    pub, _ = circuit.constraint_system().generate_witness()
    assert pub == [1, 1]

    verifier = Verifier(vk)
    assert verifier.verify(proof, pub)
    assert not verifier.verify(proof, [1, 2])

    with pytest.raises(IncompatibleVerifyingKeyWithNrPublicInputs):
        verifier.verify(proof, pub[1:])


def test_public_inequality_circuit(public_keys):
    pk, vk = public_keys
    assert vk.n_public == 2

    circuit = PublicInequalityCircuit(1000, 500)
    _, prepared, native = generate_proof_package(
        pk, vk, circuit, circuit.public_inputs()
    )

    assert verify_proof_package(native)
    assert build_verifier(prepared).verify()
    assert verify_with_inputs(vk, [1000, 500], native.proof)
    assert not verify_with_inputs(vk, [999, 500], native.proof)


def test_token_verification_circuit(keys):
    # same shape as the inequality circuit, the keys are shared
    pk, vk = keys
    assert vk.n_public == 1

    circuit = TokenVerificationCircuit(tokens_to_send=1000, tokens_asked=500)
    lite, prepared, native = generate_proof_package(
        pk, vk, circuit, circuit.public_inputs()
    )

    assert verify_proof_package(native)
    assert verify_proof_package(lite)
    assert verify_with_inputs(vk, [500], native.proof)
    assert not verify_with_inputs(vk, [400], native.proof)

    circuit = TokenVerificationCircuit(tokens_to_send=500, tokens_asked=1000)
    with pytest.raises(ProofGenerationFailed):
        generate_proof_package(pk, vk, circuit, circuit.public_inputs())


def test_key_serialization(keys):
    pk, vk = keys

    vk_bytes = vk.to_bytes()
    assert VerifyingKey.from_bytes(vk_bytes).to_bytes() == vk_bytes
    assert len(vk_bytes) == 64 + 128 * 3 + 8 + 64 * len(vk.ic)

    pk_bytes = pk.to_bytes()
    assert ProvingKey.from_bytes(pk_bytes).to_bytes() == pk_bytes

    pvk = prepare_verifying_key(vk)
    pvk_bytes = pvk.to_bytes()
    decoded = PreparedVerifyingKey.from_bytes(pvk_bytes)
    assert decoded.to_bytes() == pvk_bytes
    assert decoded.alpha_beta == pvk.alpha_beta

    assert Proof.from_bytes(Proof(vk.alpha_1, vk.beta_2, vk.ic[0]).to_bytes()).B == vk.beta_2


def test_save_and_load_keys(keys, tmp_path, monkeypatch):
    pk, vk = keys

    save_keys_to(pk, vk, str(tmp_path))
    assert (tmp_path / "pk.bin").read_bytes() == pk.to_bytes()
    assert (tmp_path / "vk.bin").read_bytes() == vk.to_bytes()

    monkeypatch.setenv("ZKTHRESHOLD_KEY_DIR", str(tmp_path))
    loaded_pk, loaded_vk = load_keys()

    assert loaded_vk.to_bytes() == vk.to_bytes()
    assert loaded_pk.to_bytes() == pk.to_bytes()


def test_class_api_without_range_check():
    cs = InequalityCircuit(1000, 500, range_check=False).constraint_system()
    qap = QAP()
    qap.from_r1cs(cs)

    pkey, vkey = Setup(qap).generate()
    assert len(pkey.h_query) == qap.domain - 1
    assert len(vkey.ic) == 2

    pub, priv = cs.generate_witness()
    proof = Prover(qap, pkey).prove(pub, priv)

    assert Verifier(vkey).verify(proof, pub)
