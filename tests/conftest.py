import pytest

from zkthreshold.circuit import InequalityCircuit, PublicInequalityCircuit
from zkthreshold.groth16 import generate_proof_package, setup


@pytest.fixture(scope="session")
def keys():
    return setup(InequalityCircuit())


@pytest.fixture(scope="session")
def public_keys():
    return setup(PublicInequalityCircuit())


@pytest.fixture(scope="session")
def proof_packages(keys):
    pk, vk = keys
    circuit = InequalityCircuit(1000, 500)

    return generate_proof_package(pk, vk, circuit, circuit.public_inputs())
