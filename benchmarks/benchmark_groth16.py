import time

from zkthreshold import InequalityCircuit
from zkthreshold.groth16 import (
    build_verifier,
    generate_proof_package,
    setup,
    verify_proof_package,
)


def run(prover_value, public_value):

    time_results = []

    start = time.time()
    pk, vk = setup(InequalityCircuit())
    end = time.time() - start
    time_results.append(end)

    circuit = InequalityCircuit(prover_value, public_value)

    start = time.time()
    _, prepared, native = generate_proof_package(pk, vk, circuit, circuit.public_inputs())
    end = time.time() - start
    time_results.append(end)

    start = time.time()
    assert verify_proof_package(native)
    end = time.time() - start
    time_results.append(end)

    start = time.time()
    assert build_verifier(prepared).verify()
    end = time.time() - start
    time_results.append(end)

    return time_results


result = run(1000, 500)
print("1000 >= 500 with BN254 curve")
print("=" * 50)
print("Setup time:", result[0])
print("Prove time:", result[1])
print("Verify time:", result[2])
print("Prepared verify time:", result[3])
print("=" * 50)
