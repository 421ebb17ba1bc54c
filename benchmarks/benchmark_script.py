import time

from zkthreshold import InequalityCircuit
from zkthreshold.groth16 import Prover, Setup, Verifier
from zkthreshold.qap import QAP


def run(range_check):

    time_results = []

    circuit = InequalityCircuit(1000, 500, range_check=range_check)

    start = time.time()
    cs = circuit.constraint_system()
    qap = QAP()
    qap.from_r1cs(cs)
    end = time.time() - start
    time_results.append(end)

    start = time.time()
    pub, priv = cs.generate_witness()
    end = time.time() - start
    time_results.append(end)

    start = time.time()
    pkey, vkey = Setup(qap).generate()
    end = time.time() - start
    time_results.append(end)

    start = time.time()
    proof = Prover(qap, pkey).prove(pub, priv)
    end = time.time() - start
    time_results.append(end)

    start = time.time()
    assert Verifier(vkey).verify(proof, pub)
    end = time.time() - start
    time_results.append(end)

    return time_results, cs.num_constraints()


for range_check in (False, True):
    result, n = run(range_check)
    print(f"{n} constraints (range_check={range_check})")
    print("=" * 50)
    print("Compile time:", result[0])
    print("Witness gen time:", result[1])
    print("Setup time:", result[2])
    print("Prove time:", result[3])
    print("Verify time:", result[4])
    print("=" * 50)
