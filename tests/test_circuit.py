import pytest

from zkthreshold.circuit import (
    InequalityCircuit,
    PublicInequalityCircuit,
    TokenVerificationCircuit,
)
from zkthreshold.codec import field_to_bytes
from zkthreshold.constant import BN254_SCALAR_FIELD, RANGE_BOUND
from zkthreshold.errors import AssignmentMissing, InvalidRange, MissingAssignment
from zkthreshold.r1cs import ConstraintSystem

# neg_b, d, 32 booleans, 32 accumulators, final range check
N_CONSTRAINTS = 2 + 32 + 32 + 1


def test_value_range():
    InequalityCircuit(0, 0)
    InequalityCircuit(RANGE_BOUND - 1, RANGE_BOUND - 1)

    with pytest.raises(InvalidRange):
        InequalityCircuit(RANGE_BOUND, 1)

    with pytest.raises(InvalidRange):
        InequalityCircuit(1, -1)

    with pytest.raises(InvalidRange):
        TokenVerificationCircuit(1.5, 1)


def test_properties_are_read_only():
    circuit = InequalityCircuit(1000, 500)

    assert circuit.prover_value == 1000
    assert circuit.public_value == 500
    assert circuit.range_check

    with pytest.raises(AttributeError):
        circuit.prover_value = 1


def test_public_inputs():
    circuit = InequalityCircuit(1000, 500)
    assert circuit.num_public_inputs() == 1
    assert circuit.public_inputs() == [field_to_bytes(500)]

    both = PublicInequalityCircuit(1000, 500)
    assert both.num_public_inputs() == 2
    assert both.public_inputs() == [field_to_bytes(1000), field_to_bytes(500)]

    token = TokenVerificationCircuit(tokens_to_send=1000, tokens_asked=500)
    assert token.num_public_inputs() == 1
    assert token.public_inputs() == [field_to_bytes(500)]
    assert token.tokens_to_send == 1000

    with pytest.raises(MissingAssignment):
        InequalityCircuit(public_value=500).public_inputs()


def test_constraint_shape():
    cs = InequalityCircuit(1000, 500).constraint_system()

    assert cs.num_constraints() == N_CONSTRAINTS
    # constant one and public_value
    assert cs.num_instance_variables() == 2
    assert cs.num_witness_variables() == 1 + 2 + 32 + 32

    cs = TokenVerificationCircuit(1000, 500).constraint_system()
    assert cs.num_instance_variables() == 2
    assert cs.num_witness_variables() == 1 + 2 + 32 + 32

    cs = PublicInequalityCircuit(1000, 500).constraint_system()
    assert cs.num_constraints() == N_CONSTRAINTS
    assert cs.num_instance_variables() == 3
    assert cs.num_witness_variables() == 2 + 32 + 32

    cs = InequalityCircuit(1000, 500, range_check=False).constraint_system()
    assert cs.num_constraints() == 2


def test_blank_circuit_has_the_same_shape():
    assigned = InequalityCircuit(1000, 500).constraint_system()
    blank = InequalityCircuit().constraint_system(setup_mode=True)

    assert blank.num_constraints() == assigned.num_constraints()
    assert blank.num_variables() == assigned.num_variables()

    with pytest.raises(AssignmentMissing):
        InequalityCircuit().constraint_system()


@pytest.mark.parametrize(
    "prover_value, public_value",
    [(1000, 500), (500, 500), (RANGE_BOUND - 1, 0), (1, 0)],
)
def test_true_claim_is_satisfied(prover_value, public_value):
    cs = ConstraintSystem()
    InequalityCircuit(prover_value, public_value).generate_constraints(cs)

    assert cs.is_satisfied()

    pub, priv = cs.generate_witness()
    assert pub == [1, public_value]
    assert priv[0] == prover_value

    cs = PublicInequalityCircuit(prover_value, public_value).constraint_system()
    pub, _ = cs.generate_witness()
    assert pub == [1, prover_value, public_value]


@pytest.mark.parametrize(
    "prover_value, public_value",
    [(500, 1000), (0, 1), (0, RANGE_BOUND - 1)],
)
def test_false_claim_is_unsatisfied(prover_value, public_value):
    cs = TokenVerificationCircuit(prover_value, public_value).constraint_system()

    assert cs.which_is_unsatisfied() == "range_check"


def test_false_claim_without_range_check_is_satisfied():
    cs = InequalityCircuit(500, 1000, range_check=False).constraint_system()

    assert cs.is_satisfied()
    _, priv = cs.generate_witness()
    # prover_value, neg_public_value, difference
    assert priv[0] == 500
    # difference wraps around the field
    assert priv[2] == (500 - 1000) % BN254_SCALAR_FIELD
