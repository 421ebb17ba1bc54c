"""
Circuits proving `prover_value >= public_value`.

The difference `D = prover_value - public_value` is range checked into
`[0, 2^32)` by decomposing it into 32 boolean bits and constraining an
accumulator of `bit_i * 2^i` to equal `D`. When the claim is false, `D`
wraps around the field modulus and cannot be rebuilt from 32 bits, so the
final accumulator constraint is left unsatisfied and proving fails.
"""

import logging

from .codec import field_to_bytes
from .constant import BN254_SCALAR_FIELD, RANGE_BITS, RANGE_BOUND
from .errors import AssignmentMissing, InvalidRange, MissingAssignment
from .r1cs import ConstraintSystem
from .symbolic import ONE

logger = logging.getLogger(__name__)


def _check_range(value):
    if value is None:
        return None

    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidRange(f"Value must be an integer, got {type(value).__name__}")

    if value < 0 or value >= RANGE_BOUND:
        raise InvalidRange(f"Value {value} is outside [0, 2^{RANGE_BITS})")

    return value


class InequalityCircuit:
    """
    Prove `prover_value >= public_value` without revealing `prover_value`,
    only `public_value` is exposed as public input

    Args:
        prover_value: left-hand side of the inequality
        public_value: right-hand side (threshold) of the inequality
        range_check: enforce the 32-bit decomposition of the difference
    """

    # whether `prover_value` is allocated as instance (public) variable
    prover_value_public = False

    def __init__(self, prover_value: int = None, public_value: int = None, range_check=True):
        self._prover_value = _check_range(prover_value)
        self._public_value = _check_range(public_value)
        self._range_check = bool(range_check)

    @property
    def prover_value(self):
        return self._prover_value

    @property
    def public_value(self):
        return self._public_value

    @property
    def range_check(self):
        return self._range_check

    def __repr__(self):
        return (
            f"{self.__class__.__name__}(public_value={self.public_value}, "
            f"range_check={self.range_check})"
        )

    def is_assigned(self) -> bool:
        return self.prover_value is not None and self.public_value is not None

    def _public_values(self) -> list:
        if self.prover_value_public:
            return [self.prover_value, self.public_value]
        return [self.public_value]

    def num_public_inputs(self) -> int:
        return len(self._public_values())

    def public_inputs(self) -> list:
        """
        Return public input values in allocation order,
        each serialized into 32 bytes little-endian
        """
        if not self.is_assigned():
            raise MissingAssignment()

        return [field_to_bytes(v) for v in self._public_values()]

    def _require(self, value):
        def hint():
            if value is None:
                raise AssignmentMissing()
            return value

        return hint

    def _allocate_values(self, cs: ConstraintSystem):
        if self.prover_value_public:
            x = cs.new_input_variable(self._require(self.prover_value), "prover_value")
        else:
            x = cs.new_witness_variable(self._require(self.prover_value), "prover_value")

        y = cs.new_input_variable(self._require(self.public_value), "public_value")

        return x, y

    def generate_constraints(self, cs: ConstraintSystem):
        """Synthesize inequality constraints into `cs`"""
        p = cs.p
        x, y = self._allocate_values(cs)

        # neg_y = -Y
        neg_y = cs.new_witness_variable(lambda: -cs.value(y) % p, "neg_public_value")
        cs.enforce_constraint(-y, ONE, neg_y, "neg_public_value")

        # D = X + neg_y
        d = cs.new_witness_variable(
            lambda: (cs.value(x) + cs.value(neg_y)) % p, "difference"
        )
        cs.enforce_constraint(x + neg_y, ONE, d, "difference")

        if self.range_check:
            self._range_check_constraints(cs, d)

        logger.debug(
            "Synthesized %s: %d constraints, %d instance, %d witness variables",
            self.__class__.__name__,
            cs.num_constraints(),
            cs.num_instance_variables(),
            cs.num_witness_variables(),
        )

    def _range_check_constraints(self, cs: ConstraintSystem, d):
        """Constrain `d` into `[0, 2^32)` via bit decomposition"""
        acc = None
        for i in range(RANGE_BITS):
            bit = cs.new_witness_variable(
                lambda i=i: (cs.value(d) >> i) & 1, f"difference_bit[{i}]"
            )
            cs.enforce_constraint(bit, bit, bit, f"boolean_bit[{i}]")

            term = (1 << i) * bit
            lc = term if acc is None else acc + term

            prev = acc
            acc = cs.new_witness_variable(
                lambda i=i, prev=prev, bit=bit: (
                    (cs.value(prev) if prev is not None else 0)
                    + (1 << i) * cs.value(bit)
                )
                % cs.p,
                f"accumulator[{i}]",
            )
            cs.enforce_constraint(lc, ONE, acc, f"accumulator[{i}]")

        cs.enforce_constraint(acc, ONE, d, "range_check")

    def constraint_system(self, setup_mode=False) -> ConstraintSystem:
        """Synthesize the circuit into a fresh constraint system"""
        cs = ConstraintSystem(BN254_SCALAR_FIELD, setup_mode)
        self.generate_constraints(cs)
        return cs


class PublicInequalityCircuit(InequalityCircuit):
    """
    Prove `prover_value >= public_value` with both values exposed
    as public inputs, in that order
    """

    prover_value_public = True


class TokenVerificationCircuit(InequalityCircuit):
    """
    Prove `tokens_to_send >= tokens_asked` keeping `tokens_to_send` private

    Args:
        tokens_to_send: private amount available to send
        tokens_asked: public requested amount
    """

    def __init__(self, tokens_to_send: int = None, tokens_asked: int = None, range_check=True):
        super().__init__(tokens_to_send, tokens_asked, range_check)

    @property
    def tokens_to_send(self):
        return self.prover_value

    @property
    def tokens_asked(self):
        return self.public_value
