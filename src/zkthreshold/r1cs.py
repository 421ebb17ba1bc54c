"""
Rank-1 constraint system builder.

Variables are allocated as instance (public) or witness (private) and
constraints are enforced in the form `<a, z> * <b, z> = <c, z>`, where
`z = [1, instance..., witness...]` is the full assignment. Index 0 of the
instance vector is the implicit constant one.
"""

from typing import Callable, Union

from .array import SparseArray
from .constant import BN254_SCALAR_FIELD
from .errors import AssignmentMissing, UnsatisfiedConstraint
from .symbolic import ONE, LinearCombination, Variable, to_lc

Hint = Union[Callable[[], int], int, None]


class ConstraintSystem:
    def __init__(self, p: int = BN254_SCALAR_FIELD, setup_mode: bool = False):
        """
        Args:
            p: scalar field modulus
            setup_mode: allocate variables without evaluating value hints,
                used to derive the circuit shape for key generation
        """
        self.p = p
        self.setup_mode = setup_mode

        self.instance_names = [ONE.name]
        self.instance_assignment = [1]
        self.witness_names = []
        self.witness_assignment = []
        self.constraints = []

    def _evaluate_hint(self, hint: Hint, name: str):
        if self.setup_mode:
            return None

        value = hint() if callable(hint) else hint
        if value is None:
            raise AssignmentMissing(f"Missing assignment for `{name}`")

        return int(value) % self.p

    def new_input_variable(self, hint: Hint, name: str = None) -> Variable:
        """Allocate public variable whose value is given by `hint`"""
        index = len(self.instance_names)
        var = Variable(Variable.INSTANCE, index, name)

        self.instance_assignment.append(self._evaluate_hint(hint, var.name))
        self.instance_names.append(var.name)

        return var

    def new_witness_variable(self, hint: Hint, name: str = None) -> Variable:
        """Allocate private variable whose value is given by `hint`"""
        index = len(self.witness_names)
        var = Variable(Variable.WITNESS, index, name)

        self.witness_assignment.append(self._evaluate_hint(hint, var.name))
        self.witness_names.append(var.name)

        return var

    def enforce_constraint(self, a, b, c, name: str = None):
        """
        Add new constraint `a * b = c` to the system.

        Args:
            a, b, c: linear combination, variable or constant
            name: label reported when the constraint is unsatisfied
        """
        name = name or f"constraint_{len(self.constraints)}"
        self.constraints.append((to_lc(a), to_lc(b), to_lc(c), name))

    def num_instance_variables(self) -> int:
        """Number of instance variables including the constant one"""
        return len(self.instance_names)

    def num_witness_variables(self) -> int:
        return len(self.witness_names)

    def num_constraints(self) -> int:
        return len(self.constraints)

    def num_variables(self) -> int:
        return self.num_instance_variables() + self.num_witness_variables()

    def column(self, var: Variable) -> int:
        """Index of `var` inside the full assignment vector"""
        if var.kind == Variable.ONE:
            return 0
        if var.kind == Variable.INSTANCE:
            return var.index
        return self.num_instance_variables() + var.index

    def value(self, var: Variable) -> int:
        if self.setup_mode:
            raise AssignmentMissing("Constraint system has no assignment in setup mode")

        if var.kind == Variable.ONE:
            return 1
        if var.kind == Variable.INSTANCE:
            return self.instance_assignment[var.index]
        return self.witness_assignment[var.index]

    def eval_lc(self, lc: LinearCombination) -> int:
        return lc.evaluate(self.value)

    def which_is_unsatisfied(self):
        """Return the name of the first unsatisfied constraint, or `None`"""
        for a, b, c, name in self.constraints:
            if self.eval_lc(a) * self.eval_lc(b) % self.p != self.eval_lc(c):
                return name

        return None

    def is_satisfied(self) -> bool:
        return self.which_is_unsatisfied() is None

    def check_satisfied(self):
        """Raise `UnsatisfiedConstraint` if the assignment violates a constraint"""
        name = self.which_is_unsatisfied()
        if name is not None:
            raise UnsatisfiedConstraint(name)

    def to_matrices(self):
        """
        Compile constraints into R1CS sparse matrices A, B, C

        Returns:
            (A, B, C): `SparseArray` of `num_constraints` rows and
            `num_variables` columns
        """
        n_row = self.num_constraints()
        n_col = self.num_variables()

        rows = ([], [], [])
        for constraint in self.constraints:
            for mat, lc in zip(rows, constraint[:3]):
                mat.append([(self.column(var), coeff) for var, coeff in lc])

        return tuple(SparseArray(mat, n_row, n_col, self.p) for mat in rows)

    def generate_witness(self):
        """
        Return the full assignment split as (public_witness, private_witness),
        public witness being prefixed by the constant one
        """
        if self.setup_mode:
            raise AssignmentMissing("Constraint system has no assignment in setup mode")

        return list(self.instance_assignment), list(self.witness_assignment)
