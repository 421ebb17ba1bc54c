from .constant import BN254_SCALAR_FIELD
from .polynomial import PolynomialRing
from .r1cs import ConstraintSystem
from .utils import next_power_of_two


class QAP:

    def __init__(self, p=None):
        self.a = None
        self.b = None
        self.c = None
        self.n_public = 0
        self.n_constraints = 0
        self.domain = 0

        self.p = p or BN254_SCALAR_FIELD

    @property
    def n_variables(self):
        return self.a.n_col

    def from_r1cs(self, cs: ConstraintSystem):
        """
        Parse QAP from the matrices of a constraint system

        Args:
            cs: ConstraintSystem with all constraints enforced
        """
        self.n_public = cs.num_instance_variables()
        self.n_constraints = cs.num_constraints()

        self.a, self.b, self.c = cs.to_matrices()

        # one extra row per public variable
        self.domain = next_power_of_two(self.n_constraints + self.n_public)
        self.a.n_row = self.domain
        self.b.n_row = self.domain
        self.c.n_row = self.domain

        self.__add_dummy_constraints()

    def __add_dummy_constraints(self):
        """
        Add `public * 0 = 0` constraints to prevent proof malleability from unused public input
        See: https://geometry.xyz/notebook/groth16-malleability
        """
        for i in range(self.n_public):
            self.a.append_row(self.n_constraints + i, [(i, 1)])

    def evaluate_witness(self, witness: list):
        """
        Evaluate QAP with witness vector. Incorrect witness value will raise an error.

        Args:
            witness: witness vector (public+private) to be evaluated

        Return:
            U, V, W, H: resulting polynomials to be proved
        """
        assert len(witness) == self.n_variables, "Witness length differs from QAP"

        # polynomial interpolation via INTT
        u = PolynomialRing.from_evaluations(self.a.dot(witness), self.p)
        v = PolynomialRing.from_evaluations(self.b.dot(witness), self.p)
        w = PolynomialRing.from_evaluations(self.c.dot(witness), self.p)

        # H = (U * V - W) / Z
        h, remainder = (u * v - w).divide_by_vanishing_poly(self.domain)
        if not remainder.is_zero():
            raise ValueError("(U * V - W) did not divided by Z to zero")

        return u, v, w, h
