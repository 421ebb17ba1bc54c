from .constant import BN254_SCALAR_FIELD


class Variable:
    ONE = "ONE"
    INSTANCE = "INSTANCE"
    WITNESS = "WITNESS"

    def __init__(self, kind: str, index: int, name: str = None):
        self.kind = kind
        self.index = index
        self.name = name or f"{kind.lower()}_{index}"

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"Variable({self.kind}, {self.index}, {self.name!r})"

    def __eq__(self, other):
        if not isinstance(other, Variable):
            return NotImplemented
        return (self.kind, self.index) == (other.kind, other.index)

    def __hash__(self):
        return hash((self.kind, self.index))

    def lc(self):
        return LinearCombination({self: 1})

    def __add__(self, other):
        return self.lc() + other

    def __radd__(self, other):
        return self.lc() + other

    def __sub__(self, other):
        return self.lc() - other

    def __rsub__(self, other):
        return (-self.lc()) + other

    def __neg__(self):
        return -self.lc()

    def __mul__(self, other):
        return self.lc() * other

    def __rmul__(self, other):
        return self.lc() * other


ONE = Variable(Variable.ONE, 0, "one")


class LinearCombination:
    """Sum of `coeff * variable` terms over the scalar field"""

    def __init__(self, terms: dict = None, p: int = BN254_SCALAR_FIELD):
        self.p = p
        self.terms = {}
        for var, coeff in (terms or {}).items():
            self._add_term(var, coeff)

    def _add_term(self, var: Variable, coeff: int):
        coeff = (self.terms.get(var, 0) + coeff) % self.p
        if coeff == 0:
            self.terms.pop(var, None)
        else:
            self.terms[var] = coeff

    def copy(self):
        return LinearCombination(dict(self.terms), self.p)

    def __str__(self):
        if not self.terms:
            return "0"
        return " + ".join(
            str(var) if coeff == 1 else f"{coeff}*{var}"
            for var, coeff in self.terms.items()
        )

    def __repr__(self):
        return self.__str__()

    def __iter__(self):
        return iter(self.terms.items())

    def __len__(self):
        return len(self.terms)

    def __add__(self, other):
        result = self.copy()
        if isinstance(other, LinearCombination):
            for var, coeff in other.terms.items():
                result._add_term(var, coeff)
        elif isinstance(other, Variable):
            result._add_term(other, 1)
        elif isinstance(other, int):
            result._add_term(ONE, other)
        else:
            raise TypeError(f"Addition of {type(self)} with {type(other)} is not allowed")

        return result

    def __radd__(self, other):
        return self.__add__(other)

    def __neg__(self):
        return LinearCombination({v: -c for v, c in self.terms.items()}, self.p)

    def __sub__(self, other):
        return self.__add__(-other)

    def __rsub__(self, other):
        return (-self).__add__(other)

    def __mul__(self, other):
        if not isinstance(other, int):
            raise TypeError(
                "Only multiplication by constant is allowed in a linear combination"
            )
        return LinearCombination({v: c * other for v, c in self.terms.items()}, self.p)

    def __rmul__(self, other):
        return self.__mul__(other)

    def evaluate(self, value_of) -> int:
        """Evaluate with `value_of(variable)` supplying assignments"""
        return sum(coeff * value_of(var) for var, coeff in self.terms.items()) % self.p


def to_lc(x) -> LinearCombination:
    """Lift variable or constant into a linear combination"""
    if isinstance(x, LinearCombination):
        return x
    if isinstance(x, Variable):
        return x.lc()
    if isinstance(x, int):
        return LinearCombination({ONE: x})
    raise TypeError(f"Cannot convert {type(x)} into linear combination")
