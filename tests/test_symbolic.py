import pytest

from zkthreshold.constant import BN254_SCALAR_FIELD
from zkthreshold.symbolic import ONE, LinearCombination, Variable, to_lc

p = BN254_SCALAR_FIELD


@pytest.fixture
def x():
    return Variable(Variable.INSTANCE, 1, "x")


@pytest.fixture
def y():
    return Variable(Variable.WITNESS, 0, "y")


def test_eval(x, y):
    values = {ONE: 1, x: 10, y: 4}

    lc = 2 * x + 3 * y - 5
    assert lc.evaluate(values.get) == (20 + 12 - 5) % p

    lc = x - y
    assert lc.evaluate(values.get) == 6

    lc = -x + y
    assert lc.evaluate(values.get) == (p - 6)


def test_terms_are_merged(x, y):
    lc = x + x + y - y

    assert len(lc) == 1
    assert dict(lc) == {x: 2}
    assert str(lc) == "2*x"
    assert str(x + y) == "x + y"
    assert str(LinearCombination()) == "0"


def test_variable_identity(x):
    assert x == Variable(Variable.INSTANCE, 1)
    assert x != Variable(Variable.WITNESS, 1)
    assert ONE.name == "one"


def test_to_lc(x):
    assert dict(to_lc(x)) == {x: 1}
    assert dict(to_lc(7)) == {ONE: 7}
    assert dict(to_lc(0)) == {}

    with pytest.raises(TypeError):
        to_lc("x")


def test_non_linear_operation(x, y):
    with pytest.raises(TypeError):
        x * y

    with pytest.raises(TypeError):
        (x + 1) * (y + 1)
