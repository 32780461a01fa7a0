import pytest

from ramodel.relations import Relation, StateConstraints
from ramodel.variables import Variable, VariableList


def _sb(variables, names, states):
    idx = variables.indices(names)
    return Relation(variables, idx, StateConstraints.from_states(variables, idx, states))


@pytest.fixture
def xy():
    # two binary variables
    return VariableList([Variable("x", "X", 2), Variable("y", "Y", 2)])


@pytest.fixture
def abc():
    return VariableList([Variable(n.lower(), n, 2) for n in "ABC"])


@pytest.fixture
def directed():
    # A, B independent; Z dependent
    return VariableList([
        Variable("a", "A", 2),
        Variable("b", "B", 3),
        Variable("z", "Z", 2, is_dependent=True),
    ])


@pytest.fixture
def make_sb():
    """Factory: state-based relation over `names` pinning each tuple in `states`."""
    return _sb


@pytest.fixture
def sb_relations(xy):
    # R1: all states of X, R2: all states of Y, R3: full joint XY
    r1 = _sb(xy, ["X"], [(0,), (1,)])
    r2 = _sb(xy, ["Y"], [(0,), (1,)])
    r3 = _sb(xy, ["X", "Y"], [(0, 0), (0, 1), (1, 0), (1, 1)])
    return r1, r2, r3
