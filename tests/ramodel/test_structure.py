import numpy as np
import pytest

from ramodel.errors import ModelStructureError
from ramodel.keys import make_key
from ramodel.model import Model
from ramodel.relations import Relation, StateConstraints
from ramodel.statespace import enumerate_states
from ramodel.structure import build_structure_matrix, indices_from_key, structure_frame


def test_shape_and_default_row(xy, sb_relations):
    r1, r2, r3 = sb_relations
    m = build_structure_matrix([r1, r2, r3], xy)
    assert m.shape == (2 + 2 + 4 + 1, 4)
    assert m[-1].tolist() == [1, 1, 1, 1]
    assert m.dtype == np.int8


def test_variable_relation_rows(xy):
    m = build_structure_matrix([Relation(xy, ["X"])], xy)
    assert m.tolist() == [[1, 1, 0, 0], [0, 0, 1, 1], [1, 1, 1, 1]]


def test_fully_pinned_constraint_marks_one_state(xy, make_sb):
    m = build_structure_matrix([make_sb(xy, ["X", "Y"], [(0, 1)])], xy)
    assert m[0].tolist() == [0, 1, 0, 0]
    assert m[0].sum() == 1


def test_all_wildcard_constraint_marks_every_state(xy, make_sb):
    m = build_structure_matrix([make_sb(xy, ["X", "Y"], [(-1, -1)])], xy)
    assert m[0].tolist() == [1, 1, 1, 1]


def test_indices_from_key_on_larger_space(directed):
    states = enumerate_states(directed)
    idx = indices_from_key(make_key(directed, {1: 2}), directed, states)
    assert len(idx) == 2 * 2
    assert (states[idx, 1] == 2).all()


def test_empty_relation_list_is_fatal(xy):
    with pytest.raises(ModelStructureError):
        build_structure_matrix([], xy)
    with pytest.raises(ModelStructureError):
        Model().get_structure_matrix()


def test_zero_constraint_relation_is_fatal(xy):
    m = Model()
    m.add_relation(Relation(xy, ["X"], StateConstraints(xy)))
    with pytest.raises(ModelStructureError):
        m.get_structure_matrix()
    # nothing partial is kept
    assert m._struct_matrix is None


class _NoConstraints:
    def __init__(self, variables):
        self.variables = variables

    def get_state_constraints(self):
        return None

    def get_variable_list(self):
        return self.variables

    def get_print_name(self, use_inverse=False):
        return "broken"


class _MissingKey(_NoConstraints):
    def get_state_constraints(self):
        return self

    def get_constraint_count(self):
        return 2

    def get_constraint(self, i):
        return None


def test_missing_constraint_data_is_fatal(xy):
    with pytest.raises(ModelStructureError):
        build_structure_matrix([_NoConstraints(xy)], xy)
    with pytest.raises(ModelStructureError):
        build_structure_matrix([_MissingKey(xy)], xy)


def test_model_matrix_is_lazy_and_idempotent(xy, sb_relations):
    r1, r2, _ = sb_relations
    m = Model()
    m.add_relation(r1)
    m.add_relation(r2)
    matrix, n_states, n_rows = m.get_structure_matrix()
    assert (n_states, n_rows) == (4, 5)
    m.complete_sb_model()
    assert m.get_structure_matrix()[0] is matrix


def test_structure_frame_labels(xy, sb_relations):
    m = Model()
    m.add_relation(sb_relations[0])
    frame = structure_frame(m)
    assert list(frame.columns) == ["00", "01", "10", "11"]
    assert frame.index[-1] == "default"
    assert frame.index[0] == "X.X0+X1:0."
