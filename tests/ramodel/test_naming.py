from ramodel.model import Model
from ramodel.naming import print_name
from ramodel.relations import Relation


def _model(variables, *relations):
    m = Model()
    for names in relations:
        m.add_relation(Relation(variables, names))
    return m


def test_relations_joined_in_canonical_order(abc):
    m = _model(abc, ["B", "C"], ["A", "B"])
    assert m.get_print_name() == "AB:BC"
    assert m.get_print_name(True) == "C:A"


def test_several_single_variable_relations_collapse_to_ivi(abc):
    assert _model(abc, ["A"], ["B"], ["C"]).get_print_name() == "IVI"
    assert _model(abc, ["A"], ["C"], ["A", "B"]).get_print_name() == "IVI:AB"


def test_single_lone_variable_is_rendered(abc):
    assert _model(abc, ["A", "B"], ["C"]).get_print_name() == "AB:C"


def test_state_based_singles_are_not_collapsed(xy, make_sb):
    m = Model()
    m.add_relation(make_sb(xy, ["X"], [(0,)]))
    m.add_relation(make_sb(xy, ["Y"], [(1,)]))
    assert m.get_print_name() == "X.X0:Y.Y1"


def test_directed_independent_only_relation_is_iv(directed):
    m = _model(directed, ["A", "Z"], ["A", "B"], ["B", "Z"])
    assert m.get_print_name() == "IV:AZ:BZ"
    # no IVI collapsing in directed systems
    assert not _model(directed, ["A"], ["B"], ["Z"]).get_print_name().startswith("IVI")


def test_name_is_memoized_until_mutation(abc):
    m = _model(abc, ["A", "B"])
    first = m.get_print_name()
    assert m.get_print_name() is first
    assert print_name(m) == first
    m.add_relation(Relation(abc, ["C"]))
    assert m.get_print_name() == "AB:C"


def test_empty_model_has_empty_name():
    assert Model().get_print_name() == ""
