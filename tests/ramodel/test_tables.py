import numpy as np
import pandas as pd
import pytest

from ramodel.model import Model
from ramodel.relations import Relation
from ramodel.tables import frequency_table, state_index, table_size
from ramodel.variables import Variable, VariableList


@pytest.fixture
def survey():
    return pd.DataFrame({
        "x": ["a", "a", "b", "b"],
        "y": ["u", "v", "u", "u"],
    })


def test_frequency_table_covers_full_state_space(survey):
    vl = VariableList.from_frame(survey)
    table = frequency_table(survey, vl)
    assert table.index.names == ["x", "y"]
    np.testing.assert_allclose(table.to_numpy(), [0.25, 0.25, 0.5, 0.0])
    assert table.loc[(1, 1)] == 0.0
    assert table.sum() == pytest.approx(1.0)


def test_counts_and_na_rows(survey):
    df = pd.concat([survey, pd.DataFrame({"x": [None], "y": ["v"]})], ignore_index=True)
    vl = VariableList.from_frame(survey)
    counts = frequency_table(df, vl, normalize=False)
    assert counts.tolist() == [1.0, 1.0, 2.0, 0.0]


def test_unlabelled_variables_read_integer_codes():
    df = pd.DataFrame({"p": [0, 1, 2, 2], "q": [1, 1, 0, 1]})
    vl = VariableList([Variable("p", "P", 3), Variable("q", "Q", 2)])
    counts = frequency_table(df, vl, normalize=False)
    assert len(counts) == 6
    assert counts.loc[(2, 1)] == 1.0
    with pytest.raises(ValueError):
        frequency_table(pd.DataFrame({"p": [5], "q": [0]}), vl)


def test_table_errors(survey):
    vl = VariableList.from_frame(survey)
    with pytest.raises(TypeError):
        frequency_table(survey.to_numpy(), vl)
    with pytest.raises(KeyError):
        frequency_table(survey.rename(columns={"x": "w"}), vl)


def test_fit_table_storage_and_size(survey):
    vl = VariableList.from_frame(survey)
    m = Model()
    m.add_relation(Relation(vl, ["x", "y"]))
    table = frequency_table(survey, vl)
    before = m.size()
    m.set_fit_table(table)
    assert m.get_fit_table() is table
    assert m.size() == before + table_size(table)
    assert "FitTable" in m.dump(detail=True)
    m.delete_fit_table()
    assert m.get_fit_table() is None
    assert table_size(None) == 0


def test_state_index_levels(survey):
    vl = VariableList.from_frame(survey)
    idx = state_index(vl)
    assert list(idx) == [(0, 0), (0, 1), (1, 0), (1, 1)]


def test_unknown_labels_are_rejected_not_dropped(survey):
    vl = VariableList.from_frame(survey)
    unseen = pd.DataFrame({"x": ["a", "c", "c"], "y": ["u", "u", "v"]})
    with pytest.raises(ValueError, match="'x'"):
        frequency_table(unseen, vl)


def test_only_na_rows_are_dropped(survey):
    vl = VariableList.from_frame(survey)
    df = pd.DataFrame({"x": ["a", np.nan, "b"], "y": ["u", "v", np.nan]})
    counts = frequency_table(df, vl, normalize=False)
    assert counts.sum() == 1.0
    assert counts.loc[(0, 0)] == 1.0


def test_numeric_labels_match_across_spellings():
    learned = pd.DataFrame({"k": [1.0, 2.0, np.nan, 2.0]})
    vl = VariableList.from_frame(learned)
    assert vl[0].values == ("1.0", "2.0")
    counts = frequency_table(pd.DataFrame({"k": [1, 2, 2, "1"]}), vl, normalize=False)
    assert counts.tolist() == [2.0, 2.0]


def test_unlabelled_variables_reject_fractional_codes():
    vl = VariableList([Variable("p", "P", 3)])
    with pytest.raises(ValueError, match="'p'"):
        frequency_table(pd.DataFrame({"p": [0, 1.5]}), vl)
