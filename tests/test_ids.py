"""Tests for report id synthesis."""

from hypothesis import given
from hypothesis import strategies as st

from cukejson.core.ids import make_id, outline_row_id, scenario_id

ascii_names = st.text(alphabet=st.characters(min_codepoint=32, max_codepoint=126))


def test_make_id_lowercases_and_hyphenates():
    assert make_id("Eat Cucumber") == "eat-cucumber"


def test_make_id_keeps_other_characters():
    assert make_id("Eat 5 cukes! (fast)") == "eat-5-cukes!-(fast)"


def test_make_id_replaces_every_space():
    assert make_id("a  b ") == "a--b-"


def test_make_id_empty_name():
    assert make_id("") == ""


def test_scenario_id():
    assert scenario_id("eat-cucumbers", "Eat cucumber") == "eat-cucumbers;eat-cucumber"


def test_outline_row_id():
    assert (
        outline_row_id("eat-cucumbers", "Eat some", "Some counts", 2)
        == "eat-cucumbers;eat-some;some-counts;2"
    )


def test_outline_row_id_extends_scenario_id():
    row_id = outline_row_id("feature", "Outline", "", 3)
    assert row_id.startswith(scenario_id("feature", "Outline") + ";")
    assert row_id == "feature;outline;;3"


def test_ids_are_stable():
    assert scenario_id("f", "Same Name") == scenario_id("f", "Same Name")
    assert scenario_id("f", "Same Name") != scenario_id("g", "Same Name")


@given(ascii_names)
def test_make_id_has_no_spaces(name: str):
    result = make_id(name)
    assert " " not in result
    assert len(result) == len(name)
    assert make_id(result) == result
