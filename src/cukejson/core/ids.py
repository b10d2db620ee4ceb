"""Report identifiers derived from feature, scenario and examples names.

Downstream tooling correlates reports across runs by these ids, so they must
only depend on the names. Two plain scenarios sharing a name inside the same
feature get the same id.
"""


def make_id(name: str) -> str:
    """Lowercase a name and replace spaces with hyphens.

    No other character is escaped: ``"Eat 5 cukes!"`` becomes ``"eat-5-cukes!"``.
    """
    return name.replace(" ", "-").lower()


def scenario_id(feature_id: str, scenario_name: str) -> str:
    """Id of a plain scenario: ``{feature};{scenario}``."""
    return f"{feature_id};{make_id(scenario_name)}"


def outline_row_id(
    feature_id: str,
    scenario_name: str,
    example_name: str,
    row_index: int,
) -> str:
    """Id of one examples row of a scenario outline.

    Args:
        feature_id: Id of the owning feature (already slugged)
        scenario_name: Name of the scenario outline
        example_name: Name of the examples block
        row_index: Display index of the row (header row is 1, first data row is 2)

    Returns:
        ``{feature};{scenario};{examples};{row_index}``
    """
    return f"{scenario_id(feature_id, scenario_name)};{make_id(example_name)};{row_index}"
