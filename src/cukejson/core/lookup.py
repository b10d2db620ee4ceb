"""Identifier index over the message stream.

Messages only reference each other by opaque ids, and the record behind an id
may arrive before or after the record that references it. Every record seen
is indexed here for the whole run; entries are overwritten by later records
with the same id and never removed.

``MessageLookup`` is the typed view used by the rest of the package. Every
lookup returns ``None`` when the id is unknown and leaves it to the caller to
decide whether that is fatal.
"""

import logging
from collections.abc import Iterable
from enum import Enum
from typing import Any

from ..models.messages import (
    Background,
    Envelope,
    Examples,
    GherkinDocument,
    Hook,
    Pickle,
    PickleStep,
    Scenario,
    Step,
    StepDefinition,
    Tag,
    TableRow,
    TestCase,
    TestStep,
)

logger = logging.getLogger(__name__)


class RecordKind(str, Enum):
    """Tables of the identifier index."""

    GHERKIN_DOCUMENT = "gherkin_document"  # keyed by URI
    SCENARIO = "scenario"
    STEP = "step"
    BACKGROUND = "background"
    BACKGROUND_BY_STEP = "background_by_step"
    EXAMPLE = "example"  # keyed by row id
    EXAMPLE_ROW = "example_row"
    EXAMPLE_ROW_INDEX = "example_row_index"
    TAG = "tag"
    PICKLE = "pickle"
    PICKLE_STEP = "pickle_step"
    TEST_CASE = "test_case"
    TEST_CASE_BY_TEST_STEP = "test_case_by_test_step"
    TEST_STEP = "test_step"
    STEP_DEFINITION = "step_definition"
    HOOK = "hook"


class IdentifierIndex:
    """Mapping tables from id to the last record seen for each kind."""

    def __init__(self) -> None:
        self._tables: dict[RecordKind, dict[str, Any]] = {kind: {} for kind in RecordKind}

    def record(self, kind: RecordKind, id: str, value: Any) -> None:
        """Store value under (kind, id), replacing any earlier value."""
        self._tables[kind][id] = value

    def lookup(self, kind: RecordKind, id: str) -> Any | None:
        """Return the value stored under (kind, id), or None."""
        return self._tables[kind].get(id)

    def __contains__(self, key: tuple[RecordKind, str]) -> bool:
        kind, id = key
        return id in self._tables[kind]


class MessageLookup:
    """Typed lookups over an ``IdentifierIndex`` fed from the envelope stream."""

    def __init__(self, index: IdentifierIndex | None = None) -> None:
        self.index = index or IdentifierIndex()

    # ------------------------------------------------------------------
    # Indexing
    # ------------------------------------------------------------------

    def process_envelope(self, envelope: Envelope) -> None:
        """Index every record carried by an envelope."""
        if envelope.gherkin_document is not None:
            self._process_gherkin_document(envelope.gherkin_document)
        elif envelope.pickle is not None:
            self._process_pickle(envelope.pickle)
        elif envelope.test_case is not None:
            self._process_test_case(envelope.test_case)
        elif envelope.step_definition is not None:
            definition = envelope.step_definition
            self.index.record(RecordKind.STEP_DEFINITION, definition.id, definition)
        elif envelope.hook is not None:
            self.index.record(RecordKind.HOOK, envelope.hook.id, envelope.hook)

    def _process_gherkin_document(self, document: GherkinDocument) -> None:
        self.index.record(RecordKind.GHERKIN_DOCUMENT, document.uri, document)
        feature = document.feature
        if feature is None:
            logger.debug(f"Document {document.uri} has no feature")
            return

        self._process_tags(feature.tags)
        for child in feature.children:
            if child.background is not None:
                self._process_background(child.background)
            if child.scenario is not None:
                self._process_scenario(child.scenario)
            if child.rule is not None:
                self._process_tags(child.rule.tags)
                for rule_child in child.rule.children:
                    if rule_child.background is not None:
                        self._process_background(rule_child.background)
                    if rule_child.scenario is not None:
                        self._process_scenario(rule_child.scenario)

    def _process_tags(self, tags: Iterable[Tag]) -> None:
        for tag in tags:
            self.index.record(RecordKind.TAG, tag.id, tag)

    def _process_background(self, background: Background) -> None:
        self.index.record(RecordKind.BACKGROUND, background.id, background)
        for step in background.steps:
            self.index.record(RecordKind.STEP, step.id, step)
            self.index.record(RecordKind.BACKGROUND_BY_STEP, step.id, background)

    def _process_scenario(self, scenario: Scenario) -> None:
        self.index.record(RecordKind.SCENARIO, scenario.id, scenario)
        self._process_tags(scenario.tags)
        for step in scenario.steps:
            self.index.record(RecordKind.STEP, step.id, step)
        for example in scenario.examples:
            self._process_tags(example.tags)
            for position, row in enumerate(example.table_body):
                self.index.record(RecordKind.EXAMPLE, row.id, example)
                self.index.record(RecordKind.EXAMPLE_ROW, row.id, row)
                # 1-based, and the header row counts as the first row
                self.index.record(RecordKind.EXAMPLE_ROW_INDEX, row.id, position + 2)

    def _process_pickle(self, pickle: Pickle) -> None:
        self.index.record(RecordKind.PICKLE, pickle.id, pickle)
        for pickle_step in pickle.steps:
            self.index.record(RecordKind.PICKLE_STEP, pickle_step.id, pickle_step)

    def _process_test_case(self, test_case: TestCase) -> None:
        self.index.record(RecordKind.TEST_CASE, test_case.id, test_case)
        for test_step in test_case.test_steps:
            self.index.record(RecordKind.TEST_STEP, test_step.id, test_step)
            self.index.record(RecordKind.TEST_CASE_BY_TEST_STEP, test_step.id, test_case)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def lookup_gherkin_document(self, uri: str) -> GherkinDocument | None:
        return self.index.lookup(RecordKind.GHERKIN_DOCUMENT, uri)

    def lookup_scenario(self, id: str) -> Scenario | None:
        return self.index.lookup(RecordKind.SCENARIO, id)

    def lookup_step(self, id: str) -> Step | None:
        return self.index.lookup(RecordKind.STEP, id)

    def lookup_background_by_step_id(self, step_id: str) -> Background | None:
        return self.index.lookup(RecordKind.BACKGROUND_BY_STEP, step_id)

    def is_background_step(self, step_id: str) -> bool:
        """True if the gherkin step belongs to a background."""
        return (RecordKind.BACKGROUND_BY_STEP, step_id) in self.index

    def lookup_example(self, row_id: str) -> Examples | None:
        """Return the examples block that owns a row."""
        return self.index.lookup(RecordKind.EXAMPLE, row_id)

    def lookup_example_row(self, id: str) -> TableRow | None:
        return self.index.lookup(RecordKind.EXAMPLE_ROW, id)

    def lookup_example_row_index(self, id: str) -> int | None:
        """Return the display index of an examples row (first data row is 2)."""
        return self.index.lookup(RecordKind.EXAMPLE_ROW_INDEX, id)

    def lookup_tag(self, id: str) -> Tag | None:
        return self.index.lookup(RecordKind.TAG, id)

    def lookup_pickle(self, id: str) -> Pickle | None:
        return self.index.lookup(RecordKind.PICKLE, id)

    def lookup_pickle_step(self, id: str) -> PickleStep | None:
        return self.index.lookup(RecordKind.PICKLE_STEP, id)

    def lookup_test_case(self, id: str) -> TestCase | None:
        return self.index.lookup(RecordKind.TEST_CASE, id)

    def lookup_test_case_by_test_step_id(self, test_step_id: str) -> TestCase | None:
        return self.index.lookup(RecordKind.TEST_CASE_BY_TEST_STEP, test_step_id)

    def lookup_test_step(self, id: str) -> TestStep | None:
        return self.index.lookup(RecordKind.TEST_STEP, id)

    def lookup_step_definition(self, id: str) -> StepDefinition | None:
        return self.index.lookup(RecordKind.STEP_DEFINITION, id)

    def lookup_step_definitions(self, ids: Iterable[str]) -> list[StepDefinition]:
        """Return the step definitions that resolve, in the order of ``ids``.

        Unknown ids are dropped: a test step may have no bound definition
        (undefined steps) or reference one that was never emitted.
        """
        definitions = []
        for id in ids:
            definition = self.lookup_step_definition(id)
            if definition is not None:
                definitions.append(definition)
        return definitions

    def lookup_hook(self, id: str) -> Hook | None:
        return self.index.lookup(RecordKind.HOOK, id)
