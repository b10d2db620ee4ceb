"""Single-pass reduction of a Cucumber message stream into a JSON report.

Every envelope is indexed by ``MessageLookup`` first. Pickles then add
elements and steps to the report, and test-step-finished records fill in the
results of steps created earlier. The stream is read once, in order, and
nothing is buffered beyond the index and the report itself.

Records whose mandatory references cannot be resolved are skipped and
counted in ``Formatter.skipped``, or raise ``MissingReferenceError`` in
strict mode. A skipped record leaves the report untouched.
"""

import logging
from collections import Counter
from collections.abc import Iterable

from ..config import FormatterConfig
from ..constants import ELEMENT_BACKGROUND, ELEMENT_SCENARIO
from ..errors import MissingReferenceError
from ..models.messages import Envelope, Feature, Pickle, PickleStep, Step, TestStepFinished
from ..models.report import (
    JsonDatatableRow,
    JsonDocString,
    JsonFeature,
    JsonFeatureElement,
    JsonStep,
    JsonStepMatch,
    JsonTag,
)
from .ids import make_id, outline_row_id, scenario_id
from .lookup import MessageLookup
from .test_case import (
    ResolvedTestStep,
    SortedSteps,
    hook_to_json,
    resolve_test_case_steps,
    resolve_test_step,
    result_to_json,
    sort_steps,
    source_location,
)

logger = logging.getLogger(__name__)


class Formatter:
    """Builds the report from envelopes fed one at a time.

    Example:
        >>> formatter = Formatter()
        >>> features = formatter.process_messages(read_envelopes(stream))
    """

    def __init__(self, config: FormatterConfig | None = None) -> None:
        self.config = config or FormatterConfig()
        self.lookup = MessageLookup()
        self.features: list[JsonFeature] = []
        self.skipped: Counter[str] = Counter()

        self._features_by_uri: dict[str, JsonFeature] = {}
        self._element_ids_by_uri: dict[str, set[str]] = {}
        self._steps_by_pickle_step_id: dict[str, JsonStep] = {}
        self._elements_by_pickle_id: dict[str, JsonFeatureElement] = {}
        self._sorted_steps_by_test_case_id: dict[str, SortedSteps] = {}

    def process_messages(self, envelopes: Iterable[Envelope]) -> list[JsonFeature]:
        """Consume the whole stream and return the report features."""
        for envelope in envelopes:
            self.process_envelope(envelope)
        return self.features

    def process_envelope(self, envelope: Envelope) -> None:
        """Index one envelope and apply it to the report."""
        self.lookup.process_envelope(envelope)

        if envelope.gherkin_document is not None:
            logger.debug(f"Treating GherkinDocument: {envelope.gherkin_document.uri}")
        elif envelope.pickle is not None:
            self._process_pickle(envelope.pickle)
        elif envelope.test_step_finished is not None:
            self._process_test_step_finished(envelope.test_step_finished)

    def _skip(self, kind: str, message: str) -> None:
        if self.config.strict:
            raise MissingReferenceError(message)
        logger.debug(f"Skipping {kind}: {message}")
        self.skipped[kind] += 1

    # ------------------------------------------------------------------
    # Pickles
    # ------------------------------------------------------------------

    def _process_pickle(self, pickle: Pickle) -> None:
        logger.debug(f"Treating Pickle: {pickle.id} - {pickle.ast_node_ids}")

        document = self.lookup.lookup_gherkin_document(pickle.uri)
        if document is None or document.feature is None:
            self._skip("pickle", f"Pickle {pickle.id}: no feature for {pickle.uri}")
            return

        scenario = None
        if pickle.ast_node_ids:
            scenario = self.lookup.lookup_scenario(pickle.ast_node_ids[0])
        if scenario is None:
            self._skip("pickle", f"Pickle {pickle.id}: unknown scenario {pickle.ast_node_ids}")
            return

        example = row = row_index = None
        if len(pickle.ast_node_ids) > 1:
            row_id = pickle.ast_node_ids[1]
            example = self.lookup.lookup_example(row_id)
            row = self.lookup.lookup_example_row(row_id)
            row_index = self.lookup.lookup_example_row_index(row_id)
            if example is None or row is None or row_index is None:
                self._skip("pickle", f"Pickle {pickle.id}: unknown examples row {row_id}")
                return

        tags = []
        for pickle_tag in pickle.tags:
            tag = self.lookup.lookup_tag(pickle_tag.ast_node_id)
            if tag is None:
                self._skip("pickle", f"Pickle {pickle.id}: unknown tag {pickle_tag.ast_node_id}")
                return
            tags.append(JsonTag(line=tag.location.line, name=tag.name))

        background = None
        background_steps: list[JsonStep] = []
        scenario_steps: list[JsonStep] = []
        steps_by_pickle_step_id: dict[str, JsonStep] = {}

        for pickle_step in pickle.steps:
            step = None
            if pickle_step.ast_node_ids:
                step = self.lookup.lookup_step(pickle_step.ast_node_ids[0])
            if step is None:
                self._skip("pickle", f"Pickle {pickle.id}: unknown step for {pickle_step.id}")
                return

            json_step = self._make_json_step(pickle, pickle_step, step)
            if self.lookup.is_background_step(step.id):
                background_steps.append(json_step)
                background = self.lookup.lookup_background_by_step_id(step.id)
            else:
                scenario_steps.append(json_step)
            steps_by_pickle_step_id[pickle_step.id] = json_step

        feature = self._find_or_create_feature(pickle.uri, document.feature)
        self._steps_by_pickle_step_id.update(steps_by_pickle_step_id)

        if background_steps and background is not None:
            feature.elements.append(
                JsonFeatureElement(
                    description=background.description,
                    keyword=background.keyword,
                    line=background.location.line,
                    steps=background_steps,
                    type=ELEMENT_BACKGROUND,
                )
            )

        if example is not None and row is not None and row_index is not None:
            element_id = outline_row_id(feature.id, scenario.name, example.name, row_index)
            element_line = row.location.line
        else:
            element_id = scenario_id(feature.id, scenario.name)
            element_line = scenario.location.line

        self._check_duplicate_id(feature, element_id)
        element = JsonFeatureElement(
            description=scenario.description,
            id=element_id,
            keyword=scenario.keyword,
            line=element_line,
            name=scenario.name,
            steps=scenario_steps,
            type=ELEMENT_SCENARIO,
            tags=tags or None,
        )
        feature.elements.append(element)
        self._elements_by_pickle_id[pickle.id] = element

    def _find_or_create_feature(self, uri: str, feature: Feature) -> JsonFeature:
        json_feature = self._features_by_uri.get(uri)
        if json_feature is None:
            tags = [JsonTag(line=tag.location.line, name=tag.name) for tag in feature.tags]
            json_feature = JsonFeature(
                description=feature.description,
                id=make_id(feature.name),
                keyword=feature.keyword,
                line=feature.location.line,
                name=feature.name,
                uri=uri,
                tags=tags or None,
            )
            self._features_by_uri[uri] = json_feature
            self.features.append(json_feature)
        return json_feature

    def _make_json_step(self, pickle: Pickle, pickle_step: PickleStep, step: Step) -> JsonStep:
        json_step = JsonStep(
            keyword=step.keyword,
            line=step.location.line,
            name=pickle_step.text,
            # replaced by the step definition location once the step has run
            match=JsonStepMatch(location=pickle.uri),
        )

        if step.doc_string is not None:
            json_step.doc_string = JsonDocString(
                content_type=step.doc_string.media_type,
                line=step.doc_string.location.line,
                value=step.doc_string.content,
            )

        if step.data_table is not None:
            rows = [
                JsonDatatableRow(cells=[cell.value for cell in row.cells])
                for row in step.data_table.rows
            ]
            json_step.rows = rows or None

        return json_step

    def _check_duplicate_id(self, feature: JsonFeature, element_id: str) -> None:
        seen = self._element_ids_by_uri.setdefault(feature.uri, set())
        if element_id in seen:
            # TODO: disambiguate same-name scenarios once consumers can handle a new id format
            logger.warning(f"Duplicate scenario id {element_id!r} in {feature.uri}")
        seen.add(element_id)

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def _process_test_step_finished(self, finished: TestStepFinished) -> None:
        logger.debug(f"Treating TestStepFinished: {finished.test_step_id}")

        test_step = self.lookup.lookup_test_step(finished.test_step_id)
        if test_step is not None and test_step.hook_id and not self.config.include_hooks:
            return

        resolved = resolve_test_step(finished.test_step_id, self.lookup, finished.test_step_result)
        if resolved is None:
            self._skip("test_step_finished", f"Unresolved test step {finished.test_step_id}")
            return

        if resolved.is_hook:
            self._attach_hook(resolved)
            return

        assert resolved.pickle_step is not None
        json_step = self._steps_by_pickle_step_id.get(resolved.pickle_step.id)
        if json_step is None:
            self._skip(
                "test_step_finished",
                f"No report step for pickle step {resolved.pickle_step.id}",
            )
            return

        if json_step.result is not None:
            logger.debug(f"Replacing result of pickle step {resolved.pickle_step.id}")
        json_step.result = result_to_json(finished.test_step_result)

        if resolved.step_definitions:
            json_step.match = JsonStepMatch(
                location=source_location(resolved.step_definitions[0].source_reference)
            )

    def _attach_hook(self, resolved: ResolvedTestStep) -> None:
        test_step_id = resolved.test_step.id
        test_case = self.lookup.lookup_test_case_by_test_step_id(test_step_id)
        element = self._elements_by_pickle_id.get(test_case.pickle_id) if test_case else None
        if test_case is None or element is None:
            self._skip("test_step_finished", f"No report element for hook step {test_step_id}")
            return

        sorted_steps = self._sorted_steps_by_test_case_id.get(test_case.id)
        if sorted_steps is None:
            sorted_steps = sort_steps(resolve_test_case_steps(test_case, self.lookup))
            self._sorted_steps_by_test_case_id[test_case.id] = sorted_steps

        json_hook = hook_to_json(resolved)
        if any(step.test_step.id == test_step_id for step in sorted_steps.before_hook):
            element.before = [*(element.before or []), json_hook]
        else:
            element.after = [*(element.after or []), json_hook]
