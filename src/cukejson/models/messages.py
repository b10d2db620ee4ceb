"""Cucumber message models for the envelope stream.

Only the envelope kinds and fields the report needs are modelled; everything
else in the stream is ignored. Field names follow the camelCase JSON form of
the messages. The older names (``sourceIds``, ``stepDefinitionConfig``,
``testResult``, ...) are accepted as validation aliases so that streams from
earlier Cucumber releases still load.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Message(BaseModel):
    """Base for all message models."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Location(Message):
    """Position in a source file."""

    line: int = 0
    column: int | None = None


class Tag(Message):
    """Tag attached to a feature, rule, scenario or examples block."""

    id: str = ""
    location: Location = Field(default_factory=Location)
    name: str = ""


class TableCell(Message):
    location: Location = Field(default_factory=Location)
    value: str = ""


class TableRow(Message):
    id: str = ""
    location: Location = Field(default_factory=Location)
    cells: list[TableCell] = Field(default_factory=list)


class DocString(Message):
    location: Location = Field(default_factory=Location)
    media_type: str = Field(default="", validation_alias=AliasChoices("mediaType", "contentType"))
    content: str = ""
    delimiter: str = ""


class DataTable(Message):
    location: Location = Field(default_factory=Location)
    rows: list[TableRow] = Field(default_factory=list)


class Step(Message):
    """Gherkin step as written in the feature file."""

    id: str
    location: Location = Field(default_factory=Location)
    keyword: str = ""
    text: str = ""
    doc_string: DocString | None = None
    data_table: DataTable | None = None


class Background(Message):
    id: str = ""
    location: Location = Field(default_factory=Location)
    keyword: str = ""
    name: str = ""
    description: str = ""
    steps: list[Step] = Field(default_factory=list)


class Examples(Message):
    """Examples block of a scenario outline."""

    id: str = ""
    location: Location = Field(default_factory=Location)
    tags: list[Tag] = Field(default_factory=list)
    keyword: str = ""
    name: str = ""
    description: str = ""
    table_header: TableRow | None = None
    table_body: list[TableRow] = Field(default_factory=list)


class Scenario(Message):
    """Scenario or scenario outline."""

    id: str
    location: Location = Field(default_factory=Location)
    tags: list[Tag] = Field(default_factory=list)
    keyword: str = ""
    name: str = ""
    description: str = ""
    steps: list[Step] = Field(default_factory=list)
    examples: list[Examples] = Field(default_factory=list)


class RuleChild(Message):
    background: Background | None = None
    scenario: Scenario | None = None


class Rule(Message):
    id: str = ""
    location: Location = Field(default_factory=Location)
    tags: list[Tag] = Field(default_factory=list)
    keyword: str = ""
    name: str = ""
    description: str = ""
    children: list[RuleChild] = Field(default_factory=list)


class FeatureChild(Message):
    rule: Rule | None = None
    background: Background | None = None
    scenario: Scenario | None = None


class Feature(Message):
    location: Location = Field(default_factory=Location)
    tags: list[Tag] = Field(default_factory=list)
    language: str = "en"
    keyword: str = ""
    name: str = ""
    description: str = ""
    children: list[FeatureChild] = Field(default_factory=list)


class GherkinDocument(Message):
    """Parsed feature file. A document without a feature is an empty file."""

    uri: str
    feature: Feature | None = None


class PickleStep(Message):
    id: str
    text: str = ""
    ast_node_ids: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("astNodeIds", "sourceIds")
    )


class PickleTag(Message):
    name: str = ""
    ast_node_id: str = Field(default="", validation_alias=AliasChoices("astNodeId", "sourceId"))


class Pickle(Message):
    """Executable instance of a scenario, one per examples row for outlines.

    ``ast_node_ids`` holds the scenario id first and, for outline rows, the
    examples row id second.
    """

    id: str
    uri: str = ""
    name: str = ""
    language: str = "en"
    steps: list[PickleStep] = Field(default_factory=list)
    tags: list[PickleTag] = Field(default_factory=list)
    ast_node_ids: list[str] = Field(
        default_factory=list, validation_alias=AliasChoices("astNodeIds", "sourceIds")
    )


class TestStep(Message):
    """Step of a test case: either a hook call or bound to a pickle step."""

    id: str
    pickle_step_id: str | None = None
    step_definition_ids: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("stepDefinitionIds", "stepDefinitionId"),
    )
    hook_id: str | None = None


class TestCase(Message):
    id: str
    pickle_id: str = ""
    test_steps: list[TestStep] = Field(default_factory=list)


class SourceReference(Message):
    uri: str = ""
    location: Location | None = None


class StepDefinitionPattern(Message):
    source: str = ""
    type: str | None = None


class StepDefinition(Message):
    id: str
    pattern: StepDefinitionPattern | None = None
    source_reference: SourceReference = Field(
        default_factory=SourceReference,
        validation_alias=AliasChoices("sourceReference", "location"),
    )


class Hook(Message):
    id: str
    tag_expression: str | None = None
    source_reference: SourceReference = Field(
        default_factory=SourceReference,
        validation_alias=AliasChoices("sourceReference", "location"),
    )


class Duration(Message):
    seconds: int = 0
    nanos: int = 0

    def to_nanoseconds(self) -> int:
        """Return the duration as a whole number of nanoseconds."""
        return self.seconds * 1_000_000_000 + self.nanos


class TestStepResult(Message):
    status: str = "UNKNOWN"
    duration: Duration | None = None
    message: str | None = None


class TestStepFinished(Message):
    test_case_started_id: str = ""
    test_step_id: str
    test_step_result: TestStepResult = Field(
        default_factory=TestStepResult,
        validation_alias=AliasChoices("testStepResult", "testResult"),
    )


class Envelope(Message):
    """One record of the message stream.

    Exactly one field is set for a known record kind; envelopes of kinds the
    report does not use come through with every field unset.
    """

    gherkin_document: GherkinDocument | None = None
    pickle: Pickle | None = None
    test_case: TestCase | None = None
    step_definition: StepDefinition | None = Field(
        default=None,
        validation_alias=AliasChoices("stepDefinition", "stepDefinitionConfig"),
    )
    hook: Hook | None = Field(
        default=None,
        validation_alias=AliasChoices("hook", "testCaseHookDefinitionConfig"),
    )
    test_step_finished: TestStepFinished | None = None

    @property
    def kind(self) -> str | None:
        """Name of the record carried by this envelope, if any."""
        for name in type(self).model_fields:
            if getattr(self, name) is not None:
                return name
        return None
