"""Report models for the legacy Cucumber JSON format.

The report is a list of features, each holding elements (backgrounds and
scenarios) that hold steps. Steps are created when their pickle is read and
mutated in place when their result arrives.

Optional fields default to ``None`` and are dropped on serialization
(``model_dump(exclude_none=True)``) so that the document keeps the shape of
the historical report. The one exception is ``JsonStep.result``, which is
always present and ``null`` until a result is attached.
"""

from typing import Any

from pydantic import BaseModel, Field, SerializerFunctionWrapHandler, model_serializer


class JsonTag(BaseModel):
    line: int
    name: str


class JsonDocString(BaseModel):
    content_type: str = ""
    line: int
    value: str


class JsonDatatableRow(BaseModel):
    cells: list[str] = Field(default_factory=list)


class JsonStepResult(BaseModel):
    """Outcome of one executed step.

    Attributes:
        duration: Step duration in nanoseconds, omitted when unknown or zero.
        status: Lower-cased status (passed, failed, skipped, ...).
        error_message: Failure message, omitted when empty.
    """

    duration: int | None = None
    status: str
    error_message: str | None = None


class JsonStepMatch(BaseModel):
    location: str


class JsonStep(BaseModel):
    """Step of a report element."""

    keyword: str
    line: int
    name: str
    result: JsonStepResult | None = None
    match: JsonStepMatch | None = None
    doc_string: JsonDocString | None = None
    rows: list[JsonDatatableRow] | None = None

    @model_serializer(mode="wrap")
    def serialize_step(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        # result stays in the document as null when no result was attached
        data = handler(self)
        ordered = {name: data.pop(name) for name in ("keyword", "line", "name")}
        ordered["result"] = data.pop("result", None)
        ordered.update(data)
        return ordered


class JsonHook(BaseModel):
    """Before or after hook run for a scenario."""

    match: JsonStepMatch
    result: JsonStepResult | None = None


class JsonFeatureElement(BaseModel):
    """Background or scenario of a feature.

    Backgrounds carry no ``id``. Scenario ids are synthesized by
    :mod:`cukejson.core.ids`.
    """

    description: str = ""
    id: str | None = None
    keyword: str = ""
    line: int = 0
    name: str = ""
    steps: list[JsonStep] = Field(default_factory=list)
    type: str
    tags: list[JsonTag] | None = None
    before: list[JsonHook] | None = None
    after: list[JsonHook] | None = None


class JsonFeature(BaseModel):
    """Top-level report entry, one per feature file URI."""

    description: str = ""
    elements: list[JsonFeatureElement] = Field(default_factory=list)
    id: str
    keyword: str = ""
    line: int = 0
    name: str = ""
    uri: str
    tags: list[JsonTag] | None = None
