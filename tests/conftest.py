"""Shared test fixtures for cukejson tests."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from cukejson.models import Envelope

FEATURE_URI = "features/eat.feature"
STEPS_URI = "features/support/steps.js"
HOOKS_URI = "features/support/hooks.js"


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def gherkin_document() -> dict[str, Any]:
    """Feature with a background, a plain scenario and a scenario outline."""
    return {
        "gherkinDocument": {
            "uri": FEATURE_URI,
            "feature": {
                "location": {"line": 2, "column": 1},
                "tags": [{"id": "t-feature", "name": "@smoke", "location": {"line": 1}}],
                "language": "en",
                "keyword": "Feature",
                "name": "Eat cucumbers",
                "description": "  As a hungry person",
                "children": [
                    {
                        "background": {
                            "id": "bg-1",
                            "location": {"line": 4},
                            "keyword": "Background",
                            "name": "",
                            "description": "",
                            "steps": [
                                {
                                    "id": "s-bg",
                                    "location": {"line": 5},
                                    "keyword": "Given ",
                                    "text": "a basket",
                                }
                            ],
                        }
                    },
                    {
                        "scenario": {
                            "id": "sc-1",
                            "location": {"line": 7},
                            "tags": [{"id": "t-sc", "name": "@fast", "location": {"line": 6}}],
                            "keyword": "Scenario",
                            "name": "Eat cucumber",
                            "description": "",
                            "steps": [
                                {
                                    "id": "s-1",
                                    "location": {"line": 8},
                                    "keyword": "Given ",
                                    "text": "I have 3 cucumbers",
                                    "docString": {
                                        "location": {"line": 9},
                                        "mediaType": "text/plain",
                                        "content": "hello",
                                        "delimiter": '"""',
                                    },
                                },
                                {
                                    "id": "s-2",
                                    "location": {"line": 12},
                                    "keyword": "When ",
                                    "text": "I eat them",
                                    "dataTable": {
                                        "location": {"line": 13},
                                        "rows": [
                                            {
                                                "id": "dt-1",
                                                "location": {"line": 13},
                                                "cells": [{"value": "a"}, {"value": "b"}],
                                            }
                                        ],
                                    },
                                },
                            ],
                            "examples": [],
                        }
                    },
                    {
                        "scenario": {
                            "id": "sc-2",
                            "location": {"line": 15},
                            "tags": [],
                            "keyword": "Scenario Outline",
                            "name": "Eat some",
                            "description": "",
                            "steps": [
                                {
                                    "id": "s-3",
                                    "location": {"line": 16},
                                    "keyword": "Given ",
                                    "text": "I have <count> cucumbers",
                                }
                            ],
                            "examples": [
                                {
                                    "id": "ex-1",
                                    "location": {"line": 18},
                                    "tags": [],
                                    "keyword": "Examples",
                                    "name": "Some counts",
                                    "description": "",
                                    "tableHeader": {
                                        "id": "header",
                                        "location": {"line": 19},
                                        "cells": [{"value": "count"}],
                                    },
                                    "tableBody": [
                                        {
                                            "id": "row-1",
                                            "location": {"line": 20},
                                            "cells": [{"value": "5"}],
                                        },
                                        {
                                            "id": "row-2",
                                            "location": {"line": 21},
                                            "cells": [{"value": "7"}],
                                        },
                                    ],
                                }
                            ],
                        }
                    },
                ],
            },
        }
    }


@pytest.fixture
def pickles() -> list[dict[str, Any]]:
    """One pickle for the plain scenario and one per outline row."""
    return [
        {
            "pickle": {
                "id": "p-1",
                "uri": FEATURE_URI,
                "name": "Eat cucumber",
                "astNodeIds": ["sc-1"],
                "tags": [
                    {"name": "@smoke", "astNodeId": "t-feature"},
                    {"name": "@fast", "astNodeId": "t-sc"},
                ],
                "steps": [
                    {"id": "ps-bg-1", "astNodeIds": ["s-bg"], "text": "a basket"},
                    {"id": "ps-1", "astNodeIds": ["s-1"], "text": "I have 3 cucumbers"},
                    {"id": "ps-2", "astNodeIds": ["s-2"], "text": "I eat them"},
                ],
            }
        },
        {
            "pickle": {
                "id": "p-2",
                "uri": FEATURE_URI,
                "name": "Eat some",
                "astNodeIds": ["sc-2", "row-1"],
                "tags": [{"name": "@smoke", "astNodeId": "t-feature"}],
                "steps": [
                    {"id": "ps-bg-2", "astNodeIds": ["s-bg"], "text": "a basket"},
                    {"id": "ps-3", "astNodeIds": ["s-3", "row-1"], "text": "I have 5 cucumbers"},
                ],
            }
        },
        {
            "pickle": {
                "id": "p-3",
                "uri": FEATURE_URI,
                "name": "Eat some",
                "astNodeIds": ["sc-2", "row-2"],
                "tags": [{"name": "@smoke", "astNodeId": "t-feature"}],
                "steps": [
                    {"id": "ps-bg-3", "astNodeIds": ["s-bg"], "text": "a basket"},
                    {"id": "ps-4", "astNodeIds": ["s-3", "row-2"], "text": "I have 7 cucumbers"},
                ],
            }
        },
    ]


@pytest.fixture
def support_code() -> list[dict[str, Any]]:
    """Step definition and hooks."""
    return [
        {
            "stepDefinition": {
                "id": "sd-1",
                "pattern": {"source": "I have {int} cucumbers", "type": "CUCUMBER_EXPRESSION"},
                "sourceReference": {"uri": STEPS_URI, "location": {"line": 42}},
            }
        },
        {"hook": {"id": "h-before", "sourceReference": {"uri": HOOKS_URI, "location": {"line": 3}}}},
        {"hook": {"id": "h-after", "sourceReference": {"uri": HOOKS_URI, "location": {"line": 9}}}},
    ]


@pytest.fixture
def case_messages() -> list[dict[str, Any]]:
    """Test cases for the three pickles; the first one runs hooks."""
    return [
        {
            "testCase": {
                "id": "tc-1",
                "pickleId": "p-1",
                "testSteps": [
                    {"id": "ts-h1", "hookId": "h-before"},
                    {"id": "ts-bg-1", "pickleStepId": "ps-bg-1", "stepDefinitionIds": []},
                    {"id": "ts-1", "pickleStepId": "ps-1", "stepDefinitionIds": ["sd-1"]},
                    {"id": "ts-2", "pickleStepId": "ps-2", "stepDefinitionIds": []},
                    {"id": "ts-h2", "hookId": "h-after"},
                ],
            }
        },
        {
            "testCase": {
                "id": "tc-2",
                "pickleId": "p-2",
                "testSteps": [
                    {"id": "ts-bg-2", "pickleStepId": "ps-bg-2", "stepDefinitionIds": []},
                    {"id": "ts-3", "pickleStepId": "ps-3", "stepDefinitionIds": ["sd-1"]},
                ],
            }
        },
        {
            "testCase": {
                "id": "tc-3",
                "pickleId": "p-3",
                "testSteps": [
                    {"id": "ts-bg-3", "pickleStepId": "ps-bg-3", "stepDefinitionIds": []},
                    {"id": "ts-4", "pickleStepId": "ps-4", "stepDefinitionIds": ["sd-1"]},
                ],
            }
        },
    ]


def step_finished(
    test_step_id: str,
    status: str = "PASSED",
    nanos: int | None = None,
    seconds: int = 0,
    message: str | None = None,
) -> dict[str, Any]:
    """Build a testStepFinished envelope."""
    result: dict[str, Any] = {"status": status}
    if nanos is not None:
        result["duration"] = {"seconds": seconds, "nanos": nanos}
    if message is not None:
        result["message"] = message
    return {
        "testStepFinished": {
            "testCaseStartedId": "started",
            "testStepId": test_step_id,
            "testStepResult": result,
        }
    }


@pytest.fixture
def make_step_finished() -> Callable[..., dict[str, Any]]:
    """Factory for testStepFinished envelopes."""
    return step_finished


@pytest.fixture
def results() -> list[dict[str, Any]]:
    """Finished test steps for every test case."""
    return [
        step_finished("ts-h1"),
        step_finished("ts-bg-1"),
        step_finished("ts-1", nanos=1500000),
        step_finished("ts-2", "FAILED", nanos=5, seconds=1, message="boom"),
        step_finished("ts-h2"),
        step_finished("ts-bg-2", nanos=10),
        step_finished("ts-3", nanos=20),
        step_finished("ts-bg-3", nanos=10),
        step_finished("ts-4", "SKIPPED"),
    ]


@pytest.fixture
def sample_messages(
    gherkin_document: dict[str, Any],
    pickles: list[dict[str, Any]],
    support_code: list[dict[str, Any]],
    case_messages: list[dict[str, Any]],
    results: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """A complete message stream in the order Cucumber emits it."""
    return [
        {"meta": {"protocolVersion": "22.0.0"}},
        {"source": {"uri": FEATURE_URI, "data": "...", "mediaType": "text/x.cucumber.gherkin+plain"}},
        gherkin_document,
        *pickles,
        *support_code,
        {"testRunStarted": {"timestamp": {"seconds": 0, "nanos": 0}}},
        *case_messages,
        *results,
        {"testRunFinished": {"success": False}},
    ]


@pytest.fixture
def sample_envelopes(sample_messages: list[dict[str, Any]]) -> list[Envelope]:
    """Sample stream as decoded envelopes."""
    return [Envelope.model_validate(message) for message in sample_messages]


@pytest.fixture
def messages_file(tmp_path: Path, sample_messages: list[dict[str, Any]]) -> Path:
    """Sample stream written as an NDJSON file."""
    path = tmp_path / "messages.ndjson"
    path.write_text("".join(json.dumps(message) + "\n" for message in sample_messages))
    return path
