"""Core report building for cukejson.

- lookup: identifier index and typed lookups over the message stream
- ids: report ids derived from feature, scenario and examples names
- test_case: test step resolution and before/background/steps/after grouping
- formatter: single-pass reduction of the stream into the report
"""

from .formatter import Formatter
from .ids import make_id, outline_row_id, scenario_id
from .lookup import IdentifierIndex, MessageLookup, RecordKind
from .test_case import (
    ResolvedTestStep,
    SortedSteps,
    hook_to_json,
    resolve_test_case_steps,
    resolve_test_step,
    sort_steps,
)

__all__ = [
    "Formatter",
    "IdentifierIndex",
    "MessageLookup",
    "RecordKind",
    "ResolvedTestStep",
    "SortedSteps",
    "hook_to_json",
    "make_id",
    "outline_row_id",
    "resolve_test_case_steps",
    "resolve_test_step",
    "scenario_id",
    "sort_steps",
]
