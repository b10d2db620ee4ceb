"""Pydantic data models for cukejson.

This package defines:
- The Cucumber message envelopes read from the input stream (messages)
- The legacy JSON report tree built from them (report)

Example:
    >>> from cukejson.models import Envelope
    >>> envelope = Envelope.model_validate_json('{"pickle": {"id": "p1"}}')
    >>> envelope.kind
    'pickle'
"""

from .messages import Envelope
from .report import (
    JsonDatatableRow,
    JsonDocString,
    JsonFeature,
    JsonFeatureElement,
    JsonHook,
    JsonStep,
    JsonStepMatch,
    JsonStepResult,
    JsonTag,
)

__all__ = [
    "Envelope",
    "JsonDatatableRow",
    "JsonDocString",
    "JsonFeature",
    "JsonFeatureElement",
    "JsonHook",
    "JsonStep",
    "JsonStepMatch",
    "JsonStepResult",
    "JsonTag",
]
