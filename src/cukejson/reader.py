"""Reading the Cucumber message stream.

Messages are newline-delimited JSON, one envelope per line, as written by
``--format message`` in Cucumber implementations.
"""

from collections.abc import Iterable, Iterator

from pydantic import ValidationError

from .errors import MessageDecodeError
from .models import Envelope


def read_envelopes(stream: Iterable[str] | Iterable[bytes]) -> Iterator[Envelope]:
    """Yield envelopes from an NDJSON stream, one line at a time.

    Blank lines are skipped. Binary streams are decoded line by line as
    UTF-8, so an invalid byte is reported on the line that holds it.

    Args:
        stream: Text or binary stream to read from

    Yields:
        Decoded envelopes in stream order

    Raises:
        MessageDecodeError: If a line is not UTF-8, not valid JSON or not a
            valid envelope
    """
    for line_number, raw_line in enumerate(stream, start=1):
        if isinstance(raw_line, bytes):
            try:
                line = raw_line.decode("utf-8")
            except UnicodeDecodeError as e:
                raise MessageDecodeError(f"Invalid message on line {line_number}: {e}") from e
        else:
            line = raw_line

        line = line.strip()
        if not line:
            continue

        try:
            envelope = Envelope.model_validate_json(line)
        except ValidationError as e:
            raise MessageDecodeError(f"Invalid message on line {line_number}: {e}") from e

        yield envelope
