# src/roadmap_pipeline/parser.py
from __future__ import annotations

import logging
from typing import Generic, Iterator, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from roadmap_pipeline.errors import EmptyResponse, UnparsableResponse

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _balanced_array_at(text: str, start: int) -> Optional[str]:
    """Return the balanced [ ... ] substring opening at ``start``, or None if it never closes.
    Brackets inside string literals are ignored.
    """
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]

    return None


def iter_json_arrays(text: str) -> Iterator[str]:
    """Yield every balanced [ ... ] substring, one per opening bracket, in text order.

    Prose brackets such as "[v2]" or "[MDN](...)" come out as candidates too; callers
    decode each one and keep the first that validates.
    """
    start = text.find("[")
    while start != -1:
        candidate = _balanced_array_at(text, start)
        if candidate is not None:
            yield candidate
        start = text.find("[", start + 1)


def _recover(raw_text: str, schema: Type[M], fallback_field: str) -> Optional[M]:
    adapter = TypeAdapter(schema.model_fields[fallback_field].annotation)
    for candidate in iter_json_arrays(raw_text):
        try:
            items = adapter.validate_json(candidate)
        except ValidationError as e:
            logger.debug("Fallback candidate for %r rejected: %d error(s)", fallback_field, e.error_count())
            continue
        defaults = getattr(schema, "RECOVERY_DEFAULTS", {})
        return schema.model_validate({**defaults, fallback_field: items})

    return None


def parse_with_status(
    raw_text: Optional[str], schema: Type[M], *, fallback_field: Optional[str] = None
) -> Tuple[M, bool]:
    """Decode raw model text into ``schema``.

    Strict decode of the whole text first. If that fails and ``fallback_field`` names an
    array-valued field, the first bracketed array in the text that validates as that field is used and
    every other field takes its recovery default (``schema.RECOVERY_DEFAULTS``).

    Returns the decoded model and whether the fallback path produced it.

    Raises:
        EmptyResponse: no text at all; fallback is never attempted.
        UnparsableResponse: both decode attempts failed. Carries the raw text.
    """
    if raw_text is None or not raw_text.strip():
        raise EmptyResponse()

    try:
        return schema.model_validate_json(raw_text), False
    except ValidationError as e:
        strict_error = e

    if fallback_field is not None:
        recovered = _recover(raw_text, schema, fallback_field)
        if recovered is not None:
            logger.warning(
                "Strict decode into %s failed; recovered %r from embedded array",
                schema.__name__,
                fallback_field,
            )
            return recovered, True

    raise UnparsableResponse(
        f"Could not decode model output as {schema.__name__}: {strict_error.error_count()} validation error(s)",
        raw_text=raw_text,
    )


def parse(raw_text: Optional[str], schema: Type[M], *, fallback_field: Optional[str] = None) -> M:
    model, _ = parse_with_status(raw_text, schema, fallback_field=fallback_field)
    return model


class ResponseParser(Generic[M]):
    """Parser bound to one output schema and, optionally, one recoverable array field."""

    def __init__(self, schema: Type[M], *, fallback_field: Optional[str] = None):
        if fallback_field is not None and fallback_field not in schema.model_fields:
            raise ValueError(f"{schema.__name__} has no field {fallback_field!r}")
        self.schema = schema
        self.fallback_field = fallback_field

    def parse(self, raw_text: Optional[str]) -> M:
        return parse(raw_text, self.schema, fallback_field=self.fallback_field)

    def parse_with_status(self, raw_text: Optional[str]) -> Tuple[M, bool]:
        return parse_with_status(raw_text, self.schema, fallback_field=self.fallback_field)
