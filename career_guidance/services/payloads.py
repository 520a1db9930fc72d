from __future__ import annotations

import json
import re
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from career_guidance.errors import SchemaViolationError


SchemaT = TypeVar("SchemaT", bound=BaseModel)

_FENCE_RE = re.compile(r"^```[a-zA-Z0-9_-]*\s*\n(?P<body>.*?)\n?```$", re.DOTALL)


def strip_code_fence(text: str) -> str:
    value = (text or "").strip()
    match = _FENCE_RE.match(value)
    if match:
        return match.group("body").strip()
    return value


def _describe(exc: PydanticValidationError, limit: int = 5) -> str:
    parts: list[str] = []
    for err in exc.errors()[:limit]:
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg')}")
    more = len(exc.errors()) - limit
    if more > 0:
        parts.append(f"... {more} more")
    return "; ".join(parts)


def load_json_object(text: str, error_cls: type[SchemaViolationError] = SchemaViolationError) -> dict[str, Any]:
    body = strip_code_fence(text)
    if not body:
        raise error_cls("Inference returned an empty payload")
    try:
        payload = json.loads(body)
    except json.JSONDecodeError as exc:
        raise error_cls(f"Inference payload is not valid JSON: {exc.msg} (line {exc.lineno})") from exc
    if not isinstance(payload, dict):
        raise error_cls(f"Inference payload must be a JSON object, got {type(payload).__name__}")
    return payload


def parse_structured_payload(
    text: str,
    schema: type[SchemaT],
    error_cls: type[SchemaViolationError] = SchemaViolationError,
) -> SchemaT:
    """Parse raw inference text into `schema` or raise `error_cls`.

    The whole response must be a single JSON object; a surrounding Markdown
    code fence is tolerated.
    """

    payload = load_json_object(text, error_cls)
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        raise error_cls(f"Inference payload does not match {schema.__name__}: {_describe(exc)}") from exc
