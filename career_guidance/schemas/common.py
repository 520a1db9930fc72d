from __future__ import annotations

from typing import Annotated, Any

from pydantic import StringConstraints


# Free text returned by the inference capability; blank strings are schema violations.
Text = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def dedupe_labels(values: Any) -> Any:
    """Drop case-insensitive duplicates from a label list, keeping first occurrence."""

    if not isinstance(values, list):
        return values
    result: list[Any] = []
    seen: set[str] = set()
    for item in values:
        key = item.strip().lower() if isinstance(item, str) else item
        if key in seen:
            continue
        seen.add(key)
        result.append(item)
    return result
