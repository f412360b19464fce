"""Human-readable rendering of run sequences for preview and debugging."""

import json
from typing import Any, Optional

from pptx_richtext.formatting.ir import StyledRun


def runs_to_data(runs: list[StyledRun]) -> list[dict[str, Any]]:
    """Convert runs to plain dicts in the presentation library's shape."""
    return [run.to_dict() for run in runs]


def runs_from_data(data: list[dict[str, Any]]) -> list[StyledRun]:
    """Rebuild runs from their plain-dict form."""
    return [StyledRun.from_dict(item) for item in data]


def format_runs(runs: list[StyledRun], indent: int = 2, compact: bool = False) -> str:
    """Pretty-print a run sequence.

    Both layouts are valid JSON with a fixed key order, so the output can
    be fed back through ``json.loads`` and ``runs_from_data``.

    Args:
        runs: The runs to render
        indent: Spaces per nesting level
        compact: Keep each run's options on a single line

    Returns:
        The formatted text
    """
    data = runs_to_data(runs)
    if compact:
        return object_to_string(data, indent_width=indent)
    return json.dumps(data, indent=indent, ensure_ascii=False)


def object_to_string(obj: Any, level: int = 0, indent_width: int = 2) -> str:
    """Render nested data with ``options`` objects inlined.

    Lists and objects are broken over lines with ``indent_width`` spaces
    per level, except the value of an ``options`` key, which is written
    on one line.
    """
    pad = " " * (indent_width * level)
    inner = " " * (indent_width * (level + 1))

    if obj is None or isinstance(obj, (bool, int, float, str)):
        return _scalar(obj)

    if isinstance(obj, (list, tuple)):
        if not obj:
            return "[]"
        items = ",\n".join(
            inner + object_to_string(value, level + 1, indent_width) for value in obj
        )
        return f"[\n{items}\n{pad}]"

    if isinstance(obj, dict):
        if not obj:
            return "{}"
        entries: list[str] = []
        for key, value in obj.items():
            if key == "options" and isinstance(value, dict):
                rendered = _inline(value)
            else:
                rendered = object_to_string(value, level + 1, indent_width)
            entries.append(f"{inner}{_scalar(str(key))}: {rendered}")
        return "{\n" + ",\n".join(entries) + f"\n{pad}}}"

    raise TypeError(f"Cannot format value of type {type(obj).__name__}")


def _inline(obj: Any) -> str:
    if isinstance(obj, dict):
        if not obj:
            return "{}"
        body = ", ".join(f"{_scalar(str(k))}: {_inline(v)}" for k, v in obj.items())
        return "{ " + body + " }"
    if isinstance(obj, (list, tuple)):
        return "[" + ", ".join(_inline(v) for v in obj) + "]"
    return _scalar(obj)


def _scalar(value: Optional[Any]) -> str:
    return json.dumps(value, ensure_ascii=False)
