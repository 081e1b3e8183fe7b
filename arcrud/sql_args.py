"""Positional SQL templating.

Templates use ``{0}``, ``{1}``, ... placeholders. Each referenced index is
rewritten to a named bind parameter (``:arg_0`` by default) and its value
lands in the params mapping, so argument values never become SQL text.
A placeholder may appear more than once; unreferenced arguments are ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from arcrud.exceptions import SqlTemplateError

if TYPE_CHECKING:
    from collections.abc import Sequence

_PLACEHOLDER = re.compile(r"\{(\d+)\}")


@dataclass(frozen=True)
class FilledSql:
    """SQL text with named bind parameters and their values."""

    sql: str
    params: dict[str, Any] = field(default_factory=dict)


def bind_name(prefix: str, index: int) -> str:
    return f"{prefix}_{index}"


def fill_sql_args(
    template: str,
    args: Sequence[Any] = (),
    *,
    prefix: str = "arg",
    start: int = 0,
) -> FilledSql:
    """Substitute positional placeholders in *template* with bind parameters.

    *start* offsets the generated parameter numbers so several filled
    fragments can share one statement without name clashes.

    Raises SqlTemplateError when a placeholder index has no matching argument.
    """
    params: dict[str, Any] = {}

    def _replace(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if index >= len(args):
            raise SqlTemplateError(
                f"Placeholder {{{index}}} in {template!r} has no argument "
                f"({len(args)} supplied)"
            )
        name = bind_name(prefix, start + index)
        params[name] = args[index]
        return f":{name}"

    sql = _PLACEHOLDER.sub(_replace, template)
    return FilledSql(sql=sql, params=params)
