"""Placeholder substitution for message templates."""

from __future__ import annotations

import re
from collections.abc import Mapping

from app.domain.entities import VariableValue

_PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([A-Za-z0-9_.\-]+)\s*\}\}")


def substitute(body: str, variables: Mapping[str, VariableValue]) -> str:
    """Replace every ``{{key}}`` in ``body`` with ``str(variables[key])``.

    Placeholders without a matching key are kept verbatim.
    """

    def _replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key not in variables:
            return match.group(0)
        return str(variables[key])

    return _PLACEHOLDER_PATTERN.sub(_replace, body)


__all__ = ["substitute"]
