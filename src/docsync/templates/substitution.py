from __future__ import annotations

import json
import re
from typing import Any, Mapping

from .models import TemplateMetadata


PLACEHOLDER_RE = re.compile(r"\{\{\s*(@?[A-Za-z_][\w.-]*)\s*\}\}")
COMPLEX_PLACEHOLDER = "[Complex Object]"
RESERVED_NAMES = ("timestamp", "version", "source")

# Private-use code points; they never occur in directive or placeholder syntax.
_SLOT_OPEN = "\ue000"
_SLOT_CLOSE = "\ue001"
_SLOT_RE = re.compile(_SLOT_OPEN + r"(\d+)" + _SLOT_CLOSE)


def stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list, tuple)):
        try:
            return json.dumps(value, indent=2, ensure_ascii=False)
        except (TypeError, ValueError):
            return COMPLEX_PLACEHOLDER
    return str(value)


class ValueSlots:
    """Rendered values held out of band until the final text is assembled.

    ``hold`` returns a token that later directive passes and ``substitute``
    pass over untouched, so inserted data is never read as markup.
    """

    def __init__(self) -> None:
        self._values: list[str] = []

    def hold(self, text: str) -> str:
        self._values.append(text)
        return f"{_SLOT_OPEN}{len(self._values) - 1}{_SLOT_CLOSE}"

    def restore(self, content: str) -> str:
        if not self._values:
            return content

        def repl(match: re.Match[str]) -> str:
            idx = int(match.group(1))
            return self._values[idx] if idx < len(self._values) else match.group(0)

        return _SLOT_RE.sub(repl, content)


def _metadata_values(metadata: TemplateMetadata) -> dict[str, str]:
    return {
        "timestamp": metadata.generated_at,
        "version": metadata.version,
        "source": metadata.source,
    }


def substitute(
    content: str,
    variables: Mapping[str, Any],
    metadata: TemplateMetadata,
) -> str:
    """Fill ``{{name}}`` placeholders in one pass.

    Reserved metadata names are looked up before ``variables``. Unknown
    names are left as written.
    """
    reserved = _metadata_values(metadata)

    def repl(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in reserved:
            return stringify(reserved[name])
        if name in variables:
            return stringify(variables[name])
        return match.group(0)

    return PLACEHOLDER_RE.sub(repl, content)
