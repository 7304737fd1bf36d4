"""Resolution of ``{{#if}}`` and ``{{#each}}`` directive blocks.

A single pass (``resolve_one_pass``) collapses every directive it can see
at the outermost level it reaches, but never re-enters text it just
substituted. ``resolve_directives`` repeats whole passes until the content
stops changing or the pass budget runs out.

Loop bodies are resolved per element when the loop expands. Inside a body,
names resolve against the current element first (``this``, ``this.field``,
``@index`` and the element's own fields), then against the enclosing
scopes. Values taken from elements are held in ``ValueSlots`` so no later
pass reads them as markup.
"""

from __future__ import annotations

import logging
import re
from collections import ChainMap
from typing import Any, Mapping

from .matcher import (
    EACH_CLOSE,
    EACH_OPEN,
    ELSE,
    IF_CLOSE,
    IF_OPEN,
    find_matching_close,
)
from .substitution import PLACEHOLDER_RE, RESERVED_NAMES, ValueSlots, stringify


logger = logging.getLogger(__name__)

DEFAULT_MAX_PASSES = 10
ELEMENT_PREFIX = "this."

_NAME = r"(@?[A-Za-z_][\w.-]*)"
BLOCK_OPEN_RE = re.compile(r"\{\{#(if|each) +" + _NAME + r" *\}\}")
EACH_OPEN_RE = re.compile(r"\{\{#each +" + _NAME + r" *\}\}")


def is_truthy(value: Any) -> bool:
    # Zero counts as true; only absent, null, false, "" and empty sequences
    # are false.
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    return True


def lookup(variables: Mapping[str, Any], name: str) -> Any:
    """Value bound to ``name``; ``this.field`` reads only the current element."""
    if name.startswith(ELEMENT_PREFIX):
        element = variables.get("this")
        if isinstance(element, Mapping):
            return element.get(name[len(ELEMENT_PREFIX) :])
        return None
    return variables.get(name)


def _resolve_conditionals(
    content: str,
    variables: Mapping[str, Any],
    *,
    with_else: bool,
) -> str:
    pos = 0
    while True:
        match = BLOCK_OPEN_RE.search(content, pos)
        if match is None:
            return content
        start = match.start()
        if match.group(1) == "each":
            # Loop bodies are resolved per element when the loop expands.
            loop = find_matching_close(content, start, EACH_OPEN, EACH_CLOSE)
            pos = match.end() if loop is None else loop.close_pos + len(EACH_CLOSE)
            continue

        span = find_matching_close(content, start, IF_OPEN, IF_CLOSE, ELSE)
        if span is None or (span.else_pos is not None) != with_else:
            # Malformed, or belongs to the other sub-pass: step inside.
            pos = match.end()
            continue

        truthy = is_truthy(lookup(variables, match.group(2)))
        if span.else_pos is not None:
            if truthy:
                chosen = content[match.end() : span.else_pos]
            else:
                chosen = content[span.else_pos + len(ELSE) : span.close_pos]
        else:
            chosen = content[match.end() : span.close_pos] if truthy else ""

        content = content[:start] + chosen + content[span.close_pos + len(IF_CLOSE) :]
        pos = start + len(chosen)


def _expand_item(
    body: str,
    index: int,
    item: Any,
    variables: Mapping[str, Any],
    slots: ValueSlots,
    max_passes: int,
) -> str:
    record: Mapping[str, Any] = item if isinstance(item, Mapping) else {}
    scope = ChainMap({"this": item, "@index": index}, record, variables)
    body = _run_passes(body, scope, slots, max_passes)

    def repl(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in RESERVED_NAMES:
            return match.group(0)
        if name == "@index":
            return str(index)
        if name == "this" or name.startswith(ELEMENT_PREFIX):
            return slots.hold(stringify(lookup(scope, name)))
        if name in record:
            return slots.hold(stringify(record[name]))
        return match.group(0)

    return PLACEHOLDER_RE.sub(repl, body)


def _resolve_iterations(
    content: str,
    variables: Mapping[str, Any],
    slots: ValueSlots,
    max_passes: int,
) -> str:
    pos = 0
    while True:
        match = EACH_OPEN_RE.search(content, pos)
        if match is None:
            return content
        start = match.start()
        span = find_matching_close(content, start, EACH_OPEN, EACH_CLOSE)
        if span is None:
            pos = match.end()
            continue

        items = lookup(variables, match.group(1))
        body = content[match.end() : span.close_pos]
        if isinstance(items, (list, tuple)) and items:
            expanded = "".join(
                _expand_item(body, idx, item, variables, slots, max_passes)
                for idx, item in enumerate(items)
            )
        else:
            expanded = ""

        content = content[:start] + expanded + content[span.close_pos + len(EACH_CLOSE) :]
        pos = start + len(expanded)


def _one_pass(
    content: str,
    variables: Mapping[str, Any],
    slots: ValueSlots,
    max_passes: int,
) -> str:
    content = _resolve_conditionals(content, variables, with_else=True)
    content = _resolve_conditionals(content, variables, with_else=False)
    return _resolve_iterations(content, variables, slots, max_passes)


def _run_passes(
    content: str,
    variables: Mapping[str, Any],
    slots: ValueSlots,
    max_passes: int,
) -> str:
    for _ in range(max_passes):
        resolved = _one_pass(content, variables, slots, max_passes)
        if resolved == content:
            return resolved
        content = resolved
    logger.debug("directive pass budget of %d exhausted", max_passes)
    return content


def resolve_one_pass(
    content: str,
    variables: Mapping[str, Any],
    slots: ValueSlots | None = None,
) -> str:
    held = slots if slots is not None else ValueSlots()
    resolved = _one_pass(content, variables, held, DEFAULT_MAX_PASSES)
    return resolved if slots is not None else held.restore(resolved)


def resolve_directives(
    content: str,
    variables: Mapping[str, Any],
    max_passes: int = DEFAULT_MAX_PASSES,
    slots: ValueSlots | None = None,
) -> str:
    """Run passes until a fixed point or until ``max_passes`` is spent.

    Content nested deeper than the budget allows comes back partially
    resolved rather than raising. When ``slots`` is given, element values
    stay as slot tokens for the caller to restore after substitution;
    otherwise they are restored before returning.
    """
    if max_passes < 1:
        raise ValueError(f"max_passes must be >= 1, got {max_passes}")
    held = slots if slots is not None else ValueSlots()
    resolved = _run_passes(content, variables, held, max_passes)
    return resolved if slots is not None else held.restore(resolved)
