"""Depth-counted matching of directive tags.

Given the position of an opening tag, ``find_matching_close`` walks forward
through the raw template text and returns where the tag closes, skipping
over any same-kind tags nested inside it. Tags of another kind never touch
the counter because their literal markers differ from the ones searched for.
"""

from __future__ import annotations

from dataclasses import dataclass


IF_OPEN = "{{#if "
IF_CLOSE = "{{/if}}"
ELSE = "{{else}}"
EACH_OPEN = "{{#each "
EACH_CLOSE = "{{/each}}"


@dataclass(frozen=True)
class TagMatch:
    close_pos: int
    else_pos: int | None = None


def find_matching_close(
    content: str,
    start: int,
    open_marker: str,
    close_marker: str,
    else_marker: str | None = None,
) -> TagMatch | None:
    """Return the close (and optional depth-1 else) position for the tag at
    ``start``, or ``None`` when the tag is never closed."""
    depth = 0
    else_pos: int | None = None
    pos = start
    end = len(content)
    while pos < end:
        if content.startswith(open_marker, pos):
            depth += 1
            pos += len(open_marker)
            continue
        if content.startswith(close_marker, pos):
            depth -= 1
            if depth <= 0:
                return TagMatch(close_pos=pos, else_pos=else_pos)
            pos += len(close_marker)
            continue
        if (
            else_marker is not None
            and depth == 1
            and else_pos is None
            and content.startswith(else_marker, pos)
        ):
            else_pos = pos
            pos += len(else_marker)
            continue
        pos += 1
    return None
