"""Glob pattern compilation for base-name matching.

Supported syntax:

* ``*`` matches any run of characters (including none)
* ``?`` matches exactly one character
* ``{a,b,c}`` matches any one of the comma-separated alternatives
* ``[abc]`` / ``[a-z]`` / ``[!abc]`` character classes
* ``\\x`` matches ``x`` literally

Brace groups do not nest. Patterns are matched against a file's base name
only, so ``/`` has no special meaning.
"""

from __future__ import annotations

import re

from .errors import UsageError


def compile_glob(pattern: str) -> re.Pattern[str]:
    """Translate a glob pattern into an anchored compiled regex."""
    if pattern == "":
        raise UsageError("Glob pattern must not be empty.")

    parts: list[str] = []
    in_group = False
    i = 0
    length = len(pattern)

    while i < length:
        char = pattern[i]

        if char == "\\":
            if i + 1 >= length:
                raise UsageError(f"Invalid glob pattern (trailing escape): {pattern}")
            parts.append(re.escape(pattern[i + 1]))
            i += 2
            continue

        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        elif char == "{":
            if in_group:
                raise UsageError(f"Invalid glob pattern (nested group): {pattern}")
            in_group = True
            parts.append("(?:")
        elif char == "}" and in_group:
            in_group = False
            parts.append(")")
        elif char == "," and in_group:
            parts.append("|")
        elif char == "[":
            class_end = pattern.find("]", i + 2)
            if class_end == -1:
                raise UsageError(f"Invalid glob pattern (unclosed bracket): {pattern}")
            parts.append(_translate_class(pattern[i + 1 : class_end]))
            i = class_end + 1
            continue
        else:
            parts.append(re.escape(char))
        i += 1

    if in_group:
        raise UsageError(f"Invalid glob pattern (unclosed group): {pattern}")

    try:
        return re.compile("".join(parts), re.DOTALL)
    except re.error as exc:
        raise UsageError(f"Invalid glob pattern: {pattern}") from exc


def _translate_class(body: str) -> str:
    negate = body.startswith("!")
    if negate:
        body = body[1:]
    escaped = body.replace("\\", "\\\\").replace("^", "\\^").replace("[", "\\[")
    return f"[^{escaped}]" if negate else f"[{escaped}]"


def matches_glob(compiled: re.Pattern[str], name: str) -> bool:
    return compiled.fullmatch(name) is not None
