"""Path-style key patterns such as ``services.:name`` or ``route/:id?``.

The grammar follows path-to-regexp 1.x: named parameters (``:name``) with an
optional custom group (``:id(\\d+)``) and modifier (``?``, ``*``, ``+``),
unnamed groups (``(\\d+)``, numbered from 0), ``*`` wildcards and
backslash escapes. A parameter preceded by ``.`` or ``/`` uses that character
as its prefix and as the delimiter its default group cannot cross.
"""

from __future__ import annotations

import itertools
import re
from dataclasses import dataclass
from typing import Any, TypeAlias

from lazybox._internal.definitions import HiddenKey

ParameterName: TypeAlias = "str | int"
MatchParameters: TypeAlias = "dict[str | int, str | None]"

DEFAULT_DELIMITER = "/"

_TOKEN_PATTERN = re.compile(
    r"(\\.)"
    r"|([/.])?(?:(?::(\w+)(?:\(((?:\\.|[^\\()])+)\))?|\(((?:\\.|[^\\()])+)\))([+*?])?|(\*))",
    re.ASCII,
)
_GROUP_SPECIAL_CHARACTERS = re.compile(r"([=!:$/()])")


@dataclass(frozen=True, slots=True)
class PatternParameter:
    """One placeholder of a parsed key pattern."""

    name: ParameterName
    prefix: str
    delimiter: str
    optional: bool
    repeat: bool
    partial: bool
    asterisk: bool
    pattern: str


PatternToken: TypeAlias = "str | PatternParameter"


@dataclass(frozen=True, slots=True)
class KeyPattern:
    """A compiled key pattern."""

    source: str
    regex: re.Pattern[str]
    parameters: tuple[PatternParameter, ...]

    def match(self, text: str) -> MatchParameters | None:
        """Return captured parameters when ``text`` matches, ``None`` otherwise.

        Optional placeholders that did not participate map to ``None``.
        """
        found = self.regex.match(text)
        if found is None:
            return None
        return {
            parameter.name: found.group(index)
            for index, parameter in enumerate(self.parameters, start=1)
        }


def parse_key_pattern(pattern: str, *, delimiter: str = DEFAULT_DELIMITER) -> list[PatternToken]:
    tokens: list[PatternToken] = []
    unnamed = itertools.count()
    literal = ""
    index = 0

    for found in _TOKEN_PATTERN.finditer(pattern):
        escaped, prefix, name, capture, group, modifier, asterisk = found.groups()
        literal += pattern[index : found.start()]
        index = found.end()

        if escaped:
            literal += escaped[1]
            continue

        if literal:
            tokens.append(literal)
            literal = ""

        next_character = pattern[index] if index < len(pattern) else None
        token_delimiter = prefix or delimiter
        group_pattern = capture or group
        if group_pattern:
            regex = _GROUP_SPECIAL_CHARACTERS.sub(r"\\\1", group_pattern)
        elif asterisk:
            regex = ".*"
        else:
            regex = f"[^{re.escape(token_delimiter)}]+?"

        tokens.append(
            PatternParameter(
                name=name or next(unnamed),
                prefix=prefix or "",
                delimiter=token_delimiter,
                optional=modifier in ("?", "*"),
                repeat=modifier in ("+", "*"),
                partial=(
                    prefix is not None
                    and next_character is not None
                    and next_character != prefix
                ),
                asterisk=bool(asterisk),
                pattern=regex,
            ),
        )

    literal += pattern[index:]
    if literal:
        tokens.append(literal)
    return tokens


def compile_key_pattern(
    pattern: str,
    *,
    sensitive: bool = False,
    strict: bool = False,
    end: bool = True,
    delimiter: str = DEFAULT_DELIMITER,
) -> KeyPattern:
    """Compile a key pattern into an anchored regular expression.

    Args:
        pattern: Path-style pattern, for example ``foo.:bar.:baz?``.
        sensitive: Match case-sensitively.
        strict: Disallow an optional trailing delimiter.
        end: Require the whole key to match rather than a prefix.
        delimiter: Default delimiter for parameters without a prefix.

    Returns:
        The compiled pattern.

    """
    route = ""
    parameters: list[PatternParameter] = []

    for token in parse_key_pattern(pattern, delimiter=delimiter):
        if isinstance(token, str):
            route += re.escape(token)
            continue

        parameters.append(token)
        prefix = re.escape(token.prefix)
        capture = f"(?:{token.pattern})"
        if token.repeat:
            capture += f"(?:{prefix}{capture})*"
        if not token.optional:
            capture = f"{prefix}({capture})"
        elif token.partial:
            capture = f"{prefix}({capture})?"
        else:
            capture = f"(?:{prefix}({capture}))?"
        route += capture

    escaped_delimiter = re.escape(delimiter)
    ends_with_delimiter = route.endswith(escaped_delimiter)
    if not strict:
        if ends_with_delimiter:
            route = route[: -len(escaped_delimiter)]
        route += f"(?:{escaped_delimiter}(?=\\Z))?"
    if end:
        route += r"\Z"
    elif not (strict and ends_with_delimiter):
        route += f"(?={escaped_delimiter}|\\Z)"

    flags = 0 if sensitive else re.IGNORECASE
    return KeyPattern(
        source=pattern,
        regex=re.compile(f"^{route}", flags),
        parameters=tuple(parameters),
    )


def printable_key(key: Any) -> str | None:
    """Return the string form used to match ``key``, or ``None`` when it has none."""
    if isinstance(key, str):
        return key
    if isinstance(key, HiddenKey):
        return None
    try:
        return str(key)
    except Exception:  # noqa: BLE001
        return None


__all__ = [
    "KeyPattern",
    "MatchParameters",
    "PatternParameter",
    "compile_key_pattern",
    "parse_key_pattern",
    "printable_key",
]
