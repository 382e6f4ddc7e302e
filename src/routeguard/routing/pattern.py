"""Path patterns with ``{name}`` placeholders.

A pattern like ``/things/{thingId}`` compiles into an ordered tuple of
placeholder names and a regex where each placeholder captures exactly one
path segment (``[^/]*``). Values are extracted positionally.

Extraction never raises on a mismatched path: it returns a mapping with
the missing keys absent, and the params schema decides what that means.
"""

import re
from dataclasses import dataclass
from functools import lru_cache

from routeguard.errors import ConfigurationError

# Regex matching {param} placeholders
_PLACEHOLDER_RE = re.compile(r"\{([^{}/]*)\}")

# Each placeholder matches a single path segment
_SEGMENT_CAPTURE = "([^/]*)"


@dataclass(frozen=True, slots=True)
class PathPattern:
    """A compiled path pattern.

    ``names`` are the placeholder names in order of appearance.
    ``regex`` is anchored at the end of the path only, so a mount prefix
    added by an adapter (``/api/things/1`` for ``/things/{id}``) still
    matches.
    """

    source: str
    names: tuple[str, ...]
    regex: re.Pattern[str]

    def extract(self, path: str) -> dict[str, str]:
        """Extract placeholder values from a concrete *path*.

        Returns an empty mapping when the path does not match.
        """
        match = self.regex.search(path)
        if match is None:
            return {}
        return dict(zip(self.names, match.groups(), strict=True))

    def matches(self, path: str) -> bool:
        """True if *path* has this pattern's shape."""
        return self.regex.search(path) is not None


@lru_cache(maxsize=512)
def compile_pattern(pattern: str) -> PathPattern:
    """Compile *pattern* into a ``PathPattern``.

    Raises ``ConfigurationError`` for empty or duplicate placeholder names.
    """
    names: list[str] = []
    parts: list[str] = []
    last = 0
    for match in _PLACEHOLDER_RE.finditer(pattern):
        name = match.group(1)
        if not name:
            msg = f"Empty placeholder in path pattern {pattern!r}"
            raise ConfigurationError(msg)
        if name in names:
            msg = f"Duplicate placeholder {{{name}}} in path pattern {pattern!r}"
            raise ConfigurationError(msg)
        names.append(name)
        parts.append(re.escape(pattern[last : match.start()]))
        parts.append(_SEGMENT_CAPTURE)
        last = match.end()
    parts.append(re.escape(pattern[last:]))

    regex = re.compile("".join(parts) + "$")
    return PathPattern(source=pattern, names=tuple(names), regex=regex)


def extract_params(pattern: str, path: str) -> dict[str, str]:
    """Extract ``{name}`` values from *path* according to *pattern*.

    Example::

        extract_params("/things/{thingId}", "/things/42")  # {"thingId": "42"}
        extract_params("/things/{thingId}", "/widgets")     # {}
    """
    return compile_pattern(pattern).extract(path)


def to_colon_syntax(pattern: str) -> str:
    """Rewrite ``{name}`` placeholders as ``:name``.

    For routing engines that use the colon convention::

        to_colon_syntax("/things/{thingId}")  # "/things/:thingId"
    """
    return _PLACEHOLDER_RE.sub(lambda m: f":{m.group(1)}", pattern)
