"""Built-in validation rules for ``FieldsSchema``.

Each rule is a callable with the signature::

    def rule(value: str) -> str | None:
        '''Return error message, or None if valid.'''

Parameterized rules are factory functions that return a rule::

    def max_length(n: int) -> Validator:
        @describes(maxLength=n)
        def check(value: str) -> str | None:
            if len(value) > n:
                return f"Must be at most {n} characters"
            return None
        return check

``@describes(...)`` attaches the JSON-schema keywords a rule stands for,
so ``FieldsSchema.describe()`` can render it. Custom rules without it
still validate; they just don't show up in the description.
"""

import re
from collections.abc import Callable
from typing import Any

# Type alias for a validator function
type Validator = Callable[[str], str | None]


def describes(**keywords: Any) -> Callable[[Validator], Validator]:
    """Attach JSON-schema *keywords* to a rule."""

    def decorator(rule: Validator) -> Validator:
        rule.__schema__ = keywords  # type: ignore[attr-defined]
        return rule

    return decorator


def describe_rule(rule: Validator) -> dict[str, Any]:
    """The JSON-schema keywords a rule stands for (empty if undeclared)."""
    return dict(getattr(rule, "__schema__", {}))


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


@describes(minLength=1)
def required(value: str) -> str | None:
    """Field must be present and non-empty."""
    if not value or not value.strip():
        return "This field is required"
    return None


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def max_length(n: int) -> Validator:
    """String must be at most *n* characters."""

    @describes(maxLength=n)
    def check(value: str) -> str | None:
        if len(value) > n:
            return f"Must be at most {n} characters"
        return None

    return check


def min_length(n: int) -> Validator:
    """String must be at least *n* characters."""

    @describes(minLength=n)
    def check(value: str) -> str | None:
        if len(value) < n:
            return f"Must be at least {n} characters"
        return None

    return check


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

# Basic email pattern — checks structure, not deliverability
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")


@describes(format="email")
def email(value: str) -> str | None:
    """Value must be a valid email address (basic format check)."""
    if not _EMAIL_RE.match(value):
        return "Must be a valid email address"
    return None


# Basic URL pattern — checks scheme + host structure
_URL_RE = re.compile(r"^https?://[^\s/$.?#].\S*$", re.IGNORECASE)


@describes(format="uri")
def url(value: str) -> str | None:
    """Value must be a valid URL (http/https)."""
    if not _URL_RE.match(value):
        return "Must be a valid URL"
    return None


def matches(pattern: str, message: str | None = None) -> Validator:
    """Value must match the given regex pattern (searched, not anchored)."""
    compiled = re.compile(pattern)

    @describes(pattern=pattern)
    def check(value: str) -> str | None:
        if not compiled.search(value):
            return message or f"Must match pattern: {pattern}"
        return None

    return check


# ---------------------------------------------------------------------------
# Choice
# ---------------------------------------------------------------------------


def one_of(*choices: str) -> Validator:
    """Value must be one of the given choices."""
    allowed = frozenset(choices)

    @describes(enum=sorted(allowed))
    def check(value: str) -> str | None:
        if value not in allowed:
            options = ", ".join(sorted(allowed))
            return f"Must be one of: {options}"
        return None

    return check


# ---------------------------------------------------------------------------
# Numeric strings
# ---------------------------------------------------------------------------


@describes(pattern=r"^-?\d+$")
def integer(value: str) -> str | None:
    """Value must be a valid integer."""
    try:
        int(value)
    except (ValueError, TypeError):
        return "Must be a whole number"
    return None


def number(value: str) -> str | None:
    """Value must be a valid number (int or float)."""
    try:
        float(value)
    except (ValueError, TypeError):
        return "Must be a number"
    return None
