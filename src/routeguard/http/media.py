"""Media type names and ``Content-Type`` normalization."""

JSON = "application/json"
FORM_URLENCODED = "application/x-www-form-urlencoded"
MULTIPART = "multipart/form-data"
TEXT = "text/plain"


def media_type(content_type: str | None, *, strip_parameters: bool = True) -> str | None:
    """Normalize a ``Content-Type`` header value for lookup.

    ``"Application/JSON; charset=utf-8"`` -> ``"application/json"``.
    With ``strip_parameters=False`` parameters are kept, so they must match
    the declared key exactly (case-insensitively).

    Returns ``None`` for a missing or blank header.
    """
    if content_type is None:
        return None
    value = content_type.split(";", 1)[0] if strip_parameters else content_type
    value = value.strip().lower()
    return value or None
