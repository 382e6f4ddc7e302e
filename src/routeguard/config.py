"""Pipeline configuration.

PipelineConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass
from enum import Enum


class ResponseValidation(Enum):
    """Which outbound responses get their body checked against the contract.

    The status code and the declared media type are checked for every
    response in every mode.
    """

    JSON = "json"  # Only application/json bodies are decoded and validated
    ALL = "all"  # Every media type must be declared and its body validated


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Validation pipeline configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = PipelineConfig(response_validation=ResponseValidation.ALL, debug=True)
    """

    # Response checks
    response_validation: ResponseValidation = ResponseValidation.JSON

    # Content negotiation — "application/json; charset=utf-8" matches
    # "application/json" unless this is False
    strip_media_type_parameters: bool = True

    # Expose unexpected exception text in 500 responses
    debug: bool = False

    # Indentation of values and schemas embedded in error messages
    message_indent: int | None = 2


DEFAULT_CONFIG = PipelineConfig()
