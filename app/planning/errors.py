"""Error types for workout plan generation.

Only failures that make a generated plan unusable are raised. Schema
deviations are collected as ValidationWarning records and repaired; coverage
and recovery findings are returned as data.

- ParseFailureError: model text could not be turned into structured data
- StructureInvalidError: parsed data has no week_schedule root
- ServiceUnavailableError: the generative service or selected model failed
"""

from dataclasses import dataclass


class PlanGenerationError(Exception):
    """Base exception for all plan generation errors."""

    pass


class ParseFailureError(PlanGenerationError):
    """Raised when no extraction strategy yields valid JSON.

    Attributes:
        original_text: The raw text that failed to parse (None for non-string input)
    """

    def __init__(self, message: str, original_text: str | None = None):
        self.original_text = original_text
        super().__init__(message)


class StructureInvalidError(PlanGenerationError):
    """Raised when the parsed payload lacks a usable week_schedule root."""

    pass


class ServiceUnavailableError(PlanGenerationError):
    """Raised when the generative service cannot produce a response.

    Attributes:
        model_name: Model that was requested, if known
        status_code: HTTP status reported by the service, if any
    """

    def __init__(self, message: str, model_name: str | None = None, status_code: int | None = None):
        self.model_name = model_name
        self.status_code = status_code
        super().__init__(message)

    @property
    def model_not_found(self) -> bool:
        return self.status_code == 404 or "not found" in str(self).lower()


@dataclass(frozen=True)
class ValidationWarning:
    """A repaired schema deviation.

    Attributes:
        field: Dotted path of the offending field (e.g. "Monday.target_sets")
        message: Human-readable description
    """

    field: str
    message: str
