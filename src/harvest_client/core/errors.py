"""Error types raised by the Harvest binding.

Transport failures are not represented here: httpx errors (connection
problems, timeouts, non-2xx statuses) propagate to the caller unmodified.
"""

from typing import Any, Optional, Union, get_args, get_origin

from pydantic import ValidationError  # type: ignore[import-untyped]


class HarvestError(Exception):
    """Base class for all locally raised errors."""

    pass


class ConfigurationError(HarvestError, ValueError):
    """Required configuration is missing or invalid."""

    pass


class DecodeError(HarvestError):
    """A response body did not match the expected JSON shape.

    Attributes:
        field: Remote (snake_case) name of the offending field
        expected: Human readable description of the expected type
        model: Name of the record being decoded
    """

    def __init__(self, field: str, expected: str, model: Optional[str] = None):
        self.field = field
        self.expected = expected
        self.model = model
        prefix = f"{model}: " if model else ""
        super().__init__(f"{prefix}field '{field}' expected {expected}")

    @classmethod
    def from_validation_error(cls, model: Any, error: ValidationError) -> "DecodeError":
        """Build a DecodeError from the first pydantic validation failure.

        Args:
            model: The pydantic model class that failed to validate
            error: The validation error raised by pydantic

        Returns:
            DecodeError naming the first failing field
        """
        details = error.errors()[0]
        loc = details.get("loc", ())
        field = ".".join(str(part) for part in loc) or "<root>"

        annotation = _annotation_at(model, loc)
        if annotation is not None:
            expected = _describe(annotation)
        else:
            expected = details.get("msg") or details.get("type", "value")

        return cls(field, expected, model.__name__)


class TokenExtractionError(HarvestError):
    """The OAuth redirect fragment did not carry an access token.

    Attributes:
        auth_url: The authorization URL to send the user back to
    """

    def __init__(self, auth_url: str):
        self.auth_url = auth_url
        super().__init__(f"No access_token in redirect fragment, re-authorize at {auth_url}")


def _strip_optional(annotation: Any) -> Any:
    if get_origin(annotation) is Union:
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _annotation_at(model: Any, loc: tuple[Any, ...]) -> Any:
    """Follow a validation error location down to the leaf field's annotation.

    Field names step into nested models, integer indexes step into list items.
    Returns None when the location does not map onto declared fields.
    """
    if not loc:
        return None
    annotation = model
    for part in loc:
        container = _strip_optional(annotation)
        if isinstance(part, int):
            args = get_args(container)
            if get_origin(container) is not list or not args:
                return None
            annotation = args[0]
            continue
        fields = getattr(container, "model_fields", None)
        if not isinstance(container, type) or not fields or part not in fields:
            return None
        annotation = fields[part].annotation
    return annotation


def _describe(annotation: Any) -> str:
    """Render a type annotation the way it reads in source."""
    if isinstance(annotation, type):
        return annotation.__name__
    return str(annotation).replace("typing.", "")
