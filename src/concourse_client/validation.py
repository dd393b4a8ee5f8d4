"""Declarative option validation.

Options are described by strict pydantic models (subclasses of OptionsSchema).
Validation never stops at the first problem: every violated constraint is
collected as a Violation and reported together in a single ValidationError,
e.g. ``Invalid parameter(s): ["api_url" is required, "team" must be an object].``
"""

import logging
import re
from typing import (
    Any,
    ClassVar,
    Dict,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Tuple,
    Type,
    TypeVar,
    cast,
    get_args,
)
from typing import Annotated
from urllib.parse import urlsplit

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticCustomError

from .errors import ValidationError

logger = logging.getLogger(__name__)

_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")


def _check_uri(value: str) -> str:
    """Accept only absolute, well-formed URIs."""
    invalid = PydanticCustomError("uri", "must be a valid uri")
    if any(character.isspace() for character in value):
        raise invalid
    try:
        parts = urlsplit(value)
        # Port parsing is lazy in urlsplit
        parts.port
    except ValueError as e:
        raise invalid from e
    if not parts.scheme or not _SCHEME_PATTERN.match(parts.scheme):
        raise invalid
    if not parts.netloc:
        raise invalid
    return value


def _check_http_client(value: Any) -> Any:
    """Accept any transport exposing a callable ``request`` (httpx.AsyncClient)."""
    if not callable(getattr(value, "request", None)):
        raise PydanticCustomError("http_client", "must be an http client")
    return value


Uri = Annotated[str, AfterValidator(_check_uri)]
HttpClient = Annotated[Any, AfterValidator(_check_http_client)]
Name = Annotated[str, Field(min_length=1)]
Entity = Dict[str, Any]
EntityView = Mapping[str, Any]


class OptionsSchema(BaseModel):
    """Base class for option schemas.

    Subclasses declare fields with pydantic annotations. Pairs of fields that
    must not be supplied together are listed in ``exclusive``.
    """

    model_config = ConfigDict(strict=True, frozen=True, extra="forbid")

    exclusive: ClassVar[Tuple[Tuple[str, str], ...]] = ()


class Violation(NamedTuple):
    """A single violated constraint."""

    field: str
    description: str

    def render(self) -> str:
        return f'"{self.field}" {self.description}'


S = TypeVar("S", bound=OptionsSchema)

_DESCRIPTIONS = {
    "missing": "is required",
    "string_type": "must be a string",
    "int_type": "must be an integer",
    "float_type": "must be a number",
    "bool_type": "must be a boolean",
    "dict_type": "must be an object",
    "extra_forbidden": "is not allowed",
    "string_too_short": "is not allowed to be empty",
}


def _describe(error: Mapping[str, Any]) -> str:
    kind = error["type"]
    context = error.get("ctx") or {}
    if kind in _DESCRIPTIONS:
        return _DESCRIPTIONS[kind]
    if kind == "greater_than_equal":
        return f"must be greater than or equal to {context['ge']:g}"
    if kind == "greater_than":
        return f"must be greater than {context['gt']:g}"
    if kind == "string_pattern_mismatch":
        return (
            f'with value "{error["input"]}" fails to match the required '
            f"pattern: {context['pattern']}"
        )
    return str(error["msg"])


def _accepts_none(schema: Type[OptionsSchema], name: str) -> bool:
    field = schema.model_fields.get(name)
    if field is None:
        return False
    return type(None) in get_args(field.annotation)


def collect_violations(
    schema: Type[S], options: Mapping[str, Any]
) -> Tuple[Optional[S], List[Violation]]:
    """Validate options against a schema without raising.

    None is treated as "not supplied" for fields that do not accept None, so
    that omitted and None-valued required options are both reported as
    required.

    Returns:
        Tuple of (validated instance or None, list of violations)
    """
    candidate: Dict[str, Any] = {
        key: value
        for key, value in options.items()
        if value is not None or _accepts_none(schema, key)
    }

    violations: List[Violation] = []
    instance: Optional[S] = None
    try:
        instance = schema.model_validate(candidate)
    except PydanticValidationError as e:
        for error in e.errors():
            location = error["loc"]
            field = str(location[0]) if location else "value"
            violations.append(Violation(field, _describe(error)))

    for field, peer in schema.exclusive:
        if options.get(field) is not None and options.get(peer) is not None:
            violations.append(
                Violation(field, f'conflict with forbidden peer "{peer}"')
            )

    if violations:
        return None, violations
    return instance, violations


def validate_options(schema: Type[S], options: Mapping[str, Any]) -> S:
    """Validate options against a schema.

    Args:
        schema: OptionsSchema subclass describing the options
        options: Candidate option values

    Returns:
        Validated schema instance with defaults applied

    Raises:
        ValidationError: If any constraint is violated; the message lists all
            violations
    """
    instance, violations = collect_violations(schema, options)
    if violations:
        rendered = [violation.render() for violation in violations]
        logger.debug(f"Rejected {schema.__name__} options: {rendered}")
        raise ValidationError(rendered)
    return cast(S, instance)
