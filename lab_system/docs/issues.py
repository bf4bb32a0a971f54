"""
Validation issues and the validator capability used to harvest them.

Pydantic reports errors with its own type names (``string_too_short``,
``greater_than_equal``, ...).  The API exposes a smaller, stable vocabulary
of issue codes, shared by the 422 response handler and the generated
documentation examples.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Protocol, Tuple, Union

from pydantic import TypeAdapter, ValidationError

PathSegment = Union[str, int]

# Leading ``loc`` segments FastAPI adds to say where in the request an error is.
REQUEST_LOCATIONS = frozenset({"body", "query", "path", "header", "cookie"})

ISSUE_CODES: Dict[str, str] = {
    # wrong type / unparseable
    "missing": "invalid_type",
    "string_type": "invalid_type",
    "int_type": "invalid_type",
    "int_parsing": "invalid_type",
    "int_from_float": "invalid_type",
    "float_type": "invalid_type",
    "float_parsing": "invalid_type",
    "bool_type": "invalid_type",
    "bool_parsing": "invalid_type",
    "list_type": "invalid_type",
    "dict_type": "invalid_type",
    "model_type": "invalid_type",
    "model_attributes_type": "invalid_type",
    "none_required": "invalid_type",
    "datetime_type": "invalid_type",
    "datetime_parsing": "invalid_type",
    "date_type": "invalid_type",
    "date_parsing": "invalid_type",
    "uuid_type": "invalid_type",
    "url_type": "invalid_type",
    "json_invalid": "invalid_type",
    # string format
    "uuid_parsing": "invalid_string",
    "url_parsing": "invalid_string",
    "url_scheme": "invalid_string",
    "string_pattern_mismatch": "invalid_string",
    # bounds
    "string_too_short": "too_small",
    "too_short": "too_small",
    "greater_than": "too_small",
    "greater_than_equal": "too_small",
    "string_too_long": "too_big",
    "too_long": "too_big",
    "less_than": "too_big",
    "less_than_equal": "too_big",
    # choices and shape
    "enum": "invalid_enum_value",
    "literal_error": "invalid_enum_value",
    "extra_forbidden": "unrecognized_keys",
    "union_tag_invalid": "invalid_union",
    "union_tag_not_found": "invalid_union",
    "value_error": "custom",
    "assertion_error": "custom",
}


@dataclass(frozen=True)
class Issue:
    code: str
    path: Tuple[PathSegment, ...]
    message: str = ""


@dataclass(frozen=True)
class ValidationOutcome:
    success: bool
    issues: Tuple[Issue, ...] = field(default_factory=tuple)


class Validator(Protocol):
    """Anything that can check a value and report issues."""

    def validate(self, value: Any) -> ValidationOutcome: ...


def issue_code(error: Mapping[str, Any]) -> str:
    """Map a Pydantic error to an issue code; unknown types pass through."""
    error_type = error["type"]
    # EmailStr failures are plain value errors that carry a ``reason``.
    if error_type == "value_error" and "reason" in (error.get("ctx") or {}):
        return "invalid_string"
    return ISSUE_CODES.get(error_type, error_type)


def issue_from_error(error: Mapping[str, Any], strip_location: bool = False) -> Issue:
    """
    Convert one entry of ``ValidationError.errors()`` into an :class:`Issue`.

    With ``strip_location`` the leading request-location segment FastAPI
    adds (``body``, ``query``, ...) is dropped from the path.
    """
    loc = tuple(error.get("loc", ()))
    if strip_location and loc and loc[0] in REQUEST_LOCATIONS:
        loc = loc[1:]
    return Issue(code=issue_code(error), path=loc, message=error.get("msg", ""))


class PydanticValidator:
    """Validates values against a Pydantic model or type annotation."""

    def __init__(self, target: Any):
        self._adapter = TypeAdapter(target)

    def validate(self, value: Any) -> ValidationOutcome:
        try:
            self._adapter.validate_python(value)
        except ValidationError as exc:
            return ValidationOutcome(
                success=False,
                issues=tuple(issue_from_error(err) for err in exc.errors()),
            )
        return ValidationOutcome(success=True)
