"""
Validation-error examples for the OpenAPI document.

Instead of hand-written placeholders, each 422 example is produced by
synthesizing bad data for the request schema and running the real validator
against it, so the documented issues are the ones clients will receive.

Everything here runs while routes are being registered.  Any failure is
logged and replaced by ``FALLBACK_EXAMPLE``; nothing is ever raised to the
caller.
"""

import logging
from typing import Any, Dict, List

from lab_system.core.config import settings
from lab_system.docs.bad_data import synthesize
from lab_system.docs.issues import Issue, PydanticValidator, Validator
from lab_system.docs.schema_nodes import SchemaNode, node_from_type
from lab_system.schemas.common import ValidationErrorResponse

logger = logging.getLogger(__name__)

MAX_EXAMPLE_ISSUES = settings.ERROR_EXAMPLE_MAX_ISSUES

FALLBACK_EXAMPLE: Dict[str, Any] = {
    "code": "invalid_type",
    "path": ["field"],
    "message": "Expected string, received number",
}

DEFAULT_MESSAGES: Dict[str, str] = {
    "invalid_type": "Invalid type provided",
    "invalid_string": "Invalid string format",
    "too_small": "Value is too small",
    "too_big": "Value is too large",
    "invalid_enum_value": "Invalid enum value",
    "unrecognized_keys": "Unrecognized keys in object",
    "required_error": "Required field is missing",
}


def default_message(code: str) -> str:
    return DEFAULT_MESSAGES.get(code, "Validation error")


def _fallback() -> List[Dict[str, Any]]:
    return [{**FALLBACK_EXAMPLE, "path": list(FALLBACK_EXAMPLE["path"])}]


def _example(issue: Issue) -> Dict[str, Any]:
    return {
        "code": issue.code,
        "path": [seg if isinstance(seg, (str, int)) else str(seg) for seg in issue.path],
        "message": issue.message or default_message(issue.code),
    }


def extract_error_examples(
    node: SchemaNode,
    validator: Validator,
    max_issues: int = MAX_EXAMPLE_ISSUES,
) -> List[Dict[str, Any]]:
    """
    Return up to ``max_issues`` real validation issues for ``node``.

    Issues are kept in the order the validator reports them.  If the
    synthesized value passes validation, or anything goes wrong, the
    single ``FALLBACK_EXAMPLE`` is returned instead.
    """
    try:
        outcome = validator.validate(synthesize(node))
        if not outcome.success and outcome.issues:
            return [_example(issue) for issue in outcome.issues[:max_issues]]
    except Exception:
        logger.warning("Failed to generate schema-specific error examples", exc_info=True)
    return _fallback()


def error_examples_for(target: Any) -> List[Dict[str, Any]]:
    """Error examples for a Pydantic model (or any type Pydantic validates)."""
    try:
        node = node_from_type(target)
        validator = PydanticValidator(target)
    except Exception:
        logger.warning("Could not introspect %r for error examples", target, exc_info=True)
        return _fallback()
    return extract_error_examples(node, validator)


def validation_error_response(
    target: Any, description: str = "Validation failed"
) -> Dict[str, Any]:
    """
    Build an OpenAPI ``responses`` entry for a 422 whose example lists the
    issues ``target`` actually produces.
    """
    return {
        "model": ValidationErrorResponse,
        "description": description,
        "content": {
            "application/json": {
                "example": {
                    "success": False,
                    "error": {
                        "issues": error_examples_for(target),
                        "name": "ValidationError",
                    },
                }
            }
        },
    }
