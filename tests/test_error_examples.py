"""
Unit tests for validation-error example extraction.

Tests cover:
- Examples harvested from the real Pydantic validator
- Limits on the number of issues
- Fallback when validation passes or anything raises
- The OpenAPI responses entry
"""

import logging
import uuid
from typing import Any, List, Optional, Union

import pytest
from pydantic import BaseModel, EmailStr, Field

from lab_system.docs.error_examples import (
    FALLBACK_EXAMPLE,
    default_message,
    error_examples_for,
    extract_error_examples,
    validation_error_response,
)
from lab_system.docs.issues import Issue, PydanticValidator, ValidationOutcome
from lab_system.docs.schema_nodes import (
    BooleanNode,
    Minimum,
    NumberNode,
    ObjectNode,
    StringNode,
    node_from_type,
)
from lab_system.schemas.common import ValidationErrorResponse
from lab_system.schemas.user import UserCreate

# ────────────────────────────────────────────────────────────────────────────
# Validator doubles
# ────────────────────────────────────────────────────────────────────────────


class AlwaysValid:
    def validate(self, value: Any) -> ValidationOutcome:
        return ValidationOutcome(success=True)


class Exploding:
    def validate(self, value: Any) -> ValidationOutcome:
        raise RuntimeError("validator blew up")


class FixedIssues:
    def __init__(self, *issues: Issue):
        self.issues = issues

    def validate(self, value: Any) -> ValidationOutcome:
        return ValidationOutcome(success=False, issues=self.issues)


# ────────────────────────────────────────────────────────────────────────────
# Models
# ────────────────────────────────────────────────────────────────────────────


class Adult(BaseModel):
    age: int = Field(ge=18)


class Contact(BaseModel):
    email: EmailStr


class Anything(BaseModel):
    value: Any = None


class Wide(BaseModel):
    a: bool
    b: bool
    c: bool
    d: bool
    e: bool


class TestHarvestedExamples:
    def test_minimum_scenario(self):
        examples = error_examples_for(Adult)
        assert len(examples) == 1
        assert examples[0]["code"] == "too_small"
        assert examples[0]["path"] == ["age"]
        assert examples[0]["message"]

    def test_email_scenario(self):
        examples = error_examples_for(Contact)
        assert len(examples) == 1
        assert examples[0]["path"] == ["email"]
        assert examples[0]["code"] == "invalid_string"

    def test_integer_only(self):
        class Count(BaseModel):
            n: int

        assert error_examples_for(Count)[0]["code"] == "invalid_type"

    def test_uuid_format(self):
        class Ref(BaseModel):
            id: uuid.UUID

        assert error_examples_for(Ref)[0]["code"] == "invalid_string"

    def test_array_path_includes_index(self):
        class Tagged(BaseModel):
            tags: List[str]

        assert error_examples_for(Tagged)[0]["path"] == ["tags", 0]

    def test_enum(self):
        examples = error_examples_for(UserCreate.model_fields["user_type"].annotation)
        assert examples[0]["code"] == "invalid_enum_value"
        assert examples[0]["path"] == []

    def test_union_rejected_by_every_member(self):
        class Either(BaseModel):
            v: Union[int, bool]

        examples = error_examples_for(Either)
        assert examples
        assert all(ex["path"][0] == "v" for ex in examples)

    def test_nullable_field(self):
        class Maybe(BaseModel):
            score: Optional[int] = Field(default=None, le=10)

        assert error_examples_for(Maybe) == [
            {
                "code": "too_big",
                "path": ["score"],
                "message": "Input should be less than or equal to 10",
            }
        ]

    def test_user_create(self):
        examples = error_examples_for(UserCreate)
        assert [ex["path"] for ex in examples] == [["email"], ["first_name"], ["last_name"]]
        assert [ex["code"] for ex in examples] == ["invalid_string", "too_small", "too_small"]

    def test_at_most_three_issues(self):
        examples = error_examples_for(Wide)
        assert len(examples) == 3
        assert [ex["path"] for ex in examples] == [["a"], ["b"], ["c"]]

    def test_idempotent(self):
        assert error_examples_for(UserCreate) == error_examples_for(UserCreate)


class TestExtractor:
    def test_issue_order_preserved_and_limited(self):
        issues = [Issue(code="too_big", path=(f"f{i}",), message=f"m{i}") for i in range(5)]
        examples = extract_error_examples(BooleanNode(), FixedIssues(*issues))
        assert [ex["path"] for ex in examples] == [["f0"], ["f1"], ["f2"]]

    def test_empty_message_uses_default(self):
        examples = extract_error_examples(
            BooleanNode(), FixedIssues(Issue(code="too_small", path=("x",), message=""))
        )
        assert examples[0]["message"] == "Value is too small"

    def test_non_primitive_path_segments_stringified(self):
        class Key:
            def __str__(self) -> str:
                return "key"

        examples = extract_error_examples(
            BooleanNode(), FixedIssues(Issue(code="custom", path=("a", 0, Key()), message="m"))
        )
        assert examples[0]["path"] == ["a", 0, "key"]

    def test_real_validator_on_node(self):
        node = ObjectNode((("age", NumberNode((Minimum(18),))),))
        examples = extract_error_examples(node, PydanticValidator(Adult))
        assert examples[0]["code"] == "too_small"
        assert examples[0]["path"] == ["age"]


class TestFallback:
    def test_permissive_validator(self):
        assert extract_error_examples(StringNode(), AlwaysValid()) == [FALLBACK_EXAMPLE]

    def test_permissive_schema(self):
        assert error_examples_for(Anything) == [FALLBACK_EXAMPLE]

    def test_failure_without_issues(self):
        assert extract_error_examples(StringNode(), FixedIssues()) == [FALLBACK_EXAMPLE]

    def test_validator_exception_is_logged_not_raised(self, caplog):
        caplog.set_level(logging.WARNING, logger="lab_system.docs.error_examples")
        assert extract_error_examples(StringNode(), Exploding()) == [FALLBACK_EXAMPLE]
        assert any("error examples" in r.getMessage() for r in caplog.records)

    def test_unintrospectable_target(self):
        assert error_examples_for(object()) == [FALLBACK_EXAMPLE]

    def test_fallback_is_a_fresh_copy(self):
        first = extract_error_examples(StringNode(), AlwaysValid())
        first[0]["path"].append("mutated")
        assert FALLBACK_EXAMPLE["path"] == ["field"]

    def test_fallback_content(self):
        assert FALLBACK_EXAMPLE == {
            "code": "invalid_type",
            "path": ["field"],
            "message": "Expected string, received number",
        }


class TestDefaultMessage:
    @pytest.mark.parametrize(
        "code, message",
        [
            ("invalid_type", "Invalid type provided"),
            ("invalid_string", "Invalid string format"),
            ("too_small", "Value is too small"),
            ("too_big", "Value is too large"),
            ("invalid_enum_value", "Invalid enum value"),
            ("unrecognized_keys", "Unrecognized keys in object"),
            ("required_error", "Required field is missing"),
            ("something_else", "Validation error"),
        ],
    )
    def test_table(self, code, message):
        assert default_message(code) == message


class TestValidationErrorResponse:
    def test_entry_shape(self):
        entry = validation_error_response(Adult, "Bad input")
        assert entry["model"] is ValidationErrorResponse
        assert entry["description"] == "Bad input"
        example = entry["content"]["application/json"]["example"]
        assert example["success"] is False
        assert example["error"]["name"] == "ValidationError"
        assert example["error"]["issues"][0]["path"] == ["age"]

    def test_example_matches_response_model(self):
        example = validation_error_response(UserCreate)["content"]["application/json"]["example"]
        ValidationErrorResponse.model_validate(example)

    def test_node_building_is_pure(self):
        assert node_from_type(Adult) == node_from_type(Adult)
