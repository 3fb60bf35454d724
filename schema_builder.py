"""
Compile survey fields into per-question validation rules.

Exports:
- build_schema(fields) -> dict[question, Rule]
- validate_value(rule, value) -> Optional[str]
- validate_answers(schema, values) -> dict[question, message]

A rule is one of StringRule / NumberRule / BooleanRule, tagged by ``kind``.
Messages follow the wording users already see from the form:
"Required", "Expected number, received string", ...
"""

from __future__ import annotations

import logging
import math
from typing import Annotated, Any, Dict, Iterable, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from data_loader import ALLOWED_FIELD_TYPES, FieldDescriptor, options_list

logger = logging.getLogger(__name__)


class SurveyConfigError(ValueError):
    """The survey declares something the form cannot validate."""


class StringRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["string"] = "string"
    required: bool = False
    min_length: Optional[int] = None
    choices: Optional[List[str]] = None


class NumberRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["number"] = "number"
    required: bool = False
    minimum: Optional[float] = None


class BooleanRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["boolean"] = "boolean"
    required: bool = False


Rule = Annotated[Union[StringRule, NumberRule, BooleanRule], Field(discriminator="kind")]
ValidationSchema = Dict[str, Rule]


def build_rule(field: FieldDescriptor) -> Rule:
    if field.type == "string":
        choices = options_list(field) if field.is_mcq else None
        return StringRule(required=field.required, min_length=field.min_char, choices=choices or None)
    if field.type == "number":
        return NumberRule(required=field.required, minimum=field.min_val)
    if field.type == "boolean":
        return BooleanRule(required=field.required)
    raise SurveyConfigError(
        f"Field '{field.question}' has unsupported type '{field.type}'. "
        f"Allowed types: {sorted(ALLOWED_FIELD_TYPES)}"
    )


def build_schema(fields: Iterable[FieldDescriptor]) -> ValidationSchema:
    """
    One rule per field, keyed by question text, in survey order.
    Any unsupported type aborts the whole build.
    """
    schema: ValidationSchema = {}
    for fld in fields:
        schema[fld.question] = build_rule(fld)
    logger.debug("Built validation schema with %d rules", len(schema))
    return schema


def _type_name(value: Any) -> str:
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "nan" if isinstance(value, float) and math.isnan(value) else "number"
    if isinstance(value, str):
        return "string"
    return type(value).__name__


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def _check_string(rule: StringRule, value: Any) -> Optional[str]:
    if value is None:
        if rule.required or rule.min_length:
            return "Required"
        return f"Expected string, received {_type_name(value)}"
    if not isinstance(value, str):
        return f"Expected string, received {_type_name(value)}"
    if rule.required and value == "":
        return "Required"
    if rule.min_length is not None and len(value) < rule.min_length:
        return f"String must contain at least {rule.min_length} character(s)"
    if rule.choices and value and value not in rule.choices:
        return f"Invalid option. Expected one of: {' | '.join(rule.choices)}"
    return None


def _check_number(rule: NumberRule, value: Any) -> Optional[str]:
    if value is None:
        if rule.required or rule.minimum is not None:
            return "Required"
        return f"Expected number, received {_type_name(value)}"
    if not _is_number(value):
        return f"Expected number, received {_type_name(value)}"
    if rule.minimum is not None and value < rule.minimum:
        return f"Number must be greater than or equal to {rule.minimum:g}"
    return None


def _check_boolean(rule: BooleanRule, value: Any) -> Optional[str]:
    if value is None:
        if rule.required:
            return "Required"
        return f"Expected boolean, received {_type_name(value)}"
    if not isinstance(value, bool):
        return f"Expected boolean, received {_type_name(value)}"
    return None


def validate_value(rule: Rule, value: Any) -> Optional[str]:
    """Return an error message for ``value`` under ``rule``, or None when it passes."""
    if isinstance(rule, StringRule):
        return _check_string(rule, value)
    if isinstance(rule, NumberRule):
        return _check_number(rule, value)
    if isinstance(rule, BooleanRule):
        return _check_boolean(rule, value)
    raise SurveyConfigError(f"Unknown rule kind: {type(rule).__name__}")


def validate_answers(schema: ValidationSchema, values: Dict[str, Any]) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for question, rule in schema.items():
        msg = validate_value(rule, values.get(question))
        if msg:
            errors[question] = msg
    return errors
