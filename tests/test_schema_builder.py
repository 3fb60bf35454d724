import math

import pytest

from conftest import raw_field
from data_loader import parse_survey
from schema_builder import (
    BooleanRule,
    NumberRule,
    StringRule,
    SurveyConfigError,
    build_schema,
    validate_answers,
    validate_value,
)


def _schema(*rows):
    return build_schema(parse_survey({"Survey": list(rows)}).fields)


def test_one_rule_per_field_keyed_by_question(two_page_survey):
    schema = build_schema(two_page_survey.fields)
    assert list(schema) == ["Name", "Age", "Subscribe"]
    assert isinstance(schema["Name"], StringRule)
    assert isinstance(schema["Age"], NumberRule)
    assert isinstance(schema["Subscribe"], BooleanRule)


def test_rule_carries_constraints(two_page_survey):
    schema = build_schema(two_page_survey.fields)
    assert schema["Name"].min_length == 2
    assert schema["Name"].required is True
    assert schema["Age"].minimum == 18


def test_unsupported_type_fails_whole_build():
    with pytest.raises(SurveyConfigError, match="unsupported type 'date'"):
        _schema(raw_field(1, "Name"), raw_field(2, "When", type="date"))


def test_mcq_rule_gets_choices():
    schema = _schema(raw_field(1, "Colour", SubType="MCQ", Options="Red|Blue"))
    assert schema["Colour"].choices == ["Red", "Blue"]


@pytest.mark.parametrize("value", ["", None])
def test_required_string_rejects_empty(value):
    rule = StringRule(required=True)
    assert validate_value(rule, value) == "Required"


def test_optional_string_accepts_empty_text():
    rule = StringRule()
    assert validate_value(rule, "") is None


def test_optional_string_rejects_missing_value():
    assert validate_value(StringRule(), None) == "Expected string, received undefined"


def test_required_string_counts_whitespace_as_content():
    assert validate_value(StringRule(required=True), "   ") is None


def test_string_min_length():
    rule = StringRule(min_length=3)
    assert validate_value(rule, "ab") == "String must contain at least 3 character(s)"
    assert validate_value(rule, "abc") is None


def test_string_type_check():
    assert validate_value(StringRule(), 5) == "Expected string, received number"
    assert validate_value(StringRule(), True) == "Expected string, received boolean"


def test_mcq_value_must_be_an_option():
    rule = StringRule(required=True, choices=["Red", "Blue"])
    assert validate_value(rule, "Blue") is None
    assert validate_value(rule, "Green").startswith("Invalid option")
    assert validate_value(rule, None) == "Required"


def test_number_min_value_boundary():
    rule = NumberRule(minimum=10)
    assert validate_value(rule, 9) == "Number must be greater than or equal to 10"
    assert validate_value(rule, 10) is None
    assert validate_value(rule, 10.5) is None


def test_number_type_check():
    rule = NumberRule()
    assert validate_value(rule, "12") == "Expected number, received string"
    assert validate_value(rule, True) == "Expected number, received boolean"
    assert validate_value(rule, math.nan) == "Expected number, received nan"


def test_number_missing_value():
    assert validate_value(NumberRule(required=True), None) == "Required"
    assert validate_value(NumberRule(minimum=1), None) == "Required"
    assert validate_value(NumberRule(), None) == "Expected number, received undefined"


def test_boolean_rule():
    assert validate_value(BooleanRule(), False) is None
    assert validate_value(BooleanRule(), True) is None
    assert validate_value(BooleanRule(), "true") == "Expected boolean, received string"
    assert validate_value(BooleanRule(required=True), None) == "Required"
    assert validate_value(BooleanRule(), None) == "Expected boolean, received undefined"


def test_validate_answers_collects_per_field_errors(two_page_survey):
    schema = build_schema(two_page_survey.fields)
    errors = validate_answers(schema, {"Name": "", "Age": 17, "Subscribe": False})
    assert errors == {
        "Name": "Required",
        "Age": "Number must be greater than or equal to 18",
    }


def test_validate_answers_passes_clean_input(two_page_survey):
    schema = build_schema(two_page_survey.fields)
    assert validate_answers(schema, {"Name": "Ann", "Age": 30, "Subscribe": True}) == {}


def test_unanswered_optional_fields_fail_type_checks():
    schema = _schema(
        raw_field(1, "Score", type="number"),
        raw_field(2, "Colour", SubType="MCQ", Options="a|b"),
        raw_field(3, "Notes"),
    )
    errors = validate_answers(schema, {"Score": None, "Colour": None, "Notes": ""})
    assert errors == {
        "Score": "Expected number, received undefined",
        "Colour": "Expected string, received undefined",
    }
