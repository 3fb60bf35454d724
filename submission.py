from __future__ import annotations

import json
import logging
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

from data_loader import Survey
from schema_builder import ValidationSchema, validate_answers

logger = logging.getLogger(__name__)


class FormValidationError(ValueError):
    """Submission rejected; ``errors`` maps question text to a message."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__(f"{len(self.errors)} field(s) failed validation")


class AnswerRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    question: str = Field(alias="Question")
    answer: Any = Field(default=None, alias="Answer")


def initial_answers(survey: Survey) -> Dict[str, Any]:
    """Starting values for every field, so unvisited pages still submit something."""
    answers: Dict[str, Any] = {}
    for fld in survey.fields:
        if fld.type == "boolean":
            answers[fld.question] = False
        elif fld.type == "string" and not fld.is_mcq:
            answers[fld.question] = ""
        else:
            answers[fld.question] = None
    return answers


def assemble_records(survey: Survey, values: Dict[str, Any]) -> List[AnswerRecord]:
    return [
        AnswerRecord(id=fld.id, question=fld.question, answer=values.get(fld.question))
        for fld in survey.fields
    ]


def submit_answers(survey: Survey, schema: ValidationSchema, values: Dict[str, Any]) -> List[AnswerRecord]:
    """
    Validate every field and, only if all pass, return the answers in survey order.
    Raises FormValidationError with the full error map otherwise.
    """
    errors = validate_answers(schema, values)
    if errors:
        logger.warning("Validation Errors: %s", json.dumps(errors, ensure_ascii=False))
        raise FormValidationError(errors)

    records = assemble_records(survey, values)
    logger.info(
        "Survey submitted: %s",
        json.dumps([r.model_dump(by_alias=True) for r in records], ensure_ascii=False, default=str),
    )
    return records
