from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional, Set

import streamlit as st
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

logger = logging.getLogger(__name__)

# Field types the schema builder knows how to compile
ALLOWED_FIELD_TYPES: Set[str] = {
    "string",
    "number",
    "boolean",
}

ALLOWED_SUB_TYPES: Set[str] = {"MCQ"}

DATA_DIR = os.path.join(os.getcwd(), "data")
DEFAULT_SURVEY_FP = os.path.join(DATA_DIR, "survey.json")


def survey_path() -> str:
    """Path of the survey asset; SURVEY_FILE wins over data/survey.json."""
    return os.getenv("SURVEY_FILE") or DEFAULT_SURVEY_FP


class FieldDescriptor(BaseModel):
    """One question of the survey, as declared in the JSON asset."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    question: str = Field(alias="Question")
    type: str = Field(alias="Type")
    sub_type: Optional[str] = Field(default=None, alias="SubType")
    required: bool = False
    min_char: Optional[int] = Field(default=None, alias="minChar")
    min_val: Optional[float] = Field(default=None, alias="minVal")
    page_no: int = Field(alias="pageNo", ge=1)
    options: Optional[str] = Field(default=None, alias="Options")

    @field_validator("required", mode="before")
    @classmethod
    def _coerce_required(cls, v: Any) -> bool:
        # The asset encodes flags as "true"/"false"; only "true" counts.
        return v is True or v == "true"

    @field_validator("sub_type")
    @classmethod
    def _known_sub_type(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in ALLOWED_SUB_TYPES:
            raise ValueError(f"unsupported SubType '{v}'")
        return v

    @property
    def is_mcq(self) -> bool:
        return self.sub_type == "MCQ"


class Survey(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    fields: List[FieldDescriptor] = Field(alias="Survey", min_length=1)

    @model_validator(mode="after")
    def _unique_questions(self) -> "Survey":
        seen: Set[str] = set()
        for fld in self.fields:
            if fld.question in seen:
                raise ValueError(f"Duplicate question '{fld.question}'")
            seen.add(fld.question)
        return self

    @property
    def max_page(self) -> int:
        return max(f.page_no for f in self.fields)


def options_list(field: FieldDescriptor) -> List[str]:
    """Split the '|'-delimited Options string into choice labels."""
    if not field.options:
        return []
    return [c.strip() for c in field.options.split("|") if c.strip()]


def parse_survey(raw: Any) -> Survey:
    if not isinstance(raw, dict) or not isinstance(raw.get("Survey"), list):
        raise ValueError("Survey JSON must be an object with a 'Survey' array.")
    return Survey.model_validate(raw)


def read_survey(path: str) -> Survey:
    """Read and validate the survey asset. Load problems propagate."""
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    survey = parse_survey(raw)
    logger.info("Loaded %d survey fields from %s", len(survey.fields), path)
    return survey


def get_data_version(path: str) -> str:
    """
    Version string used to bust Streamlit caches when the asset changes.
    Missing files map to '0'.
    """
    try:
        return str(os.path.getmtime(path))
    except OSError:
        return "0"


@st.cache_data(show_spinner=False)
def load_survey(path: str, version: str) -> Survey:
    if not os.path.exists(path):
        st.error(f"Missing file: {path}. Please add it to continue.")
        raise FileNotFoundError(path)
    try:
        return read_survey(path)
    except (json.JSONDecodeError, ValidationError, ValueError) as e:
        st.error(f"Failed to parse survey file: {path}\nError: {e}")
        raise


def describe(survey: Survey) -> Dict[str, Any]:
    """Small summary used for the page caption and logs."""
    return {
        "fields": len(survey.fields),
        "pages": survey.max_page,
        "required": sum(1 for f in survey.fields if f.required),
    }
