import logging
from typing import Any, Dict, List

import pandas as pd
import streamlit as st

from app.ui import nav_columns, wide_button
from data_loader import Survey, describe, get_data_version, load_survey, survey_path
from form_renderer import clear_widgets, render_page, sync_answers
from logging_setup import configure_logging
from pagination import PageState, fields_on_page
from schema_builder import SurveyConfigError, build_schema
from submission import AnswerRecord, FormValidationError, initial_answers, submit_answers

configure_logging()
logger = logging.getLogger("survey_app")

# ---------------- App Config ----------------

st.set_page_config(page_title="Survey", layout="centered")
st.title("📋 Survey")

path = survey_path()
version = get_data_version(path)
survey: Survey = load_survey(path, version)

try:
    schema = build_schema(survey.fields)
except SurveyConfigError as e:
    st.error(f"The survey definition cannot be used: {e}")
    raise

# ---------------- Session State ----------------

# Reset everything when the asset changes underneath a running session
if st.session_state.get("_survey_version") != version:
    st.session_state["_survey_version"] = version
    st.session_state["page_state"] = PageState.for_survey(survey)
    st.session_state["answers"] = initial_answers(survey)
    clear_widgets()
    st.session_state["errors"] = {}
    st.session_state["records"] = None
    logger.info("Survey session started: %s", describe(survey))

page_state: PageState = st.session_state["page_state"]
answers: Dict[str, Any] = st.session_state["answers"]


def _current_fields():
    return fields_on_page(survey, page_state.page)


def _go_previous() -> None:
    sync_answers(_current_fields(), answers)
    page_state.previous()


def _go_next() -> None:
    sync_answers(_current_fields(), answers)
    page_state.next()


def _submit() -> None:
    sync_answers(_current_fields(), answers)
    try:
        records: List[AnswerRecord] = submit_answers(survey, schema, answers)
    except FormValidationError as exc:
        st.session_state["errors"] = exc.errors
        st.session_state["records"] = None
        return
    st.session_state["errors"] = {}
    st.session_state["records"] = records


# ---------------- Current Page ----------------

st.caption(f"Page {page_state.page} of {page_state.max_page}")

errors: Dict[str, str] = st.session_state["errors"]
render_page(_current_fields(), answers, errors=errors)

cols = nav_columns()
with cols[0]:
    if page_state.can_go_previous:
        wide_button("Previous", key="nav_previous", on_click=_go_previous)
with cols[1]:
    if page_state.can_go_next:
        wide_button("Next", key="nav_next", on_click=_go_next)
with cols[2]:
    if page_state.can_submit:
        wide_button("Submit", key="submit", type="primary", on_click=_submit)

# ---------------- Submit Result ----------------

if errors:
    st.error("Some answers need attention before the survey can be submitted:")
    for question, msg in errors.items():
        st.markdown(f"- **{question}**: {msg}")

records = st.session_state["records"]
if records:
    st.success("Survey submitted. Thank you!")
    # Answers mix types; show them as text so the table has one column dtype
    rows = [
        {"id": r.id, "Question": r.question, "Answer": "" if r.answer is None else str(r.answer)}
        for r in records
    ]
    st.dataframe(
        pd.DataFrame(rows),
        hide_index=True,
        use_container_width=True,
    )
