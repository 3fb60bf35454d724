"""
Form rendering utilities for the paged survey (Streamlit).

Exports:
- widget_key(field) -> str
- seed_widgets(fields, answers) -> None
- sync_answers(fields, answers) -> None
- clear_widgets() -> None
- render_page(fields, answers, errors=None) -> None
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional

import streamlit as st

from data_loader import FieldDescriptor, options_list


WIDGET_PREFIX = "q_"


def widget_key(field: FieldDescriptor) -> str:
    return f"{WIDGET_PREFIX}{field.id}"


def seed_widgets(fields: List[FieldDescriptor], answers: Dict[str, Any]) -> None:
    """
    Copy stored answers into widget state for widgets about to be rendered.
    Streamlit forgets the state of widgets that were not on the previous run,
    so coming back to a page has to restore it from the answers dict.
    """
    for field in fields:
        key = widget_key(field)
        if key in st.session_state:
            continue
        val = answers.get(field.question)
        if val is None:
            continue
        st.session_state[key] = val


def sync_answers(fields: List[FieldDescriptor], answers: Dict[str, Any]) -> None:
    """Pull current widget values into answers (used by navigation/submit callbacks)."""
    for field in fields:
        key = widget_key(field)
        if key in st.session_state:
            answers[field.question] = st.session_state[key]


def clear_widgets() -> None:
    """Drop every field widget state, e.g. when the survey asset is replaced."""
    for key in [k for k in st.session_state.keys() if str(k).startswith(WIDGET_PREFIX)]:
        del st.session_state[key]


def _label(field: FieldDescriptor) -> str:
    if field.required:
        # Visual indicator only; enforcement happens on submit
        return f"{field.question} *"
    return field.question


def render_field(field: FieldDescriptor) -> Any:
    key = widget_key(field)
    label = _label(field)

    if field.is_mcq:
        options = options_list(field)
        return st.radio(label, options=options, index=None, key=key)

    if field.type == "number":
        # value=None keeps the box empty until the user types a number
        return st.number_input(label, value=None, key=key)

    if field.type == "boolean":
        return st.checkbox(label, key=key)

    return st.text_input(label, key=key)


def render_page(
    fields: List[FieldDescriptor],
    answers: Dict[str, Any],
    errors: Optional[Dict[str, str]] = None,
) -> None:
    """
    Render the fields of one page, updating the provided answers dict.
    Fields listed in ``errors`` get a red caption under the widget.
    """
    if not fields:
        st.info("This page has no questions.")
        return

    seed_widgets(fields, answers)
    for field in fields:
        answers[field.question] = render_field(field)
        msg = (errors or {}).get(field.question)
        if msg:
            st.caption(f":red[{msg}]")
