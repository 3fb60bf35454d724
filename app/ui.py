import streamlit as st


def wide_button(label: str, **kwargs):
    """Render a full-width Streamlit button.

    Used for the Previous / Next / Submit controls so they line up in their
    columns regardless of label length.
    """
    kwargs.setdefault("use_container_width", True)
    return st.button(label, **kwargs)


def nav_columns():
    """Three equal columns: Previous, Next, Submit."""
    return st.columns(3)
