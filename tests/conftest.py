"""Shared fixtures for the survey form tests.

Surveys are written in the same raw shape as the bundled JSON asset
(capitalised keys, ``required`` as "true"/"false") so the loader's
coercion is exercised by every test that goes through ``parse_survey``.
"""

from __future__ import annotations

import json
import pathlib

import pytest

from data_loader import parse_survey

ROOT = pathlib.Path(__file__).resolve().parents[1]


def raw_field(id, question, type="string", page=1, **extra):
    row = {"id": id, "Question": question, "Type": type, "required": "false", "pageNo": page}
    row.update(extra)
    return row


@pytest.fixture
def two_page_raw():
    """Three fields on pages {1, 1, 2}."""
    return {
        "Survey": [
            raw_field(1, "Name", required="true", minChar=2),
            raw_field(2, "Age", type="number", minVal=18, required="true"),
            raw_field(3, "Subscribe", type="boolean", page=2),
        ]
    }


@pytest.fixture
def two_page_survey(two_page_raw):
    return parse_survey(two_page_raw)


@pytest.fixture
def write_survey(tmp_path, monkeypatch):
    """Write a raw survey to disk and point SURVEY_FILE at it."""

    def _write(raw, name="survey.json"):
        fp = tmp_path / name
        fp.write_text(json.dumps(raw), encoding="utf-8")
        monkeypatch.setenv("SURVEY_FILE", str(fp))
        return fp

    return _write
