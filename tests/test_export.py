# tests/test_export.py

import json

import pytest

from core.export import REPORT_FIELDS, from_json, to_csv, to_flat_report, to_json
from models.document import DeserializationError, TrackerDocument
from models.extra import Extra
from models.submission import Submission, SubmissionStatus


def test_flat_report_is_full_cross_product(sample_document):
    rows = to_flat_report(sample_document)

    assert len(rows) == 4
    assert [(r["student"], r["objective"]) for r in rows] == [
        ("A. Perera", "Confirm venue"),
        ("A. Perera", "Sponsorship letters"),
        ("B. Silva", "Confirm venue"),
        ("B. Silva", "Sponsorship letters"),
    ]


def test_flat_report_defaults_without_submission(sample_document):
    rows = to_flat_report(sample_document)

    for row in rows:
        assert row["status"] == "not_started"
        assert row["notes"] == ""
        assert row["evidenceUrl"] == ""
        assert row["extraCount"] == 0
        assert row["extraVerified"] == 0


def test_flat_report_row_contents(sample_document):
    submission = Submission(
        "x1",
        "s001",
        "o001",
        SubmissionStatus.DONE,
        notes="Approved",
        evidence_url="https://example.org/permit",
        extras=[Extra("e1", "Bake sale", verified=True), Extra("e2", "Flyers")],
    )
    document = sample_document.evolve(submissions=[submission])

    row = to_flat_report(document)[0]

    assert row == {
        "student": "A. Perera",
        "team": "Logistics",
        "objective": "Confirm venue",
        "week": 0,
        "dueDate": "Jan 5, 2024",
        "status": "done",
        "notes": "Approved",
        "evidenceUrl": "https://example.org/permit",
        "extraCount": 2,
        "extraVerified": 1,
    }


# --- csv ---


def test_to_csv_empty_rows():
    assert to_csv([]) == ""


def test_to_csv_json_encodes_values():
    rows = [{"name": 'say "hi", ok', "count": 3}, {"name": "line\nbreak", "count": 0}]

    assert to_csv(rows) == 'name,count\n"say \\"hi\\", ok",3\n"line\\nbreak",0'


def test_to_csv_report_row_count(sample_document):
    csv_text = to_csv(to_flat_report(sample_document))
    lines = csv_text.split("\n")

    assert lines[0] == (
        "student,team,objective,week,dueDate,status,notes,evidenceUrl,extraCount,extraVerified"
    )
    assert len(lines) == 1 + 4
    assert all('"not_started"' in line for line in lines[1:])


# --- json ---


def test_json_round_trip(sample_document, sample_submission):
    document = sample_document.evolve(submissions=[sample_submission])

    restored = from_json(to_json(document))

    assert restored == document
    assert restored.submissions[0].extras[0].title == "Bake sale"


def test_to_json_shape(sample_document):
    data = json.loads(to_json(sample_document))

    assert set(data) == {"meta", "students", "objectives", "submissions"}
    assert data["meta"]["academicWeekZeroISO"] == "2024-01-01T00:00:00"


def test_from_json_rejects_wrong_container(sample_document):
    data = sample_document.to_dict()
    data["students"] = "not-an-array"

    with pytest.raises(DeserializationError):
        from_json(json.dumps(data))


@pytest.mark.parametrize("section", ["meta", "students", "objectives", "submissions"])
def test_from_json_rejects_missing_section(sample_document, section):
    data = sample_document.to_dict()
    del data[section]

    with pytest.raises(DeserializationError):
        from_json(json.dumps(data))


@pytest.mark.parametrize("text", ["", "{not json", "[]", "null", '"text"'])
def test_from_json_rejects_malformed_text(text):
    with pytest.raises(DeserializationError):
        from_json(text)


def test_from_json_rejects_bad_record(sample_document):
    data = sample_document.to_dict()
    data["objectives"][0]["title"] = ""

    with pytest.raises(DeserializationError):
        from_json(json.dumps(data))


def test_deserialization_error_is_value_error():
    assert issubclass(DeserializationError, ValueError)


def test_flat_report_keys_follow_report_fields(sample_document):
    rows = to_flat_report(sample_document)

    assert all(tuple(row) == REPORT_FIELDS for row in rows)


def test_from_json_rejects_deep_nesting():
    with pytest.raises(DeserializationError):
        from_json("[" * 200000 + "]" * 200000)
