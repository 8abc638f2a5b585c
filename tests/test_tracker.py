# tests/test_tracker.py

import datetime
import json

import pytest

from core.blob_store import MemoryBlobStore
from core.export import from_json, to_json
from core.response import ErrorCode
from models.document import TrackerDocument
from models.extra import ImpactLevel
from models.submission import Submission, SubmissionStatus
from models.tracker import Tracker

STORAGE_KEY = "test_tracker"


def stored_document(store):
    return from_json(store.get(STORAGE_KEY))


# --- load ---


def test_load_empty_store_seeds_demo_document():
    store = MemoryBlobStore()

    tracker = Tracker.load(store, STORAGE_KEY)

    assert len(tracker.students) == 3
    assert len(tracker.objectives) == 3
    assert set(tracker.objectives_by_week()) == {0, 1}
    assert tracker.submissions == ()
    assert STORAGE_KEY in store


def test_load_corrupt_blob_falls_back_and_overwrites():
    store = MemoryBlobStore({STORAGE_KEY: "{not json"})

    tracker = Tracker.load(store, STORAGE_KEY)

    assert len(tracker.students) == 3
    assert stored_document(store) == tracker.document


def test_load_misshapen_blob_falls_back():
    store = MemoryBlobStore({STORAGE_KEY: json.dumps({"meta": {}, "students": "nope"})})

    tracker = Tracker.load(store, STORAGE_KEY)

    assert len(tracker.objectives) == 3


def test_load_existing_blob(sample_document):
    store = MemoryBlobStore({STORAGE_KEY: to_json(sample_document)})

    tracker = Tracker.load(store, STORAGE_KEY)

    assert tracker.document == sample_document


# --- persistence ---


def test_mutation_persists_full_document(sample_tracker, memory_store):
    sample_tracker.mark_status("s001", "o001", "done")

    assert stored_document(memory_store) == sample_tracker.document


def test_mutation_leaves_previous_document_untouched(sample_tracker):
    before = sample_tracker.document

    sample_tracker.set_notes("s001", "o001", "Booked")

    assert before.submissions == ()
    assert sample_tracker.document is not before


def test_save_failure_returns_internal_error(sample_document):
    class FailingStore(MemoryBlobStore):
        def set(self, key, value):
            raise OSError("disk full")

    tracker = Tracker(sample_document, FailingStore(), STORAGE_KEY)

    response = tracker.save()

    assert not response.success
    assert response.error is ErrorCode.INTERNAL_ERROR


def test_save_failure_keeps_in_memory_change(sample_document):
    class FailingStore(MemoryBlobStore):
        def set(self, key, value):
            raise OSError("disk full")

    tracker = Tracker(sample_document, FailingStore(), STORAGE_KEY)

    response = tracker.mark_status("s001", "o001", "done")

    assert response.success
    assert tracker.status_for("s001", "o001") is SubmissionStatus.DONE


# --- import / export ---


def test_import_json_replaces_document(sample_tracker, memory_store, sample_meta):
    replacement = TrackerDocument(meta=sample_meta.evolve(club_name="Other Club"))

    response = sample_tracker.import_json(to_json(replacement))

    assert response.success
    assert sample_tracker.club_name == "Other Club"
    assert sample_tracker.students == ()
    assert stored_document(memory_store) == replacement


@pytest.mark.parametrize(
    "text",
    [
        "{not json",
        json.dumps({"meta": {}, "students": "not-an-array", "objectives": [], "submissions": []}),
        json.dumps([1, 2, 3]),
    ],
)
def test_import_json_failure_keeps_state(sample_tracker, memory_store, text):
    sample_tracker.mark_status("s001", "o001", "done")
    document_before = sample_tracker.document
    blob_before = memory_store.get(STORAGE_KEY)

    response = sample_tracker.import_json(text)

    assert not response.success
    assert response.error is ErrorCode.DESERIALIZATION_FAILED
    assert sample_tracker.document is document_before
    assert memory_store.get(STORAGE_KEY) == blob_before


def test_replace_accepts_dict(sample_tracker, sample_document):
    response = sample_tracker.replace(sample_document.to_dict())

    assert response.success
    assert sample_tracker.document == sample_document


def test_replace_rejects_bad_dict(sample_tracker):
    response = sample_tracker.replace({"meta": {}})

    assert response.error is ErrorCode.DESERIALIZATION_FAILED


def test_export_csv_covers_every_pair(sample_tracker):
    lines = sample_tracker.export_csv().split("\n")

    assert len(lines) == 1 + 4


def test_export_csv_empty_tracker(empty_tracker):
    assert empty_tracker.export_csv() == ""


def test_reset_to_default(sample_tracker):
    sample_tracker.mark_status("s001", "o001", "done")

    response = sample_tracker.reset_to_default()

    assert response.success
    assert len(sample_tracker.students) == 3
    assert sample_tracker.submissions == ()


# --- settings and admin ---


def test_check_admin_passcode(sample_tracker):
    assert sample_tracker.check_admin_passcode("admin123")
    assert not sample_tracker.check_admin_passcode("wrong")
    assert not sample_tracker.check_admin_passcode("")


def test_update_settings(sample_tracker):
    response = sample_tracker.update_settings(club_name="  Rotaract ", admin_passcode="pw")

    assert response.success
    assert response.data["changed"]
    assert sample_tracker.club_name == "Rotaract"
    assert sample_tracker.event_name == "Charity Marathon"
    assert sample_tracker.check_admin_passcode("pw")


def test_update_settings_without_arguments_is_noop(sample_tracker, memory_store):
    response = sample_tracker.update_settings()

    assert response.success
    assert not response.data["changed"]
    assert STORAGE_KEY not in memory_store


def test_current_week_index(sample_tracker):
    assert sample_tracker.current_week_index(datetime.date(2024, 1, 3)) == 0
    assert sample_tracker.current_week_index(datetime.date(2024, 1, 8)) == 1
    assert sample_tracker.current_week_index(datetime.date(2023, 12, 31)) == -1


# --- students ---


def test_add_student(sample_tracker):
    response = sample_tracker.add_student("  D. Jayasuriya ", team="Media")

    assert response.success
    student = response.data["record"]
    assert student.name == "D. Jayasuriya"
    assert sample_tracker.students[-1] == student


@pytest.mark.parametrize("name", ["", "   "])
def test_add_student_requires_name(sample_tracker, name):
    response = sample_tracker.add_student(name)

    assert response.error is ErrorCode.MISSING_REQUIRED_FIELD
    assert len(sample_tracker.students) == 2


def test_add_student_rejects_non_string(sample_tracker):
    response = sample_tracker.add_student(42)

    assert response.error is ErrorCode.INVALID_FIELD_VALUE


def test_update_student_blank_name_keeps_name(sample_tracker):
    response = sample_tracker.update_student("s001", name="  ", team="Media")

    assert response.success
    student = sample_tracker.document.find_student("s001")
    assert student.name == "A. Perera"
    assert student.team == "Media"


def test_update_student_unknown_id_is_noop(sample_tracker):
    response = sample_tracker.update_student("missing", name="X")

    assert response.success
    assert not response.data["changed"]


def test_find_student_not_found(sample_tracker):
    response = sample_tracker.find_student("missing")

    assert response.error is ErrorCode.NOT_FOUND
    assert sample_tracker.find_student("s001").data["record"].name == "A. Perera"


def test_remove_student_cascades(sample_tracker):
    sample_tracker.mark_status("s001", "o001", "done")
    sample_tracker.mark_status("s001", "o002", "in_progress")
    sample_tracker.mark_status("s002", "o001", "done")

    response = sample_tracker.remove_student("s001")

    assert response.success
    assert [s.id for s in sample_tracker.students] == ["s002"]
    assert [(s.student_id, s.objective_id) for s in sample_tracker.submissions] == [
        ("s002", "o001")
    ]


def test_remove_student_unknown_id_is_noop(sample_tracker):
    response = sample_tracker.remove_student("missing")

    assert response.success
    assert not response.data["changed"]
    assert len(sample_tracker.students) == 2


# --- objectives ---


def test_add_objective_defaults_to_current_week(sample_tracker):
    expected_week = sample_tracker.current_week_index()

    response = sample_tracker.add_objective("Route map")

    assert response.success
    assert response.data["record"].week_index == expected_week


def test_add_objective_keeps_given_week(sample_tracker):
    due = datetime.datetime(2024, 3, 1, 9, 0)

    response = sample_tracker.add_objective("Route map", "Draw it", 4, due)

    objective = response.data["record"]
    assert objective.week_index == 4
    assert objective.due_date == due


def test_add_objective_requires_title(sample_tracker):
    response = sample_tracker.add_objective("  ")

    assert response.error is ErrorCode.MISSING_REQUIRED_FIELD
    assert len(sample_tracker.objectives) == 2


def test_add_objective_rejects_bad_week(sample_tracker):
    response = sample_tracker.add_objective("Route map", week_index="soon")

    assert response.error is ErrorCode.INVALID_FIELD_VALUE


def test_update_objective(sample_tracker):
    response = sample_tracker.update_objective("o001", title="", week_index=2)

    assert response.success
    objective = sample_tracker.document.find_objective("o001")
    assert objective.title == "Confirm venue"
    assert objective.week_index == 2


def test_remove_objective_cascades(sample_tracker):
    sample_tracker.mark_status("s001", "o001", "done")
    sample_tracker.mark_status("s002", "o002", "done")

    sample_tracker.remove_objective("o001")

    assert [o.id for o in sample_tracker.objectives] == ["o002"]
    assert [s.objective_id for s in sample_tracker.submissions] == ["o002"]


# --- submissions ---


def test_mark_status_creates_submission(sample_tracker):
    response = sample_tracker.mark_status("s001", "o001", SubmissionStatus.DONE)

    assert response.success
    assert response.data["changed"]
    assert sample_tracker.status_for("s001", "o001") is SubmissionStatus.DONE


def test_mark_status_invalid_value_leaves_document(sample_tracker):
    before = sample_tracker.document

    response = sample_tracker.mark_status("s001", "o001", "finished")

    assert response.error is ErrorCode.INVALID_FIELD_VALUE
    assert sample_tracker.document is before


def test_mark_status_unknown_pair_is_noop(sample_tracker):
    response = sample_tracker.mark_status("missing", "o001", "done")

    assert response.success
    assert not response.data["changed"]
    assert sample_tracker.submissions == ()


def test_repeated_edits_keep_one_submission_per_pair(sample_tracker):
    sample_tracker.mark_status("s001", "o001", "in_progress")
    sample_tracker.set_notes("s001", "o001", "Called council")
    sample_tracker.set_evidence_url("s001", "o001", "https://example.org/a")
    sample_tracker.add_extra("s001", "o001", "Flyers")
    sample_tracker.mark_status("s001", "o001", "done")
    sample_tracker.set_notes("s002", "o001", "Started")

    pairs = [(s.student_id, s.objective_id) for s in sample_tracker.submissions]

    assert sorted(pairs) == [("s001", "o001"), ("s002", "o001")]


def test_status_change_keeps_extras(sample_tracker):
    sample_tracker.add_extra("s001", "o001", "Bake sale", "Raised funds", ImpactLevel.HIGH)

    sample_tracker.mark_status("s001", "o001", "done")

    submission = sample_tracker.get_submission("s001", "o001")
    assert submission.status is SubmissionStatus.DONE
    assert [e.title for e in submission.extras] == ["Bake sale"]


def test_add_extra_keeps_status(sample_tracker):
    sample_tracker.mark_status("s001", "o001", "done")

    sample_tracker.add_extra("s001", "o001", "Flyers")

    submission = sample_tracker.get_submission("s001", "o001")
    assert submission.status is SubmissionStatus.DONE
    assert len(submission.extras) == 1


def test_notes_and_evidence_are_independent(sample_tracker):
    sample_tracker.set_notes("s001", "o001", "Booked the park")
    sample_tracker.set_evidence_url("s001", "o001", " https://example.org/booking ")

    submission = sample_tracker.get_submission("s001", "o001")
    assert submission.notes == "Booked the park"
    assert submission.evidence_url == "https://example.org/booking"
    assert submission.status is SubmissionStatus.IN_PROGRESS


def test_add_extra_on_fresh_pair(sample_tracker):
    response = sample_tracker.add_extra("s001", "o001", "Bake sale", impact="High")

    assert response.success
    submission = response.data["record"]
    assert submission.status is SubmissionStatus.IN_PROGRESS
    assert len(submission.extras) == 1
    assert submission.extras[0].verified is False
    assert submission.extras[0] == response.data["extra"]


def test_add_extra_appends_in_order(sample_tracker):
    sample_tracker.add_extra("s001", "o001", "First")
    sample_tracker.add_extra("s001", "o001", "Second")

    submission = sample_tracker.get_submission("s001", "o001")
    assert [e.title for e in submission.extras] == ["First", "Second"]


def test_add_extra_requires_title(sample_tracker):
    response = sample_tracker.add_extra("s001", "o001", "   ")

    assert response.error is ErrorCode.MISSING_REQUIRED_FIELD
    assert sample_tracker.get_submission("s001", "o001") is None


def test_add_extra_rejects_unknown_impact(sample_tracker):
    response = sample_tracker.add_extra("s001", "o001", "Flyers", impact="Huge")

    assert response.error is ErrorCode.INVALID_FIELD_VALUE
    assert sample_tracker.submissions == ()


def test_verify_extra_without_submission_is_noop(sample_tracker):
    response = sample_tracker.verify_extra("s001", "o001", "e001", True)

    assert response.success
    assert not response.data["changed"]
    assert sample_tracker.submissions == ()


def test_verify_extra_toggles_only_target(sample_tracker):
    sample_tracker.add_extra("s001", "o001", "First")
    sample_tracker.add_extra("s001", "o001", "Second")
    first, second = sample_tracker.get_submission("s001", "o001").extras

    response = sample_tracker.verify_extra("s001", "o001", second.id, True)

    assert response.data["changed"]
    extras = sample_tracker.get_submission("s001", "o001").extras
    assert [e.verified for e in extras] == [False, True]
    assert extras[0] == first


def test_verify_extra_same_value_is_noop(sample_tracker):
    sample_tracker.add_extra("s001", "o001", "First")
    extra = sample_tracker.get_submission("s001", "o001").extras[0]

    response = sample_tracker.verify_extra("s001", "o001", extra.id, False)

    assert not response.data["changed"]


def test_upsert_replaces_by_pair(sample_tracker):
    sample_tracker.upsert_submission(Submission("a", "s001", "o001", "in_progress"))

    response = sample_tracker.upsert_submission(Submission("b", "s001", "o001", "done"))

    assert response.detail == "Submission updated."
    assert [s.id for s in sample_tracker.submissions] == ["b"]


# --- derived views ---


def test_completion_example(sample_tracker):
    sample_tracker.mark_status("s001", "o001", "done")

    assert sample_tracker.completion_for_student("s001").pct == 50
    assert sample_tracker.completion_for_student("s002").pct == 0


def test_in_progress_does_not_count(sample_tracker):
    sample_tracker.mark_status("s001", "o001", "in_progress")

    assert sample_tracker.completion_for_student("s001").done == 0


def test_overview_sorted(sample_tracker):
    sample_tracker.mark_status("s002", "o001", "done")
    sample_tracker.mark_status("s002", "o002", "done")

    rows = sample_tracker.overview()

    assert [row.student.id for row in rows] == ["s002", "s001"]
    assert rows[0].completion.pct == 100


def test_status_for_defaults_to_not_started(sample_tracker):
    assert sample_tracker.status_for("s001", "o001") is SubmissionStatus.NOT_STARTED


# --- out-of-range numbers in stored data ---


def document_text_with_week_index(document, raw_week_index):
    data = document.to_dict()
    data["objectives"][0]["weekIndex"] = "__WEEK__"
    return json.dumps(data).replace('"__WEEK__"', raw_week_index)


@pytest.mark.parametrize("raw_week_index", ["1e400", "Infinity", "-Infinity", "NaN"])
def test_load_non_finite_week_index_falls_back(sample_document, raw_week_index):
    text = document_text_with_week_index(sample_document, raw_week_index)
    store = MemoryBlobStore({STORAGE_KEY: text})

    tracker = Tracker.load(store, STORAGE_KEY)

    assert len(tracker.students) == 3
    assert store.get(STORAGE_KEY) != text


@pytest.mark.parametrize("raw_week_index", ["1e400", "Infinity", "1.7"])
def test_import_json_rejects_bad_week_index(sample_tracker, memory_store, raw_week_index):
    text = document_text_with_week_index(sample_tracker.document, raw_week_index)
    document_before = sample_tracker.document

    response = sample_tracker.import_json(text)

    assert response.error is ErrorCode.DESERIALIZATION_FAILED
    assert sample_tracker.document is document_before
    assert STORAGE_KEY not in memory_store


def test_load_deeply_nested_blob_falls_back():
    store = MemoryBlobStore({STORAGE_KEY: "[" * 200000 + "]" * 200000})

    tracker = Tracker.load(store, STORAGE_KEY)

    assert len(tracker.objectives) == 3


def test_import_json_rejects_string_verified_flag(sample_tracker, sample_submission):
    data = sample_tracker.document.evolve(submissions=[sample_submission]).to_dict()
    data["submissions"][0]["extra"][0]["verified"] = "false"

    response = sample_tracker.import_json(json.dumps(data))

    assert response.error is ErrorCode.DESERIALIZATION_FAILED
    assert sample_tracker.submissions == ()
