# tests/conftest.py

import datetime

import pytest

from core.blob_store import MemoryBlobStore
from models.document import TrackerDocument
from models.extra import Extra, ImpactLevel
from models.metadata import Metadata
from models.objective import Objective
from models.student import Student
from models.submission import Submission, SubmissionStatus
from models.tracker import Tracker

STORAGE_KEY = "test_tracker"


@pytest.fixture
def sample_meta():
    return Metadata(
        club_name="Intra Club",
        event_name="Charity Marathon",
        admin_passcode="admin123",
        week_zero=datetime.datetime(2024, 1, 1),
    )


@pytest.fixture
def sample_student():
    return Student("s001", "A. Perera", "aperera@sttoms.edu", "Logistics")


@pytest.fixture
def second_student():
    return Student("s002", "B. Silva", "bsilva@sttoms.edu", "Sponsorships")


@pytest.fixture
def sample_objective():
    return Objective(
        id="o001",
        title="Confirm venue",
        details="Obtain approval for the route.",
        week_index=0,
        due_date=datetime.datetime(2024, 1, 5, 10, 0),
    )


@pytest.fixture
def second_objective():
    return Objective(
        id="o002",
        title="Sponsorship letters",
        details="",
        week_index=1,
        due_date=datetime.datetime(2024, 1, 12, 17, 30),
    )


@pytest.fixture
def sample_extra():
    return Extra("e001", "Bake sale", "Raised funds", ImpactLevel.HIGH, False)


@pytest.fixture
def sample_submission(sample_extra):
    return Submission(
        id="sub001",
        student_id="s001",
        objective_id="o001",
        status=SubmissionStatus.IN_PROGRESS,
        notes="Waiting on the council.",
        evidence_url="https://example.org/permit",
        extras=[sample_extra],
    )


@pytest.fixture
def sample_document(
    sample_meta, sample_student, second_student, sample_objective, second_objective
):
    return TrackerDocument(
        meta=sample_meta,
        students=[sample_student, second_student],
        objectives=[sample_objective, second_objective],
        submissions=[],
    )


@pytest.fixture
def memory_store():
    return MemoryBlobStore()


@pytest.fixture
def sample_tracker(sample_document, memory_store):
    return Tracker(sample_document, memory_store, STORAGE_KEY)


@pytest.fixture
def empty_tracker(sample_meta, memory_store):
    return Tracker(TrackerDocument(meta=sample_meta), memory_store, STORAGE_KEY)
