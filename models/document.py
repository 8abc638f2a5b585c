# models/document.py

"""
The TrackerDocument is the single root value holding all tracker state.

A document bundles the `Metadata` with ordered tuples of students, objectives, and
submissions. Documents are never mutated after construction: the tracker derives
the next document from the previous one with `evolve()`, so a reader holding a
document never observes a half-applied update.

Provides the default demo document used on first run (or after a corrupt load), and
the shape-checked conversion to and from the persisted JSON structure.
"""

from __future__ import annotations

import datetime
from typing import Any, Callable, Iterable

from core.utils import generate_uuid
from models.metadata import Metadata
from models.objective import Objective
from models.student import Student
from models.submission import Submission


class DeserializationError(ValueError):
    """Raised when input cannot be read as a well-formed tracker document."""


# anything a malformed record can make a model constructor raise
_RECORD_ERRORS = (KeyError, TypeError, ValueError, AttributeError, OverflowError)


class TrackerDocument:

    _container_keys: dict[str, type] = {
        "meta": dict,
        "students": list,
        "objectives": list,
        "submissions": list,
    }

    def __init__(
        self,
        meta: Metadata,
        students: Iterable[Student] = (),
        objectives: Iterable[Objective] = (),
        submissions: Iterable[Submission] = (),
    ):
        self._meta = meta
        self._students: tuple[Student, ...] = tuple(students)
        self._objectives: tuple[Objective, ...] = tuple(objectives)
        self._submissions: tuple[Submission, ...] = tuple(submissions)

    # === properties ===

    @property
    def meta(self) -> Metadata:
        return self._meta

    @property
    def students(self) -> tuple[Student, ...]:
        return self._students

    @property
    def objectives(self) -> tuple[Objective, ...]:
        return self._objectives

    @property
    def submissions(self) -> tuple[Submission, ...]:
        return self._submissions

    def evolve(self, **changes: Any) -> TrackerDocument:
        fields = {
            "meta": self._meta,
            "students": self._students,
            "objectives": self._objectives,
            "submissions": self._submissions,
        }
        fields.update(changes)
        return TrackerDocument(**fields)

    # === data accessors ===

    def find_student(self, student_id: str) -> Student | None:
        return next((s for s in self._students if s.id == student_id), None)

    def find_objective(self, objective_id: str) -> Objective | None:
        return next((o for o in self._objectives if o.id == objective_id), None)

    def find_submission(self, student_id: str, objective_id: str) -> Submission | None:
        return next(
            (s for s in self._submissions if s.matches(student_id, objective_id)),
            None,
        )

    # === public classmethods ===

    @classmethod
    def default(cls) -> TrackerDocument:
        """
        Builds the demo document: three students, three objectives across weeks 0 and
        1, week zero at the Monday of the current week, and no submissions.
        """
        now = datetime.datetime.now().replace(microsecond=0)

        students = [
            Student(generate_uuid(), "A. Perera", "aperera@sttoms.edu", "Logistics"),
            Student(generate_uuid(), "B. Silva", "bsilva@sttoms.edu", "Sponsorships"),
            Student(generate_uuid(), "C. Fernando", "cfernando@sttoms.edu", "Media"),
        ]

        objectives = [
            Objective(
                id=generate_uuid(),
                title="Confirm venue & route permissions (2 km)",
                details="Obtain approval; sketch 1 km up/1 km down route.",
                week_index=0,
                due_date=now,
            ),
            Objective(
                id=generate_uuid(),
                title="Water & first-aid coordination",
                details="Quotations, assign water points and first-aid volunteers.",
                week_index=0,
                due_date=now + datetime.timedelta(days=3),
            ),
            Objective(
                id=generate_uuid(),
                title="Sponsorship letter & outreach",
                details="Draft letter, list 20 sponsors, begin outreach.",
                week_index=1,
                due_date=now + datetime.timedelta(days=7),
            ),
        ]

        return cls(
            meta=Metadata.default(),
            students=students,
            objectives=objectives,
            submissions=[],
        )

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "meta": self._meta.to_dict(),
            "students": [s.to_dict() for s in self._students],
            "objectives": [o.to_dict() for o in self._objectives],
            "submissions": [s.to_dict() for s in self._submissions],
        }

    @classmethod
    def from_dict(cls, data: Any) -> TrackerDocument:
        """
        Builds a `TrackerDocument` from its JSON-compatible dictionary form.

        Args:
            data (Any): The decoded JSON value.

        Returns:
            A new `TrackerDocument`.

        Raises:
            DeserializationError:
                - If `data` is not a dictionary.
                - If any of meta/students/objectives/submissions is missing or has the wrong container type.
                - If any record inside the containers fails to deserialize.

        Notes:
            - Fails fast: the first bad record aborts the whole conversion, nothing partial is returned.
        """
        if not isinstance(data, dict):
            raise DeserializationError("Expected a JSON object at the top level.")

        for key, container in cls._container_keys.items():
            if key not in data:
                raise DeserializationError(f"Missing required section: '{key}'.")
            if not isinstance(data[key], container):
                raise DeserializationError(
                    f"Section '{key}' must be a {'dictionary' if container is dict else 'list'}."
                )

        try:
            meta = Metadata.from_dict(data["meta"])
        except _RECORD_ERRORS as e:
            raise DeserializationError(f"Failed to deserialize meta: {e}") from None

        return cls(
            meta=meta,
            students=cls._import_records(data["students"], Student.from_dict, "student"),
            objectives=cls._import_records(
                data["objectives"], Objective.from_dict, "objective"
            ),
            submissions=cls._import_records(
                data["submissions"], Submission.from_dict, "submission"
            ),
        )

    @staticmethod
    def _import_records(
        data: list[Any],
        from_dict_fn: Callable[[dict[str, Any]], Any],
        record_name: str,
    ) -> list[Any]:
        records = []
        for record_dict in data:
            if not isinstance(record_dict, dict):
                raise DeserializationError(
                    f"Failed to deserialize {record_name}: expected an object, got {record_dict!r}"
                )
            try:
                records.append(from_dict_fn(record_dict))
            except _RECORD_ERRORS as e:
                raise DeserializationError(
                    f"Failed to deserialize {record_name}: {record_dict} - {e}"
                ) from None
        return records

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TrackerDocument):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"TrackerDocument({len(self._students)} students, "
            f"{len(self._objectives)} objectives, {len(self._submissions)} submissions)"
        )
