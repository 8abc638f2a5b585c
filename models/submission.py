# models/submission.py

"""
Represents a student's progress on a specific objective.

Each `Submission` joins one student to one objective and records a status, free-text
notes, an evidence link, and an ordered list of `Extra` contributions. The
tracker guarantees at most one submission per (student, objective) pair.

Includes functionality for:
- Building a defaulted submission for a pair that has none yet
- Appending extras and toggling an extra's verified flag
- Serializing to and from JSON-compatible dictionaries

Notes:
- Submissions are immutable values. Every change returns a new instance, which
  lets the tracker derive the next document from the previous one.
- Extra ids must be unique within a submission, and insertion order is kept.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from core.utils import generate_uuid
from models.extra import Extra


class SubmissionStatus(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    DONE = "done"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").capitalize()


class Submission:

    def __init__(
        self,
        id: str,
        student_id: str,
        objective_id: str,
        status: SubmissionStatus = SubmissionStatus.NOT_STARTED,
        notes: str = "",
        evidence_url: str = "",
        extras: tuple[Extra, ...] | list[Extra] = (),
    ):
        self._id = id
        self._student_id = student_id
        self._objective_id = objective_id
        self._status = Submission.validate_status_input(status)
        self._notes = notes
        self._evidence_url = evidence_url
        self._extras: tuple[Extra, ...] = Submission.validate_extras_input(extras)

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def student_id(self) -> str:
        return self._student_id

    @property
    def objective_id(self) -> str:
        return self._objective_id

    @property
    def status(self) -> SubmissionStatus:
        return self._status

    @property
    def is_done(self) -> bool:
        return self._status is SubmissionStatus.DONE

    @property
    def notes(self) -> str:
        return self._notes

    @property
    def evidence_url(self) -> str:
        return self._evidence_url

    @property
    def extras(self) -> tuple[Extra, ...]:
        return self._extras

    @property
    def verified_extra_count(self) -> int:
        return sum(1 for extra in self._extras if extra.verified)

    def matches(self, student_id: str, objective_id: str) -> bool:
        return self._student_id == student_id and self._objective_id == objective_id

    # === public classmethods ===

    @classmethod
    def create_default(
        cls,
        student_id: str,
        objective_id: str,
        status: SubmissionStatus = SubmissionStatus.NOT_STARTED,
    ) -> Submission:
        """
        Builds a new `Submission` for a pair that has no record yet.

        Every field not passed in is filled with its default here, so callers never
        need to patch missing values at the call site.
        """
        return cls(
            id=generate_uuid(),
            student_id=student_id,
            objective_id=objective_id,
            status=status,
            notes="",
            evidence_url="",
            extras=(),
        )

    # === derived copies ===

    def evolve(self, **changes: Any) -> Submission:
        fields = {
            "id": self._id,
            "student_id": self._student_id,
            "objective_id": self._objective_id,
            "status": self._status,
            "notes": self._notes,
            "evidence_url": self._evidence_url,
            "extras": self._extras,
        }
        fields.update(changes)
        return Submission(**fields)

    def with_extra(self, extra: Extra) -> Submission:
        return self.evolve(extras=self._extras + (extra,))

    def with_extra_verified(self, extra_id: str, verified: bool) -> Submission:
        return self.evolve(
            extras=tuple(
                extra.with_verified(verified) if extra.id == extra_id else extra
                for extra in self._extras
            )
        )

    def find_extra(self, extra_id: str) -> Extra | None:
        for extra in self._extras:
            if extra.id == extra_id:
                return extra
        return None

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "studentId": self._student_id,
            "objectiveId": self._objective_id,
            "status": self._status.value,
            "notes": self._notes,
            "evidenceUrl": self._evidence_url,
            "extra": [extra.to_dict() for extra in self._extras],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Submission:
        extras_raw = data.get("extra") or []
        if not isinstance(extras_raw, list):
            raise TypeError("Submission extras must be a list.")

        return cls(
            id=data["id"],
            student_id=data["studentId"],
            objective_id=data["objectiveId"],
            status=data.get("status") or SubmissionStatus.NOT_STARTED,
            notes=data.get("notes") or "",
            evidence_url=data.get("evidenceUrl") or "",
            extras=[Extra.from_dict(extra) for extra in extras_raw],
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Submission):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Submission({self._id}, {self._student_id}, {self._objective_id}, {self._status.value}, {len(self._extras)})"

    def __str__(self) -> str:
        return f"SUBMISSION: id: {self._id}, student id: {self._student_id}, objective id: {self._objective_id}"

    # === data validators ===

    @staticmethod
    def validate_status_input(status: Any) -> SubmissionStatus:
        """
        Validates and normalizes input for a `Submission` status.

        Accepts a `SubmissionStatus` or its string value.

        Raises:
            ValueError: If the input is not one of the enumerated statuses.
        """
        try:
            return SubmissionStatus(status)

        except ValueError:
            statuses = ", ".join(s.value for s in SubmissionStatus)
            raise ValueError(
                f"Invalid input. Status must be one of: {statuses}."
            ) from None

    @staticmethod
    def validate_extras_input(extras: Any) -> tuple[Extra, ...]:
        extras = tuple(extras)

        seen: set[str] = set()
        for extra in extras:
            if extra.id in seen:
                raise ValueError(f"Duplicate extra id within submission: {extra.id}")
            seen.add(extra.id)

        return extras
