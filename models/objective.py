# models/objective.py

"""
The Objective model represents a weekly task assigned to every student.

Objectives are bucketed by `week_index`, which is chosen when the objective is
created and is independent of `due_date`.
"""

from __future__ import annotations

import datetime
from typing import Any

import core.formatters as formatters


class Objective:

    def __init__(
        self,
        id: str,
        title: str,
        details: str,
        week_index: int,
        due_date: datetime.datetime,
    ):
        self._id = id
        self._title = Objective.validate_title_input(title)
        self._details = details or ""
        self._week_index = Objective.validate_week_index_input(week_index)
        self._due_date = due_date

    @property
    def id(self) -> str:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @property
    def details(self) -> str:
        return self._details

    @property
    def week_index(self) -> int:
        return self._week_index

    @property
    def due_date(self) -> datetime.datetime:
        return self._due_date

    @property
    def due_date_iso(self) -> str:
        return self._due_date.isoformat()

    @property
    def due_date_str(self) -> str:
        return self._due_date.strftime("%Y-%m-%d")

    def evolve(self, **changes: Any) -> Objective:
        fields = {
            "id": self._id,
            "title": self._title,
            "details": self._details,
            "week_index": self._week_index,
            "due_date": self._due_date,
        }
        fields.update(changes)
        return Objective(**fields)

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "title": self._title,
            "details": self._details,
            "weekIndex": self._week_index,
            "dueDate": self.due_date_iso,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Objective:
        return cls(
            id=data["id"],
            title=data["title"],
            details=data.get("details") or "",
            week_index=data["weekIndex"],
            due_date=formatters.parse_iso_datetime(data["dueDate"]),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Objective):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Objective({self._id}, {self._title}, {self._week_index}, {self.due_date_iso})"

    def __str__(self) -> str:
        return f"OBJECTIVE: title: {self._title}, week: {self._week_index}, id: {self._id}"

    # === data validators ===

    @staticmethod
    def validate_title_input(title: Any) -> str:
        if not isinstance(title, str):
            raise TypeError("Invalid input. Objective title must be a string.")

        title = title.strip()
        if not title:
            raise ValueError("Invalid input. Objective title is required.")

        return title

    @staticmethod
    def validate_week_index_input(week_index: Any) -> int:
        """
        Validates and normalizes input for an `Objective` week index.

        Accepts ints, whole-valued floats (JSON may encode 2 as 2.0), and integral
        strings (e.g. from a form field), and then:
            - Rejects booleans, which `int()` would otherwise accept.
            - Rejects fractional and non-finite floats instead of truncating them.
            - Casts to int.

        Raises:
            TypeError: If the input is not a whole number.
        """
        if isinstance(week_index, bool):
            raise TypeError("Invalid input. Week index must be a whole number.")

        if isinstance(week_index, float) and not week_index.is_integer():
            raise TypeError("Invalid input. Week index must be a whole number.")

        try:
            return int(week_index)

        except (TypeError, ValueError, OverflowError):
            raise TypeError("Invalid input. Week index must be a whole number.") from None
