# models/student.py

"""
Represents a student taking part in the club event.

Stores a display name, an optional email address, and an optional team label used
for grouping and search. Students are immutable values: edits produce a new
`Student` via `evolve()`, so a `TrackerDocument` holding the old instance is never
changed underneath a reader.

Includes functionality for:
- Validating the required display name
- Serializing to and from JSON-compatible dictionaries
"""

from __future__ import annotations

from typing import Any


class Student:

    def __init__(
        self,
        id: str,
        name: str,
        email: str = "",
        team: str = "",
    ):
        self._id: str = id
        self._name: str = Student.validate_name_input(name)
        self._email: str = (email or "").strip()
        self._team: str = (team or "").strip()

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def email(self) -> str:
        return self._email

    @property
    def team(self) -> str:
        return self._team

    @property
    def search_text(self) -> str:
        return " ".join(field for field in (self._name, self._email, self._team) if field)

    def evolve(self, **changes: Any) -> Student:
        fields = {
            "id": self._id,
            "name": self._name,
            "email": self._email,
            "team": self._team,
        }
        fields.update(changes)
        return Student(**fields)

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "name": self._name,
            "email": self._email,
            "team": self._team,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Student:
        return cls(
            id=data["id"],
            name=data["name"],
            email=data.get("email") or "",
            team=data.get("team") or "",
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Student):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Student({self._id}, {self._name}, {self._email}, {self._team})"

    def __str__(self) -> str:
        return f"STUDENT: name: {self._name}, team: {self._team or '-'}, id: {self._id}"

    # === data validators ===

    @staticmethod
    def validate_name_input(name: Any) -> str:
        """
        Validates and normalizes a `Student` display name.

        Raises:
            TypeError: If the name is not a string.
            ValueError: If the name is empty after stripping whitespace.
        """
        if not isinstance(name, str):
            raise TypeError("Invalid input. Student name must be a string.")

        name = name.strip()
        if not name:
            raise ValueError("Invalid input. Student name is required.")

        return name
