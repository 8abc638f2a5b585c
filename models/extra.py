# models/extra.py

"""
Represents an extra contribution logged against a submission.

An `Extra` is appended by a student and later verified (or unverified) by an
admin reviewer. Apart from the `verified` flag, extras are never edited once
logged.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from core.utils import generate_uuid


class ImpactLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class Extra:

    def __init__(
        self,
        id: str,
        title: str,
        desc: str = "",
        impact: ImpactLevel = ImpactLevel.LOW,
        verified: bool = False,
    ):
        self._id = id
        self._title = title
        self._desc = desc
        self._impact = impact
        self._verified = verified

    # === properties ===

    @property
    def id(self) -> str:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @property
    def desc(self) -> str:
        return self._desc

    @property
    def impact(self) -> ImpactLevel:
        return self._impact

    @property
    def verified(self) -> bool:
        return self._verified

    @property
    def verified_status(self) -> str:
        return "'VERIFIED'" if self._verified else "'UNVERIFIED'"

    def with_verified(self, verified: bool) -> Extra:
        return Extra(self._id, self._title, self._desc, self._impact, bool(verified))

    # === public classmethods ===

    @classmethod
    def create(cls, title: Any, desc: str = "", impact: Any = ImpactLevel.LOW) -> Extra:
        """
        Builds a freshly logged `Extra` with a new id and `verified=False`.

        Raises:
            TypeError: If the title is not a string.
            ValueError: If the title is blank or the impact is not a known level.
        """
        return cls(
            id=generate_uuid(),
            title=Extra.validate_title_input(title),
            desc=(desc or "").strip(),
            impact=Extra.validate_impact_input(impact),
            verified=False,
        )

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "id": self._id,
            "title": self._title,
            "desc": self._desc,
            "impact": self._impact.value,
            "verified": self._verified,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Extra:
        return cls(
            id=data["id"],
            title=data.get("title") or "",
            desc=data.get("desc") or "",
            impact=Extra.validate_impact_input(data.get("impact") or ImpactLevel.LOW),
            verified=Extra.validate_verified_input(data.get("verified", False)),
        )

    # === dunder methods ===

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Extra):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"Extra({self._id}, {self._title}, {self._impact.value}, {self._verified})"

    def __str__(self) -> str:
        return f"EXTRA: title: {self._title}, impact: {self._impact.value}, {self.verified_status}"

    # === data validators ===

    @staticmethod
    def validate_title_input(title: Any) -> str:
        if not isinstance(title, str):
            raise TypeError("Invalid input. Extra title must be a string.")

        title = title.strip()
        if not title:
            raise ValueError("Invalid input. Give the extra a title.")

        return title

    @staticmethod
    def validate_impact_input(impact: Any) -> ImpactLevel:
        try:
            return ImpactLevel(impact)

        except ValueError:
            levels = ", ".join(level.value for level in ImpactLevel)
            raise ValueError(
                f"Invalid input. Impact must be one of: {levels}."
            ) from None

    @staticmethod
    def validate_verified_input(verified: Any) -> bool:
        if not isinstance(verified, bool):
            raise TypeError("Invalid input. Verified must be true or false.")

        return verified
