# models/metadata.py

"""
Holds the document-wide settings: club and event names, the admin passcode, and
the week-zero reference date used to compute week indices.

The passcode is stored and compared in plaintext. It only toggles an admin view in
the user interface and is not a security boundary.
"""

from __future__ import annotations

import datetime
from typing import Any

import core.formatters as formatters
from core.weeks import monday_of_current_week

DEFAULT_CLUB_NAME = "St. Tom's Catholic International College - Intra Club"
DEFAULT_EVENT_NAME = "HTIC Charity Marathon"
DEFAULT_ADMIN_PASSCODE = "admin123"


class Metadata:

    def __init__(
        self,
        club_name: str,
        event_name: str,
        admin_passcode: str,
        week_zero: datetime.datetime,
    ):
        self._club_name = club_name
        self._event_name = event_name
        self._admin_passcode = admin_passcode
        self._week_zero = week_zero

    @property
    def club_name(self) -> str:
        return self._club_name

    @property
    def event_name(self) -> str:
        return self._event_name

    @property
    def admin_passcode(self) -> str:
        return self._admin_passcode

    @property
    def week_zero(self) -> datetime.datetime:
        return self._week_zero

    def passcode_matches(self, entered: str) -> bool:
        return entered == self._admin_passcode

    def evolve(self, **changes: Any) -> Metadata:
        fields = {
            "club_name": self._club_name,
            "event_name": self._event_name,
            "admin_passcode": self._admin_passcode,
            "week_zero": self._week_zero,
        }
        fields.update(changes)
        return Metadata(**fields)

    @classmethod
    def default(cls) -> Metadata:
        return cls(
            club_name=DEFAULT_CLUB_NAME,
            event_name=DEFAULT_EVENT_NAME,
            admin_passcode=DEFAULT_ADMIN_PASSCODE,
            week_zero=monday_of_current_week(),
        )

    # === persistence and import ===

    def to_dict(self) -> dict:
        return {
            "clubName": self._club_name,
            "eventName": self._event_name,
            "adminPasscode": self._admin_passcode,
            "academicWeekZeroISO": self._week_zero.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Metadata:
        return cls(
            club_name=str(data.get("clubName") or ""),
            event_name=str(data.get("eventName") or ""),
            admin_passcode=str(data.get("adminPasscode") or ""),
            week_zero=formatters.parse_iso_datetime(data["academicWeekZeroISO"]),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Metadata):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"Metadata({self._club_name}, {self._event_name}, {self._week_zero.isoformat()})"
