# core/utils.py

"""
Repository for program-wide utilities.
"""

import uuid


def generate_uuid() -> str:
    return str(uuid.uuid4())


def normalize(text: str | None) -> str:
    return (text or "").strip().lower()


def is_blank(text: str | None) -> bool:
    return not (text or "").strip()
