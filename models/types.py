# models/types.py

"""
Holds TypeVar definition for simplifying type checks.
"""

from typing import TypeVar

from .extra import Extra
from .objective import Objective
from .student import Student
from .submission import Submission

RecordType = TypeVar("RecordType", Extra, Objective, Student, Submission)
