# models/tracker.py

"""
The Tracker is the central store of the program and the "source of truth" for all records.

It owns a single `TrackerDocument` (metadata, students, objectives, submissions) and a
`BlobStore` the document is persisted to. Every mutation derives the next document
from the current one and commits it whole: the in-memory document is swapped and the
full document is written back under the storage key. Readers holding the previous
document never see a partial update.

Provides functions for loading (with demo seeding and corrupt-blob recovery), saving,
replacing, importing and exporting the document, for managing students, objectives and
settings, and for the submission upsert operations (status, notes, evidence link,
extras). Read-only views are delegated to `core.derivations`.
"""

from __future__ import annotations

import datetime
import logging
from typing import Any

import core.derivations as derivations
import core.export as export
from core.blob_store import BlobStore
from core.config import DEFAULT_STORAGE_KEY
from core.response import ErrorCode, Response
from core.utils import generate_uuid, is_blank
from core.weeks import current_week_index
from models.document import DeserializationError, TrackerDocument
from models.extra import Extra, ImpactLevel
from models.objective import Objective
from models.student import Student
from models.submission import Submission, SubmissionStatus

logger = logging.getLogger(__name__)


class Tracker:

    def __init__(
        self,
        document: TrackerDocument,
        blob_store: BlobStore,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ):
        self._document = document
        self._blob_store = blob_store
        self._storage_key = storage_key

    # === properties ===

    # --- core data structures ---

    @property
    def document(self) -> TrackerDocument:
        return self._document

    @property
    def students(self) -> tuple[Student, ...]:
        return self._document.students

    @property
    def objectives(self) -> tuple[Objective, ...]:
        return self._document.objectives

    @property
    def submissions(self) -> tuple[Submission, ...]:
        return self._document.submissions

    # --- metadata fields ---

    @property
    def club_name(self) -> str:
        return self._document.meta.club_name

    @property
    def event_name(self) -> str:
        return self._document.meta.event_name

    @property
    def week_zero(self) -> datetime.datetime:
        return self._document.meta.week_zero

    @property
    def storage_key(self) -> str:
        return self._storage_key

    def current_week_index(self, today: datetime.date | None = None) -> int:
        return current_week_index(self.week_zero, today)

    # === public classmethods ===

    @classmethod
    def load(
        cls, blob_store: BlobStore, storage_key: str = DEFAULT_STORAGE_KEY
    ) -> Tracker:
        """
        Loads the persisted document, falling back to the demo document.

        Args:
            blob_store (BlobStore): The storage medium to read from.
            storage_key (str): The key the document is stored under.

        Returns:
            Tracker: A tracker holding the persisted document, or a fresh default document if nothing is stored or the stored blob cannot be read.

        Notes:
            - This method never raises. A corrupt blob is treated exactly like a missing one: it is logged, discarded, and overwritten with the default document.
            - Contrast with `import_json()`, which rejects bad input and keeps the current document.
        """
        document = None

        try:
            raw = blob_store.get(storage_key)
            if raw:
                document = export.from_json(raw)

        except (OSError, ValueError) as e:
            # DeserializationError and UnicodeDecodeError are both ValueErrors
            logger.warning(f"Discarding unreadable tracker data under '{storage_key}': {e}")

        tracker = cls(document or TrackerDocument.default(), blob_store, storage_key)

        if document is None:
            logger.info("Starting from the default demo document")
            tracker.save()
        else:
            logger.info(f"Loaded tracker document under '{storage_key}': {document!r}")

        return tracker

    # === persistence and import ===

    def save(self) -> Response:
        """
        Serializes the full document and writes it under the storage key.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the document was written.
                    - False if the storage medium refused the write.
                - detail (str | None):
                    - On success, a confirmation message.
                    - On failure, a description of the error.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INTERNAL_ERROR` if the write failed.
                - data (dict | None):
                    - Always None, this method does not return any payload.

        Notes:
            - This intentionally overwrites existing data. Saving the same document twice is idempotent.
            - Failures are logged and never raised.
        """
        try:
            self._blob_store.set(self._storage_key, export.to_json(self._document))

        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Failed to persist tracker document: {e}")
            return Response.fail(
                detail=f"Failed to write data to storage: {e}",
                error=ErrorCode.INTERNAL_ERROR,
            )

        else:
            logger.debug(f"Saved tracker document under '{self._storage_key}'")
            return Response.succeed(detail="Tracker successfully saved.")

    def replace(self, document: TrackerDocument | dict[str, Any]) -> Response:
        """
        Replaces the entire document, with no merging.

        Args:
            document (TrackerDocument | dict[str, Any]): The new document, or its JSON-compatible dictionary form.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the document was replaced.
                    - False if a dictionary was given that is not shaped like a tracker document.
                - detail (str | None): A human-readable description of the result.
                - error (ErrorCode | str | None):
                    - `ErrorCode.DESERIALIZATION_FAILED` if the input could not be read as a document.
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "document" (TrackerDocument): The new current document.

        Notes:
            - On failure the current document is left untouched.
        """
        if not isinstance(document, TrackerDocument):
            try:
                document = TrackerDocument.from_dict(document)

            except DeserializationError as e:
                return Response.fail(
                    detail=f"Invalid tracker document: {e}",
                    error=ErrorCode.DESERIALIZATION_FAILED,
                )

        return self._commit(
            document,
            detail="Tracker data replaced.",
            data={"document": document},
        )

    def import_json(self, text: str | bytes) -> Response:
        """
        Replaces the document with a JSON snapshot, all or nothing.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the snapshot was parsed and installed.
                    - False if the text is not valid JSON or the meta/students/objectives/submissions sections are missing or mistyped.
                - error (ErrorCode | str | None):
                    - `ErrorCode.DESERIALIZATION_FAILED` on any parse or shape failure.
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "document" (TrackerDocument): The imported document.

        Notes:
            - Fails closed: on failure the current in-memory document and the persisted blob are unchanged.
        """
        try:
            document = export.from_json(text)

        except DeserializationError as e:
            logger.info(f"Rejected JSON import: {e}")
            return Response.fail(
                detail=f"Invalid JSON file: {e}",
                error=ErrorCode.DESERIALIZATION_FAILED,
            )

        logger.info(f"Importing tracker document: {document!r}")
        return self._commit(
            document, detail="Imported data.", data={"document": document}
        )

    def export_json(self) -> str:
        return export.to_json(self._document)

    def flat_report(self) -> list[dict[str, Any]]:
        return export.to_flat_report(self._document)

    def export_csv(self) -> str:
        return export.to_csv(self.flat_report())

    def reset_to_default(self) -> Response:
        logger.info("Resetting tracker to demo data")
        document = TrackerDocument.default()
        return self._commit(
            document, detail="Reset to demo data.", data={"document": document}
        )

    # === data accessors ===

    def find_student(self, student_id: str) -> Response:
        student = self._document.find_student(student_id)

        if student is None:
            return Response.fail(
                detail=f"No matching student could be found: {student_id}.",
                error=ErrorCode.NOT_FOUND,
            )

        return Response.succeed(data={"record": student})

    def find_objective(self, objective_id: str) -> Response:
        objective = self._document.find_objective(objective_id)

        if objective is None:
            return Response.fail(
                detail=f"No matching objective could be found: {objective_id}.",
                error=ErrorCode.NOT_FOUND,
            )

        return Response.succeed(data={"record": objective})

    def get_submission(self, student_id: str, objective_id: str) -> Submission | None:
        """
        Finds the submission for a (student, objective) pair, or None if none exists.
        """
        return self._document.find_submission(student_id, objective_id)

    def status_for(self, student_id: str, objective_id: str) -> SubmissionStatus:
        submission = self.get_submission(student_id, objective_id)
        return submission.status if submission else SubmissionStatus.NOT_STARTED

    # --- derived views ---

    def completion_for_student(self, student_id: str) -> derivations.Completion:
        return derivations.completion_for_student(self._document, student_id)

    def objectives_by_week(self) -> dict[int, list[Objective]]:
        return derivations.objectives_by_week(self._document.objectives)

    def objectives_in_week_order(self) -> list[Objective]:
        return derivations.objectives_in_week_order(self._document.objectives)

    def filter_students(self, query: str | None) -> list[Student]:
        return derivations.filter_students(self._document.students, query)

    def overview(self) -> list[derivations.OverviewRow]:
        return derivations.overview_rows(self._document)

    # --- admin gate ---

    def check_admin_passcode(self, entered: str) -> bool:
        """
        Compares an entered passcode to the stored plaintext passcode.

        Notes:
            - This only switches the interface into its admin view. It is not an access control mechanism: anyone with the storage blob can read the passcode.
        """
        matched = self._document.meta.passcode_matches(entered)
        if not matched:
            logger.info("Admin passcode rejected")
        return matched

    # === data manipulators ===

    def _commit(
        self,
        document: TrackerDocument,
        detail: str | None = None,
        data: dict | None = None,
    ) -> Response:
        """
        Installs `document` as the current document and persists it.

        Notes:
            - The in-memory swap always happens. A failed write is logged by `save()` and does not undo the swap.
        """
        self._document = document
        logger.debug(f"Committed {document!r}")
        self.save()

        payload = {"changed": True}
        payload.update(data or {})
        return Response.succeed(detail=detail, data=payload)

    def _no_change(self, detail: str, data: dict | None = None) -> Response:
        payload = {"changed": False}
        payload.update(data or {})
        return Response.succeed(detail=detail, data=payload)

    @staticmethod
    def _cascade_remove_submissions(
        document: TrackerDocument,
        student_id: str | None = None,
        objective_id: str | None = None,
    ) -> TrackerDocument:
        """
        Drops every submission that references the given student or objective.

        Every delete operation passes its next document through this step so that no
        submission is left pointing at a removed record.
        """
        remaining = tuple(
            s
            for s in document.submissions
            if not (
                (student_id is not None and s.student_id == student_id)
                or (objective_id is not None and s.objective_id == objective_id)
            )
        )

        dropped = len(document.submissions) - len(remaining)
        if dropped:
            logger.debug(f"Cascade removed {dropped} linked submission(s)")

        return document.evolve(submissions=remaining)

    # --- settings ---

    def update_settings(
        self,
        club_name: str | None = None,
        event_name: str | None = None,
        admin_passcode: str | None = None,
        week_zero: datetime.datetime | None = None,
    ) -> Response:
        """
        Updates any subset of the document metadata.

        Arguments left as None keep their current values.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): Always True.
                - data (dict | None): Payload with the following keys:
                    - "changed" (bool): False if nothing was passed in.
                    - "record" (Metadata): The current metadata after the update.
        """
        changes: dict[str, Any] = {}
        if club_name is not None:
            changes["club_name"] = club_name.strip()
        if event_name is not None:
            changes["event_name"] = event_name.strip()
        if admin_passcode is not None:
            changes["admin_passcode"] = admin_passcode
        if week_zero is not None:
            changes["week_zero"] = week_zero

        if not changes:
            return self._no_change(
                "No settings provided. No changes made.",
                data={"record": self._document.meta},
            )

        meta = self._document.meta.evolve(**changes)

        return self._commit(
            self._document.evolve(meta=meta),
            detail="Settings successfully updated.",
            data={"record": meta},
        )

    # --- student manipulation ---

    def add_student(self, name: str, email: str = "", team: str = "") -> Response:
        """
        Creates a new `Student` and appends it to the document.

        Args:
            name (str): The display name. Required.
            email (str): Optional email address.
            team (str): Optional team label.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the student was added.
                    - False if the name is blank or not a string.
                - detail (str | None): A human-readable description of the result.
                - error (ErrorCode | str | None):
                    - `ErrorCode.MISSING_REQUIRED_FIELD` if the name is blank.
                    - `ErrorCode.INVALID_FIELD_VALUE` if an argument has the wrong type.
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Student): The added `Student` object.

        Notes:
            - Rejected input leaves the document untouched.
        """
        if isinstance(name, str) and is_blank(name):
            return Response.fail(
                detail="Name required.",
                error=ErrorCode.MISSING_REQUIRED_FIELD,
            )

        try:
            student = Student(id=generate_uuid(), name=name, email=email, team=team)

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        return self._commit(
            self._document.evolve(students=self._document.students + (student,)),
            detail=f"{student.name} successfully added to the tracker.",
            data={"record": student},
        )

    def update_student(
        self,
        student_id: str,
        name: str | None = None,
        email: str | None = None,
        team: str | None = None,
    ) -> Response:
        """
        Edits a student's name, email, or team.

        Notes:
            - A None or blank name keeps the current name, since a student may never be left nameless.
            - Email and team may be cleared by passing an empty string.
            - An unknown `student_id` is a no-op.
        """
        student = self._document.find_student(student_id)

        if student is None:
            return self._no_change(f"No student with id {student_id}. No changes made.")

        changes: dict[str, Any] = {}
        if name is not None and not is_blank(name):
            changes["name"] = name
        if email is not None:
            changes["email"] = email
        if team is not None:
            changes["team"] = team

        try:
            updated = student.evolve(**changes)

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        if updated == student:
            return self._no_change(
                "The values provided match the current student. No changes made.",
                data={"record": student},
            )

        return self._commit(
            self._document.evolve(
                students=tuple(
                    updated if s.id == student_id else s for s in self._document.students
                )
            ),
            detail=f"Student {updated.name} successfully updated.",
            data={"record": updated},
        )

    def remove_student(self, student_id: str) -> Response:
        """
        Removes a `Student` and every `Submission` that references it.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): Always True.
                - detail (str | None): A human-readable description of the result.
                - data (dict | None): Payload with the following keys:
                    - "changed" (bool): False if no student had that id.

        Notes:
            - Linked submissions are removed in the same commit as the student.
            - An unknown `student_id` is a no-op, not an error.
        """
        student = self._document.find_student(student_id)

        if student is None:
            return self._no_change(f"No student with id {student_id}. No changes made.")

        document = self._document.evolve(
            students=tuple(s for s in self._document.students if s.id != student_id)
        )
        document = self._cascade_remove_submissions(document, student_id=student_id)

        return self._commit(
            document,
            detail=f"{student.name} successfully removed from the tracker.",
        )

    # --- objective manipulation ---

    def add_objective(
        self,
        title: str,
        details: str = "",
        week_index: int | None = None,
        due_date: datetime.datetime | None = None,
    ) -> Response:
        """
        Creates a new `Objective` and appends it to the document.

        Args:
            title (str): The objective title. Required.
            details (str): Free-text details.
            week_index (int | None): The week bucket. Defaults to the current week relative to week zero.
            due_date (datetime.datetime | None): When the objective is due. Defaults to now.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the objective was added.
                    - False if the title is blank or the week index is not a whole number.
                - error (ErrorCode | str | None):
                    - `ErrorCode.MISSING_REQUIRED_FIELD` if the title is blank.
                    - `ErrorCode.INVALID_FIELD_VALUE` if a field fails validation.
                - data (dict | None): Payload with the following keys:
                    - On success:
                        - "record" (Objective): The added `Objective` object.

        Notes:
            - The week index is stored as given. It is not derived from the due date.
        """
        if isinstance(title, str) and is_blank(title):
            return Response.fail(
                detail="Title required.",
                error=ErrorCode.MISSING_REQUIRED_FIELD,
            )

        if week_index is None:
            week_index = self.current_week_index()

        if due_date is None:
            due_date = datetime.datetime.now().replace(microsecond=0)

        try:
            objective = Objective(
                id=generate_uuid(),
                title=title,
                details=details,
                week_index=week_index,
                due_date=due_date,
            )

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        return self._commit(
            self._document.evolve(objectives=self._document.objectives + (objective,)),
            detail=f"Objective '{objective.title}' successfully added to week {objective.week_index}.",
            data={"record": objective},
        )

    def update_objective(
        self,
        objective_id: str,
        title: str | None = None,
        details: str | None = None,
        week_index: int | None = None,
        due_date: datetime.datetime | None = None,
    ) -> Response:
        """
        Edits an objective's title, details, week index, or due date.

        Notes:
            - A None or blank title keeps the current title.
            - An unknown `objective_id` is a no-op.
        """
        objective = self._document.find_objective(objective_id)

        if objective is None:
            return self._no_change(
                f"No objective with id {objective_id}. No changes made."
            )

        changes: dict[str, Any] = {}
        if title is not None and not is_blank(title):
            changes["title"] = title
        if details is not None:
            changes["details"] = details
        if week_index is not None:
            changes["week_index"] = week_index
        if due_date is not None:
            changes["due_date"] = due_date

        try:
            updated = objective.evolve(**changes)

        except (TypeError, ValueError) as e:
            return Response.fail(
                detail=f"Invalid field value: {e}",
                error=ErrorCode.INVALID_FIELD_VALUE,
            )

        if updated == objective:
            return self._no_change(
                "The values provided match the current objective. No changes made.",
                data={"record": objective},
            )

        return self._commit(
            self._document.evolve(
                objectives=tuple(
                    updated if o.id == objective_id else o
                    for o in self._document.objectives
                )
            ),
            detail=f"Objective '{updated.title}' successfully updated.",
            data={"record": updated},
        )

    def remove_objective(self, objective_id: str) -> Response:
        """
        Removes an `Objective` and every `Submission` that references it.

        Notes:
            - Linked submissions are removed in the same commit as the objective.
            - An unknown `objective_id` is a no-op, not an error.
        """
        objective = self._document.find_objective(objective_id)

        if objective is None:
            return self._no_change(
                f"No objective with id {objective_id}. No changes made."
            )

        document = self._document.evolve(
            objectives=tuple(
                o for o in self._document.objectives if o.id != objective_id
            )
        )
        document = self._cascade_remove_submissions(document, objective_id=objective_id)

        return self._commit(
            document,
            detail=f"Objective '{objective.title}' successfully removed from the tracker.",
        )

    # --- submission manipulation ---

    def _pair_exists(self, student_id: str, objective_id: str) -> bool:
        return (
            self._document.find_student(student_id) is not None
            and self._document.find_objective(objective_id) is not None
        )

    def _base_submission(
        self,
        student_id: str,
        objective_id: str,
        default_status: SubmissionStatus = SubmissionStatus.IN_PROGRESS,
    ) -> Submission:
        """
        Returns the existing submission for a pair, or a freshly defaulted one.

        Every submission edit merges its own field into this base, so a change made
        through one path never clobbers fields written through another.
        """
        existing = self.get_submission(student_id, objective_id)
        if existing is not None:
            return existing

        return Submission.create_default(student_id, objective_id, default_status)

    def upsert_submission(self, submission: Submission) -> Response:
        """
        Replaces the stored submission for the same pair, or appends a new one.

        Args:
            submission (Submission): The complete submission to store.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): Always True.
                - detail (str | None): Whether the submission was replaced or added.
                - data (dict | None): Payload with the following keys:
                    - "record" (Submission): The stored `Submission` object.
                    - "changed" (bool): Always True.

        Notes:
            - A stored submission is matched by id or by its (student, objective) pair, and the new one takes its position. Any other record matching either key is dropped, so at most one submission per pair can ever exist.
            - Callers are responsible for merging into the existing record first, see `_base_submission()`.
        """
        replaced = False
        submissions: list[Submission] = []

        for existing in self._document.submissions:
            is_same = existing.id == submission.id or existing.matches(
                submission.student_id, submission.objective_id
            )

            if not is_same:
                submissions.append(existing)
            elif not replaced:
                submissions.append(submission)
                replaced = True

        if not replaced:
            submissions.append(submission)

        return self._commit(
            self._document.evolve(submissions=tuple(submissions)),
            detail="Submission updated." if replaced else "Submission added.",
            data={"record": submission},
        )

    def mark_status(
        self, student_id: str, objective_id: str, status: SubmissionStatus | str
    ) -> Response:
        """
        Sets the status of a student's submission for an objective.

        Args:
            student_id (str): The unique ID of a `Student` object.
            objective_id (str): The unique ID of an `Objective` object.
            status (SubmissionStatus | str): One of not_started, in_progress, or done.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the status was stored, or if the student or objective does not exist (no-op).
                    - False if the status is not one of the enumerated values.
                - error (ErrorCode | str | None):
                    - `ErrorCode.INVALID_FIELD_VALUE` if the status is invalid.
                - data (dict | None): Payload with the following keys:
                    - "changed" (bool): Whether the document changed.
                    - "record" (Submission): The stored submission, when changed.

        Notes:
            - Materializes the submission if the pair has none yet, with the requested status.
            - Notes, evidence link, and extras of an existing submission are preserved.
        """
        try:
            status = Submission.validate_status_input(status)

        except ValueError as e:
            return Response.fail(detail=str(e), error=ErrorCode.INVALID_FIELD_VALUE)

        if not self._pair_exists(student_id, objective_id):
            return self._no_change("Unknown student or objective. No changes made.")

        base = self._base_submission(student_id, objective_id, default_status=status)

        return self.upsert_submission(base.evolve(status=status))

    def set_notes(self, student_id: str, objective_id: str, notes: str) -> Response:
        """
        Sets the free-text notes on a student's submission for an objective.

        Notes:
            - Materializes the submission with status in_progress if the pair has none yet.
            - An unknown student or objective is a no-op.
        """
        if not self._pair_exists(student_id, objective_id):
            return self._no_change("Unknown student or objective. No changes made.")

        base = self._base_submission(student_id, objective_id)

        return self.upsert_submission(base.evolve(notes=notes or ""))

    def set_evidence_url(
        self, student_id: str, objective_id: str, evidence_url: str
    ) -> Response:
        if not self._pair_exists(student_id, objective_id):
            return self._no_change("Unknown student or objective. No changes made.")

        base = self._base_submission(student_id, objective_id)

        return self.upsert_submission(
            base.evolve(evidence_url=(evidence_url or "").strip())
        )

    def add_extra(
        self,
        student_id: str,
        objective_id: str,
        title: str,
        desc: str = "",
        impact: ImpactLevel | str = ImpactLevel.LOW,
    ) -> Response:
        """
        Logs an extra contribution against a student's submission for an objective.

        Args:
            student_id (str): The unique ID of a `Student` object.
            objective_id (str): The unique ID of an `Objective` object.
            title (str): A short title for the extra. Required.
            desc (str): An optional description.
            impact (ImpactLevel | str): Low, Medium, High, or Critical.

        Returns:
            Response: A structured response with the following contract:
                - success (bool):
                    - True if the extra was appended, or if the student or objective does not exist (no-op).
                    - False if the title is blank or the impact level is unknown.
                - error (ErrorCode | str | None):
                    - `ErrorCode.MISSING_REQUIRED_FIELD` if the title is blank.
                    - `ErrorCode.INVALID_FIELD_VALUE` if the impact level is unknown.
                - data (dict | None): Payload with the following keys:
                    - "changed" (bool): Whether the document changed.
                    - "record" (Submission): The stored submission, when changed.
                    - "extra" (Extra): The appended extra, when changed.

        Notes:
            - Validation happens before any lookup or mutation.
            - Materializes the submission with status in_progress if the pair has none yet. An existing submission keeps its status, notes, and earlier extras.
            - The new extra starts unverified and is appended after all existing extras.
        """
        if isinstance(title, str) and is_blank(title):
            return Response.fail(
                detail="Give the extra a title.",
                error=ErrorCode.MISSING_REQUIRED_FIELD,
            )

        try:
            extra = Extra.create(title=title, desc=desc, impact=impact)

        except (TypeError, ValueError) as e:
            return Response.fail(detail=str(e), error=ErrorCode.INVALID_FIELD_VALUE)

        if not self._pair_exists(student_id, objective_id):
            return self._no_change("Unknown student or objective. No changes made.")

        base = self._base_submission(student_id, objective_id)

        response = self.upsert_submission(base.with_extra(extra))
        response.data["extra"] = extra

        return response

    def verify_extra(
        self, student_id: str, objective_id: str, extra_id: str, verified: bool
    ) -> Response:
        """
        Sets the verified flag of one extra.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): Always True.
                - data (dict | None): Payload with the following keys:
                    - "changed" (bool): False if the submission or extra does not exist, or the flag already has that value.
                    - "record" (Submission): The stored submission, when changed.

        Notes:
            - Never materializes a submission: a pair without one has nothing to verify.
            - All other extras and submission fields are left untouched.
        """
        submission = self.get_submission(student_id, objective_id)

        if submission is None:
            return self._no_change("No submission for this pair. No changes made.")

        extra = submission.find_extra(extra_id)

        if extra is None:
            return self._no_change(f"No extra with id {extra_id}. No changes made.")

        if extra.verified == bool(verified):
            return self._no_change(
                f"Extra is already {extra.verified_status}. No changes made.",
                data={"record": submission},
            )

        return self.upsert_submission(submission.with_extra_verified(extra_id, verified))

    # === dunder methods ===

    def __repr__(self) -> str:
        return f"Tracker({self._storage_key}, {self._document!r})"
