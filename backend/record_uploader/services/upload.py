"""End-to-end upload of one exercise record.

Stages run strictly in order; each one gates the next:

    validate -> start image -> finish image -> start record -> finish record

Progress is reported to a ProgressObserver: one event when a stage starts
(completed=False) and one when it succeeds (completed=True). Any failure
ends the run with an 'Upload failed' event and an unsuccessful UploadResult.
"""

import logging
from enum import Enum
from typing import Optional, Protocol

from record_uploader.core.config import Settings
from record_uploader.core.constants import RECORD_STATUS_FINISHED
from record_uploader.schemas.track import Route, Track
from record_uploader.schemas.upload import UploadProgress, UploadResult
from record_uploader.schemas.user import RequestHeaders, UserConfig
from record_uploader.services.api_client import APIClient
from record_uploader.services.record_builder import build_finish_record, build_start_record
from record_uploader.services.verification import VerificationService

logger = logging.getLogger(__name__)

UPLOAD_FAILED = "Upload failed"


class UploadState(str, Enum):
    pending = "pending"
    validating = "validating"
    uploading_start_image = "uploading_start_image"
    uploading_finish_image = "uploading_finish_image"
    creating_start_record = "creating_start_record"
    creating_finish_record = "creating_finish_record"
    done = "done"
    failed = "failed"


# Forward order of the pipeline; `failed` may follow any non-terminal state.
_ORDER = [
    UploadState.pending,
    UploadState.validating,
    UploadState.uploading_start_image,
    UploadState.uploading_finish_image,
    UploadState.creating_start_record,
    UploadState.creating_finish_record,
    UploadState.done,
]

STEP_LABELS = {
    UploadState.validating: "Validating configuration",
    UploadState.uploading_start_image: "Uploading start image",
    UploadState.uploading_finish_image: "Uploading finish image",
    UploadState.creating_start_record: "Creating start record",
    UploadState.creating_finish_record: "Creating finish record",
}


class ProgressObserver(Protocol):
    def on_progress(self, event: UploadProgress) -> None: ...


class ProgressLog:
    """Observer that keeps every event in order."""

    def __init__(self):
        self.events: list[UploadProgress] = []

    def on_progress(self, event: UploadProgress) -> None:
        self.events.append(event)


class InvalidTransition(RuntimeError):
    pass


class UploadFailed(Exception):
    """Internal signal: a stage failed with a message meant for the user."""


class UploadService:
    def __init__(
        self,
        settings: Settings,
        observer: Optional[ProgressObserver] = None,
        client_factory=APIClient,
        verification: Optional[VerificationService] = None,
    ):
        self.settings = settings
        self.observer = observer
        self.client_factory = client_factory
        self.verification = verification or VerificationService(settings, client_factory)
        self.state = UploadState.pending

    def _emit(self, step_label: str, completed: bool, error: str | None = None):
        if self.observer is not None:
            self.observer.on_progress(
                UploadProgress(step_label=step_label, completed=completed, error=error)
            )

    def _advance(self, new_state: UploadState):
        if new_state is UploadState.failed:
            if self.state in (UploadState.done, UploadState.failed):
                raise InvalidTransition(f"{self.state.value} -> {new_state.value}")
        elif _ORDER.index(new_state) != _ORDER.index(self.state) + 1:
            raise InvalidTransition(f"{self.state.value} -> {new_state.value}")
        self.state = new_state

    def _enter(self, new_state: UploadState):
        self._advance(new_state)
        self._emit(STEP_LABELS[new_state], False)

    def _complete(self):
        self._emit(STEP_LABELS[self.state], True)

    def upload_exercise_record(
        self,
        user: UserConfig,
        headers: RequestHeaders,
        route: Route,
        track: Track,
        start_image: bytes,
        finish_image: bytes,
    ) -> UploadResult:
        self.state = UploadState.pending
        try:
            self._enter(UploadState.validating)
            verdict = self.verification.validate_user_config(user, headers)
            if not verdict.is_valid:
                raise UploadFailed(verdict.error or "Validation failed")
            self._complete()

            with self.client_factory(headers, user.token, self.settings) as client:
                self._enter(UploadState.uploading_start_image)
                start_image_ref = client.upload_start_image(start_image)
                self._complete()

                self._enter(UploadState.uploading_finish_image)
                finish_image_ref = client.upload_finish_image(finish_image)
                self._complete()

                self._enter(UploadState.creating_start_record)
                start_record = build_start_record(
                    route,
                    user.date_time,
                    start_image_ref,
                    verdict.student_id,
                    self.settings.timezone,
                )
                record_id = client.upload_start_record(start_record)
                self._complete()

                self._enter(UploadState.creating_finish_record)
                finish_record = build_finish_record(
                    start_record,
                    track,
                    finish_image_ref,
                    record_id,
                    RECORD_STATUS_FINISHED,
                )
                if not client.upload_finish_record(finish_record):
                    logger.warning("Service did not confirm finish record %s", record_id)
                self._complete()

            self._advance(UploadState.done)
            logger.info("Uploaded exercise record %s for route %s", record_id, route.route_name)
            return UploadResult(success=True, record_id=record_id)
        except Exception as e:
            message = str(e) or UPLOAD_FAILED
            logger.warning("Upload failed during %s: %s", self.state.value, message)
            if self.state not in (UploadState.done, UploadState.failed):
                self._advance(UploadState.failed)
            self._emit(UPLOAD_FAILED, False, message)
            return UploadResult(success=False, error=message)
