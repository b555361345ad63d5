from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class VerificationResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    is_valid: bool
    error: Optional[str] = None
    student_id: Optional[str] = None
    name: Optional[str] = None
    account: Optional[str] = None


class UploadProgress(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    step_label: str
    completed: bool
    error: Optional[str] = None


class UploadResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    success: bool
    record_id: Optional[str] = None
    error: Optional[str] = None


class UploadResponse(BaseModel):
    """Returned by POST /uploads: the outcome plus every progress event."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    result: UploadResult
    progress: list[UploadProgress]
