from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RequestHeaders(BaseModel):
    """Device and tenant identity sent with every request (headers.json)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    user_agent: str
    miniapp_version: str
    referer: str
    tenant: str


class CustomTrack(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    enable: bool = False
    file_path: str = ""


class UserConfig(BaseModel):
    """What the user filled in for one upload attempt.

    `start_image` / `finish_image` hold the chosen file names; the image
    bytes are passed to the uploader separately.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    token: str = ""
    date_time: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    start_image: str = ""
    finish_image: str = ""
    route: str = ""
    custom_track: CustomTrack = Field(default_factory=CustomTrack)


class IdentityClaims(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    student_id: str
    name: Optional[str] = None
    account: Optional[str] = None
