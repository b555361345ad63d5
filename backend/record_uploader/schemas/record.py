from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from record_uploader.core.constants import ZERO_PACE


class StartRecord(BaseModel):
    """Payload for saveStartRecord. Serialize with `by_alias=True`."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    route_name: str
    rule_id: str
    plan_id: str
    record_time: str  # YYYY-MM-DD
    start_time: str   # HH:MM:SS
    start_image: str
    end_time: str = ""
    exercise_times: int = 0  # seconds
    route_kilometre: str = ""  # e.g. "2.00"
    end_image: str = ""
    # JSON-encoded list of {lat, lng, sortNum}
    str_latitude_longitude: str = "[]"
    route_rule: str = ""
    max_time: int = 0
    min_time: int = 0
    oroute_kilometre: float = 0.0
    rule_end_time: str = ""
    rule_start_time: str = ""
    calorie: int = 0
    speed: str = ZERO_PACE
    disp_time_text: str = ""  # HH:MM:SS
    student_id: str


class FinishRecord(StartRecord):
    """Payload for saveRecord: the start record plus computed session results."""

    id: str
    now_status: int
