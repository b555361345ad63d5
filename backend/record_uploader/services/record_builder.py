"""Build the start/finish record payloads saved on the exercise service.

Both builders are pure: they never touch the network, and each returns a
new frozen record.
"""

import json
from datetime import datetime

from record_uploader.core.constants import CALORIE_PER_KM
from record_uploader.core.time_utils import (
    add_seconds_to_hhmmss,
    compute_pace_seconds,
    format_pace,
    seconds_to_hhmmss,
    split_local_timestamp,
)
from record_uploader.schemas.record import FinishRecord, StartRecord
from record_uploader.schemas.track import Route, Track
from record_uploader.services.geo import track_distance


def serialize_track(track: Track) -> str:
    """JSON array of {lat, lng, sortNum} in recorded order."""
    points = [p.model_dump(by_alias=True) for p in track.points]
    return json.dumps(points, separators=(",", ":"))


def track_distance_km(track: Track) -> float:
    # Device-integrated distance wins over the point-list sum when present
    if track.metadata.total_distance is not None:
        return track.metadata.total_distance / 1000.0
    return track_distance(track.points)


def build_start_record(
    route: Route,
    timestamp: datetime,
    start_image_ref: str,
    student_id: str,
    tz_name: str | None = "local",
) -> StartRecord:
    record_time, start_time = split_local_timestamp(timestamp, tz_name)
    return StartRecord(
        route_name=route.route_name,
        rule_id=route.rule_id,
        plan_id=route.plan_id,
        record_time=record_time,
        start_time=start_time,
        start_image=start_image_ref,
        route_rule=route.route_rule,
        max_time=route.max_time,
        min_time=route.min_time,
        oroute_kilometre=route.route_distance_km,
        rule_end_time=route.rule_end_time,
        rule_start_time=route.rule_start_time,
        student_id=student_id,
    )


def build_finish_record(
    start_record: StartRecord,
    track: Track,
    finish_image_ref: str,
    record_id: str,
    status: int,
) -> FinishRecord:
    if not record_id:
        raise ValueError("record_id is required to build a finish record")

    distance_km = track_distance_km(track)
    duration_sec = int(track.metadata.total_time)
    pace = compute_pace_seconds(duration_sec, distance_km)

    fields = start_record.model_dump()
    fields.update(
        end_time=add_seconds_to_hhmmss(start_record.start_time, duration_sec),
        exercise_times=duration_sec,
        route_kilometre=f"{distance_km:.2f}",
        end_image=finish_image_ref,
        str_latitude_longitude=serialize_track(track),
        calorie=round(CALORIE_PER_KM * distance_km),
        speed=format_pace(pace),
        disp_time_text=seconds_to_hhmmss(duration_sec),
        id=record_id,
        now_status=status,
    )
    return FinishRecord(**fields)
