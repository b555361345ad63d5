from datetime import datetime, timedelta

from record_uploader.core.constants import ZERO_PACE


def seconds_to_hhmmss(total_seconds: int) -> str:
    """
    Convert total seconds (int) -> 'HH:MM:SS'.
    Example: 2732 -> '00:45:32'
    """
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def compute_pace_seconds(duration_seconds: int, distance_km: float) -> int:
    """Seconds per kilometre, rounded. Zero when no distance was covered."""
    if distance_km <= 0:
        return 0
    return round(duration_seconds / distance_km)


def format_pace(pace_seconds: int) -> str:
    """
    Format pace per km as M'SS''.
    Example: 300 -> "5'00''", 0 -> "0'00''"
    """
    if pace_seconds <= 0:
        return ZERO_PACE
    minutes = pace_seconds // 60
    seconds = pace_seconds % 60
    return f"{minutes}'{seconds:02d}''"


def to_local_datetime(dt: datetime, tz_name: str | None = None) -> datetime:
    """Convert a datetime from source tz (assume UTC if naive) to local or given tz.

    - If `tz_name` is 'local' or None: use system local timezone.
    - If `tz_name` is IANA tz name (e.g., 'Asia/Shanghai'): use that.
    - If `dt` has no tzinfo, assume UTC.
    """
    from datetime import timezone
    from zoneinfo import ZoneInfo

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    if tz_name and tz_name != "local":
        return dt.astimezone(ZoneInfo(tz_name))
    return dt.astimezone()


def split_local_timestamp(dt: datetime, tz_name: str | None = None) -> tuple[str, str]:
    """Return (YYYY-MM-DD, HH:MM:SS) of `dt` in the given timezone."""
    local = to_local_datetime(dt, tz_name)
    return local.date().isoformat(), local.strftime("%H:%M:%S")


def add_seconds_to_hhmmss(hhmmss: str, seconds: int) -> str:
    """Shift a time-of-day string forward, wrapping past midnight.

    Example: ('23:55:00', 600) -> '00:05:00'
    """
    start = datetime.strptime(hhmmss, "%H:%M:%S")
    return (start + timedelta(seconds=seconds)).strftime("%H:%M:%S")
