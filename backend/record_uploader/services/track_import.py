from datetime import datetime, timezone

import gpxpy
import gpxpy.gpx

from record_uploader.core.errors import ConfigError
from record_uploader.core.time_utils import seconds_to_hhmmss
from record_uploader.schemas.track import Track, TrackMetadata, TrackPoint
from record_uploader.services.geo import track_distance


def track_from_gpx(source) -> Track:
    """Build a Track from GPX text or a file object.

    - Points: every track segment point in file order, numbered from 1
    - Distance: haversine sum over the points, stored in meters
    - Time: last minus first timestamp; 0 if the file has no timestamps
    """
    try:
        gpx = gpxpy.parse(source)
    except gpxpy.gpx.GPXException as e:
        raise ConfigError(f"Invalid GPX file: {e}") from e

    points = []
    first_time = None
    last_time = None
    for track in gpx.tracks:
        for segment in track.segments:
            for p in segment.points:
                points.append(TrackPoint(lat=p.latitude, lng=p.longitude, sort_num=len(points) + 1))
                if p.time:
                    if first_time is None:
                        first_time = p.time
                    last_time = p.time

    if not points:
        raise ConfigError("GPX file contains no track points")

    total_m = track_distance(points) * 1000.0
    total_s = int((last_time - first_time).total_seconds()) if first_time and last_time else 0
    interval = total_s / (len(points) - 1) if len(points) > 1 else 0.0

    metadata = TrackMetadata(
        total_distance=total_m,
        formatted_distance=f"{total_m / 1000.0:.2f} km",
        total_time=total_s,
        formatted_time=seconds_to_hhmmss(total_s),
        sample_time_interval=interval,
        point_count=len(points),
        created_at=datetime.now(timezone.utc),
    )
    return Track(points=tuple(points), metadata=metadata)
