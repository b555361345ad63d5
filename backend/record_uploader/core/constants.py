"""Shared constants for the remote exercise service.

Centralizes endpoint paths, wire values and fixed headers used by the
client and record builder so we can document and adjust them in one place.
"""

API_PATHS = {
    "check_tenant": "/api/miniapp/anno/checkTenant",
    "check_token": "/api/miniapp/student/checkToken",
    "save_start_record": "/api/exercise/exerciseRecord/saveStartRecord",
    "save_record": "/api/exercise/exerciseRecord/saveRecord",
    "upload_start_image": "/api/miniapp/exercise/uploadRecordImage",
    "upload_finish_image": "/api/miniapp/exercise/uploadRecordImage2",
}

# Earth radius used by the remote service's own distance check (km)
EARTH_RADIUS_KM = 6378.13649

# Flat calorie estimate per kilometre
CALORIE_PER_KM = 62

# nowStatus value for a completed session
RECORD_STATUS_FINISHED = 2

IMAGE_MIME_TYPE = "image/jpeg"
IMAGE_FILENAME = "1.jpg"

TOKEN_PARTS_COUNT = 3
TOKEN_USERID_FIELD = "userid"

# Placeholder pace shown when no distance was covered
ZERO_PACE = "0'00''"

HEADER_TOKEN_PREFIX = "Bearer "
HEADER_CONTENT_TYPE_JSON = "application/json;charset=UTF-8"

# Browser-like headers the service expects on every call
STATIC_HEADERS = {
    "xweb_xhr": "1",
    "Accept": "*/*",
    "Sec-Fetch-Site": "cross-site",
    "Sec-Fetch-Mode": "cors",
    "Sec-Fetch-Dest": "empty",
    "Accept-Encoding": "gzip, deflate, br",
    "Accept-Language": "zh-CN,zh;q=0.9",
}
