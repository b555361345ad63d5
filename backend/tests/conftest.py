import base64
import json

import pytest

from record_uploader.core.config import Settings
from record_uploader.core.errors import RemoteError
from record_uploader.schemas.track import Route, Track, TrackMetadata, TrackPoint
from record_uploader.schemas.user import RequestHeaders


def make_token(payload: dict) -> str:
    body = base64.urlsafe_b64encode(json.dumps(payload).encode("utf-8")).rstrip(b"=").decode()
    return f"eyJhbGciOiJIUzI1NiJ9.{body}.signature"


class FakeClient:
    """Stands in for APIClient; every call is appended to `calls`.

    `fail` maps a method name to the exception that method should raise.
    """

    def __init__(self, calls: list, fail: dict, finish_ok: bool = True):
        self.calls = calls
        self.fail = fail
        self.finish_ok = finish_ok

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        pass

    def _call(self, name, *args):
        self.calls.append((name, args))
        if name in self.fail:
            raise self.fail[name]

    def check_token(self):
        self._call("check_token")

    def check_tenant(self, tenant):
        self._call("check_tenant", tenant)

    def upload_start_image(self, data):
        self._call("upload_start_image", data)
        return "https://img.example/start.jpg"

    def upload_finish_image(self, data):
        self._call("upload_finish_image", data)
        return "https://img.example/finish.jpg"

    def upload_start_record(self, record):
        self._call("upload_start_record", record)
        return "rec-42"

    def upload_finish_record(self, record):
        self._call("upload_finish_record", record)
        return self.finish_ok


class FakeApi:
    def __init__(self):
        self.calls = []
        self.fail = {}
        self.tokens = []
        self.finish_ok = True

    def factory(self, headers, token, settings):
        self.tokens.append(token)
        return FakeClient(self.calls, self.fail, self.finish_ok)

    def names(self):
        return [name for name, _ in self.calls]

    def reject(self, name, code=401, msg="rejected"):
        self.fail[name] = RemoteError(code, msg)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        api_base_url="https://service.test",
        timezone="UTC",
        request_min_delay_sec=0,
        request_max_delay_sec=0,
    )


@pytest.fixture
def headers():
    return RequestHeaders(
        user_agent="Mozilla/5.0 test",
        miniapp_version="1.0.0",
        referer="https://servicewechat.com/test/page-frame.html",
        tenant="SEU",
    )


@pytest.fixture
def route():
    return Route(
        route_name="Track A",
        rule_id="R1",
        plan_id="P1",
        route_rule="Run at least 2 km",
        max_time=60,
        min_time=5,
        route_distance_km=1.0,
        rule_start_time="06:00",
        rule_end_time="22:00",
    )


@pytest.fixture
def track():
    points = (
        TrackPoint(lat=32.0500, lng=118.8500, sort_num=1),
        TrackPoint(lat=32.0509, lng=118.8500, sort_num=2),
        TrackPoint(lat=32.0509, lng=118.8511, sort_num=3),
    )
    return Track(points=points, metadata=TrackMetadata(total_distance=2000, total_time=600, point_count=3))


@pytest.fixture
def token():
    return make_token({"userid": "12345", "name": "Li Lei", "account": "213233089"})


@pytest.fixture
def fake_api():
    return FakeApi()
