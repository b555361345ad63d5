import json
from datetime import datetime, timezone

import httpx
import pytest

from record_uploader.core.errors import RemoteError, TransportError
from record_uploader.services.api_client import APIClient
from record_uploader.services.record_builder import build_start_record


def _client(settings, headers, handler, sleeps=None):
    return APIClient(
        headers,
        "tok.en.sig",
        settings,
        transport=httpx.MockTransport(handler),
        sleep=(sleeps.append if sleeps is not None else lambda s: None),
    )


def _ok(data=None):
    return httpx.Response(200, json={"code": 0, "msg": "ok", "data": data})


def test_check_token_sends_auth_headers(settings, headers):
    seen = []

    def handler(request):
        seen.append(request)
        return _ok()

    with _client(settings, headers, handler) as client:
        client.check_token()

    req = seen[0]
    assert req.method == "GET"
    assert req.url.path == "/api/miniapp/student/checkToken"
    assert req.url.params["para"] == "undefined"
    assert req.headers["token"] == "Bearer tok.en.sig"
    assert req.headers["tenant"] == "SEU"
    assert req.headers["miniappversion"] == "1.0.0"
    assert req.headers["xweb_xhr"] == "1"


def test_check_tenant_is_anonymous(settings, headers):
    seen = []

    def handler(request):
        seen.append(request)
        return _ok()

    with _client(settings, headers, handler) as client:
        client.check_tenant("SEU")

    req = seen[0]
    assert req.method == "POST"
    assert req.url.params["tenantCode"] == "SEU"
    assert "token" not in req.headers
    assert "tenant" not in req.headers
    assert req.headers["Content-Type"].startswith("application/json")
    assert json.loads(req.content) == {}


def test_non_zero_code_raises_remote_error(settings, headers):
    def handler(request):
        return httpx.Response(200, json={"code": 401, "msg": "token expired", "data": None})

    with _client(settings, headers, handler) as client:
        with pytest.raises(RemoteError) as exc:
            client.check_token()
    assert exc.value.code == 401
    assert "token expired" in str(exc.value)


def test_network_failure_raises_transport_error(settings, headers):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with _client(settings, headers, handler) as client:
        with pytest.raises(TransportError):
            client.check_token()


def test_non_json_body_raises_transport_error(settings, headers):
    def handler(request):
        return httpx.Response(502, text="<html>Bad Gateway</html>")

    with _client(settings, headers, handler) as client:
        with pytest.raises(TransportError):
            client.check_token()


def test_upload_images_return_reference(settings, headers):
    seen = []

    def handler(request):
        seen.append(request)
        return _ok(f"https://img.test{request.url.path}.jpg")

    with _client(settings, headers, handler) as client:
        start_ref = client.upload_start_image(b"\xff\xd8start")
        finish_ref = client.upload_finish_image(b"\xff\xd8finish")

    assert start_ref.endswith("/uploadRecordImage.jpg")
    assert finish_ref.endswith("/uploadRecordImage2.jpg")
    assert b'filename="1.jpg"' in seen[0].content
    assert b"\xff\xd8start" in seen[0].content
    assert seen[0].headers["Content-Type"].startswith("multipart/form-data")


def test_upload_start_record_posts_camel_case_json(settings, headers, route):
    seen = []

    def handler(request):
        seen.append(request)
        return _ok("rec-9")

    record = build_start_record(route, datetime(2024, 1, 1, 8, tzinfo=timezone.utc), "s", "12345", "UTC")
    with _client(settings, headers, handler) as client:
        assert client.upload_start_record(record) == "rec-9"

    body = json.loads(seen[0].content)
    assert body["routeName"] == "Track A"
    assert body["studentId"] == "12345"
    assert seen[0].headers["Content-Type"] == "application/json;charset=UTF-8"


def test_missing_record_id_is_an_error(settings, headers, route):
    record = build_start_record(route, datetime(2024, 1, 1, 8, tzinfo=timezone.utc), "s", "1", "UTC")
    with _client(settings, headers, lambda r: _ok(None)) as client:
        with pytest.raises(TransportError):
            client.upload_start_record(record)


def test_every_request_is_paced(settings, headers):
    paced = settings.model_copy(update={"request_min_delay_sec": 1.5, "request_max_delay_sec": 3.5})
    sleeps = []
    with _client(paced, headers, lambda r: _ok(), sleeps) as client:
        client.check_token()
        client.check_tenant("SEU")

    assert len(sleeps) == 2
    assert all(1.5 <= s <= 3.5 for s in sleeps)
