"""httpx client for the remote exercise service.

Every call waits a random delay first, then checks the ``{code, msg, data}``
envelope. A non-zero ``code`` raises RemoteError; network failures and
unreadable bodies raise TransportError.
"""

import logging
import random
import time

import httpx

from record_uploader.core.config import Settings
from record_uploader.core.constants import (
    API_PATHS,
    HEADER_CONTENT_TYPE_JSON,
    HEADER_TOKEN_PREFIX,
    IMAGE_FILENAME,
    IMAGE_MIME_TYPE,
    STATIC_HEADERS,
)
from record_uploader.core.errors import RemoteError, TransportError
from record_uploader.schemas.record import FinishRecord, StartRecord
from record_uploader.schemas.user import RequestHeaders

logger = logging.getLogger(__name__)


class APIClient:
    def __init__(
        self,
        headers: RequestHeaders,
        token: str,
        settings: Settings,
        transport: httpx.BaseTransport | None = None,
        sleep=time.sleep,
    ):
        self.headers = {
            "token": f"{HEADER_TOKEN_PREFIX}{token}",
            "miniappversion": headers.miniapp_version,
            "User-Agent": headers.user_agent,
            "tenant": headers.tenant,
            "Referer": headers.referer,
            **STATIC_HEADERS,
        }
        self._min_delay = settings.request_min_delay_sec
        self._max_delay = settings.request_max_delay_sec
        self._sleep = sleep
        self._client = httpx.Client(
            base_url=settings.api_base_url,
            timeout=settings.request_timeout_sec,
            transport=transport,
        )

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        self._client.close()

    def _random_delay(self):
        self._sleep(random.uniform(self._min_delay, self._max_delay))

    def _request(self, method: str, path: str, headers: dict | None = None, **kwargs):
        self._random_delay()
        hdrs = dict(self.headers) if headers is None else headers
        logger.debug("%s %s", method, path)
        try:
            r = self._client.request(method, path, headers=hdrs, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {path} failed: {e}") from e

        try:
            body = r.json()
        except ValueError as e:
            raise TransportError(
                f"Invalid response from {path} (status {r.status_code}): {r.text[:200]}"
            ) from e
        if not isinstance(body, dict):
            raise TransportError(f"Invalid response envelope from {path}")

        code = body.get("code")
        if code != 0:
            raise RemoteError(code if code is not None else -1, str(body.get("msg") or ""))
        return body.get("data")

    def _json_headers(self) -> dict:
        hdrs = dict(self.headers)
        hdrs["Content-Type"] = HEADER_CONTENT_TYPE_JSON
        return hdrs

    def check_tenant(self, tenant: str) -> None:
        # Anonymous endpoint: sent without token/tenant headers
        hdrs = self._json_headers()
        hdrs.pop("tenant", None)
        hdrs.pop("token", None)
        self._request(
            "POST",
            API_PATHS["check_tenant"],
            headers=hdrs,
            params={"tenantCode": tenant},
            content="{}",
        )

    def check_token(self) -> None:
        self._request(
            "GET",
            API_PATHS["check_token"],
            headers=self._json_headers(),
            params={"para": "undefined"},
        )

    def upload_image(self, data: bytes, path: str, filename: str = IMAGE_FILENAME) -> str:
        files = {"file": (filename, data, IMAGE_MIME_TYPE)}
        ref = self._request("POST", path, files=files)
        if not ref:
            raise TransportError(f"No image reference returned by {path}")
        return str(ref)

    def upload_start_image(self, data: bytes) -> str:
        return self.upload_image(data, API_PATHS["upload_start_image"])

    def upload_finish_image(self, data: bytes) -> str:
        return self.upload_image(data, API_PATHS["upload_finish_image"])

    def upload_start_record(self, record: StartRecord) -> str:
        data = self._request(
            "POST",
            API_PATHS["save_start_record"],
            headers=self._json_headers(),
            content=record.model_dump_json(by_alias=True),
        )
        if not data:
            raise TransportError("No record id returned by saveStartRecord")
        return str(data)

    def upload_finish_record(self, record: FinishRecord) -> bool:
        data = self._request(
            "POST",
            API_PATHS["save_record"],
            headers=self._json_headers(),
            content=record.model_dump_json(by_alias=True),
        )
        return bool(data)
