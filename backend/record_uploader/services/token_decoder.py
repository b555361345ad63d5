"""Claims extraction from the service's three-part bearer token.

The signature segment is never checked here: decoding only reads who the
token belongs to. Whether the token is accepted is decided by the remote
``checkToken`` call.
"""

import base64
import binascii
import json
import logging

from record_uploader.core.constants import TOKEN_PARTS_COUNT, TOKEN_USERID_FIELD
from record_uploader.core.errors import MalformedPayload, MalformedToken, MissingIdentity
from record_uploader.schemas.user import IdentityClaims

logger = logging.getLogger(__name__)


def decode_token(token: str) -> dict:
    """Return the JSON payload (middle segment) of `token`.

    Raises MalformedToken, MalformedPayload or MissingIdentity.
    """
    parts = token.split(".")
    if len(parts) != TOKEN_PARTS_COUNT or not all(parts):
        raise MalformedToken(
            f"Token must contain {TOKEN_PARTS_COUNT} parts (format: part1.part2.part3)"
        )

    payload = parts[1]
    padded = payload + "=" * (-len(payload) % 4)
    try:
        raw = base64.b64decode(padded, altchars=b"-_", validate=True)
        params = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise MalformedPayload(f"Failed to decode token: {e}") from e

    if not isinstance(params, dict):
        raise MalformedPayload("Failed to decode token: payload is not a JSON object")
    if params.get(TOKEN_USERID_FIELD) in (None, ""):
        raise MissingIdentity(f"Token does not contain {TOKEN_USERID_FIELD} field")
    return params


def get_student_id(token: str) -> str:
    return str(decode_token(token)[TOKEN_USERID_FIELD])


def get_user_info(token: str) -> IdentityClaims:
    params = decode_token(token)
    logger.debug("Decoded token claims: fields=%s", sorted(params))
    return IdentityClaims(
        student_id=str(params[TOKEN_USERID_FIELD]),
        name=params.get("name"),
        account=params.get("account"),
    )
