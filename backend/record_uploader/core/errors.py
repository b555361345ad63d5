"""Error types raised by the decoder, the remote client and the config loader.

The orchestrators in ``record_uploader.services`` catch these at their
boundary and turn them into result objects.
"""


class UploaderError(Exception):
    """Base class for every error raised by this package."""


class ValidationError(UploaderError):
    """A required local field is missing; no network call was made."""


class DecodeError(UploaderError):
    """The credential token could not be decoded."""


class MalformedToken(DecodeError):
    pass


class MalformedPayload(DecodeError):
    pass


class MissingIdentity(DecodeError):
    pass


class RemoteError(UploaderError):
    """The service answered with a non-zero status code in its envelope."""

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(f"API Error ({code}): {message}")


class TransportError(UploaderError):
    """The service could not be reached or sent an unreadable response."""


class ConfigError(UploaderError):
    """A header, route or track configuration file is missing or invalid."""
