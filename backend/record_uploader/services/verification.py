import logging

from record_uploader.core.config import Settings
from record_uploader.core.errors import ValidationError
from record_uploader.schemas.upload import VerificationResult
from record_uploader.schemas.user import RequestHeaders, UserConfig
from record_uploader.services.api_client import APIClient
from record_uploader.services.token_decoder import get_user_info

logger = logging.getLogger(__name__)

# Checked in this order; the first missing field is reported
REQUIRED_FIELDS = [
    ("token", "Token is required"),
    ("route", "Route selection is required"),
    ("start_image", "Start image is required"),
    ("finish_image", "Finish image is required"),
]


def check_required_fields(user: UserConfig, fields=REQUIRED_FIELDS) -> None:
    for name, message in fields:
        if not getattr(user, name):
            raise ValidationError(message)


class VerificationService:
    """Checks a user's token and tenant against the service before uploading.

    Every method returns a VerificationResult; failures are reported in
    `error` rather than raised. `client_factory` builds a client per call
    with the signature of APIClient(headers, token, settings).
    """

    def __init__(self, settings: Settings, client_factory=APIClient):
        self.settings = settings
        self.client_factory = client_factory

    def verify_token(self, token: str, headers: RequestHeaders) -> VerificationResult:
        try:
            with self.client_factory(headers, token, self.settings) as client:
                client.check_token()
            claims = get_user_info(token)
        except Exception as e:
            logger.warning("Token verification failed: %s", e)
            return VerificationResult(is_valid=False, error=str(e) or "Token verification failed")
        return VerificationResult(
            is_valid=True,
            student_id=claims.student_id,
            name=claims.name,
            account=claims.account,
        )

    def verify_tenant(self, tenant: str, headers: RequestHeaders, token: str) -> VerificationResult:
        try:
            with self.client_factory(headers, token, self.settings) as client:
                client.check_tenant(tenant)
        except Exception as e:
            logger.warning("Tenant verification failed for %s: %s", tenant, e)
            return VerificationResult(is_valid=False, error=str(e) or "Tenant verification failed")
        return VerificationResult(is_valid=True)

    def _verify_identity(self, token: str, headers: RequestHeaders) -> VerificationResult:
        token_result = self.verify_token(token, headers)
        if not token_result.is_valid:
            return token_result

        tenant_result = self.verify_tenant(headers.tenant, headers, token)
        if not tenant_result.is_valid:
            return tenant_result

        return VerificationResult(
            is_valid=True,
            student_id=token_result.student_id,
            name=token_result.name,
            account=token_result.account,
        )

    def validate_token_only(self, user: UserConfig, headers: RequestHeaders) -> VerificationResult:
        """Lightweight check used when saving settings: token + tenant only."""
        try:
            check_required_fields(user, REQUIRED_FIELDS[:1])
        except ValidationError as e:
            return VerificationResult(is_valid=False, error=str(e))
        return self._verify_identity(user.token, headers)

    def validate_user_config(self, user: UserConfig, headers: RequestHeaders) -> VerificationResult:
        """Check every field an upload needs, cheapest first.

        Local fields are checked before any network call so a missing route
        or image never reaches the service.
        """
        try:
            check_required_fields(user)
        except ValidationError as e:
            return VerificationResult(is_valid=False, error=str(e))
        return self._verify_identity(user.token, headers)
