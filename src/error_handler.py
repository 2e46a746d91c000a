"""Error handling helpers for upstream-proxying routes."""
from typing import Any, Dict
import logging

from src.integrations.clients.real_http.shortdrama import UpstreamFailure
from src.integrations.policy.response_wrappers import IntegrationResponseError

logger = logging.getLogger(__name__)

# Exceptions that mean "the upstream is unavailable or misbehaving" and are
# masked with a fallback payload. Anything else is a bug and propagates.
UPSTREAM_ERRORS = (UpstreamFailure, IntegrationResponseError)


class ErrorHandler:
    def classify(self, exc: Exception) -> str:
        if isinstance(exc, UpstreamFailure):
            return exc.reason.value
        if isinstance(exc, IntegrationResponseError):
            return "INVALID_RESPONSE"
        return "UNKNOWN"

    def handle_upstream_failure(self, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        category = self.classify(exc)
        status_code = getattr(exc, "status_code", None)
        logger.error(
            "Upstream call failed, serving fallback: operation=%s category=%s status=%s error=%s",
            (context or {}).get("operation"),
            category,
            status_code,
            exc,
        )
        return {
            "category": category,
            "status_code": status_code,
            "error": str(exc),
            "context": context or {},
        }
