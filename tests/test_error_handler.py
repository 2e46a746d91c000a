from src.error_handler import ErrorHandler
from src.integrations.clients.real_http.shortdrama import UpstreamFailure
from src.integrations.contracts.shortdrama import FailureReason
from src.integrations.policy.response_wrappers import IntegrationResponseError


def test_handle_upstream_failure_returns_classification():
    eh = ErrorHandler()
    exc = UpstreamFailure(FailureReason.HTTP_ERROR, "Upstream request failed: 503", path="/vod/search", status_code=503)
    out = eh.handle_upstream_failure(exc, context={"operation": "search"})
    assert out["category"] == "HTTP_ERROR"
    assert out["status_code"] == 503
    assert "503" in out["error"]
    assert out["context"] == {"operation": "search"}


def test_classify_other_errors():
    eh = ErrorHandler()
    assert eh.classify(IntegrationResponseError("bad shape")) == "INVALID_RESPONSE"
    assert eh.classify(RuntimeError("boom")) == "UNKNOWN"
