# catering/services/functions_client.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol

import requests

from catering.core.logging_config import logger
from catering.core.settings import settings
from catering.errors import FunctionInvocationError
from catering.infra.retry import retry_on
from catering.observability.metrics import function_invocations_total

# Names of the backend functions this service calls
SEND_QUOTE_CONFIRMATION = "send-quote-confirmation"
SEND_INVOICE_EMAIL = "send-custom-invoice-email"
GENERATE_PDF = "generate-pdf-document"
GENERATE_CONTRACT = "generate-contract"


@dataclass(frozen=True)
class FunctionResult:
    function: str
    data: Dict[str, Any] = field(default_factory=dict)
    dev: bool = False
    success: bool = True


class FunctionsClient(Protocol):
    def invoke(self, name: str, payload: Dict[str, Any]) -> FunctionResult: ...


def _is_retryable(e: Exception) -> bool:
    return isinstance(e, (requests.ConnectionError, requests.Timeout))


class BackendFunctionsClient:
    """
    Calls the hosted backend functions (email, pdf, contract generation).

    Without FUNCTIONS_BASE_URL the client runs in dev mode: every call is
    logged and answered with an empty successful result.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        service_key: Optional[str] = None,
        timeout: Optional[float] = None,
        attempts: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url if base_url is not None else settings.FUNCTIONS_BASE_URL or "").rstrip("/")
        self.service_key = service_key if service_key is not None else settings.FUNCTIONS_SERVICE_KEY
        self.timeout = timeout or settings.FUNCTIONS_TIMEOUT_SEC
        self.attempts = attempts or settings.FUNCTIONS_RETRY_ATTEMPTS
        self.session = session or requests.Session()

    @property
    def dev_mode(self) -> bool:
        return not self.base_url

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.service_key:
            headers["Authorization"] = f"Bearer {self.service_key}"
        return headers

    def invoke(self, name: str, payload: Dict[str, Any]) -> FunctionResult:
        if self.dev_mode:
            logger.info("function_invoke_dev", function=name, payload_keys=sorted(payload))
            function_invocations_total.labels(function=name, result="dev").inc()
            return FunctionResult(function=name, data={}, dev=True)

        url = f"{self.base_url}/{name}"

        def _post() -> requests.Response:
            return self.session.post(url, json=payload, headers=self._headers(), timeout=self.timeout)

        try:
            resp = retry_on(_post, attempts=self.attempts, is_retryable=_is_retryable)
        except requests.RequestException as e:
            function_invocations_total.labels(function=name, result="error").inc()
            logger.error("function_invoke_failed", function=name, error=repr(e))
            raise FunctionInvocationError(name, f"request failed: {e}") from e

        if resp.status_code >= 400:
            function_invocations_total.labels(function=name, result="error").inc()
            logger.error("function_invoke_failed", function=name, status_code=resp.status_code)
            raise FunctionInvocationError(name, resp.text[:500], status_code=resp.status_code)

        try:
            body = resp.json() if resp.content else {}
        except ValueError:
            body = {"raw": resp.text}
        if not isinstance(body, dict):
            body = {"result": body}

        if body.get("error"):
            function_invocations_total.labels(function=name, result="error").inc()
            logger.error("function_invoke_failed", function=name, error=body["error"])
            raise FunctionInvocationError(name, str(body["error"]), status_code=resp.status_code)

        function_invocations_total.labels(function=name, result="success").inc()
        logger.info("function_invoked", function=name, status_code=resp.status_code)
        return FunctionResult(function=name, data=body)


def get_functions_client() -> FunctionsClient:
    return BackendFunctionsClient()
