import json

import pytest
import requests

from catering.errors import FunctionInvocationError
from catering.services.functions_client import BackendFunctionsClient


def _response(status_code, body):
    resp = requests.Response()
    resp.status_code = status_code
    resp._content = json.dumps(body).encode() if body is not None else b""
    return resp


class StubSession:
    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.requests = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.requests.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _client(session, attempts=3):
    return BackendFunctionsClient(
        base_url="https://fn.example.com/functions/v1/",
        service_key="secret",
        timeout=5,
        attempts=attempts,
        session=session,
    )


def test_dev_mode_without_base_url():
    client = BackendFunctionsClient(base_url="", session=StubSession())
    result = client.invoke("generate-pdf-document", {"quoteId": 1})
    assert client.dev_mode
    assert result.dev is True
    assert result.success is True


def test_posts_json_with_bearer_token():
    session = StubSession(_response(200, {"url": "https://files.example.com/x.pdf"}))
    result = _client(session).invoke("generate-pdf-document", {"quoteId": 3})

    assert result.data == {"url": "https://files.example.com/x.pdf"}
    assert result.dev is False
    sent = session.requests[0]
    assert sent["url"] == "https://fn.example.com/functions/v1/generate-pdf-document"
    assert sent["headers"]["Authorization"] == "Bearer secret"
    assert sent["json"] == {"quoteId": 3}
    assert sent["timeout"] == 5


def test_empty_body_is_ok():
    result = _client(StubSession(_response(204, None))).invoke("send-quote-confirmation", {})
    assert result.data == {}


def test_http_error_raises():
    with pytest.raises(FunctionInvocationError) as exc:
        _client(StubSession(_response(500, {"message": "down"}))).invoke("generate-contract", {})
    assert exc.value.status_code == 500
    assert exc.value.function_name == "generate-contract"


def test_error_body_raises():
    with pytest.raises(FunctionInvocationError):
        _client(StubSession(_response(200, {"error": "template missing"}))).invoke(
            "send-custom-invoice-email", {}
        )


def test_connection_errors_are_retried():
    session = StubSession(requests.ConnectionError("reset"), _response(200, {"ok": True}))
    result = _client(session).invoke("generate-pdf-document", {})
    assert result.data == {"ok": True}
    assert len(session.requests) == 2


def test_gives_up_after_attempts():
    session = StubSession(requests.Timeout("slow"), requests.Timeout("slow"))
    with pytest.raises(FunctionInvocationError):
        _client(session, attempts=2).invoke("generate-pdf-document", {})
    assert len(session.requests) == 2
