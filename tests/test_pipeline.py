import pytest
import requests

from grammar_fixer.errors import REMOTE_ERROR_MESSAGES, RemoteError, RemoteErrorKind, ValidationError
from grammar_fixer.fallback import correct_fallback
from grammar_fixer.ir import AppliedCorrection
from grammar_fixer.pipeline import correct
from grammar_fixer.remote.client import LanguageToolClient, RemoteCorrection


class FakeClient:
    def __init__(self, corrected=None, error=None):
        self.corrected = corrected
        self.error = error
        self.calls = []

    def correct(self, text):
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        change = AppliedCorrection(offset=0, length=1, original=text[:1], replacement=self.corrected[:1])
        return RemoteCorrection(text=self.corrected, changes=[change], matches=[])


def test_remote_success():
    client = FakeClient(corrected="I am here.")
    result = correct("i am here.", client=client)
    assert result.corrected_text == "I am here."
    assert result.used_fallback is False
    assert result.error_message is None
    assert result.error_kind is None
    assert len(result.changes) == 1
    assert client.calls == ["i am here."]


@pytest.mark.parametrize("kind", list(RemoteErrorKind))
def test_remote_failure_uses_fallback(kind):
    text = "i recieve the seperate occured items"
    client = FakeClient(error=RemoteError(kind))
    result = correct(text, client=client)
    assert result.used_fallback is True
    assert result.corrected_text == correct_fallback(text)
    assert result.error_message == REMOTE_ERROR_MESSAGES[kind]
    assert result.error_kind is kind
    assert result.changes == ()
    assert len(client.calls) == 1


@pytest.mark.parametrize("text", ["", "   ", "\n\t", "a" * 5001])
def test_validation_errors(text):
    client = FakeClient(corrected="unused")
    with pytest.raises(ValidationError):
        correct(text, client=client)
    assert client.calls == []


def test_length_boundary_accepted():
    text = "a" * 5000
    result = correct(text, client=FakeClient(corrected=text))
    assert result.corrected_text == text


def test_validation_messages():
    with pytest.raises(ValidationError, match="Please enter some text"):
        correct("  ", client=FakeClient())
    with pytest.raises(ValidationError, match="limit to 5000"):
        correct("a" * 5001, client=FakeClient())


def test_events_on_success_and_failure():
    seen = []
    correct("ok text", client=FakeClient(corrected="Ok text"), on_event=seen.append)
    assert [e.name for e in seen] == ["remote.started", "remote.succeeded"]

    seen.clear()
    correct("ok text", client=FakeClient(error=RemoteError(RemoteErrorKind.TIMEOUT)), on_event=seen.append)
    assert [e.name for e in seen] == ["remote.started", "remote.failed", "fallback.applied"]
    assert seen[1].details["kind"] == "timeout"


def test_failing_listener_does_not_change_result():
    def broken(event):
        raise RuntimeError("listener bug")

    quiet = correct("i like it", client=FakeClient(error=RemoteError(RemoteErrorKind.UNREACHABLE)))
    noisy = correct("i like it", client=FakeClient(error=RemoteError(RemoteErrorKind.UNREACHABLE)), on_event=broken)
    assert noisy == quiet
    assert noisy.corrected_text == "I like it"


def test_network_failure_through_real_client():
    def refuse(url, data=None, timeout=None):
        raise requests.ConnectionError("connection refused")

    text = "me and him goed home"
    result = correct(text, client=LanguageToolClient(transport=refuse))
    assert result.used_fallback is True
    assert result.error_kind is RemoteErrorKind.UNREACHABLE
    assert result.corrected_text == correct_fallback(text)


def test_result_to_dict():
    result = correct("x y", client=FakeClient(error=RemoteError(RemoteErrorKind.SERVICE_UNAVAILABLE)))
    d = result.to_dict()
    assert d["error_kind"] == "service_unavailable"
    assert d["used_fallback"] is True
    assert d["changes"] == []


class RecordingSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.closed = False

    def post(self, url, data=None, timeout=None):
        if self.exc is not None:
            raise self.exc
        return self.response

    def close(self):
        self.closed = True


class OkResponse:
    def raise_for_status(self):
        pass

    def json(self):
        return {"matches": []}


def test_default_client_session_closed_after_fallback(monkeypatch):
    sessions = []

    def make_session():
        sessions.append(RecordingSession(exc=requests.ConnectionError("network down")))
        return sessions[-1]

    monkeypatch.setattr(requests, "Session", make_session)
    result = correct("i am here")
    assert result.used_fallback is True
    assert [s.closed for s in sessions] == [True]


def test_default_client_session_closed_after_success(monkeypatch):
    sessions = []

    def make_session():
        sessions.append(RecordingSession(response=OkResponse()))
        return sessions[-1]

    monkeypatch.setattr(requests, "Session", make_session)
    result = correct("I am here.")
    assert result.used_fallback is False
    assert [s.closed for s in sessions] == [True]


def test_passed_client_is_not_closed():
    class ClosingAwareClient(FakeClient):
        closed = False

        def close(self):
            self.closed = True

    client = ClosingAwareClient(corrected="Fine.")
    correct("fine.", client=client)
    assert client.closed is False
