from unittest import mock

import pytest
import requests

from profiles.notifications import (
    EventKind,
    LoggingEventNotifier,
    UserEvent,
    WebhookEventNotifier,
    build_notifier,
)


def test_event_payload_shape():
    event = UserEvent(kind=EventKind.DELETED, email="ada@example.com")
    payload = event.to_dict()

    assert payload["eventType"] == "DELETED"
    assert payload["email"] == "ada@example.com"
    assert "occurredAt" in payload


def test_webhook_posts_json_with_timeout():
    session = mock.Mock(spec=requests.Session)
    notifier = WebhookEventNotifier("http://events.local/users", timeout=1.5, session=session)

    assert notifier.publish(EventKind.CREATED, "ada@example.com") is True

    session.post.assert_called_once()
    args, kwargs = session.post.call_args
    assert args == ("http://events.local/users",)
    assert kwargs["timeout"] == 1.5
    assert kwargs["json"]["eventType"] == "CREATED"
    assert kwargs["json"]["email"] == "ada@example.com"


@pytest.mark.parametrize(
    "failure",
    [requests.ConnectionError("refused"), requests.Timeout("slow")],
)
def test_webhook_transport_failure_is_swallowed(failure, caplog):
    session = mock.Mock(spec=requests.Session)
    session.post.side_effect = failure
    notifier = WebhookEventNotifier("http://events.local/users", session=session)

    assert notifier.publish(EventKind.DELETED, "ada@example.com") is False
    assert "Failed to publish DELETED event" in caplog.text


def test_webhook_http_error_is_swallowed():
    response = mock.Mock()
    response.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
    session = mock.Mock(spec=requests.Session)
    session.post.return_value = response
    notifier = WebhookEventNotifier("http://events.local/users", session=session)

    assert notifier.publish(EventKind.CREATED, "ada@example.com") is False


def test_logging_notifier_writes_event(caplog):
    caplog.set_level("INFO", logger="profiles.notifications")

    assert LoggingEventNotifier().publish(EventKind.CREATED, "ada@example.com") is True
    assert "User event CREATED: ada@example.com" in caplog.text


def test_build_notifier_selects_sink():
    assert isinstance(build_notifier(""), LoggingEventNotifier)

    webhook = build_notifier("http://events.local/users", timeout=3.0)
    assert isinstance(webhook, WebhookEventNotifier)
    assert webhook.timeout == 3.0
