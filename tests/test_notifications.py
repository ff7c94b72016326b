"""Tests for notification sinks"""
import logging
import pytest
from unittest.mock import Mock

from cartstore import CallbackNotificationSink, LoggingNotificationSink, NotificationSink


def test_callback_sink_forwards_message():
    callback = Mock()

    CallbackNotificationSink(callback).notify("Could not add the product")

    callback.assert_called_once_with("Could not add the product")


def test_callback_failure_is_not_raised(caplog):
    sink = CallbackNotificationSink(Mock(side_effect=RuntimeError("toast widget gone")))

    with caplog.at_level(logging.ERROR, logger="cartstore.notifications"):
        sink.notify("Could not add the product")

    assert "Failed to deliver cart notification" in caplog.text


def test_logging_sink_writes_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="cartstore.notifications"):
        LoggingNotificationSink().notify("Requested quantity is out of stock")

    assert "Requested quantity is out of stock" in caplog.text


def test_base_sink_cannot_be_instantiated():
    with pytest.raises(TypeError):
        NotificationSink()
