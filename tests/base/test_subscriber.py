from datetime import datetime

import pytest

from timelet.base.subscriber import Subscriber, as_callback
from timelet.base.types import EmissionContext, Settings


class RecordingSubscriber(Subscriber):
    def __init__(self):
        self.calls = []

    def on_emit(self, now: datetime, context: EmissionContext) -> None:
        self.calls.append((now, context.index))


class TestAsCallback:
    def test_plain_function(self):
        def callback(now, context):
            pass

        assert as_callback(callback) is callback

    def test_subscriber(self):
        """Test that Subscriber objects are bound to on_emit."""
        subscriber = RecordingSubscriber()
        callback = as_callback(subscriber)
        now = datetime(2024, 1, 1, 12, 0, 0)
        callback(now, EmissionContext(index=0, settings=Settings.new(), run_id="r"))
        assert subscriber.calls == [(now, 0)]

    def test_subscriber_is_callable(self):
        subscriber = RecordingSubscriber()
        now = datetime(2024, 1, 1)
        subscriber(now, EmissionContext(index=3, settings=Settings.new(), run_id="r"))
        assert subscriber.calls == [(now, 3)]

    def test_rejects_non_callable(self):
        with pytest.raises(TypeError):
            as_callback(42)
