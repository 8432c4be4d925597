from datetime import timedelta

import pytest
from pydantic import ValidationError

from timelet.base.errors import InvalidEventLimit, InvalidInterval, TimeletError
from timelet.base.types import DEFAULT_INTERVAL, EmissionContext, Settings, to_interval


class TestSettings:
    """Test cases for the Settings builder."""

    def test_defaults(self):
        """Test that new() gives a one second interval and no event limit."""
        settings = Settings.new()
        assert settings.interval == DEFAULT_INTERVAL == timedelta(seconds=1)
        assert settings.max_events is None
        assert settings.interval_seconds == 1.0

    def test_chaining(self):
        """Test builder-style chaining of setters."""
        settings = Settings.new().set_max_events(3).set_interval(timedelta(milliseconds=10))
        assert settings.max_events == 3
        assert settings.interval == timedelta(milliseconds=10)

    def test_interval_in_seconds(self):
        """Test that plain numbers are read as seconds."""
        assert Settings.new().set_interval(0.25).interval == timedelta(milliseconds=250)
        assert Settings.new().set_interval(2).interval == timedelta(seconds=2)

    def test_clear_max_events(self):
        settings = Settings.new().set_max_events(10).clear_max_events()
        assert settings.max_events is None

    def test_setters_return_new_instances(self):
        """Test that setters leave the receiver untouched."""
        base = Settings.new()
        changed = base.set_max_events(5)
        assert base.max_events is None
        assert changed.max_events == 5
        assert changed is not base

    def test_frozen(self):
        """Test that settings cannot be mutated in place."""
        settings = Settings.new()
        with pytest.raises(ValidationError):
            settings.max_events = 3

    @pytest.mark.parametrize(
        "interval", [timedelta(milliseconds=-1), timedelta(0), 0, -5, -0.001]
    )
    def test_non_positive_interval_rejected(self, interval):
        """Test that non-positive intervals fail fast and keep the prior value."""
        settings = Settings.new().set_interval(timedelta(milliseconds=20))
        with pytest.raises(InvalidInterval):
            settings.set_interval(interval)
        assert settings.interval == timedelta(milliseconds=20)

    @pytest.mark.parametrize("interval", ["10ms", None, True, float("nan"), float("inf")])
    def test_non_duration_interval_rejected(self, interval):
        with pytest.raises(InvalidInterval):
            Settings.new().set_interval(interval)

    def test_zero_event_limit_rejected(self):
        """Test that an emitter configured for zero events is refused."""
        with pytest.raises(InvalidEventLimit):
            Settings.new().set_max_events(0)

    @pytest.mark.parametrize("max_events", [-1, 2.5, "3", True])
    def test_invalid_event_limit_rejected(self, max_events):
        with pytest.raises(InvalidEventLimit):
            Settings.new().set_max_events(max_events)

    def test_errors_are_value_errors(self):
        """Test the error hierarchy used by callers."""
        with pytest.raises(ValueError):
            Settings.new().set_max_events(0)
        with pytest.raises(TimeletError):
            Settings.new().set_interval(-1)

    def test_constructor_validates(self):
        """Test that direct construction applies the same constraints."""
        with pytest.raises(ValidationError):
            Settings(interval=timedelta(0))
        with pytest.raises(ValidationError):
            Settings(max_events=0)

    def test_from_dict(self):
        settings = Settings.from_dict({"interval_ms": 500, "max_events": 10})
        assert settings.interval == timedelta(milliseconds=500)
        assert settings.max_events == 10

    def test_from_dict_seconds_and_defaults(self):
        assert Settings.from_dict({"interval": 2}).interval == timedelta(seconds=2)
        assert Settings.from_dict({}) == Settings.new()

    def test_from_dict_invalid(self):
        with pytest.raises(InvalidInterval):
            Settings.from_dict({"interval_ms": -10})
        with pytest.raises(InvalidInterval):
            Settings.from_dict({"interval_ms": float("nan")})
        with pytest.raises(InvalidEventLimit):
            Settings.from_dict({"max_events": 0})

    def test_to_interval(self):
        assert to_interval(timedelta(seconds=3)) == timedelta(seconds=3)
        assert to_interval(0.5) == timedelta(milliseconds=500)


class TestEmissionContext:
    def test_fields(self):
        settings = Settings.new().set_max_events(2)
        context = EmissionContext(index=1, settings=settings, run_id="calm-tide-0000")
        assert context.index == 1
        assert context.settings == settings
        assert context.run_id == "calm-tide-0000"

    def test_frozen(self):
        context = EmissionContext(index=0, settings=Settings.new(), run_id="x")
        with pytest.raises(ValidationError):
            context.index = 5
