#!/usr/bin/env python3
"""
Heartbeat Emitter Example

Runs the same heartbeat callback twice: once on a background thread and once
as an asyncio task, stopping each run with its cancellation handle.
"""

import asyncio
import random
import time
from datetime import datetime, timedelta

from timelet import AsyncRunner, EmissionContext, Emitter, Settings, Subscriber
from timelet.logger import LogFormat, LogLevel, setup_default_logging


class HeartbeatSubscriber(Subscriber):
    """Prints a heartbeat with a random jitter reading on each tick"""

    def __init__(self, label: str):
        self.label = label

    def on_emit(self, now: datetime, context: EmissionContext) -> None:
        limit = context.settings.max_events or "∞"
        print(
            f"[{self.label}] beat {context.index + 1}/{limit} at {now:%H:%M:%S.%f} "
            f"jitter={random.uniform(0, 1):.3f}"
        )


def run_threaded():
    settings = Settings.new().set_interval(timedelta(milliseconds=200)).set_max_events(5)
    handle = Emitter().emit_with_settings(settings, HeartbeatSubscriber("thread"))

    # Let the limit end the run by itself
    result = handle.join.join(timeout=5)
    print(f"thread run {result.run_id} finished: {result.reason.value}")


async def run_async():
    emitter = Emitter(runner=AsyncRunner()).setup(Settings.new().set_interval(0.1))
    handle = emitter.emit(HeartbeatSubscriber("async"))

    await asyncio.sleep(0.55)
    result = await handle.unsubscribe()
    print(
        f"async run {result.run_id} finished: {result.reason.value} "
        f"after {result.events_emitted} beats"
    )


def main():
    setup_default_logging(level=LogLevel.INFO, format_type=LogFormat.SIMPLE)
    start = time.monotonic()
    run_threaded()
    asyncio.run(run_async())
    print(f"done in {time.monotonic() - start:.2f}s")


if __name__ == "__main__":
    main()
