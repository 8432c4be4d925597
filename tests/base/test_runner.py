from timelet.base.runner import CancellationHandle, JoinHandle
from timelet.base.types import RunResult, Termination
from timelet.utils.id_generator import generate_run_id


class StubJoinHandle(JoinHandle):
    def __init__(self, finished: bool = False):
        self.finished = finished

    def done(self) -> bool:
        return self.finished

    def result(self) -> RunResult:
        return RunResult(run_id="stub", reason=Termination.CANCELLED, events_emitted=0)

    def __await__(self):
        if False:
            yield None
        return self.result()


class TestCancellationHandle:
    """Test cases for the unsubscribe token."""

    def test_unsubscribe_cancels_once(self):
        cancels = []
        join = StubJoinHandle()
        handle = CancellationHandle("stub", lambda: cancels.append(1), join)

        assert not handle.cancel_requested
        assert handle.unsubscribe() is join
        assert handle.unsubscribe() is join
        assert handle.unsubscribe() is join

        assert cancels == [1]
        assert handle.cancel_requested

    def test_unsubscribe_after_finish_skips_cancel(self):
        cancels = []
        handle = CancellationHandle("stub", lambda: cancels.append(1), StubJoinHandle(True))

        assert handle.finished
        assert handle.unsubscribe().done()
        assert cancels == []

    def test_properties(self):
        join = StubJoinHandle()
        handle = CancellationHandle("quick-owl-0a0a", lambda: None, join)
        assert handle.run_id == "quick-owl-0a0a"
        assert handle.join is join
        assert not handle.finished


def test_generate_run_id_shape():
    adjective, noun, suffix = generate_run_id().split("-")
    assert adjective and noun
    assert len(suffix) == 4
    int(suffix, 16)
