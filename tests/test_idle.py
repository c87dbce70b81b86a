import threading
import time

from remotecache.idle import GrpcIdleTimer, IdleTimer


def test_idle_timer():
    tear_down = threading.Event()
    timer = IdleTimer(1.0, tear_down.set)
    timer.start()

    for _ in range(5):
        fired = tear_down.wait(0.5)
        assert not fired, "unexpected timeout"
        timer.reset_timer()

    assert tear_down.wait(2.0), "expected idle timer to trigger"


def test_fires_without_requests():
    tear_down = threading.Event()
    IdleTimer(0.1, tear_down.set, tick=0.05).start()
    assert tear_down.wait(2.0)


def test_reset_moves_last_request_forward():
    timer = IdleTimer(10.0, lambda: None)
    before = timer.last_request
    time.sleep(0.01)
    timer.reset_timer()
    assert timer.last_request > before


def test_interceptor_resets_and_continues():
    timer = IdleTimer(10.0, lambda: None)
    interceptor = GrpcIdleTimer(timer)
    before = timer.last_request
    time.sleep(0.01)
    seen = []

    def continuation(details):
        seen.append(details)
        return "handler"

    result = interceptor.intercept_service(continuation, "details")
    assert result == "handler"
    assert seen == ["details"]
    assert timer.last_request > before