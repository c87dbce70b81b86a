"""Shut-down-when-idle support: a timer that fires after a quiet period."""

from __future__ import annotations

import threading
import time
from typing import Any, Callable

import grpc


class IdleTimer:
    """Calls ``notify`` once no request has been seen for ``timeout`` seconds."""

    def __init__(self, timeout: float, notify: Callable[[], Any], tick: float = 1.0) -> None:
        self._timeout = timeout
        self._notify = notify
        self._tick = tick
        self._lock = threading.Lock()
        self._last_request = time.monotonic()

    @property
    def last_request(self) -> float:
        """Monotonic time of the most recent request."""
        with self._lock:
            return self._last_request

    def start(self) -> None:
        """Begin watching for idleness in the background and return at once."""
        threading.Thread(target=self._run, name="idle-timer", daemon=True).start()

    def _run(self) -> None:
        next_tick = time.monotonic()
        while True:
            next_tick += self._tick
            time.sleep(max(0.0, next_tick - time.monotonic()))
            now = time.monotonic()
            with self._lock:
                elapsed = now - self._last_request
            if elapsed > self._timeout:
                self._notify()
                return

    def reset_timer(self) -> None:
        """Restart the countdown; call at the start of every request."""
        now = time.monotonic()
        with self._lock:
            self._last_request = now


class GrpcIdleTimer(grpc.ServerInterceptor):
    """A gRPC server interceptor that resets an idle timer on every call."""

    def __init__(self, idle_timer: IdleTimer) -> None:
        self._idle_timer = idle_timer

    def intercept_service(self, continuation, handler_call_details):
        self._idle_timer.reset_timer()
        return continuation(handler_call_details)