"""Background workers that upload cache entries to a proxy backend."""

from __future__ import annotations

import logging
import queue
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, BinaryIO

_log = logging.getLogger(__name__)

_STOP = object()


@dataclass
class UploadReq:
    """One cache entry waiting to be uploaded."""

    hash: str
    logical_size: int
    size_on_disk: int
    kind: Any
    rc: BinaryIO | None = None


class Uploader(ABC):
    """Something that can upload a cache entry to a backend."""

    @abstractmethod
    def upload_file(self, item: UploadReq) -> None:
        """Upload one item."""


class UploadQueue:
    """A bounded queue of uploads served by a fixed pool of worker threads."""

    def __init__(self, uploader: Uploader, num_uploaders: int, max_queued_uploads: int) -> None:
        self._queue: queue.Queue[Any] = queue.Queue(maxsize=max_queued_uploads)
        self._uploader = uploader
        self._closed = False
        self._lock = threading.Lock()
        self._workers = [
            threading.Thread(target=self._work, name=f"uploader-{n}", daemon=True)
            for n in range(num_uploaders)
        ]
        for worker in self._workers:
            worker.start()

    def _work(self) -> None:
        while True:
            item = self._queue.get()
            if item is _STOP:
                return
            try:
                self._uploader.upload_file(item)
            except Exception:
                _log.exception("Upload of %s failed", item.hash)

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("upload queue is closed")

    def put(self, item: UploadReq, timeout: float | None = None) -> None:
        """Queue an upload, waiting for space if the queue is full."""
        self._check_open()
        self._queue.put(item, timeout=timeout)

    def try_put(self, item: UploadReq) -> bool:
        """Queue an upload if there is room; return whether it was queued."""
        self._check_open()
        try:
            self._queue.put_nowait(item)
        except queue.Full:
            return False
        return True

    def close(self) -> None:
        """Stop accepting uploads, finish the queued ones and stop the workers."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        for _ in self._workers:
            self._queue.put(_STOP)
        for worker in self._workers:
            worker.join()

    def __enter__(self) -> UploadQueue:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def start_uploaders(
    uploader: Uploader, num_uploaders: int, max_queued_uploads: int
) -> UploadQueue | None:
    """Start ``num_uploaders`` workers; return their queue, or None if disabled."""
    if max_queued_uploads <= 0 or num_uploaders <= 0:
        return None
    return UploadQueue(uploader, num_uploaders, max_queued_uploads)