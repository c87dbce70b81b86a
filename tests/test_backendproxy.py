import threading

import pytest

from remotecache.backendproxy import UploadReq, Uploader, start_uploaders


class RecordingUploader(Uploader):
    def __init__(self):
        self.hashes = []
        self._lock = threading.Lock()

    def upload_file(self, item):
        with self._lock:
            self.hashes.append(item.hash)


class BlockingUploader(Uploader):
    def __init__(self):
        self.started = threading.Event()
        self.release = threading.Event()
        self.hashes = []

    def upload_file(self, item):
        self.started.set()
        self.release.wait(5)
        self.hashes.append(item.hash)


def _req(name):
    return UploadReq(hash=name, logical_size=1, size_on_disk=1, kind="cas")


@pytest.mark.parametrize("workers,queued", [(0, 10), (3, 0), (-1, 5), (2, -1)])
def test_disabled_returns_none(workers, queued):
    assert start_uploaders(RecordingUploader(), workers, queued) is None


def test_all_items_uploaded():
    uploader = RecordingUploader()
    names = [f"h{n}" for n in range(20)]
    with start_uploaders(uploader, 3, 10) as uploads:
        for name in names:
            uploads.put(_req(name))
    assert sorted(uploader.hashes) == sorted(names)


def test_try_put_when_full():
    uploader = BlockingUploader()
    uploads = start_uploaders(uploader, 1, 1)
    uploads.put(_req("a"))
    assert uploader.started.wait(5)
    assert uploads.try_put(_req("b")) is True
    assert uploads.try_put(_req("c")) is False
    uploader.release.set()
    uploads.close()
    assert uploader.hashes == ["a", "b"]


def test_put_after_close_raises():
    uploads = start_uploaders(RecordingUploader(), 1, 1)
    uploads.close()
    with pytest.raises(RuntimeError):
        uploads.put(_req("x"))


def test_failing_upload_does_not_stop_worker():
    class Flaky(RecordingUploader):
        def upload_file(self, item):
            if item.hash == "bad":
                raise OSError("backend down")
            super().upload_file(item)

    uploader = Flaky()
    with start_uploaders(uploader, 1, 5) as uploads:
        uploads.put(_req("bad"))
        uploads.put(_req("good"))
    assert uploader.hashes == ["good"]