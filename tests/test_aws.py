import os
import zipfile

import pytest

from delorean.aws import download_s3_object_to_temp_dir, upload_file_to_s3

SAMPLE = """test: data
array:
- data
- two
first:
  second: stuff
bigger:
- name: step
- name: stuff
  other: 23
"""


class FakeDownloader:
    def __init__(self, content):
        self.content = content
        self.calls = []

    def download(self, *, bucket, key, fileobj):
        self.calls.append((bucket, key))
        return fileobj.write(self.content)


class FailingDownloader:
    def download(self, *, bucket, key, fileobj):
        raise ConnectionError("no route to bucket")


class FakeUploader:
    def __init__(self):
        self.calls = []

    def upload(self, *, bucket, key, body, content_type):
        self.calls.append(
            {"bucket": bucket, "key": key, "body": body, "content_type": content_type}
        )
        return key


def test_download_writes_object_to_temp_file():
    downloader = FakeDownloader(SAMPLE.encode())
    path = download_s3_object_to_temp_dir(downloader, "test", "test/sample.yaml")
    try:
        assert os.path.basename(path) == "test_sample.yaml"
        assert os.path.basename(os.path.dirname(path)).startswith("delorean-s3-")
        with open(path, encoding="utf-8") as handle:
            assert handle.read() == SAMPLE
        assert downloader.calls == [("test", "test/sample.yaml")]
    finally:
        os.remove(path)
        os.rmdir(os.path.dirname(path))


def test_download_error_propagates():
    with pytest.raises(ConnectionError):
        download_s3_object_to_temp_dir(FailingDownloader(), "test", "key")


def test_upload_returns_location(tmp_path):
    (tmp_path / "sample-one.yaml").write_text(SAMPLE, encoding="utf-8")
    uploader = FakeUploader()
    location = upload_file_to_s3(uploader, "test", f"{tmp_path}/", "sample-one.yaml")
    assert location == "sample-one.yaml"
    call = uploader.calls[0]
    assert call["bucket"] == "test"
    assert call["body"] == SAMPLE.encode()
    assert call["content_type"] == "text/plain; charset=utf-8"


def test_upload_detects_zip(tmp_path):
    archive = tmp_path / "results.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("metadata.json", "{}")
    uploader = FakeUploader()
    upload_file_to_s3(uploader, "test", f"{tmp_path}/", "results.zip")
    assert uploader.calls[0]["content_type"] == "application/zip"


def test_upload_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        upload_file_to_s3(FakeUploader(), "test", f"{tmp_path}/", "missing.yaml")