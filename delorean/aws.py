"""Moving files to and from S3 buckets."""

import os
import tempfile
from typing import BinaryIO, Protocol


class _S3Downloader(Protocol):
    def download(self, *, bucket: str, key: str, fileobj: BinaryIO) -> int: ...


class _S3Uploader(Protocol):
    def upload(self, *, bucket: str, key: str, body: bytes, content_type: str) -> str: ...


_SIGNATURES = (
    (b"%PDF-", "application/pdf"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"PK\x03\x04", "application/zip"),
    (b"\x1f\x8b\x08", "application/x-gzip"),
)


def _detect_content_type(data: bytes) -> str:
    head = data[:512]
    for signature, content_type in _SIGNATURES:
        if head.startswith(signature):
            return content_type
    try:
        text = head.decode("utf-8")
    except UnicodeDecodeError:
        # the first 512 bytes may end inside a multi-byte character
        try:
            text = head[:-3].decode("utf-8") if len(head) == 512 else None
        except UnicodeDecodeError:
            text = None
    if text is not None and not any(
        ord(ch) < 0x20 and ch not in "\t\n\r\f\x1b" for ch in text
    ):
        return "text/plain; charset=utf-8"
    return "application/octet-stream"


def download_s3_object_to_temp_dir(downloader: _S3Downloader, bucket: str, key: str) -> str:
    """Download object ``key`` of ``bucket`` into a new temporary directory.

    The file is named after the key, with every "/" replaced by "_"; its path
    is returned. ``downloader.download(bucket=, key=, fileobj=)`` does the transfer.
    """
    directory = tempfile.mkdtemp(prefix="delorean-s3-")
    out_path = os.path.join(directory, key.replace("/", "_"))
    with open(out_path, "wb") as out:
        downloader.download(bucket=bucket, key=key, fileobj=out)
    return out_path


def upload_file_to_s3(uploader: _S3Uploader, bucket: str, file_dir: str, file_name: str) -> str:
    """Upload ``file_dir + file_name`` to ``bucket`` under the key ``file_name``.

    Returns the location that ``uploader.upload(bucket=, key=, body=, content_type=)``
    reports for the stored object.
    """
    with open(file_dir + file_name, "rb") as handle:
        content = handle.read()
    return uploader.upload(
        bucket=bucket,
        key=file_name,
        body=content,
        content_type=_detect_content_type(content),
    )