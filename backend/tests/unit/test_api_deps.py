"""Tests for request helpers in :mod:`mediagate.api.deps`."""

from __future__ import annotations

from werkzeug.datastructures import FileStorage

from mediagate.api.deps import incoming_file
from tests.helpers.utils import PNG_BYTES, CountingStream


def test_incoming_file_measures_without_reading():
    stream = CountingStream(PNG_BYTES)
    part = FileStorage(stream=stream, filename="a.png", content_type="image/png")

    upload = incoming_file(part)

    assert upload.filename == "a.png"
    assert upload.content_type == "image/png"
    assert upload.size_bytes == len(PNG_BYTES)
    assert stream.reads == 0
    assert upload.read() == PNG_BYTES


def test_incoming_file_drops_content_type_parameters():
    part = FileStorage(
        stream=CountingStream(PNG_BYTES),
        filename="a.png",
        content_type="image/png; charset=binary",
    )
    assert incoming_file(part).content_type == "image/png"
