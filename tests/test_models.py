"""Tests for the tool-call data models."""

import base64

import pytest

from core.errors import ArgumentError
from core.models import (
    DocumentStatus,
    InlineSource,
    PathSource,
    UploadRequest,
    parse_file_source,
    read_source,
)


class TestParseFileSource:
    """The `file` argument becomes exactly one variant of the union."""

    def test_string_is_a_path(self):
        source = parse_file_source("/scans/page1.jpg")

        assert source == PathSource(path="/scans/page1.jpg")
        assert source.file_name == "page1.jpg"

    def test_byte_list_is_inline(self):
        source = parse_file_source({"data": [104, 105], "name": "hi.txt"})

        assert source == InlineSource(data=b"hi", name="hi.txt")

    def test_node_buffer_json_is_inline(self):
        source = parse_file_source({"data": {"type": "Buffer", "data": [0, 255]}, "name": "raw.bin"})

        assert source.data == b"\x00\xff"

    def test_string_data_is_utf8_encoded(self):
        source = parse_file_source({"data": "né", "name": "note.txt"})

        assert source.data == "né".encode("utf-8")

    def test_base64_string_data_is_decoded(self):
        payload = b"\x89PNG\r\n\x1a\n"
        source = parse_file_source(
            {"data": base64.b64encode(payload).decode(), "name": "scan.png", "encoding": "base64"}
        )

        assert source.data == payload

    def test_invalid_base64_rejected(self):
        with pytest.raises(ArgumentError, match="base64"):
            parse_file_source({"data": "not base64!!", "name": "scan.png", "encoding": "base64"})

    def test_out_of_range_byte_values_rejected(self):
        with pytest.raises(ArgumentError):
            parse_file_source({"data": [1, 256], "name": "x.bin"})

    def test_inline_without_name_rejected(self):
        with pytest.raises(ArgumentError, match="name"):
            parse_file_source({"data": [1, 2, 3]})

    @pytest.mark.parametrize("value", [None, "", "   ", 42, {"name": "x.png"}])
    def test_missing_file_rejected(self, value):
        with pytest.raises(ArgumentError, match="File is required"):
            parse_file_source(value)


class TestReadSource:
    def test_reads_full_file_content(self, tmp_path):
        path = tmp_path / "letter.pdf"
        content = bytes(range(256)) * 40
        path.write_bytes(content)

        file_name, data = read_source(PathSource(path=str(path)))

        assert file_name == "letter.pdf"
        assert data == content

    def test_inline_bytes_pass_through(self):
        assert read_source(InlineSource(data=b"abc", name="a.png")) == ("a.png", b"abc")

    def test_unreadable_path_is_argument_error(self, tmp_path):
        missing = tmp_path / "nope.png"

        with pytest.raises(ArgumentError, match="Unable to read file"):
            read_source(PathSource(path=str(missing)))

    def test_directory_is_argument_error(self, tmp_path):
        with pytest.raises(ArgumentError):
            read_source(PathSource(path=str(tmp_path)))


class TestUploadRequest:
    def test_form_fields_without_delete_after(self):
        request = UploadRequest.from_arguments(file="a.png")

        assert request.form_fields() == {"action": "transcribe"}

    def test_delete_after_is_decimal_string(self):
        request = UploadRequest.from_arguments(file="a.png", delete_after=3600)

        assert request.form_fields() == {"action": "transcribe", "delete_after": "3600"}

    @pytest.mark.parametrize("value", [0, -5, True, "60", 1.5])
    def test_delete_after_must_be_positive_integer(self, value):
        with pytest.raises(ArgumentError, match="delete_after"):
            UploadRequest.from_arguments(file="a.png", delete_after=value)

    def test_extractor_and_prompt_ids_are_kept_but_not_sent(self):
        request = UploadRequest.from_arguments(file="a.png", extractor_id="ex-1", prompt_id="pr-1")

        assert request.extractor_id == "ex-1"
        assert request.prompt_id == "pr-1"
        assert set(request.form_fields()) == {"action"}


class TestDocumentStatus:
    def test_from_response_copies_fields_verbatim(self):
        body = {
            "id": "doc_1",
            "file_name": "page.jpg",
            "action": "transcribe",
            "page_count": 1,
            "status": "processed",
            "created_at": "2026-01-01T00:00:00Z",
            "updated_at": "2026-01-01T00:00:09Z",
            "thumbnail_url": "https://example.invalid/t.png",
        }

        status = DocumentStatus.from_response(body)

        assert status.id == "doc_1"
        assert status.created_at == "2026-01-01T00:00:00Z"
        assert status.page_count == 1

    def test_missing_fields_become_none(self):
        status = DocumentStatus.from_response({"id": "doc_1", "status": "new"})

        assert status.file_name is None
        assert status.page_count is None

    @pytest.mark.parametrize(
        "value,expected",
        [("new", False), ("processing", False), ("processed", True), ("completed", True), ("failed", True)],
    )
    def test_is_terminal(self, value, expected):
        assert DocumentStatus.from_response({"id": "d", "status": value}).is_terminal is expected
