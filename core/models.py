# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses describe the shape of everything that flows through one
# tool call.  None of them is persisted: each exists only for the duration of
# a single call and is discarded once serialized into the tool result.
#
#   FileSource      →  where the upload bytes come from (path OR inline data)
#   UploadRequest   →  validated arguments of upload_document
#   UploadResult    →  {id, status} returned by upload_document
#   DocumentStatus  →  the seven fields returned by check_status
#   DocumentText    →  the raw transcription returned by get_text
# =============================================================================

import base64
import binascii
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from core.errors import ArgumentError

# Remote processing states after which a document no longer changes.
TERMINAL_STATUSES = frozenset({"processed", "completed", "failed"})

DEFAULT_FILE_NAME = "document"


# -----------------------------------------------------------------------------
# FileSource — tagged union for the `file` argument
# -----------------------------------------------------------------------------
# The `file` argument arrives either as a path string or as an inline object
# {"data": ..., "name": ...}.  parse_file_source() turns the raw argument into
# exactly one of the two variants; everything downstream handles the union.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class PathSource:
    """A file on the local filesystem."""

    path: str

    @property
    def file_name(self) -> str:
        return Path(self.path).name or DEFAULT_FILE_NAME


@dataclass(frozen=True)
class InlineSource:
    """Raw bytes supplied directly by the caller, with a display name."""

    data: bytes
    name: str

    @property
    def file_name(self) -> str:
        return self.name


FileSource = Union[PathSource, InlineSource]


def parse_file_source(value: Any) -> FileSource:
    """Turn the raw `file` tool argument into a PathSource or InlineSource.

    Accepted inline `data` shapes:
      - a list of byte values, e.g. [72, 105]
      - a Node Buffer JSON object, {"type": "Buffer", "data": [72, 105]}
      - a string, UTF-8 encoded (or base64-decoded with "encoding": "base64")
    """
    if isinstance(value, str):
        if not value.strip():
            raise ArgumentError("File is required")
        return PathSource(path=value)

    if isinstance(value, dict):
        name = value.get("name")
        if "data" not in value or value["data"] is None:
            raise ArgumentError("File is required")
        if not isinstance(name, str) or not name:
            raise ArgumentError("File name is required for inline file data")
        return InlineSource(data=_decode_inline_data(value["data"], value.get("encoding")), name=name)

    raise ArgumentError("File is required")


def _decode_inline_data(data: Any, encoding: Optional[str]) -> bytes:
    if isinstance(data, dict) and data.get("type") == "Buffer":
        data = data.get("data")

    if isinstance(data, (bytes, bytearray)):
        return bytes(data)

    if isinstance(data, str):
        if encoding == "base64":
            try:
                return base64.b64decode(data, validate=True)
            except (binascii.Error, ValueError) as exc:
                raise ArgumentError("File data is not valid base64") from exc
        return data.encode("utf-8")

    if isinstance(data, list):
        try:
            return bytes(data)
        except (TypeError, ValueError) as exc:
            raise ArgumentError("File data must be a list of byte values (0-255)") from exc

    raise ArgumentError("File data must be a string or a list of byte values")


def read_source(source: FileSource) -> tuple[str, bytes]:
    """Resolve a FileSource into (file_name, content)."""
    if isinstance(source, InlineSource):
        return source.file_name, source.data

    try:
        content = Path(source.path).read_bytes()
    except OSError as exc:
        raise ArgumentError(f"Unable to read file: {source.path}") from exc
    return source.file_name, content


# -----------------------------------------------------------------------------
# UploadRequest — validated arguments of upload_document
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class UploadRequest:
    """Arguments of upload_document after validation.

    extractor_id and prompt_id are accepted so callers that send them do not
    fail, but they are never transmitted to the remote API.
    """

    source: FileSource
    delete_after: Optional[int] = None
    extractor_id: Optional[str] = None
    prompt_id: Optional[str] = None

    @classmethod
    def from_arguments(
        cls,
        file: Any = None,
        delete_after: Any = None,
        extractor_id: Optional[str] = None,
        prompt_id: Optional[str] = None,
    ) -> "UploadRequest":
        if not file:
            raise ArgumentError("File is required")

        if delete_after is not None:
            # bool is an int subclass; True must not become "1".
            if isinstance(delete_after, bool) or not isinstance(delete_after, int) or delete_after <= 0:
                raise ArgumentError("delete_after must be a positive integer")

        return cls(
            source=parse_file_source(file),
            delete_after=delete_after,
            extractor_id=extractor_id,
            prompt_id=prompt_id,
        )

    def form_fields(self) -> dict[str, str]:
        """Non-file multipart fields sent with the upload."""
        fields = {"action": "transcribe"}
        if self.delete_after is not None:
            fields["delete_after"] = str(self.delete_after)
        return fields


@dataclass
class UploadResult:
    """What upload_document returns: the new document's ID and state."""

    id: str
    status: str


# -----------------------------------------------------------------------------
# DocumentStatus — check_status output
# -----------------------------------------------------------------------------
# Timestamps and status values are passed through exactly as the remote
# service provides them; nothing here is validated locally.
# -----------------------------------------------------------------------------
@dataclass
class DocumentStatus:
    """Processing state of one document on the remote service."""

    id: str
    file_name: Optional[str]
    action: Optional[str]
    page_count: Optional[int]
    status: Optional[str]
    created_at: Optional[str]
    updated_at: Optional[str]

    @classmethod
    def from_response(cls, body: dict) -> "DocumentStatus":
        return cls(
            id=body.get("id"),
            file_name=body.get("file_name"),
            action=body.get("action"),
            page_count=body.get("page_count"),
            status=body.get("status"),
            created_at=body.get("created_at"),
            updated_at=body.get("updated_at"),
        )

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


@dataclass
class DocumentText:
    """Plain-text transcription of a document, exactly as exported."""

    id: str
    text: str
