"""
uploader.py

Pushes a single trace file to the Flamedeck ingestion API.

Flow:
- `open_trace_input` resolves the file name and body (file path or stdin)
- `build_query_params` / `build_upload_url` turn the options into the upload URL
- `send_trace` POSTs the body with the API key as a bearer token
- `classify_response` maps the status and body to a trace id or an error
- `upload_trace` runs the steps above in order
"""

import json
import os
import sys
from collections import namedtuple
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import httpx

from .errors import (
    ApiError,
    ApiErrorUnparseable,
    EmptyInputError,
    InvalidMetadataError,
    MalformedSuccessResponseError,
    MissingFileNameError,
    NameResolutionError,
    NotFoundError,
    RequestConstructionError,
    TransportError,
    UploadError,
)
from .options import UploadOptions, UploadResult

DEFAULT_API_URL = "https://jczffinsulwdzhgzggcj.supabase.co/functions/v1"
DEFAULT_APP_URL = "https://www.flamedeck.com"
UPLOAD_ENDPOINT = "api-upload-trace"
CHUNK_SIZE = 64 * 1024

# body is either bytes (stdin) or a generator of chunks (file)
TraceInput = namedtuple("TraceInput", ["file_name", "body", "size"])


def _quiet(message: str) -> None:
    pass


def _file_name_from_path(file_path: str) -> Optional[str]:
    name = Path(file_path).name
    if name in ("", ".", ".."):
        return None
    return name


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def _iter_chunks(f, chunk_size: int):
    while True:
        chunk = f.read(chunk_size)
        if not chunk:
            return
        yield chunk


@contextmanager
def open_trace_input(options: UploadOptions, stdin=None, report=_quiet):
    """
    Resolve where the trace comes from and yield a TraceInput.

    Files are streamed in chunks and the handle stays open until the
    context exits. stdin is read fully into memory.
    """
    if options.file_path:
        if not os.path.exists(options.file_path):
            raise NotFoundError(f"File not found at {options.file_path}")
        file_name = options.file_name or _file_name_from_path(options.file_path)
        if not file_name:
            raise NameResolutionError("Could not determine filename from path.")
        report(f"Reading trace from: {options.file_path}")
        try:
            f = open(options.file_path, "rb")
        except OSError as exc:
            raise UploadError(f"Failed to open file: {exc}") from exc
        with f:
            size = os.fstat(f.fileno()).st_size
            report(f"Trace size: {size} bytes")
            yield TraceInput(file_name, _iter_chunks(f, CHUNK_SIZE), size)
        return

    if not options.file_name:
        raise MissingFileNameError("--file-name is required when reading from stdin.")
    if stdin is None:
        stdin = sys.stdin.buffer
    report("Reading trace from stdin...")
    try:
        data = stdin.read()
    except OSError as exc:
        raise UploadError(f"Failed to read from stdin: {exc}") from exc
    if not data:
        raise EmptyInputError("Input trace data from stdin is empty.")
    report(f"Trace size: {len(data)} bytes")
    yield TraceInput(options.file_name, data, len(data))


def build_query_params(file_name: str, options: UploadOptions) -> list:
    """Return the ordered (key, value) query pairs for an upload."""
    params = [("fileName", file_name), ("scenario", options.scenario)]
    if options.commit_sha is not None:
        params.append(("commitSha", options.commit_sha))
    if options.branch is not None:
        params.append(("branch", options.branch))
    if options.notes is not None:
        params.append(("notes", options.notes))
    if options.folder_id is not None:
        params.append(("folderId", options.folder_id))
    if options.metadata is not None:
        # only syntax is checked here, the API validates the content
        try:
            json.loads(options.metadata, parse_constant=_reject_constant)
        except ValueError as exc:
            raise InvalidMetadataError(f"--metadata must be a valid JSON string ({exc})") from exc
        params.append(("metadata", options.metadata))
    if options.public:
        params.append(("public", "true"))
    return params


def build_upload_url(params: list, api_url: Optional[str] = None) -> httpx.URL:
    base = (api_url or DEFAULT_API_URL).rstrip("/")
    try:
        url = httpx.URL(f"{base}/{UPLOAD_ENDPOINT}", params=params)
    except httpx.InvalidURL as exc:
        raise RequestConstructionError(f"Failed to construct request URL: {exc}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise RequestConstructionError(f"Failed to construct request URL from base {base!r}")
    return url


def send_trace(url: httpx.URL, trace_input: TraceInput, api_key: str, transport=None):
    """POST the trace body once and return (status_code, body_bytes)."""
    if any(c in api_key for c in "\r\n\0"):
        raise RequestConstructionError("API key contains invalid characters")
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/octet-stream",
    }
    with httpx.Client(transport=transport, timeout=None) as client:
        try:
            request = client.build_request("POST", url, headers=headers, content=trace_input.body)
        except UnicodeEncodeError as exc:
            raise RequestConstructionError(f"Failed to build request headers: {exc}") from exc
        try:
            response = client.send(request)
        except httpx.RequestError as exc:
            raise TransportError(f"HTTP request failed: {exc}") from exc
        except OSError as exc:
            raise TransportError(f"IO error reading file: {exc}") from exc
        return response.status_code, response.content


def classify_response(status_code: int, body: bytes) -> str:
    """Return the trace id from a successful response, raise otherwise."""
    text = body.decode("utf-8", errors="replace")
    try:
        payload = json.loads(body)
    except (ValueError, RecursionError):
        payload = None

    if 200 <= status_code < 300:
        trace_id = payload.get("id") if isinstance(payload, dict) else None
        if not isinstance(trace_id, str) or not trace_id:
            raise MalformedSuccessResponseError(
                f"Failed to parse successful API response JSON (status: {status_code}). Body: {text}",
                status_code,
                text,
            )
        return trace_id

    if isinstance(payload, dict) and isinstance(payload.get("error"), str):
        raise ApiError(payload["error"], status_code, payload.get("issues"))
    raise ApiErrorUnparseable(status_code, text)


def view_url_for(trace_id: str, app_url: str = DEFAULT_APP_URL) -> str:
    return f"{app_url.rstrip('/')}/traces/{trace_id}/view"


def upload_trace(options: UploadOptions, stdin=None, transport=None, report=None) -> UploadResult:
    """
    Upload one trace and return its id and viewer URL.

    `stdin` defaults to the process's binary stdin, `transport` to httpx's
    network transport. `report` receives progress messages.
    """
    report = report or _quiet
    if not options.api_key:
        raise RequestConstructionError("API key is required")

    with open_trace_input(options, stdin=stdin, report=report) as trace_input:
        params = build_query_params(trace_input.file_name, options)
        url = build_upload_url(params, options.api_url)
        report(f"Uploading trace '{trace_input.file_name}' (Scenario: {options.scenario})...")
        status_code, body = send_trace(url, trace_input, options.api_key, transport=transport)

    trace_id = classify_response(status_code, body)
    return UploadResult(trace_id=trace_id, view_url=view_url_for(trace_id))
