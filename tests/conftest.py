import json

import httpx
import pytest

from flamedeck_upload.options import UploadOptions


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served along with its body."""

    def __init__(self, status_code=200, body=b'{"id": "abc123"}'):
        self.requests = []
        self.bodies = []
        if isinstance(body, (dict, list)):
            body = json.dumps(body).encode()
        self._status_code = status_code
        self._body = body
        super().__init__(self._handle)

    def _handle(self, request):
        self.bodies.append(request.read())
        self.requests.append(request)
        return httpx.Response(self._status_code, content=self._body)

    @property
    def calls(self):
        return len(self.requests)


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def make_transport():
    return RecordingTransport


@pytest.fixture
def trace_file(tmp_path):
    path = tmp_path / "cpu-profile.json"
    path.write_bytes(b'{"nodes": [], "samples": []}')
    return path


@pytest.fixture
def options(trace_file):
    return UploadOptions(api_key="fd_test_key", scenario="cold start", file_path=str(trace_file))
