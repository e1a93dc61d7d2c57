"""Shared fixtures: an in-memory GitHub Contents API served through httpx.MockTransport."""

import base64
import hashlib
import json
from dataclasses import dataclass, field

import httpx
import pytest

from gitpix.manager import RepositoryImageClient
from gitpix.preview import PreviewStore
from gitpix.remote.client import ContentsClient
from gitpix.session import Credentials, SessionState

API_URL = "https://api.test"
RAW_HOST = "raw.test"
OWNER = "octo"
REPO = "pics"
TOKEN = "tok-123"

# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


def blob_sha(data: bytes) -> str:
    return hashlib.sha1(b"blob %d\0" % len(data) + data).hexdigest()


@dataclass
class RecordedRequest:
    method: str
    path: str
    body: dict | None
    headers: httpx.Headers


@dataclass
class FakeContentsStore:
    """Just enough of the Contents API for one repository."""

    owner: str = OWNER
    repo: str = REPO
    token: str = TOKEN
    files: dict[str, bytes] = field(default_factory=dict)
    shas: dict[str, str] = field(default_factory=dict)
    requests: list[RecordedRequest] = field(default_factory=list)
    # (method, path) -> status returned once instead of the normal answer
    failures: dict[tuple[str, str], int] = field(default_factory=dict)
    # Paths served like GitHub serves files over 1 MB: no inline content
    oversized: set[str] = field(default_factory=set)

    def add(self, path: str, data: bytes, sha: str | None = None, oversized: bool = False) -> None:
        self.files[path] = data
        self.shas[path] = sha or blob_sha(data)
        if oversized:
            self.oversized.add(path)

    def fail_once(self, method: str, path: str, status: int) -> None:
        self.failures[(method, path)] = status

    def calls(self, method: str, path: str | None = None) -> list[RecordedRequest]:
        return [
            r for r in self.requests
            if r.method == method and (path is None or r.path == path)
        ]

    # --- Payload builders ---

    def _entry(self, path: str) -> dict:
        return {
            "name": path.rsplit("/", 1)[-1],
            "path": path,
            "sha": self.shas[path],
            "size": len(self.files[path]),
            "type": "file",
            "url": f"{API_URL}/repos/{self.owner}/{self.repo}/contents/{path}",
            "html_url": f"https://github.test/{self.owner}/{self.repo}/blob/main/{path}",
            "git_url": f"{API_URL}/repos/{self.owner}/{self.repo}/git/blobs/{self.shas[path]}",
            "download_url": f"https://{RAW_HOST}/{self.owner}/{self.repo}/main/{path}",
        }

    def _dir_entry(self, path: str) -> dict:
        return {
            "name": path.rsplit("/", 1)[-1],
            "path": path,
            "sha": blob_sha(path.encode()),
            "size": 0,
            "type": "dir",
            "download_url": None,
        }

    def _listing(self, folder: str) -> list[dict] | None:
        prefix = f"{folder}/" if folder else ""
        children: dict[str, dict] = {}
        for path in sorted(self.files):
            if not path.startswith(prefix):
                continue
            rest = path[len(prefix):]
            if "/" in rest:
                sub = prefix + rest.split("/", 1)[0]
                children.setdefault(sub, self._dir_entry(sub))
            else:
                children[path] = self._entry(path)
        if folder and not children:
            return None
        return list(children.values())

    # --- Transport ---

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.host == RAW_HOST:
            return self._serve_raw(request)

        body = json.loads(request.content) if request.content else None
        base = f"/repos/{self.owner}/{self.repo}/contents"
        url_path = request.url.path
        path = url_path[len(base):].strip("/") if url_path.startswith(base) else None
        self.requests.append(RecordedRequest(request.method, path or "", body, request.headers))

        if request.headers.get("Authorization") != f"Bearer {self.token}":
            return httpx.Response(401, json={"message": "Bad credentials"})
        if path is None:
            return httpx.Response(404, json={"message": "Not Found"})

        forced = self.failures.pop((request.method, path), None)
        if forced is not None:
            return httpx.Response(forced, json={"message": f"Forced failure {forced}"})

        if request.method == "GET":
            return self._get(path)
        if request.method == "PUT":
            return self._put(path, body or {})
        if request.method == "DELETE":
            return self._delete(path, body or {})
        return httpx.Response(405, json={"message": "Method Not Allowed"})

    def _serve_raw(self, request: httpx.Request) -> httpx.Response:
        prefix = f"/{self.owner}/{self.repo}/main/"
        path = request.url.path[len(prefix):]
        if "Authorization" in request.headers:
            return httpx.Response(400, text="unexpected credentials")
        if path not in self.files:
            return httpx.Response(404, text="404: Not Found")
        return httpx.Response(200, content=self.files[path])

    def _get(self, path: str) -> httpx.Response:
        if path in self.files:
            payload = self._entry(path)
            if path in self.oversized:
                payload["content"] = ""
                payload["encoding"] = "none"
                return httpx.Response(200, json=payload)
            encoded = base64.b64encode(self.files[path]).decode()
            # GitHub wraps base64 content at 60 characters
            payload["content"] = "\n".join(encoded[i:i + 60] for i in range(0, len(encoded), 60)) + "\n"
            payload["encoding"] = "base64"
            return httpx.Response(200, json=payload)
        listing = self._listing(path)
        if listing is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return httpx.Response(200, json=listing)

    def _put(self, path: str, body: dict) -> httpx.Response:
        exists = path in self.files
        if exists and "sha" not in body:
            return httpx.Response(422, json={"message": 'Invalid request.\n\n"sha" wasn\'t supplied.'})
        if exists and body["sha"] != self.shas[path]:
            return httpx.Response(409, json={"message": f"{path} does not match {body['sha']}"})
        data = base64.b64decode(body["content"])
        self.add(path, data)
        return httpx.Response(
            200 if exists else 201,
            json={"content": self._entry(path), "commit": {"sha": "c0ffee", "message": body["message"]}},
        )

    def _delete(self, path: str, body: dict) -> httpx.Response:
        if path not in self.files:
            return httpx.Response(404, json={"message": "Not Found"})
        if body.get("sha") != self.shas[path]:
            return httpx.Response(409, json={"message": f"{path} does not match {body.get('sha')}"})
        del self.files[path]
        del self.shas[path]
        return httpx.Response(200, json={"content": None, "commit": {"sha": "dead", "message": body["message"]}})


@pytest.fixture
def store():
    return FakeContentsStore()


@pytest.fixture
def contents_client(store):
    client = ContentsClient(base_url=API_URL, transport=httpx.MockTransport(store.handler))
    yield client
    client.close()


@pytest.fixture
def creds():
    return Credentials(token=TOKEN, owner=OWNER, repo=REPO, folder="images")


@pytest.fixture
def session(creds):
    return SessionState(credentials=creds)


@pytest.fixture
def preview_dir(tmp_path):
    path = tmp_path / "previews"
    path.mkdir()
    return path


@pytest.fixture
def image_client(contents_client, preview_dir):
    client = RepositoryImageClient(contents_client, PreviewStore(preview_dir))
    yield client
    client.previews.release()


@pytest.fixture
def png_file(tmp_path):
    path = tmp_path / "cat.png"
    path.write_bytes(PNG_BYTES)
    return path
