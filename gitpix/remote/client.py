"""GitHub Contents API client."""

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError as SchemaError

from gitpix import __version__
from gitpix.session import Credentials

from .exceptions import ApiError, FetchError, FormatError, NotFoundError
from .models import RemoteFileEntry, ShaProbe, WriteResponse

logger = logging.getLogger(__name__)

API_URL = "https://api.github.com"
ACCEPT = "application/vnd.github.v3+json"
USER_AGENT = f"gitpix/{__version__}"


class ContentsClient:
    """Thin wrapper over the per-path Contents endpoints.

    Every call is attempted exactly once. HTTP outcomes are mapped onto the
    exception types in :mod:`gitpix.remote.exceptions`; transport failures are
    raised as :class:`FetchError`.
    """

    def __init__(
        self,
        base_url: str | None = None,
        transport: httpx.BaseTransport | None = None,
        timeout: float | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API root (defaults to api.github.com)
            transport: Optional httpx transport, used by tests to serve a fake store
            timeout: Request timeout in seconds, None waits indefinitely
        """
        self.base_url = (base_url or API_URL).rstrip("/")
        self._http = httpx.Client(
            transport=transport,
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
        )
        logger.info("Contents client ready, base_url=%s", self.base_url)

    def close(self) -> None:
        self._http.close()

    # --- Internal ---

    def _url(self, creds: Credentials, path: str) -> str:
        return f"{self.base_url}/repos/{creds.owner}/{creds.repo}/contents/{quote(path, safe='/')}"

    @staticmethod
    def _auth_headers(creds: Credentials) -> dict[str, str]:
        return {"Authorization": f"Bearer {creds.token}", "Accept": ACCEPT}

    def _request(self, method: str, creds: Credentials, path: str, **kwargs: Any) -> httpx.Response:
        url = self._url(creds, path)
        logger.debug("Request: %s %s", method, url)
        try:
            response = self._http.request(method, url, headers=self._auth_headers(creds), **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Request failed: %s %s: %s", method, url, exc)
            raise FetchError(f"Network error: {exc}") from exc
        logger.debug("Response: %s %s (status=%d)", method, path or "/", response.status_code)
        return response

    # --- Operations ---

    def list_directory(self, creds: Credentials) -> list[RemoteFileEntry]:
        """
        List the configured folder (the repository root when the folder is empty).

        Returns:
            Every entry of the directory, files and subdirectories alike
        """
        logger.info("Listing %s/%s folder=%r", creds.owner, creds.repo, creds.folder)
        response = self._request("GET", creds, creds.folder)
        if response.status_code == 404:
            raise NotFoundError(
                "Repository or folder not found. Check your credentials and folder path.",
                status=404,
            )
        if not response.is_success:
            raise ApiError(f"GitHub API error: {response.status_code}", status=response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise FormatError("Invalid response format from GitHub API") from exc
        if not isinstance(data, list):
            raise FormatError("Invalid response format from GitHub API")

        logger.debug("Directory listing: %d items", len(data))
        try:
            return [RemoteFileEntry(**item) for item in data]
        except (SchemaError, TypeError) as exc:
            raise FormatError("Invalid response format from GitHub API") from exc

    def get_file(
        self, creds: Credentials, path: str, error_message: str = "Failed to fetch file"
    ) -> RemoteFileEntry:
        """Fetch a single file's metadata, including its base64 content and sha."""
        logger.info("Fetching file: %s/%s path=%s", creds.owner, creds.repo, path)
        response = self._request("GET", creds, path)
        if not response.is_success:
            raise FetchError(error_message, status=response.status_code)
        try:
            data = response.json()
            if not isinstance(data, dict):
                raise FormatError(f"Path is not a file: {path}")
            return RemoteFileEntry(**data)
        except (ValueError, SchemaError) as exc:
            raise FormatError("Invalid response format from GitHub API") from exc

    def probe_sha(self, creds: Credentials, path: str) -> ShaProbe:
        """Look up the current sha of ``path``. Never raises."""
        try:
            response = self._request("GET", creds, path)
        except FetchError as exc:
            logger.warning("Sha probe failed for %s: %s", path, exc)
            return ShaProbe(error=str(exc))

        if response.status_code == 404:
            logger.debug("No existing file at %s", path)
            return ShaProbe()
        if not response.is_success:
            logger.warning("Sha probe for %s returned status %d", path, response.status_code)
            return ShaProbe(error=f"GitHub API error: {response.status_code}")

        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict) or not data.get("sha"):
            logger.warning("Sha probe for %s returned no sha", path)
            return ShaProbe(error="Invalid response format from GitHub API")
        return ShaProbe(sha=data["sha"])

    def put_file(
        self,
        creds: Credentials,
        path: str,
        content: str,
        message: str,
        sha: str | None = None,
    ) -> WriteResponse:
        """
        Create or update a file.

        Args:
            creds: Session credentials
            path: Target path in the repository
            content: Base64-encoded file content
            message: Commit message
            sha: Current blob sha, required when the file already exists

        Returns:
            WriteResponse with the new content entry and commit
        """
        body: dict[str, str] = {"message": message, "content": content}
        if sha:
            body["sha"] = sha
        logger.info("Writing %s (update=%s)", path, bool(sha))
        response = self._request("PUT", creds, path, json=body)
        if not response.is_success:
            try:
                api_message = response.json().get("message")
            except (ValueError, AttributeError):
                api_message = None
            raise ApiError(
                api_message or f"GitHub API error: {response.status_code}",
                status=response.status_code,
            )
        try:
            return WriteResponse(**response.json())
        except (ValueError, SchemaError) as exc:
            raise FormatError("Invalid response format from GitHub API") from exc

    def delete_file(self, creds: Credentials, path: str, sha: str, message: str) -> None:
        """Delete a file; ``sha`` must match the file's current blob sha."""
        logger.info("Deleting %s", path)
        response = self._request("DELETE", creds, path, json={"message": message, "sha": sha})
        if not response.is_success:
            raise ApiError("GitHub API rejected the delete request", status=response.status_code)

    def download(self, url: str) -> bytes:
        """Fetch raw bytes from a download URL without credentials."""
        logger.debug("Downloading: %s", url)
        try:
            response = self._http.get(url)
        except httpx.HTTPError as exc:
            logger.error("Download failed: %s: %s", url, exc)
            raise FetchError("Failed to fetch image") from exc
        if not response.is_success:
            raise FetchError("Failed to fetch image", status=response.status_code)
        logger.debug("Downloaded %s (%d bytes)", url, len(response.content))
        return response.content
