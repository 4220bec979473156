"""
WAAPI client over the Wwise authoring HTTP endpoint.

Calls are POSTed as JSON to http://<host>:<port>/waapi with the body
{"uri": ..., "args": ..., "options": ...}. Wwise answers with the result
object, or with an error payload and a non-2xx status.
"""

from typing import Any, Dict, List, Optional

import requests
from loguru import logger
from requests.exceptions import RequestException

from wwise_linker.core.output import log
from wwise_linker.domain.exceptions import AssetDatabaseConnectionError, QueryError

GET_INFO_URI = "ak.wwise.core.getInfo"
GET_SELECTED_OBJECTS_URI = "ak.wwise.ui.getSelectedObjects"
OBJECT_GET_URI = "ak.wwise.core.object.get"

ORIGINAL_FILE_FIELD = "sound:originalWavFilePath"

SELECTION_FIELDS = ["id", "name", "path"]
DESCENDANT_FIELDS = ["name", "type", "path", ORIGINAL_FILE_FIELD, "id"]


def _error_message(response: requests.Response) -> str:
    """Extract the server-provided message from an error reply."""
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip() or f"HTTP {response.status_code}"

    if isinstance(payload, dict):
        message = payload.get("message")
        if not message and isinstance(payload.get("details"), dict):
            message = payload["details"].get("message")
        if message:
            return str(message)
        if payload.get("uri"):
            return str(payload["uri"])
    return f"HTTP {response.status_code}"


class WaapiClient:
    """Minimal WAAPI client answering the two queries the linker needs."""

    def __init__(self, timeout: float = 10.0, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.host: Optional[str] = None
        self.port: Optional[int] = None
        self._http = session or requests.Session()
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}/waapi"

    def connect(self, host: str, port: int) -> bool:
        """Probe the authoring application and remember the address.

        Returns:
            True if Wwise answered ak.wwise.core.getInfo
        """
        self.host = host
        self.port = port
        self._connected = False
        try:
            info = self._post(GET_INFO_URI)
        except (AssetDatabaseConnectionError, QueryError) as e:
            log(f"WAAPI connection failed: {host}:{port} ({e})", level="warning")
            return False

        self._connected = True
        version = info.get("version", {}).get("displayName", "unknown version")
        log(f"WAAPI connected: {host}:{port} ({version})")
        return True

    def disconnect(self) -> None:
        if self._connected:
            self._connected = False
            log("WAAPI disconnected")

    def call(
        self,
        uri: str,
        args: Optional[Dict[str, Any]] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Call a WAAPI function on the connected instance.

        Raises:
            AssetDatabaseConnectionError: Not connected or transport failure
            QueryError: Wwise returned an error status
        """
        if not self._connected:
            raise AssetDatabaseConnectionError("WAAPI is not connected")
        try:
            return self._post(uri, args, options)
        except AssetDatabaseConnectionError:
            self._connected = False
            raise

    def query_selection(self) -> List[Dict[str, Any]]:
        result = self.call(
            GET_SELECTED_OBJECTS_URI, {}, {"return": SELECTION_FIELDS}
        )
        return [
            {"id": obj.get("id"), "name": obj.get("name"), "path": obj.get("path")}
            for obj in result.get("objects", [])
        ]

    def query_descendants(self, object_id: str) -> List[Dict[str, Any]]:
        args = {
            "from": {"id": [object_id]},
            "transform": [{"select": ["descendants"]}],
        }
        result = self.call(OBJECT_GET_URI, args, {"return": DESCENDANT_FIELDS})
        return [
            {
                "id": obj.get("id"),
                "name": obj.get("name"),
                "type": obj.get("type"),
                "path": obj.get("path"),
                "originalFilePath": obj.get(ORIGINAL_FILE_FIELD),
            }
            for obj in result.get("return", [])
        ]

    def _post(
        self,
        uri: str,
        args: Optional[Dict[str, Any]] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        body = {"uri": uri, "args": args or {}, "options": options or {}}
        logger.debug(f"WAAPI call {uri} args={body['args']} options={body['options']}")
        try:
            response = self._http.post(self.url, json=body, timeout=self.timeout)
        except RequestException as e:
            raise AssetDatabaseConnectionError(
                f"Cannot reach WAAPI at {self.host}:{self.port}: {e}"
            ) from e

        if not response.ok:
            raise QueryError(_error_message(response), uri=uri)

        try:
            payload = response.json()
        except ValueError as e:
            raise QueryError(f"Invalid WAAPI reply for {uri}", uri=uri) from e
        return payload if isinstance(payload, dict) else {}
