"""Thin HugeGraph REST client covering the calls a restore needs."""

import logging
from collections.abc import Sequence
from typing import Any, cast

import msgspec
import requests

from graphvault.config.models import ConnectionStatus
from graphvault.constants import (
    DEFAULT_GRAPH_NAME,
    DEFAULT_TIMEOUT_SECONDS,
    HTTP_REQUEST_TIMEOUT,
    HTTP_SERVER_ERROR_MIN,
    HTTP_TOO_MANY_REQUESTS,
)
from graphvault.exceptions import DeserializationError, RemoteError, TransientRemoteError
from graphvault.graph.models import (
    Edge,
    EdgeLabel,
    IndexLabel,
    PropertyKey,
    Vertex,
    VertexLabel,
)

logger = logging.getLogger(__name__)

_JSON_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}


class SchemaAPI:
    """Schema endpoints: ``/graphs/{graph}/schema/...``."""

    def __init__(self, client: "HugeGraphClient"):
        self._client = client

    def get_vertex_labels(self) -> list[VertexLabel]:
        """Fetch all vertex labels currently defined in the graph."""
        payload = self._client.request("GET", "schema/vertexlabels")
        try:
            return msgspec.convert(payload.get("vertexlabels", []), type=list[VertexLabel])
        except (AttributeError, msgspec.ValidationError) as e:
            raise DeserializationError(f"Unexpected vertex label response: {e}") from e

    def add_property_key(self, property_key: PropertyKey) -> Any:
        return self._client.request("POST", "schema/propertykeys", body=property_key)

    def add_vertex_label(self, vertex_label: VertexLabel) -> Any:
        return self._client.request("POST", "schema/vertexlabels", body=vertex_label)

    def add_edge_label(self, edge_label: EdgeLabel) -> Any:
        return self._client.request("POST", "schema/edgelabels", body=edge_label)

    def add_index_label(self, index_label: IndexLabel) -> Any:
        """Create an index label; the server builds the index asynchronously."""
        return self._client.request("POST", "schema/indexlabels", body=index_label)


class GraphAPI:
    """Graph element endpoints: ``/graphs/{graph}/graph/...``."""

    def __init__(self, client: "HugeGraphClient"):
        self._client = client

    def add_vertices(self, vertices: Sequence[Vertex]) -> list[Any]:
        """Batch-create vertices and return the ids assigned by the server."""
        return self._client.request("POST", "graph/vertices/batch", body=list(vertices))

    def add_edges(self, edges: Sequence[Edge], check_vertex: bool = True) -> list[Any]:
        """Batch-create edges.

        Args:
            edges: Edges to create
            check_vertex: Ask the server to verify both endpoints exist first
        """
        return self._client.request(
            "POST",
            "graph/edges/batch",
            body=list(edges),
            params={"check_vertex": str(check_vertex).lower()},
        )


class HugeGraphClient:
    """HugeGraph REST client with lazy session initialization."""

    def __init__(
        self,
        url: str,
        graph: str = DEFAULT_GRAPH_NAME,
        username: str | None = None,
        password: str | None = None,
        timeout: int = DEFAULT_TIMEOUT_SECONDS,
        verify_ssl: bool = True,
    ):
        """
        Initialize HugeGraph client with configuration.

        Args:
            url: Base URL of the HugeGraph server (e.g. http://localhost:8080)
            graph: Graph name on the server
            username: Optional user for HTTP basic auth
            password: Optional password for HTTP basic auth
            timeout: API request timeout in seconds
            verify_ssl: Whether to verify SSL certificates
        """
        self.url = url.rstrip("/")
        self.graph_name = graph
        self.username = username
        self.password = password
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self._session: requests.Session | None = None
        self._schema = SchemaAPI(self)
        self._graph = GraphAPI(self)

    def _init_session(self) -> None:
        """Create the HTTP session with auth and SSL settings."""
        session = requests.Session()
        session.headers.update(_JSON_HEADERS)
        session.verify = self.verify_ssl
        if self.username:
            session.auth = (self.username, self.password or "")
        self._session = session

    @property
    def session(self) -> requests.Session:
        """
        Lazy-load HTTP session on first access.

        Returns:
            Configured requests.Session
        """
        if self._session is None:
            self._init_session()
        return cast(requests.Session, self._session)

    def schema(self) -> SchemaAPI:
        return self._schema

    def graph(self) -> GraphAPI:
        return self._graph

    def graph_url(self, path: str = "") -> str:
        """Absolute URL for a path under ``/graphs/{graph}``."""
        base = f"{self.url}/graphs/{self.graph_name}"
        return f"{base}/{path}" if path else base

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON response.

        Args:
            method: HTTP method
            path: Path relative to ``/graphs/{graph}``
            body: msgspec-encodable request body (structs, lists of structs)
            params: Optional query string parameters

        Returns:
            Decoded JSON body, or None for an empty response

        Raises:
            TransientRemoteError: Connection failure, timeout, HTTP 408/429/5xx
            RemoteError: Any other non-2xx response
        """
        url = self.graph_url(path)
        data = msgspec.json.encode(body) if body is not None else None

        try:
            response = self.session.request(
                method, url, data=data, params=params, timeout=self.timeout
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            raise TransientRemoteError(f"{method} {url} failed: {e}") from e
        except requests.RequestException as e:
            raise RemoteError(f"{method} {url} failed: {e}") from e

        status = response.status_code
        if status >= 400:
            message = f"{method} {url} failed: {_error_message(response)}"
            if status in (HTTP_REQUEST_TIMEOUT, HTTP_TOO_MANY_REQUESTS) or (
                status >= HTTP_SERVER_ERROR_MIN
            ):
                raise TransientRemoteError(message, status_code=status)
            raise RemoteError(message, status_code=status)

        if not response.content:
            return None
        try:
            return msgspec.json.decode(response.content)
        except msgspec.DecodeError as e:
            raise RemoteError(f"{method} {url} returned invalid JSON: {e}") from e

    def test_connection(self) -> ConnectionStatus:
        """
        Test connection to the graph and return status.

        Returns:
            ConnectionStatus with server info or error message
        """
        try:
            self.request("GET", "")
            versions = self._get_versions()
            return ConnectionStatus(
                connected=True,
                authenticated=True,
                instance_url=self.url,
                graph=self.graph_name,
                server_version=versions.get("version"),
                api_version=versions.get("api"),
            )
        except RemoteError as e:
            error_msg = str(e)
            authenticated = e.status_code not in (401, 403)

            if not authenticated:
                error_msg = "Authentication failed - invalid credentials"
            elif e.status_code == 404:
                error_msg = f"Graph '{self.graph_name}' not found on server"
            elif isinstance(e, TransientRemoteError) and e.status_code is None:
                error_msg = "Cannot reach HugeGraph server - check URL"

            return ConnectionStatus(
                connected=e.status_code is not None,
                authenticated=authenticated and e.status_code is not None,
                instance_url=self.url,
                graph=self.graph_name,
                error_message=error_msg,
            )

    def _get_versions(self) -> dict[str, str]:
        """Fetch server versions from ``/versions``; empty dict if unavailable."""
        try:
            response = self.session.get(f"{self.url}/versions", timeout=self.timeout)
            response.raise_for_status()
            payload = msgspec.json.decode(response.content)
        except (requests.RequestException, msgspec.DecodeError) as e:
            logger.debug(f"Could not read server versions: {e}")
            return {}
        versions = payload.get("versions", {}) if isinstance(payload, dict) else {}
        return versions if isinstance(versions, dict) else {}


def _error_message(response: requests.Response) -> str:
    """Extract the server's error message from a failed response."""
    try:
        payload = response.json()
    except ValueError:
        return response.text[:500] or response.reason or str(response.status_code)
    if isinstance(payload, dict):
        return str(payload.get("message") or payload.get("exception") or payload)
    return str(payload)
