# =============================================================================
# core/icepanel.py  —  IcePanel REST API Client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Talks to the IcePanel API.  request() is the only place an HTTP call is
#   made; the methods below it are thin, one-call-each wrappers that know
#   the resource paths.
#
# CONTRACT OF request():
#   - Always sends the API-key and JSON headers.
#   - Non-2xx  →  RemoteApiError(status, reason, raw body text).
#   - 2xx      →  parsed JSON (None when the body is empty, e.g. DELETE).
#   - No retries.  A failure is final for that tool call.
#
# PATH LAYOUT:
#   /organizations/{org}/landscapes[/{landscapeId}]
#   /organizations/{org}/technologies
#   /organizations/{org}/teams
#   /catalog/technologies
#   /landscapes/{landscapeId}/versions/{versionId}/model/objects[/{id}]
#   /landscapes/{landscapeId}/versions/{versionId}/model/connections[/{id}]
#   /landscapes/{landscapeId}/versions/{versionId}/domains[/{id}]
#   /landscapes/{landscapeId}/versions/{versionId}/diagrams[/{id}]
# =============================================================================

import json
import logging
from typing import Any, Mapping, Optional

import httpx

from core.config import Settings
from core.errors import RemoteApiError
from core.filters import with_query

logger = logging.getLogger(__name__)

LATEST_VERSION = "latest"

_LOGGED_METHODS = {"POST", "PATCH", "DELETE"}


class IcePanelClient:
    """Synchronous client for the IcePanel API.

    Usage::

        client = IcePanelClient(settings)
        objects = client.get_model_objects(landscape_id, filters={"type": ["system"]})
    """

    def __init__(self, settings: Settings, http_client: Optional[httpx.Client] = None):
        self._settings = settings
        self._client = http_client or httpx.Client(base_url=settings.api_base_url)

    @property
    def organization_id(self) -> str:
        return self._settings.organization_id

    def _default_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Authorization": f"ApiKey {self._settings.api_key}",
        }

    def request(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """Make one authenticated request and return the parsed JSON body.

        Args:
            path: Path relative to the API base URL, query string included.
            method: HTTP verb.
            body: JSON-serialisable request body, if any.
            headers: Extra headers.  They are applied on top of the default
                ones, so they can change a default value but never drop it.

        Raises:
            RemoteApiError: for any non-2xx response.
            httpx.HTTPError: if the request could not be sent at all.
        """
        merged_headers = {**self._default_headers(), **(headers or {})}
        content = json.dumps(body) if body is not None else None

        if method in _LOGGED_METHODS:
            logger.info("Making %s request to %s", method, path)
            if content is not None:
                logger.info("Request body: %s", content)

        response = self._client.request(method, path, content=content, headers=merged_headers)

        if not response.is_success:
            logger.error("API Error (%s): %s", response.status_code, response.text)
            raise RemoteApiError(response.status_code, response.reason_phrase, response.text)

        if method in _LOGGED_METHODS:
            logger.info("Response body: %s", response.text)

        if not response.content:
            return None
        return response.json()

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "IcePanelClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # -------------------------------------------------------------------
    # Landscapes & versions
    # -------------------------------------------------------------------

    def _landscapes_path(self) -> str:
        return f"/organizations/{self.organization_id}/landscapes"

    def get_landscapes(self) -> Any:
        return self.request(self._landscapes_path())

    def get_landscape(self, landscape_id: str) -> Any:
        return self.request(f"{self._landscapes_path()}/{landscape_id}")

    def create_landscape(self, data: dict) -> Any:
        return self.request(self._landscapes_path(), method="POST", body=data)

    def update_landscape(self, landscape_id: str, data: dict) -> Any:
        return self.request(f"{self._landscapes_path()}/{landscape_id}", method="PATCH", body=data)

    def delete_landscape(self, landscape_id: str) -> Any:
        return self.request(f"{self._landscapes_path()}/{landscape_id}", method="DELETE")

    def get_version(self, landscape_id: str, version_id: str = LATEST_VERSION) -> Any:
        return self.request(f"/landscapes/{landscape_id}/versions/{version_id}")

    def create_version(self, landscape_id: str, data: dict) -> Any:
        return self.request(f"/landscapes/{landscape_id}/versions", method="POST", body=data)

    # -------------------------------------------------------------------
    # Technologies & teams
    # -------------------------------------------------------------------

    def get_catalog_technologies(self, filters: Optional[Mapping[str, Any]] = None) -> Any:
        return self.request(with_query("/catalog/technologies", filters))

    def get_organization_technologies(self, filters: Optional[Mapping[str, Any]] = None) -> Any:
        path = f"/organizations/{self.organization_id}/technologies"
        return self.request(with_query(path, filters))

    def create_organization_technology(self, data: dict) -> Any:
        path = f"/organizations/{self.organization_id}/technologies"
        return self.request(path, method="POST", body=data)

    def get_teams(self) -> Any:
        return self.request(f"/organizations/{self.organization_id}/teams")

    # -------------------------------------------------------------------
    # Model objects
    # -------------------------------------------------------------------

    @staticmethod
    def _version_path(landscape_id: str, version_id: str) -> str:
        return f"/landscapes/{landscape_id}/versions/{version_id}"

    def get_model_objects(
        self,
        landscape_id: str,
        version_id: str = LATEST_VERSION,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        path = f"{self._version_path(landscape_id, version_id)}/model/objects"
        return self.request(with_query(path, filters))

    def get_model_object(
        self, landscape_id: str, model_object_id: str, version_id: str = LATEST_VERSION
    ) -> Any:
        path = f"{self._version_path(landscape_id, version_id)}/model/objects/{model_object_id}"
        return self.request(path)

    def create_model_object(
        self, landscape_id: str, data: dict, version_id: str = LATEST_VERSION
    ) -> Any:
        path = f"{self._version_path(landscape_id, version_id)}/model/objects"
        return self.request(path, method="POST", body=data)

    def update_model_object(
        self, landscape_id: str, model_object_id: str, data: dict, version_id: str = LATEST_VERSION
    ) -> Any:
        path = f"{self._version_path(landscape_id, version_id)}/model/objects/{model_object_id}"
        return self.request(path, method="PATCH", body=data)

    def delete_model_object(
        self, landscape_id: str, model_object_id: str, version_id: str = LATEST_VERSION
    ) -> Any:
        path = f"{self._version_path(landscape_id, version_id)}/model/objects/{model_object_id}"
        return self.request(path, method="DELETE")

    # -------------------------------------------------------------------
    # Model connections
    # -------------------------------------------------------------------

    def get_model_connections(
        self,
        landscape_id: str,
        version_id: str = LATEST_VERSION,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        path = f"{self._version_path(landscape_id, version_id)}/model/connections"
        return self.request(with_query(path, filters))

    def get_model_connection(
        self, landscape_id: str, connection_id: str, version_id: str = LATEST_VERSION
    ) -> Any:
        path = f"{self._version_path(landscape_id, version_id)}/model/connections/{connection_id}"
        return self.request(path)

    def create_model_connection(
        self, landscape_id: str, data: dict, version_id: str = LATEST_VERSION
    ) -> Any:
        path = f"{self._version_path(landscape_id, version_id)}/model/connections"
        return self.request(path, method="POST", body=data)

    def update_model_connection(
        self, landscape_id: str, connection_id: str, data: dict, version_id: str = LATEST_VERSION
    ) -> Any:
        path = f"{self._version_path(landscape_id, version_id)}/model/connections/{connection_id}"
        return self.request(path, method="PATCH", body=data)

    def delete_model_connection(
        self, landscape_id: str, connection_id: str, version_id: str = LATEST_VERSION
    ) -> Any:
        path = f"{self._version_path(landscape_id, version_id)}/model/connections/{connection_id}"
        return self.request(path, method="DELETE")

    # -------------------------------------------------------------------
    # Domains
    # -------------------------------------------------------------------

    def create_domain(self, landscape_id: str, data: dict, version_id: str = LATEST_VERSION) -> Any:
        path = f"{self._version_path(landscape_id, version_id)}/domains"
        return self.request(path, method="POST", body=data)

    def update_domain(
        self, landscape_id: str, domain_id: str, data: dict, version_id: str = LATEST_VERSION
    ) -> Any:
        path = f"{self._version_path(landscape_id, version_id)}/domains/{domain_id}"
        return self.request(path, method="PATCH", body=data)

    # -------------------------------------------------------------------
    # Diagrams
    # -------------------------------------------------------------------

    def get_diagrams(self, landscape_id: str, version_id: str = LATEST_VERSION) -> Any:
        return self.request(f"{self._version_path(landscape_id, version_id)}/diagrams")

    def get_diagram(
        self, landscape_id: str, diagram_id: str, version_id: str = LATEST_VERSION
    ) -> Any:
        return self.request(f"{self._version_path(landscape_id, version_id)}/diagrams/{diagram_id}")

    def create_diagram(self, landscape_id: str, data: dict, version_id: str = LATEST_VERSION) -> Any:
        path = f"{self._version_path(landscape_id, version_id)}/diagrams"
        return self.request(path, method="POST", body=data)

    def update_diagram(
        self, landscape_id: str, diagram_id: str, data: dict, version_id: str = LATEST_VERSION
    ) -> Any:
        path = f"{self._version_path(landscape_id, version_id)}/diagrams/{diagram_id}"
        return self.request(path, method="PATCH", body=data)

    def delete_diagram(
        self, landscape_id: str, diagram_id: str, version_id: str = LATEST_VERSION
    ) -> Any:
        path = f"{self._version_path(landscape_id, version_id)}/diagrams/{diagram_id}"
        return self.request(path, method="DELETE")
