"""Company directory API client.

A thin wrapper around the REST API exposed by ``company_directory.app``.
It uses the ``requests`` library internally and mirrors every endpoint
of ``/api/v1``:

* locations and services: list, get, exists, create, update, delete;
* workers: the same operations plus filtering by location or service
  and :meth:`CompanyDirectoryAPI.transfer_workers`.

Every method returns a tuple ``(data, error)``.  On success ``error`` is
``None``; on failure ``data`` is ``None`` (or an empty/false value for
list and boolean calls) and ``error`` is a dictionary with the keys
``status_code`` and ``message``.  The client never raises for HTTP or
network errors.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Optional[Dict[str, Any]]


class CompanyDirectoryAPI:
    """Client for the company directory API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_prefix: str = "/api/v1",
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the client.

        Args:
            base_url: Root URL of the server.  Defaults to the
                ``COMPANY_DIRECTORY_URL`` environment variable or
                ``http://localhost:8000``.
            api_prefix: Path prefix of the versioned API.
            timeout: Timeout in seconds for each HTTP request.
            session: Optional ``requests.Session`` to reuse.
        """
        base_url = base_url or os.getenv("COMPANY_DIRECTORY_URL", "http://localhost:8000")
        self.base_url = base_url.rstrip("/") + api_prefix
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Error]:
        """Perform an HTTP request to the API.

        Returns:
            A tuple ``(data, error)``. ``data`` contains the parsed JSON
            response on success (``None`` for empty bodies) and
            ``error`` is ``None``. On failure, ``data`` is ``None`` and
            ``error`` describes the issue.
        """
        url = f"{self.base_url}{path}"
        if params:
            params = {key: value for key, value in params.items() if value is not None}
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params or None,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------
    def _list(self, resource: str, **params: Any) -> Tuple[Optional[Dict[str, Any]], Error]:
        return self._request("GET", f"/{resource}/", params=params)

    def _get(self, resource: str, entity_id: int, fields: Optional[str]) -> Tuple[Optional[Dict[str, Any]], Error]:
        return self._request("GET", f"/{resource}/{entity_id}", params={"fields": fields})

    def _exists(self, path: str) -> Tuple[bool, Error]:
        data, error = self._request("GET", path)
        if error:
            return False, error
        return bool(data and data.get("exists")), None

    def _write(self, method: str, path: str, payload: Dict[str, Any]) -> Tuple[bool, Error]:
        _, error = self._request(method, path, json_body=payload)
        return error is None, error

    # ------------------------------------------------------------------
    # Locations
    # ------------------------------------------------------------------
    def list_locations(
        self,
        search_term: Optional[str] = None,
        fields: Optional[str] = None,
        page_number: int = 1,
        page_size: Optional[int] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Error]:
        """Return one page of locations as the raw paged envelope."""
        return self._list(
            "locations",
            search_term=search_term,
            fields=fields,
            page_number=page_number,
            page_size=page_size,
        )

    def get_location(self, location_id: int, fields: Optional[str] = None) -> Tuple[Optional[Dict[str, Any]], Error]:
        return self._get("locations", location_id, fields)

    def location_exists(self, city: str) -> Tuple[bool, Error]:
        return self._exists(f"/locations/exists/{requests.utils.quote(city, safe='')}")

    def location_exists_by_id(self, location_id: int) -> Tuple[bool, Error]:
        return self._exists(f"/locations/exists-by-id/{location_id}")

    def create_location(self, city: str) -> Tuple[Optional[Dict[str, Any]], Error]:
        return self._request("POST", "/locations/", json_body={"city": city})

    def update_location(self, location_id: int, city: str) -> Tuple[bool, Error]:
        return self._write("PUT", f"/locations/{location_id}", {"id": location_id, "city": city})

    def delete_location(self, location_id: int) -> Tuple[bool, Error]:
        _, error = self._request("DELETE", f"/locations/{location_id}")
        return error is None, error

    # ------------------------------------------------------------------
    # Services
    # ------------------------------------------------------------------
    def list_services(
        self,
        search_term: Optional[str] = None,
        fields: Optional[str] = None,
        page_number: int = 1,
        page_size: Optional[int] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Error]:
        return self._list(
            "services",
            search_term=search_term,
            fields=fields,
            page_number=page_number,
            page_size=page_size,
        )

    def get_service(self, service_id: int, fields: Optional[str] = None) -> Tuple[Optional[Dict[str, Any]], Error]:
        return self._get("services", service_id, fields)

    def service_exists(self, name: str) -> Tuple[bool, Error]:
        return self._exists(f"/services/exists/{requests.utils.quote(name, safe='')}")

    def service_exists_by_id(self, service_id: int) -> Tuple[bool, Error]:
        return self._exists(f"/services/exists-by-id/{service_id}")

    def create_service(self, name: str) -> Tuple[Optional[Dict[str, Any]], Error]:
        return self._request("POST", "/services/", json_body={"name": name})

    def update_service(self, service_id: int, name: str) -> Tuple[bool, Error]:
        return self._write("PUT", f"/services/{service_id}", {"id": service_id, "name": name})

    def delete_service(self, service_id: int) -> Tuple[bool, Error]:
        _, error = self._request("DELETE", f"/services/{service_id}")
        return error is None, error

    # ------------------------------------------------------------------
    # Workers
    # ------------------------------------------------------------------
    def list_workers(
        self,
        search_term: Optional[str] = None,
        fields: Optional[str] = None,
        page_number: int = 1,
        page_size: Optional[int] = None,
        location_id: Optional[int] = None,
        service_id: Optional[int] = None,
    ) -> Tuple[Optional[Dict[str, Any]], Error]:
        """Return one page of workers, optionally for one location or service."""
        return self._list(
            "workers",
            search_term=search_term,
            fields=fields,
            page_number=page_number,
            page_size=page_size,
            location_id=location_id,
            service_id=service_id,
        )

    def get_worker(self, worker_id: int, fields: Optional[str] = None) -> Tuple[Optional[Dict[str, Any]], Error]:
        return self._get("workers", worker_id, fields)

    def worker_exists(self, email: str) -> Tuple[bool, Error]:
        return self._exists(f"/workers/exists/{requests.utils.quote(email, safe='')}")

    def worker_exists_by_id(self, worker_id: int) -> Tuple[bool, Error]:
        return self._exists(f"/workers/exists-by-id/{worker_id}")

    def create_worker(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Error]:
        """Create a worker.

        ``payload`` holds ``first_name``, ``last_name``, ``email``,
        ``phone_fixed``, ``phone_mobile``, ``location_id`` and
        ``service_id``.
        """
        return self._request("POST", "/workers/", json_body=payload)

    def update_worker(self, worker_id: int, payload: Dict[str, Any]) -> Tuple[bool, Error]:
        return self._write("PUT", f"/workers/{worker_id}", {**payload, "id": worker_id})

    def delete_worker(self, worker_id: int) -> Tuple[bool, Error]:
        _, error = self._request("DELETE", f"/workers/{worker_id}")
        return error is None, error

    def transfer_workers(
        self,
        worker_ids: List[int],
        new_location_id: Optional[int] = None,
        new_service_id: Optional[int] = None,
        allow_partial_transfer: bool = False,
    ) -> Tuple[Optional[Dict[str, Any]], Error]:
        """Move workers to a new location and/or service.

        Returns the transfer summary (``total_workers``,
        ``success_count``, ``failed_count``, ``errors``...).
        """
        payload = {
            "worker_ids": list(worker_ids),
            "new_location_id": new_location_id,
            "new_service_id": new_service_id,
            "allow_partial_transfer": allow_partial_transfer,
        }
        return self._request("POST", "/workers/transfer", json_body=payload)
