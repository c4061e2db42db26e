"""Villa API client.

A thin wrapper around the villa HTTP API built on the ``requests``
library.  Every method returns a tuple ``(data, error)``: on success
``error`` is ``None``; on failure ``data`` is empty and ``error`` is a
dictionary with the keys ``status_code``, ``message`` and ``errors``
(the per‑field messages the server sent, if any).

The client exposes one method per operation:

* :meth:`list_villas` – return every villa.
* :meth:`get_villa` – fetch a single villa by id.
* :meth:`create_villa` – create a villa; the server assigns the id.
* :meth:`update_villa` – replace all fields of a villa.
* :meth:`patch_villa` – partially update a villa, either with an object
  of changed fields or with a JSON Patch operation list.
* :meth:`delete_villa` – delete a villa.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple, Union

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class VillaAPIClient:
    """Client for the villa API.

    ``base_url`` is the server root, e.g. ``http://localhost:8000``;
    ``prefix`` is where the villa routes are mounted.  Pass
    ``prefix="/api/VillaAPI"`` to talk to the legacy routes.
    """

    def __init__(
        self,
        *,
        base_url: str,
        prefix: str = "/api/v1/villas",
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.prefix = "/" + prefix.strip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _url(self, villa_id: Optional[int] = None) -> str:
        if villa_id is None:
            return f"{self.base_url}{self.prefix}/"
        return f"{self.base_url}{self.prefix}/{villa_id}"

    def _request(
        self,
        method: str,
        url: str,
        *,
        json_body: Any | None = None,
        headers: Dict[str, str] | None = None,
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request and split the outcome into ``(data, error)``."""
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            errors = None
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or str(err_json)
                    errors = err_json.get("errors")
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message, "errors": errors}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc), "errors": None}

    # ------------------------------------------------------------------
    # Villa operations
    # ------------------------------------------------------------------
    def list_villas(self) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", self._url())
        if error:
            return [], error
        return data or [], None

    def get_villa(self, villa_id: int) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        return self._request("GET", self._url(villa_id))

    def create_villa(self, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Create a villa.  ``payload`` holds ``name``, ``sqft`` and ``occupancy``."""
        return self._request("POST", self._url(), json_body=payload)

    def update_villa(self, villa_id: int, payload: Dict[str, Any]) -> Tuple[bool, Optional[Error]]:
        """Replace a villa.  The payload id is filled in from ``villa_id`` if absent."""
        body = {"id": villa_id, **payload}
        _, error = self._request("PUT", self._url(villa_id), json_body=body)
        return error is None, error

    def patch_villa(
        self, villa_id: int, changes: Union[Dict[str, Any], List[Dict[str, Any]]]
    ) -> Tuple[bool, Optional[Error]]:
        """Partially update a villa.

        ``changes`` is either a dict of fields to change or a list of
        JSON Patch operations, which is sent as
        ``application/json-patch+json``.
        """
        headers = None
        if isinstance(changes, list):
            headers = {"Content-Type": "application/json-patch+json"}
        _, error = self._request("PATCH", self._url(villa_id), json_body=changes, headers=headers)
        return error is None, error

    def delete_villa(self, villa_id: int) -> Tuple[bool, Optional[Error]]:
        _, error = self._request("DELETE", self._url(villa_id))
        return error is None, error
