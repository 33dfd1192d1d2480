import logging
from typing import Any, Dict, Optional

import requests

from .config import ClientConfig
from .errors import ApiError, NetworkError
from .normalize import normalize_record
from .session import SessionContext


logger = logging.getLogger(__name__)


class ApiClient:
    """
    Thin JSON transport over ``requests.Session``.

    Adds the bearer token, applies the timeout, normalizes response keys and
    turns failures into ``ApiError``. Any 401 invalidates the session.
    """

    def __init__(self, config: Optional[ClientConfig] = None, session: Optional[SessionContext] = None):
        self.config = config or ClientConfig()
        self.session = session or SessionContext()
        self.http = requests.Session()
        self.http.headers.update({"Accept": "application/json"})

    def url(self, path: str) -> str:
        return f"{self.config.base_url}/{path.lstrip('/')}"

    def _headers(self) -> Dict[str, str]:
        if self.session.token:
            return {"Authorization": f"Bearer {self.session.token}"}
        return {}

    def request(self, method: str, path: str, *, json: Any = None, params=None, files=None) -> Any:
        url = self.url(path)
        try:
            response = self.http.request(
                method,
                url,
                json=json,
                params=params,
                files=files,
                headers=self._headers(),
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise NetworkError(e) from e

        payload = self._decode(response)
        if response.status_code >= 400:
            if response.status_code == 401 and self.session.is_authenticated:
                self.session.invalidate()
            logger.warning(f"{method} {url} -> {response.status_code}")
            raise ApiError(response.status_code, payload)
        return payload

    @staticmethod
    def _decode(response) -> Any:
        if response.status_code == 204 or not response.content:
            return None
        try:
            return normalize_record(response.json())
        except ValueError:
            return None

    def get(self, path: str, params=None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None, files=None) -> Any:
        return self.request("POST", path, json=json, files=files)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def patch(self, path: str, json: Any = None) -> Any:
        return self.request("PATCH", path, json=json)

    def delete(self, path: str, json: Any = None) -> Any:
        return self.request("DELETE", path, json=json)
