"""
HTTP client for the Newsdesk REST API.
"""
import time
import logging
from typing import Any, Callable, Dict, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10  # seconds


class ApiError(Exception):
    """A request failed: transport error (status_code None) or non-2xx response."""

    def __init__(self, status_code: Optional[int], message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def __str__(self):
        if self.status_code is None:
            return self.message
        return f"{self.status_code}: {self.message}"


class ApiClient:
    """
    JSON client over a requests session. The session keeps the admin login
    cookie between calls.
    """
    def __init__(self, base_url: str, session: Optional[requests.Session] = None,
                 timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def request(self, method: str, path: str, **kwargs) -> Any:
        """
        Send a request and decode the JSON body.

        Raises:
            ApiError: on connection failures and non-2xx responses
        """
        kwargs.setdefault('timeout', self.timeout)
        try:
            response = self.session.request(method, self.url(path), **kwargs)
        except requests.RequestException as e:
            raise ApiError(None, f"{method} {path} failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.ok:
            message = data.get('error') if isinstance(data, dict) else None
            raise ApiError(response.status_code, message or response.reason or 'Request failed')
        return data

    def get(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        return self.request('GET', path, params=params)

    def post(self, path: str, json: Any = None, files: Optional[Dict[str, Any]] = None) -> Any:
        if files is not None:
            return self.request('POST', path, files=files)
        return self.request('POST', path, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        return self.request('PUT', path, json=json)

    def delete(self, path: str) -> Any:
        return self.request('DELETE', path)

    def login(self, email: str, password: str) -> bool:
        """Sign in through the admin login form; the session keeps the cookie."""
        try:
            response = self.session.request(
                'POST', self.url('/admin/login'),
                data={'email': email, 'password': password},
                allow_redirects=False,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ApiError(None, f"Login failed: {e}") from e

        if response.status_code in (301, 302, 303):
            return True
        logger.warning(f"Login for {email} rejected with status {response.status_code}")
        return False


class AdminContext:
    """
    What every admin view needs from its surroundings: the API client,
    navigation and the clock used for delayed redirects.
    """
    def __init__(self, api: ApiClient, navigate: Optional[Callable[[str], None]] = None,
                 sleep: Callable[[float], None] = time.sleep, redirect_delay: float = 1.5):
        self.api = api
        self._navigate = navigate
        self.sleep = sleep
        self.redirect_delay = redirect_delay
        self.location: Optional[str] = None

    def navigate(self, path: str):
        self.location = path
        if self._navigate:
            self._navigate(path)
        else:
            logger.info(f"Navigate to {path}")
