import logging
from typing import Any, Mapping, Optional, Union

import certifi  # Provides Mozilla's CA bundle for SSL certificate verification
import requests
import urllib3
from pydantic import SecretStr
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from concept_insights.exceptions import ServiceError, error_from_response
from concept_insights.settings import Settings, get_settings

logger = logging.getLogger(__name__)

JSON = "application/json"
TEXT_PLAIN = "text/plain"


class APIClient:
    def __init__(self,
                settings: Optional[Settings] = None,
                username: Optional[str] = None,
                password: Union[str, SecretStr, None] = None,
                api_base_url: Optional[str] = None,
                status_forcelist: tuple = (429, 502, 503, 504)):
        """
        Initializes a requests.Session with:
            - Basic auth credentials (explicit arguments win over settings)
            - JSON accept header and user agent
            - HTTPAdapter whose retry policy comes from settings (no retries by default)
        """
        self.settings: Settings = settings or get_settings()
        self.api_base_url: str = str(api_base_url or self.settings.api_base_url).rstrip("/")
        self.timeout: float = self.settings.timeout_seconds
        self.session = requests.Session()

        if self.settings.verify_ssl:
            self.verify: Union[bool, str] = certifi.where()
        else:
            self.verify = False
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

        # Configure retries
        total_retries = self.settings.total_retries
        retry_strategy = Retry(
            total=total_retries,
            connect=total_retries,
            read=total_retries,
            backoff_factor=self.settings.backoff_factor,
            status_forcelist=status_forcelist,
            allowed_methods=frozenset(["GET"]),
            raise_on_status=False
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

        # Default headers
        self.session.headers.update({
            "Accept": JSON,
            "User-Agent": self.settings.user_agent,
        })

        username = username or self.settings.username
        password = password or self.settings.password
        if isinstance(password, SecretStr):
            password = password.get_secret_value()
        if username and password:
            self.session.auth = (username, password)
        else:
            logger.warning("No credentials configured, requests will be sent unauthenticated")

    def close(self) -> None:
        self.session.close()

    def url_for(self, path: str) -> str:
        return f"{self.api_base_url}/{path.lstrip('/')}"

    def build_request(self,
                      method: str,
                      path: str,
                      params: Optional[Mapping[str, Any]] = None,
                      data: Union[str, bytes, None] = None,
                      content_type: Optional[str] = None,
                      accept: Optional[str] = None) -> requests.Request:
        """Builds (without sending) a request for a resource path such as /v2/graphs."""
        headers = {}
        if content_type:
            headers["Content-Type"] = content_type
        if accept:
            headers["Accept"] = accept
        if isinstance(data, str):
            data = data.encode("utf-8")
        return requests.Request(
            method=method,
            url=self.url_for(path),
            params=dict(params or {}),
            data=data,
            headers=headers,
        )

    def send(self, request: requests.Request) -> requests.Response:
        """
        Sends a request built by `build_request`.

        Raises:
            ServiceError: when no response could be obtained (connection error, timeout, ...)
        """
        prepared = self.session.prepare_request(request)
        logger.debug(f"{prepared.method} {prepared.url}")
        try:
            return self.session.send(prepared, timeout=self.timeout, verify=self.verify)
        except requests.RequestException as e:
            logger.error(f"Request {prepared.method} {prepared.url} failed: {e}")
            raise ServiceError(f"Request failed: {e}", url=prepared.url) from e

    def handle_response(self, resp: requests.Response, expect_body: bool = True) -> Any:
        """
            Handle API response with proper error checking and JSON parsing.

            Args:
                resp: HTTP response object
                expect_body: parse the body as JSON; calls without a result skip it

            Returns:
                Parsed JSON data, or None when the body is empty or not expected

            Raises:
                ServiceError: For 4xx/5xx HTTP status codes (status-specific subclass)
                ServiceError: If response is not valid JSON
            """
        try:
            # Check for HTTP errors (4xx, 5xx)
            resp.raise_for_status()
        except requests.HTTPError as e:
            # Log the error with response details for debugging
            logger.error(f"HTTP {resp.status_code} error for {resp.url}: {resp.text}")
            raise error_from_response(resp) from e

        if not expect_body or not resp.content:
            return None

        try:
            return resp.json()
        except ValueError as e:
            # JSON decode error
            logger.error(f"Invalid JSON response from {resp.url}: {resp.text[:200]}...")
            raise ServiceError(
                f"Invalid JSON response: {e}",
                status_code=resp.status_code,
                body=resp.text,
                url=resp.url,
            ) from e
