"""
MonitoringClient for listing time series from the Cloud Monitoring REST API.
"""

import logging
import threading
from typing import Optional

import requests

from .exceptions import BackendAuthError, BackendConnectionError, BackendQueryError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://monitoring.googleapis.com"


def project_resource(project_id: str) -> str:
    """
    Build the project-scoped resource name for the list endpoint.

    Args:
        project_id: Cloud project identifier.

    Returns:
        Resource name of the form "projects/<project_id>".
    """
    return "projects/" + project_id


def _error_message(response: requests.Response) -> str:
    """Extract the API error message from a failed response, falling back to its body."""
    try:
        data = response.json()
    except ValueError:
        return response.text
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        return data["error"].get("message", response.text)
    return response.text


class MonitoringClient:
    """
    Client for the Cloud Monitoring timeSeries.list endpoint.

    Example:
        client = MonitoringClient(access_token="ya29....")

        page = client.list_time_series(
            name="projects/my-project",
            filter='metric.type="compute.googleapis.com/instance/cpu/utilization"',
            start_time="2024-01-01T00:00:00Z",
            end_time="2024-01-01T01:00:00Z",
        )
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        access_token: Optional[str] = None,
        ca_cert: Optional[str] = None,
        verify_ssl: bool = True,
        timeout: int = 30,
        page_size: Optional[int] = None
    ):
        """
        Initialize the monitoring client.

        Args:
            base_url: Base URL of the monitoring API.
            access_token: Optional OAuth bearer token sent with every request.
            ca_cert: Optional path to CA certificate PEM file for self-signed certs.
            verify_ssl: Whether to verify SSL certificates. Set False to disable (insecure).
            timeout: Request timeout in seconds.
            page_size: Optional maximum number of series per page.
        """
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.ca_cert = ca_cert
        self.verify_ssl = verify_ssl
        self.timeout = timeout
        self.page_size = page_size

        self._session: Optional[requests.Session] = None
        self._session_lock = threading.Lock()

    @property
    def session(self) -> requests.Session:
        """
        Get or create HTTP session with configured authentication and SSL settings.

        Creation is guarded by a lock so concurrent queries share one session.

        Returns:
            Configured requests.Session instance.
        """
        with self._session_lock:
            if self._session is None:
                session = requests.Session()

                if self.access_token:
                    session.headers["Authorization"] = f"Bearer {self.access_token}"

                if self.ca_cert:
                    session.verify = self.ca_cert
                else:
                    session.verify = self.verify_ssl

                self._session = session

            return self._session

    def _request(self, method: str, endpoint: str, params: Optional[dict] = None) -> dict:
        """
        Make HTTP request to the monitoring API.

        Args:
            method: HTTP method (GET, POST, etc.).
            endpoint: API endpoint path.
            params: Optional query parameters.

        Returns:
            JSON response as dictionary.

        Raises:
            BackendConnectionError: If connection to the API fails.
            BackendAuthError: If authentication fails (401/403).
            BackendQueryError: If the request fails or returns an error.
        """
        url = f"{self.base_url}{endpoint}"

        try:
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                timeout=self.timeout
            )
        except requests.exceptions.SSLError as e:
            raise BackendConnectionError(f"SSL error connecting to monitoring API: {e}") from e
        except requests.exceptions.ConnectionError as e:
            raise BackendConnectionError(f"Failed to connect to monitoring API at {url}: {e}") from e
        except requests.exceptions.Timeout as e:
            raise BackendConnectionError(f"Request to monitoring API timed out: {e}") from e
        except requests.exceptions.RequestException as e:
            raise BackendConnectionError(f"Request to monitoring API failed: {e}") from e

        if response.status_code == 401:
            raise BackendAuthError("Authentication failed: invalid credentials")
        if response.status_code == 403:
            raise BackendAuthError("Authorization failed: access denied")

        if response.status_code != 200:
            raise BackendQueryError(
                f"Monitoring API request failed with status {response.status_code}: "
                f"{_error_message(response)}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise BackendQueryError(f"Invalid JSON response from monitoring API: {e}") from e

        return data

    def list_time_series(
        self,
        name: str,
        filter: str,
        start_time: str,
        end_time: str,
        page_token: Optional[str] = None
    ) -> dict:
        """
        Fetch one page of time series matching a filter over an interval.

        Args:
            name: Resource name to query (e.g. "projects/my-project").
            filter: Monitoring filter expression.
            start_time: RFC 3339 interval start.
            end_time: RFC 3339 interval end.
            page_token: Continuation token from a previous page.

        Returns:
            ListTimeSeriesResponse dictionary with "timeSeries" and
            optional "nextPageToken" keys.
        """
        params = {
            "filter": filter,
            "interval.startTime": start_time,
            "interval.endTime": end_time
        }

        if page_token:
            params["pageToken"] = page_token
        if self.page_size is not None:
            params["pageSize"] = self.page_size

        logger.debug(f"Listing time series for {name} (page token: {page_token or '-'})")
        return self._request("GET", f"/v3/{name}/timeSeries", params)

    def close(self) -> None:
        """Close the HTTP session."""
        with self._session_lock:
            if self._session is not None:
                self._session.close()
                self._session = None

    def __enter__(self) -> "MonitoringClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - closes session."""
        self.close()
