"""
Base API client for the member card client.
"""

import time
from typing import Any

import requests
from requests.adapters import HTTPAdapter

from membercard.exceptions import APIError
from membercard.exceptions import APIResponseError
from membercard.exceptions import APITimeoutError
from membercard.utils.logging_utils import LoggerMixin


class BaseAPI(LoggerMixin):
    """Base class for API clients."""
    
    # None leaves timeouts to the transport
    DEFAULT_TIMEOUT: float | tuple[float, float] | None = None
    
    # Failed attempts are reported, never retried
    DEFAULT_MAX_RETRIES = 0
    
    def __init__(
        self,
        headers: dict[str, str] | None = None,
        timeout: float | tuple[float, float] | None = None
    ):
        """Initialize API client.

        Args:
            headers: Headers sent with every request
            timeout: Request timeout, None for the transport default
        """
        super().__init__()
        self.timeout = timeout if timeout is not None else self.DEFAULT_TIMEOUT
        self.session = self._create_session()
        if headers:
            self.session.headers.update(headers)
    
    def _create_session(self) -> requests.Session:
        """
        Create a requests session.
        
        Returns:
            Session with adapters mounted for HTTP and HTTPS
        """
        session = requests.Session()
        
        adapter = HTTPAdapter(max_retries=self.DEFAULT_MAX_RETRIES)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        
        return session
    
    def _validate_response(self, response: requests.Response) -> None:
        """
        Validate response and raise appropriate errors.
        
        Args:
            response: Response to validate
            
        Raises:
            APIResponseError: If response status code indicates an error
        """
        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            error_msg = f"HTTP {response.status_code}"
            self.debug(
                "Error response body",
                status_code=response.status_code,
                body=(response.text or str(e))[:200]
            )
            raise APIResponseError(f"Request failed: {error_msg}", response=response)
    
    def _send(
        self,
        method: str,
        url: str,
        params: dict[str, str] | None = None,
        data: dict[str, Any] | None = None,
        timeout: float | tuple[float, float] | None = None
    ) -> requests.Response:
        """
        Send a request and validate its status.
        
        Args:
            method: HTTP method
            url: Absolute request URL
            params: Query parameters
            data: JSON request body
            timeout: Request timeout overriding the client default
            
        Returns:
            Successful response
            
        Raises:
            APITimeoutError: If request times out
            APIResponseError: If request fails or returns a non-2xx status
            APIError: For other errors
        """
        start_time = time.time()
        
        if timeout is None:
            timeout = self.timeout
        
        try:
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=data,
                timeout=timeout
            )
            self._validate_response(response)
            return response
            
        except requests.exceptions.Timeout as e:
            elapsed = time.time() - start_time
            self.logger.error(f"BaseAPI: Request timed out after {elapsed:.2f} seconds with timeout settings {timeout}: {e}")
            raise APITimeoutError(f"Request timed out after {elapsed:.2f} seconds: {e!s}")
            
        except requests.exceptions.RequestException as e:
            elapsed = time.time() - start_time
            self.logger.error(f"BaseAPI: Request failed after {elapsed:.2f} seconds: {e}")
            raise APIResponseError(f"Request failed after {elapsed:.2f} seconds: {e!s}")
            
        except APIError as e:
            elapsed = time.time() - start_time
            self.logger.error(f"BaseAPI: API error after {elapsed:.2f} seconds: {e}")
            raise
            
        except Exception as e:
            elapsed = time.time() - start_time
            self.logger.error(f"BaseAPI: Unexpected error after {elapsed:.2f} seconds: {e}")
            raise APIError(f"Unexpected error after {elapsed:.2f} seconds: {e!s}")
