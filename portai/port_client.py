"""Port API HTTP client: token exchange and invocation transport."""

import logging
from typing import Any, Dict, Optional

import httpx

from .config import config
from .errors import AuthenticationError, UpstreamError
from .utils import normalize_base_url

logger = logging.getLogger(__name__)

TOKEN_PATH = "/v1/auth/access_token"

JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


def describe_http_error(error: Exception) -> str:
    """Short text for an httpx failure, including the response body if any."""
    if isinstance(error, httpx.HTTPStatusError):
        body = error.response.text.strip()
        text = f"HTTP {error.response.status_code}"
        return f"{text}: {body[:500]}" if body else text
    return str(error) or type(error).__name__


def upstream_error(action: str, error: Exception, description: str, context: Dict[str, Any]) -> UpstreamError:
    """Wrap a transport failure with the operation that caused it."""
    status_code = None
    if isinstance(error, httpx.HTTPStatusError):
        status_code = error.response.status_code
    logger.error(f"Failed to {action} ({context}): {describe_http_error(error)}")
    return UpstreamError(
        f"Failed to {action}: {describe_http_error(error)}",
        description=description,
        status_code=status_code,
        context=context,
    )


class PortClient:
    """
    Async client for the Port API.

    Handles:
    - Client-credentials exchange for a bearer token
    - POST requests answered with a buffered SSE body
    - GET requests answered with JSON
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None, timeout: Optional[float] = None):
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout or config.http_timeout, connect=config.connect_timeout),
            transport=transport,
        )

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()

    async def get_access_token(self, base_url: str, client_id: str, client_secret: str) -> str:
        """
        Exchange client credentials for an access token.

        Raises AuthenticationError if the call fails or the response
        carries no accessToken.
        """
        token_url = f"{normalize_base_url(base_url)}{TOKEN_PATH}"
        hint = f"Please verify your base URL ({base_url}) and credentials are correct."

        try:
            resp = await self.client.post(
                token_url,
                headers=JSON_HEADERS,
                json={"clientId": client_id, "clientSecret": client_secret},
            )
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Token exchange with {token_url} failed: {describe_http_error(e)}")
            raise AuthenticationError(
                f"Failed to obtain access token from {token_url}. Error: {describe_http_error(e)}",
                url=token_url,
                description=hint,
            ) from e

        access_token = data.get("accessToken") if isinstance(data, dict) else None
        if not access_token or not isinstance(access_token, str):
            # Only field names are reported, never values
            keys = sorted(data) if isinstance(data, dict) else type(data).__name__
            logger.error(f"Token exchange with {token_url} returned no accessToken")
            raise AuthenticationError(
                f"Failed to obtain access token from {token_url}. "
                f"Error: response has no accessToken (fields: {keys})",
                url=token_url,
                description=hint,
            )

        logger.info(f"Obtained access token from {token_url}")
        return access_token

    @staticmethod
    def auth_headers(access_token: str, extra_headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/json",
        }
        headers.update(extra_headers or {})
        return headers

    async def post_sse(
        self,
        url: str,
        access_token: str,
        body: Dict[str, Any],
        extra_headers: Optional[Dict[str, str]] = None,
    ) -> str:
        """POST a JSON body and return the raw response text (SSE)."""
        headers = self.auth_headers(access_token)
        headers["Content-Type"] = "application/json"
        headers.update(extra_headers or {})

        logger.info(f"POST {url}")
        logger.debug(f"Payload fields: {sorted(body)}")

        resp = await self.client.post(url, headers=headers, json=body)
        resp.raise_for_status()
        return resp.text

    async def get_json(
        self,
        url: str,
        access_token: str,
        extra_headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """GET a JSON document."""
        logger.info(f"GET {url}")

        resp = await self.client.get(url, headers=self.auth_headers(access_token, extra_headers))
        resp.raise_for_status()
        return resp.json()


# Global instance
port = PortClient()
