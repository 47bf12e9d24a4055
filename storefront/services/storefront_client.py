import asyncio
import logging
from typing import Optional, Dict, Any

import aiohttp

from storefront.config import settings

logger = logging.getLogger(__name__)


class StorefrontQueryError(Exception):
    """A Storefront API query failed: transport error, non-200 status or GraphQL errors"""

    def __init__(self, message: str, status_code: Optional[int] = None, errors: Optional[list] = None):
        super().__init__(message)
        self.status_code = status_code
        self.errors = errors or []


class StorefrontClient:
    """
    Executes GraphQL documents against the Shopify Storefront API.

    The buyer context (country, language) is injected into the variables of
    every query, so callers only pass query-specific variables.
    """

    def __init__(
            self,
            api_url: Optional[str] = None,
            access_token: Optional[str] = None,
            country: Optional[str] = None,
            language: Optional[str] = None,
            timeout: Optional[int] = None,
            session: Optional[aiohttp.ClientSession] = None
    ):
        self.api_url = api_url or settings.storefront_api_url
        self.country = country or settings.STOREFRONT_COUNTRY
        self.language = language or settings.STOREFRONT_LANGUAGE
        self.timeout = aiohttp.ClientTimeout(total=timeout or settings.REQUEST_TIMEOUT)
        self.headers = {
            'Accept': 'application/json',
            'Content-Type': 'application/json',
            'X-Shopify-Storefront-Access-Token': access_token or settings.SHOPIFY_STOREFRONT_API_TOKEN,
        }
        self._session = session
        self._owns_session = session is None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(headers=self.headers, timeout=self.timeout)
            self._owns_session = True
        return self._session

    def build_variables(self, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Merge the buyer context into query variables"""
        merged = {"country": self.country, "language": self.language}
        if variables:
            merged.update(variables)
        return merged

    async def query(self, document: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Execute a GraphQL query

        Args:
            document: GraphQL query document
            variables: Query variables (country/language are added automatically)

        Returns:
            dict: The response's "data" object

        Raises:
            StorefrontQueryError: on network failure, non-200 status or GraphQL errors
        """
        body = {"query": document, "variables": self.build_variables(variables)}
        session = self._get_session()

        try:
            async with session.post(self.api_url, json=body, headers=self.headers) as response:
                if response.status != 200:
                    text = await response.text()
                    raise StorefrontQueryError(
                        f"Storefront API returned HTTP {response.status}: {text[:200]}",
                        status_code=response.status
                    )
                payload = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise StorefrontQueryError(f"Storefront API request failed: {e}") from e

        if not isinstance(payload, dict):
            raise StorefrontQueryError("Storefront API returned an unexpected response body", status_code=200)

        errors = payload.get("errors")
        if errors:
            messages = "; ".join(
                str(err.get("message", err)) if isinstance(err, dict) else str(err)
                for err in errors
            )
            raise StorefrontQueryError(f"Storefront API query errors: {messages}", status_code=200, errors=errors)

        return payload.get("data") or {}

    async def close(self):
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            logger.info("Storefront API session closed")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
