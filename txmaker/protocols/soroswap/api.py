"""
Soroswap API Client

Looks up the router contract deployed on a network.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ...config import config as global_config
from ...errors import ConfigurationError, RpcError

logger = logging.getLogger(__name__)


class SoroswapAPI:
    """
    Soroswap REST API client

    Usage:
        api = SoroswapAPI("https://api.soroswap.finance")
        router = await api.get_router_contract_address("testnet")
    """

    def __init__(
        self,
        base_url: str = None,
        timeout: float = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._base_url = (base_url if base_url is not None else global_config.stellar.soroswap_api_url).rstrip("/")
        if not self._base_url:
            raise ConfigurationError.missing("SOROSWAP_API_URL")
        self._timeout = timeout if timeout is not None else global_config.http.timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def get_routers(self) -> List[Dict[str, Any]]:
        """All router records: [{network, router_id, router_address}, ...]"""
        url = f"{self._base_url}/api/router"
        try:
            response = await self._get_client().get(url)
            if response.status_code == 429:
                raise RpcError.rate_limited(url)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            raise RpcError.timeout(url, self._timeout) from e
        except httpx.HTTPError as e:
            raise RpcError.connection_failed(url, e) from e
        except ValueError as e:
            raise RpcError.invalid_response(url, "body is not JSON") from e

        if not isinstance(data, list):
            raise RpcError.invalid_response(url, f"expected a list, got {type(data).__name__}")
        return data

    async def get_router_contract_address(self, network: str) -> str:
        """
        Router contract address for a network

        Raises:
            ConfigurationError: no router is published for the network
            RpcError: the API could not be reached or answered garbage
        """
        for router in await self.get_routers():
            if router.get("network") == network:
                logger.debug(f"Router for {network}: {router.get('router_address')}")
                return router["router_address"]
        raise ConfigurationError.invalid("network", f"no Soroswap router published for '{network}'")

    async def close(self):
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None


async def get_router_contract_address(
    uri: str,
    network: str,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """One-shot router lookup: GET {uri}/api/router and pick the network's record"""
    api = SoroswapAPI(uri, client=client)
    try:
        return await api.get_router_contract_address(network)
    finally:
        await api.close()
