"""
Friendbot Client

Funds test accounts through the network's friendbot faucet.
"""

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from ..types import FundResult, FundStatus
from ..config import config as global_config

logger = logging.getLogger(__name__)

# Detail friendbot returns when the account is already on the ledger
ACCOUNT_ALREADY_EXISTS = "createAccountAlreadyExist (AAAAAAAAAGT/////AAAAAQAAAAAAAAAA/////AAAAAA=)"


class FriendbotClient:
    """
    Friendbot faucet client

    Funding is idempotent: an "account already exists" answer is reported
    as ALREADY_FUNDED. Failures are returned as FundStatus.ERROR, never raised.

    Usage:
        friendbot = FriendbotClient("http://localhost:8000/friendbot?addr=")
        result = await friendbot.fund(account.public_key)
    """

    def __init__(
        self,
        url: str = None,
        timeout: float = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            url: Faucet URI; the url-encoded public key is appended to it
            timeout: Request timeout in seconds (default from config)
            client: Shared AsyncClient (one is created and owned otherwise)
        """
        self._url = url if url is not None else global_config.stellar.friendbot_url
        self._timeout = timeout if timeout is not None else global_config.http.timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def fund(self, public_key: str) -> FundResult:
        url = f"{self._url}{quote(public_key, safe='')}"
        try:
            response = await self._get_client().get(url)
            # Duplicate funding comes back as HTTP 400 with a JSON body
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Friendbot request failed for {public_key}: {e}")
            return FundResult(status=FundStatus.ERROR, public_key=public_key, detail=str(e))

        if not isinstance(data, dict):
            logger.error(f"Unexpected friendbot response for {public_key}: {data!r}")
            return FundResult(status=FundStatus.ERROR, public_key=public_key, detail=str(data))

        if data.get("successful"):
            logger.info(f"Funded new account {public_key}")
            return FundResult(status=FundStatus.FUNDED, public_key=public_key, response=data)

        detail = data.get("detail")
        if detail == ACCOUNT_ALREADY_EXISTS:
            logger.info(f"Account already exists: {public_key}")
            return FundResult(
                status=FundStatus.ALREADY_FUNDED,
                public_key=public_key,
                detail=detail,
                response=data,
            )

        logger.error(f"Friendbot refused to fund {public_key}: {data}")
        return FundResult(status=FundStatus.ERROR, public_key=public_key, detail=detail, response=data)

    async def close(self):
        """Close the HTTP client if this instance created it"""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
