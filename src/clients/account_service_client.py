"""
Account Service Client
HTTP client for the downstream account service that applies transactions.
"""

from decimal import Decimal
from typing import Dict, List, Optional

import httpx

from logging_config import get_logger

logger = get_logger("transaction_service.clients.account_service")

# Headers httpx sets itself for the outbound request
EXCLUDED_FORWARD_HEADERS = frozenset(
    {"host", "content-length", "transfer-encoding", "connection", "content-type"}
)

HeaderBag = Dict[str, List[str]]


def forwardable_headers(headers: HeaderBag) -> List[tuple]:
    """
    Flatten a header bag into (name, value) pairs, dropping framing headers.
    """
    pairs = []
    for name, values in headers.items():
        if name.lower() in EXCLUDED_FORWARD_HEADERS:
            continue
        for value in values:
            pairs.append((name, value))
    return pairs


class AccountServiceClient:
    """
    Async HTTP client for the account service API.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    def _account_url(self, account_number: int, action: str) -> str:
        return f"{self.base_url}/api/accounts/{account_number}/{action}"

    async def _post_amount(
        self,
        account_number: int,
        action: str,
        amount: Decimal,
        headers: Optional[List[tuple]] = None,
    ) -> httpx.Response:
        url = self._account_url(account_number, action)
        request_headers = list(headers or [])
        request_headers.append(("Content-Type", "application/json"))
        try:
            # str() keeps every digit of the Decimal; a float round-trip would not
            resp = await self._client.post(url, content=str(amount), headers=request_headers)
            resp.raise_for_status()
            return resp
        except httpx.HTTPStatusError as e:
            logger.error("Account service error %s -> %s %s", url, e.response.status_code, e.response.text)
            raise
        except httpx.HTTPError:
            logger.exception("Account service call failed: %s", url)
            raise

    async def transact(self, account_number: int, amount: Decimal) -> None:
        """
        Apply a transaction of `amount` to the account.
        """
        logger.info("transact account=%s amount=%s", account_number, amount)
        await self._post_amount(account_number, "transaction", amount)

    async def transaction_headers(
        self, account_number: int, amount: Decimal, headers: HeaderBag
    ) -> HeaderBag:
        """
        Apply a transaction, forwarding the caller's headers, and return the
        header bag the account service answers with.
        """
        logger.info("transaction_headers account=%s amount=%s", account_number, amount)
        resp = await self._post_amount(
            account_number, "transaction-headers", amount, forwardable_headers(headers)
        )
        return resp.json()

    async def close(self):
        await self._client.aclose()
