# the wallet provider offered by the host environment
from __future__ import annotations

import asyncio
from typing import List, Optional, Protocol

from aiohttp import ClientError
from web3 import AsyncWeb3, Web3
from web3.exceptions import ProviderConnectionError, Web3RPCError
from web3.types import RPCEndpoint

from ledger.contract import (
    USER_REJECTED_CODE,
    RegistryContract,
    Web3RegistryContract,
    rpc_error_code,
)
from ledger.errors import ProviderError, UserRejected
from utils.config import Settings
from utils.logger import get_logger

_logger = get_logger(__name__)


class WalletProvider(Protocol):
    async def request_accounts(self) -> List[str]:
        """Ask the wallet to authorize accounts. May prompt the user."""
        ...

    async def current_accounts(self) -> List[str]:
        """Accounts authorized right now. Never prompts."""
        ...

    def registry(self, account: str) -> RegistryContract:
        """Registry contract binding that signs as `account`."""
        ...


class Web3WalletProvider:
    """
    Wallet reached over JSON-RPC, e.g. a local development node or a wallet
    daemon holding the user's keys.
    """

    def __init__(
        self,
        rpc_url: str,
        contract_address: str,
        receipt_timeout: Optional[float] = None,
        poll_interval: float = 0.5,
    ) -> None:
        self.rpc_url = rpc_url
        self.contract_address = contract_address
        self._receipt_timeout = receipt_timeout
        self._poll_interval = poll_interval
        self.w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))

    async def request_accounts(self) -> List[str]:
        return await self._accounts("eth_requestAccounts")

    async def current_accounts(self) -> List[str]:
        return await self._accounts("eth_accounts")

    async def _accounts(self, method: str) -> List[str]:
        _logger.debug(f"{method} -> {self.rpc_url}")
        try:
            accounts = await self.w3.manager.coro_request(RPCEndpoint(method), [])
        except Web3RPCError as e:
            if rpc_error_code(e) == USER_REJECTED_CODE:
                raise UserRejected(str(e)) from e
            raise ProviderError(str(e)) from e
        except (
            ClientError,
            OSError,
            asyncio.TimeoutError,
            ProviderConnectionError,
        ) as e:
            raise ProviderError(f"{self.rpc_url} unreachable: {e!r}") from e

        return [Web3.to_checksum_address(a) for a in accounts or []]

    def registry(self, account: str) -> RegistryContract:
        return Web3RegistryContract(
            self.w3,
            self.contract_address,
            account,
            receipt_timeout=self._receipt_timeout,
            poll_interval=self._poll_interval,
        )


def discover_provider(settings: Settings) -> Optional[WalletProvider]:
    """
    The provider configured for this environment, or None if there is none.
    """
    if not settings.rpc_url:
        _logger.info("No wallet provider configured (REGISTRY_RPC_URL unset).")
        return None
    return Web3WalletProvider(
        settings.rpc_url,
        settings.contract_address,
        receipt_timeout=settings.receipt_timeout,
        poll_interval=settings.poll_interval,
    )
