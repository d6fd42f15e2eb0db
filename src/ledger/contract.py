# typed binding of the ProductRegistry contract
from __future__ import annotations

import asyncio
from contextlib import contextmanager
from typing import Iterator, List, Optional, Protocol, Type

from aiohttp import ClientError
from web3 import AsyncWeb3, Web3
from web3.exceptions import (
    BadFunctionCallOutput,
    ContractLogicError,
    TimeExhausted,
    Web3RPCError,
)

from ledger.abi import CONTRACT_ABI
from ledger.errors import (
    FetchError,
    NetworkError,
    NotFound,
    RegistryError,
    RejectedByUser,
    Reverted,
)
from ledger.models import Product, Receipt
from utils.logger import get_logger

_logger = get_logger(__name__)

# EIP-1193 "user rejected request"
USER_REJECTED_CODE = 4001


class RegistryContract(Protocol):
    """
    One coroutine per contract function.
    Implementations raise RegistryError subclasses only.
    """

    address: str

    async def register_product(
        self,
        name: str,
        category: str,
        date_of_harvest: str,
        time_of_harvest: str,
        farm_location: str,
        quality_rating: str,
        price_per_unit: int,
        description: str,
    ) -> str: ...

    async def wait_for_receipt(self, tx_hash: str) -> Receipt: ...

    async def get_product(self, product_id: int) -> Product: ...

    async def get_all_products(self) -> List[Product]: ...


def rpc_error_code(exc: BaseException) -> Optional[int]:
    """Pull the JSON-RPC error code out of a web3 error, if there is one."""
    response = getattr(exc, "rpc_response", None)
    if isinstance(response, dict):
        error = response.get("error")
        if isinstance(error, dict) and isinstance(error.get("code"), int):
            return error["code"]
    for arg in getattr(exc, "args", ()):
        if isinstance(arg, dict) and isinstance(arg.get("code"), int):
            return arg["code"]
    return None


@contextmanager
def translate_errors(
    action: str, on_revert: Type[RegistryError], fallback: Type[RegistryError]
) -> Iterator[None]:
    """
    Map web3/aiohttp failures raised inside the block to the registry taxonomy.
    on_revert: raised when the contract itself refuses the call.
    fallback: raised for responses that are neither a revert nor a transport failure.
    """
    try:
        yield
    except RegistryError:
        raise
    except ContractLogicError as e:
        _logger.warning(f"{action}: contract reverted: {e}")
        raise on_revert(str(e)) from e
    except Web3RPCError as e:
        code = rpc_error_code(e)
        _logger.warning(f"{action}: rpc error {code}: {e}")
        if code == USER_REJECTED_CODE:
            raise RejectedByUser(str(e)) from e
        if "revert" in str(e).lower():
            raise on_revert(str(e)) from e
        raise NetworkError(str(e)) from e
    except BadFunctionCallOutput as e:
        _logger.warning(f"{action}: unreadable contract output: {e}")
        raise fallback(str(e)) from e
    except (ClientError, OSError, asyncio.TimeoutError, TimeExhausted) as e:
        _logger.warning(f"{action}: transport failure: {e!r}")
        raise NetworkError(str(e) or type(e).__name__) from e


class Web3RegistryContract:
    """
    RegistryContract backed by web3's asyncio API.
    Transactions are sent with eth_sendTransaction, so the wallet behind the
    RPC endpoint holds the key and may prompt the user.
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        address: str,
        account: str,
        receipt_timeout: Optional[float] = None,
        poll_interval: float = 0.5,
    ) -> None:
        self._w3 = w3
        self.address = Web3.to_checksum_address(address)
        self.account = Web3.to_checksum_address(account)
        self._receipt_timeout = receipt_timeout
        self._poll_interval = poll_interval
        self._contract = w3.eth.contract(address=self.address, abi=CONTRACT_ABI)

    async def register_product(
        self,
        name: str,
        category: str,
        date_of_harvest: str,
        time_of_harvest: str,
        farm_location: str,
        quality_rating: str,
        price_per_unit: int,
        description: str,
    ) -> str:
        fn = self._contract.functions.registerProduct(
            name,
            category,
            date_of_harvest,
            time_of_harvest,
            farm_location,
            quality_rating,
            price_per_unit,
            description,
        )
        with translate_errors("registerProduct", Reverted, Reverted):
            tx_hash = await fn.transact({"from": self.account})
        return Web3.to_hex(tx_hash)

    async def wait_for_receipt(self, tx_hash: str) -> Receipt:
        # timeout=None waits until the ledger finalizes or the caller gives up
        with translate_errors("wait_for_receipt", Reverted, Reverted):
            raw = await self._w3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=self._receipt_timeout,
                poll_latency=self._poll_interval,
            )

        receipt = Receipt(
            tx_hash=Web3.to_hex(raw["transactionHash"]),
            block_number=int(raw["blockNumber"]),
            gas_used=int(raw["gasUsed"]),
            status=int(raw["status"]),
        )
        if receipt.status == 0:
            raise Reverted(f"transaction {receipt.tx_hash} reverted")
        return receipt

    async def get_product(self, product_id: int) -> Product:
        with translate_errors("getProduct", NotFound, NotFound):
            record = await self._contract.functions.getProduct(product_id).call()
        product = Product.from_record(record)
        if product.is_empty:
            raise NotFound(f"product {product_id} does not exist")
        return product

    async def get_all_products(self) -> List[Product]:
        with translate_errors("getAllProducts", FetchError, FetchError):
            records = await self._contract.functions.getAllProducts().call()
        return [Product.from_record(r) for r in records]
