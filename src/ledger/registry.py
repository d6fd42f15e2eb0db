from __future__ import annotations

from typing import Tuple

from ledger.models import Product, ProductDraft, Receipt
from ledger.session import SessionManager
from ledger.units import scale_price
from utils.logger import get_logger

_logger = get_logger(__name__)


class RegistryClient:
    """
    submit / fetch_one / fetch_all against the registry contract.
    Every call needs a connected session and fails with NotConnected otherwise.
    """

    def __init__(self, sessions: SessionManager) -> None:
        self._sessions = sessions

    async def submit(self, draft: ProductDraft) -> Receipt:
        """
        Register a product and wait until the ledger finalizes it.
        The price is validated and scaled before anything is sent.
        """
        session = self._sessions.require()
        price = scale_price(draft.price_per_unit)

        _logger.info(f"Submitting product {draft.name!r} at {draft.price_per_unit}")
        tx_hash = await session.contract.register_product(
            draft.name,
            draft.category,
            draft.date_of_harvest,
            draft.time_of_harvest,
            draft.farm_location,
            draft.quality_rating,
            price,
            draft.description,
        )
        _logger.info(f"Sent {tx_hash}, waiting for finalization...")
        receipt = await session.contract.wait_for_receipt(tx_hash)
        _logger.info(f"Finalized {receipt.tx_hash} in block {receipt.block_number}")
        return receipt

    async def fetch_one(self, product_id: int) -> Product:
        if isinstance(product_id, bool) or not isinstance(product_id, int):
            raise ValueError(f"product id must be an int, got {product_id!r}")
        if product_id < 0:
            raise ValueError(f"product id must be >= 0, got {product_id}")

        session = self._sessions.require()
        return await session.contract.get_product(product_id)

    async def fetch_all(self) -> Tuple[Product, ...]:
        """All products in the order the ledger returns them."""
        session = self._sessions.require()
        products = tuple(await session.contract.get_all_products())
        _logger.debug(f"Fetched {len(products)} products")
        return products
