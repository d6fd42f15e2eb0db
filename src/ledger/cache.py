from __future__ import annotations

from datetime import datetime
from typing import Iterator, Optional, Tuple

from ledger.models import Product
from ledger.registry import RegistryClient
from utils.logger import get_logger

_logger = get_logger(__name__)


class ProductCache:
    """
    Snapshot of the last successful fetch_all().

    The snapshot is replaced as a whole and never patched; the ledger stays
    the source of truth.
    """

    def __init__(self, registry: RegistryClient) -> None:
        self._registry = registry
        self._products: Tuple[Product, ...] = ()
        self.last_refreshed: Optional[datetime] = None

    @property
    def products(self) -> Tuple[Product, ...]:
        return self._products

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)

    def get(self, product_id: int) -> Optional[Product]:
        for p in self._products:
            if p.id == product_id:
                return p
        return None

    def clear(self) -> None:
        self._products = ()
        self.last_refreshed = None

    async def refresh(self) -> Tuple[Product, ...]:
        """Reload everything. On failure the previous snapshot is kept."""
        products = await self._registry.fetch_all()
        self._products = products
        self.last_refreshed = datetime.now()
        _logger.info(f"Product cache refreshed: {len(products)} products")
        return products
