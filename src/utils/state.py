from __future__ import annotations

from dataclasses import dataclass, field
from typing import Awaitable, Dict, Literal, Optional, Tuple, TypeVar

from ledger.cache import ProductCache
from ledger.errors import RegistryError
from ledger.models import Product, ProductDraft, Receipt
from ledger.provider import WalletProvider, discover_provider
from ledger.registry import RegistryClient
from ledger.session import SessionManager
from utils.config import Settings
from utils.logger import get_logger

_logger = get_logger(__name__)

T = TypeVar("T")

Operation = Literal["connect", "submit", "fetch", "refresh"]


@dataclass
class OperationStatus:
    loading: bool = False
    error: Optional[RegistryError] = None


@dataclass
class AppState:
    """
    What the screens read and call into.

    Fields:
      - sessions: wallet session manager
      - registry: registry client bound to the session manager
      - cache: product snapshot
      - status: loading/error per operation, for the presentation
    """

    sessions: SessionManager
    registry: RegistryClient
    cache: ProductCache
    status: Dict[str, OperationStatus] = field(default_factory=dict)

    @classmethod
    def create(cls, provider: Optional[WalletProvider]) -> "AppState":
        sessions = SessionManager(provider)
        registry = RegistryClient(sessions)
        state = cls(sessions=sessions, registry=registry, cache=ProductCache(registry))
        # a dropped session must not leave the old account's products on screen
        sessions.add_listener(lambda s: state.cache.clear() if s is None else None)
        return state

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppState":
        return cls.create(discover_provider(settings))

    @property
    def account_label(self) -> str:
        return self.sessions.account or "disconnected"

    @property
    def products(self) -> Tuple[Product, ...]:
        return self.cache.products

    def status_of(self, op: Operation) -> OperationStatus:
        return self.status.setdefault(op, OperationStatus())

    async def _track(self, op: Operation, awaitable: Awaitable[T]) -> T:
        st = self.status_of(op)
        st.loading = True
        st.error = None
        try:
            return await awaitable
        except RegistryError as e:
            st.error = e
            raise
        finally:
            st.loading = False

    async def connect(self) -> str:
        return await self._track("connect", self.sessions.connect())

    async def poll_accounts(self) -> bool:
        """True if the wallet switched accounts and the session was dropped."""
        return await self.sessions.poll_accounts()

    async def refresh(self) -> Tuple[Product, ...]:
        return await self._track("refresh", self.cache.refresh())

    async def register(self, draft: ProductDraft) -> Receipt:
        """submit, then reload the cache. A failed submit never reloads."""
        receipt = await self._track("submit", self.registry.submit(draft))
        try:
            await self.refresh()
        except RegistryError as e:
            # the write is final, only the snapshot is stale; status["refresh"] has the error
            _logger.warning(f"Reload after submit failed: {e!r}")
        return receipt

    async def fetch_product(self, product_id: int) -> Product:
        return await self._track("fetch", self.registry.fetch_one(product_id))
