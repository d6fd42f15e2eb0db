from __future__ import annotations

import asyncio
from typing import Callable, List, Optional, Sequence

from ledger.errors import NotConnected, ProviderMissing, UserRejected
from ledger.models import Session
from ledger.provider import WalletProvider
from utils.logger import get_logger

_logger = get_logger(__name__)

SessionListener = Callable[[Optional[Session]], None]


class SessionManager:
    """
    Owns the connection to the wallet provider.

    Two states: disconnected (session is None) and connected. Only a
    successful connect() moves to connected; only accounts_changed() moves back.
    """

    def __init__(self, provider: Optional[WalletProvider]) -> None:
        self._provider = provider
        self._session: Optional[Session] = None
        self._pending: Optional[asyncio.Task] = None
        self._listeners: List[SessionListener] = []

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def is_connected(self) -> bool:
        return self._session is not None

    @property
    def account(self) -> Optional[str]:
        return self._session.account if self._session else None

    def add_listener(self, listener: SessionListener) -> None:
        """listener(session) runs after every connect and invalidation"""
        self._listeners.append(listener)

    def require(self) -> Session:
        """The active session, or NotConnected. Never touches the provider."""
        if self._session is None:
            raise NotConnected()
        return self._session

    async def connect(self) -> str:
        """
        Authorize an account and return its address.

        Already connected: returns the current address without asking again.
        A connect already in flight is awaited instead of starting another.
        Cancelling the caller does not cancel the authorization itself.
        """
        if self._session is not None:
            return self._session.account

        task = self._pending
        if task is None:
            task = asyncio.ensure_future(self._authorize())
            task.add_done_callback(self._clear_pending)
            self._pending = task
        return await asyncio.shield(task)

    def _clear_pending(self, task: asyncio.Task) -> None:
        if self._pending is task:
            self._pending = None

    async def _authorize(self) -> str:
        provider = self._provider
        if provider is None:
            raise ProviderMissing()

        _logger.info("Requesting account authorization...")
        accounts = await provider.request_accounts()
        if not accounts:
            raise UserRejected("wallet returned no accounts")

        account = accounts[0]
        self._session = Session(
            provider=provider,
            account=account,
            contract=provider.registry(account),
        )
        _logger.info(f"Connected as {account}")
        self._notify()
        return account

    def accounts_changed(self, accounts: Sequence[str]) -> bool:
        """
        The host reports a new list of authorized accounts.
        Drops the session if its account is no longer the active one.
        Returns True if the session was invalidated.
        """
        if self._session is None:
            return False
        if accounts and accounts[0].lower() == self._session.account.lower():
            return False

        _logger.info(f"Account {self._session.account} no longer active, disconnecting.")
        self._session = None
        self._notify()
        return True

    async def poll_accounts(self) -> bool:
        """
        Read the provider's current accounts and pass them to accounts_changed.
        Does nothing while disconnected. Provider failures propagate and the
        session is kept.
        """
        session = self._session
        if session is None:
            return False
        accounts = await session.provider.current_accounts()
        if self._session is not session:
            # replaced while the request was in flight
            return False
        return self.accounts_changed(accounts)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self._session)
