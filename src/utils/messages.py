from typing import Optional

from textual.message import Message


class QuitRequestedMessage(Message):
    """
    broadcasted when the app is about to quit
    """

    bubble = True


class WalletConnectedMessage(Message):
    """
    Fired once a wallet session exists, screens showing the account refresh
    """

    bubble = True

    def __init__(self, account: str) -> None:
        super().__init__()
        self.account = account


class SessionInvalidatedMessage(Message):
    """
    Fired when the wallet switched accounts and the session was dropped.
    App goes back to the connect screen.
    """

    bubble = True


class ProductsChangedMessage(Message):
    """
    Fired after the product cache was replaced.
    Listened to by the product list.
    """

    bubble = True


class ProductRegisteredMessage(Message):
    """
    Fired by the register form after a product was finalized on the ledger
    """

    bubble = True

    def __init__(self, tx_hash: str, name: Optional[str] = None) -> None:
        super().__init__()
        self.tx_hash = tx_hash
        self.name = name


class ModeSwitchedMessage(Message):
    """
    fired whenever switch_mode is called
    must be fired from app level
    """

    bubble = True

    def __init__(self, old_mode: str, new_mode: str) -> None:
        super().__init__()
        self.old_mode = old_mode
        self.new_mode = new_mode
