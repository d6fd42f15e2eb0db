from typing import Optional

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import LoadingIndicator

from ledger.errors import RegistryError
from ledger.models import Session
from utils.config import Settings
from utils.logger import get_logger
from utils.messages import (
    ModeSwitchedMessage,
    ProductRegisteredMessage,
    QuitRequestedMessage,
    SessionInvalidatedMessage,
    WalletConnectedMessage,
)
from utils.state import AppState
from views.scr_connect import ConnectScreen
from views.scr_products import ProductListScreen
from views.scr_register import RegisterProductScreen

_logger = get_logger(__name__)


class RegistryApp(App):
    BINDINGS = [
        Binding("ctrl+t", "switch_light", "Toggle Theme", show=True),
    ]

    MODES = {
        "products": ProductListScreen,
        "register": RegisterProductScreen,
    }

    MENU_MODES = {
        "products": "All Products",
        "register": "Register Product",
    }

    CSS_PATH = [
        "styles/index.tcss",
        "styles/connect.tcss",
        "styles/products.tcss",
        "styles/register.tcss",
    ]

    state: AppState

    def __init__(self, state: Optional[AppState] = None, settings: Optional[Settings] = None):
        super().__init__()
        if settings is None:
            settings = Settings.from_env() if state is None else Settings()
        if state is None:
            state = AppState.from_settings(settings)
        self.app_settings = settings
        self.state = state
        self.state.sessions.add_listener(self._on_session_changed)

    def compose(self) -> ComposeResult:
        yield LoadingIndicator()

    async def on_mount(self) -> None:
        self.set_interval(self.app_settings.account_poll_interval, self.poll_wallet_accounts)
        self.main_flow()

    def action_switch_light(self):
        if self.theme == "textual-dark":
            self.theme = "solarized-light"
        else:
            self.theme = "textual-dark"
        self.notify(f"Theme changed to {self.theme}")

    def _on_session_changed(self, session: Optional[Session]) -> None:
        if session is None:
            self.post_message(SessionInvalidatedMessage())

    @on(WalletConnectedMessage)
    def handle_wallet_connected(self, message: WalletConnectedMessage):
        _logger.info(f"Session ready for {message.account}")

    @on(ModeSwitchedMessage)
    def handle_mode_switched(self, message: ModeSwitchedMessage):
        _logger.debug(f"Mode {message.old_mode} -> {message.new_mode}")

    @on(SessionInvalidatedMessage)
    def handle_session_invalidated(self):
        self.notify("Wallet account changed, please reconnect.", severity="warning")
        self.main_flow()

    @on(ProductRegisteredMessage)
    async def handle_product_registered(self, message: ProductRegisteredMessage):
        _logger.info(f"Registered {message.name!r} in {message.tx_hash}")
        if self.current_mode == "register":
            self.post_message(ModeSwitchedMessage("register", "products"))
            await self.switch_mode("products")

    @on(QuitRequestedMessage)
    def handle_quit(self):
        self.exit()

    @work(exclusive=True, group="accounts")
    async def poll_wallet_accounts(self) -> None:
        # a switch invalidates the session, _on_session_changed takes it from there
        try:
            await self.state.poll_accounts()
        except RegistryError as e:
            _logger.warning(f"Account check failed: {e!r}")

    @work(exclusive=True, group="main-flow")
    async def main_flow(self):
        await self.push_screen_wait(ConnectScreen())

        # load right after connecting, like the list would on first show
        try:
            await self.state.refresh()
        except RegistryError as e:
            self.notify(e.user_message, title="Could not load products", severity="error")

        self.post_message(ModeSwitchedMessage(self.current_mode, "products"))
        await self.switch_mode("products")


def run() -> None:
    RegistryApp().run()


if __name__ == "__main__":
    run()
