from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Label, Static

from ledger.errors import ProviderMissing, RegistryError
from utils.logger import get_logger
from utils.messages import WalletConnectedMessage
from views.base_screen import BaseScreen
from views.modal_dialog import ErrorDialogModal, QuitDialogModal

_logger = get_logger(__name__)


class ConnectScreen(BaseScreen):
    """
    Dismisses with the connected account address.
    """

    def __init__(self):
        super().__init__()
        self.configure(header_sub_title="Connect Wallet", show_sidebar=False)

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with Vertical(id="div-connect"):
            yield Label("Product Registry", id="label-title")
            yield Static(
                "Connect your wallet to browse and register products.",
                id="label-hint",
            )
            with Horizontal(id="div-connect-btns"):
                yield Button("Quit", id="btn-quit")
                yield Button("Connect Wallet", id="btn-connect", variant="primary")

    def on_mount(self):
        self.query_one("#btn-connect").focus()

    @on(Button.Pressed, "#btn-connect")
    @work(exclusive=True)
    async def handle_connect(self) -> None:
        btn = self.query_one("#btn-connect", Button)
        btn.disabled = True
        btn.label = "Waiting for wallet..."
        try:
            account = await self.app.state.connect()
        except RegistryError as e:
            _logger.warning(f"Connect failed: {e!r}")
            if isinstance(e, ProviderMissing):
                self.query_one("#label-hint", Static).update(e.user_message)
            await self.app.push_screen_wait(ErrorDialogModal(e))
            return
        finally:
            btn.disabled = False
            btn.label = "Connect Wallet"

        self.notify(f"Connected: {account}")
        self.app.post_message(WalletConnectedMessage(account))
        self.dismiss(account)

    @on(Button.Pressed, "#btn-quit")
    def handle_quit(self) -> None:
        self.app.push_screen(QuitDialogModal())
