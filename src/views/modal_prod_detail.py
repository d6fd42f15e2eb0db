from textual import events, on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, LoadingIndicator, MarkdownViewer

from ledger.errors import RegistryError
from ledger.models import Product
from utils.pure import product_markdown


class ProdDetailModal(ModalScreen[bool]):
    """
    Product detail, read fresh from the ledger with getProduct.
    Returns True if the product was found.
    """

    def __init__(self, product_id: int) -> None:
        super().__init__()
        self._product_id = product_id
        self._product: Product | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="div-prod-detail"):
            yield LoadingIndicator()
            yield MarkdownViewer("", show_table_of_contents=False)
            with Horizontal():
                yield Button("Go Back", id="btn-back", variant="primary")

    def on_mount(self) -> None:
        self.query_one(MarkdownViewer).display = False
        self.query_one("#btn-back").focus()
        self.load_product()

    @work(exclusive=True)
    async def load_product(self) -> None:
        viewer = self.query_one(MarkdownViewer)
        try:
            self._product = await self.app.state.fetch_product(self._product_id)
            body = product_markdown(self._product)
        except RegistryError as e:
            body = f"### Product #{self._product_id}\n\n{e.user_message}"

        self.query_one(LoadingIndicator).display = False
        viewer.display = True
        await viewer.document.update(body)

    def on_key(self, event: events.Key) -> None:
        if event.key == "escape":
            self.dismiss(self._product is not None)

    @on(Button.Pressed, "#btn-back")
    def handle_back(self) -> None:
        self.dismiss(self._product is not None)
