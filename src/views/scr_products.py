from textual import on, work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.reactive import reactive
from textual.widgets import DataTable, Input, Label

from ledger.errors import RegistryError
from utils.messages import ProductsChangedMessage
from utils.pure import PRODUCT_COLUMNS, product_row
from views.base_screen import BaseScreen
from views.modal_prod_detail import ProdDetailModal


class ProductListScreen(BaseScreen):
    """
    Every product on the ledger, in ledger order.
    Typing filters the cached snapshot; it never re-sorts it.
    """

    BINDINGS = [
        Binding("ctrl+r", "refresh_products", "Reload", show=True),
        Binding("escape", "focus_filter", "Filter", show=True),
    ]

    query_str = reactive("")

    def compose(self) -> ComposeResult:
        yield from super().compose()
        yield Input(id="input-filter", placeholder="Filter by name, category or farm...")
        yield DataTable(id="table-products")
        yield Label("", id="label-status")

    def on_mount(self):
        table = self.query_one(DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        table.add_columns(*PRODUCT_COLUMNS)

        self.render_products()
        if self.app.state.cache.last_refreshed is None:
            self.action_refresh_products()

    def on_screen_resume(self) -> None:
        self.render_products()

    async def on_input_changed(self, message: Input.Changed) -> None:
        if message.input.id == "input-filter":
            self.query_str = message.value

    def watch_query_str(self, _old: str, _new: str) -> None:
        self.render_products()

    @on(ProductsChangedMessage)
    def handle_products_changed(self) -> None:
        self.render_products()

    def render_products(self) -> None:
        if not self.is_mounted:
            return
        needle = self.query_str.strip().lower()
        products = [
            p
            for p in self.app.state.products
            if not needle
            or needle in p.name.lower()
            or needle in p.category.lower()
            or needle in p.farm_location.lower()
        ]

        table = self.query_one(DataTable)
        table.clear()
        for p in products:
            table.add_row(*product_row(p), key=str(p.id))

        total = len(self.app.state.products)
        self.sub_title = f"All Products ({total})"
        self.query_one("#label-status", Label).update(
            f"Showing {len(products)} of {total}" if needle else ""
        )

    def action_focus_filter(self) -> None:
        self.query_one("#input-filter").focus()

    @work(exclusive=True, group="refresh")
    async def action_refresh_products(self) -> None:
        label = self.query_one("#label-status", Label)
        label.update("Loading products...")
        try:
            await self.app.state.refresh()
        except RegistryError as e:
            # previous snapshot stays on screen
            label.update("")
            self.notify(e.user_message, title="Reload failed", severity="error")
            return
        self.post_message(ProductsChangedMessage())

    @on(DataTable.RowSelected)
    @work(exclusive=True, group="detail")
    async def handle_row_selected(self, event: DataTable.RowSelected) -> None:
        product_id = int(event.row_key.value)
        await self.app.push_screen_wait(ProdDetailModal(product_id))
