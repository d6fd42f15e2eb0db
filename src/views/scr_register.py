from __future__ import annotations

from typing import Dict

from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.validation import Number
from textual.widgets import Button, Input, Label, TextArea

from ledger.errors import InvalidPrice, RegistryError
from ledger.models import ProductDraft
from ledger.units import scale_price
from utils.logger import get_logger
from utils.messages import ProductRegisteredMessage
from views.base_screen import BaseScreen
from views.modal_dialog import ErrorDialogModal

_logger = get_logger(__name__)

# draft field -> (label, placeholder)
FORM_FIELDS: Dict[str, tuple[str, str]] = {
    "name": ("Product Name", "Tomatoes"),
    "category": ("Category", "Vegetable"),
    "date_of_harvest": ("Date of Harvest", "2025-06-01"),
    "time_of_harvest": ("Time of Harvest", "07:30"),
    "farm_location": ("Farm Location", "Green Valley"),
    "quality_rating": ("Quality Rating", "A"),
    "price_per_unit": ("Price (ETH)", "1.5"),
}


class RegisterProductScreen(BaseScreen):
    """
    Collects a ProductDraft and registers it on the ledger.
    The form is cleared only after the transaction is finalized.
    """

    def compose(self) -> ComposeResult:
        yield from super().compose()
        with VerticalScroll(id="div-register"):
            for field_name, (label, placeholder) in FORM_FIELDS.items():
                yield Label(label)
                if field_name == "price_per_unit":
                    yield Input(
                        placeholder=placeholder,
                        id=f"input-{field_name}",
                        type="number",
                        validators=[Number(minimum=0.0)],
                    )
                else:
                    yield Input(placeholder=placeholder, id=f"input-{field_name}")
            yield Label("Description")
            yield TextArea(id="input-description")
            with Horizontal(id="div-register-btns"):
                yield Button("Clear", id="btn-clear")
                yield Button("Register Product", id="btn-register", variant="success")

    def on_mount(self) -> None:
        self.query_one("#input-name").focus()

    def read_draft(self) -> ProductDraft:
        values = {
            name: self.query_one(f"#input-{name}", Input).value.strip()
            for name in FORM_FIELDS
        }
        values["description"] = self.query_one("#input-description", TextArea).text.strip()
        return ProductDraft(**values)

    def clear_form(self) -> None:
        for name in FORM_FIELDS:
            inp = self.query_one(f"#input-{name}", Input)
            inp.value = ""
            inp.remove_class("-invalid")
        self.query_one("#input-description", TextArea).text = ""
        self.query_one("#input-name").focus()

    def mark_invalid(self, field_name: str) -> None:
        widget = self.query_one(f"#input-{field_name}")
        widget.add_class("-invalid")
        widget.focus()

    @on(Button.Pressed, "#btn-clear")
    def handle_clear(self) -> None:
        self.clear_form()

    @on(Button.Pressed, "#btn-register")
    @work(exclusive=True)
    async def handle_register(self) -> None:
        draft = self.read_draft()

        missing = draft.missing_fields()
        if missing:
            self.notify("Make sure all fields are filled.", severity="error")
            self.mark_invalid(missing[0])
            return

        # surface a bad price next to the field instead of after a round trip
        try:
            scale_price(draft.price_per_unit)
        except InvalidPrice as e:
            self.notify(e.user_message, severity="error")
            self.mark_invalid("price_per_unit")
            return

        btn = self.query_one("#btn-register", Button)
        btn.disabled = True
        btn.label = "Registering..."
        try:
            receipt = await self.app.state.register(draft)
        except RegistryError as e:
            _logger.warning(f"Register failed: {e!r}")
            await self.app.push_screen_wait(ErrorDialogModal(e))
            return
        finally:
            btn.disabled = False
            btn.label = "Register Product"

        self.clear_form()
        self.notify(f"Product registered successfully! ({receipt.tx_hash[:10]}...)")
        self.app.post_message(ProductRegisteredMessage(receipt.tx_hash, draft.name))
