# side-effect free helpers used by the views

from typing import Any, List, Literal, Optional, Sequence

from ledger.models import Product

PRODUCT_COLUMNS = [
    "ID",
    "Name",
    "Category",
    "Farm",
    "Quality",
    "Price (ETH)",
    "Farmer",
    "Available",
]

_ALIGN_MAP = {
    "l": ":---",
    "c": ":---:",
    "r": "---:",
}


def _escape_cell(value: Any) -> str:
    return str(value).replace("|", "\\|").replace("\n", " ")


def generate_markdown_table(
    headers: Optional[Sequence[Any]],
    rows: Sequence[Sequence[Any]],
    aligns: Optional[List[Literal["l", "c", "r"]]] = None,
) -> str:
    """
    Generate a Markdown table.

    Args:
        headers: column headers, or None to use the first row as headers.
        rows: list of rows; cells are stringified and pipes escaped.
        aligns: 'l', 'c' or 'r' per column, all centered by default.
    """
    if not rows:
        return ""

    if not headers:
        headers, rows = rows[0], rows[1:]

    headers = [_escape_cell(h) for h in headers]
    rows = [[_escape_cell(c) for c in row] for row in rows]

    if aligns is None:
        aligns = ["c"] * len(headers)
    elif len(aligns) != len(headers):
        raise ValueError("Length of aligns must match number of headers.")

    lines = [
        "| " + " | ".join(headers) + " |",
        "| " + " | ".join(_ALIGN_MAP[a] for a in aligns) + " |",
    ]
    lines.extend("| " + " | ".join(row) + " |" for row in rows)
    return "\n".join(lines)


def yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def product_row(product: Product) -> List[str]:
    """One DataTable row, same order as PRODUCT_COLUMNS."""
    return [
        str(product.id),
        product.name,
        product.category,
        product.farm_location,
        product.quality_rating,
        product.price_display,
        product.short_farmer,
        yes_no(product.is_available),
    ]


def product_markdown(product: Product) -> str:
    rows = [
        ["ID", product.id],
        ["Name", product.name],
        ["Category", product.category],
        ["Harvested", f"{product.date_of_harvest} {product.time_of_harvest}"],
        ["Farm Location", product.farm_location],
        ["Quality", product.quality_rating],
        ["Price per Unit", f"{product.price_display} ETH"],
        ["Farmer", product.farmer],
        ["Available", yes_no(product.is_available)],
        ["Registered", product.created_at_datetime.strftime("%Y-%m-%d %H:%M UTC")],
    ]
    table = generate_markdown_table(["Attribute", "Value"], rows, ["l", "l"])
    body = f"### {product.name}\n\n{table}"
    if product.description:
        body += f"\n\n{product.description}"
    return body
