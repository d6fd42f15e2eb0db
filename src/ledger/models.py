# provide dataclass models for the registry

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime, timezone
from typing import Any, List

from ledger.units import display_price

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


@dataclass(frozen=True)
class ProductDraft:
    """
    What the user typed into the registration form.
    price_per_unit stays as text until the registry client scales it.
    """

    name: str
    category: str
    date_of_harvest: str
    time_of_harvest: str
    farm_location: str
    quality_rating: str
    price_per_unit: str
    description: str

    def missing_fields(self) -> List[str]:
        """Names of the fields left blank."""
        return [f.name for f in fields(self) if not str(getattr(self, f.name)).strip()]


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    category: str
    date_of_harvest: str
    time_of_harvest: str
    farm_location: str
    quality_rating: str
    price_per_unit: int  # minor units, 18 decimals
    description: str
    farmer: str
    is_available: bool
    created_at: int  # unix seconds

    @classmethod
    def from_record(cls, record: Any) -> "Product":
        """
        Build a Product from a decoded getProduct/getAllProducts tuple.
        Field order follows the contract struct.
        """
        (
            pid,
            name,
            category,
            date_of_harvest,
            time_of_harvest,
            farm_location,
            quality_rating,
            price_per_unit,
            description,
            farmer,
            is_available,
            created_at,
        ) = record
        return cls(
            id=int(pid),
            name=name,
            category=category,
            date_of_harvest=date_of_harvest,
            time_of_harvest=time_of_harvest,
            farm_location=farm_location,
            quality_rating=quality_rating,
            price_per_unit=int(price_per_unit),
            description=description,
            farmer=str(farmer),
            is_available=bool(is_available),
            created_at=int(created_at),
        )

    @property
    def is_empty(self) -> bool:
        # unset mapping slots come back zeroed
        return self.farmer.lower() == ZERO_ADDRESS

    @property
    def price_display(self) -> str:
        return display_price(self.price_per_unit)

    @property
    def created_at_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.created_at, tz=timezone.utc)

    @property
    def short_farmer(self) -> str:
        return f"{self.farmer[:8]}...{self.farmer[-6:]}"


@dataclass(frozen=True)
class Receipt:
    tx_hash: str
    block_number: int
    gas_used: int
    status: int


@dataclass(frozen=True)
class Session:
    """
    An authorized wallet connection.
    The contract handle is bound to the account, so the three always exist together.
    """

    provider: Any
    account: str
    contract: Any
