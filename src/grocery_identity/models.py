"""Core data models for item identity resolution and price labels."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from .item_normalizer import normalize_item_name


class PriceSource(str, Enum):
    """Where a price observation came from."""

    PERSONAL = "personal"
    CROWDSOURCED = "crowdsourced"
    AI_ESTIMATE = "ai_estimate"

    @classmethod
    def _missing_(cls, value: object) -> "PriceSource | None":
        # Older records store AI prices as "ai".
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered == "ai":
                return cls.AI_ESTIMATE
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class UnitCategory(str, Enum):
    """Dimension a pack size is measured in."""

    VOLUME = "volume"
    WEIGHT = "weight"
    COUNT = "count"


class RawMention(BaseModel):
    """An item as typed by a user or read off a receipt."""

    text: str
    size: str | None = None
    unit: str | None = None

    @property
    def normalized_name(self) -> str:
        """Comparison form of the mention text."""
        return normalize_item_name(self.text)

    @property
    def size_token(self) -> str:
        """Size and unit joined, e.g. size "2" with unit "pt" gives "2pt".

        A unit already written at the end of the size is not repeated.
        """
        size = (self.size or "").strip()
        unit = (self.unit or "").strip()
        if unit and size.lower().endswith(unit.lower()):
            return size
        return f"{size}{unit}"

    @property
    def key(self) -> str:
        """Variant key of the mention text, size and unit."""
        from .variant_key import variant_key

        return variant_key(self.text, self.size_token)


class MatchCandidate(BaseModel):
    """A catalog name judged similar to the input."""

    name: str
    similarity: float = Field(ge=0, le=100)
    is_exact: bool = False


class PriceObservation(BaseModel):
    """A single price report for one variant."""

    price: float
    source: PriceSource
    report_count: int = 0
    store_name: str | None = None
    size: str | None = None
    observed_at: datetime | None = None

    @field_validator("report_count", mode="before")
    @classmethod
    def clamp_report_count(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and v < 0:
            return 0
        return v


class PriceLabel(BaseModel):
    """Confidence qualifier shown around a price."""

    prefix: str = ""
    suffix: str = ""

    def format(self, price: float, currency: str = "£") -> str:
        """Render the price with its qualifier, e.g. "~£2.50 est."."""
        text = f"{self.prefix}{currency}{price:.2f}"
        if self.suffix:
            text = f"{text} {self.suffix}"
        return text


class ParsedSize(BaseModel):
    """A pack size reduced to base units."""

    value: float
    unit: str
    category: UnitCategory
    normalized_value: float
    display: str
    original: str


class ResolvedPrice(BaseModel):
    """The price picked for a variant out of all available observations."""

    price: float | None = None
    source: PriceSource = PriceSource.AI_ESTIMATE
    confidence: float = Field(default=0.0, ge=0, le=1)
    store_name: str | None = None
    report_count: int = 0

    @property
    def label(self) -> PriceLabel:
        """Confidence label for the resolved price."""
        from .price_resolver import get_price_label

        return get_price_label(self.price, self.source, self.report_count, self.store_name)
