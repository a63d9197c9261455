"""Domain records exchanged with the CompanyInfo provider.

Provider payloads are decoded into pydantic models (camelCase aliases on the
wire, snake_case in Python). The screener's output row is a plain dataclass.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ListingKind(str, Enum):
    """Instrument kind of an exchange listing."""

    EQUITY = "equity"
    OTHER = "other"


class _ProviderRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _none_to_empty(cls, v, info):
        # The provider sends null for missing strings
        if v is None and cls.model_fields[info.field_name].annotation is str:
            return ""
        return v


class Listing(_ProviderRecord):
    """A tradeable instrument listed on an exchange."""

    symbol: str = ""
    exchange: str = Field(default="", alias="exchangeShortName")
    type: str = ""

    @property
    def kind(self) -> ListingKind:
        return ListingKind.EQUITY if self.type == "stock" else ListingKind.OTHER


class ExecutiveRecord(_ProviderRecord):
    """One executive of one company, with their total compensation."""

    company_symbol: str = Field(default="", alias="symbol")
    industry_title: str = Field(default="", alias="industryTitle")
    name_and_position: str = Field(default="", alias="nameAndPosition")
    total_compensation: float = Field(default=0.0, ge=0, alias="total")


class IndustryBenchmark(_ProviderRecord):
    """Average total compensation for an industry."""

    industry_title: str = Field(default="", alias="industryTitle")
    average_compensation: float = Field(default=0.0, alias="averageCompensation")


@dataclass(frozen=True)
class ExecutiveCompensation:
    """An executive paid at or above the benchmark multiple for their industry."""

    name_and_position: str
    compensation: float
    average_industry_compensation: float

    def to_dict(self) -> dict:
        """Convert to the JSON shape served to callers."""
        return {
            "nameAndPosition": self.name_and_position,
            "compensation": self.compensation,
            "averageIndustryCompensation": self.average_industry_compensation,
        }
