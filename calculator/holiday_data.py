# Holiday data models
import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, field_validator

from calculator.dates import to_date


class HolidayType(str, Enum):
    BANK = "bank"
    PROVINCIAL = "provincial"


class Holiday(BaseModel):
    """
    A holiday on a single calendar day.

    `province` is None for national holidays. Within a dataset a holiday is
    identified by (date, province).
    """
    id: Optional[str] = None
    date: datetime.date
    name: str
    province: Optional[str] = None
    type: HolidayType = HolidayType.BANK

    @field_validator("date", mode="before")
    @classmethod
    def _date_only(cls, v):
        return to_date(v)

    @field_validator("province", mode="before")
    @classmethod
    def _province_code(cls, v):
        if v is None or v == "":
            return None
        return str(v).strip().upper()

    @property
    def key(self) -> tuple[datetime.date, Optional[str]]:
        return (self.date, self.province)

    @property
    def is_national(self) -> bool:
        return self.province is None

    @property
    def is_bank(self) -> bool:
        return self.type == HolidayType.BANK
