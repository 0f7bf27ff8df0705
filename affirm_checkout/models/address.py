"""Address models for Affirm checkout"""

import uuid
from typing import Optional

from pydantic import BaseModel, Field


class Region(BaseModel):
    """State or province an address belongs to"""
    id: int
    abbr: str
    name: str
    country: str = "US"


class Address(BaseModel):
    """Postal address attached to an order"""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    address1: str = Field(min_length=1)
    address2: Optional[str] = None
    city: str = Field(min_length=1)
    zipcode: str = Field(min_length=1)
    phone: Optional[str] = None
    country: str = Field(default="US", min_length=1)
    region: Optional[Region] = None
    # Region text as supplied, kept when no Region could be resolved
    region_code: Optional[str] = None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.firstname, self.lastname) if part)
