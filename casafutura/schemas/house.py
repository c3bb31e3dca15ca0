from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from casafutura.models import Amenity


class Location(BaseModel):
    lat: float = 0.0
    lng: float = 0.0
    address: str = ""


class HouseBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str = Field(min_length=2, max_length=120)
    summary: str = Field(default="", max_length=300)
    description: str = ""
    capacity: int = Field(default=2, ge=1, le=20)
    bedrooms: int = Field(default=1, ge=0)
    bathrooms: int = Field(default=1, ge=0)
    amenities: list[Amenity] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    location: Location = Field(default_factory=Location)
    active: bool = True


class HouseCreate(HouseBase):
    pass


class HouseUpdate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: Optional[str] = Field(default=None, min_length=2, max_length=120)
    summary: Optional[str] = Field(default=None, max_length=300)
    description: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=1, le=20)
    bedrooms: Optional[int] = Field(default=None, ge=0)
    bathrooms: Optional[int] = Field(default=None, ge=0)
    amenities: Optional[list[Amenity]] = None
    images: Optional[list[str]] = None
    location: Optional[Location] = None
    active: Optional[bool] = None


class House(HouseBase):
    id: str
    updated_at: datetime
