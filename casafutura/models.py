from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from casafutura.database import Base


class BookingStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"


class Role(str, Enum):
    GUEST = "guest"
    MANAGER = "manager"


class Amenity(str, Enum):
    KITCHEN = "cucina"
    WIFI = "wi-fi"
    ACCESSIBLE = "accessibile"
    AIR_CONDITIONING = "aria-condizionata"
    PARKING = "parcheggio"
    SEA_VIEW = "vista-mare"


class Collection(str, Enum):
    """Named JSON collections; the value is the file name."""

    HOUSES = "houses.json"
    BOOKINGS = "bookings.json"
    HOLIDAYS = "holidays.json"
    USERS = "users.json"


class StoredCollection(Base):
    """One JSON collection stored as a row (the SQL storage backend)."""

    __tablename__ = "data_files"

    name: Mapped[str] = mapped_column(String(120), primary_key=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    sha: Mapped[str] = mapped_column(String(40), nullable=False)
    message: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )
