from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from casafutura.models import Role
from casafutura.schemas.booking import EMAIL_PATTERN


class User(BaseModel):
    """Stored user record; never returned as is."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str
    email: str
    password_hash: str
    role: Role = Role.GUEST


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    role: Role


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    email: str = Field(pattern=EMAIL_PATTERN, max_length=254)
    password: str = Field(min_length=8, max_length=128)


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut
