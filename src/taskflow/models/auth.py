"""Authentication models.

The record service reports sign-in through loosely shaped success and error
callbacks. These types give the rest of the application a closed result to
match on instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class User(BaseModel):
    """Signed-in user as reported by the record service.

    Attributes:
        id: Optional service user id
        first_name: Optional given name
        email_address: Optional email address
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    id: str | None = None
    first_name: str | None = None
    email_address: str | None = None

    @property
    def display_name(self) -> str:
        return self.first_name or self.email_address or "there"


@dataclass(frozen=True)
class Authenticated:
    """Successful sign-in."""

    user: User
    token: str


@dataclass(frozen=True)
class Failed:
    """Failed sign-in with a human readable reason."""

    reason: str


AuthResult = Union[Authenticated, Failed]
