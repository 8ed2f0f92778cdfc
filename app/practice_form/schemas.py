from __future__ import annotations

import datetime as dt
import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .catalog import cities_for

RE_EMAIL = re.compile(r"^[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}$", re.IGNORECASE)
RE_MOBILE = re.compile(r"[0-9]{10}")
RE_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")

Gender = Literal["Male", "Female", "Other"]
Hobby = Literal["Sports", "Reading", "Music"]
Subject = Literal["Maths", "Physics", "Chemistry", "English", "Computer Science"]
State = Literal["NCR", "Uttar Pradesh", "Haryana", "Rajasthan"]


class FormRecord(BaseModel):
    """One submission of the practice form.

    Serialized with camelCase keys (``firstName``, ``birthDate``...) so the
    fixture documents keep the shape the page fields are named after.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    first_name: str
    last_name: str
    email: str
    gender: Gender
    mobile: str
    birth_date: str
    subject: Subject
    hobby: Hobby
    address: str
    state: State
    city: str

    @field_validator("first_name", "last_name", "address")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("email")
    @classmethod
    def _email_shape(cls, value: str) -> str:
        if not RE_EMAIL.match(value):
            raise ValueError(f"not a valid email address: {value!r}")
        return value

    @field_validator("mobile")
    @classmethod
    def _ten_digits(cls, value: str) -> str:
        if not RE_MOBILE.fullmatch(value):
            raise ValueError(f"mobile must be exactly 10 digits: {value!r}")
        return value

    @field_validator("birth_date")
    @classmethod
    def _iso_date(cls, value: str) -> str:
        if not RE_ISO_DATE.fullmatch(value):
            raise ValueError(f"birth date must be YYYY-MM-DD: {value!r}")
        dt.date.fromisoformat(value)
        return value

    @model_validator(mode="after")
    def _city_in_state(self) -> "FormRecord":
        if self.city not in cities_for(self.state):
            raise ValueError(f"city {self.city!r} does not belong to state {self.state!r}")
        return self

    @property
    def birth_date_value(self) -> dt.date:
        return dt.date.fromisoformat(self.birth_date)

    def to_fixture(self) -> dict:
        return self.model_dump(by_alias=True)
