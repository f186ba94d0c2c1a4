"""
Pronouns Pydantic Schemas

Pronoun sets are capitalised words separated by slashes: "He/Him",
"They/Them", "She/Her/Hers".
"""

import re

from pydantic import Field, field_validator

from library_api.schemas.common import AuditResponse, ListQuery, RequestModel, UpdateModel

PRONOUNS_PATTERN = re.compile(r"^[A-Z][a-z]+(?:/[A-Z][a-z]+)*$")


def _check_pronouns(value: str | None) -> str | None:
    if value is not None and not PRONOUNS_PATTERN.fullmatch(value):
        raise ValueError(
            'must be capitalised words separated by "/", e.g. "They/Them"'
        )
    return value


class PronounsCreate(RequestModel):
    name: str = Field(
        ...,
        min_length=3,
        max_length=100,
        examples=["They/Them"],
    )
    is_active: bool = Field(default=True)

    check_name_format = field_validator("name")(_check_pronouns)


class PronounsUpdate(UpdateModel):
    name: str | None = Field(default=None, min_length=3, max_length=100)
    is_active: bool | None = None

    check_name_format = field_validator("name")(_check_pronouns)


class PronounsListQuery(ListQuery):
    name: str | None = Field(default=None, max_length=100)


class PronounsResponse(AuditResponse):
    name: str
