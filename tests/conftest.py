"""Shared test fixtures."""

from dataclasses import dataclass, field
from typing import List

import pytest

from tagrules.validation import RecordSchema, rule


@dataclass
class User:
    """Record exercising every tag family on every field kind."""

    id: str = rule("len:36")
    age: int = rule("range:18,50")
    email: str = rule("min:5")
    role: str = rule("in:admin,stuff")
    name: str = ""
    phones: List[str] = rule("len:11", default_factory=list)
    scores: List[int] = rule("in:1,2,3", default_factory=list)
    nickname: str = rule("max:8", default="")


@dataclass
class Plain:
    """Record without any tagged field."""

    count: int = -1
    label: str = ""
    values: List[int] = field(default_factory=list)


@pytest.fixture
def valid_user() -> User:
    """Fixture providing a user that satisfies every tag."""
    return User(
        id="0" * 36,
        name="Alice",
        age=30,
        email="alice@example.com",
        role="admin",
        phones=["79991234567", "79997654321"],
        scores=[1, 3, 2],
        nickname="al",
    )


@pytest.fixture
def user_schema_document() -> dict:
    """Fixture providing a schema document for mapping records."""
    return {
        "name": "user",
        "description": "User payload",
        "fields": [
            {"name": "age", "kind": "int", "validate": "range:18,50"},
            {"name": "role", "kind": "string", "validate": "in:admin,stuff"},
            {"name": "phones", "kind": "[]string", "validate": "len:11"},
            {"name": "note", "kind": "string"},
        ],
    }


@pytest.fixture
def user_schema(user_schema_document) -> RecordSchema:
    """Fixture providing a parsed user schema."""
    return RecordSchema.from_dict(user_schema_document)
