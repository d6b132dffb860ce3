"""
Prefixed identifiers for domain entities.
Format: <prefix>_<epoch-millis>_<9 base36 chars>, e.g. sess_1718000000000_k3j9x0abc
"""

import random
import re
import string
import time
from dataclasses import dataclass
from typing import ClassVar

_ALPHABET = string.digits + string.ascii_lowercase


@dataclass(frozen=True)
class EntityId:
    """Immutable prefixed identifier value object."""

    value: str

    prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        """Validate identifier format."""
        if not self.value:
            raise ValueError(f"{type(self).__name__} cannot be empty")

        if not isinstance(self.value, str):
            raise ValueError(f"{type(self).__name__} must be a string")

        if not self.pattern().match(self.value):
            raise ValueError(
                f"{type(self).__name__} must follow format: {self.prefix}_<millis>_<suffix>"
            )

    @classmethod
    def pattern(cls) -> "re.Pattern[str]":
        return re.compile(rf"^{cls.prefix}_\d{{13}}_[0-9a-z]{{9}}$")

    @classmethod
    def is_valid(cls, value: str) -> bool:
        return bool(value) and bool(cls.pattern().match(value))

    @classmethod
    def generate(cls) -> "EntityId":
        """Generate a new identifier from the current time and a random suffix."""
        millis = int(time.time() * 1000)
        suffix = "".join(random.choices(_ALPHABET, k=9))
        return cls(f"{cls.prefix}_{millis}_{suffix}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SessionId(EntityId):
    prefix: ClassVar[str] = "sess"


@dataclass(frozen=True)
class TranscriptionId(EntityId):
    prefix: ClassVar[str] = "trans"


@dataclass(frozen=True)
class SummaryId(EntityId):
    prefix: ClassVar[str] = "sum"


@dataclass(frozen=True)
class PatientId(EntityId):
    prefix: ClassVar[str] = "pat"
