"""
Typed query criteria for the entries store.

Each criterion is a small immutable value naming a SalaryEntry field.
The repository translates them into SQL; nothing here touches the database.
"""

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Equals:
    field: str
    value: Any

    def describe(self) -> str:
        return f"{self.field} = {self.value}"


@dataclass(frozen=True)
class NotEquals:
    field: str
    value: Any

    def describe(self) -> str:
        return f"{self.field} != {self.value}"


@dataclass(frozen=True)
class Between:
    """Inclusive numeric range."""

    field: str
    low: float
    high: float

    def describe(self) -> str:
        return f"{self.low} <= {self.field} <= {self.high}"


@dataclass(frozen=True)
class IsNotNull:
    field: str

    def describe(self) -> str:
        return f"{self.field} IS NOT NULL"


Criterion = Union[Equals, NotEquals, Between, IsNotNull]
