"""
Policy rule data models for the ArangoDB adapter.
"""

import re
from typing import Dict, Sequence, Tuple
from dataclasses import dataclass

from casbin_arango_adapter.shared.errors import InvalidFieldMappingError

# Stored form of a rule: field name -> value
Document = Dict[str, str]

_FIELD_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class FieldMapping:
    """Ordered document field names for rule positions.

    Position 0 names the discriminator (ptype), the remaining positions name
    the value slots v0, v1, ... The number of names fixes the maximum arity.
    """
    fields: Tuple[str, ...]

    def __post_init__(self):
        # A bare string would be split into one field per character
        if isinstance(self.fields, str):
            raise InvalidFieldMappingError(
                "field mapping must be a sequence of names, not a string",
                details={"fields": self.fields}
            )

        # Accept any sequence but store a tuple
        object.__setattr__(self, "fields", tuple(self.fields))

        if len(self.fields) < 2:
            raise InvalidFieldMappingError(
                "field mapping needs a discriminator and at least one value field",
                details={"fields": list(self.fields)}
            )

        for name in self.fields:
            if not isinstance(name, str) or not _FIELD_NAME.match(name):
                raise InvalidFieldMappingError(
                    f"invalid field name: {name!r}",
                    details={"fields": list(self.fields)}
                )

        duplicates = sorted({name for name in self.fields if self.fields.count(name) > 1})
        if duplicates:
            raise InvalidFieldMappingError(
                "field names must be distinct",
                details={"duplicates": duplicates}
            )

    @classmethod
    def of(cls, *fields: str) -> "FieldMapping":
        return cls(tuple(fields))

    @property
    def discriminator(self) -> str:
        return self.fields[0]

    @property
    def value_fields(self) -> Tuple[str, ...]:
        return self.fields[1:]

    @property
    def max_arity(self) -> int:
        """Number of value slots."""
        return len(self.fields) - 1

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self):
        return iter(self.fields)


# Same names the MongoDB adapter uses, so collections can be migrated as-is
DEFAULT_FIELD_MAPPING = FieldMapping(("PType", "V0", "V1", "V2", "V3", "V4", "V5"))


@dataclass(frozen=True)
class PolicyRule:
    """Policy rule: discriminator plus ordered values."""
    ptype: str
    values: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(self.values))

    @classmethod
    def of(cls, ptype: str, values: Sequence[str]) -> "PolicyRule":
        return cls(ptype, tuple(values))

    @property
    def section(self) -> str:
        """Model section the rule belongs to ("p" or "g")."""
        return self.ptype[:1]

    @property
    def arity(self) -> int:
        return len(self.values)
