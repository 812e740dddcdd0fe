"""
Conversion between policy rules and ArangoDB documents.
"""

from typing import Any, Mapping, Sequence

from casbin_arango_adapter.shared.errors import EmptyValueError, TooManyArgumentsError, InvalidDocumentError
from .models import Document, FieldMapping, PolicyRule, DEFAULT_FIELD_MAPPING


class RuleCodec:
    """Encode rules to documents and decode them back using a field mapping."""

    def __init__(self, mapping: FieldMapping = DEFAULT_FIELD_MAPPING):
        self.mapping = mapping

    def encode(self, ptype: str, values: Sequence[str]) -> Document:
        """Build the document for a rule.

        Raises TooManyArgumentsError when the rule has more values than the
        mapping has value slots, and EmptyValueError for an empty value since
        decode would end the rule there. Unused trailing slots are left out of
        the document rather than stored as empty strings.
        """
        if 1 + len(values) > len(self.mapping):
            raise TooManyArgumentsError(details={
                "ptype": ptype,
                "values": len(values),
                "max_values": self.mapping.max_arity,
            })
        if "" in values:
            raise EmptyValueError(details={
                "ptype": ptype,
                "position": list(values).index(""),
            })

        document: Document = {self.mapping.discriminator: ptype}
        for name, value in zip(self.mapping.value_fields, values):
            document[name] = value
        return document

    def encode_rule(self, rule: PolicyRule) -> Document:
        return self.encode(rule.ptype, rule.values)

    def decode(self, document: Mapping[str, Any]) -> PolicyRule:
        """Rebuild a rule from a stored document.

        Values are read slot by slot and the first missing or empty slot ends
        the rule; anything stored after such a hole is ignored.
        """
        ptype = document.get(self.mapping.discriminator)
        if not isinstance(ptype, str) or not ptype:
            raise InvalidDocumentError(details={
                "field": self.mapping.discriminator,
                "value": ptype,
            })

        values = []
        for name in self.mapping.value_fields:
            value = document.get(name)
            if value is None or value == "":
                break
            if not isinstance(value, str):
                raise InvalidDocumentError(
                    f"field {name} is not a string",
                    details={"field": name, "ptype": ptype}
                )
            values.append(value)

        return PolicyRule(ptype, tuple(values))
