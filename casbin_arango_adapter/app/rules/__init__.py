"""
Policy rule package.

Defines how casbin policy rules are represented in ArangoDB documents:

- models: FieldMapping (position -> field name), PolicyRule and the
  default mapping constant.
- codec: RuleCodec converting rules to documents and back.

Arity is carried by field presence: a rule with three values fills the first
three value slots and leaves the rest out of the document.
"""

from .models import Document, FieldMapping, PolicyRule, DEFAULT_FIELD_MAPPING
from .codec import RuleCodec

__all__ = [
    "Document",
    "FieldMapping",
    "PolicyRule",
    "DEFAULT_FIELD_MAPPING",
    "RuleCodec",
]
