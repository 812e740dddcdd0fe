"""
AQL query templates for policy rule storage.

Every template is derived from the field mapping when the builder is created.
Field names come from the validated mapping and are placed into the query
text; rule values and the collection name are always bound as parameters.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence

from casbin_arango_adapter.shared.errors import TooManyFieldsError
from ..rules.models import Document, FieldMapping

COLLECTION_BIND = "@collection"


@dataclass(frozen=True)
class AqlQuery:
    """AQL text with its bind parameters."""
    text: str
    bind_vars: Dict[str, Any] = field(default_factory=dict)


class QueryBuilder:
    """Builds the load, delete and index requests for one collection."""

    def __init__(self, mapping: FieldMapping, collection_name: str):
        self.mapping = mapping
        self.collection_name = collection_name

        self._load_text = "FOR d IN @@collection RETURN KEEP(d, @fields)"
        self._remove_text = "FOR d IN @@collection FILTER {filter} REMOVE d IN @@collection"
        self._equals = ["d.%s == @f%d" % (name, position) for position, name in enumerate(mapping)]
        self._is_absent = ['d.%s IN [null, ""]' % name for name in mapping]

    def _base_bind_vars(self) -> Dict[str, Any]:
        return {COLLECTION_BIND: self.collection_name}

    def load_all(self) -> AqlQuery:
        """Select every document, projected to the mapped fields."""
        bind_vars = self._base_bind_vars()
        bind_vars["fields"] = list(self.mapping.fields)
        return AqlQuery(self._load_text, bind_vars)

    def _exact_clauses(self, document: Mapping[str, str], prefix: str, bind_vars: Dict[str, Any]) -> List[str]:
        clauses = []
        for position, name in enumerate(self.mapping):
            if name in document:
                param = "%sf%d" % (prefix, position)
                clauses.append("d.%s == @%s" % (name, param))
                bind_vars[param] = document[name]
            else:
                # Absent means what decode treats as absent: missing, null or empty.
                # A shorter rule must not match a longer one sharing its prefix.
                clauses.append(self._is_absent[position])
        return clauses

    def exact_delete(self, document: Document) -> AqlQuery:
        """Remove every document equal to the encoded rule."""
        bind_vars = self._base_bind_vars()
        clauses = self._exact_clauses(document, "", bind_vars)
        return AqlQuery(self._remove_text.format(filter=" && ".join(clauses)), bind_vars)

    def batch_delete(self, documents: Sequence[Document]) -> AqlQuery:
        """Remove every document equal to any of the encoded rules."""
        if not documents:
            raise ValueError("batch delete needs at least one document")
        bind_vars = self._base_bind_vars()
        groups = []
        for index, document in enumerate(documents):
            clauses = self._exact_clauses(document, "r%d_" % index, bind_vars)
            groups.append("(%s)" % " && ".join(clauses))
        return AqlQuery(self._remove_text.format(filter=" || ".join(groups)), bind_vars)

    def filtered_delete(self, ptype: str, offset: int, values: Sequence[str]) -> AqlQuery:
        """Remove documents of `ptype` whose fields match `values` from `offset` on.

        `offset` is the mapping position of the first value (1 is the first
        value slot). Blank values are wildcards and add no constraint.
        """
        if offset < 1 or offset + len(values) > len(self.mapping):
            raise TooManyFieldsError(details={
                "offset": offset,
                "values": len(values),
                "max_values": self.mapping.max_arity,
            })

        bind_vars = self._base_bind_vars()
        bind_vars["f0"] = ptype
        clauses = [self._equals[0]]
        for i, value in enumerate(values):
            if value == "":
                continue
            position = offset + i
            clauses.append(self._equals[position])
            bind_vars["f%d" % position] = value
        return AqlQuery(self._remove_text.format(filter=" && ".join(clauses)), bind_vars)

    def unique_index(self) -> Dict[str, Any]:
        """Index definition enforcing full-tuple uniqueness."""
        return {
            "type": "persistent",
            "fields": list(self.mapping.fields),
            "unique": True,
            "sparse": True,
        }
