"""
ArangoDB persistence layer for casbin policy rules.
"""

from typing import Iterable, List, Optional, Sequence

from arango import errno
from arango.database import StandardDatabase
from arango.exceptions import ArangoServerError, CollectionCreateError, IndexCreateError

from casbin_arango_adapter.shared.errors import InvalidDocumentError
from casbin_arango_adapter.shared.logging import get_logger
from casbin_arango_adapter.shared.metrics import MetricsCollector, get_metrics_collector
from ..rules.codec import RuleCodec
from ..rules.models import Document, FieldMapping, PolicyRule, DEFAULT_FIELD_MAPPING
from .queries import AqlQuery, QueryBuilder

DEFAULT_COLLECTION_NAME = "casbin_rules"


class ArangoRuleStore:
    """Stores policy rules as documents of one ArangoDB collection.

    The store keeps no state besides its configuration: each call is a
    single round trip, except save_all which truncates and then inserts.
    Nothing isolates those two steps from concurrent readers or writers of
    the same collection; callers that need that must serialize save_all
    themselves.
    """

    def __init__(
        self,
        database: StandardDatabase,
        collection_name: str = DEFAULT_COLLECTION_NAME,
        mapping: FieldMapping = DEFAULT_FIELD_MAPPING,
        autocreate: bool = True,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.database = database
        self.collection_name = collection_name
        self.mapping = mapping
        self.autocreate = autocreate
        self.codec = RuleCodec(mapping)
        self.queries = QueryBuilder(mapping, collection_name)
        self.metrics = metrics or get_metrics_collector()
        self.logger = get_logger("casbin_arango.store")

        if autocreate:
            self._ensure_collection()
        self.collection = database.collection(collection_name)
        self._ensure_unique_index()

    def _ensure_collection(self):
        """Create the collection unless it exists."""
        if self.database.has_collection(self.collection_name):
            return
        try:
            self.database.create_collection(self.collection_name)
            self.logger.info("Collection created", collection=self.collection_name)
        except CollectionCreateError as e:
            # Another adapter created it in the meantime
            if e.error_code != errno.DUPLICATE_NAME:
                raise
            self.logger.debug("Collection created concurrently", collection=self.collection_name)

    def _ensure_unique_index(self):
        """Ensure the sparse unique index over all mapped fields."""
        try:
            self.collection.add_index(self.queries.unique_index())
        except IndexCreateError as e:
            if e.error_code != errno.DUPLICATE_NAME:
                raise
            self.logger.debug("Unique index created concurrently", collection=self.collection_name)

    def _run(self, query: AqlQuery) -> List[dict]:
        cursor = self.database.aql.execute(query.text, bind_vars=query.bind_vars)
        try:
            return list(cursor)
        finally:
            cursor.close(ignore_missing=True)

    def load(self) -> List[PolicyRule]:
        """Load every rule in the collection.

        A single undecodable document fails the whole load.
        """
        with self.metrics.track_operation("load"):
            documents = self._run(self.queries.load_all())
            rules = []
            for document in documents:
                try:
                    rules.append(self.codec.decode(document))
                except InvalidDocumentError as e:
                    self.logger.error("Invalid policy document", collection=self.collection_name, error=str(e))
                    raise

        self.metrics.record_documents("load", len(rules))
        self.logger.info("Policy loaded", collection=self.collection_name, rules=len(rules))
        return rules

    def _insert_documents(self, documents: List[Document]):
        results = self.collection.insert_many(documents)
        for result in results:
            if isinstance(result, ArangoServerError):
                raise result

    def save_all(self, rules: Iterable[PolicyRule]):
        """Replace the whole collection with `rules`."""
        with self.metrics.track_operation("save_all"):
            documents = [self.codec.encode_rule(rule) for rule in rules]

            self.collection.truncate()
            if documents:
                self._insert_documents(documents)

        self.metrics.record_documents("save_all", len(documents))
        self.logger.info("Policy saved", collection=self.collection_name, rules=len(documents))

    def add_one(self, ptype: str, values: Sequence[str]):
        """Insert a single rule."""
        with self.metrics.track_operation("add_one"):
            document = self.codec.encode(ptype, values)
            self.collection.insert(document)

        self.metrics.record_documents("add_one", 1)
        self.logger.debug("Rule added", ptype=ptype, values=list(values))

    def add_many(self, rules: Sequence[PolicyRule]):
        """Insert several rules with a single request."""
        with self.metrics.track_operation("add_many"):
            documents = [self.codec.encode_rule(rule) for rule in rules]
            if documents:
                self._insert_documents(documents)

        self.metrics.record_documents("add_many", len(documents))
        self.logger.debug("Rules added", rules=len(documents))

    def remove_one(self, ptype: str, values: Sequence[str]):
        """Remove every document equal to the rule."""
        with self.metrics.track_operation("remove_one"):
            document = self.codec.encode(ptype, values)
            self._run(self.queries.exact_delete(document))

        self.logger.debug("Rule removed", ptype=ptype, values=list(values))

    def remove_many(self, rules: Sequence[PolicyRule]):
        """Remove every document equal to any of the rules."""
        if not rules:
            return
        with self.metrics.track_operation("remove_many"):
            documents = [self.codec.encode_rule(rule) for rule in rules]
            self._run(self.queries.batch_delete(documents))

        self.logger.debug("Rules removed", rules=len(rules))

    def remove_filtered(self, ptype: str, offset: int, values: Sequence[str]):
        """Remove rules of `ptype` matching the non-blank `values`.

        `values[i]` is compared with the field at mapping position
        `offset + i`; blank entries match anything.
        """
        with self.metrics.track_operation("remove_filtered"):
            self._run(self.queries.filtered_delete(ptype, offset, values))

        self.logger.debug("Filtered rules removed", ptype=ptype, offset=offset, values=list(values))
