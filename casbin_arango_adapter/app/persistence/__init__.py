"""
Persistence package: AQL query templates and the ArangoDB rule store.
"""

from .queries import AqlQuery, QueryBuilder
from .arangodb import ArangoRuleStore, DEFAULT_COLLECTION_NAME

__all__ = ["AqlQuery", "QueryBuilder", "ArangoRuleStore", "DEFAULT_COLLECTION_NAME"]
