"""
Shared fixtures: an in-memory stand-in for the python-arango database API.

The fake understands exactly the AQL shapes QueryBuilder produces: the KEEP
projection used for loading and FOR/FILTER/REMOVE with conjunctions (and
disjunctions of parenthesized conjunctions) of equality clauses.
"""

import re
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest
from arango.exceptions import (
    CollectionCreateError,
    DocumentInsertError,
    IndexCreateError,
)
from prometheus_client import CollectorRegistry

from casbin_arango_adapter.shared.metrics import MetricsCollector

_LOAD = re.compile(r"^FOR d IN @@collection RETURN KEEP\(d, @fields\)$")
_REMOVE = re.compile(r"^FOR d IN @@collection FILTER (?P<filter>.+) REMOVE d IN @@collection$")
_CLAUSE = re.compile(r'^d\.(?P<field>\w+) (?:== @(?P<param>\w+)|(?P<absent>IN \[null, ""\]))$')


def make_server_error(error_cls, error_code: int, message: str = "error"):
    """Build a python-arango server error without a real HTTP response."""
    resp = MagicMock()
    resp.error_message = message
    resp.error_code = error_code
    resp.status_code = 409
    resp.status_text = "Conflict"
    resp.url = "http://127.0.0.1:8529"
    resp.method = "post"
    resp.headers = {}
    return error_cls(resp, MagicMock())


class FakeCursor:
    def __init__(self, rows: List[Dict[str, Any]]):
        self._rows = rows
        self.closed = False

    def __iter__(self):
        return iter(self._rows)

    def close(self, ignore_missing=False):
        self.closed = True
        return True


class FakeCollection:
    def __init__(self, name: str, calls: List[str]):
        self.name = name
        self.documents: List[Dict[str, Any]] = []
        self.indexes: List[Dict[str, Any]] = []
        self._calls = calls
        self.index_error: Optional[Exception] = None

    def _unique_key(self, document):
        for index in self.indexes:
            if not index.get("unique"):
                continue
            values = [document.get(name) for name in index["fields"]]
            # Sparse indexes skip documents with any null indexed attribute
            if index.get("sparse") and any(value is None for value in values):
                continue
            return tuple(values)
        return None

    def _conflicts(self, document) -> bool:
        key = self._unique_key(document)
        if key is None:
            return False
        return any(self._unique_key(existing) == key for existing in self.documents)

    def add_index(self, data, formatter=False):
        self._calls.append("add_index")
        if self.index_error is not None:
            raise self.index_error
        if data not in self.indexes:
            self.indexes.append(dict(data))
        return dict(data)

    def insert(self, document, **kwargs):
        self._calls.append("insert")
        if self._conflicts(document):
            raise make_server_error(DocumentInsertError, 1210, "unique constraint violated")
        self.documents.append(dict(document))
        return {"_key": str(len(self.documents))}

    def insert_many(self, documents, **kwargs):
        self._calls.append("insert_many")
        results = []
        for document in documents:
            if self._conflicts(document):
                results.append(make_server_error(DocumentInsertError, 1210, "unique constraint violated"))
                continue
            self.documents.append(dict(document))
            results.append({"_key": str(len(self.documents))})
        return results

    def truncate(self):
        self._calls.append("truncate")
        self.documents = []
        return True


class FakeAQL:
    def __init__(self, database: "FakeDatabase"):
        self._database = database
        self.executed: List[Dict[str, Any]] = []

    def execute(self, query, bind_vars=None, **kwargs):
        bind_vars = bind_vars or {}
        self._database.calls.append("aql")
        self.executed.append({"query": query, "bind_vars": dict(bind_vars)})
        collection = self._database.collections[bind_vars["@collection"]]

        if _LOAD.match(query):
            fields = bind_vars["fields"]
            rows = [
                {name: document[name] for name in fields if name in document}
                for document in collection.documents
            ]
            return FakeCursor(rows)

        match = _REMOVE.match(query)
        if match is None:
            raise AssertionError("unsupported query: %s" % query)
        groups = [self._parse_group(group) for group in match.group("filter").split(" || ")]
        collection.documents = [
            document for document in collection.documents
            if not any(self._matches(document, group, bind_vars) for group in groups)
        ]
        return FakeCursor([])

    @staticmethod
    def _parse_group(group: str):
        group = group.strip()
        if group.startswith("(") and group.endswith(")"):
            group = group[1:-1]
        clauses = []
        for clause in group.split(" && "):
            match = _CLAUSE.match(clause.strip())
            if match is None:
                raise AssertionError("unsupported clause: %s" % clause)
            clauses.append((match.group("field"), match.group("param")))
        return clauses

    @staticmethod
    def _matches(document, clauses, bind_vars) -> bool:
        for field, param in clauses:
            value = document.get(field)
            if param is None:
                if value not in (None, ""):
                    return False
            elif value != bind_vars[param]:
                return False
        return True


class FakeDatabase:
    def __init__(self):
        self.collections: Dict[str, FakeCollection] = {}
        self.calls: List[str] = []
        self.aql = FakeAQL(self)
        self.create_error: Optional[Exception] = None

    def has_collection(self, name):
        self.calls.append("has_collection")
        return name in self.collections

    def create_collection(self, name, **kwargs):
        self.calls.append("create_collection")
        if self.create_error is not None:
            error, self.create_error = self.create_error, None
            self.collections.setdefault(name, FakeCollection(name, self.calls))
            raise error
        if name in self.collections:
            raise make_server_error(CollectionCreateError, 1207, "duplicate name")
        self.collections[name] = FakeCollection(name, self.calls)
        return self.collections[name]

    def collection(self, name):
        if name not in self.collections:
            # python-arango hands out collection wrappers lazily
            self.collections[name] = FakeCollection(name, self.calls)
        return self.collections[name]


@pytest.fixture
def fake_db():
    """In-memory ArangoDB database."""
    return FakeDatabase()


@pytest.fixture
def metrics():
    """Metrics collector on a private registry."""
    return MetricsCollector("test", CollectorRegistry())


@pytest.fixture
def index_conflict_error():
    return make_server_error(IndexCreateError, 1207, "duplicate name")
