"""
Wiring of python-arango clients, rule stores and casbin adapters from config.
"""

from typing import Optional

from arango import ArangoClient, errno
from arango.database import StandardDatabase
from arango.exceptions import DatabaseCreateError

from casbin_arango_adapter.shared.logging import get_logger
from casbin_arango_adapter.shared.metrics import MetricsCollector
from .adapter import CasbinArangoAdapter
from .config import AdapterConfig, get_config
from .persistence.arangodb import ArangoRuleStore

logger = get_logger("casbin_arango.factory")


def _credentials(config: AdapterConfig) -> dict:
    if config.username is None:
        return {}
    return {"username": config.username, "password": config.password or ""}


def create_client(config: AdapterConfig) -> ArangoClient:
    """Create an ArangoDB client for the configured endpoints."""
    return ArangoClient(hosts=list(config.endpoints), request_timeout=config.request_timeout)


def ensure_database(client: ArangoClient, config: AdapterConfig):
    """Create the configured database unless it exists."""
    sys_db = client.db("_system", **_credentials(config))
    if sys_db.has_database(config.database_name):
        return
    try:
        sys_db.create_database(config.database_name)
        logger.info("Database created", database=config.database_name)
    except DatabaseCreateError as e:
        if e.error_code != errno.DUPLICATE_NAME:
            raise
        logger.debug("Database created concurrently", database=config.database_name)


def open_database(config: AdapterConfig, client: Optional[ArangoClient] = None) -> StandardDatabase:
    """Open the configured database, creating it first when autocreate is on."""
    client = client or create_client(config)
    if config.autocreate:
        ensure_database(client, config)
    return client.db(config.database_name, **_credentials(config))


def create_rule_store(
    config: Optional[AdapterConfig] = None,
    database: Optional[StandardDatabase] = None,
    metrics: Optional[MetricsCollector] = None,
) -> ArangoRuleStore:
    """Build a rule store; the field mapping is validated before any I/O."""
    config = config or get_config()
    mapping = config.build_field_mapping()
    if database is None:
        database = open_database(config)
    return ArangoRuleStore(
        database,
        collection_name=config.collection_name,
        mapping=mapping,
        autocreate=config.autocreate,
        metrics=metrics,
    )


def create_adapter(config: Optional[AdapterConfig] = None, **overrides) -> CasbinArangoAdapter:
    """Build a casbin adapter.

    Keyword overrides are applied on top of the environment, e.g.
    create_adapter(collection_name="rules", field_mapping=["p", "sub", "obj", "act"]).
    """
    if config is None:
        config = get_config(**overrides)
    elif overrides:
        config = config.model_copy(update=overrides)
    return CasbinArangoAdapter(create_rule_store(config))
