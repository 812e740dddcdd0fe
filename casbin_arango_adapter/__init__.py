"""
casbin ArangoDB adapter.

Usage::

    import casbin
    from casbin_arango_adapter import create_adapter

    adapter = create_adapter(collection_name="casbinrules",
                             field_mapping=["p", "sub", "obj", "act"])
    enforcer = casbin.Enforcer("model.conf", adapter)
"""

from .app.adapter import CasbinArangoAdapter
from .app.config import AdapterConfig, get_config
from .app.factory import create_adapter, create_rule_store
from .app.persistence import ArangoRuleStore, QueryBuilder, AqlQuery
from .app.rules import FieldMapping, PolicyRule, RuleCodec, DEFAULT_FIELD_MAPPING

__all__ = [
    "CasbinArangoAdapter",
    "AdapterConfig",
    "get_config",
    "create_adapter",
    "create_rule_store",
    "ArangoRuleStore",
    "QueryBuilder",
    "AqlQuery",
    "FieldMapping",
    "PolicyRule",
    "RuleCodec",
    "DEFAULT_FIELD_MAPPING",
]
