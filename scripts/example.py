#!/usr/bin/env python3
"""
Example: enforce casbin policies stored in ArangoDB.

Usage:
    python scripts/example.py model.conf
"""

import argparse
import sys

import casbin

from casbin_arango_adapter import create_adapter, get_config
from casbin_arango_adapter.shared.logging import configure_logging, get_logger


def main() -> int:
    parser = argparse.ArgumentParser(description="casbin ArangoDB adapter example")
    parser.add_argument("model", help="Path to a casbin model file")
    parser.add_argument("--collection", default="casbinrules", help="Policy collection name")
    args = parser.parse_args()

    config = get_config(collection_name=args.collection, field_mapping=["p", "sub", "obj", "act"])
    configure_logging("casbin_arango", config.log_level)
    logger = get_logger("casbin_arango.example")

    enforcer = casbin.Enforcer(args.model, create_adapter(config))

    sub, obj, act = "alice", "data1", "read"
    if enforcer.enforce(sub, obj, act):
        logger.info("Access granted", sub=sub, obj=obj, act=act)
    else:
        logger.info("Forbidden", sub=sub, obj=obj, act=act)

    enforcer.add_policy("adam", "data1", "write")
    enforcer.add_policy("bob", "data1", "read")
    enforcer.add_policy("cecile", "data1", "write")
    enforcer.save_policy()
    logger.info("Policies saved", rules=len(enforcer.get_policy()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
