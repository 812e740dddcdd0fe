"""
Shared utilities for the casbin ArangoDB adapter.

- config: Base configuration via pydantic-settings
- logging: Structured logging with trace correlation
- metrics: Prometheus metrics helpers
- errors: Adapter error types

Do not import from casbin_arango_adapter.app into shared/.
"""
