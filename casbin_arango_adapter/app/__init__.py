"""
ArangoDB adapter application package.

This package stores casbin policy rules in an ArangoDB collection. It
provides:

- app.rules: Field mapping, rule model and the rule/document codec.
- app.persistence: AQL query templates and the ArangoDB rule store.
- app.adapter: casbin persist.Adapter implementation over the store.
- app.config: pydantic-settings configuration.
- app.factory: Client, database and adapter wiring from configuration.

Guidelines:
- The adapter is stateless; the collection is the only source of truth.
- Queries are derived from the field mapping; values are always bound.
- Store errors propagate unchanged; nothing is retried.
"""
