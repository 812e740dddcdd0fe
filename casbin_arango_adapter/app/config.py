"""
Adapter configuration.

Every option can be set through the environment with the CASBIN_ARANGO_
prefix, e.g. CASBIN_ARANGO_COLLECTION_NAME=rules or
CASBIN_ARANGO_FIELD_MAPPING='["p", "sub", "obj", "act"]'.
"""

from typing import List, Optional

from pydantic import Field, field_validator

from casbin_arango_adapter.shared.config import BaseConfig
from .rules.models import FieldMapping, DEFAULT_FIELD_MAPPING


class AdapterConfig(BaseConfig):
    """Connection and storage settings for the ArangoDB adapter."""

    endpoints: List[str] = Field(default_factory=lambda: ["http://127.0.0.1:8529"], description="ArangoDB endpoints")
    database_name: str = Field(default="casbin", description="Database holding the policy collection")
    collection_name: str = Field(default="casbin_rules", description="Policy collection name")
    field_mapping: List[str] = Field(default_factory=lambda: list(DEFAULT_FIELD_MAPPING.fields), description="Document field names for ptype, v0, v1, ...")
    username: Optional[str] = Field(default=None, description="Basic auth user")
    password: Optional[str] = Field(default=None, description="Basic auth password")
    autocreate: bool = Field(default=True, description="Create database and collection when missing")
    request_timeout: float = Field(default=60.0, description="HTTP request timeout in seconds")

    @field_validator("endpoints")
    @classmethod
    def _check_endpoints(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("at least one endpoint is required")
        return value

    def build_field_mapping(self) -> FieldMapping:
        """Validated field mapping."""
        return FieldMapping(tuple(self.field_mapping))


def get_config(**overrides) -> AdapterConfig:
    """Get adapter configuration; keyword overrides win over the environment."""
    return AdapterConfig(**overrides)
