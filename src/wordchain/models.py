"""
Pydantic models for Wordchain configuration and persisted chains.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .constants import DEFAULT_ORDER, SCHEMA_VERSION


class ChainSchemaModel(BaseModel):
    """
    Base model for Wordchain schemas that reject unknown fields.
    """

    model_config = ConfigDict(extra="forbid")


class ChainConfiguration(ChainSchemaModel):
    """
    Configuration for building and sampling a chain.

    :ivar schema_version: Configuration schema version.
    :vartype schema_version: int
    :ivar order: Number of prior words used as context.
    :vartype order: int
    :ivar max_steps: Optional limit on generated words per sentence.
    :vartype max_steps: int or None
    :ivar random_seed: Optional seed for the chain's random source.
    :vartype random_seed: int or None
    """

    schema_version: int = Field(default=SCHEMA_VERSION, ge=1)
    order: int = Field(default=DEFAULT_ORDER, ge=1, strict=True)
    max_steps: Optional[int] = Field(default=None, ge=1)
    random_seed: Optional[int] = None

    @model_validator(mode="after")
    def _validate_schema_version(self) -> "ChainConfiguration":
        if self.schema_version != SCHEMA_VERSION:
            raise ValueError(f"Unsupported configuration schema version: {self.schema_version}")
        return self


class ChainDocument(ChainSchemaModel):
    """
    Persisted form of a chain.

    :ivar schema_version: Document schema version.
    :vartype schema_version: int
    :ivar order: Chain order.
    :vartype order: int
    :ivar transitions: Mapping of encoded keys to encoded follower bags.
    :vartype transitions: dict[str, list[str or None]]
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    schema_version: int = Field(default=SCHEMA_VERSION, ge=1)
    order: int = Field(ge=1, strict=True)
    transitions: Dict[str, List[Optional[str]]] = Field(default_factory=dict, alias="map")

    @model_validator(mode="after")
    def _validate_document(self) -> "ChainDocument":
        if self.schema_version != SCHEMA_VERSION:
            raise ValueError(f"Unsupported chain schema version: {self.schema_version}")
        for key, followers in self.transitions.items():
            if not followers:
                raise ValueError(f"Key {key!r} has no followers")
        return self
