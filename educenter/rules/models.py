from typing import Literal

from pydantic import BaseModel, Field


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class StoreRules(BaseModel):
    backend: Literal["memory", "sqlite"] = "sqlite"
    # Key under which the whole snapshot document is stored.
    data_key: str = "educenter-data"
    max_write_attempts: int = Field(default=3, ge=1)
    retry_backoff_ms: int = Field(default=50, ge=0)


class Rules(BaseModel):
    project: ProjectRules
    store: StoreRules = Field(default_factory=StoreRules)
