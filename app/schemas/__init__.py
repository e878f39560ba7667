from __future__ import annotations

from pydantic import BaseModel, ConfigDict


# Shared Pydantic base with ORM support (Pydantic v2)
class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
