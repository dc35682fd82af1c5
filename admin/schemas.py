"""
Admin API Schemas

Request and response bodies use the camelCase names the dashboard sends.
Bodies are validated loosely here; emptiness rules live in the router so
the error messages stay specific.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from store import Personality


class ConfigResponse(BaseModel):
    mainPrompt: str
    personalities: List[Personality]


class PromptUpdate(BaseModel):
    mainPrompt: Optional[str] = None


class PromptResponse(BaseModel):
    mainPrompt: str


class PersonalitiesReplace(BaseModel):
    """Entries are normalized by the store, so they stay untyped here."""

    personalities: Optional[List[Any]] = None


class PersonalityUpsert(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    prompt: Optional[str] = None
    id: Optional[str] = Field(default=None, description="Explicit id, slugified")


class PersonalitiesResponse(BaseModel):
    personalities: List[Personality]


class PersonalityUpsertResponse(PersonalitiesResponse):
    id: str
