from typing import Any

from pydantic import BaseModel, Field, field_validator


class Answers(BaseModel):
    """Questionnaire answers. Only the fields the fallback rules read are typed."""

    destinations: list[Any] = []
    relocation_type: str = Field("", alias="relocationType")

    model_config = {"extra": "allow"}

    @field_validator("destinations", mode="before")
    @classmethod
    def normalize_destinations(cls, v):
        if isinstance(v, str):
            return [v] if v else []
        if isinstance(v, list):
            return v
        return []

    @field_validator("relocation_type", mode="before")
    @classmethod
    def normalize_relocation_type(cls, v):
        return v if isinstance(v, str) else ""
