from pydantic import BaseModel, Field


class City(BaseModel):
    name: str
    reason: str


class Recommendation(BaseModel):
    country: str
    score: int = Field(ge=0, le=100)
    reasons: list[str]
    cities: list[City]
