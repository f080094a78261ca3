from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class MonthlyBucket(BaseModel):
    month: str
    count: int = Field(default=0, ge=0)


class ForecastPoint(BaseModel):
    month: str
    predicted: int = Field(default=0, ge=0)


class ForecastReport(BaseModel):
    history: List[MonthlyBucket] = Field(default_factory=list)
    forecast: List[ForecastPoint] = Field(default_factory=list)


class TopScenes(BaseModel):
    labels: List[str] = Field(default_factory=list)
    counts: List[int] = Field(default_factory=list)
