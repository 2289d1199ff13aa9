"""Pydantic models for structured course search results."""

from typing import List

from pydantic import BaseModel, Field


class GolfCourse(BaseModel):
    name: str = Field(..., min_length=1)
    description: str
    features: List[str]


class CourseList(BaseModel):
    courses: List[GolfCourse]
