"""Course search backed by a JSON-schema constrained model reply."""

import json
import logging
from typing import List

from pydantic import ValidationError

from models.course_models import CourseList, GolfCourse
from services.courses.course_schema import COURSE_SCHEMA, SCHEMA_NAME
from services.provider import GenAIProvider

LOGGER = logging.getLogger(__name__)


class CourseSearchError(RuntimeError):
    """Raised when a course search fails or returns unusable data."""


class CourseFinder:
    """Find popular golf courses near a location."""

    def __init__(self, provider: GenAIProvider, model: str) -> None:
        if provider is None:
            raise ValueError("A generative-AI provider is required.")
        self.provider = provider
        self.model = model

    async def find(self, location: str) -> List[GolfCourse]:
        """Return up to five courses near `location`.

        Args:
            location: City, region, or address typed by the user.

        Returns:
            Parsed courses; an empty list when the model returned nothing.

        Raises:
            ValueError: If the location is blank.
            CourseSearchError: If the request fails or the reply is malformed.
        """
        place = (location or "").strip()
        if not place:
            raise ValueError("Please enter a city or location.")

        prompt = f"List 5 popular and highly-rated golf courses near {place}."
        try:
            payload = await self.provider.find_structured(self.model, prompt, COURSE_SCHEMA, SCHEMA_NAME)
        except json.JSONDecodeError as exc:
            LOGGER.error("Course search returned invalid JSON: %s", exc)
            raise CourseSearchError(f"Course search returned malformed JSON: {exc.msg}.") from exc
        except Exception as exc:
            LOGGER.error("Error finding golf courses: %s", exc)
            raise CourseSearchError(
                "Sorry, I couldn't find courses for that location. Please try another search."
            ) from exc

        if payload is None:
            return []
        try:
            return CourseList.model_validate(payload).courses
        except ValidationError as exc:
            LOGGER.error("Course search returned unexpected data: %s", exc)
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc']) or 'response'}: {err['msg']}" for err in exc.errors()
            )
            raise CourseSearchError(f"Course search returned unexpected data ({problems}).") from exc
