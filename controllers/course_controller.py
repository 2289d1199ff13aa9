from fastapi import Request, HTTPException
from typing import Dict, Any

from services.courses.course_finder import CourseFinder


async def search_courses(request: Request, location: str) -> Dict[str, Any]:
    """Find golf courses near a location.

    Args:
        request: FastAPI Request (used to access the shared course finder).
        location: City or region typed by the user.

    Returns:
        A dict with the searched `location` and a `courses` list of
        name/description/features entries.
    """
    finder: CourseFinder = getattr(request.app.state, "course_finder", None)
    if finder is None:
        raise HTTPException(status_code=500, detail="Course finder not initialized.")

    courses = await finder.find(location)
    return {"location": location.strip(), "courses": [course.model_dump() for course in courses]}
