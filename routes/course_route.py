from fastapi import APIRouter, Request, HTTPException
from pydantic import BaseModel

from controllers.course_controller import search_courses
from services.courses.course_finder import CourseSearchError

router = APIRouter(tags=["courses"])


class CourseSearchRequest(BaseModel):
    location: str = ""


@router.post("/courses/search")
async def post_course_search(request: Request, payload: CourseSearchRequest):
    """Return popular golf courses near the requested location."""
    try:
        result = await search_courses(request, payload.location)
    except HTTPException:
        raise
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except CourseSearchError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
    except Exception as exc:
        raise HTTPException(status_code=500, detail=str(exc))
    return result
