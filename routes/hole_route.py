"""FastAPI routes for the hole designer."""

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from controllers.hole_controller import HoleDesignerController

router = APIRouter(prefix="/designer", tags=["designer"])
controller = HoleDesignerController()


class HoleDesignRequest(BaseModel):
    prompt: str = ""


def _get_designer(request: Request):
    """Retrieve the shared hole designer from the app state."""
    designer = getattr(request.app.state, "hole_designer", None)
    if designer is None:
        raise HTTPException(status_code=500, detail="Hole designer not initialized.")
    return designer


@router.post("/holes", summary="Generate an image of a dream golf hole")
async def design_hole(request: Request, payload: HoleDesignRequest):
    """Generate a golf-hole image from a text description.

    Args:
        request: The FastAPI request containing application state.
        payload: Description of the hole to render.

    Returns:
        The prompt and a JPEG data URL of the generated image.

    Raises:
        HTTPException: If the prompt is blank or the image cannot be generated.
    """
    try:
        return await controller.design_hole(payload.prompt, designer=_get_designer(request))
    except HTTPException:
        raise
    except Exception as exc:  # pylint: disable=broad-exception-caught
        raise HTTPException(status_code=500, detail="Failed to design the hole.") from exc
