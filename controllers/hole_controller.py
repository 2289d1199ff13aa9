"""Controller for hole designer requests."""

from typing import Any, Dict, Optional

from fastapi import HTTPException

from services.designer.hole_designer import HoleDesignError, HoleDesigner


class HoleDesignerController:
    """Coordinate hole design requests between the API layer and the designer service."""

    def __init__(self, designer: Optional[HoleDesigner] = None) -> None:
        """Initialize the controller with an optional preconfigured designer."""
        self.designer = designer

    def _resolve_designer(self, designer: Optional[HoleDesigner]) -> HoleDesigner:
        resolved = designer or self.designer
        if resolved is None:
            raise HTTPException(status_code=500, detail="Hole designer not initialized.")
        return resolved

    async def design_hole(self, prompt: Optional[str], designer: Optional[HoleDesigner] = None) -> Dict[str, Any]:
        """Validate the prompt and request a generated hole image.

        Args:
            prompt: Description of the dream hole.
            designer: Designer taken from application state.

        Returns:
            A dictionary with the image data URL and the prompt used.

        Raises:
            HTTPException: 400 for a blank prompt, 422 when nothing was generated,
                502 when the image backend fails.
        """
        service = self._resolve_designer(designer)
        try:
            image = await service.generate(prompt or "")
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except HoleDesignError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc

        if not image:
            raise HTTPException(
                status_code=422,
                detail="The model could not generate an image for this prompt. Try being more descriptive.",
            )
        return {"prompt": (prompt or "").strip(), "image": image}
