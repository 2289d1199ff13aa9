"""Utilities to build multimodal input payloads for the Responses API."""

from typing import Any, Dict, List, Optional


def to_image_data_url(image_b64: str, mime_type: str) -> str:
    """Wrap base64 image text in a data URL suitable for vision input."""
    if not image_b64:
        raise ValueError("Image data must be a non-empty base64 string.")
    return f"data:{mime_type or 'image/jpeg'};base64,{image_b64}"


def build_user_content(image_url: str, user_text: Optional[str]) -> List[Dict[str, Any]]:
    """Compose user messages so each modality is a distinct input entry."""
    messages: List[Dict[str, Any]] = []
    if user_text:
        messages.append(
            {
                "type": "message",
                "role": "user",
                "content": [{"type": "input_text", "text": f"Golfer's note: {user_text}"}],
            }
        )
    messages.append(
        {"type": "message", "role": "user", "content": [{"type": "input_image", "image_url": image_url}]}
    )
    return messages


def build_analysis_inputs(
    instruction: str,
    *,
    user_text: Optional[str],
    image_b64: str,
    mime_type: str,
) -> List[Dict[str, Any]]:
    """Build the Responses API input array for a single image analysis."""
    image_url = to_image_data_url(image_b64, mime_type)
    inputs: List[Dict[str, Any]] = [
        {"type": "message", "role": "user", "content": [{"type": "input_text", "text": instruction}]},
    ]
    inputs.extend(build_user_content(image_url, user_text))
    return inputs
