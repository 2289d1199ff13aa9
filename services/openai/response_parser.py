"""Helpers to pull text, images, and usage out of OpenAI responses."""

from typing import Any, Dict, Optional


def extract_text(response: Any) -> str:
    """Concatenate every output_text part of a Responses API result."""
    parts = []
    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) != "message":
            continue
        for content in getattr(item, "content", None) or []:
            if getattr(content, "type", None) == "output_text":
                parts.append(getattr(content, "text", "") or "")
    if parts:
        return "".join(parts)
    return getattr(response, "output_text", "") or ""


def extract_image_b64(response: Any) -> Optional[str]:
    """Return the first base64 image from an Images API result, if any."""
    for image in getattr(response, "data", None) or []:
        b64 = getattr(image, "b64_json", None)
        if b64:
            return b64
    return None


def extract_usage(response: Any) -> Dict[str, Optional[int]]:
    """Return token usage information from the response, if present."""
    usage = getattr(response, "usage", None)
    return {
        "input_tokens": getattr(usage, "input_tokens", None) if usage else None,
        "output_tokens": getattr(usage, "output_tokens", None) if usage else None,
    }
