"""JSON schema for the structured course search reply."""

from typing import Any, Dict

SCHEMA_NAME = "golf_courses"

COURSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "courses": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {
                        "type": "string",
                        "description": "The full name of the golf course.",
                    },
                    "description": {
                        "type": "string",
                        "description": "A brief, engaging description of the course.",
                    },
                    "features": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": (
                            "A list of 3-4 key features, like 'links-style', 'fast greens', "
                            "or 'designed by Jack Nicklaus'."
                        ),
                    },
                },
                "required": ["name", "description", "features"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["courses"],
    "additionalProperties": False,
}
