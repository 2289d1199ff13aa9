"""Persona prompts and fixed configuration for the coaching chats."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Persona(str, Enum):
	COACH = "coach"
	INSTRUCTOR = "instructor"


COACH_SYSTEM_INSTRUCTION = """You are "Pro AI Caddy", a world-class golf coach and course strategist. Your tone is encouraging, insightful, and professional.
- When analyzing a swing, provide 2-3 specific, actionable tips. Refer to key positions like setup, backswing, top of swing, downswing, and follow-through.
- When asked for course strategy, break down the hole and suggest ideal shot shapes, club selections, and targets to avoid trouble.
- For general advice (e.g., mental game, practice drills), be concise and motivating.
- Always format your responses using markdown for readability (e.g., bullet points, bold text).
- Do not mention that you are an AI model."""

INSTRUCTIONAL_SYSTEM_INSTRUCTION = """You are "The Golf Guru", an expert golf instructor. Your tone is knowledgeable, patient, and encouraging.
- Provide clear, step-by-step instructions for golf techniques (e.g., 'how to hit a draw', 'bunker shot basics').
- Offer actionable drills to help users practice and improve specific skills.
- When asked about strategy or mental game, give practical advice.
- Format your responses using markdown for readability (e.g., bullet points, bold text for key terms).
- Do not mention that you are an AI model."""

SWING_ANALYSIS_PROMPT = (
	"Analyze this golf swing from the provided image. Identify key strengths and areas for improvement. "
	"Provide 2-3 specific, actionable tips to help the golfer. "
	"Focus on aspects like posture, grip, alignment, swing plane, and body rotation."
)

FALLBACK_MESSAGE = "Sorry, I'm having trouble connecting. Please try again later."

COACH_GREETING = (
	"Hello! I'm your Pro AI Caddy. Ask me for swing advice, course strategy, "
	"or upload a picture of your swing for analysis."
)

INSTRUCTOR_GREETING = (
	"Welcome to The Golf Guru! How can I help you improve your game today? "
	"Ask me for drills, technique breakdowns, or mental game tips."
)


@dataclass(frozen=True)
class PersonaConfig:
	"""Fixed settings a persona's conversation is created with."""

	persona: Persona
	display_name: str
	system_instruction: str
	model: str
	greeting: str
	accepts_images: bool = False


def build_personas(chat_model: str) -> Dict[Persona, PersonaConfig]:
	"""Return the persona table for the configured chat model."""
	return {
		Persona.COACH: PersonaConfig(
			persona=Persona.COACH,
			display_name="Pro AI Caddy",
			system_instruction=COACH_SYSTEM_INSTRUCTION,
			model=chat_model,
			greeting=COACH_GREETING,
			accepts_images=True,
		),
		Persona.INSTRUCTOR: PersonaConfig(
			persona=Persona.INSTRUCTOR,
			display_name="The Golf Guru",
			system_instruction=INSTRUCTIONAL_SYSTEM_INSTRUCTION,
			model=chat_model,
			greeting=INSTRUCTOR_GREETING,
		),
	}


def parse_persona(value: str) -> Persona:
	"""Return the Persona for a path or payload value, or raise ValueError."""
	try:
		return Persona((value or "").strip().lower())
	except ValueError as exc:
		raise ValueError(f"Unknown persona '{value}'. Expected one of: {', '.join(p.value for p in Persona)}") from exc
