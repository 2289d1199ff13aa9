"""Chat domain models: turns, image attachments, and the transcript."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Author(str, Enum):
	"""Who wrote a turn."""

	USER = "user"
	ASSISTANT = "assistant"


class TranscriptStateError(RuntimeError):
	"""Raised when a transcript operation does not fit its current state."""


class TurnFinalizedError(TranscriptStateError):
	"""Raised when a finalized turn would be modified."""


@dataclass(frozen=True)
class ImageRef:
	"""Immutable reference to an uploaded image and its MIME type."""

	data: bytes
	mime_type: str
	filename: str = "upload"
	preview: Optional[str] = None

	def to_dict(self) -> Dict[str, Any]:
		return {
			"mime_type": self.mime_type,
			"filename": self.filename,
			"preview": f"data:image/png;base64,{self.preview}" if self.preview else None,
		}


@dataclass
class Turn:
	"""A single message in the transcript."""

	author: Author
	text: str = ""
	attachment: Optional[ImageRef] = None
	final: bool = True

	def to_dict(self) -> Dict[str, Any]:
		return {
			"author": self.author.value,
			"text": self.text,
			"attachment": self.attachment.to_dict() if self.attachment else None,
			"final": self.final,
		}


@dataclass
class Transcript:
	"""Ordered conversation for one mounted chat view.

	Turns are append-only. The one exception is a trailing assistant
	placeholder opened by `begin_assistant`, whose text can be replaced until
	`finalize_last` or `abort_last` freezes it.
	"""

	turns: List[Turn] = field(default_factory=list)

	def __len__(self) -> int:
		return len(self.turns)

	def __iter__(self):
		return iter(self.turns)

	def __getitem__(self, index: int) -> Turn:
		return self.turns[index]

	@property
	def last(self) -> Optional[Turn]:
		return self.turns[-1] if self.turns else None

	@property
	def in_progress(self) -> bool:
		"""True while the last turn is an assistant placeholder still streaming."""
		last = self.last
		return last is not None and not last.final

	def append_user(self, text: str, attachment: Optional[ImageRef] = None) -> Turn:
		"""Append a complete user turn."""
		return self._append(Turn(author=Author.USER, text=text, attachment=attachment))

	def append_assistant(self, text: str) -> Turn:
		"""Append a complete assistant turn."""
		return self._append(Turn(author=Author.ASSISTANT, text=text))

	def begin_assistant(self) -> Turn:
		"""Append an empty assistant placeholder that can grow in place."""
		return self._append(Turn(author=Author.ASSISTANT, text="", final=False))

	def replace_last(self, text: str) -> Turn:
		"""Overwrite the text of the in-progress placeholder."""
		turn = self._open_turn()
		turn.text = text
		return turn

	def finalize_last(self) -> Turn:
		"""Freeze the in-progress placeholder with its current text."""
		turn = self._open_turn()
		turn.final = True
		return turn

	def abort_last(self, text: str) -> Turn:
		"""Freeze the in-progress placeholder, discarding its partial text."""
		turn = self._open_turn()
		turn.text = text
		turn.final = True
		return turn

	def to_dict(self) -> List[Dict[str, Any]]:
		return [turn.to_dict() for turn in self.turns]

	def _append(self, turn: Turn) -> Turn:
		if self.in_progress:
			raise TranscriptStateError("An assistant turn is still streaming; finalize it before appending.")
		self.turns.append(turn)
		return turn

	def _open_turn(self) -> Turn:
		if not self.in_progress:
			raise TurnFinalizedError("No assistant turn is in progress.")
		return self.turns[-1]
