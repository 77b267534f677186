"""Newest-first action log kept for the moderator's display."""

from datetime import datetime
from typing import Iterator, Optional, TypeVar
import yaml
from pydantic import BaseModel, Field, PrivateAttr

from .game_events import GameEvent

EventT = TypeVar("EventT", bound=GameEvent)


class ActionLog(BaseModel):
    """Append-only chronological log, newest entry first.

    Entries are typed events; ``str(event)`` is the line shown to the
    moderator. Nothing in the resolution logic reads the log back.
    """

    game_id: str = Field(default_factory=lambda: datetime.now().strftime("%Y%m%d_%H%M%S"))
    _events: list[GameEvent] = PrivateAttr(default_factory=list)

    def record(self, event: GameEvent) -> None:
        """Prepend an event to the log."""
        self._events.insert(0, event)

    @property
    def events(self) -> tuple[GameEvent, ...]:
        """All events, newest first."""
        return tuple(self._events)

    def messages(self) -> list[str]:
        """Human-readable lines, newest first."""
        return [str(event) for event in self._events]

    def latest(self) -> Optional[GameEvent]:
        return self._events[0] if self._events else None

    def of_type(self, event_type: type[EventT]) -> list[EventT]:
        """Events of one type, newest first."""
        return [e for e in self._events if isinstance(e, event_type)]

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[GameEvent]:  # type: ignore[override]
        return iter(self._events)

    def __str__(self) -> str:
        return "\n".join(self.messages())

    def to_yaml(self) -> str:
        """Serialize the log to a YAML string, oldest entry first."""
        entries = []
        for event in reversed(self._events):
            data = event.model_dump(mode="json")
            entries.append({"type": event.__class__.__name__, "message": str(event), **data})

        data = {"game_id": self.game_id, "events": entries}
        return yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)

    def save_to_file(self, filepath: str) -> None:
        """Serialize the log to a YAML file."""
        yaml_content = self.to_yaml()
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(yaml_content)
