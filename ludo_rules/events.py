"""
Structured game events.

The engine never produces display strings directly: every notable outcome is
appended to the game's ``EventLog`` as a typed event, and subscribers format
it however they like. ``describe()`` gives a short English rendering for
logs and simple front-ends.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Callable, Iterator, List

from loguru import logger


@dataclass(frozen=True)
class GameEvent:
    """Base class for all events."""

    @property
    def name(self) -> str:
        return type(self).__name__

    def describe(self) -> str:
        return self.name

    def to_dict(self) -> dict:
        data = {
            key: value.value if isinstance(value, Enum) else value
            for key, value in asdict(self).items()
        }
        data["event"] = self.name
        return data


@dataclass(frozen=True)
class GameStarted(GameEvent):
    player_count: int

    def describe(self) -> str:
        return f"New game started with {self.player_count} players"


@dataclass(frozen=True)
class DieRolled(GameEvent):
    color: str
    value: int

    def describe(self) -> str:
        return f"{self.color} rolled {self.value}"


@dataclass(frozen=True)
class TurnPassed(GameEvent):
    color: str
    die: int

    def describe(self) -> str:
        return f"No legal moves for {self.color}. Turn passes."


@dataclass(frozen=True)
class Moved(GameEvent):
    piece_id: str
    kind: str
    destination: int

    def describe(self) -> str:
        return f"{self.piece_id} {self.kind.replace('_', ' ')} to {self.destination}"


@dataclass(frozen=True)
class Captured(GameEvent):
    by_color: str
    count: int
    position: int

    def describe(self) -> str:
        return f"{self.by_color} captured {self.count} piece(s)!"


@dataclass(frozen=True)
class PieceFinished(GameEvent):
    piece_id: str
    player_finished_count: int

    def describe(self) -> str:
        color = self.piece_id.split("-")[0]
        return f"{color} finished a piece! ({self.player_finished_count})"


@dataclass(frozen=True)
class PlayerWon(GameEvent):
    color: str

    def describe(self) -> str:
        return f"{self.color.upper()} wins!"


@dataclass(frozen=True)
class ExtraRollGranted(GameEvent):
    color: str

    def describe(self) -> str:
        return "Extra roll for a 6!"


@dataclass(frozen=True)
class RollRejected(GameEvent):
    color: str
    reason: str

    def describe(self) -> str:
        return self.reason


@dataclass(frozen=True)
class MoveRejected(GameEvent):
    piece_id: str
    reason: str

    def describe(self) -> str:
        return self.reason


EventHandler = Callable[[GameEvent], None]


class EventLog:
    """
    Append-only event sequence.

    Appending only records an event; subscribers are notified by ``flush``,
    which the turn controller calls once an operation has finished mutating
    the game. A handler that raises is logged and skipped.
    """

    def __init__(self):
        self._events: List[GameEvent] = []
        self._handlers: List[EventHandler] = []
        self._pending: List[GameEvent] = []

    def append(self, event: GameEvent) -> None:
        self._events.append(event)
        self._pending.append(event)
        logger.debug(f"event: {event.describe()}")

    def flush(self) -> None:
        """Deliver every queued event, in order, to the current subscribers."""
        # Handlers may call back into the game and flush again; popping one
        # event at a time keeps delivery in log order.
        while self._pending:
            event = self._pending.pop(0)
            for handler in list(self._handlers):
                try:
                    handler(event)
                except Exception:
                    logger.exception(f"event handler failed on {event.name}")

    def subscribe(self, handler: EventHandler) -> Callable[[], None]:
        """Register a handler; returns a callable that removes it again."""
        self._handlers.append(handler)
        return lambda: self.unsubscribe(handler)

    def unsubscribe(self, handler: EventHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def of_type(self, event_type: type) -> List[GameEvent]:
        return [event for event in self._events if isinstance(event, event_type)]

    @property
    def last(self):
        return self._events[-1] if self._events else None

    def __iter__(self) -> Iterator[GameEvent]:
        return iter(list(self._events))

    def __len__(self) -> int:
        return len(self._events)

    def __getitem__(self, index):
        return self._events[index]
