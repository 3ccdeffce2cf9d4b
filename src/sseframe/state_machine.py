"""Transform lifecycle state machine.

IDLE ──[partial input buffered]──→ ACCUMULATING
  ↑                                     │
  └──────[every frame extracted]────────┘

IDLE / ACCUMULATING ──[close or abort]──→ CLOSED (terminal)
"""

from __future__ import annotations

import enum

import structlog

log = structlog.get_logger()


class TransformPhase(enum.Enum):
    IDLE = "IDLE"
    ACCUMULATING = "ACCUMULATING"
    CLOSED = "CLOSED"


# Valid transitions: (from_phase, to_phase)
VALID_TRANSITIONS: set[tuple[TransformPhase, TransformPhase]] = {
    (TransformPhase.IDLE, TransformPhase.IDLE),
    (TransformPhase.IDLE, TransformPhase.ACCUMULATING),
    (TransformPhase.ACCUMULATING, TransformPhase.ACCUMULATING),
    (TransformPhase.ACCUMULATING, TransformPhase.IDLE),
    (TransformPhase.IDLE, TransformPhase.CLOSED),
    (TransformPhase.ACCUMULATING, TransformPhase.CLOSED),
}


class InvalidTransition(Exception):
    """Raised when an invalid phase transition is attempted."""

    def __init__(self, from_phase: TransformPhase, to_phase: TransformPhase) -> None:
        self.from_phase = from_phase
        self.to_phase = to_phase
        super().__init__(f"Invalid transition: {from_phase.value} → {to_phase.value}")


def validate_transition(from_phase: TransformPhase, to_phase: TransformPhase) -> None:
    """Validate a phase transition, raising InvalidTransition if not allowed."""
    if (from_phase, to_phase) not in VALID_TRANSITIONS:
        raise InvalidTransition(from_phase, to_phase)


def transition(
    current: TransformPhase,
    target: TransformPhase,
    stream_id: str,
    trigger: str = "",
) -> TransformPhase:
    """Execute a validated phase transition, logging changes of phase."""
    validate_transition(current, target)
    if current != target:
        log.debug(
            "phase_transition",
            stream_id=stream_id,
            from_phase=current.value,
            to_phase=target.value,
            trigger=trigger,
        )
    return target
