"""State machine for a single supporting branch, backed by ``transitions``.

    absent --start--> active --merge--> merged --delete--> deleted
                                               --keep----> kept

Triggers fired out of order raise ``MachineError``; lifecycle code only
fires them after the matching git step succeeded.
"""

from __future__ import annotations

from typing import Any

from transitions import Machine, MachineError

from .models import BranchState

TRANSITIONS: list[dict[str, Any]] = [
    {"trigger": "start", "source": BranchState.ABSENT, "dest": BranchState.ACTIVE},
    {"trigger": "merge", "source": BranchState.ACTIVE, "dest": BranchState.MERGED},
    {"trigger": "delete", "source": BranchState.MERGED, "dest": BranchState.DELETED},
    {"trigger": "keep", "source": BranchState.MERGED, "dest": BranchState.KEPT},
]

TERMINAL_STATES: frozenset[BranchState] = frozenset({BranchState.DELETED, BranchState.KEPT})


def is_terminal(state: BranchState) -> bool:
    return state in TERMINAL_STATES


class BranchStateMachine:
    """Model object the ``Machine`` attaches ``state`` and trigger methods to."""

    def __init__(self, initial: BranchState = BranchState.ABSENT) -> None:
        self.state: BranchState = initial
        self._machine = Machine(
            model=self,
            states=BranchState,
            transitions=TRANSITIONS,
            initial=initial,
            auto_transitions=False,
        )

    @property
    def terminal(self) -> bool:
        return is_terminal(self.state)

    def allowed_triggers(self) -> list[str]:
        return self._machine.get_triggers(self.state)


__all__ = [
    "TRANSITIONS",
    "TERMINAL_STATES",
    "BranchStateMachine",
    "MachineError",
    "is_terminal",
]
