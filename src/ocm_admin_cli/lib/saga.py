"""Compensating-action stack for multi-step remote mutations.

Each forward step that creates remote state pushes the action that undoes
it. On failure the stack is unwound newest-first. Compensations return
Results like everything else; a failed compensation does not stop the
remaining ones from running.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from ocm_admin_cli.lib.result import Err, Ok, Result

logger = logging.getLogger(__name__)


class SagaState(StrEnum):
    START = "start"
    CHECKED = "checked"
    USER_CREATED = "user-created"
    PROVIDER_ENSURED = "provider-ensured"
    ROLLING_BACK = "rolling-back"
    ROLLED_BACK = "rolled-back"
    ROLLBACK_FAILED = "rollback-failed"


@dataclass(frozen=True)
class Compensation:
    """Undo action for one completed step."""

    resource: str
    action: Callable[[], Result[None, Any]]


@dataclass(frozen=True)
class CompensationFailure:
    resource: str
    error: Any


@dataclass
class Saga:
    """Tracks progress and pending compensations of one invocation."""

    name: str
    state: SagaState = SagaState.START
    _compensations: list[Compensation] = field(default_factory=list)

    def advance(self, state: SagaState) -> None:
        logger.debug("%s: %s -> %s", self.name, self.state, state)
        self.state = state

    def push(self, resource: str, action: Callable[[], Result[None, Any]]) -> None:
        """Register the undo for a step that just succeeded."""
        self._compensations.append(Compensation(resource, action))

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(c.resource for c in self._compensations)

    def rollback(self) -> list[CompensationFailure]:
        """Run compensations newest-first. Returns the ones that failed."""
        self.advance(SagaState.ROLLING_BACK)
        failures: list[CompensationFailure] = []
        while self._compensations:
            compensation = self._compensations.pop()
            logger.debug("%s: compensating %s", self.name, compensation.resource)
            match compensation.action():
                case Err(error):
                    logger.warning(
                        "%s: failed to roll back %s: %s", self.name, compensation.resource, error
                    )
                    failures.append(CompensationFailure(compensation.resource, error))
                case Ok(_):
                    pass
        self.advance(SagaState.ROLLBACK_FAILED if failures else SagaState.ROLLED_BACK)
        return failures
