"""Interactive query loop.

This module owns the session state machine so the CLI layer only has to
supply an input reader and presentation callbacks. Keeping the loop out of
the CLI makes it drivable from tests with a scripted reader and a fake
gateway.

States::

    AWAITING_INPUT -> NORMALIZING -> LOOKING_UP -> PARSING -> PRESENTING -> AWAITING_INPUT
          |               |              |
          v               +--------------+--> (failure reported) -> AWAITING_INPUT
         DONE  (blank input or end of input)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from loguru import logger

from core.domain.models import FailureKind, LookupFailure, QueryOutcome
from core.interfaces.lookup import LookupGateway
from core.services.hostname import normalize_hostname
from core.services.record_parser import parse_record


class LoopState(str, Enum):
    AWAITING_INPUT = "awaiting_input"
    NORMALIZING = "normalizing"
    LOOKING_UP = "looking_up"
    PARSING = "parsing"
    PRESENTING = "presenting"
    DONE = "done"


@dataclass
class LoopHooks:
    """Optional callbacks for UI layers (progress, results)."""

    state_changed: Callable[[LoopState], None] | None = None
    lookup_started: Callable[[str], None] | None = None
    outcome: Callable[[QueryOutcome], None] | None = None
    finished: Callable[[], None] | None = None


def _invalid_input(query: str) -> QueryOutcome:
    return QueryOutcome.failed(
        query=query,
        failure=LookupFailure(
            kind=FailureKind.INVALID_HOSTNAME,
            reason=f"not a valid URL or hostname: {query.strip()!r}",
        ),
    )


def resolve_query(
    query: str,
    gateway: LookupGateway,
    *,
    on_state: Callable[[LoopState], None] | None = None,
    on_lookup: Callable[[str], None] | None = None,
) -> QueryOutcome:
    """Run one normalize -> lookup -> parse pass for a non-blank `query`.

    Invalid input never reaches the gateway.
    """

    def enter(state: LoopState) -> None:
        if on_state is not None:
            on_state(state)

    enter(LoopState.NORMALIZING)
    hostname = normalize_hostname(query)
    if hostname is None:
        return _invalid_input(query)

    enter(LoopState.LOOKING_UP)
    if on_lookup is not None:
        on_lookup(hostname)
    response = gateway.lookup(hostname)
    if isinstance(response, LookupFailure):
        logger.warning("Lookup for {} failed ({}): {}", hostname, response.kind.value, response.reason)
        return QueryOutcome.failed(query=query, hostname=hostname, failure=response)

    enter(LoopState.PARSING)
    parsed = parse_record(response)
    logger.debug("Parsed record for {}: {}", hostname, parsed.model_dump())
    return QueryOutcome.success(query=query, hostname=hostname, raw=response, parsed=parsed)


class QueryLoop:
    """Drives repeated queries until the operator submits a blank line.

    `read_input` returns the next line typed by the operator, or None at
    end of input; both a blank line and None end the session.
    """

    def __init__(
        self,
        gateway: LookupGateway,
        read_input: Callable[[], str | None],
        hooks: LoopHooks | None = None,
    ) -> None:
        self._gateway = gateway
        self._read_input = read_input
        self._hooks = hooks or LoopHooks()
        self.state = LoopState.AWAITING_INPUT
        self.queries_processed = 0

    def _transition(self, state: LoopState) -> None:
        logger.trace("Loop state {} -> {}", self.state.value, state.value)
        self.state = state
        if self._hooks.state_changed is not None:
            self._hooks.state_changed(state)

    def step(self) -> QueryOutcome | None:
        """Process one line of input.

        Returns the outcome of the query, or None when the session is done.
        """

        if self.state is LoopState.DONE:
            return None

        text = self._read_input()
        if text is None or not text.strip():
            self._transition(LoopState.DONE)
            if self._hooks.finished is not None:
                self._hooks.finished()
            return None

        outcome = resolve_query(
            text,
            self._gateway,
            on_state=self._transition,
            on_lookup=self._hooks.lookup_started,
        )
        self.queries_processed += 1

        if outcome.ok:
            self._transition(LoopState.PRESENTING)
        if self._hooks.outcome is not None:
            self._hooks.outcome(outcome)

        self._transition(LoopState.AWAITING_INPUT)
        return outcome

    def run(self) -> int:
        """Loop until done; return the number of queries processed."""

        while self.state is not LoopState.DONE:
            self.step()
        return self.queries_processed
