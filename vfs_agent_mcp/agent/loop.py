"""
The request/execute loop driving one run against one VirtualFileSystem.

States: IDLE -> REQUESTING -> EXECUTING -> REQUESTING -> ... -> a terminal
state (DONE, CANCELLED or FAILED). Each terminal state carries one of the
enumerated TerminalReasons.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import AsyncIterator, Callable, Literal

from vfs_agent_mcp.agent.provider import ModelProvider, TransportFailure
from vfs_agent_mcp.models.transcript import ToolCall, ToolResult, TurnRecord
from vfs_agent_mcp.tools.base import ToolExecutor

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """Agent loop state"""
    IDLE = "idle"              # Not started yet
    REQUESTING = "requesting"  # Awaiting a turn from the model
    EXECUTING = "executing"    # Applying the turn's tool calls
    DONE = "done"              # Finished normally
    CANCELLED = "cancelled"    # Stopped at a round boundary on request
    FAILED = "failed"          # Model could not be reached

    @property
    def is_terminal(self) -> bool:
        return self in (LoopState.DONE, LoopState.CANCELLED, LoopState.FAILED)


class TerminalReason(Enum):
    NO_TOOL_CALLS = "no_tool_calls"
    STEP_BUDGET_EXHAUSTED = "step_budget_exhausted"
    CANCELLED = "cancelled"
    TRANSPORT_FAILED = "transport_failed"


EventKind = Literal["state", "text", "tool_call", "tool_result", "done"]


@dataclass
class LoopEvent:
    """A unit of incremental progress streamed while the loop runs."""

    kind: EventKind
    step: int
    state: LoopState
    text: str | None = None
    tool_call: ToolCall | None = None
    tool_result: ToolResult | None = None
    reason: TerminalReason | None = None


@dataclass
class LoopResult:
    state: LoopState
    reason: TerminalReason
    steps: int
    error: str | None = None
    new_records: list[TurnRecord] = field(default_factory=list)


class AgentLoop:
    """
    Runs a bounded sequence of request/execute rounds.

    Tool calls of one turn are applied strictly in emission order, all of them
    before anything is yielded, so a consumer never observes the tree in the
    middle of a round. Cancellation is honoured only between rounds.
    """

    def __init__(
        self,
        provider: ModelProvider,
        executor: ToolExecutor,
        transcript: list[TurnRecord],
        *,
        max_steps: int,
        system_prompt: str = "",
        cancel_event: asyncio.Event | None = None,
    ) -> None:
        if max_steps < 1:
            raise ValueError("max_steps must be at least 1")
        self._provider = provider
        self._executor = executor
        self._transcript = transcript
        self._max_steps = max_steps
        self._system_prompt = system_prompt
        self._cancel_event = cancel_event or asyncio.Event()
        self._state = LoopState.IDLE
        self._steps = 0
        self._new_records: list[TurnRecord] = []
        self._result: LoopResult | None = None

    @property
    def state(self) -> LoopState:
        return self._state

    @property
    def steps(self) -> int:
        return self._steps

    @property
    def result(self) -> LoopResult | None:
        return self._result

    def cancel(self) -> None:
        """Request cancellation; takes effect at the next round boundary."""
        self._cancel_event.set()

    async def run(self, on_event: Callable[[LoopEvent], None] | None = None) -> LoopResult:
        """Drive the loop to a terminal state and return its result."""
        async for event in self.stream():
            if on_event is not None:
                on_event(event)
        assert self._result is not None
        return self._result

    async def stream(self) -> AsyncIterator[LoopEvent]:
        if self._state is not LoopState.IDLE:
            raise RuntimeError(f"AgentLoop already started (state: {self._state.value})")

        tool_definitions = self._executor.definitions()
        while True:
            if self._cancel_event.is_set():
                yield self._finish(LoopState.CANCELLED, TerminalReason.CANCELLED)
                return
            if self._steps >= self._max_steps:
                logger.info(f"Step budget of {self._max_steps} exhausted")
                yield self._finish(LoopState.DONE, TerminalReason.STEP_BUDGET_EXHAUSTED)
                return

            yield self._transition(LoopState.REQUESTING)
            try:
                turn = await self._provider.next_turn(
                    self._system_prompt, list(self._transcript), tool_definitions
                )
            except TransportFailure as e:
                logger.error(f"Model provider {self._provider.get_name()} unreachable: {e}")
                yield self._finish(LoopState.FAILED, TerminalReason.TRANSPORT_FAILED, error=str(e))
                return

            self._steps += 1
            self._record(TurnRecord(role="assistant", content=turn.text, tool_calls=turn.tool_calls))
            if turn.text:
                yield LoopEvent(kind="text", step=self._steps, state=self._state, text=turn.text)

            if not turn.tool_calls:
                yield self._finish(LoopState.DONE, TerminalReason.NO_TOOL_CALLS)
                return

            yield self._transition(LoopState.EXECUTING)
            results = await self._executor.sequential_tool_call(turn.tool_calls)
            self._record(TurnRecord(role="tool", tool_results=results))

            for tool_call, tool_result in zip(turn.tool_calls, results):
                yield LoopEvent(kind="tool_call", step=self._steps, state=self._state, tool_call=tool_call)
                yield LoopEvent(kind="tool_result", step=self._steps, state=self._state, tool_result=tool_result)

    def _record(self, record: TurnRecord) -> None:
        self._transcript.append(record)
        self._new_records.append(record)

    def _transition(self, state: LoopState) -> LoopEvent:
        logger.debug(f"Loop {self._state.value} -> {state.value} (step {self._steps})")
        self._state = state
        return LoopEvent(kind="state", step=self._steps, state=state)

    def _finish(self, state: LoopState, reason: TerminalReason, error: str | None = None) -> LoopEvent:
        self._state = state
        self._result = LoopResult(
            state=state,
            reason=reason,
            steps=self._steps,
            error=error,
            new_records=list(self._new_records),
        )
        logger.info(f"Loop finished: {state.value} ({reason.value}) after {self._steps} step(s)")
        return LoopEvent(kind="done", step=self._steps, state=state, reason=reason)
