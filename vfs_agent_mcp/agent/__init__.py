from .loop import AgentLoop, LoopEvent, LoopResult, LoopState, TerminalReason
from .mock_provider import MockModelProvider
from .provider import ModelProvider, TransportFailure, resolve_step_budget
from .runner import RunOutcome, load_project, run_project

__all__ = [
    "AgentLoop",
    "LoopEvent",
    "LoopResult",
    "LoopState",
    "MockModelProvider",
    "ModelProvider",
    "RunOutcome",
    "TerminalReason",
    "TransportFailure",
    "load_project",
    "resolve_step_budget",
    "run_project",
]
