from typing import Any, Literal

from pydantic import BaseModel, Field


class ToolCall(BaseModel):
    """A structured tool invocation emitted by the model."""

    call_id: str
    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class ToolResult(BaseModel):
    """The outcome of applying one tool call, recorded in the transcript."""

    call_id: str
    name: str
    success: bool
    result: str | None = None
    error: str | None = None
    error_type: str | None = None  # e.g. "NotFound", "ValidationError"


class ModelTurn(BaseModel):
    """One response from the model: free text and zero or more tool calls."""

    text: str = ""
    tool_calls: list[ToolCall] = Field(default_factory=list)


class TurnRecord(BaseModel):
    """A persisted transcript entry."""

    role: Literal["user", "assistant", "tool"]
    content: str = ""
    tool_calls: list[ToolCall] = Field(default_factory=list)
    tool_results: list[ToolResult] = Field(default_factory=list)


Transcript = list[TurnRecord]
