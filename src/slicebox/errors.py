"""Application-level exception types for slicebox."""

from __future__ import annotations

from typing import Any


class SliceboxError(Exception):
    """Base exception for slicebox."""


class SliceDefinitionError(SliceboxError):
    """Raised when a slice or its extra reducers are declared inconsistently."""


class InvalidActionError(SliceboxError):
    """Raised when something that is neither an action nor a thunk is dispatched."""


class DispatchInProgressError(SliceboxError):
    """Raised when a reducer tries to dispatch or subscribe."""


class ReducerError(SliceboxError):
    """Raised when a reducer breaks its contract, e.g. by returning None."""

    def __init__(self, reducer_name: str, action_type: str) -> None:
        super().__init__(f"Reducer '{reducer_name}' returned None for action '{action_type}'")
        self.reducer_name = reducer_name
        self.action_type = action_type


class ThunkRejectedError(SliceboxError):
    """Raised by unwrap_result when an async thunk ended in its rejected stage."""

    def __init__(self, type_prefix: str, payload: Any = None, error: Any = None) -> None:
        detail = payload if payload is not None else error
        super().__init__(f"Async thunk '{type_prefix}' rejected: {detail}")
        self.type_prefix = type_prefix
        self.payload = payload
        self.error = error
