"""slicebox - slices, thunks and a store for asyncio programs."""

from .actions import Action, ActionCreator, create_action, is_action
from .combine import combine_reducers
from .errors import (
    DispatchInProgressError,
    InvalidActionError,
    ReducerError,
    SliceboxError,
    SliceDefinitionError,
    ThunkRejectedError,
)
from .middleware import apply_middleware, compose, logging_middleware, thunk_middleware
from .slice import ReducerBuilder, Slice, create_slice
from .store import Store, configure_store
from .thunk import AsyncThunk, RejectWithValue, ThunkApi, create_async_thunk, serialize_error, unwrap_result

__version__ = "0.1.0"

__all__ = [
    "Action",
    "ActionCreator",
    "AsyncThunk",
    "DispatchInProgressError",
    "InvalidActionError",
    "ReducerBuilder",
    "ReducerError",
    "RejectWithValue",
    "Slice",
    "SliceDefinitionError",
    "SliceboxError",
    "Store",
    "ThunkApi",
    "ThunkRejectedError",
    "apply_middleware",
    "combine_reducers",
    "compose",
    "configure_store",
    "create_action",
    "create_async_thunk",
    "create_slice",
    "is_action",
    "logging_middleware",
    "serialize_error",
    "thunk_middleware",
    "unwrap_result",
]
