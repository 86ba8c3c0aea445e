"""Async thunks: one awaitable unit of work as a pending/fulfilled/rejected lifecycle."""

from __future__ import annotations

import asyncio
import inspect
import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from loguru import logger

from slicebox.actions import Action, ActionCreator, is_action
from slicebox.errors import ThunkRejectedError
from slicebox.types import Dispatch, GetState

CONDITION_ERROR = {"name": "ConditionError", "message": "Aborted due to condition callback returning false."}


class RejectWithValue(Exception):  # noqa: N818
    """Raised (or returned) from a payload creator to reject with a chosen payload."""

    def __init__(self, value: Any) -> None:
        super().__init__(value)
        self.value = value


@dataclass(frozen=True)
class ThunkApi:
    """Context handed to payload creators and conditions."""

    dispatch: Dispatch
    get_state: GetState
    extra: Any
    request_id: str

    @staticmethod
    def reject_with_value(value: Any) -> RejectWithValue:
        return RejectWithValue(value)


PayloadCreator = Callable[[Any, ThunkApi], Awaitable[Any] | Any]
Condition = Callable[[Any, ThunkApi], bool]


def serialize_error(exc: BaseException) -> dict[str, str]:
    """Map an exception to a plain record that is safe to keep in state."""
    return {"name": type(exc).__name__, "message": str(exc)}


def _lifecycle_meta(request_id: str, arg: Any, status: str, **extra: Any) -> dict[str, Any]:
    return {"request_id": request_id, "arg": arg, "request_status": status, **extra}


class AsyncThunk:
    """Dispatchable async operation with three derived action creators."""

    def __init__(
        self,
        type_prefix: str,
        payload_creator: PayloadCreator,
        *,
        condition: Condition | None = None,
        serialize_error: Callable[[BaseException], Any] = serialize_error,
    ) -> None:
        self.type_prefix = type_prefix
        self._payload_creator = payload_creator
        self._condition = condition
        self._serialize_error = serialize_error
        self.pending = ActionCreator(
            f"{type_prefix}/pending",
            lambda request_id, arg: (None, _lifecycle_meta(request_id, arg, "pending")),
        )
        self.fulfilled = ActionCreator(
            f"{type_prefix}/fulfilled",
            lambda payload, request_id, arg: (payload, _lifecycle_meta(request_id, arg, "fulfilled")),
        )
        self.rejected = ActionCreator(
            f"{type_prefix}/rejected",
            lambda error, request_id, arg, payload=None, **meta: (
                payload,
                _lifecycle_meta(request_id, arg, "rejected", **meta),
                error,
            ),
        )

    def __call__(self, arg: Any = None) -> Callable[[Dispatch, GetState, Any], asyncio.Task[Action]]:
        def run(dispatch: Dispatch, get_state: GetState, extra: Any) -> asyncio.Task[Action]:
            loop = asyncio.get_running_loop()
            api = ThunkApi(dispatch=dispatch, get_state=get_state, extra=extra, request_id=uuid.uuid4().hex)
            if self._condition is not None and self._condition(arg, api) is False:
                logger.debug("thunk.skipped type={} request_id={}", self.type_prefix, api.request_id)
                skipped = self.rejected(CONDITION_ERROR, api.request_id, arg, condition=True)
                return loop.create_task(_resolved(skipped))

            dispatch(self.pending(api.request_id, arg))
            return loop.create_task(self._execute(arg, api))

        run.__qualname__ = f"{self.type_prefix}({arg!r})"
        return run

    async def _execute(self, arg: Any, api: ThunkApi) -> Action:
        try:
            result = self._payload_creator(arg, api)
            if inspect.isawaitable(result):
                result = await result
            if isinstance(result, RejectWithValue):
                raise result
        except RejectWithValue as rejection:
            logger.info("thunk.rejected type={} request_id={} value={!r}", self.type_prefix, api.request_id, rejection.value)
            final = self.rejected(
                {"name": "RejectWithValue", "message": "Rejected"},
                api.request_id,
                arg,
                payload=rejection.value,
                rejected_with_value=True,
            )
        except Exception as exc:
            logger.opt(exception=True).warning("thunk.failed type={} request_id={}", self.type_prefix, api.request_id)
            final = self.rejected(self._serialize_error(exc), api.request_id, arg, rejected_with_value=False)
        else:
            final = self.fulfilled(result, api.request_id, arg)
        api.dispatch(final)
        return final

    def match(self, action: Any) -> bool:
        """Return True for any lifecycle action of this thunk."""
        return is_action(action) and action.type in (self.pending.type, self.fulfilled.type, self.rejected.type)

    def __repr__(self) -> str:
        return f"AsyncThunk({self.type_prefix!r})"


async def _resolved(action: Action) -> Action:
    return action


def create_async_thunk(
    type_prefix: str,
    payload_creator: PayloadCreator,
    *,
    condition: Condition | None = None,
    serialize_error: Callable[[BaseException], Any] = serialize_error,
) -> AsyncThunk:
    """Wrap ``payload_creator`` into a dispatchable async thunk.

    Dispatching ``thunk(arg)`` emits ``<type_prefix>/pending`` immediately,
    awaits the payload creator, then emits exactly one of
    ``<type_prefix>/fulfilled`` or ``<type_prefix>/rejected``. The store
    returns an ``asyncio.Task`` resolving to that terminal action.
    """
    return AsyncThunk(type_prefix, payload_creator, condition=condition, serialize_error=serialize_error)


def _status_matcher(status: str, thunks: tuple[AsyncThunk, ...]) -> Callable[[Any], bool]:
    def matcher(action: Any) -> bool:
        if not is_action(action) or not action.meta or action.meta.get("request_status") != status:
            return False
        if not thunks:
            return True
        return any(action.type == f"{thunk.type_prefix}/{status}" for thunk in thunks)

    return matcher


def is_pending(*thunks: AsyncThunk) -> Callable[[Any], bool]:
    return _status_matcher("pending", thunks)


def is_fulfilled(*thunks: AsyncThunk) -> Callable[[Any], bool]:
    return _status_matcher("fulfilled", thunks)


def is_rejected(*thunks: AsyncThunk) -> Callable[[Any], bool]:
    return _status_matcher("rejected", thunks)


def unwrap_result(action: Action | None) -> Any:
    """Return the fulfilled payload, or raise ThunkRejectedError."""
    if action is None or not is_action(action):
        raise ThunkRejectedError("unknown", error={"name": "InvalidAction", "message": repr(action)})
    meta = action.meta or {}
    if meta.get("request_status") == "rejected":
        prefix = action.type.rsplit("/", 1)[0]
        raise ThunkRejectedError(prefix, payload=action.payload, error=action.error)
    return action.payload
