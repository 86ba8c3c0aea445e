"""Dispatch middleware: thunks, action logging and composition."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import reduce
from typing import TYPE_CHECKING, Any

from loguru import logger

from slicebox.actions import is_action
from slicebox.logging_utils import action_context
from slicebox.types import Dispatch, GetState, Middleware

if TYPE_CHECKING:
    from slicebox.store import Store


@dataclass(frozen=True)
class MiddlewareApi:
    """What a middleware may touch: the composed dispatch and get_state."""

    dispatch: Dispatch
    get_state: GetState


def compose(*funcs: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Right-to-left function composition; no functions yields identity."""
    if not funcs:
        return lambda value: value
    return reduce(lambda outer, inner: lambda value: outer(inner(value)), funcs)


def thunk_middleware(extra_argument: Any = None) -> Middleware:
    """Invoke dispatched callables with ``(dispatch, get_state, extra)``."""
    def middleware(api: MiddlewareApi) -> Callable[[Dispatch], Dispatch]:
        def wrap(next_dispatch: Dispatch) -> Dispatch:
            def dispatch(action: Any) -> Any:
                if callable(action) and not is_action(action):
                    return action(api.dispatch, api.get_state, extra_argument)
                return next_dispatch(action)

            return dispatch

        return wrap

    return middleware


def logging_middleware(api: MiddlewareApi) -> Callable[[Dispatch], Dispatch]:
    """Log every plain action before and after it is reduced."""
    def wrap(next_dispatch: Dispatch) -> Dispatch:
        def dispatch(action: Any) -> Any:
            if not is_action(action):
                return next_dispatch(action)
            with action_context(action.type):
                logger.debug("action.dispatch type={} payload={!r}", action.type, action.payload)
                result = next_dispatch(action)
                logger.debug("action.reduced type={} slices={}", action.type, sorted(api.get_state()))
            return result

        return dispatch

    return wrap


def apply_middleware(store: Store, *middlewares: Middleware) -> Dispatch:
    """Install ``middlewares`` on ``store`` and return the composed dispatch.

    The first middleware sees an action first. ``api.dispatch`` always goes
    through the full chain, so thunks can dispatch other thunks.
    """
    composed: Dispatch = store.base_dispatch

    def dispatch_through_chain(action: Any) -> Any:
        return composed(action)

    api = MiddlewareApi(dispatch=dispatch_through_chain, get_state=store.get_state)
    chain = [middleware(api) for middleware in middlewares]
    composed = compose(*chain)(store.base_dispatch)
    store.install_dispatch(composed)
    return composed
