"""The store: single owner of the state tree."""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from loguru import logger

from slicebox.actions import INIT_ACTION_TYPE, REPLACE_ACTION_TYPE, Action, is_action
from slicebox.combine import combine_reducers
from slicebox.config import get_settings
from slicebox.errors import DispatchInProgressError, InvalidActionError
from slicebox.middleware import apply_middleware, logging_middleware, thunk_middleware
from slicebox.types import Dispatch, Listener, Middleware, Reducer, Unsubscribe


class Store:
    """In-memory state container.

    All state changes go through ``dispatch``. Reducers run and listeners are
    notified synchronously, so two dispatches never interleave on one event
    loop.

    Listener notification iterates a snapshot of the listeners registered
    when the round starts. A listener subscribed during a round is first
    called on the next dispatch; a listener unsubscribed during a round is
    skipped for the rest of it.
    """

    def __init__(self, reducer: Reducer, preloaded_state: Any = None) -> None:
        self._reducer = reducer
        self._state = dict(preloaded_state) if isinstance(preloaded_state, Mapping) else preloaded_state
        self._listeners: dict[int, Listener] = {}
        self._listener_ids = itertools.count()
        self._is_dispatching = False
        self._dispatch: Dispatch = self.base_dispatch
        self.base_dispatch(Action(type=INIT_ACTION_TYPE))

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def get_state(self) -> Any:
        """Return a read-only view of the current state tree."""
        if self._is_dispatching:
            raise DispatchInProgressError("get_state() may not be called while a reducer is running")
        if isinstance(self._state, dict):
            return MappingProxyType(self._state)
        return self._state

    def dispatch(self, action: Any) -> Any:
        """Dispatch an action or a thunk through the installed middleware."""
        return self._dispatch(action)

    def base_dispatch(self, action: Any) -> Any:
        """Reduce one plain action and notify listeners; no middleware."""
        if not is_action(action):
            if callable(action):
                raise InvalidActionError(f"{action!r} is callable; install thunk_middleware to dispatch thunks")
            raise InvalidActionError(f"expected an Action, got {type(action).__name__}")
        if self._is_dispatching:
            raise DispatchInProgressError(f"reducers may not dispatch actions (got '{action.type}')")

        try:
            self._is_dispatching = True
            next_state = self._reducer(self._state, action)
        finally:
            self._is_dispatching = False
        self._state = next_state

        self._notify()
        return action

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """Register ``listener``; the returned callable removes it (idempotent)."""
        if not callable(listener):
            raise TypeError(f"expected a callable listener, got {type(listener).__name__}")
        if self._is_dispatching:
            raise DispatchInProgressError("reducers may not subscribe listeners")

        listener_id = next(self._listener_ids)
        self._listeners[listener_id] = listener

        def unsubscribe() -> None:
            if self._is_dispatching:
                raise DispatchInProgressError("reducers may not unsubscribe listeners")
            if self._listeners.pop(listener_id, None) is not None:
                logger.debug("store.unsubscribed listener_id={}", listener_id)

        return unsubscribe

    def replace_reducer(self, reducer: Reducer) -> None:
        self._reducer = reducer
        self.dispatch(Action(type=REPLACE_ACTION_TYPE))

    def install_dispatch(self, dispatch: Dispatch) -> None:
        self._dispatch = dispatch

    def _notify(self) -> None:
        for listener_id, listener in list(self._listeners.items()):
            if listener_id in self._listeners:
                listener()


def configure_store(
    reducer: Reducer | Mapping[str, Reducer],
    *,
    preloaded_state: Any = None,
    middleware: Iterable[Middleware] = (),
    extra_argument: Any = None,
    log_actions: bool | None = None,
) -> Store:
    """Create a store with the thunk middleware installed.

    Args:
        reducer: Root reducer, or a mapping of slice reducers to combine
        preloaded_state: Optional initial state tree
        middleware: Additional middleware, run after the defaults
        extra_argument: Value passed to thunks as ``extra``
        log_actions: Install the logging middleware; defaults to settings

    Returns:
        Store instance
    """
    root_reducer = combine_reducers(reducer) if isinstance(reducer, Mapping) else reducer
    if log_actions is None:
        log_actions = get_settings().log_actions

    chain: list[Middleware] = [thunk_middleware(extra_argument)]
    if log_actions:
        chain.append(logging_middleware)
    chain.extend(middleware)

    store = Store(root_reducer, preloaded_state)
    apply_middleware(store, *chain)
    logger.debug("store.configured middleware={}", len(chain))
    return store
