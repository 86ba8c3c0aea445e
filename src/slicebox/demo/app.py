"""Demo wiring: one store, a todo list and a simulated user fetch."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from loguru import logger
from pydantic import BaseModel

from slicebox.actions import Action
from slicebox.config import Settings, get_settings
from slicebox.demo.todos import add_todo, remove_todo, todo_slice
from slicebox.demo.user import fetch_user, user_slice
from slicebox.store import Store, configure_store

Emit = Callable[[str], None]


@dataclass(frozen=True)
class DemoResult:
    """Outcome of one demo run."""

    final_action: Action
    state: Mapping[str, Any]
    notifications: int


def build_store(settings: Settings | None = None, *, log_actions: bool | None = None) -> Store:
    settings = settings or get_settings()
    return configure_store(
        {
            todo_slice.name: todo_slice.reducer,
            user_slice.name: user_slice.reducer,
        },
        extra_argument=settings,
        log_actions=settings.log_actions if log_actions is None else log_actions,
    )


def to_jsonable(value: Any) -> Any:
    """Convert a state tree (or one slice) to plain JSON-compatible data."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Mapping):
        return {key: to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


def render_todos(store: Store) -> str:
    return json.dumps(to_jsonable(store.get_state()["todos"].todos), ensure_ascii=False)


async def run_demo(store: Store, *, user_id: int = 101, emit: Emit | None = None) -> DemoResult:
    """Replay the todo/user scenario against ``store``.

    One listener prints the todo list after every dispatch until the user
    fetch completes, then it unsubscribes.
    """
    def _emit(line: str) -> None:
        if emit is not None:
            emit(line)

    notifications = 0

    def subscriber() -> None:
        nonlocal notifications
        notifications += 1
        _emit(f"Subscriber1: State updated: {render_todos(store)}")

    unsubscribe = store.subscribe(subscriber)

    store.dispatch(add_todo({"id": 1, "text": "Learn Redux"}))
    store.dispatch(add_todo({"id": 2, "text": "Build a project"}))
    store.dispatch(remove_todo(1))

    final_action = await store.dispatch(fetch_user(user_id))
    unsubscribe()
    _emit("Unsubscribed!")
    logger.info("demo.finished notifications={} terminal={}", notifications, final_action.type)
    return DemoResult(final_action=final_action, state=store.get_state(), notifications=notifications)
