"""Bundled demo: todo list plus simulated user fetch."""

from .app import DemoResult, build_store, render_todos, run_demo, to_jsonable
from .todos import Todo, TodoListState, add_todo, remove_todo, todo_slice
from .user import User, UserState, create_fetch_user, fetch_user, user_slice

__all__ = [
    "DemoResult",
    "Todo",
    "TodoListState",
    "User",
    "UserState",
    "add_todo",
    "build_store",
    "create_fetch_user",
    "fetch_user",
    "remove_todo",
    "render_todos",
    "run_demo",
    "to_jsonable",
    "todo_slice",
    "user_slice",
]
