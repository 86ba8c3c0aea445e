"""Todo list slice."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from slicebox.actions import Action
from slicebox.slice import create_slice


class Todo(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    text: str


class TodoListState(BaseModel):
    model_config = ConfigDict(frozen=True)

    todos: tuple[Todo, ...] = ()


def _append(state: TodoListState, action: Action) -> TodoListState:
    todo = Todo.model_validate(action.payload)
    return state.model_copy(update={"todos": (*state.todos, todo)})


def _drop(state: TodoListState, action: Action) -> TodoListState:
    # Duplicate ids are allowed on insert, so every match is removed.
    remaining = tuple(todo for todo in state.todos if todo.id != action.payload)
    if len(remaining) == len(state.todos):
        return state
    return state.model_copy(update={"todos": remaining})


todo_slice = create_slice(
    "todos",
    TodoListState(),
    reducers={
        "add_todo": _append,
        "remove_todo": _drop,
    },
)

add_todo = todo_slice.actions.add_todo
remove_todo = todo_slice.actions.remove_todo
