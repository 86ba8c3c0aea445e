"""Demo scenario: todo list plus simulated user fetch."""

import asyncio
from functools import reduce

import pytest

from slicebox.config import Settings
from slicebox.demo import (
    Todo,
    TodoListState,
    User,
    add_todo,
    build_store,
    create_fetch_user,
    fetch_user,
    remove_todo,
    run_demo,
    todo_slice,
    user_slice,
)
from slicebox.store import Store, configure_store


def _todos(store: Store) -> list[dict]:
    return [todo.model_dump() for todo in store.get_state()["todos"].todos]


def test_initial_state(demo_store: Store) -> None:
    state = demo_store.get_state()

    assert state["todos"].todos == ()
    assert state["user"].user is None
    assert state["user"].loading is False
    assert state["user"].error is None


def test_add_add_remove(demo_store: Store) -> None:
    demo_store.dispatch(add_todo({"id": 1, "text": "Learn Redux"}))
    demo_store.dispatch(add_todo({"id": 2, "text": "Build a project"}))
    demo_store.dispatch(remove_todo(1))

    assert _todos(demo_store) == [{"id": 2, "text": "Build a project"}]


def test_store_matches_pure_fold(demo_store: Store) -> None:
    actions = [
        add_todo({"id": 1, "text": "a"}),
        add_todo({"id": 2, "text": "b"}),
        add_todo(Todo(id=3, text="c")),
        remove_todo(2),
        add_todo({"id": 2, "text": "b again"}),
        remove_todo(9),
    ]
    for action in actions:
        demo_store.dispatch(action)

    folded = reduce(todo_slice.reducer, actions, TodoListState())

    assert demo_store.get_state()["todos"] == folded


def test_removing_missing_id_is_noop(demo_store: Store) -> None:
    demo_store.dispatch(add_todo({"id": 1, "text": "keep"}))
    before = demo_store.get_state()

    demo_store.dispatch(remove_todo(42))

    after = demo_store.get_state()
    assert after["todos"] is before["todos"]
    assert _todos(demo_store) == [{"id": 1, "text": "keep"}]


def test_duplicate_ids_are_kept_and_removed_together(demo_store: Store) -> None:
    demo_store.dispatch(add_todo({"id": 1, "text": "first"}))
    demo_store.dispatch(add_todo({"id": 1, "text": "second"}))
    assert len(_todos(demo_store)) == 2

    demo_store.dispatch(remove_todo(1))

    assert _todos(demo_store) == []


def test_reducers_do_not_mutate_previous_state() -> None:
    empty = TodoListState()

    grown = todo_slice.reducer(empty, add_todo({"id": 1, "text": "x"}))

    assert empty.todos == ()
    assert len(grown.todos) == 1


@pytest.mark.asyncio
async def test_fetch_user_lifecycle(demo_store: Store) -> None:
    snapshots: list[tuple[bool, str | None, User | None]] = []

    def watch() -> None:
        user_state = demo_store.get_state()["user"]
        snapshots.append((user_state.loading, user_state.error, user_state.user))

    demo_store.subscribe(watch)
    task = demo_store.dispatch(fetch_user(101))

    assert snapshots == [(True, None, None)]

    final = await task

    assert final.type == "user/fetch_user/fulfilled"
    assert snapshots[-1] == (False, None, User(id=101, name="John Doe"))
    assert len(snapshots) == 2


@pytest.mark.asyncio
async def test_failed_fetch_sets_error_and_keeps_user(demo_store: Store) -> None:
    await demo_store.dispatch(fetch_user(7))

    async def failing(_user_id: int, _delay: float) -> User:
        raise ConnectionError("offline")

    failing_fetch = create_fetch_user(failing)
    final = await demo_store.dispatch(failing_fetch(8))

    user_state = demo_store.get_state()["user"]
    assert final.payload == "Failed to fetch user"
    assert user_state.loading is False
    assert user_state.error == "Failed to fetch user"
    assert user_state.user == User(id=7, name="John Doe")

    pending_task = demo_store.dispatch(fetch_user(9))
    assert demo_store.get_state()["user"].error is None
    await pending_task


@pytest.mark.asyncio
async def test_concurrent_fetches_last_write_wins(demo_store: Store) -> None:
    async def delayed(user_id: int, _delay: float) -> User:
        await asyncio.sleep(0.02 if user_id == 1 else 0)
        return User(id=user_id, name=f"user-{user_id}")

    fetch = create_fetch_user(delayed)
    order: list[str] = []
    demo_store.subscribe(lambda: order.append(str(demo_store.get_state()["user"].loading)))

    first = demo_store.dispatch(fetch(1))
    second = demo_store.dispatch(fetch(2))
    await asyncio.gather(first, second)

    user_state = demo_store.get_state()["user"]
    assert user_state.user == User(id=1, name="user-1")
    assert user_state.loading is False
    assert order == ["True", "True", "False", "False"]


def test_user_slice_has_no_own_action_creators() -> None:
    assert vars(user_slice.actions) == {}


@pytest.mark.asyncio
async def test_run_demo_output(demo_store: Store) -> None:
    lines: list[str] = []

    result = await run_demo(demo_store, user_id=101, emit=lines.append)

    assert lines[:3] == [
        'Subscriber1: State updated: [{"id": 1, "text": "Learn Redux"}]',
        'Subscriber1: State updated: [{"id": 1, "text": "Learn Redux"}, {"id": 2, "text": "Build a project"}]',
        'Subscriber1: State updated: [{"id": 2, "text": "Build a project"}]',
    ]
    assert lines[-1] == "Unsubscribed!"
    assert result.notifications == 5
    assert len(lines) == 6
    assert result.state["user"].user == User(id=101, name="John Doe")
    assert demo_store.listener_count == 0


@pytest.mark.asyncio
async def test_run_demo_with_action_logging_matches_plain_run(fast_settings) -> None:
    plain = await run_demo(build_store(fast_settings), emit=None)
    logged = await run_demo(build_store(fast_settings, log_actions=True), emit=None)

    assert logged.notifications == plain.notifications == 5
    assert logged.final_action.type == "user/fetch_user/fulfilled"
    assert logged.state["todos"] == plain.state["todos"]
    assert logged.state["user"] == plain.state["user"]


@pytest.mark.asyncio
async def test_fetch_delay_defaults_to_settings_default() -> None:
    delays: list[float] = []

    async def recording(user_id: int, delay_seconds: float) -> User:
        delays.append(delay_seconds)
        return User(id=user_id, name="John Doe")

    store = configure_store({"user": user_slice.reducer}, log_actions=False)
    await store.dispatch(create_fetch_user(recording)(5))

    assert delays == [Settings.model_fields["fetch_delay_seconds"].default]
