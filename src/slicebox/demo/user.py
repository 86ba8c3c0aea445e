"""User slice and the simulated user fetch."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from loguru import logger
from pydantic import BaseModel, ConfigDict

from slicebox.actions import Action
from slicebox.config import Settings
from slicebox.slice import ReducerBuilder, create_slice
from slicebox.thunk import AsyncThunk, ThunkApi, create_async_thunk

FETCH_USER_TYPE = "user/fetch_user"
FETCH_FAILED_MESSAGE = "Failed to fetch user"
DEFAULT_FETCH_DELAY_SECONDS: float = Settings.model_fields["fetch_delay_seconds"].default


class User(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str


class UserState(BaseModel):
    model_config = ConfigDict(frozen=True)

    user: User | None = None
    loading: bool = False
    error: str | None = None


UserFetcher = Callable[[int, float], Awaitable[User]]


async def simulated_fetch(user_id: int, delay_seconds: float) -> User:
    """Resolve to a fixed record after ``delay_seconds``."""
    await asyncio.sleep(delay_seconds)
    return User(id=user_id, name="John Doe")


def create_fetch_user(fetcher: UserFetcher = simulated_fetch) -> AsyncThunk:
    """Build the fetch-user thunk around ``fetcher``.

    The delay comes from ``extra.fetch_delay_seconds`` when the store was
    configured with settings as its extra argument. Any fetcher failure is
    rejected with ``FETCH_FAILED_MESSAGE``.
    """
    async def fetch(user_id: int, api: ThunkApi) -> User:
        delay = getattr(api.extra, "fetch_delay_seconds", DEFAULT_FETCH_DELAY_SECONDS)
        try:
            return await fetcher(user_id, delay)
        except Exception as exc:
            logger.warning("user.fetch_failed user_id={} error={}", user_id, exc)
            raise api.reject_with_value(FETCH_FAILED_MESSAGE) from exc

    return create_async_thunk(FETCH_USER_TYPE, fetch)


fetch_user = create_fetch_user()


def _on_pending(state: UserState, _action: Action) -> UserState:
    return state.model_copy(update={"loading": True, "error": None})


def _on_fulfilled(state: UserState, action: Action) -> UserState:
    return state.model_copy(update={"loading": False, "user": User.model_validate(action.payload)})


def _on_rejected(state: UserState, action: Action) -> UserState:
    error = action.payload
    if error is None:
        error = (action.error or {}).get("message", FETCH_FAILED_MESSAGE)
    return state.model_copy(update={"loading": False, "error": str(error)})


def _user_lifecycle(builder: ReducerBuilder) -> None:
    (
        builder.add_case(fetch_user.pending, _on_pending)
        .add_case(fetch_user.fulfilled, _on_fulfilled)
        .add_case(fetch_user.rejected, _on_rejected)
    )


user_slice = create_slice("user", UserState(), extra_reducers=_user_lifecycle)
