"""Compose slice reducers into one root reducer."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from loguru import logger

from slicebox.actions import is_action
from slicebox.errors import ReducerError
from slicebox.types import Reducer


def combine_reducers(reducers: Mapping[str, Reducer]) -> Reducer:
    """Return a root reducer keyed by slice name.

    Each slice reducer only sees its own partition. When no partition
    changes, the previous tree object is returned unchanged.
    """
    slices = dict(reducers)
    warned: set[str] = set()

    def root_reducer(state: Mapping[str, Any] | None, action: Any) -> Mapping[str, Any]:
        previous: Mapping[str, Any] = state if state is not None else {}
        for key in previous:
            if key not in slices and key not in warned:
                warned.add(key)
                logger.warning("combine.unexpected_key key={} known={}", key, sorted(slices))

        changed = len(previous) != len(slices)
        next_tree: dict[str, Any] = {}
        for key, reducer in slices.items():
            before = previous.get(key)
            after = reducer(before, action)
            if after is None:
                action_type = action.type if is_action(action) else repr(action)
                raise ReducerError(key, action_type)
            next_tree[key] = after
            changed = changed or after is not before
        return next_tree if changed else previous

    return root_reducer
