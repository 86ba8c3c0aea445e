"""Action records and action creators."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from slicebox.errors import InvalidActionError

INIT_ACTION_TYPE = "@@slicebox/INIT"
REPLACE_ACTION_TYPE = "@@slicebox/REPLACE"


@dataclass(frozen=True)
class Action:
    """Tagged description of an intended state change."""

    type: str
    payload: Any = None
    meta: Mapping[str, Any] | None = None
    error: Mapping[str, Any] | None = None


def is_action(value: Any) -> bool:
    """Return True for dispatchable action records."""
    return isinstance(value, Action) and bool(value.type)


class ActionCreator:
    """Callable that builds actions of one type.

    ``prepare`` may turn the call arguments into a ``(payload, meta)`` or
    ``(payload, meta, error)`` tuple; without it the single positional
    argument becomes the payload.
    """

    def __init__(self, action_type: str, prepare: Callable[..., tuple[Any, ...]] | None = None) -> None:
        if not action_type:
            raise InvalidActionError("action type must be a non-empty string")
        self.type = action_type
        self._prepare = prepare

    def __call__(self, *args: Any, **kwargs: Any) -> Action:
        if self._prepare is not None:
            payload, meta, *rest = self._prepare(*args, **kwargs)
            error = rest[0] if rest else None
            return Action(type=self.type, payload=payload, meta=meta, error=error)
        if kwargs or len(args) > 1:
            raise TypeError(f"Action creator '{self.type}' takes at most one positional payload")
        payload = args[0] if args else None
        return Action(type=self.type, payload=payload)

    def match(self, action: Any) -> bool:
        return is_action(action) and action.type == self.type

    def __repr__(self) -> str:
        return f"ActionCreator({self.type!r})"

    def __str__(self) -> str:
        return self.type


def create_action(
    action_type: str,
    prepare: Callable[..., tuple[Any, ...]] | None = None,
) -> ActionCreator:
    """Create an action creator for ``action_type``."""
    return ActionCreator(action_type, prepare)


def action_type_of(target: ActionCreator | str) -> str:
    """Resolve an action creator or a plain type string to the type string."""
    if isinstance(target, ActionCreator):
        return target.type
    if isinstance(target, str) and target:
        return target
    raise InvalidActionError(f"expected an action creator or type string, got {target!r}")
