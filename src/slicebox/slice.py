"""State slices: one partition of the state tree plus its transitions."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Any

from slicebox.actions import Action, ActionCreator, action_type_of, is_action
from slicebox.errors import ReducerError, SliceDefinitionError

CaseReducer = Callable[[Any, Action], Any]
ActionMatcher = Callable[[Any], bool]


@dataclass(frozen=True)
class _MatcherCase:
    predicate: ActionMatcher
    reducer: CaseReducer


class ReducerBuilder:
    """Collects reactions to actions a slice does not own.

    Exact-type cases must be registered before matchers, and the default
    case must come last.
    """

    def __init__(self) -> None:
        self._cases: dict[str, CaseReducer] = {}
        self._matchers: list[_MatcherCase] = []
        self._default: CaseReducer | None = None

    def add_case(self, target: ActionCreator | str, reducer: CaseReducer) -> ReducerBuilder:
        action_type = action_type_of(target)
        if self._matchers:
            raise SliceDefinitionError(f"add_case('{action_type}') must come before add_matcher")
        if self._default is not None:
            raise SliceDefinitionError(f"add_case('{action_type}') must come before add_default_case")
        if action_type in self._cases:
            raise SliceDefinitionError(f"a case reducer for '{action_type}' is already registered")
        self._cases[action_type] = reducer
        return self

    def add_matcher(self, predicate: ActionMatcher, reducer: CaseReducer) -> ReducerBuilder:
        if self._default is not None:
            raise SliceDefinitionError("add_matcher must come before add_default_case")
        self._matchers.append(_MatcherCase(predicate=predicate, reducer=reducer))
        return self

    def add_default_case(self, reducer: CaseReducer) -> ReducerBuilder:
        if self._default is not None:
            raise SliceDefinitionError("add_default_case can only be called once")
        self._default = reducer
        return self

    @property
    def cases(self) -> dict[str, CaseReducer]:
        return dict(self._cases)

    @property
    def matchers(self) -> list[_MatcherCase]:
        return list(self._matchers)

    @property
    def default(self) -> CaseReducer | None:
        return self._default


@dataclass
class Slice:
    """Named partition of the state tree with its own transition logic."""

    name: str
    initial_state: Any
    actions: SimpleNamespace
    _cases: dict[str, CaseReducer] = field(default_factory=dict, repr=False)
    _matchers: list[_MatcherCase] = field(default_factory=list, repr=False)
    _default: CaseReducer | None = field(default=None, repr=False)

    def reducer(self, state: Any, action: Any) -> Any:
        """Compute the next state; unknown actions return ``state`` itself."""
        if state is None:
            state = self.initial_state
        if not is_action(action):
            return state

        matched = False
        case = self._cases.get(action.type)
        if case is not None:
            state = self._run(case, state, action)
            matched = True
        for matcher in self._matchers:
            if matcher.predicate(action):
                state = self._run(matcher.reducer, state, action)
                matched = True
        if not matched and self._default is not None:
            state = self._run(self._default, state, action)
        return state

    def get_initial_state(self) -> Any:
        return self.initial_state

    def _run(self, case: CaseReducer, state: Any, action: Action) -> Any:
        next_state = case(state, action)
        if next_state is None:
            raise ReducerError(f"{self.name}.{getattr(case, '__name__', 'case')}", action.type)
        return next_state


def create_slice(
    name: str,
    initial_state: Any,
    reducers: Mapping[str, CaseReducer] | None = None,
    extra_reducers: Callable[[ReducerBuilder], Any] | None = None,
) -> Slice:
    """Build a slice and generate one action creator per reducer.

    Each entry of ``reducers`` becomes ``slice.actions.<key>``, producing
    actions of type ``"<name>/<key>"``.
    """
    if not name:
        raise SliceDefinitionError("slice name must be a non-empty string")

    creators: dict[str, ActionCreator] = {}
    cases: dict[str, CaseReducer] = {}
    for key, case in (reducers or {}).items():
        creator = ActionCreator(f"{name}/{key}")
        creators[key] = creator
        cases[creator.type] = case

    builder = ReducerBuilder()
    if extra_reducers is not None:
        extra_reducers(builder)
    for action_type, case in builder.cases.items():
        if action_type in cases:
            raise SliceDefinitionError(f"'{action_type}' is already handled by slice '{name}'")
        cases[action_type] = case

    return Slice(
        name=name,
        initial_state=initial_state,
        actions=SimpleNamespace(**creators),
        _cases=cases,
        _matchers=builder.matchers,
        _default=builder.default,
    )
