import pytest

from slicebox.actions import Action, create_action, is_action
from slicebox.errors import InvalidActionError


def test_action_creator_builds_typed_action() -> None:
    rename = create_action("profile/rename")

    action = rename("alice")

    assert action == Action(type="profile/rename", payload="alice")
    assert rename.match(action)
    assert str(rename) == "profile/rename"


def test_action_creator_without_payload() -> None:
    reset = create_action("counter/reset")

    assert reset().payload is None


def test_action_creator_rejects_extra_arguments() -> None:
    rename = create_action("profile/rename")

    with pytest.raises(TypeError):
        rename("a", "b")


def test_prepare_callback_sets_meta_and_error() -> None:
    failed = create_action("job/failed", lambda reason: (None, {"reason": reason}, {"message": reason}))

    action = failed("timeout")

    assert action.meta == {"reason": "timeout"}
    assert action.error == {"message": "timeout"}


def test_empty_type_is_rejected() -> None:
    with pytest.raises(InvalidActionError):
        create_action("")


def test_is_action() -> None:
    assert is_action(Action(type="a/b"))
    assert not is_action({"type": "a/b"})
    assert not is_action(Action(type=""))
