"""Structural checks applied to every action before it reaches a reducer."""

from __future__ import annotations

from collections.abc import Mapping, Sequence, Set
from numbers import Number
from typing import Any

from .types import Action


class InvalidActionError(TypeError):
    """Raised when something that is not a well-formed action is dispatched."""

    def __init__(self, action: Any, reason: str) -> None:
        self.action = action
        self.reason = reason
        super().__init__(f"{reason} Got {action!r}.")


def _is_structured(action: Any) -> bool:
    if action is None:
        return False
    # str/bytes are Sequences; bool is a Number
    return not isinstance(action, (Number, Sequence, Set, bytes, bytearray))


def action_type(action: Action | Mapping[str, Any]) -> Any:
    """
    Return the ``type`` discriminator of an action.

    Mappings are read by key, everything else by attribute. Returns None
    when the action carries no type.
    """
    if isinstance(action, Mapping):
        return action.get("type")
    return getattr(action, "type", None)


def validate_action(action: Any) -> None:
    """
    Check that ``action`` is a structured object with a ``type``.

    Args:
        action: The candidate action.

    Raises:
        InvalidActionError: If the action is missing, is a scalar or a
            sequence, or has no ``type``.
    """
    if not _is_structured(action):
        raise InvalidActionError(action, "Action must be an object!")
    if action_type(action) is None:
        raise InvalidActionError(action, "Action must have a type!")
