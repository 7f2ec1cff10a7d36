"""Type definitions for textual-store."""

from typing import Any, Callable, Mapping, Protocol, TypeVar

# Type variables
T = TypeVar("T")
A_contra = TypeVar("A_contra", contravariant=True)  # Action type

Props = Mapping[str, Any]


class Action(Protocol):
    """Protocol for object-style actions (dataclasses, pydantic models)."""

    @property
    def type(self) -> str:
        """Action type identifier."""
        ...


class Reducer(Protocol[T, A_contra]):
    """Protocol for reducer functions.

    The store calls the reducer with ``None`` as the prior state exactly once,
    for its initialization action; the reducer must answer with its initial
    state.
    """

    def __call__(self, state: T | None, action: A_contra) -> T:
        """Process an action and return the next state."""
        ...


class DispatchFunc(Protocol[A_contra]):
    """Protocol for dispatch functions."""

    def __call__(self, action: A_contra) -> None:
        """Dispatch an action to the store."""
        ...


Subscriber = Callable[[], None]
Unsubscribe = Callable[[], None]
StateProjector = Callable[[Any], Props]
DispatchProjector = Callable[[DispatchFunc[Any]], Props]
Consumer = Callable[[Props], Any]
