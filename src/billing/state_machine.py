"""Status transition rules shared by the Payment and Invoice aggregates.

Each aggregate declares its own transition table; this module applies the
common rejection rules in a fixed order so that every rejected case reports
a distinct reason:

1. no target status
2. target equals the current status
3. current status is terminal
4. target is not among the current status' allowed targets
"""

from enum import Enum

from billing.exceptions import InvalidStatusTransition


def _join(statuses: tuple[Enum, ...]) -> str:
    names = [status.value for status in statuses]
    if len(names) == 1:
        return names[0]
    return f"{', '.join(names[:-1])}, or {names[-1]}"


def assert_transition(
    current: Enum,
    target: Enum | None,
    transitions: dict[Enum, tuple[Enum, ...]],
    noun: str,
) -> None:
    """Raise ``InvalidStatusTransition`` unless ``current -> target`` is allowed.

    ``noun`` is the plural entity name used in messages, e.g. "payments".
    """
    if target is None:
        raise InvalidStatusTransition("Target status cannot be null")

    if current == target:
        raise InvalidStatusTransition(f"Cannot transition from {current.value} to {target.value} (same status)")

    allowed = transitions.get(current, ())
    if not allowed:
        raise InvalidStatusTransition(
            f"Cannot transition from terminal state {current.value} to {target.value}. "
            f"{noun.capitalize()} in {current.value} status cannot be modified."
        )

    if target not in allowed:
        raise InvalidStatusTransition(
            f"Invalid transition from {current.value} to {target.value}. "
            f"{current.value} {noun} can only transition to {_join(allowed)}."
        )


def is_terminal(status: Enum, transitions: dict[Enum, tuple[Enum, ...]]) -> bool:
    return not transitions.get(status, ())
