"""Move validation - decides whether a drop may be applied.

Validation is a single-shot decision with no state of its own. It runs before
any mutation, so a rejected move never leaves a partially edited itinerary.
"""

from itinerary_editor.errors import (
    ImmutableActivityError,
    InvalidMoveError,
    LunchOccupiedError,
    SlotWouldBeEmptyError,
)
from itinerary_editor.models.commands import ApprovedMove, MoveActivity
from itinerary_editor.models.common import SlotName
from itinerary_editor.models.trip import Activity, Itinerary


def clamp_index(members: list[Activity], index: int) -> int:
    """Insertion position; anything past the end appends."""
    return min(index, len(members))


def _pinned_layout(members: list[Activity]) -> list[tuple[int, Activity]]:
    return [(i, a) for i, a in enumerate(members) if a.is_pinned]


def _check_pinned_unmoved(before: list[Activity], after: list[Activity]) -> None:
    if _pinned_layout(before) != _pinned_layout(after):
        raise ImmutableActivityError(
            "This move would shift a hotel check-in/out activity, which must keep its position"
        )


def validate_move(itinerary: Itinerary, move: MoveActivity) -> ApprovedMove:
    """Validate a proposed move against the current itinerary.

    Args:
        itinerary: Current (latest) itinerary snapshot
        move: Proposed relocation

    Returns:
        ApprovedMove carrying the resolved activity

    Raises:
        InvalidMoveError: Unknown day, empty slot, bad index or stale activity id
        ImmutableActivityError: Activity is a hotel check-in/out, or the move
            would shift one
        SlotWouldBeEmptyError: Cross-slot move of a slot's only activity
        LunchOccupiedError: Target Lunch already holds its activity
    """
    source_day = itinerary.get(move.source_day)
    if source_day is None:
        raise InvalidMoveError(f"Unknown day: {move.source_day}")
    target_day = itinerary.get(move.target_day)
    if target_day is None:
        raise InvalidMoveError(f"Unknown day: {move.target_day}")

    source = source_day.activities_in(move.source_slot)
    if move.source_index >= len(source):
        raise InvalidMoveError(
            f"No activity at {move.source_day} {move.source_slot.value}[{move.source_index}]"
        )

    activity = source[move.source_index]
    if move.activity_id is not None and activity.id != move.activity_id:
        raise InvalidMoveError(
            f"Activity {move.activity_id} is no longer at "
            f"{move.source_day} {move.source_slot.value}[{move.source_index}]"
        )

    if activity.is_pinned:
        raise ImmutableActivityError("Hotel check-in/out activities cannot be moved")

    if move.is_reorder:
        reordered = list(source)
        reordered.pop(move.source_index)
        reordered.insert(clamp_index(reordered, move.target_index), activity)
        _check_pinned_unmoved(source, reordered)
        return ApprovedMove(move=move, activity=activity)

    if len(source) == 1:
        raise SlotWouldBeEmptyError(
            f"Cannot move the last activity from {move.source_slot.value}. "
            "Each time slot must have at least one activity."
        )

    target = target_day.activities_in(move.target_slot)
    if move.target_slot is SlotName.lunch and target:
        raise LunchOccupiedError(f"Lunch on {move.target_day} already has an activity")

    remaining = source[: move.source_index] + source[move.source_index + 1 :]
    _check_pinned_unmoved(source, remaining)

    extended = list(target)
    extended.insert(clamp_index(target, move.target_index), activity)
    _check_pinned_unmoved(target, extended)

    return ApprovedMove(move=move, activity=activity)
