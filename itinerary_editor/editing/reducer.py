"""Itinerary reducer - applies edit commands and recomputes slot time ranges.

Every function here is pure: inputs are never mutated and a fully formed new
itinerary is returned, or an error is raised before anything is replaced.
"""

import logging

from itinerary_editor.config import get_settings
from itinerary_editor.editing.hotel_sync import sync_hotel
from itinerary_editor.editing.ids import IdGenerator
from itinerary_editor.editing.validator import clamp_index, validate_move
from itinerary_editor.errors import (
    FormatError,
    ImmutableActivityError,
    InvalidMoveError,
    LastDayError,
    LunchOccupiedError,
)
from itinerary_editor.models.commands import (
    AddActivity,
    ApprovedMove,
    EditCommand,
    MoveActivity,
    RemoveActivity,
    RemoveDay,
)
from itinerary_editor.models.common import SLOT_ORDER, ActivityType, SlotName
from itinerary_editor.models.trip import (
    Activity,
    ActivitySlot,
    Itinerary,
    LunchSlot,
    Slot,
    Trip,
    first_day_key,
    last_day_key,
)
from itinerary_editor.scheduling.allocator import allocate_time_slots

logger = logging.getLogger(__name__)


def new_slot(name: SlotName) -> Slot:
    """Empty slot with the default bounds for its period."""
    start, end = get_settings().slot_bounds()[name]
    if name is SlotName.lunch:
        return LunchSlot(start_time=start, end_time=end)
    return ActivitySlot(start_time=start, end_time=end)


def recompute_slot(slot: Slot) -> Slot:
    """Reassign TimeSlot and Duration for every activity, in order.

    An unparsable slot bound aborts only this recomputation: the slot is
    returned with its membership change but its previous time strings.
    """
    members = slot.members()
    if not members:
        return slot

    try:
        allocations = allocate_time_slots(slot.start_time, slot.end_time, len(members))
    except FormatError as e:
        logger.warning(
            f"Skipping time recomputation for slot {slot.start_time!r}-{slot.end_time!r}: {e}"
        )
        return slot

    updated: list[Activity] = []
    for activity, (time_slot, duration) in zip(members, allocations):
        if activity.time_slot == time_slot and activity.duration == duration:
            updated.append(activity)
            continue
        changes: dict = {"time_slot": time_slot, "duration": duration}
        if activity.time_slot != time_slot:
            # Absolute schedule is derived from TimeSlot at save time
            changes.update(schedule_start=None, schedule_end=None)
        updated.append(activity.model_copy(update=changes))

    return slot.with_members(updated)


def apply_move(itinerary: Itinerary, approved: ApprovedMove, id_generator: IdGenerator) -> Itinerary:
    """Apply a validated move.

    Reorders keep the activity id. Cross-slot or cross-day moves give the
    moved activity a fresh id scoped to its new slot, recompute the donor
    slot, and create the target slot with default bounds when it was absent.
    """
    move = approved.move
    result = dict(itinerary)

    source_day = result[move.source_day]
    source_slot = source_day.slot(move.source_slot)
    if source_slot is None:
        raise InvalidMoveError(f"{move.source_slot.value} is absent on {move.source_day}")
    members = source_slot.members()
    moved = members.pop(move.source_index)

    if move.is_reorder:
        members.insert(clamp_index(members, move.target_index), moved)
        result[move.source_day] = source_day.with_slot(
            move.source_slot, recompute_slot(source_slot.with_members(members))
        )
        return result

    result[move.source_day] = source_day.with_slot(
        move.source_slot, recompute_slot(source_slot.with_members(members))
    )

    target_day = result[move.target_day]
    target_slot = target_day.slot(move.target_slot) or new_slot(move.target_slot)
    target_members = target_slot.members()
    target_members.insert(
        clamp_index(target_members, move.target_index),
        moved.model_copy(update={"id": id_generator(move.target_day, move.target_slot)}),
    )
    result[move.target_day] = target_day.with_slot(
        move.target_slot, recompute_slot(target_slot.with_members(target_members))
    )
    return result


def add_activity(itinerary: Itinerary, command: AddActivity, id_generator: IdGenerator) -> Itinerary:
    """Schedule a new activity in a slot, creating the slot if absent.

    Raises:
        InvalidMoveError: Unknown day
        ImmutableActivityError: Hotel check-in/out activities cannot be added,
            or the insertion would shift one
        LunchOccupiedError: Lunch already holds an activity
    """
    day = itinerary.get(command.day)
    if day is None:
        raise InvalidMoveError(f"Unknown day: {command.day}")
    if command.activity.is_pinned:
        raise ImmutableActivityError("Hotel check-in/out activities follow the selected hotel")

    slot = day.slot(command.slot) or new_slot(command.slot)
    members = slot.members()
    if command.slot is SlotName.lunch and members:
        raise LunchOccupiedError(f"Lunch on {command.day} already has an activity")

    index = clamp_index(members, command.index if command.index is not None else len(members))
    pinned_before = [(i, a) for i, a in enumerate(members) if a.is_pinned]
    new_activity = command.activity.model_copy(
        update={"id": id_generator(command.day, command.slot)}
    )
    members.insert(index, new_activity)
    if pinned_before != [(i, a) for i, a in enumerate(members) if a.is_pinned]:
        raise ImmutableActivityError(
            "This insertion would shift a hotel check-in/out activity, which must keep its position"
        )

    result = dict(itinerary)
    result[command.day] = day.with_slot(command.slot, recompute_slot(slot.with_members(members)))
    return result


def remove_activity(itinerary: Itinerary, command: RemoveActivity) -> Itinerary:
    """Remove an activity by id.

    Removing a slot's last activity makes the slot absent rather than leaving
    it present but empty.

    Raises:
        InvalidMoveError: Unknown day or activity
        ImmutableActivityError: Hotel check-in/out activities cannot be removed
    """
    day = itinerary.get(command.day)
    if day is None:
        raise InvalidMoveError(f"Unknown day: {command.day}")

    for name in SLOT_ORDER:
        slot = day.slot(name)
        if slot is None:
            continue

        members = slot.members()
        for index, activity in enumerate(members):
            if activity.id != command.activity_id:
                continue
            if activity.is_pinned:
                raise ImmutableActivityError("Hotel check-in/out activities cannot be removed")

            remaining = members[:index] + members[index + 1 :]
            new_slot_value = recompute_slot(slot.with_members(remaining)) if remaining else None

            result = dict(itinerary)
            result[command.day] = day.with_slot(name, new_slot_value)
            return result

    raise InvalidMoveError(f"Activity {command.activity_id} not found on {command.day}")


def _relocate_pinned(itinerary: Itinerary, activity: Activity) -> None:
    """Put a hotel activity back on its boundary day.

    Check-in opens the first day's Afternoon and check-out closes the last
    day's Morning. A boundary slot already holding one is left alone.
    """
    if activity.activity_type is ActivityType.hotel_checkin:
        day_key, slot_name = first_day_key(itinerary), SlotName.afternoon
    else:
        day_key, slot_name = last_day_key(itinerary), SlotName.morning
    if day_key is None:
        return

    day = itinerary[day_key]
    slot = day.slot(slot_name) or new_slot(slot_name)
    members = slot.members()
    if any(a.activity_type is activity.activity_type for a in members):
        return

    if activity.activity_type is ActivityType.hotel_checkin:
        members.insert(0, activity)
    else:
        members.append(activity)
    itinerary[day_key] = day.with_slot(slot_name, recompute_slot(slot.with_members(members)))


def remove_day(itinerary: Itinerary, command: RemoveDay) -> Itinerary:
    """Remove a whole day.

    Hotel check-in/out activities on the removed day are not dropped: they
    move to the new first or last day.

    Raises:
        InvalidMoveError: Unknown day
        LastDayError: The trip would have no days left
    """
    if command.day not in itinerary:
        raise InvalidMoveError(f"Unknown day: {command.day}")
    if len(itinerary) <= 1:
        raise LastDayError("Cannot delete the last day of a trip")

    result = {key: day for key, day in itinerary.items() if key != command.day}
    for _, _, activity in itinerary[command.day].all_activities():
        if activity.is_pinned:
            _relocate_pinned(result, activity)
    return result


def reduce(trip: Trip, command: EditCommand, id_generator: IdGenerator) -> Trip:
    """Pure ``(state, command) -> state`` transition for a trip draft.

    When the set of days changes, the first/last day may change too, so the
    selected hotel is re-bound to the check-in/out activities.
    """
    itinerary = trip.itinerary

    if isinstance(command, MoveActivity):
        updated = apply_move(itinerary, validate_move(itinerary, command), id_generator)
    elif isinstance(command, AddActivity):
        updated = add_activity(itinerary, command, id_generator)
    elif isinstance(command, RemoveActivity):
        updated = remove_activity(itinerary, command)
    elif isinstance(command, RemoveDay):
        updated = remove_day(itinerary, command)
    else:
        raise TypeError(f"Unsupported command: {type(command).__name__}")

    if trip.selected_hotel is not None and set(updated) != set(itinerary):
        updated = sync_hotel(updated, trip.selected_hotel)

    return trip.with_itinerary(updated)
