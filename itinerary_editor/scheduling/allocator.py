"""Slot time allocation - split a slot's bounds evenly across its activities."""

from itinerary_editor.errors import FormatError
from itinerary_editor.scheduling.time_format import (
    format_duration,
    format_time_range,
    parse_time,
    uses_minutes,
)


def allocate(slot_start: int, slot_end: int, count: int) -> list[tuple[int, int]]:
    """Partition [slot_start, slot_end] into ``count`` contiguous ranges.

    Shares use floor-minute division; the last range always ends exactly at
    ``slot_end`` so leftover minutes go to the final activity only.

    Args:
        slot_start: Slot start, minutes since midnight
        slot_end: Slot end, minutes since midnight (slots never cross midnight)
        count: Number of activities, at least 1

    Returns:
        List of (start, end) minute pairs, in order

    Raises:
        ValueError: If count < 1
        FormatError: If slot_end is not after slot_start
    """
    if count < 1:
        raise ValueError(f"count must be >= 1, got {count}")
    if slot_end <= slot_start:
        raise FormatError(f"Slot end {slot_end} must be after start {slot_start}")

    if count == 1:
        return [(slot_start, slot_end)]

    share = (slot_end - slot_start) // count
    ranges = [(slot_start + i * share, slot_start + (i + 1) * share) for i in range(count)]
    last_start, _ = ranges[-1]
    ranges[-1] = (last_start, slot_end)
    return ranges


def allocate_time_slots(start_time: str, end_time: str, count: int) -> list[tuple[str, str]]:
    """Allocate human-readable ``TimeSlot`` and ``Duration`` strings for a slot.

    A single activity spans the slot verbatim. Generated times keep the slot's
    own style: bounds written as "8:00 AM" yield "10:00 AM", not "10 AM".

    Returns:
        List of (time_slot, duration) pairs, in order

    Raises:
        FormatError: If the slot bounds cannot be parsed
    """
    start = parse_time(start_time)
    end = parse_time(end_time)
    ranges = allocate(start, end, count)

    if count == 1:
        return [(f"{start_time.strip()} - {end_time.strip()}", format_duration(end - start))]

    always_minutes = uses_minutes(start_time) or uses_minutes(end_time)
    return [
        (format_time_range(s, e, always_minutes=always_minutes), format_duration(e - s))
        for s, e in ranges
    ]
