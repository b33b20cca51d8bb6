"""Error kinds raised by the itinerary editor.

Every error carries a machine-usable ``code`` and a human-readable message.
None of them is fatal: callers report the message and keep the last good draft.
"""


class ItineraryError(Exception):
    """Base class for all itinerary editor errors."""

    code = "ITINERARY_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FormatError(ItineraryError, ValueError):
    """Unparsable time string or slot bounds."""

    code = "FORMAT_ERROR"


class MoveRejectedError(ItineraryError):
    """An edit command was refused; the itinerary is untouched."""

    code = "MOVE_REJECTED"


class ImmutableActivityError(MoveRejectedError):
    """Hotel check-in/out activities cannot be moved, displaced or removed."""

    code = "IMMUTABLE_ACTIVITY"


class SlotWouldBeEmptyError(MoveRejectedError):
    """Moving the activity would leave its source slot empty."""

    code = "SLOT_WOULD_BE_EMPTY"


class LunchOccupiedError(MoveRejectedError):
    """Lunch already holds its single activity."""

    code = "LUNCH_OCCUPIED"


class InvalidMoveError(MoveRejectedError):
    """The command references a day, slot or position that does not exist."""

    code = "INVALID_MOVE"


class LastDayError(MoveRejectedError):
    """The only remaining day of a trip cannot be removed."""

    code = "LAST_DAY"


class SaveValidationError(ItineraryError):
    """Draft failed save-time validation; nothing was sent."""

    code = "SAVE_VALIDATION"


class NoHotelSelectedError(SaveValidationError):
    """Exactly one hotel must be selected before saving."""

    code = "NO_HOTEL_SELECTED"


class EmptyDaysError(SaveValidationError):
    """One or more days have no activities in any slot."""

    code = "EMPTY_DAYS"

    def __init__(self, day_keys: list[str]) -> None:
        super().__init__(f"Please add activities to days: {', '.join(day_keys)}")
        self.day_keys = day_keys


class SaveError(ItineraryError):
    """The Trip Store rejected or failed the save; the draft is kept."""

    code = "SAVE_FAILED"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
