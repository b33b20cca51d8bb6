"""Edit commands accepted by the itinerary reducer."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from itinerary_editor.models.common import SlotName
from itinerary_editor.models.trip import Activity


class MoveActivity(BaseModel):
    """Relocate one activity to a new slot/day/position (a drop)."""

    kind: Literal["move"] = "move"
    source_day: str
    source_slot: SlotName
    source_index: int = Field(..., ge=0)
    target_day: str
    target_slot: SlotName
    target_index: int = Field(..., ge=0)
    activity_id: str | None = None

    @property
    def is_reorder(self) -> bool:
        return self.source_day == self.target_day and self.source_slot == self.target_slot


class AddActivity(BaseModel):
    """Schedule a new activity; appended when no index is given."""

    kind: Literal["add"] = "add"
    day: str
    slot: SlotName
    activity: Activity
    index: int | None = Field(None, ge=0)


class RemoveActivity(BaseModel):
    """Remove an activity by id."""

    kind: Literal["remove"] = "remove"
    day: str
    activity_id: str


class RemoveDay(BaseModel):
    """Remove a whole day from the trip."""

    kind: Literal["remove_day"] = "remove_day"
    day: str


EditCommand = Annotated[
    MoveActivity | AddActivity | RemoveActivity | RemoveDay,
    Field(discriminator="kind"),
]


class ApprovedMove(BaseModel):
    """A move that passed validation, with the activity it relocates."""

    move: MoveActivity
    activity: Activity
