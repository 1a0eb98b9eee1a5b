"""Fee schedule — the three charge components applied per visit."""

from pydantic import BaseModel, Field


class FeeSchedule(BaseModel):
    """Per-visit charges.

    Which of the two consultation fees applies depends on the gap since the
    previous visit; ``other_fee`` is added to every visit regardless.
    """

    first_visit_fee: float = Field(
        default=292.0, ge=0,
        description="Charged when the gap since the last visit is at or beyond the threshold (¥)",
    )
    repeat_visit_fee: float = Field(
        default=80.0, ge=0,
        description="Charged when the gap since the last visit is within the threshold (¥)",
    )
    other_fee: float = Field(
        default=694.0, ge=0,
        description="Other per-visit charges (tests, prescriptions, ...) added to every visit (¥). "
                    "Default = 160 + 334 + 200.",
    )

    @property
    def repeat_rate(self) -> float:
        """Per-visit cost under repeat-visit pricing."""
        return self.repeat_visit_fee + self.other_fee

    @property
    def first_rate(self) -> float:
        """Per-visit cost under first-visit pricing."""
        return self.first_visit_fee + self.other_fee
