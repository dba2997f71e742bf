"""Static age-eligibility rules attached to each limit type."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, model_validator


class LimitTypeRule(BaseModel):
    """Inclusive age window in which a limit type applies.

    A missing ``minimum_age`` means every age is eligible. Ages are as of
    December 31 of the contribution year.
    """

    model_config = {"frozen": True}

    minimum_age: Optional[int] = Field(default=None, ge=0)
    maximum_age: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> LimitTypeRule:
        if self.maximum_age is not None:
            if self.minimum_age is None:
                raise ValueError("maximum_age requires minimum_age")
            if self.minimum_age > self.maximum_age:
                raise ValueError(
                    f"minimum_age {self.minimum_age} exceeds maximum_age {self.maximum_age}"
                )
        return self

    @property
    def has_age_requirement(self) -> bool:
        return self.minimum_age is not None

    def is_eligible(self, age: int) -> bool:
        if self.minimum_age is None:
            return True
        if age < self.minimum_age:
            return False
        return self.maximum_age is None or age <= self.maximum_age
