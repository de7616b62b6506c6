"""Short categories: the reserved ``habit``/``goal`` kinds plus user-defined names."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CategoryKind(str, Enum):
    HABIT = "habit"
    GOAL = "goal"
    CUSTOM = "custom"


@dataclass(frozen=True)
class ShortCategory:
    kind: CategoryKind
    name: str

    @classmethod
    def parse(cls, raw: str) -> "ShortCategory":
        label = (raw or "").strip()
        if not label:
            raise ValueError("validation_error")
        lowered = label.lower()
        if lowered == CategoryKind.HABIT.value:
            return HABIT
        if lowered == CategoryKind.GOAL.value:
            return GOAL
        return cls(CategoryKind.CUSTOM, label)

    @classmethod
    def custom(cls, name: str) -> "ShortCategory":
        category = cls.parse(name)
        if category.is_reserved:
            raise ValueError("reserved_category")
        return category

    @property
    def is_reserved(self) -> bool:
        return self.kind is not CategoryKind.CUSTOM

    @property
    def supports_milestones(self) -> bool:
        return self.kind is CategoryKind.GOAL

    def __str__(self) -> str:
        return self.name


HABIT = ShortCategory(CategoryKind.HABIT, CategoryKind.HABIT.value)
GOAL = ShortCategory(CategoryKind.GOAL, CategoryKind.GOAL.value)
RESERVED_NAMES = frozenset({HABIT.name, GOAL.name})


def is_reserved_name(name: str) -> bool:
    return (name or "").strip().lower() in RESERVED_NAMES
