from __future__ import annotations

from enum import Enum

MIN_SCORE = 1
MAX_SCORE = 5


class Category(Enum):
    """Rating dimensions in wire order, each paired with its weight."""

    HR = ("HR", 1)
    FRONT_DESK = ("FRONT DESK", 1)
    FOOD_AND_BEVERAGE = ("FOOD&BEVERAGE", 1)
    HOUSEKEEPING = ("HOUSEKEEPING", 1)
    LAUNDRY = ("LAUNDRY", 1)
    LP = ("LP", 1)
    MARKETING = ("MARKETING", 1)
    EMPLOYEE_DINING_ROOM = ("EMPLOYEE DINING ROOM", 1)
    QUALITY_OF_THE_GUEST = ("QUALITY OF THE GUEST", 1)
    HONESTY = ("HONESTY", 1)
    DISCRIMINATION = ("DISCRIMINATION", 2)
    ANIMAL_ABUSE = ("ANIMAL ABUSE", 2)
    ACCOMMODATION = ("ACCOMMODATION", 2)

    def __init__(self, label: str, weight: int) -> None:
        self.label = label
        self.weight = weight


CATEGORIES: tuple[Category, ...] = tuple(Category)
CATEGORY_COUNT = len(CATEGORIES)
