"""Game categories (variants) and how the engine groups them."""

import enum


class Category(str, enum.Enum):
    BLITZ = "blitz"
    LIGHTNING = "lightning"
    UNTIMED = "untimed"
    STANDARD = "standard"
    NONSTANDARD = "nonstandard"
    CRAZYHOUSE = "crazyhouse"
    BUGHOUSE = "bughouse"
    LOSERS = "losers"
    CHESS960 = "wild/fr"
    WILD_0 = "wild/0"
    WILD_1 = "wild/1"
    WILD_2 = "wild/2"
    WILD_3 = "wild/3"
    WILD_4 = "wild/4"
    WILD_5 = "wild/5"
    WILD_8 = "wild/8"
    WILD_8A = "wild/8a"


class UnsupportedCategoryError(ValueError):
    """Raised by front ends for a category the engine refuses."""


# Plain chess rules, handed straight to python-chess
ORTHODOX = frozenset({
    Category.BLITZ,
    Category.LIGHTNING,
    Category.UNTIMED,
    Category.STANDARD,
    Category.NONSTANDARD,
})

DROP_VARIANTS = frozenset({Category.CRAZYHOUSE, Category.BUGHOUSE})

WILD = frozenset(c for c in Category if c.value.startswith("wild/"))


def parse_category(name: str | Category | None) -> Category | None:
    """Map a category name to a Category, or None if the engine doesn't support it."""
    if isinstance(name, Category):
        return name
    try:
        return Category(name)
    except ValueError:
        return None


def require_supported(name: str | Category | None) -> Category:
    category = parse_category(name)
    if category is None:
        raise UnsupportedCategoryError(f"Unsupported category: {name}")
    return category
