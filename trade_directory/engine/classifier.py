"""HS-code to coarse product category mapping."""

from __future__ import annotations

from enum import Enum


class ProductCategory(str, Enum):
    SPICES = "spices"
    TEXTILES = "textiles"
    ELECTRONICS = "electronics"
    PHARMACEUTICALS = "pharmaceuticals"
    AGRICULTURE = "agriculture"
    GENERAL = "general"


# Inclusive (low, high) bounds compared as strings against the two-character
# chapter prefix; first match wins.
CHAPTER_RANGES: tuple[tuple[str, str, ProductCategory], ...] = (
    ("09", "09", ProductCategory.SPICES),
    ("50", "63", ProductCategory.TEXTILES),
    ("84", "85", ProductCategory.ELECTRONICS),
    ("29", "30", ProductCategory.PHARMACEUTICALS),
    ("10", "24", ProductCategory.AGRICULTURE),
)


def classify(hs_code: str) -> ProductCategory:
    """Return the category of ``hs_code`` judged by its first two characters.

    The comparison is lexicographic on the raw prefix, so a prefix such as
    ``"5A"`` lands in textiles and a one-character code such as ``"5"`` does not.
    """

    chapter = hs_code[:2]
    for low, high, category in CHAPTER_RANGES:
        if low <= chapter <= high:
            return category
    return ProductCategory.GENERAL


class CategoryClassifier:
    """Callable wrapper so the classifier can be injected and swapped in tests."""

    def classify(self, hs_code: str) -> ProductCategory:
        return classify(hs_code)

    __call__ = classify


__all__ = ["CHAPTER_RANGES", "CategoryClassifier", "ProductCategory", "classify"]
