from __future__ import annotations

import pytest

from trade_directory.engine.classifier import CategoryClassifier, ProductCategory, classify


@pytest.mark.parametrize(
    ("hs_code", "expected"),
    [
        ("0904", ProductCategory.SPICES),
        ("0904.11.10", ProductCategory.SPICES),
        ("6109", ProductCategory.TEXTILES),
        ("8501", ProductCategory.ELECTRONICS),
        ("3004", ProductCategory.PHARMACEUTICALS),
        ("1006", ProductCategory.AGRICULTURE),
        ("7208", ProductCategory.GENERAL),
    ],
)
def test_classify_examples(hs_code: str, expected: ProductCategory) -> None:
    assert classify(hs_code) is expected


@pytest.mark.parametrize(
    ("prefix", "expected"),
    [
        ("08", ProductCategory.GENERAL),
        ("09", ProductCategory.SPICES),
        ("10", ProductCategory.AGRICULTURE),
        ("24", ProductCategory.AGRICULTURE),
        ("25", ProductCategory.GENERAL),
        ("28", ProductCategory.GENERAL),
        ("29", ProductCategory.PHARMACEUTICALS),
        ("30", ProductCategory.PHARMACEUTICALS),
        ("31", ProductCategory.GENERAL),
        ("49", ProductCategory.GENERAL),
        ("50", ProductCategory.TEXTILES),
        ("63", ProductCategory.TEXTILES),
        ("64", ProductCategory.GENERAL),
        ("83", ProductCategory.GENERAL),
        ("84", ProductCategory.ELECTRONICS),
        ("85", ProductCategory.ELECTRONICS),
        ("86", ProductCategory.GENERAL),
    ],
)
def test_classify_boundaries(prefix: str, expected: ProductCategory) -> None:
    assert classify(prefix) is expected
    assert classify(prefix + "99") is expected


def test_classify_depends_on_prefix_only() -> None:
    codes = ["5201", "5208.11", "52", "52xx-anything"]
    assert {classify(code) for code in codes} == {ProductCategory.TEXTILES}


def test_classify_compares_prefix_as_string() -> None:
    # Lexicographic comparison: "5A" sorts between "50" and "63", "5" sorts before "50"
    assert classify("5A01") is ProductCategory.TEXTILES
    assert classify("5") is ProductCategory.GENERAL
    assert classify("") is ProductCategory.GENERAL


def test_classifier_object_delegates() -> None:
    classifier = CategoryClassifier()
    assert classifier.classify("0910") is ProductCategory.SPICES
    assert classifier("8471") is ProductCategory.ELECTRONICS
