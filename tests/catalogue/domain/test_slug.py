import pytest
from catalogue.shared.slug import slugify


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Spices", "spices"),
        ("Dry Fruits & Nuts", "dry-fruits-nuts"),
        ("  Black   Pepper  ", "black-pepper"),
        ("Cashew W-240", "cashew-w-240"),
        ("Rice--Basmati", "rice-basmati"),
        ("Organic_Turmeric", "organic_turmeric"),
    ],
)
def test_slugify(name, expected):
    assert slugify(name) == expected


def test_slugify_drops_non_ascii_symbols():
    assert slugify("Café Arábica ★") == "caf-arbica"


def test_slugify_of_only_symbols_is_empty():
    assert slugify("&&&") == ""
