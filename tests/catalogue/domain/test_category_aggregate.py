"""Tests for the Category aggregate."""

import pytest
from catalogue.category.category import Category
from catalogue.category.events import CategoryCreated, CategoryUpdated
from catalogue.shared.status import CatalogueStatus
from protean.exceptions import ValidationError


class TestCategoryCreation:
    def test_create_derives_slug_from_name(self):
        category = Category.create(name="Dry Fruits & Nuts", image="/uploads/1-dry.jpg")
        assert category.slug == "dry-fruits-nuts"

    def test_create_defaults(self):
        category = Category.create(name="Spices", image="/uploads/1-spices.jpg")
        assert category.featured is False
        assert category.status == CatalogueStatus.ACTIVE.value
        assert category.is_active
        assert category.created_at is not None

    def test_create_raises_event(self):
        category = Category.create(name="Spices", image="/uploads/1-spices.jpg")
        assert len(category._events) == 1
        event = category._events[0]
        assert isinstance(event, CategoryCreated)
        assert event.slug == "spices"

    def test_image_is_required(self):
        with pytest.raises(ValidationError):
            Category.create(name="Spices", image=None)

    def test_name_is_required(self):
        with pytest.raises(ValidationError):
            Category.create(name=None, image="/uploads/1-spices.jpg")


class TestCategoryUpdate:
    def _category(self):
        category = Category.create(name="Spices", image="/uploads/1-spices.jpg")
        category._events.clear()
        return category

    def test_renaming_regenerates_slug(self):
        category = self._category()
        category.update_details(name="Whole Spices")
        assert category.slug == "whole-spices"

    def test_partial_update_keeps_other_fields(self):
        category = self._category()
        category.update_details(featured=True)
        assert category.name == "Spices"
        assert category.image == "/uploads/1-spices.jpg"
        assert category.featured is True

    def test_deactivate(self):
        category = self._category()
        category.update_details(status=CatalogueStatus.INACTIVE.value)
        assert not category.is_active

    def test_update_raises_event(self):
        category = self._category()
        category.update_details(name="Whole Spices")
        assert isinstance(category._events[-1], CategoryUpdated)
        assert category._events[-1].slug == "whole-spices"


class TestCatalogueStatusParsing:
    @pytest.mark.parametrize(
        "raw, expected",
        [("active", "active"), ("Inactive", "inactive"), (" INACTIVE ", "inactive"), ("anything", "active")],
    )
    def test_parse(self, raw, expected):
        assert CatalogueStatus.parse(raw) == expected

    def test_parse_empty_uses_default(self):
        assert CatalogueStatus.parse("", default="active") == "active"
        assert CatalogueStatus.parse(None) is None
