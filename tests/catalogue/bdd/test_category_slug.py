"""BDD tests for category slugs."""

from catalogue.category.category import Category
from catalogue.category.events import CategoryUpdated
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/category_slug.feature")


@given(parsers.cfparse('a category named "{name}"'), target_fixture="category")
def category_named(name):
    category = Category.create(name=name, image="/uploads/1-category.jpg")
    category._events.clear()
    return category


@when(parsers.cfparse('the category is renamed to "{name}"'))
def rename_category(category, name):
    category.update_details(name=name)


@when(parsers.cfparse('the category image is changed to "{image}"'))
def change_image(category, image):
    category.update_details(image=image)


@then(parsers.cfparse('the category slug is "{slug}"'))
def slug_is(category, slug):
    assert category.slug == slug


@then("a CategoryUpdated event is raised")
def category_updated_raised(category):
    assert any(isinstance(e, CategoryUpdated) for e in category._events)
