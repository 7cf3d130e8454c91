from __future__ import annotations

from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app.navigation import ADD, SETTINGS, Router
from app.screens import NOT_FOUND_MESSAGE, RecipeForm, ScreenModel, build_screen
from app.storage import InMemoryRecipeStorage


def test_home_screen_lists_recipes():
    screen = build_screen(InMemoryRecipeStorage(), Router())

    assert screen.template == "home.html"
    assert screen.title == "Recipes"
    assert [r.id for r in screen.context["recipes"]] == [1, 2]


def test_titles_follow_destination():
    storage = InMemoryRecipeStorage()
    router = Router()

    router.select_tab(ADD)
    assert build_screen(storage, router).title == "Add Recipe"
    router.select_tab(SETTINGS)
    assert build_screen(storage, router).title == "Settings"
    router.open_recipe(1)
    assert build_screen(storage, router).title == "Recipe Details"


def test_detail_screen_for_missing_recipe():
    router = Router()
    router.open_recipe(404)

    screen = build_screen(InMemoryRecipeStorage(), router)

    assert screen.context["recipe"] is None
    assert screen.context["not_found_message"] == NOT_FOUND_MESSAGE
    assert not screen.found


def test_recipe_form_requires_all_fields():
    assert RecipeForm("Tea", "Water", "Boil").can_save
    form = RecipeForm(" ", "Water", "\n")

    assert not form.can_save
    assert form.missing_fields() == ["title", "steps"]


def test_screen_model_rebuilds_only_after_changes():
    storage = InMemoryRecipeStorage()
    router = Router()
    model = ScreenModel(storage, router)

    first = model.screen
    assert model.screen is first
    assert model.builds == 1

    storage.add_recipe(title="Soup", ingredients="Water", steps="Boil")
    assert len(model.screen.context["recipes"]) == 3
    assert model.builds == 2

    router.open_recipe(3)
    assert model.screen.context["recipe"].title == "Soup"
    assert model.builds == 3


def test_screen_model_close_stops_updates():
    storage = InMemoryRecipeStorage()
    router = Router()
    model = ScreenModel(storage, router)
    stale = model.screen

    model.close()
    router.open_recipe(1)

    assert model.screen is stale
