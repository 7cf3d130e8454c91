import logging
import os
from typing import Optional

from flask import Flask, flash, redirect, render_template, request, url_for

from .models import Recipe
from .navigation import ADD, HOME, SETTINGS, TABS, Destination, Router
from .screens import TITLES, RecipeForm, Screen, ScreenModel
from .storage import InMemoryRecipeStorage, RecipeRepository

logger = logging.getLogger(__name__)

TAB_ENDPOINTS = {
    HOME: "home",
    ADD: "new_recipe",
    SETTINGS: "settings",
}


def create_app(
    storage: Optional[RecipeRepository] = None,
    router: Optional[Router] = None,
) -> Flask:
    """Create and configure the Flask application.

    Parameters
    ----------
    storage:
        Optional recipe repository. When ``None`` a fresh
        :class:`InMemoryRecipeStorage` holding the seed recipes is used.
    router:
        Optional navigation state. When ``None`` navigation starts on the
        Home tab with an empty history.
    """

    app = Flask(__name__)
    app.config.setdefault("MAX_CONTENT_LENGTH", 1024 * 1024)
    app.secret_key = os.environ.get("FLASK_SECRET_KEY", "development-secret-change-me")

    if storage is None:
        storage = InMemoryRecipeStorage()
    if router is None:
        router = Router()

    screens = ScreenModel(storage, router)
    app.config["RECIPE_STORAGE"] = storage
    app.config["RECIPE_ROUTER"] = router
    app.config["SCREEN_MODEL"] = screens

    def destination_url(destination: Destination) -> str:
        if destination.is_tab:
            return url_for(TAB_ENDPOINTS[destination])
        return url_for("recipe_detail", recipe_id=destination.recipe_id)

    def redirect_to_current():
        return redirect(destination_url(router.current))

    def render_screen(screen: Screen, status: int = 200, **overrides):
        context = dict(screen.context)
        context.update(overrides)
        return (
            render_template(screen.template, screen=screen, title=screen.title, **context),
            status,
        )

    def show_tab(tab: Destination):
        router.select_tab(tab)
        if router.current != tab:
            # The tab restored a saved stack; show its top entry.
            return redirect_to_current()
        return render_screen(screens.screen)

    @app.context_processor
    def navigation_context() -> dict:
        return {
            "tabs": [(tab, destination_url(tab)) for tab in TABS],
            "active_tab": router.active_tab,
            "can_go_back": bool(router.history),
        }

    @app.get("/")
    def index():
        return redirect_to_current()

    @app.get("/home")
    def home():
        return show_tab(HOME)

    @app.get("/add")
    def new_recipe():
        return show_tab(ADD)

    @app.get("/settings")
    def settings():
        return show_tab(SETTINGS)

    @app.get("/detail/<int:recipe_id>")
    def recipe_detail(recipe_id: int):
        router.open_recipe(recipe_id)
        screen = screens.screen
        if not screen.found:
            logger.info("Recipe %d not found", recipe_id)
            return render_screen(screen, 404)
        return render_screen(screen)

    @app.post("/recipes")
    def create_recipe():
        form = RecipeForm.from_mapping(request.form)

        if not form.can_save:
            flash(f"Please fill in: {', '.join(form.missing_fields())}.", "error")
            screen = Screen("add_recipe.html", TITLES[ADD.name], ADD)
            return render_screen(screen, 400, form=form)

        recipe: Recipe = storage.add_recipe(
            title=form.title,
            ingredients=form.ingredients,
            steps=form.steps,
        )
        router.recipe_saved(recipe.id)
        flash(f"Recipe '{recipe.title}' saved.", "success")
        return redirect_to_current()

    @app.post("/add/cancel")
    def cancel_recipe():
        router.cancel_add()
        return redirect_to_current()

    @app.post("/back")
    def back():
        router.back()
        return redirect_to_current()

    return app


__all__ = ["create_app", "Recipe"]
