from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .navigation import ADD, DETAIL, HOME, SETTINGS, Destination, Router
from .storage import RecipeRepository

logger = logging.getLogger(__name__)

EMPTY_LIST_MESSAGE = "No recipes yet. Add one from below."
NOT_FOUND_MESSAGE = "Recipe not found"
SETTINGS_MESSAGE = "Settings (Placeholder)"

TITLES = {
    HOME.name: "Recipes",
    ADD.name: "Add Recipe",
    SETTINGS.name: "Settings",
    DETAIL: "Recipe Details",
}


@dataclass(frozen=True)
class Screen:
    """Everything a template needs to draw one destination."""

    template: str
    title: str
    destination: Destination
    context: Dict[str, Any] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.destination.name != DETAIL or self.context.get("recipe") is not None


@dataclass
class RecipeForm:
    """Draft of the Add form. Saving is only allowed with no blank field."""

    title: str = ""
    ingredients: str = ""
    steps: str = ""

    @classmethod
    def from_mapping(cls, data) -> "RecipeForm":
        return cls(
            title=data.get("title", ""),
            ingredients=data.get("ingredients", ""),
            steps=data.get("steps", ""),
        )

    def missing_fields(self) -> List[str]:
        return [
            name
            for name in ("title", "ingredients", "steps")
            if not getattr(self, name).strip()
        ]

    @property
    def can_save(self) -> bool:
        return not self.missing_fields()


def build_screen(storage: RecipeRepository, router: Router) -> Screen:
    destination = router.current
    title = TITLES[destination.name]

    if destination == HOME:
        recipes = list(storage.list_recipes())
        return Screen(
            "home.html",
            title,
            destination,
            {"recipes": recipes, "empty_message": EMPTY_LIST_MESSAGE},
        )

    if destination == ADD:
        return Screen("add_recipe.html", title, destination, {"form": RecipeForm()})

    if destination == SETTINGS:
        return Screen("settings.html", title, destination, {"message": SETTINGS_MESSAGE})

    recipe = storage.get_recipe(destination.recipe_id)
    return Screen(
        "detail.html",
        title,
        destination,
        {"recipe": recipe, "not_found_message": NOT_FOUND_MESSAGE},
    )


class ScreenModel:
    """Keeps the current :class:`Screen` in step with the store and router.

    The screen is rebuilt lazily after either collaborator reports a change.
    """

    def __init__(self, storage: RecipeRepository, router: Router) -> None:
        self._storage = storage
        self._router = router
        self._screen: Optional[Screen] = None
        self.builds = 0
        self._unsubscribers: List[Callable[[], None]] = [
            storage.subscribe(self._invalidate),
            router.subscribe(self._invalidate),
        ]

    @property
    def screen(self) -> Screen:
        if self._screen is None:
            self._screen = build_screen(self._storage, self._router)
            self.builds += 1
            logger.debug("Built %s screen", self._screen.destination)
        return self._screen

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def _invalidate(self) -> None:
        self._screen = None


__all__ = [
    "EMPTY_LIST_MESSAGE",
    "NOT_FOUND_MESSAGE",
    "RecipeForm",
    "Screen",
    "ScreenModel",
    "build_screen",
]
