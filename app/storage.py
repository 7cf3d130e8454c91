from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, List, Optional, Protocol, Sequence

from .models import Recipe
from .observable import Listener, Observable

logger = logging.getLogger(__name__)

SEED_RECIPES: tuple[Recipe, ...] = (
    Recipe(
        id=1,
        title="Tomato Pasta",
        ingredients="Pasta\nTomato Sauce\nOlive Oil",
        steps="1) Boil pasta\n2) Add sauce\n3) Serve",
    ),
    Recipe(
        id=2,
        title="Avocado Toast",
        ingredients="Bread\nAvocado\nSalt\nPepper",
        steps="1) Toast bread\n2) Spread avocado\n3) Season",
    ),
)


class RecipeRepository(Protocol):
    """Protocol describing the behaviour required by the web layer."""

    def list_recipes(self) -> Iterable[Recipe]:
        """Return the stored recipes in insertion order."""

    def get_recipe(self, recipe_id: int) -> Optional[Recipe]:
        """Return a single recipe or ``None`` if no recipe has that id."""

    def add_recipe(self, *, title: str, ingredients: str, steps: str) -> Recipe:
        """Store a new recipe and return it with its assigned id."""

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callable invoked after every change."""


class InMemoryRecipeStorage(Observable):
    """Process-lifetime recipe store.

    Recipes keep their insertion order. Ids are assigned from a counter that
    starts above the highest seeded id and only ever moves forward; it is
    read and advanced under a lock so concurrent adds never share an id.
    """

    def __init__(self, seed: Sequence[Recipe] = SEED_RECIPES) -> None:
        super().__init__()
        self._recipes: List[Recipe] = list(seed)
        ids = [recipe.id for recipe in self._recipes]
        if len(set(ids)) != len(ids):
            raise ValueError("Seed recipes must have unique ids.")
        self._next_id = max(ids, default=0) + 1
        self._lock = threading.Lock()

    @property
    def next_id(self) -> int:
        return self._next_id

    def list_recipes(self) -> List[Recipe]:
        return list(self._recipes)

    def get_recipe(self, recipe_id: int) -> Optional[Recipe]:
        return next((recipe for recipe in self._recipes if recipe.id == recipe_id), None)

    def add_recipe(self, *, title: str, ingredients: str, steps: str) -> Recipe:
        with self._lock:
            recipe = Recipe(
                id=self._next_id,
                title=title.strip(),
                ingredients=ingredients.strip(),
                steps=steps.strip(),
            )
            self._next_id += 1
            self._recipes.append(recipe)
        logger.info("Added recipe %d (%r)", recipe.id, recipe.title)
        self._notify()
        return recipe

    def __len__(self) -> int:
        return len(self._recipes)


__all__ = ["InMemoryRecipeStorage", "RecipeRepository", "SEED_RECIPES"]
