from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Recipe:
    """Domain object representing a stored recipe."""

    id: int
    title: str
    ingredients: str
    steps: str

    def ingredient_lines(self) -> List[str]:
        return [line.strip() for line in self.ingredients.splitlines() if line.strip()]

    @property
    def summary(self) -> str:
        lines = self.ingredient_lines()
        return lines[0] if lines else "No ingredients"


__all__ = ["Recipe"]
