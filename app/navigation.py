from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .observable import Observable

logger = logging.getLogger(__name__)

DETAIL = "detail"


@dataclass(frozen=True)
class Destination:
    """A navigable screen. Only ``detail`` destinations carry a recipe id."""

    name: str
    recipe_id: Optional[int] = None

    @property
    def route(self) -> str:
        if self.name == DETAIL:
            return f"{DETAIL}/{self.recipe_id}"
        return self.name

    @property
    def is_tab(self) -> bool:
        return self in TABS

    def __str__(self) -> str:
        return self.route


HOME = Destination("home")
ADD = Destination("add")
SETTINGS = Destination("settings")
TABS: Tuple[Destination, ...] = (HOME, ADD, SETTINGS)


def detail(recipe_id: int) -> Destination:
    return Destination(DETAIL, recipe_id)


class Router(Observable):
    """Navigation state: an explicit back stack plus saved per-tab stacks.

    The bottom of the stack is always the start destination (``HOME``). The
    destination on top is the one being shown. Entries pushed above a tab
    root belong to that tab; switching tabs stashes them so they can be
    restored when the tab is selected again.

    Request threads share one router, so every change runs under a lock.
    """

    def __init__(self, start: Destination = HOME) -> None:
        super().__init__()
        if not start.is_tab:
            raise ValueError("The start destination must be a tab.")
        self._start = start
        self._stack: List[Destination] = [start]
        self._saved: Dict[Destination, List[Destination]] = {}
        self._lock = threading.RLock()

    @property
    def start(self) -> Destination:
        return self._start

    @property
    def current(self) -> Destination:
        return self._stack[-1]

    @property
    def history(self) -> Tuple[Destination, ...]:
        """Destinations behind ``current``, oldest first."""

        return tuple(self._stack[:-1])

    @property
    def back_stack(self) -> Tuple[Destination, ...]:
        return tuple(self._stack)

    @property
    def active_tab(self) -> Destination:
        """The tab whose stack is currently shown."""

        stack = self._stack
        if len(stack) > 1 and stack[1].is_tab:
            return stack[1]
        return self._start

    def saved_state(self, tab: Destination) -> Tuple[Destination, ...]:
        return tuple(self._saved.get(tab, ()))

    def navigate(
        self,
        destination: Destination,
        *,
        pop_up_to: Optional[Destination] = None,
        inclusive: bool = False,
    ) -> bool:
        """Push ``destination`` unless it is already on top.

        With ``pop_up_to`` every entry above its last occurrence is removed
        first (and the entry itself when ``inclusive``). The start destination
        is never removed. Returns ``True`` if the stack changed.
        """

        with self._lock:
            before = list(self._stack)

            if pop_up_to is not None:
                self._pop_up_to(pop_up_to, inclusive=inclusive)

            if self.current != destination:
                self._stack.append(destination)

            return self._commit(before)

    def open_recipe(self, recipe_id: int) -> bool:
        return self.navigate(detail(recipe_id))

    def recipe_saved(self, recipe_id: int) -> bool:
        """Show the new recipe and drop ``ADD`` from the history."""

        return self.navigate(detail(recipe_id), pop_up_to=ADD, inclusive=True)

    def back(self) -> bool:
        with self._lock:
            if len(self._stack) == 1:
                return False
            before = list(self._stack)
            self._stack.pop()
            return self._commit(before)

    def cancel_add(self) -> bool:
        """Leave the Add form. Ignored unless the form is showing."""

        with self._lock:
            if self.current != ADD:
                return False
            return self.back()

    def select_tab(self, tab: Destination) -> bool:
        if not tab.is_tab:
            raise ValueError(f"{tab} is not a tab.")

        with self._lock:
            if self.current == tab:
                return False

            before = list(self._stack)
            active = self.active_tab

            if tab == active:
                # Re-selecting the shown tab returns to its root.
                self._pop_up_to(tab, inclusive=False)
                self._saved.pop(tab, None)
                return self._commit(before)

            above_start = self._stack[1:]
            if active == self._start:
                self._saved[active] = above_start
            else:
                self._saved[active] = above_start[1:]
            del self._stack[1:]

            if tab != self._start:
                self._stack.append(tab)
            self._stack.extend(self._saved.pop(tab, []))
            return self._commit(before)

    def _pop_up_to(self, target: Destination, *, inclusive: bool) -> None:
        if target not in self._stack:
            return
        index = len(self._stack) - 1 - self._stack[::-1].index(target)
        if inclusive:
            index -= 1
        del self._stack[max(index, 0) + 1 :]

    def _commit(self, before: List[Destination]) -> bool:
        if self._stack == before:
            return False
        logger.debug(
            "Navigation %s -> %s (history: %s)",
            before[-1],
            self.current,
            ", ".join(str(entry) for entry in self.history) or "-",
        )
        self._notify()
        return True


__all__ = ["ADD", "HOME", "SETTINGS", "TABS", "Destination", "Router", "detail"]
