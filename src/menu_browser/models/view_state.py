"""Observable view state for the menu screen.

ViewState is an immutable snapshot. The view model replaces it wholesale on
every mutation and hands the new snapshot to its subscribers.
"""

from dataclasses import dataclass, replace
from enum import Enum

from menu_browser.models.menu_models import Category, Dish


class RenderState(str, Enum):
    """Active interpretation of a ViewState at render time."""

    LOADING_CATEGORIES = "loading_categories"
    LOADING_DISHES = "loading_dishes"
    ERROR = "error"
    READY = "ready"


@dataclass(frozen=True)
class ViewState:
    """Fetched menu data, loading flags and error text.

    Attributes:
        categories: Categories in server order
        dishes: Dishes of the most recently applied dish fetch
        is_loading_categories: Whether a category fetch is in flight
        is_loading_dishes: Whether a dish fetch is in flight
        error: Human-readable description of the last failure, None if none
    """

    categories: tuple[Category, ...] = ()
    dishes: tuple[Dish, ...] = ()
    is_loading_categories: bool = False
    is_loading_dishes: bool = False
    error: str | None = None

    @property
    def render_state(self) -> RenderState:
        """Resolve the active state.

        Priority: loading categories > loading dishes > error > data.
        """
        if self.is_loading_categories:
            return RenderState.LOADING_CATEGORIES
        if self.is_loading_dishes:
            return RenderState.LOADING_DISHES
        if self.error is not None:
            return RenderState.ERROR
        return RenderState.READY

    def evolve(self, **changes: object) -> "ViewState":
        """Return a copy of this state with the given fields replaced."""
        return replace(self, **changes)  # type: ignore[arg-type]
