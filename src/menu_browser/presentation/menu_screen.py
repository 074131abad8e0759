"""Headless presentation model for the menu screen.

Turns a ViewState plus the screen-local selection into a snapshot a renderer
can draw directly: tabs, the category strip, the dish grid and the
loading/error placeholders.
"""

import logging
from enum import Enum

from pydantic import BaseModel

from menu_browser.models.menu_models import Category, Dish
from menu_browser.models.view_state import RenderState, ViewState
from menu_browser.state.menu_view_model import MenuViewModel

logger = logging.getLogger(__name__)


class Tab(str, Enum):
    """Bottom navigation tabs."""

    MENU = "menu"
    CART = "cart"
    INFO = "info"


PLACEHOLDER_TITLES = {
    Tab.CART: "Cart",
    Tab.INFO: "Information",
}

STATUS_MESSAGES = {
    RenderState.LOADING_CATEGORIES: "Loading categories...",
    RenderState.LOADING_DISHES: "Loading dishes...",
}


class CategoryCard(BaseModel):
    """Renderable category tile."""

    id: str
    menu_id: str
    name: str
    image_url: str
    sub_menu_count: int
    selected: bool


class DishCard(BaseModel):
    """Renderable dish tile."""

    id: str
    name: str
    description: str
    price: str
    weight: str
    image_url: str
    spicy: bool


class ScreenSnapshot(BaseModel):
    """Everything a renderer needs to draw the screen."""

    tab: Tab
    render_state: RenderState
    status_message: str | None = None
    placeholder_title: str | None = None
    selected_category: str | None = None
    categories: list[CategoryCard] = []
    dishes: list[DishCard] = []


def resolve_image_url(base_url: str, path: str) -> str:
    """Build an absolute image URL from the image origin and an ``image`` field."""
    return f"{base_url.rstrip('/')}{path}"


def status_message(state: ViewState) -> str | None:
    """Message shown in place of the content, None when data is shown."""
    render_state = state.render_state
    if render_state is RenderState.ERROR:
        return f"Error: {state.error}"
    return STATUS_MESSAGES.get(render_state)


class MenuScreen:
    """Screen controller owning the category selection and active tab."""

    def __init__(self, view_model: MenuViewModel, image_base_url: str) -> None:
        """Initialize the screen.

        Args:
            view_model: View model providing the fetched state
            image_base_url: Origin prepended to image paths
        """
        self.view_model = view_model
        self.image_base_url = image_base_url
        self.tab = Tab.MENU
        self.selected_category: Category | None = None

    def start(self) -> None:
        """Load the category list, once at application start."""
        self.view_model.fetch_categories()

    def refresh(self) -> None:
        """Reload the category list on demand."""
        self.view_model.fetch_categories()

    def select_category(self, menu_id: str) -> Category:
        """Select a category and start loading its dishes.

        Args:
            menu_id: Server key of a category in the current state

        Returns:
            The selected category

        Raises:
            KeyError: If no loaded category has this menu_id
        """
        category = self._find_category(menu_id)
        self.selected_category = category
        logger.info(f"Category selected: {category.name} ({menu_id})")
        self.view_model.fetch_dishes(category.menu_id)
        return category

    def select_tab(self, tab: Tab) -> None:
        self.tab = tab

    def snapshot(self) -> ScreenSnapshot:
        """Build the renderable snapshot for the current state."""
        state = self.view_model.state

        if self.tab is not Tab.MENU:
            return ScreenSnapshot(
                tab=self.tab,
                render_state=state.render_state,
                placeholder_title=PLACEHOLDER_TITLES[self.tab],
            )

        snapshot = ScreenSnapshot(
            tab=self.tab,
            render_state=state.render_state,
            status_message=status_message(state),
        )
        if state.render_state is not RenderState.READY:
            return snapshot

        selected_id = self.selected_category.id if self.selected_category else None
        snapshot.categories = [
            self._category_card(category, category.id == selected_id)
            for category in state.categories
        ]
        if self.selected_category is not None:
            snapshot.selected_category = self.selected_category.name
        snapshot.dishes = [self._dish_card(dish) for dish in state.dishes]
        return snapshot

    def _find_category(self, menu_id: str) -> Category:
        for category in self.view_model.state.categories:
            if category.menu_id == menu_id:
                return category
        raise KeyError(menu_id)

    def _category_card(self, category: Category, selected: bool) -> CategoryCard:
        return CategoryCard(
            id=str(category.id),
            menu_id=category.menu_id,
            name=category.name,
            image_url=resolve_image_url(self.image_base_url, category.image_url),
            sub_menu_count=category.sub_menu_count,
            selected=selected,
        )

    def _dish_card(self, dish: Dish) -> DishCard:
        return DishCard(
            id=dish.id,
            name=dish.name,
            description=dish.description,
            price=dish.price,
            weight=dish.weight,
            image_url=resolve_image_url(self.image_base_url, dish.image_url),
            spicy=dish.is_spicy,
        )
