"""Unit tests for the menu screen presentation model."""

from unittest.mock import MagicMock

import pytest

from menu_browser.models.menu_models import Category, Dish
from menu_browser.models.view_state import RenderState, ViewState
from menu_browser.presentation.menu_screen import (
    MenuScreen,
    Tab,
    resolve_image_url,
    status_message,
)
from menu_browser.state.menu_view_model import MenuViewModel


@pytest.mark.unit
class TestResolveImageUrl:
    """Test suite for image URL resolution."""

    def test_concatenates_origin_and_path(self) -> None:
        """Test that the image path is appended to the origin."""
        assert resolve_image_url("https://menu.test", "/img/a.png") == "https://menu.test/img/a.png"

    def test_trailing_slash_on_origin(self) -> None:
        """Test that a trailing slash on the origin is not doubled."""
        assert resolve_image_url("https://menu.test/", "/a.png") == "https://menu.test/a.png"


@pytest.mark.unit
class TestStatusMessage:
    """Test suite for status messages."""

    def test_loading_categories(self) -> None:
        assert status_message(ViewState(is_loading_categories=True)) == "Loading categories..."

    def test_loading_dishes(self) -> None:
        assert status_message(ViewState(is_loading_dishes=True)) == "Loading dishes..."

    def test_error(self) -> None:
        assert status_message(ViewState(error="Status was false")) == "Error: Status was false"

    def test_ready(self) -> None:
        assert status_message(ViewState()) is None


@pytest.mark.unit
class TestMenuScreen:
    """Test suite for MenuScreen."""

    @pytest.fixture
    def categories(self, category_payload: dict) -> tuple[Category, ...]:
        """Categories decoded from the shared payload."""
        return tuple(Category.model_validate(c) for c in category_payload["menuList"])

    @pytest.fixture
    def dishes(self, dish_payload: dict) -> tuple[Dish, ...]:
        """Dishes decoded from the shared payload."""
        return tuple(Dish.model_validate(d) for d in dish_payload["menuList"])

    @pytest.fixture
    def mock_view_model(self, categories: tuple[Category, ...]) -> MenuViewModel:
        """Create a mock view model holding loaded categories."""
        view_model = MagicMock(spec=MenuViewModel)
        view_model.state = ViewState(categories=categories)
        return view_model

    @pytest.fixture
    def screen(self, mock_view_model: MenuViewModel) -> MenuScreen:
        """Create a MenuScreen with a mocked view model."""
        return MenuScreen(view_model=mock_view_model, image_base_url="https://menu.test")

    def test_initial_tab_is_menu(self, screen: MenuScreen) -> None:
        """Test that the screen opens on the menu tab with nothing selected."""
        assert screen.tab is Tab.MENU
        assert screen.selected_category is None

    def test_start_fetches_categories(self, screen: MenuScreen, mock_view_model: MenuViewModel) -> None:
        """Test that starting the screen loads categories."""
        screen.start()
        mock_view_model.fetch_categories.assert_called_once_with()

    def test_refresh_fetches_categories(self, screen: MenuScreen, mock_view_model: MenuViewModel) -> None:
        """Test that refreshing reloads categories."""
        screen.refresh()
        mock_view_model.fetch_categories.assert_called_once_with()

    def test_select_category_fetches_dishes(
        self, screen: MenuScreen, mock_view_model: MenuViewModel
    ) -> None:
        """Test that selecting a category loads its dishes by menuID."""
        category = screen.select_category("2")

        assert category.name == "Salads"
        assert screen.selected_category is category
        mock_view_model.fetch_dishes.assert_called_once_with("2")

    def test_select_unknown_category(self, screen: MenuScreen, mock_view_model: MenuViewModel) -> None:
        """Test that selecting a category that is not loaded raises KeyError."""
        with pytest.raises(KeyError):
            screen.select_category("99")

        assert screen.selected_category is None
        mock_view_model.fetch_dishes.assert_not_called()

    def test_snapshot_ready(
        self,
        screen: MenuScreen,
        mock_view_model: MenuViewModel,
        categories: tuple[Category, ...],
        dishes: tuple[Dish, ...],
    ) -> None:
        """Test the ready snapshot with a selected category and its dishes."""
        screen.select_category("1")
        mock_view_model.state = ViewState(categories=categories, dishes=dishes)

        snapshot = screen.snapshot()

        assert snapshot.render_state is RenderState.READY
        assert snapshot.status_message is None
        assert snapshot.selected_category == "Soups"
        assert [c.name for c in snapshot.categories] == ["Soups", "Salads", "Desserts"]
        assert [c.selected for c in snapshot.categories] == [True, False, False]
        assert snapshot.categories[0].image_url == "https://menu.test/a.png"
        assert snapshot.categories[0].id == str(categories[0].id)
        assert snapshot.dishes[0].name == "Tomato Soup"
        assert snapshot.dishes[0].price == "250 ₽"
        assert snapshot.dishes[0].spicy is True
        assert snapshot.dishes[1].spicy is False

    def test_snapshot_loading_hides_content(
        self, screen: MenuScreen, mock_view_model: MenuViewModel, categories: tuple[Category, ...]
    ) -> None:
        """Test that a loading snapshot shows only the progress message."""
        mock_view_model.state = ViewState(categories=categories, is_loading_dishes=True)

        snapshot = screen.snapshot()

        assert snapshot.render_state is RenderState.LOADING_DISHES
        assert snapshot.status_message == "Loading dishes..."
        assert snapshot.categories == []
        assert snapshot.dishes == []

    def test_snapshot_error(
        self, screen: MenuScreen, mock_view_model: MenuViewModel, categories: tuple[Category, ...]
    ) -> None:
        """Test that an error snapshot carries the error text."""
        mock_view_model.state = ViewState(
            categories=categories, error="Status was false in fetch_dishes response"
        )

        snapshot = screen.snapshot()

        assert snapshot.render_state is RenderState.ERROR
        assert snapshot.status_message == "Error: Status was false in fetch_dishes response"
        assert snapshot.categories == []

    @pytest.mark.parametrize(("tab", "title"), [(Tab.CART, "Cart"), (Tab.INFO, "Information")])
    def test_placeholder_tabs(self, screen: MenuScreen, tab: Tab, title: str) -> None:
        """Test that cart and info tabs render their placeholder title only."""
        screen.select_tab(tab)

        snapshot = screen.snapshot()

        assert snapshot.tab is tab
        assert snapshot.placeholder_title == title
        assert snapshot.categories == []
        assert snapshot.dishes == []
