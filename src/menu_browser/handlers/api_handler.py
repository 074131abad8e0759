"""FastAPI application serving the menu screen to a thin client."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from menu_browser.presentation.menu_screen import MenuScreen, ScreenSnapshot, Tab
from menu_browser.services.errors import InvalidCategoryIdError

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str


def create_app(menu_screen: MenuScreen, load_on_startup: bool = True) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        menu_screen: Screen controller backing the endpoints
        load_on_startup: Whether to fetch categories when the app starts

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if load_on_startup:
            logger.info("Loading menu categories on startup")
            app.state.menu_screen.start()
        yield
        await app.state.menu_screen.view_model.aclose()

    app = FastAPI(
        title="Menu Browser API",
        description="Headless menu screen: categories, dishes, cart and info tabs",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.menu_screen = menu_screen

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy")

    @app.get("/menu", response_model=ScreenSnapshot, tags=["Menu"])
    async def get_menu() -> ScreenSnapshot:
        """Current screen snapshot.

        Returns:
            What the client should render right now
        """
        return app.state.menu_screen.snapshot()

    @app.post(
        "/menu/categories/refresh",
        response_model=ScreenSnapshot,
        status_code=202,
        tags=["Menu"],
    )
    async def refresh_categories() -> ScreenSnapshot:
        """Reload the category list.

        Returns:
            Snapshot with the category loading state
        """
        app.state.menu_screen.refresh()
        return app.state.menu_screen.snapshot()

    @app.post(
        "/menu/categories/{menu_id}/select",
        response_model=ScreenSnapshot,
        status_code=202,
        tags=["Menu"],
    )
    async def select_category(menu_id: str) -> ScreenSnapshot:
        """Select a category and start loading its dishes.

        Args:
            menu_id: Server key of the category

        Returns:
            Snapshot with the dish loading state

        Raises:
            HTTPException: 404 if the category is not loaded
            HTTPException: 422 if the category has no usable menuID
        """
        try:
            app.state.menu_screen.select_category(menu_id)
        except KeyError as e:
            raise HTTPException(status_code=404, detail=f"Unknown category: {menu_id}") from e
        except InvalidCategoryIdError as e:
            raise HTTPException(status_code=422, detail=str(e)) from e
        return app.state.menu_screen.snapshot()

    @app.post("/menu/tabs/{tab}", response_model=ScreenSnapshot, tags=["Navigation"])
    async def select_tab(tab: Tab) -> ScreenSnapshot:
        """Switch the active tab.

        Args:
            tab: Tab to show

        Returns:
            Snapshot of the newly active tab
        """
        app.state.menu_screen.select_tab(tab)
        return app.state.menu_screen.snapshot()

    return app
