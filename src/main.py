"""Main application entry point for the menu browser.

This module provides the FastAPI application factory and configuration
for running the service locally or in production.
"""

import logging
import os

from fastapi import FastAPI

from menu_browser.handlers.api_handler import create_app
from menu_browser.observability import configure_logging, setup_observability
from menu_browser.presentation.menu_screen import MenuScreen
from menu_browser.services.menu_api_client import DEFAULT_BASE_URL, MenuApiClient
from menu_browser.state.menu_view_model import MenuViewModel

logger = logging.getLogger(__name__)


def create_menu_screen() -> MenuScreen:
    """Create the menu API client, view model and screen from environment variables.

    Returns:
        MenuScreen wired to a fresh view model
    """
    base_url = os.getenv("MENU_API_BASE_URL", DEFAULT_BASE_URL)
    image_base_url = os.getenv("MENU_IMAGE_BASE_URL", base_url)
    discard_stale = os.getenv("DISCARD_STALE_DISHES", "false").lower() == "true"

    client = MenuApiClient(base_url=base_url)
    logger.info(f"Menu API client configured - URL: {base_url}")

    view_model = MenuViewModel(client=client, discard_stale_dishes=discard_stale)
    if discard_stale:
        logger.info("Stale dish responses will be discarded")

    return MenuScreen(view_model=view_model, image_base_url=image_base_url)


def create_application() -> FastAPI:
    """Create and configure the FastAPI application with all dependencies.

    This factory function:
    1. Configures logging
    2. Creates the menu API client, view model and screen
    3. Creates the FastAPI app
    4. Sets up observability

    Returns:
        Configured FastAPI application instance
    """
    log_level = os.getenv("LOG_LEVEL", "INFO")
    configure_logging(log_level)

    logger.info("Initializing menu browser...")

    menu_screen = create_menu_screen()
    app = create_app(menu_screen=menu_screen)

    setup_observability(app)

    logger.info("Menu browser initialized successfully")
    return app


# Skip wiring during test collection
if os.getenv("ENVIRONMENT") != "test":  # noqa: SIM108
    app = create_application()
else:
    app = FastAPI()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8001"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info(f"Starting development server on {host}:{port}")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
