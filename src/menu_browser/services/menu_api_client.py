"""Client for the restaurant menu API."""

import asyncio
import logging
import time
from typing import TypeVar

import httpx
from pydantic import ValidationError

from menu_browser.models.menu_models import Category, CategoryResponse, Dish, DishResponse
from menu_browser.observability import traced
from menu_browser.observability.metrics import (
    record_fetch_duration,
    record_fetch_failure,
    record_fetch_success,
)
from menu_browser.services.errors import (
    ApplicationError,
    DecodeError,
    EmptyResponseError,
    InvalidCategoryIdError,
    MenuFetchError,
    TransportError,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://vkus-sovet.ru"
CATEGORIES_PATH = "/api/getMenu.php"
DISHES_PATH = "/api/getSubMenu.php"
FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}

EnvelopeT = TypeVar("EnvelopeT", CategoryResponse, DishResponse)


class MenuApiClient:
    """HTTP client for fetching categories and dishes from the menu API.

    Both endpoints take a form-urlencoded POST and answer with a
    ``{"status": bool, "menuList": [...]}`` envelope. Failures are raised as
    ``MenuFetchError`` subclasses so callers can report them; nothing is
    retried here.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float | None = None) -> None:
        """Initialize the menu API client.

        Args:
            base_url: Origin of the menu API (e.g., "https://vkus-sovet.ru")
            timeout: Request timeout in seconds, httpx default when None
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @traced("menu_api.get_categories", attributes={"menu.resource": "categories"})
    async def get_categories(self) -> list[Category]:
        """Fetch the category list.

        Returns:
            Categories in server order

        Raises:
            TransportError: On network failure or non-success HTTP status
            EmptyResponseError: If the response has no body
            DecodeError: If the body does not match the category envelope
            ApplicationError: If the envelope reports ``status: false``
        """
        envelope = await self._fetch("categories", CATEGORIES_PATH, None, CategoryResponse)
        return envelope.items

    @traced("menu_api.get_dishes", attributes={"menu.resource": "dishes"})
    async def get_dishes(self, menu_id: str) -> list[Dish]:
        """Fetch the dishes of one category.

        Args:
            menu_id: Server key of the category (``menuID``)

        Returns:
            Dishes in server order

        Raises:
            InvalidCategoryIdError: If menu_id is empty
            MenuFetchError: Same failure modes as get_categories
        """
        if not menu_id or not menu_id.strip():
            raise InvalidCategoryIdError(menu_id)

        envelope = await self._fetch("dishes", DISHES_PATH, {"menuID": menu_id}, DishResponse)
        return envelope.items

    async def _fetch(
        self,
        resource: str,
        path: str,
        form: dict[str, str] | None,
        envelope_type: type[EnvelopeT],
    ) -> EnvelopeT:
        """POST to an endpoint and decode its envelope.

        Args:
            resource: Resource label used in logs and metrics
            path: Endpoint path relative to base_url
            form: Form fields for the request body, None for an empty body
            envelope_type: Envelope model to decode into

        Returns:
            The decoded envelope with ``status`` true
        """
        url = f"{self.base_url}{path}"
        started = time.perf_counter()

        try:
            try:
                async with httpx.AsyncClient(**self._client_options()) as client:
                    response = await client.post(url, data=form, headers=FORM_HEADERS)
                    response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise TransportError(
                    f"HTTP {e.response.status_code} from {url}"
                ) from e
            except httpx.RequestError as e:
                raise TransportError(f"{type(e).__name__}: {e}") from e

            body = response.content
            if not body:
                raise EmptyResponseError(f"No data returned from {url}")

            logger.debug(f"Received {resource} response: {body.decode('utf-8', errors='replace')}")

            try:
                # Parsing is pushed to a worker thread so the event loop stays free
                envelope = await asyncio.to_thread(envelope_type.model_validate_json, body)
            except ValidationError as e:
                logger.debug(f"Failed to decode {envelope_type.__name__}: {e}")
                raise DecodeError(
                    f"{e.error_count()} validation error(s) for {envelope_type.__name__}: "
                    f"{_first_error(e)}"
                ) from e

            if not envelope.status:
                raise ApplicationError(f"Status was false in {resource} response")

        except MenuFetchError as e:
            logger.error(f"Failed to fetch {resource}: {e}")
            record_fetch_failure(resource, e.error_type)
            raise
        finally:
            record_fetch_duration(resource, time.perf_counter() - started)

        record_fetch_success(resource, len(envelope.items))
        logger.info(f"Fetched {len(envelope.items)} {resource}")
        return envelope

    def _client_options(self) -> dict[str, float]:
        if self.timeout is None:
            return {}
        return {"timeout": self.timeout}


def _first_error(error: ValidationError) -> str:
    detail = error.errors()[0]
    location = ".".join(str(part) for part in detail["loc"]) or "body"
    return f"{location}: {detail['msg']}"
