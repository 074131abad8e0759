"""View model holding the observable menu state."""

import asyncio
import concurrent.futures
import logging
from collections.abc import Callable, Coroutine
from typing import Any

from menu_browser.models.view_state import ViewState
from menu_browser.observability.metrics import record_stale_response
from menu_browser.services.errors import (
    ApplicationError,
    DecodeError,
    EmptyResponseError,
    InvalidCategoryIdError,
    MenuFetchError,
    TransportError,
)
from menu_browser.services.menu_api_client import MenuApiClient

logger = logging.getLogger(__name__)

Subscriber = Callable[[ViewState], None]
FetchHandle = asyncio.Task[None] | concurrent.futures.Future[None]


class MenuViewModel:
    """Observable state container for the menu screen.

    The view model is bound to one event loop, either the one passed in or
    the one it is first used on. Fetches run as tasks on that loop, the
    client decodes on a worker thread, and every state mutation is applied
    and published on the loop itself, so subscribers never observe a change
    from another thread. A fetch requested from another thread is handed
    over to the bound loop with ``asyncio.run_coroutine_threadsafe``.

    Overlapping dish fetches are not deduplicated or cancelled. By default
    responses are applied in completion order, so a slow response for an
    earlier selection can overwrite a newer one. With
    ``discard_stale_dishes`` enabled each dish request is numbered and only
    the most recent one is applied.
    """

    def __init__(
        self,
        client: MenuApiClient,
        discard_stale_dishes: bool = False,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        """Initialize the view model with an empty state.

        Args:
            client: Menu API client used for fetches
            discard_stale_dishes: Drop dish responses superseded by a newer request
            loop: Event loop to bind to, the first loop used when None
        """
        self.client = client
        self.discard_stale_dishes = discard_stale_dishes
        self._state = ViewState()
        self._subscribers: list[Subscriber] = []
        self._loop = loop
        self._tasks: set[asyncio.Task[None]] = set()
        self._dishes_request_seq = 0

    @property
    def state(self) -> ViewState:
        """Current state snapshot."""
        return self._state

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback invoked with every new state snapshot.

        Args:
            callback: Called on the bound event loop after each mutation

        Returns:
            A function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def fetch_categories(self) -> FetchHandle:
        """Start loading the category list.

        On the bound loop the loading flag is set before this returns and the
        returned task runs the fetch. From any other thread the request is
        handed to the bound loop and a concurrent future is returned that
        resolves once the fetch has been applied.

        Returns:
            The task, or the cross-thread future, running the fetch
        """
        loop = self._bind_loop()
        if loop is None:
            return self._hand_off(self._fetch_categories_on_loop())

        self._apply(is_loading_categories=True)
        return self._spawn(loop, self._load_categories(), "fetch_categories")

    def fetch_dishes(self, category_id: str) -> FetchHandle:
        """Start loading the dishes of a category.

        Args:
            category_id: Server key (``menuID``) of the selected category

        Returns:
            The task, or the cross-thread future, running the fetch

        Raises:
            InvalidCategoryIdError: If category_id is empty; state is left untouched
        """
        if not category_id or not category_id.strip():
            raise InvalidCategoryIdError(category_id)

        loop = self._bind_loop()
        if loop is None:
            return self._hand_off(self._fetch_dishes_on_loop(category_id))

        self._dishes_request_seq += 1
        self._apply(is_loading_dishes=True)
        return self._spawn(
            loop,
            self._load_dishes(category_id, self._dishes_request_seq),
            "fetch_dishes",
        )

    async def aclose(self) -> None:
        """Wait for in-flight fetches to finish."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def _fetch_categories_on_loop(self) -> None:
        await self.fetch_categories()

    async def _fetch_dishes_on_loop(self, category_id: str) -> None:
        await self.fetch_dishes(category_id)

    async def _load_categories(self) -> None:
        try:
            categories = await self.client.get_categories()
        except Exception as e:
            self._apply(
                is_loading_categories=False,
                error=_describe_failure(e, "categories", "fetch_categories"),
            )
            return

        self._apply(categories=tuple(categories), is_loading_categories=False, error=None)

    async def _load_dishes(self, category_id: str, request_seq: int) -> None:
        try:
            dishes = await self.client.get_dishes(category_id)
        except Exception as e:
            if self._is_stale(request_seq, category_id):
                return
            self._apply(
                is_loading_dishes=False,
                error=_describe_failure(e, "dishes", "fetch_dishes"),
            )
            return

        if self._is_stale(request_seq, category_id):
            return
        self._apply(dishes=tuple(dishes), is_loading_dishes=False, error=None)

    def _is_stale(self, request_seq: int, category_id: str) -> bool:
        if not self.discard_stale_dishes or request_seq == self._dishes_request_seq:
            return False
        logger.info(
            f"Discarding stale dishes response for category {category_id} "
            f"(request {request_seq}, latest {self._dishes_request_seq})"
        )
        record_stale_response()
        return True

    def _bind_loop(self) -> asyncio.AbstractEventLoop | None:
        """Return the bound loop when called on it, None when called from another thread."""
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if self._loop is None:
            if running is None:
                raise RuntimeError("MenuViewModel is not bound to an event loop")
            self._loop = running

        if running is self._loop:
            return running
        if self._loop.is_closed():
            raise RuntimeError("MenuViewModel is bound to a closed event loop")
        return None

    def _hand_off(self, coro: Coroutine[Any, Any, None]) -> concurrent.futures.Future[None]:
        logger.debug("Handing fetch over to the bound event loop")
        return asyncio.run_coroutine_threadsafe(coro, self._loop)  # type: ignore[arg-type]

    def _spawn(
        self, loop: asyncio.AbstractEventLoop, coro: Coroutine[Any, Any, None], name: str
    ) -> asyncio.Task[None]:
        task = loop.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _apply(self, **changes: Any) -> None:
        self._state = self._state.evolve(**changes)
        for callback in list(self._subscribers):
            try:
                callback(self._state)
            except Exception:
                logger.exception("View state subscriber failed")


def _describe_failure(error: Exception, resource: str, operation: str) -> str:
    """Turn a fetch failure into the error text shown to the user."""
    if isinstance(error, TransportError):
        return f"Error fetching {resource}: {error}"
    if isinstance(error, EmptyResponseError):
        return f"No data returned from {operation}"
    if isinstance(error, DecodeError):
        return f"Error decoding {resource}: {error}"
    if isinstance(error, ApplicationError):
        return f"Status was false in {operation} response"
    if isinstance(error, MenuFetchError):
        return f"Error fetching {resource}: {error}"

    logger.error(f"Unexpected error during {operation}: {error!r}", exc_info=error)
    return f"Unexpected error fetching {resource}: {error}"
