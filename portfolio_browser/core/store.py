"""Tab store: the browser's navigation controller.

All mutations are synchronous and happen on the event loop's thread.  Each
transition that needs content produces a :class:`ResolutionRequest` which is
handed to the store's scheduler; the scheduler eventually awaits
:meth:`TabStore.resolve`.  The default scheduler only queues requests so a
caller can drain them with :meth:`TabStore.settle`; the Textual host
schedules them as workers instead.

Resolution results are applied only if the request's sequence number still
matches the tab's, so a slow lookup for an old navigation can never
overwrite the content of a newer one.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from .constants import (
    CONTENT_PROJECT,
    DEFAULT_HISTORY_LIMIT,
    HOME_URL,
)
from .errors import ContentNotFound, TabNotFound
from .projects import Project, ProjectDirectory
from .registry import ContentRegistry, RenderableDescriptor
from .scheme import resolve as resolve_url
from .search import Suggestion, process_input, suggest
from .tab import ResolutionRequest, Tab

logger = logging.getLogger(__name__)

Scheduler = Callable[[ResolutionRequest], None]
Listener = Callable[["StoreSnapshot"], None]


@dataclass(frozen=True, eq=False)
class TabSnapshot:
    """Immutable view of a tab for rendering."""

    tab_id: str
    url: str
    title: str
    content_type: str
    is_loading: bool
    history: tuple[str, ...]
    history_index: int
    can_go_back: bool
    can_go_forward: bool
    is_active: bool
    descriptor: RenderableDescriptor | None = None
    project: Project | None = None

    @classmethod
    def of(cls, tab: Tab, *, is_active: bool) -> "TabSnapshot":
        return cls(
            tab_id=tab.tab_id,
            url=tab.url,
            title=tab.title,
            content_type=tab.content_type,
            is_loading=tab.is_loading,
            history=tuple(tab.history),
            history_index=tab.history_index,
            can_go_back=tab.can_go_back,
            can_go_forward=tab.can_go_forward,
            is_active=is_active,
            descriptor=tab.descriptor,
            project=tab.project,
        )


@dataclass(frozen=True, eq=False)
class StoreSnapshot:
    """Immutable view of the whole store: tab strip order plus active tab."""

    tabs: tuple[TabSnapshot, ...]
    active_tab_id: str | None

    @property
    def active_tab(self) -> TabSnapshot | None:
        for tab in self.tabs:
            if tab.tab_id == self.active_tab_id:
                return tab
        return None

    @property
    def active_index(self) -> int:
        for i, tab in enumerate(self.tabs):
            if tab.tab_id == self.active_tab_id:
                return i
        return -1


class TabStore:
    """Ordered tabs, the active-tab pointer, and every navigation operation.

    Usage::

        store = TabStore(ContentRegistry(directory), directory)
        tab_id = store.open_tab("home")
        store.navigate(tab_id, "lab")     # raw text -> "search:lab"
        await store.settle()
    """

    def __init__(
        self,
        registry: ContentRegistry,
        directory: ProjectDirectory | None = None,
        *,
        scheduler: Scheduler | None = None,
        loading_delay: float = 0.0,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        overrides: Mapping[str, Any] | None = None,
    ) -> None:
        self.registry = registry
        self.directory = directory if directory is not None else registry.directory
        self.loading_delay = loading_delay
        self.history_limit = history_limit
        self.overrides = dict(overrides or {})
        self._queue: list[ResolutionRequest] = []
        self._scheduler: Scheduler = scheduler or self._queue.append
        self._tabs: list[Tab] = []
        self._active_tab_id: str | None = None
        self._listeners: list[Listener] = []

    # -- accessors ----------------------------------------------------------

    @property
    def active_tab_id(self) -> str | None:
        return self._active_tab_id

    @property
    def pending(self) -> tuple[ResolutionRequest, ...]:
        """Requests queued by the default scheduler and not yet resolved."""
        return tuple(self._queue)

    def __len__(self) -> int:
        return len(self._tabs)

    def __contains__(self, tab_id: object) -> bool:
        return any(tab.tab_id == tab_id for tab in self._tabs)

    def _index_of(self, tab_id: str) -> int:
        for i, tab in enumerate(self._tabs):
            if tab.tab_id == tab_id:
                return i
        raise TabNotFound(tab_id)

    def _require(self, tab_id: str) -> Tab:
        return self._tabs[self._index_of(tab_id)]

    def get(self, tab_id: str) -> TabSnapshot:
        tab = self._require(tab_id)
        return TabSnapshot.of(tab, is_active=tab.tab_id == self._active_tab_id)

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            tabs=tuple(
                TabSnapshot.of(tab, is_active=tab.tab_id == self._active_tab_id)
                for tab in self._tabs
            ),
            active_tab_id=self._active_tab_id,
        )

    def suggest(self, query: str) -> list[Suggestion]:
        return suggest(query, self.directory.all())

    # -- change notification ------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with a fresh snapshot after every change."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snap)
            except Exception:
                logger.exception("tab store listener failed")

    def _dispatch(self, request: ResolutionRequest | None) -> ResolutionRequest | None:
        self._notify()
        if request is not None:
            self._scheduler(request)
        return request

    # -- lifecycle ----------------------------------------------------------

    def open_tab(self, url: str = HOME_URL) -> str:
        """Append a new tab showing *url* and make it active."""
        tab = Tab.open(url, history_limit=self.history_limit)
        self._tabs.append(tab)
        self._active_tab_id = tab.tab_id
        logger.debug("opened %s at %r", tab.tab_id, url)
        self._dispatch(tab.pending_request())
        return tab.tab_id

    def close_tab(self, tab_id: str) -> None:
        """Remove a tab; if it was active, the tab sliding into its slot wins."""
        index = self._index_of(tab_id)
        del self._tabs[index]
        if self._active_tab_id == tab_id:
            if self._tabs:
                self._active_tab_id = self._tabs[min(index, len(self._tabs) - 1)].tab_id
            else:
                self._active_tab_id = None
        logger.debug("closed %s, active is now %s", tab_id, self._active_tab_id)
        self._notify()

    def switch_tab(self, tab_id: str) -> None:
        self._index_of(tab_id)
        self._active_tab_id = tab_id
        self._notify()

    def cycle_tab(self, step: int = 1) -> str | None:
        """Activate the tab *step* positions away (wrapping).  Returns its id."""
        if not self._tabs:
            return None
        current = 0
        if self._active_tab_id is not None:
            current = self._index_of(self._active_tab_id)
        self._active_tab_id = self._tabs[(current + step) % len(self._tabs)].tab_id
        self._notify()
        return self._active_tab_id

    # -- navigation ---------------------------------------------------------

    def navigate(self, tab_id: str, target: str, *, raw: bool = True) -> ResolutionRequest:
        """Load *target* in a tab.

        *raw* text typed by the user goes through the input processor; a
        suggestion's pre-resolved target should be passed with ``raw=False``.
        """
        tab = self._require(tab_id)
        url = process_input(target) if raw else target
        request = tab.navigate(url)
        logger.debug("%s -> %r (seq %d)", tab_id, url, request.seq)
        self._dispatch(request)
        return request

    def go_back(self, tab_id: str) -> ResolutionRequest | None:
        return self._dispatch(self._require(tab_id).go_back())

    def go_forward(self, tab_id: str) -> ResolutionRequest | None:
        return self._dispatch(self._require(tab_id).go_forward())

    def reload(self, tab_id: str) -> ResolutionRequest:
        """Re-request the current entry without touching history."""
        request = self._require(tab_id).reload()
        self._dispatch(request)
        return request

    # -- content resolution -------------------------------------------------

    def _lookup(self, request: ResolutionRequest) -> RenderableDescriptor:
        resolved = resolve_url(request.url)
        try:
            return self.registry.lookup(
                resolved.content_type,
                resolved.extracted_id,
                listing=resolved.is_listing,
                url=request.url,
                overrides=self.overrides,
            )
        except ContentNotFound:
            logger.warning("no content for %r", request.url)
            message = (
                "Project not found"
                if resolved.content_type == CONTENT_PROJECT
                else "Page not found"
            )
            return self.registry.error_descriptor(message, "404", url=request.url)
        except Exception:
            logger.exception("content lookup failed for %r", request.url)
            return self.registry.error_descriptor(
                "Error loading content", "generic", url=request.url
            )

    async def resolve(self, request: ResolutionRequest) -> bool:
        """Look up content for *request* and attach it unless superseded.

        Returns True if the content was attached.
        """
        if self.loading_delay > 0:
            await asyncio.sleep(self.loading_delay)
        descriptor = self._lookup(request)
        try:
            tab = self._require(request.tab_id)
        except TabNotFound:
            logger.debug("dropping resolution for closed tab %s", request.tab_id)
            return False
        if not tab.apply_resolution(request, descriptor):
            logger.debug(
                "discarding stale resolution for %s (%r, seq %d < %d)",
                request.tab_id,
                request.url,
                request.seq,
                tab.nav_seq,
            )
            return False
        self._notify()
        return True

    async def settle(self) -> None:
        """Resolve every queued request, oldest first."""
        queue = self._queue
        while queue:
            await self.resolve(queue.pop(0))

    async def navigate_and_wait(
        self, tab_id: str, target: str, *, raw: bool = True
    ) -> TabSnapshot:
        """Navigate, resolve everything queued, and return the tab's snapshot."""
        self.navigate(tab_id, target, raw=raw)
        await self.settle()
        return self.get(tab_id)
