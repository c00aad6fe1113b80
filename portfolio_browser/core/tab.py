"""Per-tab navigation state and its history stack.

A tab is either loading (a navigation was requested and no content has been
attached yet) or idle.  Every transition into the loading state bumps
``nav_seq``; content resolved for an older sequence number is stale and is
discarded instead of attached.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from .constants import DEFAULT_HISTORY_LIMIT
from .projects import Project
from .registry import RenderableDescriptor, project_payload
from .scheme import ResolvedUrl, resolve


def new_tab_id() -> str:
    return f"tab-{uuid.uuid4().hex[:9]}"


@dataclass(frozen=True)
class ResolutionRequest:
    """A pending content lookup, tagged with the navigation that caused it."""

    tab_id: str
    url: str
    seq: int


@dataclass
class Tab:
    """A single browser tab."""

    history: list[str]
    tab_id: str = field(default_factory=new_tab_id)
    history_index: int = 0
    history_limit: int = DEFAULT_HISTORY_LIMIT
    is_loading: bool = True
    descriptor: RenderableDescriptor | None = None
    nav_seq: int = 0

    def __post_init__(self) -> None:
        if not self.history:
            raise ValueError("a tab needs at least one history entry")
        if not 0 <= self.history_index < len(self.history):
            raise ValueError("history_index out of range")
        if self.history_limit < 1:
            raise ValueError("history_limit must be positive")

    @classmethod
    def open(
        cls, url: str, *, tab_id: str | None = None, history_limit: int = DEFAULT_HISTORY_LIMIT
    ) -> "Tab":
        tab = cls(history=[url], history_limit=history_limit)
        if tab_id is not None:
            tab.tab_id = tab_id
        return tab

    # -- derived state ------------------------------------------------------

    @property
    def url(self) -> str:
        return self.history[self.history_index]

    @property
    def resolved(self) -> ResolvedUrl:
        return resolve(self.url)

    @property
    def title(self) -> str:
        return self.resolved.title

    @property
    def content_type(self) -> str:
        return self.resolved.content_type

    @property
    def can_go_back(self) -> bool:
        return self.history_index > 0

    @property
    def can_go_forward(self) -> bool:
        return self.history_index < len(self.history) - 1

    @property
    def project(self) -> Project | None:
        if self.descriptor is None or self.is_loading:
            return None
        return project_payload(self.descriptor)

    # -- transitions --------------------------------------------------------

    def _start_loading(self) -> ResolutionRequest:
        self.nav_seq += 1
        self.is_loading = True
        return ResolutionRequest(self.tab_id, self.url, self.nav_seq)

    def pending_request(self) -> ResolutionRequest:
        """Request for the navigation currently in flight (or last completed)."""
        return ResolutionRequest(self.tab_id, self.url, self.nav_seq)

    def navigate(self, url: str) -> ResolutionRequest:
        """Visit *url*, discarding any forward history."""
        del self.history[self.history_index + 1 :]
        self.history.append(url)
        overflow = len(self.history) - self.history_limit
        if overflow > 0:
            del self.history[:overflow]
        self.history_index = len(self.history) - 1
        return self._start_loading()

    def go_back(self) -> ResolutionRequest | None:
        if not self.can_go_back:
            return None
        self.history_index -= 1
        return self._start_loading()

    def go_forward(self) -> ResolutionRequest | None:
        if not self.can_go_forward:
            return None
        self.history_index += 1
        return self._start_loading()

    def reload(self) -> ResolutionRequest:
        return self._start_loading()

    def is_current(self, request: ResolutionRequest) -> bool:
        return request.tab_id == self.tab_id and request.seq == self.nav_seq

    def apply_resolution(
        self, request: ResolutionRequest, descriptor: RenderableDescriptor
    ) -> bool:
        """Attach content for *request*.  Returns False if it is stale."""
        if not self.is_current(request):
            return False
        self.descriptor = descriptor
        self.is_loading = False
        return True
