"""Tests for portfolio_browser.core.store -- tabs, navigation and resolution.

The store fixture uses the default scheduler, which only queues requests;
tests drive resolution explicitly with ``settle()`` or ``resolve()``.
"""

from __future__ import annotations

import asyncio
import random

import pytest

from portfolio_browser.core.errors import TabNotFound
from portfolio_browser.core.registry import ContentRegistry
from portfolio_browser.core.store import TabStore


def _snapshot_key(store: TabStore):
    snap = store.snapshot()
    return (
        snap.active_tab_id,
        tuple((t.tab_id, t.history, t.history_index) for t in snap.tabs),
    )


# -- Tab lifecycle -------------------------------------------------------------


class TestOpenTab:
    def test_open_makes_active(self, store):
        tab_id = store.open_tab("home")
        assert store.active_tab_id == tab_id
        assert len(store) == 1
        assert tab_id in store
        assert store.get(tab_id).is_loading is True
        assert [r.tab_id for r in store.pending] == [tab_id]

    def test_open_appends(self, store):
        a = store.open_tab()
        b = store.open_tab("projects:all")
        snap = store.snapshot()
        assert [t.tab_id for t in snap.tabs] == [a, b]
        assert snap.active_tab_id == b
        assert snap.active_index == 1
        assert snap.active_tab.title == "All Projects"

    def test_default_url_is_home(self, store):
        tab_id = store.open_tab()
        assert store.get(tab_id).url == "home"


class TestCloseTab:
    def test_close_active_middle_selects_right_neighbour(self, store):
        a, b, c = store.open_tab(), store.open_tab(), store.open_tab()
        store.switch_tab(b)
        store.close_tab(b)
        assert store.active_tab_id == c
        assert [t.tab_id for t in store.snapshot().tabs] == [a, c]

    def test_close_active_last_selects_left_neighbour(self, store):
        a, b, c = store.open_tab(), store.open_tab(), store.open_tab()
        store.close_tab(c)
        assert store.active_tab_id == b

    def test_close_inactive_keeps_active(self, store):
        a, b, c = store.open_tab(), store.open_tab(), store.open_tab()
        store.close_tab(a)
        assert store.active_tab_id == c

    def test_close_only_tab(self, store):
        a = store.open_tab()
        store.close_tab(a)
        assert len(store) == 0
        assert store.active_tab_id is None
        assert store.snapshot().active_tab is None
        assert store.snapshot().active_index == -1

    def test_close_unknown(self, store):
        store.open_tab()
        before = _snapshot_key(store)
        with pytest.raises(TabNotFound) as excinfo:
            store.close_tab("tab-nope")
        assert excinfo.value.tab_id == "tab-nope"
        assert _snapshot_key(store) == before

    def test_random_closes_keep_active_valid(self, store):
        rng = random.Random(7)
        for _ in range(30):
            store.open_tab()
        while len(store):
            ids = [t.tab_id for t in store.snapshot().tabs]
            store.close_tab(rng.choice(ids))
            if len(store):
                assert store.active_tab_id in store
            else:
                assert store.active_tab_id is None


class TestSwitchTab:
    def test_switch(self, store):
        a = store.open_tab()
        store.open_tab()
        store.switch_tab(a)
        assert store.active_tab_id == a
        assert store.get(a).is_active is True

    def test_switch_unknown(self, store):
        b = store.open_tab()
        with pytest.raises(TabNotFound):
            store.switch_tab("tab-nope")
        assert store.active_tab_id == b

    def test_cycle_wraps(self, store):
        a, b, c = store.open_tab(), store.open_tab(), store.open_tab()
        assert store.cycle_tab(1) == a
        assert store.cycle_tab(-1) == c
        assert store.cycle_tab(-1) == b

    def test_cycle_empty(self, store):
        assert store.cycle_tab() is None


# -- Navigation -------------------------------------------------------------------


class TestNavigate:
    def test_raw_input_is_processed(self, store):
        tab_id = store.open_tab()
        req = store.navigate(tab_id, "lab")
        assert req.url == "search:lab"
        assert store.get(tab_id).url == "search:lab"

    def test_resolved_target_is_used_as_is(self, store):
        tab_id = store.open_tab()
        store.navigate(tab_id, "lab", raw=False)
        assert store.get(tab_id).url == "lab"
        assert store.get(tab_id).title == "Browser"

    def test_navigate_unknown(self, store):
        with pytest.raises(TabNotFound):
            store.navigate("tab-nope", "home")

    def test_history_operations_on_unknown(self, store):
        for op in (store.go_back, store.go_forward, store.reload):
            with pytest.raises(TabNotFound):
                op("tab-nope")

    def test_back_at_start_schedules_nothing(self, store):
        tab_id = store.open_tab()
        queued = len(store.pending)
        assert store.go_back(tab_id) is None
        assert store.go_forward(tab_id) is None
        assert len(store.pending) == queued

    def test_history_limit_from_store(self, registry, directory):
        store = TabStore(registry, directory, history_limit=2)
        tab_id = store.open_tab()
        store.navigate(tab_id, "project:lab", raw=False)
        store.navigate(tab_id, "project:spotmap", raw=False)
        assert store.get(tab_id).history == ("project:lab", "project:spotmap")

    def test_custom_scheduler(self, registry, directory):
        scheduled = []
        store = TabStore(registry, directory, scheduler=scheduled.append)
        tab_id = store.open_tab()
        store.navigate(tab_id, "projects")
        assert [r.url for r in scheduled] == ["home", "projects:all"]
        assert store.pending == ()

    def test_suggest_uses_directory(self, store):
        assert store.suggest("lab")[0].url == "project:lab"


class TestBrowsingSession:
    @pytest.mark.asyncio
    async def test_back_then_new_navigation(self, store):
        tab_id = store.open_tab("home")
        await store.settle()
        await store.navigate_and_wait(tab_id, "projects:all", raw=False)
        store.go_back(tab_id)
        await store.settle()
        snap = await store.navigate_and_wait(tab_id, "project:lab", raw=False)
        assert snap.history == ("home", "project:lab")
        assert snap.history_index == 1
        assert snap.can_go_forward is False
        assert snap.can_go_back is True
        assert snap.project.id == "lab"


# -- Resolution -------------------------------------------------------------------


class TestResolve:
    @pytest.mark.asyncio
    async def test_open_resolves_home(self, store):
        tab_id = store.open_tab()
        await store.settle()
        snap = store.get(tab_id)
        assert snap.is_loading is False
        assert snap.descriptor.component_id == "browser-home"
        assert store.pending == ()

    @pytest.mark.asyncio
    async def test_project_page(self, store):
        tab_id = store.open_tab()
        snap = await store.navigate_and_wait(tab_id, "project:spotmap", raw=False)
        assert snap.descriptor.component_id == "browser-project"
        assert snap.project.id == "spotmap"
        assert snap.title == "Project: spotmap"

    @pytest.mark.asyncio
    async def test_unknown_project_is_error_page(self, store):
        tab_id = store.open_tab()
        snap = await store.navigate_and_wait(tab_id, "project:nope", raw=False)
        assert snap.is_loading is False
        assert snap.descriptor.is_error is True
        assert snap.descriptor.error_type == "404"
        assert snap.descriptor.props["message"] == "Project not found"
        assert snap.descriptor.props["retry_url"] == "project:nope"
        assert snap.project is None

    @pytest.mark.asyncio
    async def test_unknown_listing_is_error_page(self, store):
        tab_id = store.open_tab()
        snap = await store.navigate_and_wait(tab_id, "projects:web", raw=False)
        assert snap.descriptor.error_type == "404"

    @pytest.mark.asyncio
    async def test_all_projects_listing(self, store):
        tab_id = store.open_tab()
        snap = await store.navigate_and_wait(tab_id, "projects:all", raw=False)
        assert snap.descriptor.component_id == "all-projects"
        assert snap.descriptor.is_error is False

    @pytest.mark.asyncio
    async def test_listing_id_as_single_project_is_error_page(self, store):
        tab_id = store.open_tab()
        snap = await store.navigate_and_wait(tab_id, "project:all-projects", raw=False)
        assert snap.descriptor.is_error is True
        assert snap.descriptor.error_type == "404"
        assert snap.descriptor.props["message"] == "Project not found"

    @pytest.mark.asyncio
    async def test_search_without_results_is_not_error(self, store):
        tab_id = store.open_tab()
        snap = await store.navigate_and_wait(tab_id, "zzz")
        assert snap.descriptor.component_id == "browser-search"
        assert snap.descriptor.is_error is False

    @pytest.mark.asyncio
    async def test_lookup_failure_is_generic_error(self, directory):
        class BrokenRegistry(ContentRegistry):
            def lookup(self, *args, **kwargs):
                raise RuntimeError("boom")

        store = TabStore(BrokenRegistry(directory), directory)
        tab_id = store.open_tab()
        await store.settle()
        snap = store.get(tab_id)
        assert snap.is_loading is False
        assert snap.descriptor.error_type == "generic"
        assert snap.descriptor.props["message"] == "Error loading content"

    @pytest.mark.asyncio
    async def test_closed_tab_drops_result(self, store):
        tab_id = store.open_tab()
        (request,) = store.pending
        store.close_tab(tab_id)
        assert await store.resolve(request) is False

    @pytest.mark.asyncio
    async def test_reload_resolves_again(self, store):
        tab_id = store.open_tab("project:lab")
        await store.settle()
        first = store.get(tab_id).descriptor
        store.reload(tab_id)
        assert store.get(tab_id).is_loading is True
        await store.settle()
        snap = store.get(tab_id)
        assert snap.is_loading is False
        assert snap.descriptor is not first
        assert snap.history == ("project:lab",)

    @pytest.mark.asyncio
    async def test_retry_after_error(self, store):
        tab_id = store.open_tab()
        snap = await store.navigate_and_wait(tab_id, "project:nope", raw=False)
        retry_url = snap.descriptor.props["retry_url"]
        store.reload(tab_id)
        await store.settle()
        snap = store.get(tab_id)
        assert snap.url == retry_url
        assert snap.history == ("home", "project:nope")


class TestStaleResolution:
    @pytest.mark.asyncio
    async def test_out_of_order_completion(self, store):
        tab_id = store.open_tab()
        await store.settle()
        req_a = store.navigate(tab_id, "project:lab", raw=False)
        req_b = store.navigate(tab_id, "project:spotmap", raw=False)
        assert await store.resolve(req_b) is True
        assert await store.resolve(req_a) is False
        snap = store.get(tab_id)
        assert snap.url == "project:spotmap"
        assert snap.project.id == "spotmap"

    @pytest.mark.asyncio
    async def test_settle_discards_superseded(self, store):
        tab_id = store.open_tab()
        store.navigate(tab_id, "project:lab", raw=False)
        store.navigate(tab_id, "project:spotmap", raw=False)
        await store.settle()
        snap = store.get(tab_id)
        assert snap.project.id == "spotmap"
        assert snap.is_loading is False

    @pytest.mark.asyncio
    async def test_concurrent_with_delay(self, registry, directory):
        store = TabStore(registry, directory, loading_delay=0.01)
        tab_id = store.open_tab()
        req_a = store.navigate(tab_id, "project:lab", raw=False)
        req_b = store.navigate(tab_id, "project:spotmap", raw=False)
        results = await asyncio.gather(store.resolve(req_a), store.resolve(req_b))
        assert results == [False, True]
        assert store.get(tab_id).project.id == "spotmap"

    @pytest.mark.asyncio
    async def test_back_during_load(self, store):
        tab_id = store.open_tab()
        await store.settle()
        req = store.navigate(tab_id, "project:lab", raw=False)
        back = store.go_back(tab_id)
        assert await store.resolve(req) is False
        assert await store.resolve(back) is True
        assert store.get(tab_id).descriptor.component_id == "browser-home"


# -- Change notification ---------------------------------------------------------


class TestSubscribe:
    def test_listener_receives_snapshots(self, store):
        seen = []
        store.subscribe(seen.append)
        tab_id = store.open_tab()
        assert seen[-1].active_tab_id == tab_id

    def test_unsubscribe(self, store):
        seen = []
        unsubscribe = store.subscribe(seen.append)
        store.open_tab()
        unsubscribe()
        store.open_tab()
        assert len(seen) == 1

    def test_failing_listener_does_not_break_store(self, store):
        def bad(_snapshot):
            raise RuntimeError("listener bug")

        seen = []
        store.subscribe(bad)
        store.subscribe(seen.append)
        tab_id = store.open_tab()
        assert store.active_tab_id == tab_id
        assert len(seen) == 1

    @pytest.mark.asyncio
    async def test_resolution_notifies(self, store):
        seen = []
        store.open_tab()
        store.subscribe(seen.append)
        await store.settle()
        assert len(seen) == 1
        assert seen[0].active_tab.is_loading is False

    @pytest.mark.asyncio
    async def test_stale_resolution_does_not_notify(self, store):
        tab_id = store.open_tab()
        req_a = store.navigate(tab_id, "project:lab", raw=False)
        store.navigate(tab_id, "project:spotmap", raw=False)
        seen = []
        store.subscribe(seen.append)
        await store.resolve(req_a)
        assert seen == []
