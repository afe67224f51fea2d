"""Tests for waymark.history.platform — platform-backed histories and pop reconciliation."""

import logging

import pytest

from waymark.history.platform import BrowserHistory, HashHistory, _PlatformHistory
from waymark.history.transition import PersistedEntry, Transition
from waymark.location import Action, Update
from waymark.testing import SimulatedPlatform


@pytest.fixture
def platform() -> SimulatedPlatform:
    return SimulatedPlatform("/home")


@pytest.fixture
def history(platform: SimulatedPlatform) -> BrowserHistory:
    history = BrowserHistory(platform)
    history.push("/about")
    return history


class TestInitialState:
    def test_stamps_first_entry(self, platform: SimulatedPlatform) -> None:
        history = BrowserHistory(platform)
        assert history.index == 0
        assert history.action is Action.POP
        assert history.location.pathname == "/home"
        assert history.location.key == "default"
        assert platform.entries[0].payload == PersistedEntry(state=None, key="default", index=0)
        assert platform.url == "/home"

    def test_reads_existing_entry(self) -> None:
        platform = SimulatedPlatform("/a?b=1#c")
        platform.entries[0].payload = PersistedEntry(state="s", key="k", index=3)
        history = BrowserHistory(platform)
        assert history.index == 3
        assert history.location.state == "s"
        assert history.location.key == "k"
        assert (history.location.search, history.location.hash) == ("?b=1", "#c")


class TestPushReplace:
    def test_push_persists_entry(self, platform: SimulatedPlatform) -> None:
        history = BrowserHistory(platform)
        history.push("/about?x=1", {"n": 1})
        assert platform.url == "/about?x=1"
        assert platform.position == 1
        payload = platform.entries[1].payload
        assert payload == PersistedEntry(state={"n": 1}, key=history.location.key, index=1)
        assert history.index == 1
        assert history.action is Action.PUSH

    def test_replace_keeps_index(self, platform: SimulatedPlatform, history: BrowserHistory) -> None:
        history.replace("/contact")
        assert platform.url == "/contact"
        assert len(platform.entries) == 2
        assert platform.entries[1].payload is not None
        assert platform.entries[1].payload.index == 1
        assert history.action is Action.REPLACE

    def test_push_after_back_truncates(
        self, platform: SimulatedPlatform, history: BrowserHistory
    ) -> None:
        history.back()
        history.push("/other")
        assert [entry.url for entry in platform.entries] == ["/home", "/other"]


class TestPop:
    def test_platform_back(self, platform: SimulatedPlatform, history: BrowserHistory) -> None:
        updates: list[Update] = []
        history.listen(updates.append)
        platform.back()
        assert history.location.pathname == "/home"
        assert history.index == 0
        assert history.action is Action.POP
        assert [u.location.pathname for u in updates] == ["/home"]

    def test_history_go(self, platform: SimulatedPlatform, history: BrowserHistory) -> None:
        history.back()
        assert platform.position == 0
        history.forward()
        assert history.location.pathname == "/about"
        assert history.index == 1

    def test_go_past_end_is_ignored(
        self, platform: SimulatedPlatform, history: BrowserHistory
    ) -> None:
        updates: list[Update] = []
        history.listen(updates.append)
        history.go(5)
        assert updates == []
        assert history.index == 1


class TestUnloadGuard:
    def test_toggled_by_blockers(self, platform: SimulatedPlatform, history: BrowserHistory) -> None:
        assert platform.unload_guarded is False
        unblock_first = history.block(lambda tx: None)
        unblock_second = history.block(lambda tx: None)
        assert platform.unload_guarded is True
        unblock_first()
        assert platform.unload_guarded is True
        unblock_second()
        assert platform.unload_guarded is False

    def test_close_drops_guard(self, platform: SimulatedPlatform, history: BrowserHistory) -> None:
        history.block(lambda tx: None)
        history.close()
        assert platform.unload_guarded is False


class TestPopReconciliation:
    def test_blocked_back_is_reverted(
        self, platform: SimulatedPlatform, history: BrowserHistory
    ) -> None:
        updates: list[Update] = []
        transitions: list[Transition] = []
        history.listen(updates.append)
        history.block(transitions.append)

        platform.back()

        assert platform.moves == [-1, 1]
        assert platform.url == "/about"
        assert history.location.pathname == "/about"
        assert history.index == 1
        assert updates == []
        assert history.pending_pop is None
        assert len(transitions) == 1
        assert transitions[0].action is Action.POP
        assert transitions[0].location.pathname == "/home"
        assert transitions[0].target == -1

    def test_retry_replays_the_pop(
        self, platform: SimulatedPlatform, history: BrowserHistory
    ) -> None:
        updates: list[Update] = []
        transitions: list[Transition] = []
        history.listen(updates.append)
        unblock = history.block(transitions.append)
        platform.back()

        unblock()
        transitions[0].retry()

        assert platform.moves == [-1, 1, -1]
        assert history.location.pathname == "/home"
        assert history.index == 0
        assert [(u.action, u.location.pathname) for u in updates] == [(Action.POP, "/home")]

    def test_retry_inside_blocker(
        self, platform: SimulatedPlatform, history: BrowserHistory
    ) -> None:
        def confirm(transition: Transition) -> None:
            unblock()
            transition.retry()

        unblock = history.block(confirm)
        platform.back()
        assert history.location.pathname == "/home"
        assert platform.position == 0

    def test_blocked_forward(self, platform: SimulatedPlatform, history: BrowserHistory) -> None:
        history.back()
        transitions: list[Transition] = []
        history.block(transitions.append)

        platform.forward()

        assert platform.moves == [-1, 1, -1]
        assert history.location.pathname == "/home"
        assert transitions[0].target == 1
        assert transitions[0].location.pathname == "/about"

    def test_blocked_multi_step_pop(
        self, platform: SimulatedPlatform, history: BrowserHistory
    ) -> None:
        history.push("/contact")
        transitions: list[Transition] = []
        unblock = history.block(transitions.append)

        platform.go(-2)

        assert platform.moves == [-2, 2]
        assert history.index == 2
        assert transitions[0].target == -2
        unblock()
        transitions[0].retry()
        assert history.location.pathname == "/home"

    def test_blocked_history_go(
        self, platform: SimulatedPlatform, history: BrowserHistory
    ) -> None:
        transitions: list[Transition] = []
        history.block(transitions.append)
        history.back()
        assert platform.moves == [-1, 1]
        assert history.location.pathname == "/about"
        assert len(transitions) == 1

    def test_foreign_entry_cannot_be_blocked(
        self, platform: SimulatedPlatform, caplog: pytest.LogCaptureFixture
    ) -> None:
        history = BrowserHistory(platform)
        platform.visit("/external")
        platform.back()
        transitions: list[Transition] = []
        history.block(transitions.append)

        with caplog.at_level(logging.WARNING, logger="waymark.history"):
            platform.forward()

        assert "cannot be reverted" in caplog.text
        assert transitions == []
        assert platform.moves == [-1, 1]
        assert history.location.pathname == "/external"
        assert history.location.key == "default"
        assert history.index == 0

    def test_foreign_pop_warning_reported_once(
        self, platform: SimulatedPlatform, caplog: pytest.LogCaptureFixture
    ) -> None:
        history = BrowserHistory(platform)
        platform.visit("/external")
        platform.back()
        history.block(lambda tx: None)

        with caplog.at_level(logging.WARNING, logger="waymark.history"):
            platform.forward()
            platform.back()
            platform.forward()

        assert len([r for r in caplog.records if "cannot be reverted" in r.message]) == 1
        assert history.diagnostics.seen == frozenset({"unblockable-pop"})

    def test_pop_back_from_foreign_entry_is_applied(self, platform: SimulatedPlatform) -> None:
        history = BrowserHistory(platform)
        platform.visit("/external")
        platform.back()
        updates: list[Update] = []
        transitions: list[Transition] = []
        history.listen(updates.append)
        history.block(transitions.append)

        platform.forward()
        platform.back()

        assert platform.moves == [-1, 1, -1]
        assert platform.url == "/home"
        assert history.location.pathname == "/home"
        assert history.index == 0
        assert transitions == []
        assert [u.location.pathname for u in updates] == ["/external", "/home"]

    def test_blocking_resumes_after_leaving_foreign_entry(
        self, platform: SimulatedPlatform
    ) -> None:
        history = BrowserHistory(platform)
        platform.visit("/external")
        platform.back()
        unblock = history.block(lambda tx: None)
        platform.forward()
        platform.back()
        unblock()

        history.push("/next")
        transitions: list[Transition] = []
        history.block(transitions.append)
        platform.back()

        assert history.location.pathname == "/next"
        assert platform.url == "/next"
        assert transitions[0].location.pathname == "/home"
        assert transitions[0].target == -1


class TestClose:
    def test_stops_listening(self, platform: SimulatedPlatform, history: BrowserHistory) -> None:
        history.close()
        platform.back()
        assert history.location.pathname == "/about"


class TestHashHistory:
    def test_reads_fragment(self) -> None:
        history = HashHistory(SimulatedPlatform("/index.html#/users?tab=1"))
        assert history.location.pathname == "/users"
        assert history.location.search == "?tab=1"

    def test_no_fragment_is_root(self) -> None:
        history = HashHistory(SimulatedPlatform("/index.html"))
        assert history.location.pathname == "/"

    def test_create_href(self) -> None:
        history = HashHistory(SimulatedPlatform("/"), base_href="/index.html")
        assert history.create_href("/users") == "/index.html#/users"
        assert history.create_href({"pathname": "/a", "search": "?b"}) == "/index.html#/a?b"

    def test_push_writes_fragment(self) -> None:
        platform = SimulatedPlatform("/#/")
        history = HashHistory(platform)
        history.push("/users/42")
        assert platform.url == "#/users/42"
        assert history.location.pathname == "/users/42"

    def test_pop_reads_fragment(self) -> None:
        platform = SimulatedPlatform("/#/")
        history = HashHistory(platform)
        history.push("/a")
        platform.back()
        assert history.location.pathname == "/"

    def test_blocked_pop(self) -> None:
        platform = SimulatedPlatform("/#/")
        history = HashHistory(platform)
        history.push("/a")
        transitions: list[Transition] = []
        history.block(transitions.append)
        platform.back()
        assert history.location.pathname == "/a"
        assert transitions[0].location.pathname == "/"

    def test_relative_push_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        history = HashHistory(SimulatedPlatform("/#/"))
        with caplog.at_level(logging.WARNING, logger="waymark.history"):
            history.push("relative")
        assert "hash history.push('relative')" in caplog.text


class TestPlatformHistoryBase:
    def test_subclass_without_url_reader_fails_on_construction(self) -> None:
        class NoUrlReader(_PlatformHistory):
            pass

        platform = SimulatedPlatform("/")
        with pytest.raises(TypeError, match="_path_from_url"):
            NoUrlReader(platform)  # type: ignore[abstract]
        assert platform.entries[0].payload is None
