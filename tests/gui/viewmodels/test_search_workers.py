"""Tests for QtPageLauncher delivering worker results on the GUI thread."""

from __future__ import annotations

import threading

import pytest

PySide6 = pytest.importorskip("PySide6")

from facetfeed.application.services.query_builder import build_query  # noqa: E402
from facetfeed.domain.models.facets import FacetState  # noqa: E402
from facetfeed.domain.models.query import ResultPage  # noqa: E402
from facetfeed.errors import RemoteSearchError  # noqa: E402
from facetfeed.gui.viewmodels.page_requests import PageTicket  # noqa: E402
from facetfeed.gui.viewmodels.search_workers import QtPageLauncher  # noqa: E402


def _ticket(page: int = 1) -> PageTicket:
    return PageTicket(generation=0, page=page, query=build_query(FacetState(), page))


def test_completed_callback_runs_on_gui_thread(qtbot, scripted_backend):
    scripted_backend.pages = {1: ResultPage(items=["a"], has_more=True)}
    launcher = QtPageLauncher(scripted_backend)
    delivered = []
    gui_thread = threading.get_ident()

    ticket = _ticket()
    launcher.submit(
        ticket,
        lambda t, result: delivered.append((t, result, threading.get_ident())),
        lambda t, error: pytest.fail(f"unexpected failure: {error}"),
    )

    qtbot.waitUntil(lambda: bool(delivered), timeout=2000)
    delivered_ticket, result, thread_id = delivered[0]
    assert delivered_ticket == ticket
    assert result.items == ["a"]
    assert thread_id == gui_thread
    assert launcher.pending_count() == 0


def test_backend_error_reported_through_failed_callback(qtbot, scripted_backend):
    scripted_backend.error = RemoteSearchError("offline")
    launcher = QtPageLauncher(scripted_backend)
    failures = []

    launcher.submit(_ticket(), lambda t, r: None, lambda t, error: failures.append(error))

    qtbot.waitUntil(lambda: bool(failures), timeout=2000)
    assert str(failures[0]) == "offline"


def test_shutdown_drops_late_results(qtbot):
    release = threading.Event()

    class _SlowBackend:
        def search(self, query):
            release.wait(2)
            return ResultPage(items=["late"], has_more=False)

    launcher = QtPageLauncher(_SlowBackend())
    delivered = []
    launcher.submit(_ticket(), lambda t, r: delivered.append(r), lambda t, e: delivered.append(e))

    launcher.shutdown()
    release.set()
    qtbot.wait(200)

    assert delivered == []
    assert launcher.pending_count() == 0
