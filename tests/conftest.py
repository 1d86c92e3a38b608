import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Ensure the project sources are importable without an editable install.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Qt widgets need a platform plugin even in headless CI.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from facetfeed.domain.models.query import ResultPage  # noqa: E402


class ScriptedBackend:
    """Search backend returning canned pages keyed by page number."""

    def __init__(self, pages=None, *, error=None):
        self.pages = dict(pages or {})
        self.error = error
        self.queries = []

    def search(self, query):
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.pages.get(query.page, ResultPage(items=[], has_more=False))


class DeferredLauncher:
    """Launcher that parks requests until the test settles them.

    Lets a test deliver responses in any order, which is how out-of-order
    network completions are reproduced deterministically.
    """

    def __init__(self):
        self.requests = []
        self.shut_down = False

    def submit(self, ticket, on_completed, on_failed):
        self.requests.append((ticket, on_completed, on_failed))

    def shutdown(self):
        self.shut_down = True

    @property
    def last_ticket(self):
        return self.requests[-1][0]

    def complete(self, index, items, has_more=True):
        ticket, on_completed, _ = self.requests[index]
        on_completed(ticket, ResultPage(items=list(items), has_more=has_more))

    def fail(self, index, error):
        ticket, _, on_failed = self.requests[index]
        on_failed(ticket, error)


@pytest.fixture
def deferred_launcher():
    return DeferredLauncher()


@pytest.fixture
def scripted_backend():
    return ScriptedBackend()
