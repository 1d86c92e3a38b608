"""Tests for FacetStore mutations, generations and badge projection."""

from __future__ import annotations

from dataclasses import fields

import pytest

from facetfeed.domain.models.catalog import FORMATS, GENRES, SORT_ORDERS, years
from facetfeed.domain.models.facets import DEFAULT_SORT, FACET_FIELDS, FacetState, FacetValue
from facetfeed.errors import FacetFieldError
from facetfeed.events.bus import EventBus
from facetfeed.events.search_events import FacetStateChangedEvent
from facetfeed.gui.viewmodels.facet_store import FacetStore, compute_badges
from facetfeed.gui.viewmodels.fetch_sequencer import FetchSequencer

ACTION = FacetValue("Action", "Action")
ROMANCE = FacetValue("Romance", "Romance")
TV = FacetValue("TV", "TV Show")
YEAR_2024 = FacetValue("2024", "2024")
POPULARITY = FacetValue("POPULARITY_DESC", "Popularity")


@pytest.fixture
def store():
    return FacetStore()


def test_initial_state_has_no_badges(store):
    assert store.state == FacetState()
    assert store.generation == 0
    assert store.compute_badges() == []


def test_badges_follow_field_order(store):
    store.set_facet("formats", [TV])
    store.set_facet("genres", [ACTION, ROMANCE])
    store.set_facet("text", "frieren")
    store.set_facet("years", [YEAR_2024])

    assert store.compute_badges() == ["frieren", "Action", "Romance", "2024", "TV Show"]


def test_default_sort_has_no_badge_but_other_sorts_do(store):
    assert compute_badges(FacetState(sort=DEFAULT_SORT)) == []

    store.set_facet("sort", [POPULARITY])

    assert store.compute_badges() == ["Popularity"]


def test_explicit_ids_shown_as_single_badge(store):
    store.set_facet("explicit_ids", [1, 2, 3])

    assert store.state.explicit_ids == (1, 2, 3)
    assert store.compute_badges() == ["IDs"]


def test_remove_ids_badge_clears_override(store):
    store.set_facet("explicit_ids", [5])
    store.remove_badge("IDs")

    assert store.state.explicit_ids is None
    assert store.compute_badges() == []


def test_remove_badge_removes_matching_entry_only(store):
    store.set_facet("genres", [ACTION, ROMANCE])
    store.set_facet("formats", [TV])

    store.remove_badge("Action")

    assert store.state.genres == (ROMANCE,)
    assert store.state.formats == (TV,)


def test_remove_badge_resets_text(store):
    store.set_facet("text", "naruto")

    store.remove_badge("naruto")

    assert store.state.text == ""


def test_remove_badge_clears_every_field_carrying_label(store):
    # The same label on two facets disappears from both.
    shared = FacetValue("Music", "Music")
    store.set_facet("genres", [shared])
    store.set_facet("formats", [FacetValue("MUSIC", "Music")])

    store.remove_badge("Music")

    assert store.state.genres == ()
    assert store.state.formats == ()


def test_remove_sort_badge_leaves_sort_empty(store):
    store.set_facet("sort", [POPULARITY])

    store.remove_badge("Popularity")

    assert store.state.sort == ()
    assert store.compute_badges() == []


def test_badge_round_trip_restores_previous_badges(store):
    store.set_facet("genres", [ACTION])
    before = store.compute_badges()

    store.set_facet("genres", [ACTION, ROMANCE])
    store.remove_badge("Romance")

    assert store.compute_badges() == before


def test_clear_all_restores_defaults(store):
    store.set_facet("text", "x")
    store.set_facet("genres", [ACTION])
    store.set_facet("sort", [POPULARITY])
    store.set_facet("explicit_ids", [9])

    store.clear_all()

    assert store.state == FacetState()
    assert store.state.sort == DEFAULT_SORT
    assert store.compute_badges() == []


def test_every_mutation_bumps_generation(store):
    generations = []
    store.state_changed.connect(lambda state, generation: generations.append(generation))

    store.set_facet("text", "a")
    store.set_facet("text", "a")
    store.remove_badge("not-present")
    store.clear_all()

    assert generations == [1, 2, 3, 4]
    assert store.generation == 4


def test_state_changed_carries_committed_state(store):
    seen = []
    store.state_changed.connect(lambda state, generation: seen.append(state))

    store.set_facet("genres", [ACTION])

    assert seen == [store.state]
    assert seen[0].genres == (ACTION,)


def test_commit_publishes_event():
    bus = EventBus()
    events = []
    bus.subscribe(FacetStateChangedEvent, events.append)
    store = FacetStore(event_bus=bus)

    store.set_facet("text", "bleach")

    assert len(events) == 1
    assert events[0].generation == 1
    assert events[0].state.text == "bleach"


def test_unknown_field_rejected(store):
    with pytest.raises(FacetFieldError):
        store.set_facet("rating", [ACTION])
    assert store.generation == 0


def test_single_select_accepts_one_entry(store):
    with pytest.raises(FacetFieldError):
        store.set_facet("seasons", [FacetValue("WINTER", "Winter"), FacetValue("FALL", "Fall")])


def test_list_field_rejects_plain_strings(store):
    with pytest.raises(FacetFieldError):
        store.set_facet("genres", "Action")
    with pytest.raises(FacetFieldError):
        store.set_facet("genres", ["Action"])


def test_text_rejects_non_strings(store):
    with pytest.raises(FacetFieldError):
        store.set_facet("text", 12)


def test_explicit_ids_reject_non_integers(store):
    with pytest.raises(FacetFieldError):
        store.set_facet("explicit_ids", ["abc"])


def test_none_clears_field(store):
    store.set_facet("genres", [ACTION])
    store.set_facet("genres", None)
    store.set_facet("explicit_ids", [])

    assert store.state.genres == ()
    assert store.state.explicit_ids is None


def test_facet_value_equality_is_by_key():
    assert FacetValue("TV", "TV Show") == FacetValue("TV", "Television")
    assert len({FacetValue("TV", "a"), FacetValue("TV", "b")}) == 1


def test_catalog_options_are_facet_values():
    assert SORT_ORDERS[0] == DEFAULT_SORT[0]
    assert ACTION in GENRES
    assert TV in FORMATS


def test_years_run_from_next_year_down():
    from datetime import date

    options = years(date(2024, 6, 1))

    assert options[0].key == "2025"
    assert options[-1].key == "1940"


def test_uncoercible_year_rejected_before_commit(store, deferred_launcher):
    sequencer = FetchSequencer(store, deferred_launcher)
    store.state_changed.connect(sequencer.reset)
    sequencer.load_page(1)
    deferred_launcher.complete(0, ["a"], has_more=True)

    with pytest.raises(FacetFieldError):
        store.set_facet("years", [FacetValue("not-a-year", "Bogus")])

    assert store.generation == 0
    assert store.state.years == ()
    assert store.compute_badges() == []
    assert sequencer.items.value == ["a"]
    assert len(deferred_launcher.requests) == 1


def test_tri_state_keys_are_never_rejected(store):
    store.set_facet("on_list", [FacetValue("maybe", "Any")])

    assert store.state.on_list == (FacetValue("maybe", "Any"),)


def test_facet_fields_match_state_attributes():
    assert [f.name for f in fields(FacetState)] == [d.name for d in FACET_FIELDS]


def test_text_reading_ids_keeps_its_badge(store):
    # "IDs" is reserved for the explicit-ID override.
    store.set_facet("text", "IDs")
    assert store.compute_badges() == ["IDs"]

    store.remove_badge("IDs")

    assert store.state.text == "IDs"
    assert store.compute_badges() == ["IDs"]
    store.set_facet("text", "")
    assert store.compute_badges() == []
