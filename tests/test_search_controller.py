"""Tests for the debounced search controller."""

import asyncio

import pytest

from cli.location import Location
from cli.search import SearchController, SearchState


class GatedFetcher:
    """Fetcher whose responses are released by the test, one query at a time."""

    def __init__(self, *queries):
        self.calls = []
        self.gates = {query: asyncio.Event() for query in queries}
        self.errors = {}

    async def __call__(self, query):
        self.calls.append(query)
        if query in self.gates:
            await self.gates[query].wait()
        if query in self.errors:
            raise self.errors[query]
        return [{'name': f'{query}-match.pdf', 'type': 'document'}]


@pytest.mark.asyncio
async def test_stale_response_does_not_overwrite_latest():
    """'a' resolving after 'abc' leaves the 'abc' results in place."""
    fetch = GatedFetcher('a', 'ab', 'abc')
    controller = SearchController(fetch, Location(), debounce_seconds=0)

    tasks = [asyncio.create_task(controller.submit(q)) for q in ('a', 'ab', 'abc')]
    await asyncio.sleep(0)
    assert controller.state == SearchState.LOADING

    fetch.gates['abc'].set()
    await tasks[2]
    assert controller.results == [{'name': 'abc-match.pdf', 'type': 'document'}]

    fetch.gates['ab'].set()
    fetch.gates['a'].set()
    await asyncio.gather(*tasks)

    assert controller.state == SearchState.SHOWING_RESULTS
    assert controller.results == [{'name': 'abc-match.pdf', 'type': 'document'}]


@pytest.mark.asyncio
async def test_rapid_typing_sends_one_request():
    fetch = GatedFetcher()
    controller = SearchController(fetch, Location(), debounce_seconds=0.01)

    for text in ('r', 're', 'rep'):
        controller.on_input(text)
    assert controller.state == SearchState.DEBOUNCING
    assert not controller.is_open

    await controller.wait_settled()

    assert fetch.calls == ['rep']
    assert controller.state == SearchState.SHOWING_RESULTS
    assert controller.is_open


@pytest.mark.asyncio
async def test_new_keystroke_does_not_cancel_in_flight_request():
    fetch = GatedFetcher('rep')
    controller = SearchController(fetch, Location(), debounce_seconds=0.01)

    controller.on_input('rep')
    await asyncio.sleep(0.05)
    assert fetch.calls == ['rep']

    controller.on_input('repo')
    fetch.gates['rep'].set()
    await controller.wait_settled()

    assert fetch.calls == ['rep', 'repo']
    assert controller.results == [{'name': 'repo-match.pdf', 'type': 'document'}]


@pytest.mark.asyncio
async def test_empty_query_clears_location_query():
    fetch = GatedFetcher()
    location = Location.parse('/images?query=cat')
    controller = SearchController(fetch, location, debounce_seconds=0.01)

    controller.on_input('')
    await controller.wait_settled()

    assert fetch.calls == []
    assert controller.state == SearchState.IDLE
    assert controller.results == []
    assert str(location) == '/images'


@pytest.mark.asyncio
async def test_clearing_input_discards_pending_response():
    fetch = GatedFetcher('cat')
    controller = SearchController(fetch, Location(), debounce_seconds=0)

    task = asyncio.create_task(controller.submit('cat'))
    await asyncio.sleep(0)
    await controller.submit('')
    fetch.gates['cat'].set()
    await task

    assert controller.state == SearchState.IDLE
    assert controller.results == []


@pytest.mark.asyncio
async def test_no_matches_shows_empty():
    async def fetch(query):
        return []

    controller = SearchController(fetch, Location(), debounce_seconds=0)
    await controller.submit('zzz')

    assert controller.state == SearchState.SHOWING_EMPTY
    assert controller.is_open


@pytest.mark.asyncio
async def test_failed_latest_request_returns_to_idle():
    fetch = GatedFetcher()
    fetch.errors['cat'] = ConnectionError('server down')
    controller = SearchController(fetch, Location(), debounce_seconds=0)

    await controller.submit('cat')

    assert controller.state == SearchState.IDLE
    assert controller.results == []


@pytest.mark.asyncio
async def test_failed_stale_request_is_ignored():
    fetch = GatedFetcher('ca')
    fetch.errors['ca'] = ConnectionError('server down')
    controller = SearchController(fetch, Location(), debounce_seconds=0)

    stale = asyncio.create_task(controller.submit('ca'))
    await asyncio.sleep(0)
    await controller.submit('cat')
    fetch.gates['ca'].set()
    await stale

    assert controller.state == SearchState.SHOWING_RESULTS
    assert controller.results == [{'name': 'cat-match.pdf', 'type': 'document'}]


@pytest.mark.parametrize('file_type,path', [
    ('document', '/documents'),
    ('image', '/images'),
    ('video', '/media'),
    ('audio', '/media'),
    ('other', '/others'),
])
def test_select_navigates_to_type_view_with_query(file_type, path):
    location = Location()
    controller = SearchController(GatedFetcher(), location)
    controller.query = 'holiday'
    controller.results = [{'name': 'holiday', 'type': file_type}]

    controller.select({'name': 'holiday', 'type': file_type})

    assert location.path == path
    assert location.query == 'holiday'
    assert controller.state == SearchState.IDLE
    assert controller.results == []


@pytest.mark.asyncio
async def test_state_changes_are_reported():
    changes = []
    controller = SearchController(
        GatedFetcher(),
        Location(),
        debounce_seconds=0,
        on_change=lambda: changes.append(controller.state),
    )

    await controller.submit('cat')

    assert changes == [SearchState.LOADING, SearchState.SHOWING_RESULTS]


@pytest.mark.asyncio
async def test_visible_results_only_while_showing():
    fetch = GatedFetcher('dog')
    controller = SearchController(fetch, Location(), debounce_seconds=0)
    await controller.submit('cat')
    assert controller.visible_results == [{'name': 'cat-match.pdf', 'type': 'document'}]

    task = asyncio.create_task(controller.submit('dog'))
    await asyncio.sleep(0)

    assert controller.state == SearchState.LOADING
    assert controller.visible_results == []

    fetch.gates['dog'].set()
    await task
    assert controller.visible_results == [{'name': 'dog-match.pdf', 'type': 'document'}]
