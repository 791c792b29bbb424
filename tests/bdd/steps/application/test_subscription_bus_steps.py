"""Step definitions for the facility subscription bus"""
from dataclasses import replace
from unittest.mock import Mock

import pytest
from pytest_bdd import scenarios, given, when, then, parsers

from tradergame.application.game.subscription_bus import SubscriptionBus
from tradergame.domain.shared.exceptions import PersistenceError
from tradergame.ports.outbound.repositories import IFacilityRepository
from fixtures.facilities import farm

scenarios('../../features/application/subscription_bus.feature')


def _facilities(company_id, count):
    return [farm(facility_id=f"facility-{i}", company_id=company_id) for i in range(1, count + 1)]


def _recorder(context, name):
    received = context['received'].setdefault(name, [])
    return received.append


def _subscribe(context, name, company_id, listener):
    context['disposers'][name] = context['bus'].subscribe_facilities(company_id, listener)


# ----- Given -----

@given(parsers.parse('a subscription bus over a facility repository with {count:d} facilities for "{company_id}"'))
def bus_with_repository(context, count, company_id):
    repo = Mock(spec=IFacilityRepository)
    repo.list_by_company.return_value = _facilities(company_id, count)
    context['repo'] = repo
    context['bus'] = SubscriptionBus(repo)
    context['received'] = {}
    context['disposers'] = {}


@given(parsers.parse('the game data for "{company_id}" is initialized'))
@when(parsers.parse('the game data for "{company_id}" is initialized'))
def initialize(context, company_id):
    context['bus'].initialize_game_data(company_id)


@given(parsers.parse('listener "{name}" subscribes to "{company_id}"'))
@when(parsers.parse('listener "{name}" subscribes to "{company_id}"'))
def subscribe(context, name, company_id):
    _subscribe(context, name, company_id, _recorder(context, name))


@given(parsers.parse('a failing listener subscribes to "{company_id}"'))
def subscribe_failing(context, company_id):
    def explode(_facilities):
        raise RuntimeError("listener blew up")

    _subscribe(context, 'failing', company_id, explode)


@given(parsers.parse('listener "{name}" subscribes to "{company_id}" and removes listener "{other}" when called'))
def subscribe_remover(context, name, company_id, other):
    record = _recorder(context, name)

    def listener(facilities):
        record(facilities)
        context['disposers'][other]()

    _subscribe(context, name, company_id, listener)


@given(parsers.parse('listener "{name}" subscribes to "{company_id}" and adds listener "{other}" when first called'))
def subscribe_adder(context, name, company_id, other):
    record = _recorder(context, name)
    # Ensure the late listener's record exists even before it is added
    _recorder(context, other)

    def listener(facilities):
        record(facilities)
        if other not in context['disposers']:
            _subscribe(context, other, company_id, _recorder(context, other))

    _subscribe(context, name, company_id, listener)


@given(parsers.parse('listener "{name}" subscribes to facility "{facility_id}"'))
def subscribe_facility(context, name, facility_id):
    context['disposers'][name] = context['bus'].subscribe_facility(facility_id, _recorder(context, name))


@given('the repository fails to load')
def failing_repository(context):
    context['repo'].list_by_company.side_effect = PersistenceError("database is locked")


# ----- When -----

@when(parsers.parse('listener "{name}" unsubscribes'))
def unsubscribe(context, name):
    context['disposers'][name]()


@when(parsers.parse('{count:d} facilities are published for "{company_id}"'))
def publish(context, count, company_id):
    context['bus'].publish_facilities(company_id, _facilities(company_id, count))


@when(parsers.parse('facility "{facility_id}" is published with progress {progress:d}'))
def publish_single(context, facility_id, progress):
    facility = context['bus'].get_facility(facility_id)
    updated = replace(
        facility,
        active_recipe_id='grow_grain',
        progress_ticks=progress,
        is_producing=True,
    )
    context['bus'].publish_facility(updated)


@when('the bus is cleaned up')
def cleanup(context):
    context['bus'].cleanup()


# ----- Then -----

@then(parsers.parse('listener "{name}" should have received {count:d} update'))
@then(parsers.parse('listener "{name}" should have received {count:d} updates'))
def check_received(context, name, count):
    assert len(context['received'].get(name, [])) == count


@then(parsers.parse('listener "{name}" last saw {count:d} facilities'))
def check_last_seen(context, name, count):
    assert len(context['received'][name][-1]) == count


@then(parsers.parse('the repository should have been queried {count:d} time'))
def check_query_count(context, count):
    assert context['repo'].list_by_company.call_count == count


@then(parsers.parse('the bus should have {count:d} listener for "{key}"'))
def check_listener_count(context, count, key):
    assert context['bus'].listener_count(key) == count


@then(parsers.parse('the bus should have {count:d} listeners in total'))
def check_total_listeners(context, count):
    assert context['bus'].listener_count() == count


@then(parsers.parse('the cached list for "{company_id}" should show progress {progress:d} for "{facility_id}"'))
def check_cached_progress(context, company_id, progress, facility_id):
    cached = {f.id: f for f in context['bus'].get_facilities(company_id)}
    assert cached[facility_id].progress_ticks == progress
    assert len(cached) == 2


@then(parsers.parse('refreshing "{company_id}" should raise a persistence error'))
def check_refresh_raises(context, company_id):
    with pytest.raises(PersistenceError):
        context['bus'].refresh(company_id)


@then(parsers.parse('the bus should have no cached facilities for "{company_id}"'))
def check_no_cache(context, company_id):
    assert context['bus'].get_facilities(company_id) == []
    assert context['bus'].company_ids() == []
