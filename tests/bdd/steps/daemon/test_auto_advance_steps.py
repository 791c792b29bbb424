"""Step definitions for the auto-advance scheduler"""
import asyncio
from datetime import timedelta

from pytest_bdd import scenarios, given, when, then, parsers

from tradergame.adapters.primary.daemon.auto_advance import AutoAdvanceScheduler
from tradergame.application.facilities.commands import BuildFacilityCommand
from tradergame.configuration.container import get_facility_repository, get_game_state

scenarios('../../features/daemon/auto_advance.feature')


class FlakyMediator:
    """Fails the next dispatch, then delegates to the real mediator"""

    def __init__(self, mediator):
        self._mediator = mediator
        self.fail_next = False

    async def send_async(self, request):
        if self.fail_next:
            self.fail_next = False
            raise RuntimeError("database unavailable")
        return await self._mediator.send_async(request)


# ----- Given -----

@given(parsers.parse('company "{company_id}" has a farm'))
def company_with_farm(mediator, company_id):
    command = BuildFacilityCommand(company_id=company_id, facility_subtype="farm", city_id="city-1")
    asyncio.run(mediator.send_async(command))


@given('an auto-advance scheduler')
def scheduler(context, mediator, clock):
    flaky = FlakyMediator(mediator)
    context['flaky'] = flaky
    context['scheduler'] = AutoAdvanceScheduler(
        mediator=flaky,
        game_state=get_game_state(),
        clock=clock,
        poll_interval=0.01,
    )


@given('the next tick dispatch will fail')
def fail_next_dispatch(context):
    context['flaky'].fail_next = True


@given('the game is already processing a tick')
def already_processing(context):
    assert context['scheduler'].game_state.begin_processing() is True


# ----- When -----

@when(parsers.parse('{minutes:d} minutes pass and the scheduler checks'))
def time_passes_and_check(context, clock, minutes):
    clock.advance(timedelta(minutes=minutes))
    asyncio.run(context['scheduler'].check_once())


@when('the scheduler checks again')
def check_again(context):
    asyncio.run(context['scheduler'].check_once())


@when('a manual tick is requested')
def manual_tick(context):
    context['manual_result'] = asyncio.run(context['scheduler'].handle_advance_tick())


@when('the scheduler runs with the tick already due and is then stopped')
def run_and_stop(context, clock):
    clock.advance(timedelta(minutes=60))
    scheduler = context['scheduler']

    async def run():
        task = asyncio.create_task(scheduler.start())
        # Let the loop poll a few times
        await asyncio.sleep(0.05)
        scheduler.stop()
        await asyncio.wait_for(task, timeout=1.0)

    asyncio.run(run())


# ----- Then -----

@then(parsers.parse('the game should be at tick {tick:d}'))
def check_tick(context, tick):
    assert context['scheduler'].game_state.current().tick == tick


@then(parsers.parse('the scheduler should have executed {count:d} tick'))
@then(parsers.parse('the scheduler should have executed {count:d} ticks'))
def check_executed(context, count):
    assert context['scheduler'].ticks_executed == count


@then(parsers.parse('the next tick should be {minutes:d} minutes from now'))
def check_next_tick(context, clock, minutes):
    state = context['scheduler'].game_state.current()
    assert state.next_tick_time == clock.now() + timedelta(minutes=minutes)


@then(parsers.parse('the scheduler log should mention "{text}"'))
def check_log(context, text):
    assert any(text in entry.message for entry in context['scheduler'].logs)


@then('the manual tick should be rejected')
def check_manual_rejected(context):
    assert context['manual_result'].rejected is True


@then(parsers.parse('the scheduler status should be "{status}"'))
def check_status(context, status):
    assert context['scheduler'].status.value == status


@then(parsers.parse('the farm of "{company_id}" should have progress {progress:d}'))
def check_farm_progress(company_id, progress):
    (stored,) = get_facility_repository().list_by_company(company_id)
    assert stored.progress_ticks == progress
