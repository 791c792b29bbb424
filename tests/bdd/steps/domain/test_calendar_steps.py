"""Step definitions for the game calendar"""
from datetime import timedelta

from pytest_bdd import scenarios, given, when, then, parsers

from tradergame.domain.calendar import DAYS_PER_YEAR
from tradergame.domain.calendar.game_date import GameDate, time_until_next_tick
from fixtures.clock import GAME_EPOCH

scenarios('../../features/domain/calendar.feature')


@given(parsers.parse('the game date is day {day:d} of month {month:d} in year {year:d}'))
def set_game_date(context, day, month, year):
    context['date'] = GameDate(year=year, month=month, day=day)


@given('a new game has started')
def new_game(context):
    context['date'] = GameDate.starting()


@when(parsers.parse('the calendar advances {days:d} day'))
@when(parsers.parse('the calendar advances {days:d} days'))
def advance_calendar(context, days):
    date = context['date']
    for _ in range(days):
        date = date.advance()
    context['date'] = date


@when('the calendar advances one full year of days')
def advance_full_year(context):
    assert DAYS_PER_YEAR == 168
    advance_calendar(context, DAYS_PER_YEAR)


@when(parsers.parse('I create a game date for day {day:d} of month {month:d} in year {year:d}'))
def create_invalid_date(context, day, month, year):
    try:
        GameDate(year=year, month=month, day=day)
        context['error'] = None
    except ValueError as e:
        context['error'] = e


@given(parsers.parse('the next tick is {seconds:d} seconds away'))
def next_tick_in(context, seconds):
    context['now'] = GAME_EPOCH
    context['next_tick_time'] = GAME_EPOCH + timedelta(seconds=seconds)


@then(parsers.parse('the game date should be day {day:d} of month {month:d} in year {year:d}'))
def check_game_date(context, day, month, year):
    assert context['date'] == GameDate(year=year, month=month, day=day)


@then(parsers.parse('the formatted date should be "{text}"'))
def check_formatted(context, text):
    assert context['date'].format() == text


@then(parsers.parse('the short date should be "{text}"'))
def check_short_format(context, text):
    assert context['date'].format_short() == text


@then('a validation error should be raised')
def check_validation_error(context):
    assert isinstance(context['error'], ValueError)


@then(parsers.parse('it should be earlier than day {day:d} of month {month:d} in year {year:d}'))
def check_ordering(context, day, month, year):
    assert context['date'] < GameDate(year=year, month=month, day=day)


@then(parsers.parse('the countdown should read "{countdown}"'))
def check_countdown(context, countdown):
    assert time_until_next_tick(context['next_tick_time'], context['now']) == countdown
