"""Step definitions for the production advancer"""
from dataclasses import replace

from pytest_bdd import scenarios, given, when, then, parsers

from tradergame.domain.production.advancer import ProductionAdvancer
from tradergame.domain.production.catalog import RecipeCatalog, default_catalog
from tradergame.domain.production.recipe import Recipe
from tradergame.domain.shared.exceptions import RecipeNotAvailableError
from tradergame.domain.shared.value_objects import amounts
from fixtures.facilities import farm, mill

scenarios('../../features/domain/production_advancer.feature')


def _catalog(context) -> RecipeCatalog:
    return RecipeCatalog(context['recipes'])


# ----- Given -----

@given('the default recipe catalog')
def default_recipes(context):
    context['recipes'] = default_catalog().all()


@given(parsers.parse('a recipe "{recipe_id}" for farms producing {quantity:d} "{resource}" in {ticks:d} ticks'))
def custom_recipe(context, recipe_id, quantity, resource, ticks):
    context['recipes'].append(Recipe(
        id=recipe_id,
        name=recipe_id.replace('_', ' ').title(),
        inputs=(),
        outputs=amounts([(resource, quantity)]),
        processing_ticks=ticks,
        facility_types=('farm',),
    ))


@given('a farm that is not producing')
def idle_farm(context):
    context['facility'] = farm()
    context['original'] = context['facility']


@given(parsers.parse('a farm producing "{recipe_id}" with progress {progress:d} and {grain:d} grain of {capacity:d} capacity'))
def producing_farm(context, recipe_id, progress, grain, capacity):
    context['facility'] = farm(
        recipe_ids=(recipe_id,),
        active_recipe_id=recipe_id,
        progress_ticks=progress,
        is_producing=True,
        capacity=capacity,
        stock=[('grain', grain)],
    )


@given(parsers.parse('the facility effectivity is {effectivity:f}'))
def set_effectivity(context, effectivity):
    context['facility'] = replace(context['facility'], effectivity=effectivity)


@given(parsers.parse('a mill producing "{recipe_id}" holding {grain:d} "grain"'))
def producing_mill(context, recipe_id, grain):
    context['facility'] = mill(
        active_recipe_id=recipe_id,
        progress_ticks=0,
        is_producing=True,
        stock=[('grain', grain)],
    )


@given('a batch with a farm producing "grow_grain" and a farm producing an unknown recipe')
def mixed_batch(context):
    context['batch'] = [
        farm(facility_id='farm-ok', active_recipe_id='grow_grain', progress_ticks=0, is_producing=True),
        farm(
            facility_id='farm-broken',
            recipe_ids=('mystery_recipe',),
            active_recipe_id='mystery_recipe',
            progress_ticks=0,
            is_producing=True,
        ),
    ]


# ----- When -----

@when('the facility advances one tick')
def advance_facility(context):
    outcome = ProductionAdvancer(_catalog(context)).advance_one_tick(context['facility'])
    context['outcome'] = outcome
    context['facility'] = outcome.facility


@when('the batch advances one tick')
def advance_batch(context):
    context['batch_result'] = ProductionAdvancer(_catalog(context)).advance_all(context['batch'])


@when('production is stopped')
def stop_production(context):
    context['facility'] = context['facility'].stop_production()


@when(parsers.parse('production is started with "{recipe_id}"'))
def start_production(context, recipe_id):
    recipe = _catalog(context).lookup(recipe_id)
    context['facility'] = context['facility'].start_production(recipe)


@when(parsers.parse('production is attempted with "{recipe_id}"'))
def attempt_production(context, recipe_id):
    recipe = _catalog(context).lookup(recipe_id)
    try:
        context['facility'].start_production(recipe)
        context['error'] = None
    except RecipeNotAvailableError as e:
        context['error'] = e


# ----- Then -----

@then('the facility should be unchanged')
def check_unchanged(context):
    assert context['facility'] == context['original']


@then('no completion should be reported')
def check_no_completion(context):
    assert context['outcome'].completed is False


@then(parsers.parse('a completion of "{recipe_name}" should be reported'))
def check_completion(context, recipe_name):
    assert context['outcome'].completed is True
    assert context['outcome'].recipe_name == recipe_name


@then(parsers.parse('the facility progress should be {progress:d}'))
def check_progress(context, progress):
    assert context['facility'].progress_ticks == progress


@then(parsers.parse('the facility should hold {quantity:d} "{resource}"'))
def check_facility_holds(context, quantity, resource):
    assert context['facility'].inventory.quantity_of(resource) == quantity


@then(parsers.parse('the inventory usage should be {usage:d}'))
def check_usage(context, usage):
    inventory = context['facility'].inventory
    assert inventory.current_usage == usage
    assert inventory.current_usage <= inventory.capacity


@then(parsers.parse('{quantity:d} "{resource}" should have been applied'))
def check_applied(context, quantity, resource):
    applied = {a.resource_id: a.quantity for a in context['outcome'].applied}
    assert applied[resource] == quantity


@then(parsers.parse('{quantity:d} "{resource}" should have been dropped'))
def check_dropped(context, quantity, resource):
    dropped = {d.resource_id: d.quantity for d in context['outcome'].dropped}
    assert dropped[resource] == quantity


@then('the facility should still be producing')
def check_producing(context):
    assert context['facility'].is_producing is True


@then('the facility should be idle')
def check_idle(context):
    assert context['facility'].is_producing is False


@then('the outcome should be marked stalled')
def check_stalled(context):
    assert context['outcome'].stalled is True
    assert context['outcome'].completed is False


@then(parsers.parse('the batch should return {count:d} facilities'))
def check_batch_size(context, count):
    result = context['batch_result']
    assert len(result.updated_facilities) == count
    assert len(result.outcomes) == count


@then(parsers.parse('the first facility progress should be {progress:d}'))
def check_first_progress(context, progress):
    assert context['batch_result'].updated_facilities[0].progress_ticks == progress


@then('the second facility should be returned unchanged with a recipe error')
def check_second_unchanged(context):
    result = context['batch_result']
    assert result.updated_facilities[1] == context['batch'][1]
    assert 'mystery_recipe' in result.outcomes[1].error
    assert result.outcomes[0].error is None


@then('a recipe not available error should be raised')
def check_not_available(context):
    assert isinstance(context['error'], RecipeNotAvailableError)


@then(parsers.parse('the active recipe should be "{recipe_id}"'))
def check_active_recipe(context, recipe_id):
    assert context['facility'].active_recipe_id == recipe_id
