"""Step definitions for the recipe catalog"""
import pytest
from pytest_bdd import scenarios, given, then, parsers

from tradergame.domain.production.catalog import RecipeCatalog, default_catalog
from tradergame.domain.shared.exceptions import RecipeNotFoundError

scenarios('../../features/domain/recipe_catalog.feature')


@given('the default recipe catalog')
def default_recipes(context):
    context['catalog'] = default_catalog()


@given(parsers.parse(
    'a catalog built from a record for "{recipe_id}" turning {inputs:d} "{input_id}" '
    'into {outputs:d} "{output_id}" in {ticks:d} ticks'
))
def catalog_from_records(context, recipe_id, inputs, input_id, outputs, output_id, ticks):
    context['catalog'] = RecipeCatalog.from_records([{
        'id': recipe_id,
        'inputs': [{'resource_id': input_id, 'quantity': inputs}],
        'outputs': [{'resource_id': output_id, 'quantity': outputs}],
        'processing_ticks': ticks,
        'facility_types': ['press'],
    }])


@then(parsers.parse('the catalog should contain {count:d} recipes'))
def check_count(context, count):
    assert len(context['catalog']) == count


@then(parsers.parse(
    'recipe "{recipe_id}" should turn {inputs:d} "{input_id}" into {outputs:d} "{output_id}" in {ticks:d} tick'
))
def check_recipe(context, recipe_id, inputs, input_id, outputs, output_id, ticks):
    recipe = context['catalog'].lookup(recipe_id)
    assert [(i.resource_id, i.quantity) for i in recipe.inputs] == [(input_id, inputs)]
    assert [(o.resource_id, o.quantity) for o in recipe.outputs] == [(output_id, outputs)]
    assert recipe.processing_ticks == ticks


@then(parsers.parse('recipe "{recipe_id}" should take {ticks:d} ticks'))
def check_duration(context, recipe_id, ticks):
    assert context['catalog'].lookup(recipe_id).processing_ticks == ticks


@then(parsers.parse('the recipes for "{facility_type}" should be "{recipe_ids}"'))
def check_recipes_for(context, facility_type, recipe_ids):
    found = [r.id for r in context['catalog'].recipes_for(facility_type)]
    assert found == recipe_ids.split(", ")


@then(parsers.parse('looking up "{recipe_id}" should raise a recipe not found error'))
def check_not_found(context, recipe_id):
    assert recipe_id not in context['catalog']
    with pytest.raises(RecipeNotFoundError):
        context['catalog'].lookup(recipe_id)


@then(parsers.parse('building a catalog with "{recipe_id}" twice should fail'))
def check_duplicates(context, recipe_id):
    recipe = default_catalog().lookup(recipe_id)
    with pytest.raises(ValueError, match="Duplicate"):
        RecipeCatalog([recipe, recipe])
