"""Job: tag recipes with ingredient ids from the shared dictionary."""

from typing import Dict, List, Mapping, Tuple

from recipe_chef.chef_core import DictionaryStore, IngredientName, get_logger
from recipe_chef.chef_impl import ChefFactory

logger = get_logger(__name__)


def extend_dictionary(
    words: Dict[str, int], ingredient_names: Mapping[str, IngredientName]
) -> Tuple[Dict[str, int], Dict[str, int]]:
    """
    Adds the names of every ingredient to ``words``.

    Ids only grow: an unknown ingredient gets ``max(id) + 1``. The singular,
    the plural and the variations of one ingredient resolve to the plural's
    id; words already in the dictionary keep theirs.

    Args:
        words: The dictionary, extended in place.
        ingredient_names: Names keyed by raw ingredient description.

    Returns:
        ``(new_words, ingredient_ids)``: the entries added to ``words`` and
        the id of every raw description and name.
    """
    next_id = max(words.values(), default=0) + 1
    new_words: Dict[str, int] = {}
    ingredient_ids: Dict[str, int] = {}

    for key, name in ingredient_names.items():
        plural_id = words.get(name.plural)
        if plural_id is None:
            plural_id = words.get(name.word)
            if plural_id is None:
                plural_id = next_id
                next_id += 1
            words[name.plural] = new_words[name.plural] = plural_id

        for word in [name.word, *name.variations]:
            if word not in words:
                words[word] = new_words[word] = plural_id

        for word in [key, name.word, name.plural, *name.variations]:
            ingredient_ids[word] = plural_id

    return new_words, ingredient_ids


async def tag(factory: ChefFactory, dictionary_store: DictionaryStore) -> int:
    """
    Tags every recipe with the sorted ids of its ingredients.

    Args:
        factory: Factory supplying the chef and the recipe store.
        dictionary_store: Store of the ``word -> id`` dictionary.

    Returns:
        The number of recipes tagged.
    """
    store = factory.recipe_store
    recipes = await store.list_recipes()
    if not recipes:
        logger.info("No recipes found to tag.")
        return 0

    ingredient_strings: List[str] = list(
        dict.fromkeys(item for recipe in recipes for item in recipe.get("ingredientList") or [])
    )
    chef = factory.get_chef()
    ingredient_names = await chef.get_ingredient_names(ingredient_strings)
    if not ingredient_names:
        logger.warning("No ingredient names extracted; recipes are left untagged.")
        return 0

    words = await dictionary_store.load()
    new_words, ingredient_ids = extend_dictionary(words, ingredient_names)
    if new_words:
        await dictionary_store.add_words(new_words)
        logger.info("Added %d word(s) to the dictionary.", len(new_words))

    updates = []
    for recipe in recipes:
        tags = sorted(
            {ingredient_ids[item] for item in recipe.get("ingredientList") or [] if item in ingredient_ids}
        )
        updates.append({"id": recipe["id"], "tags": tags, "tagged": True})

    await store.batch_write(updates)
    logger.info("Tagged %d recipe(s).", len(updates))
    return len(updates)
