"""Job: compute embeddings for recipes that do not have a vector yet."""

from datetime import datetime, timezone
from typing import Optional

from recipe_chef.chef_core import get_logger
from recipe_chef.chef_impl import ChefFactory

logger = get_logger(__name__)


async def run_computation(factory: ChefFactory, batch_size: Optional[int] = None) -> int:
    """
    Embeds one batch of recipes without ``hasVector`` and marks them as done.

    Missing bookkeeping fields (``published``, ``createdBy``, ``updatedBy``,
    ``createdAt``, ``updatedAt``) are filled in on the way.

    Args:
        factory: Factory supplying the chef and the recipe store.
        batch_size: Recipes per run; ``settings.vector_batch_size`` when omitted.

    Returns:
        The number of recipes updated.
    """
    store = factory.recipe_store
    recipes = await store.list_recipes(without_vector=True, limit=batch_size or factory.settings.vector_batch_size)
    if not recipes:
        logger.info("No recipes require embeddings at this time.")
        return 0

    chef = factory.get_chef()
    if not chef.supports_vectors:
        logger.warning("The %s chef cannot store embeddings; skipping %d recipe(s).", chef.provider, len(recipes))
        return 0

    recipes = await chef.store_embeddings(recipes)

    now = datetime.now(timezone.utc).isoformat()
    updates = []
    for recipe in recipes:
        created_at = recipe.get("createdAt", now)
        updates.append(
            {
                **recipe,
                "hasVector": True,
                "published": recipe.get("published", False),
                "createdBy": recipe.get("createdBy", "system"),
                "updatedBy": recipe.get("updatedBy", "system"),
                "createdAt": created_at,
                "updatedAt": recipe.get("updatedAt", created_at),
            }
        )

    await store.batch_write(updates)
    logger.info("Computed vectors for %d recipe(s).", len(updates))
    return len(updates)
