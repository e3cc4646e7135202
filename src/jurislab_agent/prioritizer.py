"""Selection and ordering of the courts to search."""

from collections.abc import Collection, Iterable, Sequence

from .models import DEFAULT_CATEGORIES, Category, Source


def effective_categories(requested: Iterable[Category]) -> list[Category]:
    """Return the requested categories, or the default subset when none were given."""
    categories = list(dict.fromkeys(requested))
    return categories if categories else list(DEFAULT_CATEGORIES)


def select_candidates(catalog: Iterable[Source], categories: Collection[Category]) -> list[Source]:
    """Keep catalog sources in ``categories``, ordered by category priority.

    ``sorted`` is stable, so sources of the same category keep catalog order.
    """
    wanted = set(categories)
    return sorted((s for s in catalog if s.category in wanted), key=lambda s: s.category.priority)


def prioritize(candidates: Sequence[Source], pinned_ids: Collection[str]) -> list[Source]:
    """Move pinned sources to the front without reordering either group."""
    if not pinned_ids:
        return list(candidates)

    pinned_set = set(pinned_ids)
    pinned: list[Source] = []
    remaining: list[Source] = []
    for source in candidates:
        if source.id in pinned_set:
            pinned.append(source)
        else:
            remaining.append(source)

    return [*pinned, *remaining]
