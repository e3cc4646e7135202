"""Tests for court selection and prioritization."""

from jurislab_agent.models import Category, Source
from jurislab_agent.prioritizer import effective_categories, prioritize, select_candidates


def _ids(sources):
    return [s.id for s in sources]


class TestEffectiveCategories:
    """Tests for the category fallback."""

    def test_requested_categories_kept(self):
        """Requested categories are used as given."""
        assert effective_categories([Category.TRABALHO]) == [Category.TRABALHO]

    def test_empty_falls_back_to_default(self):
        """No categories falls back to the defaults."""
        assert effective_categories([]) == [Category.SUPERIOR, Category.FEDERAL]

    def test_duplicates_removed(self):
        """Duplicate categories are dropped."""
        assert effective_categories([Category.FEDERAL, Category.FEDERAL]) == [Category.FEDERAL]


class TestSelectCandidates:
    """Tests for category filtering and priority ordering."""

    def test_filters_and_orders_by_priority(self, catalog):
        """Candidates are filtered and sorted by priority."""
        candidates = select_candidates(catalog, [Category.SUPERIOR, Category.FEDERAL])
        assert _ids(candidates) == ["stf", "stj", "trf4", "trf1"]

    def test_ties_keep_catalog_order(self, catalog):
        """Same-priority courts keep catalog order."""
        candidates = select_candidates(catalog, list(Category))
        assert _ids(candidates) == ["stf", "stj", "trf4", "trf1", "trt2", "tjsp"]

    def test_no_match_returns_empty(self):
        """No matching court gives an empty list."""
        catalog = [Source(id="tjsp", name="TJSP", category=Category.ESTADUAL)]
        assert select_candidates(catalog, [Category.SUPERIOR]) == []


class TestPrioritize:
    """Tests for pinned courts."""

    def test_pinned_moves_to_front_despite_lower_category(self):
        """Pinned courts go first whatever their category."""
        b1 = Source(id="b1", name="B1", category=Category.FEDERAL)
        a1 = Source(id="a1", name="A1", category=Category.SUPERIOR)
        a2 = Source(id="a2", name="A2", category=Category.SUPERIOR)

        candidates = select_candidates([b1, a1, a2], [Category.SUPERIOR, Category.FEDERAL])
        assert _ids(candidates) == ["a1", "a2", "b1"]
        assert _ids(prioritize(candidates, {"b1"})) == ["b1", "a1", "a2"]

    def test_partition_is_stable(self, catalog):
        """Both partitions keep their relative order."""
        candidates = select_candidates(catalog, list(Category))
        ordered = prioritize(candidates, {"tjsp", "stj"})
        assert _ids(ordered) == ["stj", "tjsp", "stf", "trf4", "trf1", "trt2"]

    def test_no_pins_keeps_order(self, catalog):
        """Without pins the order is unchanged."""
        assert prioritize(catalog, set()) == catalog

    def test_unknown_pins_ignored(self, catalog):
        """Pins that match no court are ignored."""
        assert prioritize(catalog, {"tse"}) == catalog

    def test_returns_new_list(self, catalog):
        """The input list is not mutated."""
        ordered = prioritize(catalog, set())
        ordered.pop()
        assert len(catalog) == 6
