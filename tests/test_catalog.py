"""Tests for catalog: dedup by version, lookup, ordering."""

from pathlib import Path

from pluginctl.plugins import PluginRecord, build_catalog, plugin_names, sort_plugins, version_key


def rec(name, version="1.0", deps=(), location=None):
    return PluginRecord(
        name=name,
        version=version,
        dependencies=tuple(deps),
        location=Path(location or f"/dist/{name}-{version}.ez"),
    )


class TestBuildCatalog:
    def test_empty(self):
        catalog = build_catalog([])
        assert len(catalog) == 0
        assert catalog.names() == frozenset()

    def test_keeps_highest_version(self):
        catalog = build_catalog([rec("a", "1.0"), rec("a", "2.0")])
        assert len(catalog) == 1
        assert catalog["a"].version == "2.0"

    def test_order_of_input_does_not_matter(self):
        catalog = build_catalog([rec("a", "2.0"), rec("a", "1.0")])
        assert catalog["a"].version == "2.0"

    def test_merges_multiple_sources(self):
        catalog = build_catalog([rec("a", "1.0"), rec("b")], [rec("a", "1.5")])
        assert catalog.names() == {"a", "b"}
        assert catalog["a"].version == "1.5"

    def test_lexical_ordering_is_plain_string_comparison(self):
        catalog = build_catalog([rec("a", "9"), rec("a", "10")])
        assert catalog["a"].version == "9"

    def test_natural_ordering_compares_numbers(self):
        catalog = build_catalog([rec("a", "9"), rec("a", "10")], ordering="natural")
        assert catalog["a"].version == "10"

    def test_equal_versions_pick_greatest_location(self):
        first = rec("a", "1.0", location="/x/a.ez")
        second = rec("a", "1.0", location="/y/a.ez")
        assert build_catalog([first, second])["a"] == second
        assert build_catalog([second, first])["a"] == second

    def test_iterates_in_name_order(self):
        catalog = build_catalog([rec("c"), rec("a"), rec("b")])
        assert list(catalog) == ["a", "b", "c"]


class TestLookup:
    def test_filters_requested(self):
        catalog = build_catalog([rec("a"), rec("b"), rec("c")])
        assert plugin_names(catalog.lookup({"a", "c"})) == ["a", "c"]

    def test_unknown_names_are_skipped(self):
        catalog = build_catalog([rec("a")])
        assert plugin_names(catalog.lookup(["a", "nope"])) == ["a"]

    def test_returns_winning_record(self):
        catalog = build_catalog([rec("a", "1.0"), rec("a", "3.0")])
        assert catalog.lookup(["a"])[0].version == "3.0"


class TestSortPlugins:
    def test_sorts_by_name_then_version(self):
        records = [rec("b", "1"), rec("a", "2"), rec("a", "1")]
        assert [r.label for r in sort_plugins(records)] == ["a-1", "a-2", "b-1"]

    def test_drops_exact_duplicates(self):
        records = [rec("a", "1", location="/x/a.ez"), rec("a", "1", location="/y/a.ez")]
        assert len(sort_plugins(records)) == 1


class TestVersionKey:
    def test_lexical(self):
        assert version_key("10") < version_key("9")

    def test_natural(self):
        assert version_key("1.10", "natural") > version_key("1.9", "natural")

    def test_natural_mixed_text(self):
        assert version_key("1.0rc1", "natural") < version_key("1.0rc2", "natural")
