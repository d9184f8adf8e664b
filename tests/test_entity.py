"""
Tests for the Entity record.

Tests:
- URL normalization
- Earliest-date tracking across updates and merges
- Name and label accumulation
"""

from datetime import date

import pytest

from crawlgraph.errors import InvalidURLError
from crawlgraph.types import Entity, Label, Name, normalize_url


class TestNormalizeUrl:
    """Tests for normalize_url."""

    def test_lowercases_scheme_and_host(self):
        assert normalize_url("HTTPS://Example.COM/Path") == "https://example.com/Path"

    def test_empty_path_becomes_slash(self):
        assert normalize_url("https://x") == "https://x/"
        assert normalize_url("https://x") == normalize_url("https://x/")

    def test_keeps_query_and_fragment(self):
        assert normalize_url("https://x/a?b=1#c") == "https://x/a?b=1#c"

    def test_keeps_user_info_case(self):
        """Test that only the host is lower-cased, not the credentials."""
        assert normalize_url("HTTPS://User:Pw@Host.EXAMPLE") == "https://User:Pw@host.example/"
        assert normalize_url("https://User:Pw@host/") != normalize_url("https://user:pw@host/")

    def test_keeps_port(self):
        assert normalize_url("http://Host:8080/a") == "http://host:8080/a"

    def test_rejects_user_info_without_host(self):
        with pytest.raises(InvalidURLError):
            normalize_url("https://user@")

    @pytest.mark.parametrize("url", ["", "example.com", "/relative/path", "https://", None])
    def test_rejects_non_absolute_urls(self, url):
        with pytest.raises(InvalidURLError):
            normalize_url(url)

    def test_invalid_url_error_is_value_error(self):
        with pytest.raises(ValueError):
            normalize_url("nope")


class TestEntityCreation:
    """Tests for building entities."""

    def test_new_with_name_and_labels(self):
        """Test building a single observation."""
        entity = Entity.new("https://x", date(2020, 1, 10), "Alpha", {"l1"})

        assert entity.url == "https://x/"
        assert entity.created_at == date(2020, 1, 10)
        assert entity.updated_at == set()
        assert entity.names == {Name("Alpha")}
        assert entity.labels == {Label("l1")}

    def test_new_without_name(self):
        entity = Entity.new("https://x", date(2020, 1, 10))
        assert entity.names == set()
        assert entity.labels == set()

    def test_accepts_wrapped_values(self):
        entity = Entity.new("https://x", date(2020, 1, 10), Name("Alpha"), [Label("l1")])
        assert entity.names == {Name("Alpha")}
        assert entity.labels == {Label("l1")}

    def test_created_at_never_in_updated_at(self):
        entity = Entity("https://x", date(2020, 1, 1), updated_at={date(2020, 1, 1), date(2020, 2, 1)})
        assert entity.updated_at == {date(2020, 2, 1)}

    def test_invalid_url_rejected(self):
        with pytest.raises(InvalidURLError):
            Entity.new("not a url", date(2020, 1, 1))


class TestEntityUpdate:
    """Tests for update and merge."""

    def test_later_date_goes_to_updated_at(self):
        entity = Entity.new("https://x", date(2020, 1, 10))
        entity.update(date(2020, 1, 20))

        assert entity.created_at == date(2020, 1, 10)
        assert entity.updated_at == {date(2020, 1, 20)}

    def test_earlier_date_replaces_created_at(self):
        """Test that an older observation becomes created_at."""
        entity = Entity.new("https://x", date(2020, 1, 10))
        entity.update(date(2020, 1, 5))

        assert entity.created_at == date(2020, 1, 5)
        assert entity.updated_at == {date(2020, 1, 10)}

    def test_same_date_as_created_at_is_not_recorded(self):
        entity = Entity.new("https://x", date(2020, 1, 10))
        entity.update(date(2020, 1, 10))

        assert entity.created_at == date(2020, 1, 10)
        assert entity.updated_at == set()

    def test_repeated_date_recorded_once(self):
        entity = Entity.new("https://x", date(2020, 1, 10))
        entity.update(date(2020, 3, 1))
        entity.update(date(2020, 3, 1))
        assert entity.updated_at == {date(2020, 3, 1)}

    def test_names_and_labels_accumulate(self):
        entity = Entity.new("https://x", date(2020, 1, 10), "Alpha", {"l1"})
        entity.update(date(2020, 1, 11), {"Beta"}, {"l2"})
        entity.update(date(2020, 1, 12), {"Alpha"}, set())

        assert entity.names == {Name("Alpha"), Name("Beta")}
        assert entity.labels == {Label("l1"), Label("l2")}

    def test_update_accepts_single_string(self):
        """Test that a bare string is one name, not a sequence of characters."""
        entity = Entity.new("https://x", date(2020, 1, 10))
        entity.update(date(2020, 1, 11), "Gamma", "news")

        assert entity.names == {Name("Gamma")}
        assert entity.labels == {Label("news")}

    def test_update_returns_self(self):
        entity = Entity.new("https://x", date(2020, 1, 10))
        assert entity.update(date(2020, 1, 11)) is entity

    def test_merge_uses_only_created_at_of_other(self):
        """Test that the merged-in entity's updated_at history is not carried over."""
        entity = Entity.new("https://x", date(2020, 1, 10), "Alpha")
        other = Entity.new("https://x", date(2020, 1, 5), "Beta", {"l1"})
        other.update(date(2020, 6, 1))

        entity.merge(other)

        assert entity.created_at == date(2020, 1, 5)
        assert entity.updated_at == {date(2020, 1, 10)}
        assert entity.names == {Name("Alpha"), Name("Beta")}
        assert entity.labels == {Label("l1")}

    def test_min_over_many_dates(self):
        dates = [date(2021, 5, 3), date(2020, 2, 1), date(2022, 1, 1), date(2019, 12, 31), date(2020, 2, 1)]
        entity = Entity.new("https://x", dates[0])
        for d in dates[1:]:
            entity.merge(Entity.new("https://x", d))

        assert entity.created_at == min(dates)
        assert entity.updated_at == set(dates) - {min(dates)}


class TestEntityToDict:
    def test_to_dict(self):
        entity = Entity.new("https://x", date(2020, 1, 10), "Beta", {"l2", "l1"})
        entity.update(date(2020, 1, 12), {"Alpha"})

        d = entity.to_dict()
        assert d["url"] == "https://x/"
        assert d["created_at"] == "2020-01-10"
        assert d["updated_at"] == ["2020-01-12"]
        assert d["names"] == ["Alpha", "Beta"]
        assert d["labels"] == ["l1", "l2"]


class TestEntityFields:
    """Tests for read-only fields and copies."""

    def test_fields_are_read_only(self):
        entity = Entity.new("https://x", date(2020, 1, 10), "Alpha")

        with pytest.raises(AttributeError):
            entity.url = "https://y/"
        with pytest.raises(AttributeError):
            entity.created_at = date(2020, 1, 1)
        with pytest.raises(AttributeError):
            entity.labels.add(Label("l1"))

    def test_field_views_do_not_alias_state(self):
        entity = Entity.new("https://x", date(2020, 1, 10))
        before = entity.updated_at
        entity.update(date(2020, 1, 12))

        assert before == frozenset()
        assert entity.updated_at == {date(2020, 1, 12)}

    def test_copy_is_independent(self):
        """Test that updates to a copy do not reach the original."""
        entity = Entity.new("https://x", date(2020, 1, 10), "Alpha", {"l1"})
        duplicate = entity.copy()

        assert duplicate == entity
        duplicate.update(date(2019, 1, 1), {"Beta"}, {"l2"})

        assert entity.created_at == date(2020, 1, 10)
        assert entity.updated_at == set()
        assert entity.names == {Name("Alpha")}
        assert entity.labels == {Label("l1")}
        assert duplicate != entity

    def test_merge_with_self_copy_changes_nothing(self):
        entity = Entity.new("https://x", date(2020, 1, 10), "Alpha")
        entity.merge(entity.copy())
        assert entity == Entity.new("https://x", date(2020, 1, 10), "Alpha")

    def test_not_hashable(self):
        with pytest.raises(TypeError):
            hash(Entity.new("https://x", date(2020, 1, 10)))

    def test_merge_keeps_own_url(self):
        """Test that merging another page's entity folds its data but keeps this URL."""
        entity = Entity.new("https://x", date(2020, 1, 10))
        entity.merge(Entity.new("https://y", date(2020, 1, 5), "Other"))

        assert entity.url == "https://x/"
        assert entity.created_at == date(2020, 1, 5)
        assert entity.names == {Name("Other")}
