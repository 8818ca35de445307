"""Tests for the filter encoder."""

from __future__ import annotations

from urllib.parse import parse_qsl

import pytest

from core.filters import UNSET, build_query_string, encode_filter, with_query


class TestEncodeFilter:
    def test_scalars_one_pair_per_set_key(self):
        filters = {"name": "Payments", "external": True, "status": "live", "domainId": UNSET}
        pairs = encode_filter(filters)
        assert len(pairs) == 3
        assert pairs == [
            ("filter[name]", "Payments"),
            ("filter[external]", "true"),
            ("filter[status]", "live"),
        ]

    def test_list_emits_one_pair_per_item_in_order(self):
        pairs = encode_filter({"status": ["live", "future", "deprecated"]})
        assert pairs == [
            ("filter[status][]", "live"),
            ("filter[status][]", "future"),
            ("filter[status][]", "deprecated"),
        ]

    def test_explicit_null_is_sent_as_string(self):
        assert encode_filter({"parentId": None}) == [("filter[parentId]", "null")]

    def test_labels_map_to_sub_keys(self):
        pairs = encode_filter({"labels": {"tier": "gold", "owner": "core"}})
        assert pairs == [
            ("filter[labels][tier]", "gold"),
            ("filter[labels][owner]", "core"),
        ]

    def test_booleans_use_lowercase_names(self):
        assert encode_filter({"external": False}) == [("filter[external]", "false")]

    def test_unset_keys_are_skipped(self):
        assert encode_filter({"name": UNSET, "type": UNSET}) == []

    def test_empty_filters(self):
        assert encode_filter({}) == []
        assert encode_filter(None) == []

    def test_mapping_outside_labels_is_rejected(self):
        with pytest.raises(TypeError):
            encode_filter({"type": {"a": "b"}})

    def test_encoding_is_idempotent(self):
        filters = {"type": ["app", "store"], "parentId": None, "labels": {"k": "v"}}
        assert encode_filter(filters) == encode_filter(filters)

    def test_system_and_actor_scenario(self):
        pairs = encode_filter({"type": ["system", "actor"], "external": False})
        assert pairs == [
            ("filter[type][]", "system"),
            ("filter[type][]", "actor"),
            ("filter[external]", "false"),
        ]


class TestQueryString:
    def test_empty_filters_give_empty_string(self):
        assert build_query_string({}) == ""

    def test_round_trips_through_url_decoding(self):
        query = build_query_string({"type": ["system", "actor"], "external": False})
        assert parse_qsl(query) == [
            ("filter[type][]", "system"),
            ("filter[type][]", "actor"),
            ("filter[external]", "false"),
        ]

    def test_with_query_leaves_bare_path_when_empty(self):
        assert with_query("/catalog/technologies", {}) == "/catalog/technologies"
        assert with_query("/catalog/technologies", {"provider": UNSET}) == "/catalog/technologies"

    def test_with_query_appends_encoded_filters(self):
        path = with_query("/catalog/technologies", {"provider": "aws"})
        assert path == "/catalog/technologies?filter%5Bprovider%5D=aws"
