"""Tests for the fuzzy relevance filter."""

from __future__ import annotations

from core.models import ModelObject, Team
from core.search import SEARCH_THRESHOLD, fuzzy_search, match_distance


def _objects(*names: str) -> list[ModelObject]:
    return [ModelObject(id=f"id-{i}", name=name) for i, name in enumerate(names)]


class TestFuzzySearch:
    def test_empty_query_is_identity(self):
        records = _objects("Zeta", "Alpha", "Mid")
        assert fuzzy_search(records, "", ["name"]) == records
        assert fuzzy_search(records, None, ["name"]) == records

    def test_identity_returns_a_new_list(self):
        records = _objects("Alpha")
        result = fuzzy_search(records, "", ["name"])
        assert result == records
        assert result is not records

    def test_non_matching_query_returns_nothing(self):
        records = _objects("Payments Service", "Order Store", "Customer")
        assert fuzzy_search(records, "zzzzqqqq", ["name", "description"]) == []

    def test_best_match_comes_first(self):
        typo, exact = _objects("Paymnt Processor", "Payment Gateway")
        assert fuzzy_search([typo, exact], "payment", ["name"]) == [exact, typo]

    def test_matches_on_any_named_field(self):
        ledger = ModelObject(id="1", name="Ledger", description="Handles payment reconciliation")
        other = ModelObject(id="2", name="Website", description="Marketing pages")
        assert fuzzy_search([other, ledger], "payment", ["name", "description"]) == [ledger]

    def test_ties_keep_input_order(self):
        first, second = _objects("Payment API", "Payment Worker")
        assert fuzzy_search([first, second], "payment", ["name"]) == [first, second]

    def test_blank_query_is_identity(self):
        teams = [Team(id="t1", name="Core"), Team(id="t2", name="Platform")]
        assert fuzzy_search(teams, "   ", ["name"]) == teams

    def test_short_field_inside_query_is_not_a_match(self):
        assert fuzzy_search([Team(id="t1", name="UI")], "build pipeline", ["name"]) == []

    def test_short_names_do_not_outrank_real_matches(self):
        short, real = Team(id="t1", name="UI"), Team(id="t2", name="Build Pipeline Team")
        assert fuzzy_search([short, real], "build pipeline", ["name"]) == [real]

    def test_missing_fields_count_as_empty_text(self):
        teams = [Team(id="t1", name="Automations"), Team(id="t2", name="")]
        assert fuzzy_search(teams, "automation", ["name", "no_such_field"]) == [teams[0]]


class TestMatchDistance:
    def test_exact_match_is_zero(self):
        assert match_distance(ModelObject(name="Billing"), "billing", ["name"]) == 0.0

    def test_empty_record_is_maximally_distant(self):
        assert match_distance(ModelObject(), "billing", ["name", "description"]) == 1.0

    def test_field_shorter_than_query_is_compared_whole(self):
        assert match_distance(Team(name="UI"), "build pipeline", ["name"]) > SEARCH_THRESHOLD

    def test_threshold_is_fixed(self):
        assert SEARCH_THRESHOLD == 0.3
