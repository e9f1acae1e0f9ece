import pytest
from datetime import date

from compliance.staffing import suggest_optimal_staffing
from roster.types import QualificationType

DIPLOMA = QualificationType.DIPLOMA_ECE
AS_OF = date(2024, 1, 15)


class TestSuggestOptimalStaffing:

    def test_qualified_first_then_cheapest(self, babies_room, babies_rule, make_worker):
        workers = [
            make_worker("cheap", hourly_rate=25.0),
            make_worker("dip-expensive", qualifications=[DIPLOMA], hourly_rate=40.0),
            make_worker("dip-cheap", qualifications=[DIPLOMA], hourly_rate=32.0),
            make_worker("mid", hourly_rate=28.0),
        ]

        rec = suggest_optimal_staffing(babies_room, babies_rule, 9, workers, AS_OF)

        assert rec.minimum_required == 3
        assert rec.qualified_required == 2
        assert [w.id for w in rec.recommended] == ["dip-cheap", "dip-expensive", "cheap"]
        assert rec.message == "3 educator(s) needed for 9 children (1:4)"

    def test_too_few_staff_warns(self, babies_room, babies_rule, make_worker):
        workers = [make_worker("only", qualifications=[DIPLOMA])]

        rec = suggest_optimal_staffing(babies_room, babies_rule, 9, workers, AS_OF)

        assert len(rec.recommended) == 1
        assert "Warning: only 1 staff available." in rec.message
        assert "Warning: 1 more qualified staff needed." in rec.message

    def test_expired_qualification_sorted_as_unqualified(self, babies_room, babies_rule, make_worker):
        workers = [
            make_worker("lapsed", qualifications=[DIPLOMA], expiry_date=date(2023, 1, 1), hourly_rate=20.0),
            make_worker("current", qualifications=[DIPLOMA], hourly_rate=35.0),
        ]

        rec = suggest_optimal_staffing(babies_room, babies_rule, 4, workers, AS_OF)

        assert [w.id for w in rec.recommended] == ["current"]

    def test_zero_children_recommends_nobody(self, babies_room, babies_rule, make_worker):
        rec = suggest_optimal_staffing(babies_room, babies_rule, 0, [make_worker("a")], AS_OF)

        assert rec.recommended == []
        assert rec.minimum_required == 0
        assert rec.message == "0 educator(s) needed for 0 children (1:4)"

    def test_no_rule_counts_everyone_qualified(self, babies_room, make_worker):
        workers = [make_worker("b", hourly_rate=30.0), make_worker("a", hourly_rate=20.0)]

        rec = suggest_optimal_staffing(babies_room, None, 4, workers, AS_OF)

        assert [w.id for w in rec.recommended] == ["a"]
        assert "Warning" not in rec.message

    def test_to_dict_lists_workers(self, babies_room, babies_rule, make_worker):
        rec = suggest_optimal_staffing(
            babies_room, babies_rule, 4, [make_worker("a", qualifications=[DIPLOMA])], AS_OF
        )
        data = rec.to_dict()
        assert data["recommended"] == [{"worker_id": "a", "name": "A", "hourly_rate": 30.0}]
