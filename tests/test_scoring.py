"""Tests for scoring.py — candidate fairness scores."""

import math

from fairsched.scoring import (
    FIELD_WEIGHT, HOME_AWAY_WEIGHT, ILLEGAL, REST_WEIGHT,
    field_imbalance, home_away_imbalance, rest_spread, score_candidate,
)
from fairsched.tracker import ScheduleTracker


def _tracker(min_rest=0, fields=1, teams=("A", "B", "C", "D")):
    return ScheduleTracker(list(teams), fields, min_rest)


class TestIllegal:
    def test_illegal_is_infinity(self):
        assert ILLEGAL == math.inf

    def test_blocked_team_is_illegal(self):
        tr = _tracker(min_rest=1)
        tr.record_match("A", 0, 1, was_home=True)
        tr.record_match("B", 0, 1, was_home=False)
        assert score_candidate("A", "C", 1, 1, tr) == ILLEGAL
        assert score_candidate("C", "A", 1, 1, tr) == ILLEGAL
        assert score_candidate("C", "D", 1, 1, tr) < ILLEGAL

    def test_same_slot_is_illegal(self):
        tr = _tracker(min_rest=0)
        tr.record_match("A", 0, 1, was_home=True)
        assert score_candidate("A", "C", 0, 1, tr) == ILLEGAL


class TestTerms:
    def test_fresh_tracker_score(self):
        tr = _tracker(fields=1)
        # No rests yet, one field, team A home and B away each off by one
        assert score_candidate("A", "B", 0, 1, tr) == HOME_AWAY_WEIGHT * 2

    def test_rest_spread(self):
        tr = _tracker()
        assert rest_spread(tr) == 0.0
        for slot in (0, 2):
            tr.record_match("A", slot, 1, was_home=True)
        for slot in (1, 6):
            tr.record_match("B", slot, 1, was_home=False)
        assert rest_spread(tr) == 3.0
        # A at slot 8 -> rests 2, 6 -> avg 4; B stays at 5
        assert rest_spread(tr, {"A": 8}) == 1.0

    def test_rest_term_dominates(self):
        tr = _tracker(fields=2, teams=("A", "B", "C", "D"))
        for slot in (0, 2):
            tr.record_match("A", slot, 1, was_home=True)
            tr.record_match("B", slot, 1, was_home=False)
        tr.record_match("C", 0, 2, was_home=True)
        tr.record_match("D", 0, 2, was_home=False)
        # C and D playing in slot 3 would average 3 against 2 for A and B
        # A and B playing in slot 4 keep everyone at an average of 2
        close = score_candidate("A", "B", 4, 2, tr)
        far = score_candidate("C", "D", 3, 1, tr)
        assert far - close >= REST_WEIGHT / 2

    def test_field_imbalance(self):
        tr = _tracker(fields=2)
        tr.record_match("A", 0, 1, was_home=True)
        # Another match on field 1 -> [2, 0], variance 1
        assert field_imbalance(tr, "A", 1) == 1.0
        # Field 2 instead -> [1, 1], variance 0
        assert field_imbalance(tr, "A", 2) == 0.0

    def test_field_term_prefers_less_used_field(self):
        tr = _tracker(fields=2)
        tr.record_match("A", 0, 1, was_home=True)
        tr.record_match("B", 0, 1, was_home=False)
        same = score_candidate("A", "B", 1, 1, tr)
        other = score_candidate("A", "B", 1, 2, tr)
        assert same - other == FIELD_WEIGHT * 2

    def test_home_away_imbalance(self):
        tr = _tracker()
        tr.record_match("A", 0, 1, was_home=True)
        tr.record_match("B", 0, 1, was_home=False)
        # A home again -> 2-0, B away again -> 0-2
        assert home_away_imbalance(tr, "A", "B") == 4
        # Reversed orientation evens both out
        assert home_away_imbalance(tr, "B", "A") == 0
