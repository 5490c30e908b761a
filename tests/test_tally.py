"""Tests for the tally engine."""

from tests.conftest import make_ballot, make_candidates, ranking_ids

from movienight.models import VoterMark
from movienight.tally import TallyEngine


class TestTally:
    def setup_method(self):
        self.engine = TallyEngine()

    def test_basic_example(self):
        """A=2, B=-1, C=1 → A, C, B."""
        candidates = make_candidates("A", "B", "C")
        ballots = [
            make_ballot("v1", {"A": 1, "B": -1}),
            make_ballot("v2", {"A": 1, "C": 1}),
        ]
        result = self.engine.tally(candidates, ballots)
        assert ranking_ids(result) == ["A", "C", "B"]
        assert [s.total for s in result] == [2, 1, -1]

    def test_counts(self):
        candidates = make_candidates("A", "B", "C")
        ballots = [
            make_ballot("v1", {"A": 1, "B": -1}),
            make_ballot("v2", {"A": 1, "C": 1}),
            make_ballot("v3", {"A": -1}),
        ]
        by_id = {s.id: s for s in self.engine.tally(candidates, ballots)}
        assert (by_id["A"].positive_count, by_id["A"].negative_count, by_id["A"].total) == (2, 1, 1)
        assert (by_id["B"].positive_count, by_id["B"].negative_count, by_id["B"].total) == (0, 1, -1)

    def test_breakdown_follows_ballot_order(self):
        candidates = make_candidates("A")
        ballots = [
            make_ballot("v2", {"A": -1}, name="Walt"),
            make_ballot("v1", {"A": 1}, name="Vera"),
        ]
        [scored] = self.engine.tally(candidates, ballots)
        assert scored.voter_breakdown == [VoterMark("Walt", -1), VoterMark("Vera", 1)]

    def test_ties_keep_candidate_order(self):
        candidates = make_candidates("A", "B", "C", "D")
        ballots = [make_ballot("v1", {"D": 1, "B": 1, "C": -1})]
        assert ranking_ids(self.engine.tally(candidates, ballots)) == ["B", "D", "A", "C"]

    def test_no_ballots(self):
        candidates = make_candidates("A", "B")
        result = self.engine.tally(candidates, [])
        assert ranking_ids(result) == ["A", "B"]
        assert all(s.total == 0 and s.voter_breakdown == [] for s in result)

    def test_no_candidates(self):
        assert self.engine.tally([], [make_ballot("v1", {"A": 1})]) == []

    def test_deleted_candidate_ignored(self):
        candidates = make_candidates("A", "B")
        ballots = [make_ballot("v1", {"A": 1, "gone": 1, "B": -1})]
        result = self.engine.tally(candidates, ballots)
        assert ranking_ids(result) == ["A", "B"]
        assert all(m.voter_display_name == "V1" for s in result for m in s.voter_breakdown)
        assert sum(len(s.voter_breakdown) for s in result) == 2

    def test_deterministic(self):
        candidates = make_candidates("A", "B", "C")
        ballots = [
            make_ballot("v1", {"A": 1, "C": 1}),
            make_ballot("v2", {"C": 1, "B": -1}),
            make_ballot("v3", {"B": 1, "A": 1}),
        ]
        first = self.engine.tally(candidates, ballots)
        second = self.engine.tally(candidates, ballots)
        assert [s.to_dict() for s in first] == [s.to_dict() for s in second]

    def test_total_matches_counts(self):
        candidates = make_candidates("A", "B")
        ballots = [
            make_ballot("v1", {"A": 0, "B": 1}),
            make_ballot("v2", {"A": -1, "B": 1}),
            make_ballot("v3", {"A": 1}),
        ]
        for scored in self.engine.tally(candidates, ballots):
            assert scored.total == scored.positive_count - scored.negative_count
            assert len(scored.voter_breakdown) == scored.positive_count + scored.negative_count

    def test_inputs_untouched(self):
        candidates = make_candidates("A", "B")
        ballots = [make_ballot("v1", {"B": 1})]
        self.engine.tally(candidates, ballots)
        assert [c.id for c in candidates] == ["A", "B"]
        assert dict(ballots[0].entries) == {"B": 1}


class TestCalculate:
    def setup_method(self):
        self.engine = TallyEngine()

    def test_placements_with_ties(self):
        candidates = make_candidates("A", "B", "C", "D")
        ballots = [
            make_ballot("v1", {"A": 1, "B": 1, "C": 1}),
            make_ballot("v2", {"A": 1, "B": 1, "D": -1}),
        ]
        result = self.engine.calculate(candidates, ballots)
        assert ranking_ids(result.ranking) == ["A", "B", "C", "D"]
        assert [(p.candidate_id, p.rank, p.tied) for p in result.placements] == [
            ("A", 1, True),
            ("B", 1, True),
            ("C", 3, False),
            ("D", 4, False),
        ]

    def test_details(self):
        candidates = make_candidates("A", "B")
        ballots = [
            make_ballot("v1", {"A": 1, "gone": -1}),
            make_ballot("v2", {}),
        ]
        details = self.engine.calculate(candidates, ballots).details
        assert details["num_candidates"] == 2
        assert details["num_ballots"] == 2
        assert details["num_voters"] == 1
        assert details["votes_counted"] == 1
        assert details["votes_ignored"] == 1
        assert details["max_positive"] == 7
        assert details["max_negative"] == 1
        assert details["totals"] == {"A": 1, "B": 0}

    def test_matches_tally(self):
        candidates = make_candidates("A", "B", "C")
        ballots = [make_ballot("v1", {"C": 1, "A": -1})]
        assert ranking_ids(self.engine.calculate(candidates, ballots).ranking) == \
            ranking_ids(self.engine.tally(candidates, ballots))

    def test_accepts_generator(self):
        candidates = make_candidates("A")
        ballots = (make_ballot(f"v{i}", {"A": 1}) for i in range(3))
        result = self.engine.calculate(candidates, ballots)
        assert result.ranking[0].total == 3
