from datetime import datetime, timezone

import pytest

from app.services.normalizer import (
    FieldMap,
    MatchResult,
    SourceMeta,
    normalize_record,
    normalize_results,
)


SOURCE = SourceMeta(competition_id="4328", competition_name="Premier League", season="2025-2026")


def _raw(**overrides):
    record = {
        "idEvent": "2267073",
        "idLeague": "4328",
        "intRound": "1",
        "dateEvent": "2025-08-16",
        "strTime": "14:00:00",
        "strVenue": "Emirates Stadium",
        "idHomeTeam": "133604",
        "idAwayTeam": "133610",
        "strHomeTeam": "Arsenal",
        "strAwayTeam": "Chelsea",
        "intHomeScore": "2",
        "intAwayScore": "1",
    }
    record.update(overrides)
    return record


class TestNormalizeRecord:
    def test_full_record(self):
        result = normalize_record(_raw(), SOURCE)

        assert result == MatchResult(
            competition_id="4328",
            round=1,
            home_participant_id="133604",
            away_participant_id="133610",
            home_score=2,
            away_score=1,
            home_participant_name="Arsenal",
            away_participant_name="Chelsea",
            external_id="2267073",
            season="2025-2026",
            starts_at_utc=datetime(2025, 8, 16, 14, 0, tzinfo=timezone.utc),
            venue="Emirates Stadium",
            competition_name="Premier League",
        )
        assert result.is_played
        assert result.status == "finished"
        assert result.outcomes == ("win", "loss")

    @pytest.mark.parametrize("home, away", [("", "1"), ("abc", None), (None, None), ("-1", "x")])
    def test_unparseable_scores_become_none(self, home, away):
        result = normalize_record(_raw(intHomeScore=home, intAwayScore=away), SOURCE)

        assert result is not None
        assert result.home_score is None
        assert result.status == "scheduled"
        assert result.outcomes == (None, None)

    def test_zero_score_is_kept(self):
        result = normalize_record(_raw(intHomeScore="0", intAwayScore=0), SOURCE)

        assert result.home_score == 0
        assert result.away_score == 0
        assert result.outcomes == ("draw", "draw")

    def test_garbage_suffix_is_not_a_score(self):
        result = normalize_record(_raw(intHomeScore="3abc"), SOURCE)

        assert result.home_score is None

    @pytest.mark.parametrize("field", ["idEvent", "dateEvent", "idHomeTeam", "idAwayTeam"])
    def test_missing_identifying_field_drops_record(self, field):
        assert normalize_record(_raw(**{field: ""}), SOURCE) is None

    def test_invalid_date_drops_record(self):
        assert normalize_record(_raw(dateEvent="16/08/2025"), SOURCE) is None

    def test_other_league_dropped(self):
        assert normalize_record(_raw(idLeague="4480"), SOURCE) is None

    def test_missing_time_means_midnight_utc(self):
        result = normalize_record(_raw(strTime=None), SOURCE)

        assert result.starts_at_utc == datetime(2025, 8, 16, tzinfo=timezone.utc)

    def test_source_round_overrides_payload_round(self):
        source = SourceMeta(competition_id="4480", season="2025-2026", round=32)

        result = normalize_record(_raw(idLeague="4480", intRound="500"), source)

        assert result.round == 32

    def test_non_numeric_round_kept_as_text(self):
        result = normalize_record(_raw(intRound="Final"), SOURCE)

        assert result.round == "Final"

    def test_custom_field_map(self):
        fields = FieldMap(home_score="home_pts", away_score="away_pts")
        source = SourceMeta(competition_id="4387", season="2025-2026", fields=fields)

        result = normalize_record(
            _raw(idLeague="4387", home_pts="112", away_pts="108"), source
        )

        assert (result.home_score, result.away_score) == (112, 108)


class TestNormalizeResults:
    def test_bad_records_skipped(self):
        raw = [
            _raw(),
            _raw(idEvent=None),
            "not a record",
            None,
            _raw(idEvent="2267074", intHomeScore="", intAwayScore=""),
        ]

        results = normalize_results(raw, SOURCE)

        assert [r.external_id for r in results] == ["2267073", "2267074"]
        assert results[1].is_played is False

    def test_accepts_generators(self):
        results = normalize_results((r for r in [_raw()]), SOURCE)

        assert len(results) == 1

    def test_empty_input(self):
        assert normalize_results([], SOURCE) == []

    @pytest.mark.parametrize("raw", [None, 42, "events", b"events", {"events": []}])
    def test_structurally_invalid_input_raises(self, raw):
        with pytest.raises(TypeError):
            normalize_results(raw, SOURCE)
