import pytest

from segment_league.core.errors import NotFound
from segment_league.models import Week
from segment_league.services.standings import get_season_standings, standings_to_dict
from segment_league.services.storage import delete_participant_data, delete_participant_week

from factories import DAY, add_participants, add_season, add_segment, add_week, record_result


@pytest.fixture
def league(session):
    season = add_season(session)
    flat = add_segment(session, "seg-flat", grade=1.0)
    climb = add_segment(session, "seg-climb", grade=6.5, name="Mill Hill")
    week1 = add_week(session, season, flat, name="Week 1", start_at=season.start_at)
    week2 = add_week(session, season, climb, name="Week 2", start_at=season.start_at + 7 * DAY)
    add_participants(session, "ann", "bob", "cat")

    record_result(session, "ann", week1, [1000])
    record_result(session, "bob", week1, [1100])
    record_result(session, "cat", week1, [1200])
    record_result(session, "bob", week2, [700])
    record_result(session, "ann", week2, [800])
    return season, week1, week2


def _table(standings):
    return [
        (entry.rank, entry.participant_id, entry.total_points, entry.weeks_completed)
        for entry in standings.entries
    ]


def test_points_are_summed_across_weeks(session, league):
    season, _, _ = league

    standings = get_season_standings(session, season.id)

    # Week 1: ann 3, bob 2, cat 1. Week 2: bob 2, ann 1.
    assert _table(standings) == [
        (1, "ann", 4, 2),
        (2, "bob", 4, 2),
        (3, "cat", 1, 1),
    ]
    ann, bob, _ = standings.entries
    assert (ann.flat_wins, ann.climb_wins) == (1, 0)
    assert (bob.flat_wins, bob.climb_wins) == (0, 1)
    assert standings.skipped_weeks == []


def test_full_ties_fall_back_to_participant_id(session, league):
    season, _, week2 = league
    # A week-2 win for cat brings everyone to 4 points over two weeks.
    record_result(session, "cat", week2, [600])

    table = _table(get_season_standings(session, season.id))

    assert [row[1] for row in table] == ["ann", "bob", "cat"]
    assert [row[2] for row in table] == [4, 4, 4]
    assert [row[0] for row in table] == [1, 2, 3]


def test_weeks_completed_breaks_point_ties(session):
    season = add_season(session)
    segment = add_segment(session)
    week1 = add_week(session, season, segment, name="Week 1", start_at=season.start_at)
    week2 = add_week(session, season, segment, name="Week 2", start_at=season.start_at + 7 * DAY)
    add_participants(session, "ann", "bob")
    record_result(session, "ann", week1, [1000])
    record_result(session, "bob", week1, [1100])
    record_result(session, "bob", week2, [1050])

    # ann: 2 points from one week. bob: 1 + 1 points from two weeks.
    assert _table(get_season_standings(session, season.id)) == [
        (1, "bob", 2, 2),
        (2, "ann", 2, 1),
    ]


def test_recomputation_is_stable(session, league):
    season, _, _ = league
    first = get_season_standings(session, season.id)
    second = get_season_standings(session, season.id)
    assert first.entries == second.entries


def test_multiplier_change_shows_on_next_read(session, league):
    season, week1, _ = league
    before = {entry.participant_id: entry.total_points for entry in get_season_standings(session, season.id).entries}

    stored = session.get(Week, week1.id)
    stored.multiplier = 2
    session.add(stored)
    session.commit()

    after = {entry.participant_id: entry.total_points for entry in get_season_standings(session, season.id).entries}
    # Week 1 points double: ann 3 -> 6, bob 2 -> 4, cat 1 -> 2.
    assert after == {"ann": before["ann"] + 3, "bob": before["bob"] + 2, "cat": before["cat"] + 1}


def test_deleting_a_participant_rescores_the_rest(session, league):
    season, _, _ = league

    delete_participant_data(session, "ann")

    # Week 1: bob 2, cat 1. Week 2: bob alone, 1.
    assert _table(get_season_standings(session, season.id)) == [
        (1, "bob", 3, 2),
        (2, "cat", 1, 1),
    ]


def test_deleting_one_week_only_affects_that_week(session, league):
    season, _, week2 = league

    delete_participant_week(session, "bob", week2.id)

    table = _table(get_season_standings(session, season.id))
    assert table[0][1:] == ("ann", 4, 2)
    assert ("bob", 2, 1) in [row[1:] for row in table]


def test_broken_week_is_skipped_not_fatal(session, league):
    season, _, _ = league
    flat = session.get(Week, league[1].id)
    broken = Week(
        season_id=season.id,
        name="Broken",
        segment_id=flat.segment_id,
        required_laps=0,
        start_at=season.start_at + 14 * DAY,
        end_at=season.start_at + 21 * DAY,
    )
    session.add(broken)
    session.commit()
    session.refresh(broken)

    standings = get_season_standings(session, season.id)

    assert [entry.participant_id for entry in standings.entries] == ["ann", "bob", "cat"]
    assert [skipped.week_id for skipped in standings.skipped_weeks] == [broken.id]
    payload = standings_to_dict(standings)
    assert payload["skipped_weeks"][0]["week_id"] == broken.id


def test_season_without_weeks_has_empty_standings(session):
    season = add_season(session, name="Empty")
    standings = get_season_standings(session, season.id)
    assert standings.entries == []
    assert standings_to_dict(standings)["standings"] == []


def test_unknown_season_raises_not_found(session):
    with pytest.raises(NotFound):
        get_season_standings(session, 404)
