from movie_pathways.planner.beam import beam_search
from movie_pathways.planner.feasibility import build_feasibility_graph


def _search(shows, points=None, beam_width=10, leeway=0, travel=0):
    graph = build_feasibility_graph(shows, leeway, travel)
    points = points if points is not None else [0] * len(shows)
    return list(beam_search(shows, graph, points, beam_width))


def test_emits_every_layer(make_show):
    shows = [
        make_show("a", "10:00", 60),
        make_show("b", "11:00", 60),
        make_show("c", "12:00", 60),
    ]

    chains = _search(shows)

    assert [c.indices() for c in chains] == [
        [0],
        [1],
        [2],
        [0, 1],
        [0, 2],
        [1, 2],
        [0, 1, 2],
    ]


def test_chain_accumulates_score_and_travel(make_show):
    shows = [
        make_show("a", "10:00", 60, theater="T1"),
        make_show("b", "11:30", 60, theater="T2"),
    ]

    chains = _search(shows, points=[5, 7], travel=20)

    longest = chains[-1]
    assert longest.indices() == [0, 1]
    assert longest.length == 2
    assert longest.preference_score == 12
    assert longest.total_travel_mins == 20


def test_same_movie_is_never_chained(make_show):
    shows = [
        make_show("a", "10:00", 60, movie="m1"),
        make_show("b", "13:00", 60, movie="m1"),
    ]

    chains = _search(shows)

    assert all(c.length == 1 for c in chains)


def test_same_showtime_id_is_never_chained(make_show):
    shows = [
        make_show("dup", "10:00", 60, movie="m1"),
        make_show("dup", "13:00", 60, movie="m2"),
    ]

    chains = _search(shows)

    assert all(c.length == 1 for c in chains)


def test_beam_keeps_best_scores(make_show):
    shows = [
        make_show("a", "10:00", 60),
        make_show("b", "11:00", 60),
        make_show("c", "11:00", 60),
    ]

    chains = _search(shows, points=[0, 1, 9], beam_width=1)

    # Layer two only keeps a -> c.
    assert [c.indices() for c in chains if c.length == 2] == [[0, 2]]


def test_ties_prefer_earlier_finish(make_show):
    shows = [
        make_show("a", "10:00", 60),
        make_show("b", "11:00", 120),
        make_show("c", "11:00", 60),
    ]

    chains = _search(shows, beam_width=1)

    assert [c.indices() for c in chains if c.length == 2] == [[0, 2]]


def test_ties_prefer_less_travel(make_show):
    shows = [
        make_show("a", "10:00", 60, theater="T2"),
        make_show("b", "10:00", 60, theater="T1"),
        make_show("c", "11:30", 60, theater="T1"),
    ]

    chains = _search(shows, beam_width=1, travel=20)

    # a -> c and b -> c tie on score, length and finish.
    assert [c.indices() for c in chains if c.length == 2] == [[1, 2]]
