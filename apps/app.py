# -*- coding: utf-8 -*-
"""Gradio front-end for Movie Pathways.

Run with ``python apps/app.py``. Every edit goes through
``PathwaysService`` and is saved to the configured state file; the
results panel is re-planned after each change.
"""

from typing import Any, List, Optional, Tuple

import gradio as gr

from movie_pathways.container import get_container
from movie_pathways.domain.errors import PathwaysError
from movie_pathways.observability import configure_logging
from movie_pathways.planner.schedule import parse_local_datetime
from movie_pathways.services import PathwaysService

configure_logging()
SERVICE: PathwaysService = get_container().resolve(PathwaysService)

MOVIE_HEADERS = ["Title", "Runtime (mins)", "Rank (1=best)"]
THEATER_HEADERS = ["Name"]
SHOWTIME_HEADERS = ["Movie", "Theater", "Start"]


def _movie_rows() -> List[List[Any]]:
    return [
        [m.title, m.runtime_mins, m.rank if m.rank is not None else ""]
        for m in SERVICE.state.movies
    ]


def _theater_rows() -> List[List[Any]]:
    return [[t.name] for t in SERVICE.state.theaters]


def _showtime_rows() -> List[List[Any]]:
    state = SERVICE.state
    titles = {m.id: m.title for m in state.movies}
    names = {t.id: t.name for t in state.theaters}
    rows = [
        [titles.get(s.movie_id, "?"), names.get(s.theater_id, "?"), str(s.start_local)]
        for s in state.showtimes
    ]
    return sorted(rows, key=lambda row: row[2])


def _showtime_label(showtime_id: str) -> str:
    state = SERVICE.state
    titles = {m.id: m.title for m in state.movies}
    names = {t.id: t.name for t in state.theaters}
    for s in state.showtimes:
        if s.id == showtime_id:
            return f"{titles.get(s.movie_id, '?')} @ {names.get(s.theater_id, '?')} - {s.start_local}"
    return showtime_id


def _refresh(status: str = "") -> Tuple[Any, ...]:
    state = SERVICE.state
    movie_choices = [(m.title, m.id) for m in state.movies]
    theater_choices = [(t.name, t.id) for t in state.theaters]
    showtime_choices = [(_showtime_label(s.id), s.id) for s in state.showtimes]
    return (
        status,
        _movie_rows(),
        _theater_rows(),
        _showtime_rows(),
        gr.update(choices=movie_choices, value=None),
        gr.update(choices=theater_choices, value=None),
        gr.update(choices=showtime_choices, value=None),
        SERVICE.describe(),
    )


def _run(action, *args: Any, ok: str = "") -> Tuple[Any, ...]:
    try:
        action(*args)
    except PathwaysError as e:
        return _refresh(f"❌ {e}")
    return _refresh(ok)


def ui_update_settings(leeway: float, travel: float, max_results: float, beam: float):
    return _run(
        lambda: SERVICE.update_settings(
            trailer_leeway_mins=leeway,
            travel_mins=travel,
            max_results=max_results,
            beam_width=beam,
        ),
        ok="✅ Settings saved",
    )


def ui_add_movie(title: str, runtime: float):
    return _run(SERVICE.add_movie, title, runtime, ok=f"✅ Added movie {title.strip()}")


def ui_set_rank(movie_id: Optional[str], rank: Optional[float]):
    if not movie_id:
        return _refresh("❌ Pick a movie first")
    if rank is None or rank == 0:
        return _run(SERVICE.clear_movie_rank, movie_id, ok="✅ Rank cleared")
    return _run(lambda: SERVICE.update_movie(movie_id, rank=rank), ok="✅ Rank saved")


def ui_update_movie(movie_id: Optional[str], title: str, runtime: Optional[float]):
    if not movie_id:
        return _refresh("❌ Pick a movie first")
    return _run(
        lambda: SERVICE.update_movie(
            movie_id,
            title=title if title and title.strip() else None,
            runtime_mins=runtime or None,
        ),
        ok="✅ Movie updated",
    )


def ui_delete_movie(movie_id: Optional[str]):
    if not movie_id:
        return _refresh("❌ Pick a movie first")
    return _run(SERVICE.delete_movie, movie_id, ok="✅ Movie and its showtimes deleted")


def ui_add_theater(name: str):
    return _run(SERVICE.add_theater, name, ok=f"✅ Added theater {name.strip()}")


def ui_rename_theater(theater_id: Optional[str], name: str):
    if not theater_id:
        return _refresh("❌ Pick a theater first")
    return _run(
        lambda: SERVICE.update_theater(theater_id, name=name), ok="✅ Theater renamed"
    )


def ui_delete_theater(theater_id: Optional[str]):
    if not theater_id:
        return _refresh("❌ Pick a theater first")
    return _run(SERVICE.delete_theater, theater_id, ok="✅ Theater and its showtimes deleted")


def ui_add_showtime(movie_id: Optional[str], theater_id: Optional[str], start: str):
    if not movie_id or not theater_id or not start:
        return _refresh("❌ Pick a movie, a theater and a start time")
    if parse_local_datetime(start) is None:
        return _refresh("❌ Start must look like 2024-05-01T19:30")
    return _run(SERVICE.add_showtime, movie_id, theater_id, start, ok="✅ Showtime added")


def ui_update_showtime(
    showtime_id: Optional[str],
    movie_id: Optional[str],
    theater_id: Optional[str],
    start: str,
):
    if not showtime_id:
        return _refresh("❌ Pick a showtime first")
    if start and parse_local_datetime(start) is None:
        return _refresh("❌ Start must look like 2024-05-01T19:30")
    return _run(
        lambda: SERVICE.update_showtime(
            showtime_id,
            movie_id=movie_id or None,
            theater_id=theater_id or None,
            start_local=start or None,
        ),
        ok="✅ Showtime updated",
    )


def ui_delete_showtime(showtime_id: Optional[str]):
    if not showtime_id:
        return _refresh("❌ Pick a showtime first")
    return _run(SERVICE.delete_showtime, showtime_id, ok="✅ Showtime deleted")


def ui_reset():
    return _run(SERVICE.reset, ok="🧹 All data reset")


# ============================ UI ============================
with gr.Blocks(title="Movie Pathways") as app:
    gr.Markdown("# 🎬 Movie Pathways")
    status = gr.Markdown()

    settings = SERVICE.state.settings
    with gr.Tab("Settings"):
        with gr.Row():
            leeway_in = gr.Number(
                value=settings.trailer_leeway_mins,
                label="Trailer leeway X (mins)",
                info="You can arrive up to X minutes after posted start.",
            )
            travel_in = gr.Number(
                value=settings.travel_mins,
                label="Travel time T (mins)",
                info="Applies only when switching theaters.",
            )
            max_results_in = gr.Number(value=settings.max_results, label="Max results")
            beam_in = gr.Number(
                value=settings.beam_width,
                label="Beam width (advanced)",
                info="Bigger = more thorough, slower.",
            )
        with gr.Row():
            btn_settings = gr.Button("💾 Save settings")
            btn_reset = gr.Button("🧹 Reset all data", variant="stop")

    with gr.Tab("Movies"):
        with gr.Row():
            title_in = gr.Textbox(label="Title", placeholder="e.g., Howl's Moving Castle")
            runtime_in = gr.Number(value=120, label="Runtime (mins)")
            btn_add_movie = gr.Button("➕ Add")
        movies_df = gr.Dataframe(headers=MOVIE_HEADERS, value=_movie_rows(), interactive=False)
        with gr.Row():
            movie_dd = gr.Dropdown(choices=[], label="Movie")
            rank_in = gr.Number(value=None, label="Rank (empty or 0 = unranked)")
            btn_rank = gr.Button("⭐ Set rank")
            btn_del_movie = gr.Button("🗑️ Delete movie")
        with gr.Row():
            edit_title_in = gr.Textbox(label="New title", placeholder="empty = unchanged")
            edit_runtime_in = gr.Number(value=None, label="New runtime (mins)")
            btn_update_movie = gr.Button("✏️ Update movie")

    with gr.Tab("Theaters"):
        with gr.Row():
            name_in = gr.Textbox(label="Name", placeholder="e.g., AMC Lincoln Square 13")
            btn_add_theater = gr.Button("➕ Add")
        theaters_df = gr.Dataframe(headers=THEATER_HEADERS, value=_theater_rows(), interactive=False)
        with gr.Row():
            theater_dd = gr.Dropdown(choices=[], label="Theater")
            btn_del_theater = gr.Button("🗑️ Delete theater")
        with gr.Row():
            rename_in = gr.Textbox(label="New name")
            btn_rename_theater = gr.Button("✏️ Rename theater")

    with gr.Tab("Showtimes"):
        with gr.Row():
            st_movie_dd = gr.Dropdown(
                choices=[(m.title, m.id) for m in SERVICE.state.movies], label="Movie"
            )
            st_theater_dd = gr.Dropdown(
                choices=[(t.name, t.id) for t in SERVICE.state.theaters], label="Theater"
            )
            start_in = gr.Textbox(label="Start (local)", placeholder="2024-05-01T19:30")
            btn_add_showtime = gr.Button("➕ Add")
        showtimes_df = gr.Dataframe(
            headers=SHOWTIME_HEADERS, value=_showtime_rows(), interactive=False
        )
        with gr.Row():
            showtime_dd = gr.Dropdown(choices=[], label="Showtime")
            btn_del_showtime = gr.Button("🗑️ Delete showtime")
        gr.Markdown(
            "To edit a showtime, pick it above, then set any of movie, theater or start"
            " in the add row and press Update. Empty fields stay unchanged."
        )
        btn_update_showtime = gr.Button("✏️ Update showtime")

    with gr.Tab("Results"):
        results_out = gr.Textbox(value=SERVICE.describe(), label="Itineraries", lines=24)

    outputs = [
        status,
        movies_df,
        theaters_df,
        showtimes_df,
        movie_dd,
        theater_dd,
        showtime_dd,
        results_out,
    ]

    def _with_showtime_pickers(result: Tuple[Any, ...]) -> Tuple[Any, ...]:
        state = SERVICE.state
        return result + (
            gr.update(choices=[(m.title, m.id) for m in state.movies]),
            gr.update(choices=[(t.name, t.id) for t in state.theaters]),
        )

    all_outputs = outputs + [st_movie_dd, st_theater_dd]

    btn_settings.click(
        lambda *a: _with_showtime_pickers(ui_update_settings(*a)),
        inputs=[leeway_in, travel_in, max_results_in, beam_in],
        outputs=all_outputs,
    )
    btn_reset.click(lambda: _with_showtime_pickers(ui_reset()), outputs=all_outputs)
    btn_add_movie.click(
        lambda *a: _with_showtime_pickers(ui_add_movie(*a)),
        inputs=[title_in, runtime_in],
        outputs=all_outputs,
    )
    btn_rank.click(
        lambda *a: _with_showtime_pickers(ui_set_rank(*a)),
        inputs=[movie_dd, rank_in],
        outputs=all_outputs,
    )
    btn_update_movie.click(
        lambda *a: _with_showtime_pickers(ui_update_movie(*a)),
        inputs=[movie_dd, edit_title_in, edit_runtime_in],
        outputs=all_outputs,
    )
    btn_del_movie.click(
        lambda *a: _with_showtime_pickers(ui_delete_movie(*a)),
        inputs=[movie_dd],
        outputs=all_outputs,
    )
    btn_add_theater.click(
        lambda *a: _with_showtime_pickers(ui_add_theater(*a)),
        inputs=[name_in],
        outputs=all_outputs,
    )
    btn_rename_theater.click(
        lambda *a: _with_showtime_pickers(ui_rename_theater(*a)),
        inputs=[theater_dd, rename_in],
        outputs=all_outputs,
    )
    btn_del_theater.click(
        lambda *a: _with_showtime_pickers(ui_delete_theater(*a)),
        inputs=[theater_dd],
        outputs=all_outputs,
    )
    btn_add_showtime.click(
        lambda *a: _with_showtime_pickers(ui_add_showtime(*a)),
        inputs=[st_movie_dd, st_theater_dd, start_in],
        outputs=all_outputs,
    )
    btn_update_showtime.click(
        lambda *a: _with_showtime_pickers(ui_update_showtime(*a)),
        inputs=[showtime_dd, st_movie_dd, st_theater_dd, start_in],
        outputs=all_outputs,
    )
    btn_del_showtime.click(
        lambda *a: _with_showtime_pickers(ui_delete_showtime(*a)),
        inputs=[showtime_dd],
        outputs=all_outputs,
    )

    app.load(lambda: _with_showtime_pickers(_refresh()), outputs=all_outputs)


if __name__ == "__main__":
    app.launch()
