from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

import typer

from fantasy_draft_tracker.config import create_config, load_draft_settings, load_roster_config
from fantasy_draft_tracker.draft.catalog import PlayerCatalog, load_catalog
from fantasy_draft_tracker.draft.display import (
    console,
    print_board,
    print_error,
    print_pick,
    print_players,
    print_recommendations,
    print_roster,
    print_scarcity,
    print_turn,
    print_warning,
)
from fantasy_draft_tracker.draft.errors import DataUnavailableError, InvalidStateError
from fantasy_draft_tracker.draft.session import DraftSession
from fantasy_draft_tracker.draft.store import SnapshotPersister, SqliteSnapshotStore

if TYPE_CHECKING:
    from fantasy_draft_tracker.config import AppConfig

logger = logging.getLogger(__name__)

draft_app = typer.Typer(help="Live draft tracking and pick recommendations.")


def open_session(cfg: AppConfig | None = None) -> DraftSession:
    """Build a session from config and rehydrate it from the snapshot store.

    Catalog and store failures are reported as warnings; the session still
    opens with whatever data could be read. An unreadable roster config
    exits with status 1.
    """
    if cfg is None:
        cfg = create_config()

    catalog_path = Path(str(cfg["catalog.path"])).expanduser()
    catalog_result = load_catalog(catalog_path)
    if catalog_result.is_ok():
        catalog = catalog_result.unwrap()
    else:
        print_warning(str(catalog_result.unwrap_err()))
        catalog = PlayerCatalog(())

    try:
        roster_config = load_roster_config(cfg)
    except DataUnavailableError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    session = DraftSession(catalog, load_draft_settings(cfg), roster_config)

    store = SqliteSnapshotStore(Path(str(cfg["store.db_path"])).expanduser())
    persister = SnapshotPersister(store, str(cfg["store.session_key"]))
    restored = persister.restore(catalog)
    if restored.is_ok():
        session.restore(restored.unwrap())
    else:
        print_warning(f"Starting a fresh draft: {restored.unwrap_err()}")
    session.subscribe(persister)
    return session


def _report_warnings(session: DraftSession) -> None:
    for warning in session.drain_warnings():
        print_warning(str(warning))


def status() -> None:
    """Show the current pick and who is on the clock."""
    session = open_session()
    print_turn(session.turn(), session.team_names)


def pick(
    player_id: Annotated[str, typer.Argument(help="Catalog id of the drafted player.")],
    team: Annotated[
        int | None, typer.Option("--team", help="Drafting team number (1-based, default: team on the clock).")
    ] = None,
    position: Annotated[
        str | None, typer.Option("--position", help="Roster slot for your own pick (default: best open slot).")
    ] = None,
) -> None:
    """Record a draft pick."""
    session = open_session()
    try:
        result = session.draft_player(player_id, None if team is None else team - 1, position)
    except InvalidStateError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_pick(result, session.team_names)
    _report_warnings(session)
    print_turn(session.turn(), session.team_names)


def undo() -> None:
    """Undo the most recent pick."""
    session = open_session()
    removed = session.undo_last_pick()
    if removed is None:
        console.print("No picks to undo.")
        return
    console.print(f"Removed pick {removed.pick_number}: {removed.player.name}")
    _report_warnings(session)


def recommend(
    top: Annotated[int, typer.Option(min=1, help="Number of recommendations to show.")] = 10,
) -> None:
    """Recommend the best available players for your next pick."""
    session = open_session()
    print_turn(session.turn(), session.team_names)
    print_recommendations(session.recommendations(limit=top))


def available(
    sort: Annotated[str, typer.Option("--sort", help="Sort by 'adp' or 'points'.")] = "adp",
    position: Annotated[str | None, typer.Option("--position", help="Only players eligible here.")] = None,
    top: Annotated[int, typer.Option(min=1, help="Number of players to show.")] = 50,
) -> None:
    """List undrafted players."""
    if sort not in ("adp", "points"):
        print_error(f"Unknown sort key: {sort!r} (expected 'adp' or 'points')")
        raise typer.Exit(code=1)
    session = open_session()
    players = session.available_players(sort_by=sort, position=position)  # type: ignore[arg-type]
    print_players(players[:top])


def scarcity() -> None:
    """Show remaining talent and need by position."""
    session = open_session()
    print_scarcity(session.position_scarcity(), session.need_scores())


def board() -> None:
    """Show the draft board by round."""
    session = open_session()
    print_board(session.draft_board(), session.team_names)


def roster() -> None:
    """Show your roster, open slots and projected stat totals."""
    session = open_session()
    print_roster(session.roster, session.available_slots(), session.stat_totals())


def move(
    player_id: Annotated[str, typer.Argument(help="Rostered player id.")],
    position: Annotated[str, typer.Argument(help="Destination slot (an eligible position or BN).")],
) -> None:
    """Move a rostered player to another slot."""
    session = open_session()
    if session.move_player_position(player_id, position):
        console.print(f"Moved {player_id} to {position}")
        _report_warnings(session)
    else:
        console.print(f"{player_id} was not moved: not rostered or not eligible at {position}")


def settings(
    teams: Annotated[int | None, typer.Option("--teams", help="Number of teams.")] = None,
    rounds: Annotated[int | None, typer.Option("--rounds", help="Number of draft rounds.")] = None,
    position: Annotated[int | None, typer.Option("--position", help="Your draft slot (1-based).")] = None,
    favorite: Annotated[str | None, typer.Option("--favorite", help="Favorite club (mets or padres).")] = None,
) -> None:
    """Show or update league settings."""
    session = open_session()
    changes: dict[str, Any] = {}
    if teams is not None:
        changes["total_teams"] = teams
    if rounds is not None:
        changes["draft_rounds"] = rounds
    if position is not None:
        changes["your_team_position"] = position
    if favorite is not None:
        changes["favorite_team"] = favorite
    current = session.update_settings(changes) if changes else session.settings
    _report_warnings(session)
    console.print(f"Teams: {current.total_teams}")
    console.print(f"Rounds: {current.draft_rounds}")
    console.print(f"Your slot: {current.your_team_position}")
    console.print(f"Favorite: {current.favorite_team.value} ({current.favorite_team.club})")


def favorite(
    team: Annotated[str | None, typer.Argument(help="mets or padres; toggles when omitted.")] = None,
) -> None:
    """Set or toggle the favorite club."""
    session = open_session()
    if team is None:
        session.toggle_favorite_team()
    elif not session.set_favorite_team(team):
        print_error(f"Unsupported favorite team: {team}")
        raise typer.Exit(code=1)
    _report_warnings(session)
    console.print(f"Favorite: {session.settings.favorite_team.value}")


def team_name(
    number: Annotated[int, typer.Argument(help="Team number (1-based).")],
    name: Annotated[str, typer.Argument(help="New team name.")],
) -> None:
    """Rename a team."""
    session = open_session()
    if not session.update_team_name(number - 1, name):
        print_error(f"No team number {number}")
        raise typer.Exit(code=1)
    _report_warnings(session)
    console.print(f"Team {number} is now {name}")


def reset(
    yes: Annotated[bool, typer.Option("--yes", help="Skip the confirmation prompt.")] = False,
) -> None:
    """Clear every pick and your roster."""
    if not yes:
        typer.confirm("Clear the whole draft?", abort=True)
    session = open_session()
    session.reset_draft()
    _report_warnings(session)
    console.print("Draft reset.")


draft_app.command(name="status")(status)
draft_app.command(name="pick")(pick)
draft_app.command(name="undo")(undo)
draft_app.command(name="recommend")(recommend)
draft_app.command(name="available")(available)
draft_app.command(name="scarcity")(scarcity)
draft_app.command(name="board")(board)
draft_app.command(name="roster")(roster)
draft_app.command(name="move")(move)
draft_app.command(name="settings")(settings)
draft_app.command(name="favorite")(favorite)
draft_app.command(name="team-name")(team_name)
draft_app.command(name="reset")(reset)
