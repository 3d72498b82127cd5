"""Rich table output for the draft CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fantasy_draft_tracker.draft.models import (
        Pick,
        Player,
        PositionScarcity,
        Recommendation,
        RosterEntry,
        StatTotals,
        TurnInfo,
    )

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {escape(message)}")


def print_warning(message: str) -> None:
    err_console.print(f"[yellow bold]Warning:[/yellow bold] {escape(message)}")


def print_turn(turn: TurnInfo, team_names: Sequence[str]) -> None:
    team = team_names[turn.team_index] if turn.team_index < len(team_names) else f"Team {turn.team_index + 1}"
    console.print(f"Pick [bold]{turn.current_pick}[/bold] (round {turn.round}, pick {turn.pick_in_round})")
    if turn.is_your_turn:
        console.print(f"  On the clock: [bold green]{team} (you)[/bold green]")
    else:
        console.print(f"  On the clock: {team}")


def print_pick(pick: Pick, team_names: Sequence[str]) -> None:
    team = team_names[pick.team_index] if pick.team_index < len(team_names) else str(pick.team_index + 1)
    console.print(f"[bold green]Pick {pick.pick_number}:[/bold green] {team} selects {pick.player.name}")


def print_recommendations(recommendations: Sequence[Recommendation]) -> None:
    if not recommendations:
        console.print("No players available.")
        return
    table = Table(show_header=True, header_style="bold")
    table.add_column("Rk", justify="right")
    table.add_column("Name")
    table.add_column("Team")
    table.add_column("Pos")
    table.add_column("Need", justify="right")
    table.add_column("Scarcity", justify="right")
    table.add_column("Score", justify="right")

    for i, rec in enumerate(recommendations, start=1):
        name = f"{rec.player.name} *" if rec.is_favorite_team else rec.player.name
        table.add_row(
            str(i),
            name,
            rec.player.team,
            rec.player.position,
            f"{rec.need:.1f}",
            f"{rec.scarcity:.1f}",
            f"{rec.overall_score:.2f}",
        )
    console.print(table)


def print_players(players: Sequence[Player]) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Team")
    table.add_column("Pos")
    table.add_column("ADP", justify="right")
    table.add_column("Tier", justify="right")
    table.add_column("Pts", justify="right")

    for p in players:
        table.add_row(
            p.player_id,
            p.name,
            p.team,
            "/".join(p.positions),
            f"{p.adp:.1f}",
            str(p.tier),
            f"{p.projected_points:.1f}",
        )
    console.print(table)


def print_scarcity(scarcity: PositionScarcity, needs: dict[str, float]) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Pos")
    table.add_column("Avail", justify="right")
    table.add_column("T1", justify="right")
    table.add_column("T2", justify="right")
    table.add_column("T3", justify="right")
    table.add_column("Scarcity", justify="right")
    table.add_column("Need", justify="right")

    for pos in sorted(scarcity.counts):
        need = needs.get(pos)
        table.add_row(
            pos,
            str(scarcity.counts[pos]),
            str(scarcity.tier_counts[1].get(pos, 0)),
            str(scarcity.tier_counts[2].get(pos, 0)),
            str(scarcity.tier_counts[3].get(pos, 0)),
            f"{scarcity.scores[pos]:.0f}",
            "-" if need is None else f"{need:.1f}",
        )
    console.print(table)


def print_board(board: Sequence[Sequence[Pick | None]], team_names: Sequence[str]) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Rd", justify="right")
    for name in team_names:
        table.add_column(name)

    for round_number, row in enumerate(board, start=1):
        if not any(row):
            continue
        table.add_row(str(round_number), *(pick.player.name if pick else "" for pick in row))
    console.print(table)


def print_roster(entries: Sequence[RosterEntry], available: dict[str, int], totals: StatTotals) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Slot")
    table.add_column("Name")
    table.add_column("ID")
    table.add_column("Eligible")

    order = {pos: i for i, pos in enumerate(available)}
    for entry in sorted(entries, key=lambda e: order.get(e.position, len(order))):
        table.add_row(entry.position, entry.player.name, entry.player_id, "/".join(entry.player.positions))
    console.print(table)

    open_slots = ", ".join(f"{pos} {count}" for pos, count in available.items())
    console.print(f"Open slots: {open_slots}")
    console.print(
        f"HR {totals.hr:.0f}  R {totals.r:.0f}  RBI {totals.rbi:.0f}  SB {totals.sb:.0f}  AVG {totals.avg:.3f}  "
        f"W {totals.w:.0f}  SV {totals.sv:.0f}  SO {totals.so:.0f}  ERA {totals.era:.2f}  WHIP {totals.whip:.2f}"
    )
