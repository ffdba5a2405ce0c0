"""Plain-text rendering of summaries for the console."""
from __future__ import annotations

from datetime import datetime
from typing import List

from domain.entities import CohortStats, EncounterSummary, LastMatchRoster, LobbyAnalysis
from domain.enums import queue_name

_GREEN = "\033[92m"
_RED = "\033[91m"
_YELLOW = "\033[93m"
_CYAN = "\033[96m"
_DIM = "\033[90m"
_RESET = "\033[0m"


def _ts(ms: int | None) -> str:
    if not ms:
        return "-"
    return datetime.fromtimestamp(ms / 1000).strftime("%d/%m/%Y %H:%M")


def _form(form: List[str]) -> str:
    return " ".join(f"{_GREEN}W{_RESET}" if o == "W" else f"{_RED}L{_RESET}" for o in form) or "-"


def cohort_line(label: str, cohort: CohortStats) -> str:
    if cohort.is_empty:
        return f"    {label:<6} -"
    champs = ", ".join(f"{c.champion} x{c.games}" for c in cohort.top_champions)
    return (
        f"    {label:<6} {cohort.wins}W {cohort.losses}L ({cohort.win_rate}%)  "
        f"KDA {cohort.avg_kills}/{cohort.avg_deaths}/{cohort.avg_assists} ({cohort.avg_kda})  "
        f"form {_form(cohort.recent_form)}  {_DIM}{champs}{_RESET}"
    )


def summary_lines(summary: EncounterSummary) -> List[str]:
    name = summary.display_name or "Unknown"
    if not summary.has_history:
        return [f"  {name}  {_DIM}never played with{_RESET}"]
    lines = [
        f"  {_CYAN}{name}{_RESET}  {summary.total_games} games together  "
        f"threat={summary.threat_level.value} ally={summary.ally_quality.value}",
        cohort_line("ally", summary.as_ally),
        cohort_line("enemy", summary.as_enemy),
    ]
    modes = [
        f"{category.label} {(m.as_ally.games if m.as_ally else 0)}/{(m.as_enemy.games if m.as_enemy else 0)}"
        for category, m in summary.by_mode.items()
        if m.as_ally or m.as_enemy
    ]
    if modes:
        lines.append(f"    modes  {_DIM}(ally/enemy){_RESET} " + ", ".join(modes))
    if summary.last_seen:
        seen = summary.last_seen
        side = "ally" if seen.is_ally else "enemy"
        lines.append(
            f"    last   {_ts(seen.timestamp)} {seen.champion} {seen.role.label} ({side}, {seen.outcome})"
        )
    return lines


def lobby_lines(analysis: LobbyAnalysis) -> List[str]:
    if not analysis.configured:
        return [f"{_YELLOW}No account configured.{_RESET}"]
    if not analysis.players:
        return ["No other players found."]
    lines: List[str] = []
    for entry in analysis.players:
        lines.extend(summary_lines(entry.summary))
        if entry.tags:
            lines.append("    tags   " + ", ".join(
                f"{t.category.label}" + (f" ({t.note})" if t.note else "") for t in entry.tags
            ))
    return lines


def roster_lines(roster: LastMatchRoster) -> List[str]:
    lines = [f"  {roster.match_id}  {queue_name(roster.queue_id)}  {_ts(roster.game_creation)}"]
    for team_id in sorted({p.team_id for p in roster.players}):
        marker = "your team" if team_id == roster.user_team_id else "enemy team"
        lines.append(f"  Team {team_id} ({marker})")
        for p in (p for p in roster.players if p.team_id == team_id):
            result = f"{_GREEN}W{_RESET}" if p.win else f"{_RED}L{_RESET}"
            lines.append(f"    {result} {p.summoner_name:<28} {p.champion_name:<14} {p.role.label}")
    return lines
