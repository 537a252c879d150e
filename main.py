#!/usr/bin/env python3
"""
KPI Scoreboard - Main Demo

Runs the scoring engine over the sample organisation and prints:
1. An agent dashboard
2. A manager team overview
3. The leadership organisation overview
4. The admin system overview
"""

from kpi_scoreboard import __version__
from kpi_scoreboard.config import configure_logging, get_settings
from kpi_scoreboard.core import KPIError
from kpi_scoreboard.data import sample_data_source
from kpi_scoreboard.roles import RoleAggregator


def run_agent_demo(aggregator: RoleAggregator, user_id: str):
    """Show the individual dashboard for one agent."""
    print("=" * 60)
    print(f"AGENT DASHBOARD - {user_id}")
    print("=" * 60)

    view = aggregator.get_role_data("agent", user_id)
    result = view.kpi_scores
    entry = view.leaderboard_entry

    print(f"Name: {view.name} ({view.team_id})")
    print(f"Overall Score: {result.overall_score} [{result.status.value}]")
    print(f"Rank: #{entry.rank} of {view.population_size} (gap to next: {entry.gap_to_next})")
    print()
    print(f"{'Metric':<12} {'Raw':>10} {'Score':>8}  Status")
    print("-" * 44)
    for score in result.metric_scores:
        raw = f"{score.raw_value:.2f}" if score.raw_value is not None else "-"
        print(f"{score.metric_key:<12} {raw:>10} {score.normalized_score:>8.1f}  {score.status.value}")

    print()
    print(f"Trend: {view.trend.trend_direction} (strength {view.trend.trend_strength:.2f})")
    print("  " + " ".join(str(p.score) for p in view.trend.points))
    print()


def run_manager_demo(aggregator: RoleAggregator, team_id: str):
    """Show the team overview for one team."""
    print("=" * 60)
    print(f"MANAGER OVERVIEW - {team_id}")
    print("=" * 60)

    view = aggregator.get_role_data("manager", team_id)

    print(f"Team Health: {view.team_health_score} [{view.team_status.value}]")
    print()
    print("Team Leaderboard:")
    for entry in view.leaderboard:
        print(f"  #{entry.rank} {entry.user_id}: {entry.score} (+{entry.gap_to_next})")

    if view.attention_flags:
        print()
        print("Attention Needed:")
        for flag in view.attention_flags:
            print(f"  [{flag.action.value}] {flag.user_id}: {flag.message}")
    print()


def run_leadership_demo(aggregator: RoleAggregator):
    """Show the organisation overview."""
    print("=" * 60)
    print("LEADERSHIP OVERVIEW")
    print("=" * 60)

    view = aggregator.get_role_data("leadership")

    print(f"Org Health: {view.org_health_score:.2f} [{view.org_status.value}]")
    print()
    print(f"{'Team':<10} {'Members':>8} {'Health':>8}  Status")
    print("-" * 40)
    for team in view.teams:
        print(f"{team.team_id:<10} {team.member_count:>8} {team.team_health_score:>8}  {team.status.value}")

    print()
    print(f"{'Department':<12} {'Members':>8} {'Average':>8}  Status")
    print("-" * 42)
    for dept in view.department_breakdowns:
        print(f"{dept.department:<12} {dept.member_count:>8} {dept.average_score:>8.2f}  {dept.status.value}")

    print()
    print("Top Performers:")
    for entry in view.leaderboard[:3]:
        print(f"  #{entry.rank} {entry.user_id}: {entry.score}")
    print()


def run_admin_demo(aggregator: RoleAggregator):
    """Show the system overview."""
    print("=" * 60)
    print("ADMIN OVERVIEW")
    print("=" * 60)

    view = aggregator.get_role_data("admin")

    print(f"Users: {view.active_users} active / {view.total_users} total")
    print(f"Teams: {view.total_teams}")
    print(f"Observations: {view.total_observations}")
    print("By Role: " + ", ".join(f"{k}={v}" for k, v in view.users_by_role.items()))
    print()
    print("Metric Catalog:")
    for definition in view.metric_definitions:
        print(
            f"  {definition.key:<10} weight={definition.weight:.2f} "
            f"target={definition.target:g} {definition.direction.value}"
        )
    print()


def main():
    """Main entry point."""
    settings = get_settings()
    configure_logging(settings)

    print(f"{settings.app_name} v{__version__}")
    print()

    aggregator = RoleAggregator(sample_data_source(days=settings.trend_days), settings=settings)

    try:
        run_agent_demo(aggregator, "AGT-003")
        run_manager_demo(aggregator, "TEAM-B")
        run_leadership_demo(aggregator)
        run_admin_demo(aggregator)
    except KPIError as e:
        print(f"Error ({e.kind}): {e.message}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
