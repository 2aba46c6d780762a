"""
RivalryService - School rivalry rankings (individuals and teams).

The ranking functions are pure: they take a snapshot of users and never
modify it. Any missing data (unknown user, no score, no team, empty school)
comes back as an unranked result (None / 0 / []) instead of an error.

Ties keep the order of the snapshot: sorting is stable, so two players with
the same score get consecutive ranks in the order they were read.
"""

from typing import Optional, Sequence

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models.rivalry import (
    RivalryUser,
    IndividualRank,
    TeamRank,
    TeamAggregate,
    TeamStanding,
    TopIndividual,
)
from app.repositories.user_repository import UserRepository

ANONYMOUS_NAME = "Anonymous"


def _ranked_players(school: str, users: Sequence[RivalryUser]) -> list[RivalryUser]:
    """Players of a school that have a score, best first."""
    eligible = [u for u in users if u.school == school and u.score is not None]
    return sorted(eligible, key=lambda u: u.score, reverse=True)


def _team_totals(school: str, users: Sequence[RivalryUser]) -> list[TeamAggregate]:
    """Sum scores per team inside a school, best team first."""
    totals: dict[str, TeamAggregate] = {}

    for u in users:
        if u.school != school or not u.team or u.score is None:
            continue
        if u.team not in totals:
            totals[u.team] = TeamAggregate(team_name=u.team)
        totals[u.team].total_score += u.score
        totals[u.team].member_count += 1

    return sorted(totals.values(), key=lambda t: t.total_score, reverse=True)


def get_individual_rank(
    user_id: str,
    school: str,
    users: Sequence[RivalryUser]
) -> IndividualRank:
    """
    Rank of a player among the players of a school.

    Returns rank=None when the player is not ranked there (other school,
    no score yet or unknown id).
    """
    ranked = _ranked_players(school, users)

    for idx, u in enumerate(ranked):
        if u.id == user_id:
            return IndividualRank(rank=idx + 1, total_users=len(ranked))

    return IndividualRank(rank=None, total_users=len(ranked))


def get_team_rank(user_id: str, users: Sequence[RivalryUser]) -> TeamRank:
    """Rank of the player's team among the teams of the player's school."""
    user = next((u for u in users if u.id == user_id), None)

    if user is None or not user.school or not user.team:
        return TeamRank()

    teams = _team_totals(user.school, users)

    if not teams:
        return TeamRank(team_name=user.team)

    for idx, team in enumerate(teams):
        if team.team_name == user.team:
            return TeamRank(
                team_name=user.team,
                rank=idx + 1,
                total_teams=len(teams),
                total_score=team.total_score,
                member_count=team.member_count,
            )

    # The player has no score, so the team has no ranked members
    return TeamRank(team_name=user.team, total_teams=len(teams))


def get_top_team_for_school(
    school: str,
    users: Sequence[RivalryUser]
) -> Optional[TeamAggregate]:
    """The team holding the top seat of a school, or None."""
    teams = _team_totals(school, users)
    return teams[0] if teams else None


def get_all_team_rankings_for_school(
    school: str,
    users: Sequence[RivalryUser]
) -> list[TeamStanding]:
    return [
        TeamStanding(rank=idx + 1, **team.model_dump())
        for idx, team in enumerate(_team_totals(school, users))
    ]


def get_top_individuals_for_school(
    school: str,
    users: Sequence[RivalryUser],
    limit: int = 10
) -> list[TopIndividual]:
    """Best `limit` players of a school (fewer if the school is smaller)."""
    if limit <= 0:
        return []

    return [
        TopIndividual(
            user_id=u.id,
            name=u.name or ANONYMOUS_NAME,
            team=u.team,
            score=u.score,
            rank=idx + 1,
        )
        for idx, u in enumerate(_ranked_players(school, users)[:limit])
    ]


class RivalryService:
    """Loads the current users snapshot and answers ranking queries over it."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.user_repo = UserRepository(db)

    async def _snapshot(self) -> list[RivalryUser]:
        return await self.user_repo.get_rivalry_snapshot()

    async def get_individual_rank(
        self,
        user_id: str,
        school: Optional[str] = None
    ) -> IndividualRank:
        """
        Rank of a player in a school.

        Without a school, the player's own school is used.
        """
        users = await self._snapshot()

        if school is None:
            user = next((u for u in users if u.id == user_id), None)
            if user is None or not user.school:
                return IndividualRank()
            school = user.school

        return get_individual_rank(user_id, school, users)

    async def get_team_rank(self, user_id: str) -> TeamRank:
        return get_team_rank(user_id, await self._snapshot())

    async def get_top_team_for_school(self, school: str) -> Optional[TeamAggregate]:
        return get_top_team_for_school(school, await self._snapshot())

    async def get_all_team_rankings_for_school(self, school: str) -> list[TeamStanding]:
        return get_all_team_rankings_for_school(school, await self._snapshot())

    async def get_top_individuals_for_school(
        self,
        school: str,
        limit: int = 10
    ) -> list[TopIndividual]:
        return get_top_individuals_for_school(school, await self._snapshot(), limit)
