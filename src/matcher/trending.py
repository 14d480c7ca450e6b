"""
Trending skills across active job postings.
"""

import random
from typing import Any, Optional, Protocol

from shared.models import TrendingSkill


class SkillCounter(Protocol):
    async def count_skills(self, limit: int = 10) -> list[dict[str, Any]]: ...


def demand_label(count: int) -> str:
    """High above 5 postings, Medium above 2, otherwise Low."""
    if count > 5:
        return "High"
    if count > 2:
        return "Medium"
    return "Low"


def growth_label(rng: random.Random) -> str:
    # No historical data is stored, so growth is a placeholder figure
    return f"+{rng.randint(10, 39)}%"


async def trending_skills(
    store: SkillCounter,
    limit: int = 10,
    rng: Optional[random.Random] = None,
) -> list[TrendingSkill]:
    """Top skills by posting count with a demand tier and growth figure."""
    rng = rng or random.Random()
    rows = await store.count_skills(limit=limit)
    return [
        TrendingSkill(
            skill=row["_id"],
            demand=demand_label(row["count"]),
            growth=growth_label(rng),
        )
        for row in rows
    ]
