"""
Prophecy API Endpoints

Free tool for the landing page - no authentication required.
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Query

from core.config import settings
from schemas import ProphecyResponse, ReseedResponse, RiskPointResponse
from services.prophecy import daily_seed, fresh_seed, generate, share_url

router = APIRouter(prefix="/api/prophecy", tags=["prophecy"])


@router.get("", response_model=ProphecyResponse)
def get_prophecy(
    seed: Optional[str] = Query(None, description="Share-link seed; omit for today's prophecy"),
    spoilers: bool = Query(True, description="Allow spoiler causes"),
    character: Optional[str] = Query(None, description="Character name (defaults to the protagonist)"),
):
    """
    Read the threads for a seed.

    Without a seed, the character's daily seed is used so everyone sees the
    same prophecy for the day.
    """
    character = character or settings.DEFAULT_CHARACTER
    now = datetime.now()
    seed = seed or daily_seed(character, now.date())
    prophecy = generate(seed, spoilers, now)

    return ProphecyResponse(
        character=character,
        seed=seed,
        spoilers=spoilers,
        share_url=share_url(settings.SITE_BASE_URL, seed),
        doom_percent=prophecy.doom_percent,
        confidence=prophecy.confidence,
        cause=prophecy.cause,
        predicted_date=prophecy.predicted_date,
        is_never=prophecy.is_never,
        display_date=prophecy.display_date,
        monthly_risk=[RiskPointResponse(label=p.label, value=p.value) for p in prophecy.monthly_risk],
    )


@router.post("/reseed", response_model=ReseedResponse)
def reseed(
    character: Optional[str] = Query(None, description="Character name (defaults to the protagonist)"),
):
    """Spin a new fate: a fresh seed and its share link."""
    seed = fresh_seed(character or settings.DEFAULT_CHARACTER)
    return ReseedResponse(seed=seed, share_url=share_url(settings.SITE_BASE_URL, seed))
