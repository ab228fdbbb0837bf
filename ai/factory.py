"""Build an AI instance from a profile name."""

from __future__ import annotations

import logging
import random
from typing import Optional

from ai.base_ai import BaseAI
from ai.hardcore_ai import HardcoreAI
from ai.normal_ai import NormalAI
from ai.profiles import AIProfile, get_profile

LOGGER = logging.getLogger(__name__)


def build_ai(
    profile: AIProfile | str,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> BaseAI:
    """Deterministic profiles get the hardcore strategy, the rest the probabilistic one."""
    if isinstance(profile, str):
        profile = get_profile(profile)
    if profile.deterministic:
        agent: BaseAI = HardcoreAI(profile=profile)
    else:
        agent = NormalAI(profile=profile, seed=seed, rng=rng)
    LOGGER.debug("Built %s for profile %s (mood=%s)", type(agent).__name__, profile.name, agent.mood.name)
    return agent
