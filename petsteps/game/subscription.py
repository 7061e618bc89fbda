"""Subscription tier policies consumed by the progression rules."""
from __future__ import annotations
from .constants import SUBSCRIPTION_TIERS, AI_TOKEN_COSTS

def tier_info(tier: str) -> dict:
    return SUBSCRIPTION_TIERS.get(tier, SUBSCRIPTION_TIERS["free"])

def can_update_visual(tier: str) -> bool:
    """Whether an evolution may replace the pet's artwork."""
    return bool(tier_info(tier)["can_generate_ai"])

def keeps_secondary_element(tier: str) -> bool:
    """Free-tier eggs only inherit the mother's element."""
    return tier in SUBSCRIPTION_TIERS and tier != "free"

def can_afford(tier: str, tokens: int, operation: str) -> bool:
    cost = AI_TOKEN_COSTS.get(operation)
    if cost is None:
        return False
    info = tier_info(tier)
    if not info["can_generate_ai"]:
        return False
    if operation == "image_to_3d" and not info["can_3d_generate"]:
        return False
    return tokens >= cost

__all__ = ["tier_info","can_update_visual","keeps_secondary_element","can_afford"]
