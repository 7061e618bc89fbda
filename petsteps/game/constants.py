"""Game tuning numbers: progression thresholds, care, energy, goals, tiers."""
from __future__ import annotations
from typing import Dict, Tuple

STORAGE_KEY = "petsteps_game_state"

# ---------------- Progression -----------------
MIN_LEVEL = 1
MAX_LEVEL = 100
RETIREMENT_LEVEL = MAX_LEVEL
EVOLUTION_LEVELS: Tuple[int, ...] = (20, 40, 60, 80)
BREEDING_LEVEL = 90
XP_BASE = 5000
XP_GROWTH_RATE = 1.15
STEPS_PER_XP = 1
EGG_HATCH_STEPS = 5000
BREEDING_INHERIT_RATIO = 0.2

EVOLUTION_ATTACK_BOOST = 0.15
EVOLUTION_DEFENSE_BOOST = 0.15
EVOLUTION_HEALTH_BOOST = 0.10

# ---------------- New pets -----------------
BASE_STATS: Dict[str, Dict[str, int]] = {
    "fire":  {"attack": 15, "defense": 8,  "health": 90},
    "water": {"attack": 10, "defense": 12, "health": 100},
    "earth": {"attack": 8,  "defense": 15, "health": 110},
    "air":   {"attack": 12, "defense": 10, "health": 95},
}
STAT_VARIANCE = 2          # symmetric: each stat shifts by randint(-2, 2)
BASE_CRIT_RATE = 0.05

TEMPLATE_PETS: Dict[str, Tuple[Dict[str, str], ...]] = {
    "fire":  ({"name": "Ember Drake", "template_type": "fire_drake"},),
    "water": ({"name": "Aqua Serpent", "template_type": "water_serpent"},),
    "earth": ({"name": "Stone Golem", "template_type": "earth_golem"},),
    "air":   ({"name": "Wind Spirit", "template_type": "air_spirit"},),
}

TUTORIAL_PET_ID = "tutorial"
TUTORIAL_PET = {
    "name": "Tutorial Companion",
    "element": "fire",
    "level": 99,
    "attack": 50,
    "defense": 50,
    "health": 100,
    "crit_rate": 0.1,
    "evolution_stage": 4,
    "template_type": "fire_phoenix",
}
TUTORIAL_STEPS_TO_RETIRE = 10

# ---------------- Care -----------------
CARE_MAX = 100
CARE_DECAY_PER_HOUR: Dict[str, int] = {
    "happiness": 2,
    "hunger": 3,
    "thirst": 4,
}
FEED_AMOUNT = 30
WATER_AMOUNT = 30
PLAY_AMOUNT = 20
TREAT_AMOUNT = 15
CARE_WARNING_THRESHOLD = 30
CARE_CRITICAL_THRESHOLD = 15

CONSUMABLE_KINDS: Tuple[str, ...] = ("food", "water", "toy", "treat", "energy_boost")
STARTING_CONSUMABLES: Dict[str, int] = {"food": 3, "water": 3, "toy": 1, "treat": 0, "energy_boost": 0}

# ---------------- Battles -----------------
DAILY_BATTLE_LIMIT = 3
MAX_BATTLE_ENERGY = 5
ENERGY_RECHARGE_MINUTES = 30
BATTLE_XP_PER_OPPONENT_LEVEL = 50
CRIT_MULTIPLIER = 1.5
DEFENSE_WEIGHT = 0.5

# ---------------- Step goals -----------------
DEFAULT_DAILY_STEP_GOAL = 5000
MIN_DAILY_STEP_GOAL = 3000
MAX_DAILY_STEP_GOAL = 20000
WEEKLY_GOAL_DAYS = 7
DAILY_GOAL_REWARD = {
    "consumables": ("food", "water", "toy"),
    "bonus_energy": 1,
    "xp_bonus": 500,
}

# ---------------- Subscription -----------------
SUBSCRIPTION_TIERS: Dict[str, Dict[str, object]] = {
    "free":  {"name": "Free",     "price": 0,  "ai_tokens_per_month": 0,   "can_generate_ai": False, "can_3d_generate": False},
    "tier1": {"name": "Basic",    "price": 2,  "ai_tokens_per_month": 10,  "can_generate_ai": True,  "can_3d_generate": False},
    "tier2": {"name": "Premium",  "price": 5,  "ai_tokens_per_month": 50,  "can_generate_ai": True,  "can_3d_generate": False},
    "tier3": {"name": "Ultimate", "price": 10, "ai_tokens_per_month": 200, "can_generate_ai": True,  "can_3d_generate": True},
}
AI_TOKEN_COSTS: Dict[str, int] = {
    "text_to_image": 1,
    "image_to_image": 1,
    "image_to_video": 3,
    "image_to_3d": 10,
}
