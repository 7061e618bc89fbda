"""
Battle package.
- core.py (element chart, Combatant, BattleTurn, damage formula)
- session.py (alternating auto-battle, BattleResult)
- factory.py (combatants from pets, opponent roster)
- render.py (rich HP bars and turn log)
- service.py (energy / daily limit checks, XP award)
"""
from .service import battle_service
__all__ = ["battle_service"]
