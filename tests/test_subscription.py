from petsteps.game import actions as A
from petsteps.game.models import GameState
from petsteps.game.reducer import transition
from petsteps.game.subscription import can_afford, can_update_visual, keeps_secondary_element


def test_tier_policies():
    assert not can_update_visual("free")
    assert can_update_visual("tier2")
    assert not keeps_secondary_element("free")
    assert keeps_secondary_element("tier3")
    assert not keeps_secondary_element("platinum")


def test_upgrade_grants_tokens_and_spending():
    s = transition(GameState(), A.SetSubscriptionTier("tier2"))
    assert s.ai_tokens == 50
    assert transition(s, A.SetSubscriptionTier("tier2")) is s
    s = transition(s, A.SpendAiTokens("image_to_video"))
    assert s.ai_tokens == 47
    # 3D needs the top tier
    assert transition(s, A.SpendAiTokens("image_to_3d")) is s


def test_free_tier_cannot_spend():
    assert not can_afford("free", 100, "text_to_image")
    s = GameState(ai_tokens=5)
    assert transition(s, A.SpendAiTokens("text_to_image")) is s


def test_switching_tiers_resets_tokens():
    s = GameState()
    for _ in range(3):
        s = transition(s, A.SetSubscriptionTier("tier3"))
        assert s.ai_tokens == 200
        s = transition(s, A.SetSubscriptionTier("free"))
        assert s.ai_tokens == 0
    s = transition(s, A.SetSubscriptionTier("tier3"))
    assert s.ai_tokens == 200
