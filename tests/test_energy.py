from petsteps.game.energy import recharge, minutes_until_full, battles_left_today, PERIOD_SECONDS


def test_recharge_whole_periods_only():
    assert recharge(2, 0, 2 * PERIOD_SECONDS) == (4, 2 * PERIOD_SECONDS)
    # Partial period is kept for the next tick
    assert recharge(2, 0, 1.5 * PERIOD_SECONDS) == (3, PERIOD_SECONDS)


def test_repeated_ticks_do_not_drift():
    energy, last, now = 0, 0, 0
    for now in range(0, 3 * PERIOD_SECONDS + 1, 700):
        energy, last = recharge(energy, last, now)
    assert (energy, last) == recharge(0, 0, now)


def test_recharge_caps_and_resets_clock():
    assert recharge(4, 0, 10 * PERIOD_SECONDS) == (5, 10 * PERIOD_SECONDS)
    assert recharge(5, 100, 500) == (5, 500)


def test_minutes_until_full():
    assert minutes_until_full(5, 0, 0) == 0
    assert minutes_until_full(3, 0, 0) == 60


def test_daily_battle_counter_resets_on_new_date():
    assert battles_left_today(3, "2024-01-01", "2024-01-01", 3) == 0
    assert battles_left_today(3, "2024-01-01", "2024-01-02", 3) == 3
