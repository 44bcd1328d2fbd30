import pytest

from bank_sim.config import BankConfig, DelayRange


def test_defaults_match_the_classic_bank():
    cfg = BankConfig()
    assert (cfg.num_tellers, cfg.num_customers) == (3, 50)
    assert (cfg.door_capacity, cfg.safe_capacity, cfg.manager_capacity) == (2, 2, 1)
    assert cfg.manager_delay == DelayRange(5, 30)
    assert cfg.safe_delay == DelayRange(10, 50)


@pytest.mark.parametrize(
    "overrides",
    [
        {"num_tellers": 0},
        {"num_customers": -1},
        {"door_capacity": 0},
        {"safe_capacity": 0},
        {"manager_capacity": 0},
        {"withdrawal_probability": 1.5},
    ],
)
def test_invalid_config_rejected(overrides):
    with pytest.raises(ValueError):
        BankConfig(**overrides)


def test_instant_zeroes_every_delay():
    cfg = BankConfig.instant(num_customers=4)
    assert cfg.num_customers == 4
    assert cfg.arrival_delay == cfg.manager_delay == cfg.safe_delay == DelayRange(0, 0)
