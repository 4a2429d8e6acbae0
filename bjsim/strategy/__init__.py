"""Decision strategies: play, bet, count, and insurance."""

from bjsim.cards import DealerUpcardStrength
from bjsim.strategy.base import (
    DEALER_DECISIONS,
    BetStrategy,
    InsuranceStrategy,
    PlayerDecision,
    PlayStrategy,
)
from bjsim.strategy.play import (
    BasicStrategy,
    CutoffByStrength,
    DealerHardCutoff,
    DealerHitsSoft17,
    DoubleOnly,
    MimicDealer,
    NaiveSoft,
    SplitOnly,
)
from bjsim.strategy.chart import ChartStrategy
from bjsim.strategy.betting import ConstantBet, CountSpreadBet, Martingale
from bjsim.strategy.insurance import CountInsurance, NoInsurance

PLAY_STRATEGIES: dict[str, type[PlayStrategy]] = {
    "dealer-hard-cutoff": DealerHardCutoff,
    "dealer-hits-soft-17": DealerHitsSoft17,
    "mimic-dealer": MimicDealer,
    "naive-soft": NaiveSoft,
    "cutoff-by-strength": CutoffByStrength,
    "double-only": DoubleOnly,
    "split-only": SplitOnly,
    "basic": BasicStrategy,
    "chart": ChartStrategy,
}

BET_STRATEGIES: dict[str, type[BetStrategy]] = {
    "constant": ConstantBet,
    "martingale": Martingale,
    "count-spread": CountSpreadBet,
}

INSURANCE_STRATEGIES: dict[str, type[InsuranceStrategy]] = {
    "none": NoInsurance,
    "count": CountInsurance,
}

__all__ = [
    "DEALER_DECISIONS",
    "BasicStrategy",
    "BetStrategy",
    "ChartStrategy",
    "ConstantBet",
    "CountInsurance",
    "CountSpreadBet",
    "CutoffByStrength",
    "DealerHardCutoff",
    "DealerHitsSoft17",
    "DealerUpcardStrength",
    "DoubleOnly",
    "InsuranceStrategy",
    "Martingale",
    "MimicDealer",
    "NaiveSoft",
    "NoInsurance",
    "PlayStrategy",
    "PlayerDecision",
    "SplitOnly",
    "PLAY_STRATEGIES",
    "BET_STRATEGIES",
    "INSURANCE_STRATEGIES",
]
