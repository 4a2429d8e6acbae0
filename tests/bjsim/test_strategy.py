"""Tests for play, bet, and insurance strategies."""

import pytest

from bjsim.game import Winner
from bjsim.strategy import (
    BET_STRATEGIES,
    INSURANCE_STRATEGIES,
    PLAY_STRATEGIES,
    BasicStrategy,
    ChartStrategy,
    ConstantBet,
    CountInsurance,
    CountSpreadBet,
    CutoffByStrength,
    DealerHardCutoff,
    DealerHitsSoft17,
    DoubleOnly,
    Martingale,
    MimicDealer,
    NaiveSoft,
    NoInsurance,
    PlayerDecision,
    SplitOnly,
)

HIT = PlayerDecision.HIT
STAND = PlayerDecision.STAND
DOUBLE = PlayerDecision.DOUBLE
SPLIT = PlayerDecision.SPLIT


class TestDealerStrategies:
    """Dealer play policies only ever hit or stand."""

    def test_hard_cutoff(self, make_state):
        dealer = DealerHardCutoff()
        assert dealer(make_state(dealer="10S 6H")) is HIT
        assert dealer(make_state(dealer="10S 7H")) is STAND
        assert dealer(make_state(dealer="AS 6H")) is STAND

    def test_hits_soft_17(self, make_state):
        dealer = DealerHitsSoft17()
        assert dealer(make_state(dealer="AS 6H")) is HIT
        assert dealer(make_state(dealer="10S 7H")) is STAND
        assert dealer(make_state(dealer="AS 7H")) is STAND

    def test_custom_cutoff(self, make_state):
        dealer = DealerHardCutoff()
        assert dealer(make_state(dealer="10S 6H", dealer_cutoff=16)) is STAND


class TestReferencePlayStrategies:
    """Tests for the simple player policies."""

    def test_mimic_dealer(self, make_state):
        player = MimicDealer()
        assert player(make_state("10S 6H")) is HIT
        assert player(make_state("10S 7H")) is STAND
        assert player(make_state("AS 6H")) is STAND

    def test_naive_soft_hits_soft_17(self, make_state):
        player = NaiveSoft()
        assert player(make_state("AS 6H")) is HIT
        assert player(make_state("AS 7H")) is STAND
        assert player(make_state("10S 7H")) is STAND

    @pytest.mark.parametrize(
        "upcard, total_to_stand",
        [("7S", 17), ("2S", 13), ("5S", 12)],
    )
    def test_cutoff_by_strength(self, make_state, upcard, total_to_stand):
        player = CutoffByStrength()
        below = f"9H {total_to_stand - 10}C"
        at = f"9H {total_to_stand - 9}C"
        assert player(make_state(below, dealer=f"{upcard} 10D")) is HIT
        assert player(make_state(at, dealer=f"{upcard} 10D")) is STAND

    def test_cutoff_by_strength_hits_soft_below_21(self, make_state):
        assert CutoffByStrength()(make_state("AS 8H", dealer="5S 10D")) is HIT

    def test_double_only(self, make_state):
        player = DoubleOnly()
        assert player(make_state("6H 5S", dealer="AH 2S")) is DOUBLE
        assert player(make_state("6H 4S", dealer="10H 2S")) is HIT
        assert player(make_state("6H 4S", dealer="9H 2S")) is DOUBLE
        assert player(make_state("5H 4S", dealer="7H 2S")) is HIT
        assert player(make_state("5H 4S", dealer="3H 2S")) is DOUBLE

    def test_double_only_never_doubles_twice(self, make_state):
        assert DoubleOnly()(make_state("6H 5S", dealer="AH 2S", doubled=True)) is HIT

    def test_split_only(self, make_state):
        player = SplitOnly()
        assert player(make_state("8H 8S", dealer="10H 7S")) is SPLIT
        assert player(make_state("7H 7S", dealer="9H 7S")) is HIT
        assert player(make_state("7H 7S", dealer="6H 7S")) is SPLIT
        assert player(make_state("6H 6S", dealer="5H 7S")) is SPLIT
        assert player(make_state("6H 6S", dealer="2H 7S")) is HIT

    def test_split_only_respects_split_limit(self, make_state):
        player = SplitOnly()
        assert player(make_state("8H 8S", splits_remaining=0)) is HIT


class TestBasicStrategy:
    """Tests for the simplified basic strategy."""

    def test_aces_split_against_two(self, make_state):
        """Player A,A against a dealer 2 splits."""
        state = make_state("AH AS", dealer="2S AH")
        assert BasicStrategy()(state) is SPLIT

    def test_eleven_doubles_against_ace(self, make_state):
        state = make_state("6H 5S", dealer="AH 2S")
        assert BasicStrategy()(state) is DOUBLE

    def test_eleven_does_not_double_twice(self, make_state):
        state = make_state("6H 5S", dealer="AH 2S", doubled=True)
        assert BasicStrategy()(state) is not DOUBLE

    def test_fives_double_instead_of_split(self, make_state):
        state = make_state("5H 5S", dealer="6H 2S")
        assert BasicStrategy()(state) is DOUBLE

    def test_stand_on_poor_upcard(self, make_state):
        assert BasicStrategy()(make_state("10H 2S", dealer="5H 10S")) is STAND
        assert BasicStrategy()(make_state("10H 2S", dealer="10H 10S")) is HIT

    def test_soft_18_stands(self, make_state):
        assert BasicStrategy()(make_state("AH 7S", dealer="10H 10S")) is STAND
        assert BasicStrategy()(make_state("AH 6S", dealer="5H 10S")) is HIT

    def test_surrender_only_when_offered(self, make_state):
        state = make_state("10H 6S", dealer="10D 7S")
        assert BasicStrategy()(state) is HIT
        late = make_state("10H 6S", dealer="10D 7S", allow_late_surrender=True)
        assert BasicStrategy()(late) is PlayerDecision.LATE_SURRENDER
        both = make_state(
            "10H 6S",
            dealer="10D 7S",
            allow_early_surrender=True,
            allow_late_surrender=True,
        )
        assert BasicStrategy()(both) is PlayerDecision.EARLY_SURRENDER

    def test_no_surrender_after_split(self, make_state):
        state = make_state("10H 6S", dealer="10D 7S", split_child=True, allow_late_surrender=True)
        assert BasicStrategy()(state) is HIT


class TestChartStrategy:
    """Tests for the table-driven basic strategy."""

    @pytest.fixture
    def chart(self):
        return ChartStrategy()

    def test_hard_17_always_stands(self, chart):
        for total in range(17, 22):
            for upcard in range(2, 12):
                assert chart.lookup(total, upcard) == "S"

    def test_hard_11_always_doubles(self, chart):
        for upcard in range(2, 12):
            assert chart.lookup(11, upcard) == "Dh"

    def test_hard_8_and_below_hit(self, chart):
        for total in range(4, 9):
            assert chart.lookup(total, 6) == "H"

    def test_soft_12_hits(self, chart):
        assert chart.lookup(12, 5, soft=True) == "H"

    def test_pair_aces_split(self, chart, make_state):
        for upcard in ("2S", "6S", "10S", "AS"):
            assert chart(make_state("AH AS", dealer=f"{upcard} 7H")) is SPLIT

    def test_pair_tens_stand(self, chart, make_state):
        assert chart(make_state("10H KS", dealer="6H 7S")) is STAND

    def test_double_falls_back_to_hit(self, chart, make_state):
        assert chart(make_state("2H 3S 6C", dealer="6H 7S")) is HIT

    def test_soft_18_double_falls_back_to_stand(self, chart, make_state):
        assert chart(make_state("AH 7S", dealer="4H 7S")) is DOUBLE
        assert chart(make_state("AH 2S 5C", dealer="4H 7S")) is STAND

    def test_surrender_cells(self, chart, make_state):
        assert chart(make_state("10H 6S", dealer="10D 7S")) is HIT
        state = make_state("10H 6S", dealer="10D 7S", allow_late_surrender=True)
        assert chart(state) is PlayerDecision.LATE_SURRENDER

    def test_exhausted_splits_use_totals(self, chart, make_state):
        assert chart(make_state("8H 8S", dealer="10D 7S", splits_remaining=0)) is HIT

    def test_h17_overrides(self, make_state):
        h17 = ChartStrategy(dealer_hits_soft_17=True)
        assert h17.lookup(15, 11) == "Rh"
        assert h17.lookup(19, 6, soft=True) == "Ds"
        assert ChartStrategy().lookup(19, 6, soft=True) == "S"

    def test_no_double_after_split(self, make_state):
        das = ChartStrategy(double_after_split=True)
        no_das = ChartStrategy(double_after_split=False)
        state = make_state("2H 2S", dealer="2D 7S")
        assert das(state) is SPLIT
        assert no_das(state) is HIT


class TestBetStrategies:
    """Tests for bet sizing."""

    def test_constant(self, make_state):
        assert ConstantBet()(make_state(init_bet=25, last_bet=100)) == 25

    def test_martingale_doubles_after_loss(self, make_state):
        state = make_state(last_winner=Winner.DEALER, last_bet=40, init_bet=10)
        assert Martingale()(state) == 80

    def test_martingale_resets_after_win(self, make_state):
        state = make_state(last_winner=Winner.PLAYER, last_bet=40, init_bet=10)
        assert Martingale()(state) == 10

    def test_martingale_repeats_after_tie(self, make_state):
        state = make_state(last_winner=Winner.TIE, last_bet=40, init_bet=10)
        assert Martingale()(state) == 40

    def test_martingale_first_round(self, make_state):
        assert Martingale()(make_state(last_winner=Winner.NONE, last_bet=40)) == 10

    @pytest.mark.parametrize(
        "true_count, units",
        [(-3.0, 1), (0.0, 1), (1.0, 1), (2.5, 2), (5.0, 5), (12.0, 8)],
    )
    def test_count_spread(self, make_state, true_count, units):
        assert CountSpreadBet()(make_state(true_count=true_count, init_bet=10)) == 10 * units

    def test_count_spread_requires_count(self):
        assert CountSpreadBet.requires_count
        assert not ConstantBet.requires_count

    def test_count_spread_rejects_bad_spread(self):
        with pytest.raises(ValueError):
            CountSpreadBet(spread=0)


class TestInsuranceStrategies:
    """Tests for insurance decisions."""

    def test_never_insure(self, make_state):
        assert not NoInsurance()(make_state(dealer="AS 10H", true_count=10.0))

    def test_count_insurance(self, make_state):
        policy = CountInsurance()
        assert not policy(make_state(dealer="AS 10H", true_count=2.9))
        assert policy(make_state(dealer="AS 10H", true_count=3.0))


class TestRegistries:
    """Strategies can be chosen by name at runtime."""

    @pytest.mark.parametrize("name", sorted(PLAY_STRATEGIES))
    def test_play_strategies_construct(self, name, make_state):
        strategy = PLAY_STRATEGIES[name]()
        assert strategy(make_state("10H 7S")) in PlayerDecision

    def test_bet_and_insurance_registries(self):
        assert BET_STRATEGIES["martingale"] is Martingale
        assert INSURANCE_STRATEGIES["none"] is NoInsurance
