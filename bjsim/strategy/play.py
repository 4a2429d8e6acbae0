"""Reference playing strategies for the dealer and the player."""

from bjsim.cards import DealerUpcardStrength, Rank
from bjsim.game.state import GameState
from bjsim.hand import Hand
from bjsim.strategy.base import PlayerDecision, PlayStrategy

# Player stand threshold by dealer upcard strength
STRENGTH_CUTOFFS: dict[DealerUpcardStrength, int] = {
    DealerUpcardStrength.GOOD: 17,
    DealerUpcardStrength.FAIR: 13,
    DealerUpcardStrength.POOR: 12,
}

# Soft hands below this total are always hit
SOFT_STAND = 18


def acting_hand(state: GameState) -> Hand:
    if state.player_hand is None:
        raise ValueError("Play strategy queried without an acting hand")
    return state.player_hand


def _dealer_hand(state: GameState) -> Hand:
    if state.dealer_hand is None:
        raise ValueError("Dealer strategy queried before the dealer was dealt")
    return state.dealer_hand


def _upcard_strength(state: GameState) -> DealerUpcardStrength:
    if state.dealer_upcard_strength is None:
        raise ValueError("Strategy needs the dealer upcard")
    return state.dealer_upcard_strength


def split_decision(state: GameState) -> PlayerDecision | None:
    """
    Pair splitting rules shared by the split overlays.

    Aces and eights always; twos, threes and sevens unless the dealer shows
    8 through Ace; sixes against a poor upcard.
    """
    if not state.can_split:
        return None
    hand = acting_hand(state)
    upcard = state.dealer_upcard_value

    if hand.is_pair_of(Rank.ACE) or hand.is_pair_of(Rank.EIGHT):
        return PlayerDecision.SPLIT
    if any(hand.is_pair_of(rank) for rank in (Rank.TWO, Rank.THREE, Rank.SEVEN)):
        if upcard not in (8, 9, 10, 11):
            return PlayerDecision.SPLIT
    if hand.is_pair_of(Rank.SIX) and _upcard_strength(state) is DealerUpcardStrength.POOR:
        return PlayerDecision.SPLIT
    return None


def double_decision(state: GameState) -> PlayerDecision | None:
    """
    Double down on 11 always, 10 unless the dealer shows 10 or Ace, and 9
    unless the upcard is good.
    """
    hand = acting_hand(state)
    if not hand.can_double:
        return None

    value = hand.value
    if value == 11:
        return PlayerDecision.DOUBLE
    if value == 10 and state.dealer_upcard_value not in (10, 11):
        return PlayerDecision.DOUBLE
    if value == 9 and _upcard_strength(state) is not DealerUpcardStrength.GOOD:
        return PlayerDecision.DOUBLE
    return None


def surrender_kind(state: GameState) -> PlayerDecision | None:
    """The surrender the table allows for the acting hand, early preferred."""
    hand = acting_hand(state)
    if len(hand.cards) != 2 or hand.split_child:
        return None
    if state.allow_early_surrender:
        return PlayerDecision.EARLY_SURRENDER
    if state.allow_late_surrender:
        return PlayerDecision.LATE_SURRENDER
    return None


def surrender_decision(state: GameState) -> PlayerDecision | None:
    """Give up hard 16 against 9, 10 or Ace and hard 15 against 10."""
    kind = surrender_kind(state)
    if kind is None or state.can_split:
        return None
    hand = acting_hand(state)
    if hand.contains_soft_ace:
        return None

    upcard = state.dealer_upcard_value
    if hand.value == 16 and upcard in (9, 10, 11):
        return kind
    if hand.value == 15 and upcard == 10:
        return kind
    return None


class DealerHardCutoff(PlayStrategy):
    """Dealer stands at or above the cutoff, soft or not."""

    name = "Dealer Hard Cutoff"

    def decide(self, state: GameState) -> PlayerDecision:
        if _dealer_hand(state).value >= state.dealer_cutoff:
            return PlayerDecision.STAND
        return PlayerDecision.HIT


class DealerHitsSoft17(DealerHardCutoff):
    """Dealer also draws to a soft total equal to the cutoff (H17 tables)."""

    name = "Dealer Hits Soft 17"

    def decide(self, state: GameState) -> PlayerDecision:
        hand = _dealer_hand(state)
        if hand.value == state.dealer_cutoff and hand.contains_soft_ace:
            return PlayerDecision.HIT
        return super().decide(state)


class MimicDealer(PlayStrategy):
    """Play the player's hand exactly like the dealer plays."""

    name = "Mimic Dealer"

    def decide(self, state: GameState) -> PlayerDecision:
        if acting_hand(state).value >= state.dealer_cutoff:
            return PlayerDecision.STAND
        return PlayerDecision.HIT


class NaiveSoft(PlayStrategy):
    """Mimic the dealer but keep hitting a soft hand below 18."""

    name = "Naive Soft"

    def decide(self, state: GameState) -> PlayerDecision:
        hand = acting_hand(state)
        if hand.value < state.dealer_cutoff:
            return PlayerDecision.HIT
        if hand.contains_soft_ace and hand.value < SOFT_STAND:
            return PlayerDecision.HIT
        return PlayerDecision.STAND


class DoubleOnly(NaiveSoft):
    """Naive soft play plus doubling down on 9, 10 and 11."""

    name = "Double Only"

    def decide(self, state: GameState) -> PlayerDecision:
        return double_decision(state) or super().decide(state)


class SplitOnly(NaiveSoft):
    """Naive soft play plus pair splitting."""

    name = "Split Only"

    def decide(self, state: GameState) -> PlayerDecision:
        return split_decision(state) or super().decide(state)


class CutoffByStrength(PlayStrategy):
    """
    Stand threshold chosen from the dealer's upcard strength.

    Hits below the threshold, and hits any soft hand below ``soft_stand``.
    """

    name = "Cutoff By Strength"
    soft_stand = 21

    def decide(self, state: GameState) -> PlayerDecision:
        hand = acting_hand(state)
        cutoff = STRENGTH_CUTOFFS[_upcard_strength(state)]
        if hand.value < cutoff:
            return PlayerDecision.HIT
        if hand.contains_soft_ace and hand.value < self.soft_stand:
            return PlayerDecision.HIT
        return PlayerDecision.STAND


class BasicStrategy(CutoffByStrength):
    """
    Simplified basic strategy.

    Special actions are tried before the hit/stand fallback, in order:
    surrender, split, double, then the upcard-strength cutoff.
    """

    name = "Basic Strategy"
    soft_stand = SOFT_STAND

    def decide(self, state: GameState) -> PlayerDecision:
        return (
            surrender_decision(state)
            or split_decision(state)
            or double_decision(state)
            or super().decide(state)
        )
