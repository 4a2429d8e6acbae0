"""Round outcomes: who won each hand and what it pays."""

from collections import Counter
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, auto

from bjsim.hand import Hand, HandState

NATURAL_PAYOUT = Decimal("1.5")
DOUBLE_PAYOUT = Decimal("2")
SURRENDER_LOSS = Decimal("0.5")
INSURANCE_STAKE = Decimal("0.5")
INSURANCE_PAYOUT = Decimal("2")


class Winner(Enum):
    """Winner of a hand or, aggregated, of a round."""

    PLAYER = auto()
    DEALER = auto()
    TIE = auto()
    NONE = auto()  # no round played yet

    def __str__(self) -> str:
        return self.name.title()


@dataclass(slots=True)
class EndState:
    """Flags describing how a single player hand ended."""

    hand_bet: int = 0
    p_natural: bool = False
    p_insurance: bool = False
    p_doubled: bool = False
    p_bust: bool = False
    p_surrender_early: bool = False
    p_surrender_late: bool = False
    d_natural: bool = False
    d_bust: bool = False

    @property
    def p_surrendered(self) -> bool:
        return self.p_surrender_early or self.p_surrender_late

    def payoff(self, winner: Winner) -> Decimal:
        """
        Net result of the hand for the player, in bet units of currency.

        An unmatched natural pays 3:2, a won double 2:1 on the original
        stake, any other win 1:1. A lost double forfeits both stakes. Early
        surrender costs half the bet; late surrender costs half unless the
        dealer holds a natural. The insurance side bet is half the hand bet
        and pays 2:1 against a dealer natural.
        """
        bet = Decimal(self.hand_bet)
        result = Decimal("0")

        if winner is Winner.PLAYER:
            if self.p_natural and not self.d_natural:
                result = bet * NATURAL_PAYOUT
            elif self.p_doubled:
                result = bet * DOUBLE_PAYOUT
            else:
                result = bet
        elif winner is Winner.DEALER:
            if self.p_surrender_early:
                result = -bet * SURRENDER_LOSS
            elif self.p_surrender_late:
                result = -bet if self.d_natural else -bet * SURRENDER_LOSS
            elif self.p_doubled:
                result = -bet * DOUBLE_PAYOUT
            else:
                result = -bet

        if self.p_insurance:
            stake = bet * INSURANCE_STAKE
            result += stake * INSURANCE_PAYOUT if self.d_natural else -stake

        return result


def resolve_hand(hand: Hand, dealer_hand: Hand) -> tuple[Winner, EndState]:
    """
    Decide one player hand against the dealer.

    Precedence: surrender, naturals, player bust, dealer bust, then totals.
    A surrendered hand or one beaten by a natural is never compared on
    points. Every flag is recorded even once the winner is known.
    """
    winner: Winner | None = None
    end_state = EndState(
        hand_bet=hand.init_bet,
        p_natural=hand.natural,
        p_insurance=hand.insured,
        p_doubled=hand.doubled,
        d_natural=dealer_hand.natural,
    )
    player_value = hand.value
    dealer_value = dealer_hand.value

    if hand.is_surrendered:
        end_state.p_surrender_early = hand.state is HandState.EARLY_SURRENDER
        end_state.p_surrender_late = hand.state is HandState.LATE_SURRENDER
        return Winner.DEALER, end_state

    if dealer_hand.natural and not hand.natural:
        winner = Winner.DEALER
    elif hand.natural and not dealer_hand.natural:
        winner = Winner.PLAYER

    if player_value > 21:
        end_state.p_bust = True
        if winner is None:
            winner = Winner.DEALER

    if dealer_value > 21:
        end_state.d_bust = True
        if winner is None:
            winner = Winner.PLAYER

    if winner is None:
        if player_value == dealer_value:
            winner = Winner.TIE
        elif player_value > dealer_value:
            winner = Winner.PLAYER
        else:
            winner = Winner.DEALER

    return winner, end_state


def round_winner(results: list[tuple[Winner, EndState]]) -> Winner:
    """
    Collapse per-hand winners into one round winner.

    A single hand decides the round directly. With split hands the side
    winning more hands takes the round; equal counts make it a tie.
    """
    if not results:
        return Winner.NONE
    if len(results) == 1:
        return results[0][0]

    tally = Counter(winner for winner, _ in results)
    if tally[Winner.PLAYER] > tally[Winner.DEALER]:
        return Winner.PLAYER
    if tally[Winner.PLAYER] < tally[Winner.DEALER]:
        return Winner.DEALER
    return Winner.TIE
