"""Blackjack round engine with state machine."""

import logging
from dataclasses import dataclass, field
from random import Random
from typing import TYPE_CHECKING, Callable

from transitions import Machine

from bjsim.cards import Card, Shoe
from bjsim.counting import CountingSystem
from bjsim.errors import IllegalDecisionError, InvariantViolation
from bjsim.game.events import EventEmitter, EventType, GameEvent
from bjsim.game.outcome import EndState, Winner, resolve_hand, round_winner
from bjsim.game.state import GameState, RoundPhase
from bjsim.hand import Hand, HandState
from bjsim.strategy.base import (
    DEALER_DECISIONS,
    BetStrategy,
    InsuranceStrategy,
    PlayerDecision,
    PlayStrategy,
)

if TYPE_CHECKING:
    from bjsim.config import GameSettings

logger = logging.getLogger(__name__)

HandResult = tuple[Winner, EndState]


@dataclass
class Player:
    """The player's seat: hands for this round plus the decision policies."""

    play_strategy: PlayStrategy
    bet_strategy: BetStrategy
    insurance_strategy: InsuranceStrategy
    hands: list[Hand] = field(default_factory=list)

    def open_hand(self) -> Hand | None:
        """First hand still waiting for a decision, left to right."""
        for hand in self.hands:
            if not hand.state.is_terminal:
                return hand
        return None

    def index_of(self, hand: Hand) -> int:
        """Position of ``hand`` by identity."""
        for i, candidate in enumerate(self.hands):
            if candidate is hand:
                return i
        raise InvariantViolation("Hand does not belong to the player")


@dataclass
class Dealer:
    """The dealer's seat: at most one hand, a stand cutoff and a policy."""

    play_strategy: PlayStrategy
    cutoff: int = 17
    hand: Hand | None = None

    @property
    def upcard(self) -> Card | None:
        if self.hand is None or not self.hand.cards:
            return None
        return self.hand.cards[0]


class Game:
    """
    Single-table blackjack engine driven by strategies.

    Owns the shoe, the random source, both seats, the played-card history
    and the running/true count. Every operation runs to completion; the
    engine is not safe to share between threads or processes.
    """

    # State machine states
    STATES = [phase.name.lower() for phase in RoundPhase]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "place_bet", "source": "waiting_for_bet", "dest": "dealing"},
        {
            "trigger": "start_player_turn",
            "source": ["dealing", "waiting_for_bet"],
            "dest": "player_turn",
        },
        {"trigger": "start_dealer_turn", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "resolve", "source": "dealer_turn", "dest": "resolving"},
        {"trigger": "finish_round", "source": "resolving", "dest": "waiting_for_bet"},
        {"trigger": "reset_round", "source": "*", "dest": "waiting_for_bet"},
    ]

    def __init__(
        self,
        *,
        player_play_strategy: PlayStrategy,
        dealer_play_strategy: PlayStrategy,
        bet_strategy: BetStrategy,
        count_strategy: CountingSystem,
        insurance_strategy: InsuranceStrategy,
        deck_count: int = 6,
        contains_blank: bool = True,
        max_splits: int = 3,
        init_bet: int = 10,
        dealer_cutoff: int = 17,
        allow_early_surrender: bool = False,
        allow_late_surrender: bool = False,
        rng: Random | None = None,
        events: EventEmitter | None = None,
    ) -> None:
        """
        Initialize a new engine with a freshly shuffled shoe.

        Args:
            player_play_strategy: Decides hit/stand/double/split/surrender
            dealer_play_strategy: Decides hit/stand for the dealer only
            bet_strategy: Stake for each round
            count_strategy: Running-count tags
            insurance_strategy: Whether to insure against a dealer ace
            deck_count: Number of decks in the shoe
            contains_blank: Bury a cut card that forces a reshuffle
            max_splits: Splits allowed per round
            init_bet: Base stake
            dealer_cutoff: Dealer stands at or above this total
            allow_early_surrender: Table offers early surrender
            allow_late_surrender: Table offers late surrender
            rng: Random number generator for reproducible runs
            events: Emitter to report to (a silent one is created if omitted)
        """
        self.rng = rng or Random()
        self.init_bet = init_bet
        self.max_splits = max_splits
        self.allow_early_surrender = allow_early_surrender
        self.allow_late_surrender = allow_late_surrender
        self.count_strategy = count_strategy

        self.player = Player(
            play_strategy=player_play_strategy,
            bet_strategy=bet_strategy,
            insurance_strategy=insurance_strategy,
        )
        self.dealer = Dealer(play_strategy=dealer_play_strategy, cutoff=dealer_cutoff)
        self.events = events or EventEmitter()

        self.played_cards: list[Card] = []
        self.running_count = 0
        self.true_count = 0.0
        self.last_winner = Winner.NONE
        self.last_bet = init_bet
        self._splits_this_round = 0
        self._reshuffle_pending = False

        self.shoe = Shoe(deck_count=deck_count, contains_blank=contains_blank, rng=self.rng)
        self.new_shoe()

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="waiting_for_bet",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @classmethod
    def from_settings(
        cls,
        settings: "GameSettings",
        events: EventEmitter | None = None,
    ) -> "Game":
        """Build an engine from validated settings."""
        return cls(
            player_play_strategy=settings.player_play_strategy,
            dealer_play_strategy=settings.dealer_play_strategy,
            bet_strategy=settings.bet_strategy,
            count_strategy=settings.counting,
            insurance_strategy=settings.insurance_strategy,
            deck_count=settings.deck_count,
            contains_blank=settings.contains_blank,
            max_splits=settings.max_splits,
            init_bet=settings.init_bet,
            dealer_cutoff=settings.dealer_cutoff,
            allow_early_surrender=settings.allow_early_surrender,
            allow_late_surrender=settings.allow_late_surrender,
            rng=settings.make_rng(),
            events=events,
        )

    @property
    def phase(self) -> RoundPhase:
        """Get current round phase as enum."""
        return RoundPhase[self._machine_state.upper()]  # type: ignore[attr-defined]

    @property
    def deck_count(self) -> int:
        return self.shoe.deck_count

    @property
    def splits_remaining(self) -> int:
        return max(self.max_splits - self._splits_this_round, 0)

    @property
    def reshuffle_pending(self) -> bool:
        """The cut card came out; the shoe is rebuilt when hands are reset."""
        return self._reshuffle_pending

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to engine events."""
        self.events.subscribe(handler, event_type)

    # -- shoe and count -------------------------------------------------

    def new_shoe(self) -> None:
        """Rebuild and shuffle the shoe and restart the count."""
        self.shoe.rebuild(self.rng)
        self.played_cards.clear()
        self.running_count = 0
        self.true_count = 0.0
        self._reshuffle_pending = False
        logger.debug("Shoe rebuilt with %d cards", len(self.shoe))
        self.events.emit_new(EventType.SHOE_SHUFFLED, cards=len(self.shoe))

    def draw(self) -> Card:
        """
        Draw the next playable card.

        An empty shoe is rebuilt on the spot. The cut card is discarded
        without being counted and schedules a reshuffle for the next round.
        """
        while True:
            card = self.shoe.draw()
            if card is None:
                logger.debug("Shoe exhausted mid-round, rebuilding")
                self.new_shoe()
                card = self.shoe.draw()
                if card is None:
                    raise InvariantViolation("Rebuilt shoe is empty")

            if card.is_blank:
                self._reshuffle_pending = True
                logger.debug("Cut card drawn with %d cards left", len(self.shoe))
                self.events.emit_new(EventType.BLANK_DRAWN, cards_left=len(self.shoe))
                continue

            self.played_cards.append(card)
            self.update_count(card)
            return card

    def update_count(self, card: Card) -> None:
        """Apply the counting system's tag for ``card``."""
        self.running_count += self.count_strategy(card)
        self.true_count = self.running_count / self.deck_count

    # -- table setup ----------------------------------------------------

    def deal(self, bet: int | None = None) -> None:
        """
        Deal until every player hand and the dealer hold two cards.

        Creates the player's hand with ``bet`` if there is none. Hands that
        already hold two cards are left alone.
        """
        if self.phase is RoundPhase.WAITING_FOR_BET:
            self.place_bet()
        elif self.phase is not RoundPhase.DEALING:
            raise InvariantViolation(f"Cannot deal during {self.phase}")

        stake = self.init_bet if bet is None else bet
        if not self.player.hands:
            self.player.hands.append(Hand(init_bet=stake))
            self.events.emit_new(EventType.BET_PLACED, amount=stake)
        if self.dealer.hand is None:
            self.dealer.hand = Hand(init_bet=stake)

        # Player, dealer, player, dealer
        for _ in range(2):
            for hand in [*self.player.hands, self.dealer.hand]:
                if len(hand.cards) < 2:
                    self._deal_card_to_hand(hand)

        for hand in [*self.player.hands, self.dealer.hand]:
            if hand.state is HandState.INIT:
                hand.set_state(HandState.PLAYING)

        self.events.emit_new(
            EventType.ROUND_STARTED,
            player=[str(hand) for hand in self.player.hands],
            upcard=self.dealer.upcard,
        )

    def set_player_hands(self, hands: list[Hand]) -> None:
        """Seat prepared hands for the player."""
        for hand in hands:
            if hand.state is HandState.INIT:
                hand.set_state(HandState.PLAYING)
        self.player.hands = list(hands)

    def set_dealer_hand(self, hand: Hand) -> None:
        """Seat a prepared hand for the dealer."""
        if hand.state is HandState.INIT:
            hand.set_state(HandState.PLAYING)
        self.dealer.hand = hand

    def reset_hands(self) -> None:
        """Clear both seats; rebuild the shoe if the cut card came out."""
        self.player.hands.clear()
        self.dealer.hand = None
        self._splits_this_round = 0
        self.reset_round()
        if self._reshuffle_pending:
            self.new_shoe()

    # -- hand operations ------------------------------------------------

    def _deal_card_to_hand(self, hand: Hand) -> Card:
        card = self.draw()
        hand.add_card(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=card,
            hand="dealer" if hand is self.dealer.hand else "player",
            hand_value=hand.value,
        )
        return card

    def hit_player(self, hand: Hand) -> Card:
        """Draw one card into a player hand."""
        self.player.index_of(hand)
        card = self._deal_card_to_hand(hand)
        self.events.emit_new(EventType.PLAYER_HIT, hand_value=hand.value)
        return card

    def hit_dealer(self) -> Card:
        """Draw one card into the dealer hand."""
        if self.dealer.hand is None:
            raise InvariantViolation("Dealer has no hand to hit")
        card = self._deal_card_to_hand(self.dealer.hand)
        self.events.emit_new(EventType.DEALER_HITS, hand_value=self.dealer.hand.value)
        return card

    def split_hand(self, hand: Hand) -> tuple[Hand, Hand]:
        """
        Replace a pair with two split hands in the same position.

        Each child keeps one of the pair (an ace plays soft again), draws
        one fresh card and inherits the bet.
        """
        index = self.player.index_of(hand)
        if len(hand.cards) != 2 or not hand.is_pair:
            raise InvariantViolation(f"Cannot split {hand}: not a two-card pair")
        if self.splits_remaining <= 0:
            raise InvariantViolation(f"Cannot split {hand}: no splits remaining")

        children = []
        for card in hand.cards:
            child = Hand(init_bet=hand.init_bet, state=HandState.PLAYING, split_child=True)
            child.add_card(card.inflated())
            children.append(child)
        for child in children:
            self._deal_card_to_hand(child)

        self.player.hands[index:index + 1] = children
        self._splits_this_round += 1
        self.events.emit_new(
            EventType.PLAYER_SPLIT,
            hands=[str(child) for child in children],
        )
        return children[0], children[1]

    def double_hand(self, hand: Hand) -> Card:
        """Draw exactly one card, double the stake and finish the hand."""
        self.player.index_of(hand)
        if not hand.can_double:
            raise InvariantViolation(f"Cannot double {hand}")
        card = self._deal_card_to_hand(hand)
        hand.doubled = True
        hand.set_state(HandState.FINISHED)
        self.events.emit_new(EventType.PLAYER_DOUBLE, hand_value=hand.value)
        return card

    def surrender(self, hand: Hand, state: HandState) -> None:
        """Give up a hand early or late, as the table allows."""
        self.player.index_of(hand)
        if state is HandState.EARLY_SURRENDER:
            allowed = self.allow_early_surrender
        elif state is HandState.LATE_SURRENDER:
            allowed = self.allow_late_surrender
        else:
            raise InvariantViolation(f"{state} is not a surrender")
        if not allowed:
            raise InvariantViolation(f"Table does not offer {state.name.lower()}")

        hand.set_state(state)
        self.events.emit_new(EventType.PLAYER_SURRENDER, kind=state.name)

    def stand_player(self, hand: Hand) -> None:
        """Finish a player hand."""
        self.player.index_of(hand)
        hand.set_state(HandState.FINISHED)
        self.events.emit_new(EventType.PLAYER_STAND, hand_value=hand.value)

    # -- snapshots ------------------------------------------------------

    def get_state(self, hand: Hand | None = None) -> GameState:
        """Snapshot for a decision about ``hand`` (None for dealer decisions)."""
        upcard = self.dealer.upcard
        dealer_hand = self.dealer.hand
        return GameState(
            init_bet=self.init_bet,
            last_bet=self.last_bet,
            played_cards=tuple(self.played_cards),
            dealer_upcard=upcard,
            dealer_upcard_strength=upcard.upcard_strength if upcard else None,
            player_hand=hand.copy() if hand is not None else None,
            dealer_hand=dealer_hand.copy() if dealer_hand is not None else None,
            dealer_cutoff=self.dealer.cutoff,
            deck_count=self.deck_count,
            contains_blank=self.shoe.contains_blank,
            last_winner=self.last_winner,
            running_count=self.running_count,
            true_count=self.true_count,
            splits_remaining=self.splits_remaining,
            allow_early_surrender=self.allow_early_surrender,
            allow_late_surrender=self.allow_late_surrender,
        )

    # -- round ----------------------------------------------------------

    def place_round_bet(self) -> int:
        """Ask the bet strategy for this round's stake."""
        bet = self.player.bet_strategy(self.get_state(Hand(init_bet=self.init_bet)))
        if bet <= 0:
            raise IllegalDecisionError(f"{self.player.bet_strategy} bet {bet}")
        return bet

    def play_hand(self) -> list[HandResult]:
        """
        Play out the dealt round and resolve every player hand.

        Sets ``last_winner`` and ``last_bet`` for the next round's bet.
        """
        if not self.player.hands or self.dealer.hand is None:
            raise InvariantViolation("play_hand called before the deal")

        self.start_player_turn()
        self.last_bet = self.player.hands[0].init_bet
        self._offer_insurance()
        self._play_player_hands()

        self.start_dealer_turn()
        self._play_dealer_hand()

        self.resolve()
        results = self._resolve_hands()
        self.last_winner = round_winner(results)
        self.finish_round()

        self.events.emit_new(EventType.ROUND_ENDED, winner=self.last_winner)
        return results

    def _offer_insurance(self) -> None:
        upcard = self.dealer.upcard
        if upcard is None or not upcard.is_ace:
            return
        for hand in self.player.hands:
            if self.player.insurance_strategy(self.get_state(hand)):
                hand.insured = True
                self.events.emit_new(EventType.INSURANCE_TAKEN, bet=hand.init_bet)

    def _play_player_hands(self) -> None:
        while (hand := self.player.open_hand()) is not None:
            if hand.is_busted:
                hand.set_state(HandState.FINISHED)
                continue
            if hand.is_natural_candidate and not hand.natural:
                hand.natural = True
                self.events.emit_new(EventType.PLAYER_NATURAL)

            decision = self.player.play_strategy(self.get_state(hand))
            self._apply_decision(hand, decision)

    def _apply_decision(self, hand: Hand, decision: PlayerDecision) -> None:
        if decision is PlayerDecision.HIT:
            self.hit_player(hand)
        elif decision is PlayerDecision.STAND:
            self.stand_player(hand)
        elif decision is PlayerDecision.DOUBLE:
            self.double_hand(hand)
        elif decision is PlayerDecision.SPLIT:
            self.split_hand(hand)
        elif decision is PlayerDecision.EARLY_SURRENDER:
            self.surrender(hand, HandState.EARLY_SURRENDER)
        elif decision is PlayerDecision.LATE_SURRENDER:
            self.surrender(hand, HandState.LATE_SURRENDER)
        else:
            raise IllegalDecisionError(f"Unknown decision {decision!r}")

    def _play_dealer_hand(self) -> None:
        hand = self.dealer.hand
        assert hand is not None

        while not hand.is_finished:
            if hand.is_natural_candidate:
                hand.natural = True
            if hand.is_busted:
                hand.set_state(HandState.FINISHED)
                break

            decision = self.dealer.play_strategy(self.get_state())
            if decision not in DEALER_DECISIONS:
                raise IllegalDecisionError(
                    f"{self.dealer.play_strategy} returned {decision} for the dealer"
                )
            if decision is PlayerDecision.HIT:
                self.hit_dealer()
            else:
                hand.set_state(HandState.FINISHED)
                self.events.emit_new(EventType.DEALER_STANDS, hand_value=hand.value)

    def _resolve_hands(self) -> list[HandResult]:
        dealer_hand = self.dealer.hand
        assert dealer_hand is not None

        results = []
        for hand in self.player.hands:
            winner, end_state = resolve_hand(hand, dealer_hand)
            results.append((winner, end_state))
            self.events.emit_new(
                EventType.HAND_RESOLVED,
                winner=winner,
                payoff=end_state.payoff(winner),
            )
        return results
