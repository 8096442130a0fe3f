"""Error hierarchy for the coinche engine.

Every error is recoverable: the operation that raised it has left the round
exactly as it was before the call.
"""

from __future__ import annotations


class CoincheError(Exception):
    """Base class for all engine errors."""


class NotYourTurn(CoincheError):
    """Raised when a seat acts out of turn."""


class IllegalBid(CoincheError):
    """Raised when an auction action breaks the bidding rules."""


class BidTooLow(IllegalBid):
    """Raised when a contract bid does not exceed the current highest bid."""


class InvalidDouble(IllegalBid):
    """Raised when a double is not available to the seat."""


class InvalidRedouble(IllegalBid):
    """Raised when a redouble is not available to the seat."""


class AuctionClosed(IllegalBid):
    """Raised when the auction no longer accepts actions."""


class IllegalPlay(CoincheError):
    """Raised when a card cannot be played."""


class CardNotHeld(IllegalPlay):
    """Raised when the card is not in the player's hand."""


class MustFollowSuit(IllegalPlay):
    """Raised when the player holds the lead suit but played another."""


class MustTrump(IllegalPlay):
    """Raised when the player must cut with a trump."""


class MustOvertrump(IllegalPlay):
    """Raised when a trump was played under a higher trump the player could beat."""


class WrongPhase(CoincheError):
    """Raised when an action is submitted in the wrong round phase."""


class RoundNotInBiddingPhase(WrongPhase):
    pass


class RoundNotInPlayPhase(WrongPhase):
    pass


class RoundAlreadyTerminal(WrongPhase):
    pass


class TrickError(CoincheError):
    """Raised when trick play breaks ordering constraints."""


class ScoringError(CoincheError):
    """Raised when a round cannot be scored."""


class NoActiveRound(CoincheError):
    """Raised when a round action is submitted between rounds."""


class RoundInProgress(CoincheError):
    """Raised when a new round is started before the current one ends."""


class GameFinished(CoincheError):
    """Raised when a finished game is asked to deal another round."""
