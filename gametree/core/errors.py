"""
Errors raised while playing or evaluating a game.

Every error aborts the current play/evaluation call and is surfaced to the
caller unchanged. GameError itself is used for conditions that fit none of
the specific classes.
"""

from typing import Any, Optional, Sequence


class GameError(Exception):
    """Base class, and catch-all for unanticipated conditions."""


class IllegalAction(GameError):
    """An action was applied that is not legal in the given state."""

    def __init__(self, state: Any, action: Any):
        self.state = state
        self.action = action
        super().__init__(f"Illegal action {action!r} in state {state!r}")


class GameOver(GameError):
    """An action or evaluation was requested on a terminal state."""

    def __init__(self, state: Any, action: Optional[Any] = None):
        self.state = state
        self.action = action
        if action is None:
            message = f"Game is already over in state {state!r}"
        else:
            message = f"Cannot apply {action!r}: game is already over in state {state!r}"
        super().__init__(message)


class NoLegalActions(GameError):
    """
    A non-terminal state has no legal actions.

    Never expected in normal play: it marks a game that fails to report
    its terminal outcome.
    """

    def __init__(self, state: Any):
        self.state = state
        super().__init__(f"No legal actions in non-terminal state {state!r}")


class StrategyFailure(GameError):
    """A strategy could not pick among otherwise valid evaluations."""

    def __init__(self, state: Any):
        self.state = state
        super().__init__(f"Strategy could not choose an action in state {state!r}")


class EvaluatorFailure(GameError):
    """Evaluations of the named actions could not be ordered or combined."""

    def __init__(self, state: Any, actions: Sequence[Any], reason: str = ""):
        self.state = state
        self.actions = list(actions)
        self.reason = reason
        message = f"Evaluator failed on actions {self.actions!r} in state {state!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
