"""Base AI class for Nardis computer players."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nardis.engine.nardis import Nardis
    from nardis.models.game_data import HandleTurnInfo
    from nardis.models.player import Player


class BaseAI(ABC):
    """Abstract decision policy for computer players.

    A policy is handed the orchestrator and the acting player on every turn
    and may only act through the orchestrator's public operations, passing
    the acting player explicitly.

    Attributes:
        last_reasoning: Explanation of the last turn's decisions.
    """

    def __init__(self) -> None:
        self.last_reasoning = ""

    @abstractmethod
    def take_turn(self, game: "Nardis", player: "Player", info: "HandleTurnInfo") -> None:
        """Make this turn's decisions for player.

        Args:
            game: The orchestrator to act through.
            player: The acting computer player.
            info: Turn payload for the acting player.
        """

    def get_reasoning(self) -> str:
        """Get explanation for last decision.

        Returns:
            String explaining the decision reasoning.
        """
        return self.last_reasoning
