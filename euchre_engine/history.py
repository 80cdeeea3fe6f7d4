"""
Game history storage contract and an in-memory implementation
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from .results import GameResult


class HistoryRepository(ABC):
    """Persistence collaborator for finished games"""

    @abstractmethod
    def save(self, result: GameResult) -> bool:
        """Store a finished game. Returns False if it could not be stored."""
        ...

    @abstractmethod
    def get(self, game_id: str) -> Optional[GameResult]:
        ...

    @abstractmethod
    def list_all(self) -> List[GameResult]:
        """All stored games, newest first"""
        ...

    @abstractmethod
    def delete(self, game_id: str) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...

    def list_recent(self, limit: int = 10) -> List[GameResult]:
        return self.list_all()[:limit]

    def get_statistics(self) -> Dict[str, object]:
        """Aggregate statistics over every stored game, from team 0's point of view"""
        games = self.list_all()

        if not games:
            return {
                "total_games": 0,
                "wins": 0,
                "losses": 0,
                "win_rate": 0.0,
                "average_score": (0.0, 0.0),
                "total_hands_played": 0,
                "euchre_count": 0,
            }

        wins = sum(1 for g in games if g.winning_team == 0)
        total_0 = sum(g.final_score[0] for g in games)
        total_1 = sum(g.final_score[1] for g in games)

        return {
            "total_games": len(games),
            "wins": wins,
            "losses": len(games) - wins,
            "win_rate": wins / len(games) * 100,
            "average_score": (total_0 / len(games), total_1 / len(games)),
            "total_hands_played": sum(g.hands_played for g in games),
            "euchre_count": sum(g.euchre_count for g in games),
        }


class InMemoryHistoryRepository(HistoryRepository):
    """Keeps finished games in a dict; used by the CLI and tests"""

    def __init__(self):
        self._games: Dict[str, GameResult] = {}

    def save(self, result: GameResult) -> bool:
        self._games[result.id] = result
        return True

    def get(self, game_id: str) -> Optional[GameResult]:
        return self._games.get(game_id)

    def list_all(self) -> List[GameResult]:
        return sorted(self._games.values(), key=lambda g: g.timestamp, reverse=True)

    def delete(self, game_id: str) -> None:
        self._games.pop(game_id, None)

    def clear(self) -> None:
        self._games.clear()

    def __len__(self):
        return len(self._games)
