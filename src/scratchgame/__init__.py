from scratchgame.config import load_config, parse_config
from scratchgame.contracts import ConfigurationError, GameConfig, InvalidBetError, RoundResult
from scratchgame.engine import GameEngine

__version__ = "1.0.0"

__all__ = [
    "ConfigurationError",
    "GameConfig",
    "GameEngine",
    "InvalidBetError",
    "RoundResult",
    "load_config",
    "parse_config",
]
