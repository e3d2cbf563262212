from .detector import WinDetector, resolve_groups
from .game import GameEngine
from .generator import MatrixGenerator
from .picker import WeightedPicker
from .reward import RewardCalculator

__all__ = [
    "GameEngine",
    "MatrixGenerator",
    "RewardCalculator",
    "WeightedPicker",
    "WinDetector",
    "resolve_groups",
]
