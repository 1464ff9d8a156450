from dataclasses import dataclass
from typing import Tuple


@dataclass
class ArIDs:
    """Association rule left -> right over item ids. Only confidence is filled in later."""
    left: Tuple[int, ...] = ()
    right: Tuple[int, ...] = ()
    confidence: float = 0.0

    def __post_init__(self):
        self.left = tuple(self.left)
        self.right = tuple(self.right)

    def to_dict(self):
        return {
            'left': list(self.left),
            'right': list(self.right),
            'confidence': self.confidence
        }
