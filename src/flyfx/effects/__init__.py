"""
Trajectory effects

- fly_to: eased slide-and-shrink of a clone
- cannon_ball: linear X with gravity on Y
- projectile: gravity arc turned along its heading
"""

from .base import BaseEffect
from .fly_to import FlyToEffect
from .cannon_ball import CannonBallEffect
from .projectile import ProjectileEffect

__all__ = [
    "BaseEffect",
    "FlyToEffect",
    "CannonBallEffect",
    "ProjectileEffect",
]
