# axle_client/resources/__init__.py

from .base import LifecycleState, Resource
from .api import Api
from .key import Key
from .keyring import KeyRing

__all__ = [
    "LifecycleState",
    "Resource",
    "Api",
    "Key",
    "KeyRing",
]
