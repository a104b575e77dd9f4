"""Control module for rig state and commands"""

from .controller import RigController, RigStatus, finite_or_none

__all__ = [
    'RigController',
    'RigStatus',
    'finite_or_none'
]
