"""Interactive ripple surface: wave-propagation core.

Example:
    from ripplesurf import RippleSimulation

    sim = RippleSimulation.from_plane(10.0, 14.0, 180, 252)
    sim.pointer_moved(0.1, -0.2, renderer.raycast)
    if sim.tick(mesh_heights):
        mesh.recompute_normals()
"""

from .errors import (
    RippleError,
    InvalidDimensions,
    TopologyMismatch,
    IndexOutOfRange,
    InvalidImpulse,
    ConfigError,
)
from .field import GridField
from .pointer import PointerTracker, PointerState, VelocityEstimate, WorldPoint
from .impulse import Impulse, inject
from .integrator import step
from .surface import SurfaceSync, apply
from .config import (
    InjectionProfile,
    SimulationParameters,
    load_parameters,
    save_parameters,
)
from .bump import CursorBump
from .simulation import RippleSimulation

__all__ = [
    'GridField',
    'PointerTracker',
    'PointerState',
    'VelocityEstimate',
    'WorldPoint',
    'Impulse',
    'inject',
    'step',
    'apply',
    'SurfaceSync',
    'InjectionProfile',
    'SimulationParameters',
    'load_parameters',
    'save_parameters',
    'CursorBump',
    'RippleSimulation',
    # Errors
    'RippleError',
    'InvalidDimensions',
    'TopologyMismatch',
    'IndexOutOfRange',
    'InvalidImpulse',
    'ConfigError',
]
