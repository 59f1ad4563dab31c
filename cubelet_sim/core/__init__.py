from cubelet_sim.core.cube_state import (
    NEUTRAL,
    SIDE_COLORS,
    CubeState,
    Piece,
    all_positions,
    initial_state,
    validate_state,
)
from cubelet_sim.core.errors import CubeError, InvalidMove, InvalidState
from cubelet_sim.core.rotation import Move, apply_move, apply_moves

__all__ = [
    "NEUTRAL",
    "SIDE_COLORS",
    "CubeState",
    "Piece",
    "all_positions",
    "initial_state",
    "validate_state",
    "CubeError",
    "InvalidMove",
    "InvalidState",
    "Move",
    "apply_move",
    "apply_moves",
]
