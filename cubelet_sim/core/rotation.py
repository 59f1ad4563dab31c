# cubelet_sim/core/rotation.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Literal, Tuple

from cubelet_sim.core.cube_state import CubeState, Colors, Piece, Vec3i, validate_state
from cubelet_sim.core.errors import InvalidMove

Axis = Literal["x", "y", "z"]
Matrix3 = Tuple[Vec3i, Vec3i, Vec3i]
FaceCycle = Tuple[int, int, int, int]

AXES: Tuple[Axis, ...] = ("x", "y", "z")
LAYERS: Tuple[int, ...] = (-1, 1)
AXIS_INDEX: Dict[str, int] = {"x": 0, "y": 1, "z": 2}


@dataclass(frozen=True)
class Move:
    """Cuarto de vuelta de una capa exterior.

    Attributes:
        axis: Eje de rotación ('x', 'y' o 'z').
        layer: Capa que gira sobre ese eje (-1 o +1).
        clockwise: Sentido del giro (convención de `ROTATION_MATRICES`).
    """

    axis: Axis
    layer: int
    clockwise: bool = True

    def inverse(self) -> "Move":
        """Movimiento que deshace a este (misma capa, sentido opuesto)."""
        return Move(self.axis, self.layer, not self.clockwise)

    def __str__(self) -> str:
        sense = "cw" if self.clockwise else "ccw"
        return f"{self.axis}{self.layer:+d} {sense}"


# Convención de sentido (fija, cubierta por tests):
#   X horario: (y, z) -> (-z, y)    antihorario: (y, z) -> (z, -y)
#   Y horario: (x, z) -> (-z, x)    antihorario: (x, z) -> (z, -x)
#   Z horario: (x, y) -> (-y, x)    antihorario: (x, y) -> (y, -x)
ROTATION_MATRICES: Dict[Tuple[Axis, bool], Matrix3] = {
    ("x", True): ((1, 0, 0), (0, 0, -1), (0, 1, 0)),
    ("x", False): ((1, 0, 0), (0, 0, 1), (0, -1, 0)),
    ("y", True): ((0, 0, -1), (0, 1, 0), (1, 0, 0)),
    ("y", False): ((0, 0, 1), (0, 1, 0), (-1, 0, 0)),
    ("z", True): ((0, -1, 0), (1, 0, 0), (0, 0, 1)),
    ("z", False): ((0, 1, 0), (-1, 0, 0), (0, 0, 1)),
}

# Ciclos de caras (índices de FACE_DIRECTIONS): el color de la cara c[0] pasa
# a c[1], el de c[1] a c[2], el de c[2] a c[3] y el de c[3] vuelve a c[0].
# Las dos caras sobre el eje de giro no aparecen.
FACE_CYCLES: Dict[Tuple[Axis, bool], FaceCycle] = {
    ("x", True): (2, 4, 3, 5),   # +Y -> +Z -> -Y -> -Z
    ("x", False): (2, 5, 3, 4),  # +Y -> -Z -> -Y -> +Z
    ("y", True): (0, 4, 1, 5),   # +X -> +Z -> -X -> -Z
    ("y", False): (0, 5, 1, 4),  # +X -> -Z -> -X -> +Z
    ("z", True): (0, 2, 1, 3),   # +X -> +Y -> -X -> -Y
    ("z", False): (0, 3, 1, 2),  # +X -> -Y -> -X -> +Y
}


def rotate_vector(v: Vec3i, matrix: Matrix3) -> Vec3i:
    """Aplica una matriz entera 3x3 a un vector (x, y, z)."""
    x, y, z = v
    return (
        matrix[0][0] * x + matrix[0][1] * y + matrix[0][2] * z,
        matrix[1][0] * x + matrix[1][1] * y + matrix[1][2] * z,
        matrix[2][0] * x + matrix[2][1] * y + matrix[2][2] * z,
    )


def permute_colors(colors: Colors, cycle: FaceCycle) -> Colors:
    """Mueve los colores de 4 caras a lo largo de un ciclo.

    Args:
        colors: Colores de la pieza en orden canónico.
        cycle: 4 índices de cara; el color de cycle[k] pasa a cycle[k+1].

    Returns:
        Nueva tupla de colores.
    """
    out = list(colors)
    for k in range(4):
        out[cycle[(k + 1) % 4]] = colors[cycle[k]]
    return tuple(out)  # type: ignore[return-value]


def check_move(move: Move) -> None:
    """Valida que un movimiento esté dentro del dominio.

    Args:
        move: Movimiento a validar.

    Raises:
        InvalidMove: Si el eje, la capa o el sentido no son válidos.
    """
    if not isinstance(move, Move):
        raise InvalidMove(f"Se esperaba Move, se recibió {type(move).__name__}")
    if move.axis not in AXES:
        raise InvalidMove(f"Eje inválido: {move.axis!r}")
    if (
        isinstance(move.layer, bool)
        or not isinstance(move.layer, int)
        or move.layer not in LAYERS
    ):
        raise InvalidMove(f"Capa inválida: {move.layer!r} (solo -1 o +1)")
    if not isinstance(move.clockwise, bool):
        raise InvalidMove(f"Sentido inválido: {move.clockwise!r}")


def turn_piece(piece: Piece, move: Move) -> Piece:
    """Gira una pieza de la capa: rota su posición y cicla sus caras.

    No verifica que la pieza pertenezca a la capa del movimiento.
    """
    key = (move.axis, move.clockwise)
    return Piece(
        rotate_vector(piece.position, ROTATION_MATRICES[key]),
        permute_colors(piece.colors, FACE_CYCLES[key]),
    )


def apply_move(state: CubeState, move: Move) -> CubeState:
    """Aplica un cuarto de vuelta y retorna el nuevo estado (función pura).

    Solo cambian las piezas cuya coordenada en `move.axis` es `move.layer`;
    el resto se copia tal cual. El estado de entrada nunca se modifica.

    Args:
        state: Estado actual del cubo.
        move: Movimiento a aplicar.

    Returns:
        Nuevo `CubeState`.

    Raises:
        InvalidMove: Si el movimiento está fuera de dominio.
        InvalidState: Si `state` no cumple los invariantes.
    """
    check_move(move)
    validate_state(state)

    i = AXIS_INDEX[move.axis]
    return CubeState(
        turn_piece(p, move) if p.position[i] == move.layer else p
        for p in state
    )


def apply_moves(state: CubeState, moves: Iterable[Move]) -> CubeState:
    """Aplica una secuencia de movimientos en orden.

    Args:
        state: Estado inicial.
        moves: Movimientos a aplicar.

    Returns:
        Estado luego del último movimiento (o `state` si no hay movimientos).
    """
    for move in moves:
        state = apply_move(state, move)
    return state
