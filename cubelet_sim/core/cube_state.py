# cubelet_sim/core/cube_state.py
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Tuple

from cubelet_sim.core.errors import InvalidState

Color = str  # Letras: "R", "O", "Y", "W", "G", "B" y "K" para el interior
Vec3i = Tuple[int, int, int]
Colors = Tuple[Color, Color, Color, Color, Color, Color]
StateHash = Tuple[Tuple[Vec3i, Colors], ...]

# Orden canónico de caras: +X, -X, +Y, -Y, +Z, -Z
FACE_NAMES: Tuple[str, ...] = ("+X", "-X", "+Y", "-Y", "+Z", "-Z")
FACE_DIRECTIONS: Tuple[Vec3i, ...] = (
    (1, 0, 0),
    (-1, 0, 0),
    (0, 1, 0),
    (0, -1, 0),
    (0, 0, 1),
    (0, 0, -1),
)

# Color de cada lado del cubo resuelto, en el orden de FACE_DIRECTIONS
SIDE_COLORS: Tuple[Color, ...] = ("R", "O", "Y", "W", "G", "B")
NEUTRAL: Color = "K"
PALETTE: Tuple[Color, ...] = SIDE_COLORS + (NEUTRAL,)


def face_axis(face: int) -> int:
    """Índice de eje (0=x, 1=y, 2=z) de una cara del orden canónico."""
    return face // 2


def face_sign(face: int) -> int:
    """Signo (+1 o -1) de una cara del orden canónico."""
    return 1 if face % 2 == 0 else -1


def all_positions() -> List[Vec3i]:
    """Lista las 26 coordenadas válidas de piezas (todas menos el centro).

    Returns:
        Coordenadas (x, y, z) con componentes en {-1, 0, 1}, en orden lexicográfico.
    """
    return [
        (x, y, z)
        for x in (-1, 0, 1)
        for y in (-1, 0, 1)
        for z in (-1, 0, 1)
        if (x, y, z) != (0, 0, 0)
    ]


@dataclass(frozen=True)
class Piece:
    """Una de las 26 piezas móviles (cubelets) del cubo.

    Attributes:
        position: Posición actual en la grilla 3x3x3.
        colors: Color de cada cara de la pieza, en el orden de `FACE_DIRECTIONS`.
    """

    position: Vec3i
    colors: Colors

    def color_on(self, direction: Vec3i) -> Color:
        """Color que muestra la pieza hacia una dirección canónica.

        Args:
            direction: Una de las 6 direcciones de `FACE_DIRECTIONS`.

        Raises:
            KeyError: Si la dirección no es canónica.
        """
        return self.colors[_FACE_INDEX[direction]]


_FACE_INDEX: Dict[Vec3i, int] = {d: i for i, d in enumerate(FACE_DIRECTIONS)}


def _is_vec3i(pos: object) -> bool:
    return (
        isinstance(pos, tuple)
        and len(pos) == 3
        and all(isinstance(c, int) and not isinstance(c, bool) for c in pos)
    )


def _order_key(piece: Piece) -> tuple:
    # Posiciones mal formadas van al final; `validate_state` las rechaza
    pos = getattr(piece, "position", None)
    if _is_vec3i(pos):
        return (0, pos)
    return (1, repr(pos))


class CubeState:
    """Estado inmutable del cubo: colección de 26 piezas.

    Las piezas se guardan ordenadas por posición, así la igualdad entre estados
    no depende del orden en que se entregaron. El constructor no valida los
    invariantes (ver `validate_state`).
    """

    __slots__ = ("_pieces",)

    def __init__(self, pieces: Iterable[Piece]) -> None:
        self._pieces: Tuple[Piece, ...] = tuple(sorted(pieces, key=_order_key))

    @property
    def pieces(self) -> Tuple[Piece, ...]:
        return self._pieces

    def __iter__(self) -> Iterator[Piece]:
        return iter(self._pieces)

    def __len__(self) -> int:
        return len(self._pieces)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CubeState):
            return NotImplemented
        return self._pieces == other._pieces

    def __hash__(self) -> int:
        return hash(self._pieces)

    def __repr__(self) -> str:
        return f"CubeState({len(self._pieces)} piezas, resuelto={self.is_solved()})"

    def positions(self) -> List[Vec3i]:
        """Posiciones de todas las piezas, en el orden interno."""
        return [p.position for p in self._pieces]

    def piece_at(self, position: Vec3i) -> Piece:
        """Retorna la pieza que ocupa una posición.

        Args:
            position: Coordenada (x, y, z).

        Returns:
            La pieza en esa posición.

        Raises:
            KeyError: Si ninguna pieza ocupa la posición.
        """
        for p in self._pieces:
            if p.position == position:
                return p
        raise KeyError(position)

    def to_hashable(self) -> StateHash:
        """Convierte el estado a tuplas anidadas (útil para comparar y hashear)."""
        return tuple((p.position, p.colors) for p in self._pieces)

    def is_solved(self) -> bool:
        """Indica si cada cara exterior muestra el color de su lado.

        Returns:
            True si el cubo está resuelto; False en caso contrario.
        """
        for p in self._pieces:
            for i, color in enumerate(p.colors):
                if color != NEUTRAL and color != SIDE_COLORS[i]:
                    return False
        return True


def _solved_colors(position: Vec3i) -> Colors:
    colors = []
    for i in range(6):
        on_side = position[face_axis(i)] == face_sign(i)
        colors.append(SIDE_COLORS[i] if on_side else NEUTRAL)
    return tuple(colors)  # type: ignore[return-value]


def initial_state() -> CubeState:
    """Construye el estado resuelto (determinista, sin efectos laterales).

    Cada cara de una pieza muestra el color de su lado si y solo si la
    coordenada de la pieza en ese eje coincide con el signo de la cara; si no,
    muestra el color neutro.

    Returns:
        Un `CubeState` con las 26 piezas en estado resuelto.
    """
    return CubeState(Piece(pos, _solved_colors(pos)) for pos in all_positions())


_VALID_POSITIONS = frozenset(all_positions())
_SOLVED_SIGNATURES = Counter(
    tuple(sorted(_solved_colors(pos))) for pos in all_positions()
)


def validate_state(state: CubeState) -> None:
    """Verifica los invariantes del estado; falla rápido si algo está roto.

    Chequea:
        - Exactamente 26 piezas con posiciones distintas y válidas.
        - Cada pieza tiene 6 colores de la paleta.
        - Una cara tiene color de lado si y solo si apunta hacia afuera.
        - El multiconjunto de colores de cada pieza corresponde a una pieza
          del cubo resuelto (ningún color inventado, perdido ni duplicado).

    Args:
        state: Estado a validar.

    Raises:
        InvalidState: Si se viola algún invariante.
    """
    if not isinstance(state, CubeState):
        raise InvalidState(f"Se esperaba CubeState, se recibió {type(state).__name__}")

    if len(state) != len(_VALID_POSITIONS):
        raise InvalidState(f"El cubo debe tener 26 piezas, tiene {len(state)}")

    positions = state.positions()
    for pos in positions:
        if not _is_vec3i(pos):
            raise InvalidState(f"Posición inválida: {pos!r}")
    if set(positions) != _VALID_POSITIONS or len(set(positions)) != len(positions):
        raise InvalidState("Posiciones duplicadas, faltantes o fuera de rango")

    for p in state:
        if not isinstance(p.colors, tuple) or len(p.colors) != 6:
            raise InvalidState(f"La pieza en {p.position} no tiene 6 colores")

        for i, color in enumerate(p.colors):
            if color not in PALETTE:
                raise InvalidState(f"Color desconocido {color!r} en {p.position}")
            outward = p.position[face_axis(i)] == face_sign(i)
            if outward != (color != NEUTRAL):
                raise InvalidState(
                    f"Cara {FACE_NAMES[i]} de la pieza en {p.position} "
                    f"inconsistente con el borde ({color!r})"
                )

    signatures = Counter(tuple(sorted(p.colors)) for p in state)
    if signatures != _SOLVED_SIGNATURES:
        raise InvalidState("Los colores de las piezas no corresponden a un cubo válido")
