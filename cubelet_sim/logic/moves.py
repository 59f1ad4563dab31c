# cubelet_sim/logic/moves.py
from __future__ import annotations

from typing import Dict, List, Set, Tuple

from cubelet_sim.core.errors import InvalidMove
from cubelet_sim.core.rotation import Axis, Move

VALID_FACES: Set[str] = {"U", "D", "L", "R", "F", "B"}
VALID_SUFFIX: Set[str] = {"", "'", "2"}

# Cara nombrada -> (eje, capa, sentido del giro horario visto desde esa cara)
FACE_TO_MOVE: Dict[str, Tuple[Axis, int, bool]] = {
    "R": ("x", 1, False),
    "L": ("x", -1, True),
    "U": ("y", 1, True),
    "D": ("y", -1, False),
    "F": ("z", 1, False),
    "B": ("z", -1, True),
}
_MOVE_TO_FACE: Dict[Tuple[str, int], str] = {
    (axis, layer): face for face, (axis, layer, _) in FACE_TO_MOVE.items()
}


def normalize_token(tok: str) -> str:
    """Normaliza un token de movimiento a un formato estándar.

    Reglas principales:
    - Elimina espacios y convierte comilla tipográfica (’ o ‘) a comilla simple (').
    - Acepta notación de una cara con sufijo opcional:
        - ""  (ej: "R")
        - "'" (ej: "R'")
        - "2" (ej: "R2")
    - Corrige el caso típico "D2'" -> "D2" (el inverso de un 180° es el mismo).

    Args:
        tok: Token de movimiento (por ejemplo: "R", "U'", "F2", "D2'").

    Returns:
        Token normalizado (por ejemplo: "D2'" -> "D2").

    Raises:
        InvalidMove: Si la cara no es válida o si el sufijo no es válido.
    """
    tok = tok.strip().replace("’", "'").replace("‘", "'")
    if not tok:
        return ""

    # Minúsculas ("r", "u") son giros dobles de capa: no soportados
    base = tok[0]
    suf = tok[1:]

    if base not in VALID_FACES:
        raise InvalidMove(f"Movimiento inválido: {tok}")

    if suf == "2'":
        suf = "2"

    if suf not in VALID_SUFFIX:
        raise InvalidMove(f"Sufijo inválido en: {tok}")

    return base + suf


def inverse_move(m: str) -> str:
    """Devuelve el movimiento inverso de un token.

    Ejemplos:
        - "R"  -> "R'"
        - "R'" -> "R"
        - "R2" -> "R2"

    Raises:
        InvalidMove: Si `m` no es un token válido.
    """
    m = normalize_token(m)
    if not m:
        return m

    base, suf = m[0], m[1:]
    if suf == "":
        return base + "'"
    if suf == "'":
        return base
    return m


def parse_sequence(text: str) -> List[str]:
    """Convierte una secuencia escrita como texto en una lista de tokens normalizados.

    Por ejemplo: "R U R' U'" -> ["R", "U", "R'", "U'"]

    Raises:
        InvalidMove: Si algún token es inválido.
    """
    return [normalize_token(t) for t in text.split() if t.strip()]


def token_to_moves(tok: str) -> List[Move]:
    """Traduce un token nombrado a cuartos de vuelta canónicos.

    Args:
        tok: Token como "R", "U'" o "F2".

    Returns:
        Lista con 1 movimiento (giro simple o inverso) o 2 (giro doble).
        Token vacío -> lista vacía.

    Raises:
        InvalidMove: Si el token es inválido.
    """
    tok = normalize_token(tok)
    if not tok:
        return []

    axis, layer, clockwise = FACE_TO_MOVE[tok[0]]
    suf = tok[1:]
    if suf == "'":
        return [Move(axis, layer, not clockwise)]
    if suf == "2":
        return [Move(axis, layer, clockwise)] * 2
    return [Move(axis, layer, clockwise)]


def sequence_to_moves(text: str) -> List[Move]:
    """Traduce una secuencia nombrada completa ("R U R' U'") a movimientos canónicos."""
    out: List[Move] = []
    for tok in parse_sequence(text):
        out.extend(token_to_moves(tok))
    return out


def move_to_token(move: Move) -> str:
    """Nombre en notación de caras de un movimiento canónico.

    Ejemplos:
        - Move("x", 1, False) -> "R"
        - Move("x", 1, True)  -> "R'"

    Raises:
        InvalidMove: Si el movimiento no corresponde a una capa exterior.
    """
    face = _MOVE_TO_FACE.get((move.axis, move.layer))
    if face is None:
        raise InvalidMove(f"Movimiento sin nombre de cara: {move}")
    return face if move.clockwise == FACE_TO_MOVE[face][2] else face + "'"
