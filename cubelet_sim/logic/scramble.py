# cubelet_sim/logic/scramble.py
from __future__ import annotations

import random
from typing import List, Optional

from cubelet_sim.core.rotation import AXES, LAYERS, Move

# Los 12 cuartos de vuelta legales (3 ejes x 2 capas x 2 sentidos)
ALL_MOVES: List[Move] = [
    Move(axis, layer, clockwise)
    for axis in AXES
    for layer in LAYERS
    for clockwise in (True, False)
]


def random_move(rng: random.Random) -> Move:
    """Sortea un cuarto de vuelta uniforme entre los 12 legales.

    Eje, capa y sentido se sortean de forma independiente y uniforme.

    Args:
        rng: Generador aleatorio a usar.

    Returns:
        El movimiento sorteado.
    """
    axis = rng.choice(AXES)
    layer = rng.choice(LAYERS)
    clockwise = rng.choice((True, False))
    return Move(axis, layer, clockwise)


def generate_scramble(n: int, seed: Optional[int] = None) -> List[Move]:
    """Genera una secuencia de mezcla (scramble) aleatoria para el cubo.

    A diferencia de una mezcla "de competencia", no se evitan movimientos
    repetidos ni movimientos que se cancelan: cada sorteo es independiente.

    Args:
        n: Cantidad de movimientos a generar.
        seed: Semilla opcional para obtener resultados reproducibles.

    Returns:
        Lista de `n` movimientos.

    Raises:
        ValueError: Si `n` es menor o igual a 0.
    """
    if n <= 0:
        raise ValueError("n debe ser mayor que 0.")

    rng = random.Random(seed)
    return [random_move(rng) for _ in range(n)]
