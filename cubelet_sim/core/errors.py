# cubelet_sim/core/errors.py
from __future__ import annotations


class CubeError(Exception):
    """Error base de todo el núcleo del cubo."""


class InvalidMove(CubeError, ValueError):
    """Movimiento fuera de dominio (eje, capa o sentido inválidos).

    El estado del cubo no se modifica cuando se lanza este error.
    """


class InvalidState(CubeError, RuntimeError):
    """Estado de cubo que no cumple los invariantes (bug previo, no recuperable)."""
