"""
Constantes de configuración del simulador.
"""
from __future__ import annotations

import logging
from typing import Dict, Tuple

Vec3f = Tuple[float, float, float]

# Mezcla
SCRAMBLE_LENGTH = 20

# Ventana / timers
WINDOW_TITLE = "Cubelet 3D - PySide6"
TICK_INTERVAL_MS = 60   # un tick del secuenciador por frame de mezcla
ANIM_INTERVAL_MS = 16   # ~60fps
ANIM_STEP_DEG = 9.0     # grados por frame en giros manuales

# Colores del modelo -> RGB (0..1)
PALETTE_RGB: Dict[str, Vec3f] = {
    "W": (1.0, 1.0, 1.0),
    "Y": (1.0, 1.0, 0.0),
    "O": (1.0, 0.5, 0.0),
    "R": (1.0, 0.0, 0.0),
    "G": (0.0, 0.85, 0.0),
    "B": (0.0, 0.35, 1.0),
    "K": (0.05, 0.05, 0.06),
}
BACKGROUND_RGB: Vec3f = (0.10, 0.10, 0.12)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: int = logging.INFO) -> None:
    """Configura el logging raíz del proceso (una sola vez, desde `main.py`).

    Args:
        level: Nivel mínimo de los mensajes a mostrar.
    """
    logging.basicConfig(level=level, format=LOG_FORMAT)
