# cubelet_sim/logic/sequencer.py
from __future__ import annotations

import enum
import logging
import random
from typing import Callable, List, Optional, Tuple

from cubelet_sim.config import SCRAMBLE_LENGTH
from cubelet_sim.core.cube_state import CubeState, initial_state
from cubelet_sim.core.rotation import Move, apply_move, check_move
from cubelet_sim.logic.scramble import random_move

logger = logging.getLogger(__name__)

MoveListener = Callable[[Move, CubeState], None]
CompleteListener = Callable[[], None]


class SequencerStatus(enum.Enum):
    IDLE = "idle"
    SCRAMBLING = "scrambling"


class MoveSequencer:
    """Dueño del estado actual del cubo y de la máquina de estados de mezcla.

    No programa tiempo real por su cuenta: el host (UI o test) llama a `tick()`
    una vez por frame. Mientras hay una mezcla activa, cada tick aplica un
    movimiento aleatorio; al llegar a 0 movimientos restantes vuelve a `IDLE`
    y avisa a los listeners de fin exactamente una vez.

    Listeners:
        on_move(move, state): tras cada movimiento aplicado (mezcla, manual o undo).
        on_complete(): al terminar una mezcla completa (no al cancelarla).
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        scramble_length: int = SCRAMBLE_LENGTH,
        on_move: Optional[MoveListener] = None,
        on_complete: Optional[CompleteListener] = None,
    ) -> None:
        """Crea el secuenciador con el cubo resuelto y en estado `IDLE`.

        Args:
            rng: Generador aleatorio (inyectable para tests reproducibles).
            scramble_length: Movimientos por mezcla.
            on_move: Listener opcional de movimientos.
            on_complete: Listener opcional de fin de mezcla.

        Raises:
            ValueError: Si `scramble_length` es menor o igual a 0.
        """
        if scramble_length <= 0:
            raise ValueError("scramble_length debe ser mayor que 0.")

        self._rng: random.Random = rng if rng is not None else random.Random()
        self._scramble_length: int = scramble_length

        self._state: CubeState = initial_state()
        self._status: SequencerStatus = SequencerStatus.IDLE
        self._moves_remaining: int = 0
        self._history: List[Move] = []

        self._move_listeners: List[MoveListener] = []
        self._complete_listeners: List[CompleteListener] = []
        if on_move is not None:
            self.add_move_listener(on_move)
        if on_complete is not None:
            self.add_complete_listener(on_complete)

    # --------------------------
    # Consultas
    # --------------------------
    def get_state(self) -> CubeState:
        """Último estado publicado (inmutable, seguro de leer desde el render)."""
        return self._state

    def is_scrambling(self) -> bool:
        return self._status is SequencerStatus.SCRAMBLING

    @property
    def status(self) -> SequencerStatus:
        return self._status

    @property
    def moves_remaining(self) -> int:
        return self._moves_remaining

    @property
    def history(self) -> Tuple[Move, ...]:
        """Movimientos aplicados desde el último reset, en orden."""
        return tuple(self._history)

    # --------------------------
    # Listeners
    # --------------------------
    def add_move_listener(self, cb: MoveListener) -> None:
        self._move_listeners.append(cb)

    def add_complete_listener(self, cb: CompleteListener) -> None:
        self._complete_listeners.append(cb)

    # --------------------------
    # Comandos
    # --------------------------
    def scramble(self) -> None:
        """Inicia una mezcla; si ya hay una en curso no hace nada."""
        if self.is_scrambling():
            logger.debug("scramble() ignorado: ya hay una mezcla en curso")
            return

        self._status = SequencerStatus.SCRAMBLING
        self._moves_remaining = self._scramble_length
        logger.info("Mezcla iniciada (%d movimientos)", self._scramble_length)

    def tick(self) -> Optional[Move]:
        """Avanza un paso de la mezcla (una llamada por frame del host).

        Returns:
            El movimiento aplicado, o None si no hay mezcla activa.
        """
        if not self.is_scrambling():
            return None

        move = random_move(self._rng)
        self._state = apply_move(self._state, move)
        self._history.append(move)

        self._moves_remaining -= 1
        finished = self._moves_remaining == 0
        if finished:
            self._status = SequencerStatus.IDLE

        logger.debug("tick: %s (quedan %d)", move, self._moves_remaining)

        # Aviso de fin antes que los listeners de movimiento
        if finished:
            logger.info("Mezcla terminada")
            for cb in list(self._complete_listeners):
                cb()

        self._notify_move(move)
        return move

    def cancel(self) -> None:
        """Detiene la mezcla en curso conservando el estado actual.

        No se dispara el aviso de fin. Sin mezcla activa no hace nada.
        """
        if not self.is_scrambling():
            return

        logger.info("Mezcla cancelada (quedaban %d movimientos)", self._moves_remaining)
        self._status = SequencerStatus.IDLE
        self._moves_remaining = 0

    def reset(self) -> None:
        """Cancela cualquier mezcla y vuelve al cubo resuelto."""
        self.cancel()
        self._state = initial_state()
        self._history.clear()
        logger.info("Cubo reiniciado a estado resuelto")

    def apply(self, move: Move) -> bool:
        """Aplica un giro manual (solo en `IDLE`).

        Args:
            move: Movimiento a aplicar.

        Returns:
            True si se aplicó; False si hay una mezcla en curso (sin efecto).

        Raises:
            InvalidMove: Si el movimiento está fuera de dominio.
        """
        check_move(move)
        if self.is_scrambling():
            return False

        self._state = apply_move(self._state, move)
        self._history.append(move)
        self._notify_move(move)
        return True

    def undo(self) -> Optional[Move]:
        """Deshace el último movimiento del historial (solo en `IDLE`).

        Returns:
            El movimiento inverso aplicado, o None si no había nada que deshacer
            o hay una mezcla en curso.
        """
        if self.is_scrambling() or not self._history:
            return None

        inv = self._history.pop().inverse()
        self._state = apply_move(self._state, inv)
        self._notify_move(inv)
        return inv

    def _notify_move(self, move: Move) -> None:
        for cb in list(self._move_listeners):
            cb(move, self._state)
