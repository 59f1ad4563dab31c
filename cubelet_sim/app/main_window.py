# cubelet_sim/app/main_window.py
from __future__ import annotations

import logging
from typing import List, Optional

from PySide6.QtCore import QTimer
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from cubelet_sim.config import TICK_INTERVAL_MS, WINDOW_TITLE
from cubelet_sim.core.cube_state import CubeState
from cubelet_sim.core.errors import InvalidMove
from cubelet_sim.core.rotation import Move
from cubelet_sim.logic.moves import move_to_token, sequence_to_moves, token_to_moves
from cubelet_sim.logic.sequencer import MoveSequencer
from cubelet_sim.render.cube_gl_widget import CubeGLWidget

logger = logging.getLogger(__name__)

FACE_BUTTONS: List[str] = ["U", "D", "L", "R", "F", "B"]


class MainWindow(QMainWindow):
    """Ventana principal del simulador 3D.

    Esta clase coordina:
    - El secuenciador (`MoveSequencer`), dueño del estado del cubo.
    - La visualización 3D (`CubeGLWidget`), que solo lee el estado.
    - El timer de frames que llama a `sequencer.tick()` mientras se mezcla.
    """

    def __init__(self, sequencer: Optional[MoveSequencer] = None) -> None:
        """Inicializa la ventana principal, crea la UI y conecta señales."""
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)

        # --- Modelo + render ---
        self.sequencer: MoveSequencer = sequencer if sequencer is not None else MoveSequencer()
        self.gl_widget: CubeGLWidget = CubeGLWidget(self.sequencer, self)

        self._tick_timer: QTimer = QTimer(self)
        self._tick_timer.setInterval(TICK_INTERVAL_MS)
        self._tick_timer.timeout.connect(self._on_tick)

        # --- UI ---
        root = QWidget()
        root_layout = QHBoxLayout(root)
        root_layout.addWidget(self.gl_widget, 1)

        panel = QWidget()
        panel_layout = QVBoxLayout(panel)
        panel.setFixedWidth(300)

        self.lbl_state = QLabel("")
        panel_layout.addWidget(self.lbl_state)

        row_main = QHBoxLayout()
        self.btn_scramble = QPushButton("Scramble")
        self.btn_reset = QPushButton("Reset")
        self.btn_undo = QPushButton("Undo")
        row_main.addWidget(self.btn_scramble)
        row_main.addWidget(self.btn_reset)
        row_main.addWidget(self.btn_undo)
        panel_layout.addLayout(row_main)

        # Giros por cara (notación U D L R F B)
        panel_layout.addWidget(QLabel("Girar cara"))
        grid = QGridLayout()
        self.face_buttons: List[QPushButton] = []
        for col, face in enumerate(FACE_BUTTONS):
            for row, tok in enumerate((face, face + "'")):
                btn = QPushButton(tok)
                btn.clicked.connect(lambda _checked=False, t=tok: self.on_face_turn(t))
                grid.addWidget(btn, row, col)
                self.face_buttons.append(btn)
        panel_layout.addLayout(grid)

        # Aplicar secuencia
        panel_layout.addWidget(QLabel("Aplicar secuencia (ej: R U R' U')"))
        self.txt_seq = QLineEdit()
        self.txt_seq.setPlaceholderText("Ej: R U R' U'")
        panel_layout.addWidget(self.txt_seq)
        self.btn_apply = QPushButton("Aplicar")
        panel_layout.addWidget(self.btn_apply)

        panel_layout.addWidget(QLabel("Historial de movimientos"))
        self.list_history = QListWidget()
        panel_layout.addWidget(self.list_history, 1)

        root_layout.addWidget(panel)
        self.setCentralWidget(root)

        # --- Conexiones ---
        self.btn_scramble.clicked.connect(self.on_scramble)
        self.btn_reset.clicked.connect(self.on_reset)
        self.btn_undo.clicked.connect(self.on_undo)
        self.btn_apply.clicked.connect(self.on_apply_sequence)
        self.txt_seq.returnPressed.connect(self.on_apply_sequence)

        self.sequencer.add_move_listener(self._on_move_applied)
        self.sequencer.add_complete_listener(self._on_scramble_complete)

        self.btn_undo.setShortcut("Ctrl+Z")
        self.btn_reset.setShortcut("Ctrl+R")

        self._refresh()

    # -------------------
    # Helpers UI
    # -------------------
    def _refresh(self) -> None:
        """Actualiza label de estado, historial y habilitación de controles."""
        state = self.sequencer.get_state()
        if self.sequencer.is_scrambling():
            text = f"Estado: mezclando... ({self.sequencer.moves_remaining})"
        elif state.is_solved():
            text = "Estado: resuelto ✅"
        else:
            text = "Estado: mezclado 🔄"
        self.lbl_state.setText(text)

        self.list_history.clear()
        for move in self.sequencer.history:
            self.list_history.addItem(move_to_token(move))
        self.list_history.scrollToBottom()

        self._set_controls_enabled(not self.sequencer.is_scrambling())
        self.gl_widget.update()

    def _set_controls_enabled(self, enabled: bool) -> None:
        """Habilita o deshabilita controles (deshabilitados durante la mezcla).

        Reset queda siempre habilitado: es la forma de cortar una mezcla.
        """
        self.btn_scramble.setEnabled(enabled)
        self.btn_undo.setEnabled(enabled and bool(self.sequencer.history))
        self.btn_apply.setEnabled(enabled)
        self.txt_seq.setEnabled(enabled)
        for btn in self.face_buttons:
            btn.setEnabled(enabled)

    def _show_status(self, msg: str) -> None:
        self.statusBar().showMessage(msg, 2000)

    # -------------------
    # Listeners del secuenciador
    # -------------------
    def _on_move_applied(self, move: Move, state: CubeState) -> None:
        self._refresh()

    def _on_scramble_complete(self) -> None:
        self._tick_timer.stop()
        self._show_status("Mezcla terminada.")
        self._refresh()

    def _on_tick(self) -> None:
        """Un frame del timer: avanza un movimiento de la mezcla."""
        if self.sequencer.tick() is None:
            self._tick_timer.stop()

    # -------------------
    # Botones
    # -------------------
    def on_scramble(self) -> None:
        """Mezcla el cubo: un movimiento aleatorio por tick del timer."""
        if self.sequencer.is_scrambling():
            return

        self.gl_widget.cancel_animation()
        self.sequencer.scramble()
        self._tick_timer.start()
        self._refresh()

    def on_reset(self) -> None:
        """Corta cualquier mezcla y vuelve al cubo resuelto."""
        self._tick_timer.stop()
        self.gl_widget.cancel_animation()
        self.sequencer.reset()
        self._show_status("Cubo reiniciado.")
        self._refresh()

    def on_undo(self) -> None:
        """Revierte el último movimiento del historial."""
        before = self.sequencer.get_state()
        inv = self.sequencer.undo()
        if inv is not None:
            self.gl_widget.animate_move(inv, before)

    def on_face_turn(self, token: str) -> None:
        """Aplica un giro de cara nombrado (ej: "R", "U'") con animación.

        Args:
            token: Movimiento en notación de caras.
        """
        before = self.sequencer.get_state()
        moves = token_to_moves(token)
        if len(moves) != 1:
            return
        if self.sequencer.apply(moves[0]):
            self.gl_widget.animate_move(moves[0], before)

    def on_apply_sequence(self) -> None:
        """Aplica una secuencia ingresada por el usuario (ej: "R U R' U'")."""
        seq = self.txt_seq.text().strip()
        if not seq or self.sequencer.is_scrambling():
            return

        try:
            moves = sequence_to_moves(seq)
        except InvalidMove as exc:
            logger.warning("Secuencia inválida %r: %s", seq, exc)
            QMessageBox.warning(self, "Secuencia inválida", str(exc))
            return

        self.gl_widget.cancel_animation()
        for move in moves:
            self.sequencer.apply(move)
        self._show_status(f"Aplicados {len(moves)} movimientos.")

    def closeEvent(self, event: QCloseEvent) -> None:
        """Evento de cierre de ventana: detiene timers activos."""
        self._tick_timer.stop()
        self.gl_widget.cancel_animation()
        event.accept()
