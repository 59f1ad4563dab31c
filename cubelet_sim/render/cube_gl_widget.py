# cubelet_sim/render/cube_gl_widget.py
from __future__ import annotations

import math
from typing import Dict, List, Optional, Tuple

from PySide6.QtCore import QPoint, QTimer, Qt
from PySide6.QtGui import QMouseEvent, QWheelEvent
from PySide6.QtOpenGLWidgets import QOpenGLWidget

from OpenGL.GL import (
    glBegin,
    glClear,
    glClearColor,
    glColor3f,
    glEnable,
    glEnd,
    glLoadIdentity,
    glMatrixMode,
    glRotatef,
    glTranslatef,
    glVertex3f,
    glViewport,
    GL_COLOR_BUFFER_BIT,
    GL_DEPTH_BUFFER_BIT,
    GL_DEPTH_TEST,
    GL_MODELVIEW,
    GL_PROJECTION,
    GL_QUADS,
)
from OpenGL.GLU import gluPerspective

from cubelet_sim.config import (
    ANIM_INTERVAL_MS,
    ANIM_STEP_DEG,
    BACKGROUND_RGB,
    PALETTE_RGB,
)
from cubelet_sim.core.cube_state import NEUTRAL, CubeState, Piece, face_axis, face_sign
from cubelet_sim.core.rotation import AXIS_INDEX, ROTATION_MATRICES, Axis, Move
from cubelet_sim.logic.sequencer import MoveSequencer

Vec3f = Tuple[float, float, float]

# Entrada (fila, columna) de la matriz de giro que vale sin(ángulo) para cada eje
_SIN_ENTRY: Dict[str, Tuple[int, int]] = {"x": (2, 1), "y": (0, 2), "z": (1, 0)}


def anim_sign(move: Move) -> int:
    """Signo del ángulo (regla de la mano derecha) con que se anima un movimiento."""
    r, c = _SIN_ENTRY[move.axis]
    return ROTATION_MATRICES[(move.axis, move.clockwise)][r][c]


class CubeGLWidget(QOpenGLWidget):
    """Widget OpenGL que dibuja el estado publicado por un `MoveSequencer`.

    Solo lee estado: cada `paintGL` pide `sequencer.get_state()` y dibuja las 26
    piezas (cuerpo negro + stickers en caras con color). Botón derecho orbita,
    la rueda hace zoom. Los giros manuales se animan con un QTimer.
    """

    def __init__(self, sequencer: MoveSequencer, parent=None) -> None:
        """Crea el widget y configura cámara y animación.

        Args:
            sequencer: Fuente del estado a dibujar.
            parent: Widget padre (Qt), opcional.
        """
        super().__init__(parent)
        self.sequencer: MoveSequencer = sequencer

        # Cámara / orbit
        self.yaw: float = 35.0
        self.pitch: float = -25.0
        self.distance: float = 9.0

        self._last_mouse_pos: QPoint = QPoint()
        self._orbiting: bool = False

        # Geometría de cada pieza (centros separados por 1.0)
        self.body_half: float = 0.48
        self.sticker_half: float = 0.40
        self.sticker_offset: float = 0.005

        # Animación: se dibuja el estado previo con la capa girando
        self.animating: bool = False
        self.anim_move: Optional[Move] = None
        self.anim_before: Optional[CubeState] = None
        self.anim_angle: float = 0.0
        self.anim_target: float = 90.0
        self.anim_step: float = ANIM_STEP_DEG

        self._anim_timer: QTimer = QTimer(self)
        self._anim_timer.setInterval(ANIM_INTERVAL_MS)
        self._anim_timer.timeout.connect(self._on_anim_tick)

        self.setFocusPolicy(Qt.ClickFocus)

    # --------------------------
    # OpenGL lifecycle
    # --------------------------
    def initializeGL(self) -> None:
        glClearColor(*BACKGROUND_RGB, 1.0)
        glEnable(GL_DEPTH_TEST)

    def resizeGL(self, w: int, h: int) -> None:
        """Ajusta viewport y proyección cuando cambia el tamaño del widget.

        Args:
            w: Ancho lógico del widget (Qt).
            h: Alto lógico del widget (Qt).
        """
        if h == 0:
            h = 1

        dpr = self.devicePixelRatioF()
        fb_w = int(w * dpr)
        fb_h = int(h * dpr)

        glViewport(0, 0, fb_w, fb_h)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(45.0, fb_w / float(fb_h), 0.1, 100.0)

        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

    def paintGL(self) -> None:
        """Dibuja el frame actual (estado publicado o animación en curso)."""
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self._apply_camera()

        if self.animating and self.anim_before is not None and self.anim_move is not None:
            move = self.anim_move
            i = AXIS_INDEX[move.axis]
            angle = anim_sign(move) * self.anim_angle
            for piece in self.anim_before:
                if piece.position[i] == move.layer:
                    self._draw_piece(piece, move.axis, angle)
                else:
                    self._draw_piece(piece)
            return

        for piece in self.sequencer.get_state():
            self._draw_piece(piece)

    def _apply_camera(self) -> None:
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()
        glTranslatef(0.0, 0.0, -self.distance)
        glRotatef(self.pitch, 1.0, 0.0, 0.0)
        glRotatef(self.yaw, 0.0, 1.0, 0.0)

    # --------------------------
    # Interacción (cámara)
    # --------------------------
    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.RightButton:
            self._orbiting = True
            self._last_mouse_pos = event.pos()
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if self._orbiting:
            dx = event.position().x() - self._last_mouse_pos.x()
            dy = event.position().y() - self._last_mouse_pos.y()
            self._last_mouse_pos = event.pos()

            sens = 0.4
            self.yaw += dx * sens
            self.pitch += dy * sens
            self.pitch = max(-89.0, min(89.0, self.pitch))

            self.update()
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.RightButton and self._orbiting:
            self._orbiting = False
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def wheelEvent(self, event: QWheelEvent) -> None:
        """Zoom in/out con la rueda del mouse."""
        delta = event.angleDelta().y() / 120.0
        self.distance -= delta * 0.4
        self.distance = max(4.0, min(25.0, self.distance))
        self.update()
        event.accept()

    # --------------------------
    # Animación
    # --------------------------
    def animate_move(self, move: Move, before: CubeState) -> None:
        """Anima un movimiento ya aplicado en el secuenciador.

        Si había otra animación en curso, se descarta (se salta a su final).

        Args:
            move: Movimiento aplicado.
            before: Estado previo al movimiento.
        """
        self.anim_move = move
        self.anim_before = before
        self.anim_angle = 0.0
        self.animating = True
        self._anim_timer.start()

    def _on_anim_tick(self) -> None:
        if not self.animating:
            self._anim_timer.stop()
            return

        self.anim_angle += self.anim_step
        if self.anim_angle >= self.anim_target:
            self.cancel_animation()
            return

        self.update()

    def cancel_animation(self) -> None:
        """Corta la animación actual y vuelve a dibujar el estado publicado."""
        self.animating = False
        self._anim_timer.stop()
        self.anim_move = None
        self.anim_before = None
        self.anim_angle = 0.0
        self.update()

    # --------------------------
    # Render helpers
    # --------------------------
    def _rot_point(self, p: Vec3f, axis: Axis, angle_deg: float) -> Vec3f:
        """Rota un punto alrededor de un eje por un ángulo en grados (mano derecha)."""
        x, y, z = p
        a = math.radians(angle_deg)
        c = math.cos(a)
        s = math.sin(a)

        if axis == "x":
            return (x, y * c - z * s, y * s + z * c)
        if axis == "y":
            return (x * c + z * s, y, -x * s + z * c)
        return (x * c - y * s, x * s + y * c, z)

    def _face_quad(self, center: Vec3f, face: int, half: float, offset: float) -> List[Vec3f]:
        """Vértices del quad de una cara de la pieza centrada en `center`.

        Args:
            center: Centro de la pieza.
            face: Índice de cara en orden canónico (+X, -X, +Y, -Y, +Z, -Z).
            half: Medio lado del quad.
            offset: Distancia del quad al centro a lo largo de la normal.
        """
        a = face_axis(face)
        b, c = [k for k in range(3) if k != a]
        quad: List[Vec3f] = []
        for su, sv in ((-1, -1), (1, -1), (1, 1), (-1, 1)):
            v = list(center)
            v[a] += face_sign(face) * offset
            v[b] += su * half
            v[c] += sv * half
            quad.append((v[0], v[1], v[2]))
        return quad

    def _draw_piece(self, piece: Piece, axis: Optional[Axis] = None, angle: float = 0.0) -> None:
        """Dibuja una pieza: cuerpo negro y stickers de sus caras con color."""
        center: Vec3f = (
            float(piece.position[0]),
            float(piece.position[1]),
            float(piece.position[2]),
        )
        plastic = PALETTE_RGB[NEUTRAL]

        glBegin(GL_QUADS)
        for face, color in enumerate(piece.colors):
            quads = [(plastic, self._face_quad(center, face, self.body_half, self.body_half))]
            if color != NEUTRAL:
                rgb = PALETTE_RGB.get(color, (0.8, 0.8, 0.8))
                quads.append((
                    rgb,
                    self._face_quad(
                        center, face, self.sticker_half, self.body_half + self.sticker_offset
                    ),
                ))

            for rgb, quad in quads:
                if axis is not None:
                    quad = [self._rot_point(v, axis, angle) for v in quad]
                glColor3f(*rgb)
                for v in quad:
                    glVertex3f(*v)
        glEnd()
