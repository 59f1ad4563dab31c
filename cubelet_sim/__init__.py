"""Simulador 3D de un cubo 3x3x3: modelo de piezas, giros de capa y mezcla."""

__version__ = "0.1.0"
