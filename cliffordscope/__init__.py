"""Sampling and density rendering of Clifford strange attractors."""

__version__ = "0.1.0"