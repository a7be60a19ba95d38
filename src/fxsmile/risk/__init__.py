"""Volatility risk: point sensitivities and their projection onto surface nodes."""

from .sensitivity import FxOptionSensitivity, NodeSensitivity
from .projector import SensitivityProjector

__all__ = ["FxOptionSensitivity", "NodeSensitivity", "SensitivityProjector"]
