"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan los adaptadores concretos.
- El pipeline depende de abstracciones, no de orígenes concretos.
"""

from core.interfaces.provider import ImageryProvider

__all__ = ["ImageryProvider"]
