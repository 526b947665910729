"""
Vectmo: character-transition text model with vocabulary snapping.
"""

__version__ = "1.0.0"
