"""
The MODEL layer contains pure data structures and body proportions.
It has NO knowledge of file formats or of visualization (PyVista).
It deals with measurements, landmarks and the mesh buffer.
"""
import math


def circumference_to_radius(circumference: float) -> float:
    """Radius of a circular cross-section with the given circumference."""
    return circumference / (2 * math.pi)
