"""
Per-frame atom record.
"""
from dataclasses import dataclass, field
import numpy as np

@dataclass
class Atom:
    id: int
    element: str
    position: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=np.float64))
    atom_type: str = ""  # format-specific label, carried but not interpreted

    def __post_init__(self):
        self.position = np.asarray(self.position, dtype=np.float64)
        if self.position.shape != (3,):
            raise ValueError(f"Atom position must be a 3-element array, got {self.position.shape}")

    @property
    def x(self) -> float:
        return float(self.position[0])

    @property
    def y(self) -> float:
        return float(self.position[1])

    @property
    def z(self) -> float:
        return float(self.position[2])

    def distance_to(self, center: np.ndarray) -> float:
        """Euclidean distance from this atom to a reference point."""
        return float(np.linalg.norm(self.position - np.asarray(center, dtype=np.float64)))
