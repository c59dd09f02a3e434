from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

    from fabricanalysis.core.vec3 import Vec3Like

_REGISTRY: dict[str, type[Projection]] = {}


class Projection(ABC):
    """
    Abstract base class for lower-hemisphere projections of the unit sphere onto a disk.
    """
    NAME: str = ""
    RADIUS: float = 1.0  # radius of the primitive circle in projected units

    @abstractmethod
    def project(self, dcos: Vec3Like) -> tuple[float, float]:
        """
        Project a unit vector to disk coordinates.

        Upper-hemisphere input (z > 0) is folded onto its antipode first.
        """
        pass

    @abstractmethod
    def inverse(self, px: float, py: float) -> Optional[npt.NDArray[np.float64]]:
        """
        Map disk coordinates back to a lower-hemisphere unit vector.

        Returns:
            The unit vector, or None if (px, py) lies outside the primitive circle.
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.NAME}', radius={self.RADIUS:.6g})"


def register_projection(cls: type[Projection]) -> type[Projection]:
    """Class decorator to register a projection by its NAME."""
    key = getattr(cls, "NAME", None)
    if not key:
        raise ValueError(f"{cls.__name__} must define NAME")
    _REGISTRY[key] = cls
    return cls

def get_projection(name: str | Projection) -> Projection:
    """Resolve a projection name ('equal-area', 'equal-angle') to an instance."""
    if isinstance(name, Projection):
        return name
    cls = _REGISTRY.get(name)
    if not cls:
        raise KeyError(f"No projection registered for name '{name}'")
    return cls()

def list_projections() -> list[str]:
    return list(_REGISTRY.keys())
