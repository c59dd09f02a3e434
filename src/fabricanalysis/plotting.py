from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np
import matplotlib.pyplot as plt

from fabricanalysis.projections import Projection, get_projection

if TYPE_CHECKING:
    import numpy.typing as npt
    from matplotlib.axes import Axes

    from fabricanalysis.model.primitives import ContourLevel


def plot_contours(
    contours: Sequence[ContourLevel],
    projection: str | Projection = "equal-area",
    dcos: Optional[npt.ArrayLike] = None,
    ax: Optional[Axes] = None,
    show: bool = True,
) -> Axes:
    """
    Quick-look plot of a contour set in projected coordinates.

    Args:
        contours: Output of `compute_contours`.
        projection: Projection the contours were computed in.
        dcos: Optional (n, 3) data drawn as points on top.
        ax: Axes to draw into; a new figure is created if omitted.
        show: Call plt.show() at the end.

    Returns:
        The axes drawn into.
    """
    proj = get_projection(projection)
    if ax is None:
        plt.rcParams["figure.constrained_layout.use"] = True
        _, ax = plt.subplots(figsize=(6, 6))

    theta = np.linspace(0.0, 2.0 * np.pi, 361)
    ax.plot(proj.RADIUS * np.cos(theta), proj.RADIUS * np.sin(theta), 'k', lw=1)

    colors = plt.cm.viridis(np.linspace(0.0, 1.0, max(len(contours), 1)))
    for contour, color in zip(contours, colors):
        for i, path in enumerate(contour.paths):
            ax.plot(path[:, 0], path[:, 1], color=color, lw=1.2,
                    label=f"{contour.level:g} MUD" if i == 0 else None)

    if dcos is not None:
        points = np.array([proj.project(d) for d in np.asarray(dcos, dtype=np.float64).reshape(-1, 3)])
        if len(points):
            ax.plot(points[:, 0], points[:, 1], 'k.', ms=4)

    ax.set_aspect("equal")
    ax.set_xlim(-1.05 * proj.RADIUS, 1.05 * proj.RADIUS)
    ax.set_ylim(-1.05 * proj.RADIUS, 1.05 * proj.RADIUS)
    ax.set_axis_off()
    ax.set_title(f"Density contours ({proj.NAME})")
    if any(c.paths for c in contours):
        ax.legend(loc="upper right", fontsize="small")

    if show:
        plt.show()
    return ax
