from typing import Literal, Tuple

import numpy as np
from scipy.spatial.transform import Rotation

Alignment = Literal["tail", "center", "head"]
ALIGNMENTS = ("tail", "center", "head")

# Angle between the shaft and each of the two arrowhead lines.
HEAD_ANGLE = np.radians(15)


def basis_vectors(rotation: np.ndarray, lengths: np.ndarray) -> np.ndarray:
    """
    Scale each row of a (row-major) rotation matrix by its basis length.

    Args:
        rotation: (3,3) rotation matrix, rows are the basis directions.
        lengths: (3,) length of each basis vector.

    Returns:
        (3,3) array, row i is the i-th arrow vector.
    """
    return rotation * lengths[:, np.newaxis]


def arrow_endpoints(
    tail: np.ndarray, vector: np.ndarray, alignment: Alignment = "tail"
) -> Tuple[np.ndarray, np.ndarray]:
    """Start and end of an arrow drawn with the given alignment at the tail position."""
    if alignment == "tail":
        return tail, tail + vector
    elif alignment == "center":
        return tail - vector / 2, tail + vector / 2
    elif alignment == "head":
        return tail - vector, tail
    raise ValueError(f"alignment must be one of {ALIGNMENTS}, got {alignment!r}")


def head_directions(vector: np.ndarray) -> np.ndarray:
    """
    The two arrowhead directions for a vector, as drawn by Axes3D.quiver.

    The vector is rotated by +/- HEAD_ANGLE about an axis perpendicular to it,
    lying in the xy-plane (or the y-axis, for vectors along z).

    Returns:
        (2,3) array of head directions, each the length of vector.
    """
    xy_norm = np.linalg.norm(vector[:2])
    if xy_norm > 0:
        axis = np.array([vector[1] / xy_norm, -vector[0] / xy_norm, 0.0])
    else:
        axis = np.array([0.0, 1.0, 0.0])
    rotations = Rotation.from_rotvec(np.outer([HEAD_ANGLE, -HEAD_ANGLE], axis))
    return rotations.apply(vector)


def arrow_segments(
    tail: np.ndarray,
    vector: np.ndarray,
    head_size: float = 0.4,
    alignment: Alignment = "tail",
) -> np.ndarray:
    """
    Line segments of one arrow: the shaft followed by the two head lines.

    Args:
        tail: (3,) position the arrow is aligned at.
        vector: (3,) arrow direction and length.
        head_size: Length of the head lines, relative to the arrow length.
        alignment: Which part of the arrow sits at `tail`.

    Returns:
        (3,2,3) array of segments, suitable for Line3DCollection.set_segments.
    """
    start, end = arrow_endpoints(tail, vector, alignment)
    heads = [[end, end - head_size * d] for d in head_directions(vector)]
    return np.array([[start, end], *heads])


def label_anchors(
    tail: np.ndarray, vectors: np.ndarray, alignment: Alignment = "tail"
) -> np.ndarray:
    """
    Label position for each basis vector.

    tail -> tail + vector, center -> tail + vector / 2, head -> tail - vector.
    """
    if alignment == "tail":
        return tail + vectors
    elif alignment == "center":
        return tail + vectors / 2
    elif alignment == "head":
        return tail - vectors
    raise ValueError(f"alignment must be one of {ALIGNMENTS}, got {alignment!r}")
