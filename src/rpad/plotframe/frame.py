import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.text import Text
from mpl_toolkits.mplot3d import Axes3D, art3d

from rpad.plotframe import geometry, validation
from rpad.plotframe.errors import InvalidParent
from rpad.plotframe.geometry import ALIGNMENTS, Alignment

logger = logging.getLogger(__name__)

DEFAULT_LINE_WIDTH = 2.0
DEFAULT_HEAD_SIZE = 0.4
DEFAULT_LABELS = ("X", "Y", "Z")
DEFAULT_COLORS = ("r", "g", "b")


class MatrixIndexing(str, Enum):
    """Whether the rows or the columns of a rotation matrix are its basis vectors."""

    ROW_MAJOR = "rowmajor"
    COLUMN_MAJOR = "columnmajor"

    @classmethod
    def parse(cls, value: Union["MatrixIndexing", str]) -> "MatrixIndexing":
        # Any prefix is accepted, e.g. "r", "col", "Row-Major".
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower().replace("-", "").replace("_", "")
        for member in cls:
            if text and member.value.startswith(text):
                return member
        raise ValueError(
            f"matrix_indexing must be 'rowmajor' or 'columnmajor', got {value!r}"
        )


@dataclass
class ArrowProperties:
    """
    Style of the basis vector arrows.

    Attributes:
        line_width: Width of the arrow lines, in points.
        head_size: Length of the arrowhead lines relative to the arrow length.
        alignment: Which part of the arrow sits at the translation vector.
        line_style: Any matplotlib linestyle, e.g. "--".
        alpha: Opacity, 0 to 1.
        zorder: Drawing order.
        extra: Further Line3DCollection properties, passed verbatim to
            Artist.set, e.g. {"capstyle": "round"}. These override the above.
    """

    line_width: float = DEFAULT_LINE_WIDTH
    head_size: float = DEFAULT_HEAD_SIZE
    alignment: Alignment = "tail"
    line_style: Optional[str] = None
    alpha: Optional[float] = None
    zorder: Optional[float] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if self.alignment not in ALIGNMENTS:
            raise ValueError(
                f"alignment must be one of {ALIGNMENTS}, got {self.alignment!r}"
            )
        if self.head_size < 0:
            raise ValueError(f"head_size must be non-negative, got {self.head_size}")

    def artist_properties(self) -> Dict[str, Any]:
        props: Dict[str, Any] = {"linewidth": self.line_width}
        if self.line_style is not None:
            props["linestyle"] = self.line_style
        if self.alpha is not None:
            props["alpha"] = self.alpha
        if self.zorder is not None:
            props["zorder"] = self.zorder
        props.update(self.extra)
        return props


@dataclass(eq=False)
class FrameHandle:
    """
    The artists making up one plotted frame.

    Holds 3 arrows and either 0 or 3 labels, all children of `parent`. Pass it
    back to plot_frame as `update_frame` to move or restyle the frame in place.
    A default-constructed handle is empty, and tells plot_frame to create a
    new frame.
    """

    parent: Optional[Axes3D] = None
    arrows: List[art3d.Line3DCollection] = field(default_factory=list)
    labels: List[Text] = field(default_factory=list)
    # Last drawn pose: arrow tail, arrow vectors (rows) and label anchors.
    translation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    basis_vectors: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))
    label_positions: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))
    # Frame name drawn at the origin by plot_transform.
    name_label: Optional[Text] = None

    @property
    def is_empty(self) -> bool:
        return not self.arrows and not self.labels

    @property
    def texts(self) -> List[Text]:
        names = [self.name_label] if self.name_label is not None else []
        return [*self.labels, *names]

    @property
    def artists(self) -> list:
        return [*self.arrows, *self.texts]

    def remove(self) -> None:
        """Remove all artists of the frame from the axes, leaving an empty handle."""
        for artist in self.artists:
            artist.remove()
        self.arrows = []
        self.labels = []
        self.name_label = None
        self.basis_vectors = np.zeros((0, 3))
        self.label_positions = np.zeros((0, 3))


def _current_axes() -> Axes3D:
    fig = plt.gcf()
    if not fig.axes:
        return fig.add_subplot(projection="3d")
    ax = fig.gca()
    if not isinstance(ax, Axes3D):
        raise InvalidParent(
            "The current axes are not 3-D. Pass parent= or create them with "
            "projection='3d'."
        )
    return ax


def _add_arrow(ax: Axes3D) -> art3d.Line3DCollection:
    arrow = art3d.Line3DCollection([])
    ax.add_collection(arrow, autolim=False)
    return arrow


def _reparent(handle: FrameHandle, parent: Axes3D) -> None:
    logger.debug("Moving frame to a new parent axes")
    for artist in handle.artists:
        artist.remove()
        # Drop the old axes' transform and clip path, so the new ones are set.
        artist.set_transform(parent.transData)
        artist.set_clip_path(None)
    for arrow in handle.arrows:
        parent.add_collection(arrow, autolim=False)
    for text in handle.texts:
        parent.add_artist(text)
    handle.parent = parent


def plot_frame(
    rotation_matrix=None,
    translation_vector=None,
    basis_vector_lengths=1.0,
    *,
    parent: Optional[Axes3D] = None,
    update_frame: Optional[FrameHandle] = None,
    matrix_indexing: Union[MatrixIndexing, str] = MatrixIndexing.ROW_MAJOR,
    label_basis: bool = False,
    labels: Union[str, Sequence[str]] = DEFAULT_LABELS,
    basis_colors=DEFAULT_COLORS,
    text_properties: Optional[Dict[str, Any]] = None,
    arrow_properties: Optional[ArrowProperties] = None,
) -> FrameHandle:
    """
    Plot a 3-D Cartesian coordinate frame.

    Draws the three basis vectors of the frame as arrows from the translation
    vector, optionally labelled. Passing the handle returned by a previous
    call as `update_frame` moves and restyles the same artists instead of
    drawing a new frame, which is cheaper for moving frames (animations).

    Parameters:
    - rotation_matrix: 3x3 orthonormal matrix, the orientation of the frame.
      Default is no rotation, np.eye(3).
    - translation_vector: Position of the frame, 3 elements. Default is the
      origin. If any element is NaN the origin is used.
    - basis_vector_lengths: Length of each arrow, scalar or 3 elements.
      Default is 1. If any element is NaN all lengths are 1.
    - parent: 3-D axes to plot in. Default is the current axes (a new 3-D
      subplot if the current figure is empty). When updating, the frame stays
      in its axes unless a parent is given.
    - update_frame: Handle from a previous call, to update in place.
    - matrix_indexing: "rowmajor" (default) if the rows of rotation_matrix are
      the basis vectors, "columnmajor" if its columns are.
    - label_basis: Whether to label each basis vector.
    - labels: Text for each label, a single string or 3. Default "X", "Y", "Z".
    - basis_colors: Any matplotlib color spec, 1 color for all arrows or 3.
      Default is red, green, blue.
    - text_properties: matplotlib Text properties for the labels, e.g.
      {"fontsize": 20, "fontweight": "bold"}.
    - arrow_properties: ArrowProperties for the arrows.

    Returns:
    - FrameHandle holding the arrows and labels.

    Raises:
    - InvalidRotation, InvalidVector, InvalidParent, InvalidUpdateTarget,
      InvalidLabelCount, InvalidColor(Count), StylePropertyError. These are
      raised before anything is drawn or updated.
    """
    if rotation_matrix is None:
        rotation_matrix = np.eye(3)
    rotation = validation.check_rotation_matrix(rotation_matrix)
    translation = validation.normalize_translation(translation_vector)
    lengths = validation.normalize_lengths(basis_vector_lengths)
    indexing = MatrixIndexing.parse(matrix_indexing)
    is_update = validation.check_frame_handle(update_frame)
    labels = validation.normalize_labels(labels)
    rgb = validation.resolve_colors(basis_colors)

    if arrow_properties is None:
        arrow_properties = ArrowProperties()
    arrow_props = arrow_properties.artist_properties()
    text_properties = dict(text_properties or {})
    validation.check_properties(
        lambda: art3d.Line3DCollection([]), arrow_props, "arrow_properties"
    )
    if label_basis:
        validation.check_properties(Text, text_properties, "text_properties")

    if parent is None and is_update:
        parent = update_frame.parent
    ax = validation.check_parent(_current_axes() if parent is None else parent)

    # Canonical form from here on: rows are the basis vectors.
    if indexing is MatrixIndexing.COLUMN_MAJOR:
        rotation = rotation.T
    vectors = geometry.basis_vectors(rotation, lengths)

    if is_update:
        handle = update_frame
        if handle.parent is not ax:
            _reparent(handle, ax)
    else:
        handle = FrameHandle(parent=ax)
    had_data = ax.has_data()

    if not handle.arrows:
        logger.debug("Creating frame arrows")
        handle.arrows = [_add_arrow(ax) for _ in range(3)]
    segments = []
    for arrow, vector, color in zip(handle.arrows, vectors, rgb):
        validation.apply_properties([arrow], arrow_props, "arrow_properties")
        arrow_segments = geometry.arrow_segments(
            translation, vector, arrow_properties.head_size, arrow_properties.alignment
        )
        arrow.set_segments(arrow_segments)
        arrow.set_color(color)
        segments.append(arrow_segments)
    handle.translation = translation
    handle.basis_vectors = vectors

    if label_basis:
        positions = geometry.label_anchors(
            translation, vectors, arrow_properties.alignment
        )
        if not handle.labels:
            logger.debug("Creating basis labels")
            handle.labels = [
                ax.text(*position, label) for position, label in zip(positions, labels)
            ]
        for text, position, label in zip(handle.labels, positions, labels):
            text.set_text(label)
            text.set_position_3d(position)
        validation.apply_properties(handle.labels, text_properties, "text_properties")
        handle.label_positions = positions
    elif handle.labels:
        logger.debug("Removing basis labels")
        for text in handle.labels:
            text.remove()
        handle.labels = []
        handle.label_positions = np.zeros((0, 3))

    points = np.concatenate(segments).reshape(-1, 3)
    ax.auto_scale_xyz(points[:, 0], points[:, 1], points[:, 2], had_data)

    if is_update:
        ax.figure.canvas.draw_idle()
    return handle
