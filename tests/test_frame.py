"""
Tests for plot_frame: creating, updating and labelling frames.
"""

import matplotlib.pyplot as plt
import numpy as np
import pytest
from mpl_toolkits.mplot3d import Axes3D
from numpy.testing import assert_allclose
from scipy.spatial.transform import Rotation

from rpad.plotframe.errors import (
    InvalidColorCount,
    InvalidParent,
    InvalidRotation,
    InvalidUpdateTarget,
    StylePropertyError,
)
from rpad.plotframe.frame import ArrowProperties, FrameHandle, MatrixIndexing, plot_frame

R_TEST = Rotation.from_euler("ZYX", [40, 10, -25], degrees=True).as_matrix()

# "r", "g", "b" as resolved by matplotlib ("g" is half-intensity green).
DEFAULT_RGB = np.array([[1, 0, 0], [0, 0.5, 0], [0, 0, 1]])


def drawn_shafts(handle):
    """(3,2,3) start and end of each arrow shaft, as stored on the Line3DCollections."""
    return np.array([np.asarray(arrow._segments3d)[0] for arrow in handle.arrows])


class TestCreate:
    def test_tails_and_directions(self, ax):
        t = np.array([0.3, -1.0, 2.0])
        handle = plot_frame(R_TEST, t, [1, 1, 1], parent=ax)

        assert len(handle.arrows) == 3
        assert handle.labels == []
        assert_allclose(handle.translation, t)
        assert_allclose(handle.basis_vectors, R_TEST)
        assert all(arrow in ax.collections for arrow in handle.arrows)

    def test_drawn_shafts_start_at_tail(self, ax):
        t = np.array([1.0, 2.0, 3.0])
        lengths = np.array([0.5, 1.0, 2.0])
        handle = plot_frame(R_TEST, t, lengths, parent=ax)

        shafts = drawn_shafts(handle)
        assert_allclose(shafts[:, 0], np.tile(t, (3, 1)))
        assert_allclose(shafts[:, 1] - shafts[:, 0], R_TEST * lengths[:, np.newaxis])

    def test_drawn_shafts_head_alignment(self, ax):
        t = np.array([1.0, 1.0, 1.0])
        handle = plot_frame(
            np.eye(3), t, 2, parent=ax, arrow_properties=ArrowProperties(alignment="head")
        )

        shafts = drawn_shafts(handle)
        # The arrow ends at the translation vector.
        assert_allclose(shafts[:, 0], t - 2 * np.eye(3))
        assert_allclose(shafts[:, 1], np.tile(t, (3, 1)))

    def test_defaults(self, ax):
        handle = plot_frame(parent=ax)
        assert handle.parent is ax
        assert_allclose(handle.translation, [0, 0, 0])
        assert_allclose(handle.basis_vectors, np.eye(3))

    def test_lengths_scale_rows(self, ax):
        handle = plot_frame(np.eye(3), None, [1, 2, 3], parent=ax)
        assert_allclose(handle.basis_vectors, np.diag([1, 2, 3]))

    def test_column_major_equals_transposed_row_major(self, ax):
        M = R_TEST
        col = plot_frame(M, [1, 2, 3], parent=ax, matrix_indexing="columnmajor")
        row = plot_frame(M.T, [1, 2, 3], parent=ax, matrix_indexing="rowmajor")
        assert_allclose(col.basis_vectors, row.basis_vectors)
        assert_allclose(col.translation, row.translation)

    def test_default_colors(self, ax):
        handle = plot_frame(parent=ax)
        for arrow, rgb in zip(handle.arrows, DEFAULT_RGB):
            assert_allclose(arrow.get_color()[0][:3], rgb)

    def test_single_color(self, ax):
        handle = plot_frame(parent=ax, basis_colors="k")
        for arrow in handle.arrows:
            assert_allclose(arrow.get_color()[0][:3], [0, 0, 0])

    def test_default_line_width(self, ax):
        handle = plot_frame(parent=ax)
        for arrow in handle.arrows:
            assert_allclose(arrow.get_linewidth(), [2.0])

    def test_arrow_properties_override_defaults(self, ax):
        props = ArrowProperties(line_width=4.0, alpha=0.5, line_style="--")
        handle = plot_frame(parent=ax, arrow_properties=props)
        for arrow in handle.arrows:
            assert_allclose(arrow.get_linewidth(), [4.0])
            assert arrow.get_alpha() == 0.5

    def test_extra_takes_precedence(self, ax):
        props = ArrowProperties(line_width=4.0, extra={"linewidth": 6.0})
        handle = plot_frame(parent=ax, arrow_properties=props)
        assert_allclose(handle.arrows[0].get_linewidth(), [6.0])

    def test_renders(self, ax):
        plot_frame(R_TEST, [1, 1, 1], parent=ax, label_basis=True)
        ax.figure.canvas.draw()


class TestFallbacks:
    def test_nan_translation_plots_at_origin(self, ax):
        handle = plot_frame(np.eye(3), [np.nan, np.nan, np.nan], parent=ax)
        assert_allclose(handle.translation, [0, 0, 0])
        assert_allclose(drawn_shafts(handle)[:, 0], np.zeros((3, 3)))

    def test_nan_lengths_plot_unit_arrows(self, ax):
        handle = plot_frame(np.eye(3), [0, 0, 0], [np.nan, 2, 2], parent=ax)
        assert_allclose(handle.basis_vectors, np.eye(3))


class TestValidationBeforeDrawing:
    def test_non_orthonormal_rotation(self, ax):
        with pytest.raises(InvalidRotation):
            plot_frame([[1, 0, 0], [0, 1, 0], [0, 0, 2]], parent=ax)
        assert len(ax.collections) == 0

    def test_non_orthonormal_rotation_on_update(self, ax):
        handle = plot_frame(np.eye(3), [1, 1, 1], parent=ax)
        arrows = list(handle.arrows)
        with pytest.raises(InvalidRotation):
            plot_frame(np.diag([1, 1, 2]), [5, 5, 5], update_frame=handle)
        assert handle.arrows == arrows
        assert_allclose(handle.translation, [1, 1, 1])
        assert_allclose(handle.basis_vectors, np.eye(3))

    def test_two_colors(self, ax):
        with pytest.raises(InvalidColorCount):
            plot_frame(parent=ax, basis_colors=["r", "g"])
        assert len(ax.collections) == 0

    def test_bad_text_property(self, ax):
        with pytest.raises(StylePropertyError) as excinfo:
            plot_frame(parent=ax, label_basis=True, text_properties={"not_a_property": 1})
        assert excinfo.value.__cause__ is not None
        assert len(ax.collections) == 0
        assert len(ax.texts) == 0

    def test_bad_arrow_property(self, ax):
        props = ArrowProperties(extra={"not_a_property": 1})
        with pytest.raises(StylePropertyError):
            plot_frame(parent=ax, arrow_properties=props)
        assert len(ax.collections) == 0

    def test_text_properties_ignored_without_labels(self, ax):
        handle = plot_frame(parent=ax, text_properties={"not_a_property": 1})
        assert handle.labels == []

    def test_2d_parent(self):
        _, ax2d = plt.subplots()
        with pytest.raises(InvalidParent):
            plot_frame(parent=ax2d)

    def test_removed_frame(self, ax):
        handle = plot_frame(parent=ax)
        for arrow in handle.arrows:
            arrow.remove()
        with pytest.raises(InvalidUpdateTarget):
            plot_frame(update_frame=handle)


class TestUpdate:
    def test_same_arrows_moved(self, ax):
        handle = plot_frame(R_TEST, [0, 0, 0], parent=ax)
        arrows = list(handle.arrows)

        updated = plot_frame(R_TEST, [1, 2, 3], update_frame=handle)

        assert updated is handle
        assert len(handle.arrows) == 3
        assert all(a is b for a, b in zip(handle.arrows, arrows))
        assert len(ax.collections) == 3
        assert_allclose(handle.translation, [1, 2, 3])

        shafts = drawn_shafts(handle)
        assert_allclose(shafts[:, 0], np.tile([1.0, 2.0, 3.0], (3, 1)))
        assert_allclose(shafts[:, 1] - shafts[:, 0], R_TEST)

    def test_update_redraws_rotated_shafts(self, ax):
        handle = plot_frame(np.eye(3), [1, 2, 3], parent=ax)
        plot_frame(R_TEST, [5, 5, 5], 0.5, update_frame=handle)

        shafts = drawn_shafts(handle)
        assert_allclose(shafts[:, 0], np.full((3, 3), 5.0))
        assert_allclose(shafts[:, 1] - shafts[:, 0], 0.5 * R_TEST)

    def test_update_rotation_and_color(self, ax):
        handle = plot_frame(np.eye(3), parent=ax)
        plot_frame(R_TEST, update_frame=handle, basis_colors="m")
        assert_allclose(handle.basis_vectors, R_TEST)
        assert_allclose(handle.arrows[0].get_color()[0][:3], [0.75, 0, 0.75])

    def test_stays_in_its_axes(self, ax):
        handle = plot_frame(parent=ax)
        other = plt.figure().add_subplot(111, projection="3d")
        plot_frame(np.eye(3), [1, 0, 0], update_frame=handle)
        assert handle.parent is ax
        assert len(other.collections) == 0

    def test_reparent(self, ax):
        handle = plot_frame(parent=ax, label_basis=True)
        arrows, labels = list(handle.arrows), list(handle.labels)
        other = plt.figure().add_subplot(111, projection="3d")

        plot_frame(update_frame=handle, parent=other, label_basis=True)

        assert handle.parent is other
        assert handle.arrows == arrows
        assert handle.labels == labels
        assert len(ax.collections) == 0
        assert len(ax.texts) == 0
        assert all(arrow in other.collections for arrow in arrows)
        assert all(text in other.texts for text in labels)
        assert all(arrow.axes is other for arrow in arrows)
        other.figure.canvas.draw()

    def test_empty_handle_creates(self, ax):
        handle = plot_frame(update_frame=FrameHandle(), parent=ax)
        assert len(handle.arrows) == 3
        assert len(ax.collections) == 3


class TestLabels:
    def test_default_labels(self, ax):
        handle = plot_frame(parent=ax, label_basis=True)
        assert [text.get_text() for text in handle.labels] == ["X", "Y", "Z"]
        assert len(ax.texts) == 3
        assert_allclose(handle.label_positions, np.eye(3))

    def test_custom_labels_and_properties(self, ax):
        handle = plot_frame(
            parent=ax,
            label_basis=True,
            labels=["x_c", "y_c", "z_c"],
            text_properties={"fontsize": 20},
        )
        assert [text.get_text() for text in handle.labels] == ["x_c", "y_c", "z_c"]
        assert all(text.get_fontsize() == 20 for text in handle.labels)

    def test_center_alignment_anchor(self, ax):
        handle = plot_frame(
            np.eye(3),
            [0, 0, 0],
            [2, 1, 1],
            parent=ax,
            label_basis=True,
            arrow_properties=ArrowProperties(alignment="center"),
        )
        assert_allclose(handle.label_positions[0], [1, 0, 0])

    def test_head_alignment_anchor(self, ax):
        handle = plot_frame(
            np.eye(3),
            [1, 1, 1],
            parent=ax,
            label_basis=True,
            arrow_properties=ArrowProperties(alignment="head"),
        )
        assert_allclose(handle.label_positions, 1 - np.eye(3))

    def test_toggle_labels(self, ax):
        handle = plot_frame(parent=ax, label_basis=True)
        arrows = list(handle.arrows)
        old_labels = list(handle.labels)

        plot_frame(update_frame=handle, label_basis=False)
        assert handle.labels == []
        assert len(ax.texts) == 0
        assert handle.arrows == arrows
        assert len(ax.collections) == 3

        plot_frame(update_frame=handle, label_basis=True)
        assert len(handle.labels) == 3
        assert len(ax.texts) == 3
        assert not any(text in old_labels for text in handle.labels)

    def test_labels_reused_on_update(self, ax):
        handle = plot_frame(parent=ax, label_basis=True)
        labels = list(handle.labels)
        plot_frame(np.eye(3), [0, 0, 1], update_frame=handle, label_basis=True, labels="o")
        assert handle.labels == labels
        assert [text.get_text() for text in labels] == ["o", "o", "o"]
        assert_allclose(handle.label_positions, np.eye(3) + [0, 0, 1])


class TestRemove:
    def test_remove(self, ax):
        handle = plot_frame(parent=ax, label_basis=True)
        handle.remove()
        assert handle.is_empty
        assert len(ax.collections) == 0
        assert len(ax.texts) == 0

        plot_frame(update_frame=handle, parent=ax)
        assert len(ax.collections) == 3


class TestDefaultParent:
    def test_creates_3d_axes_in_empty_figure(self):
        fig = plt.figure()
        handle = plot_frame()
        assert isinstance(handle.parent, Axes3D)
        assert handle.parent.figure is fig

    def test_uses_current_3d_axes(self, ax):
        plt.sca(ax)
        assert plot_frame().parent is ax

    def test_current_axes_not_3d(self):
        plt.subplots()
        with pytest.raises(InvalidParent):
            plot_frame()


class TestMatrixIndexing:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("rowmajor", MatrixIndexing.ROW_MAJOR),
            ("c", MatrixIndexing.COLUMN_MAJOR),
            ("Column-Major", MatrixIndexing.COLUMN_MAJOR),
            (MatrixIndexing.ROW_MAJOR, MatrixIndexing.ROW_MAJOR),
        ],
    )
    def test_parse(self, value, expected):
        assert MatrixIndexing.parse(value) is expected

    def test_invalid(self):
        with pytest.raises(ValueError):
            MatrixIndexing.parse("diagonal")


class TestArrowProperties:
    def test_invalid_alignment(self):
        with pytest.raises(ValueError):
            ArrowProperties(alignment="middle")

    def test_negative_head_size(self):
        with pytest.raises(ValueError):
            ArrowProperties(head_size=-0.1)
