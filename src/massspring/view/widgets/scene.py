"""
Spring Scene
============
QGraphicsView drawing the wall, the spring, the block, the kinematic vectors,
the ruler and (optionally) the circular-motion reference.

The items are created once and only moved on every frame.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import Qt, QPointF, QRectF
from PySide6.QtGui import QBrush, QColor, QFont, QPainter, QPainterPath, QPen, QPolygonF
from PySide6.QtWidgets import (
    QGraphicsEllipseItem, QGraphicsItemGroup, QGraphicsLineItem, QGraphicsPathItem,
    QGraphicsPolygonItem, QGraphicsRectItem, QGraphicsScene, QGraphicsSimpleTextItem,
    QGraphicsView, QWidget
)

from massspring import config
from massspring.model import physics
from massspring.model.physics import InstantaneousState, PhysicalParameters
from massspring.model.state import DisplayConfig
from massspring.view.widgets import geometry

logger = logging.getLogger(__name__)


def _pen(color: str, width: float = 1.0, style: Qt.PenStyle = Qt.PenStyle.SolidLine) -> QPen:
    pen = QPen(QColor(color))
    pen.setWidthF(width)
    pen.setStyle(style)
    return pen


class VectorArrowItem(QGraphicsItemGroup):
    """Horizontal arrow with a label; hidden when too short."""

    def __init__(self, color: str, label: str, vertical_offset: float) -> None:
        super().__init__()
        self.vertical_offset = vertical_offset

        self.line = QGraphicsLineItem()
        self.line.setPen(_pen(color, 3))
        self.head = QGraphicsPolygonItem()
        self.head.setBrush(QBrush(QColor(color)))
        self.head.setPen(QPen(Qt.PenStyle.NoPen))
        self.label = QGraphicsSimpleTextItem(label)
        self.label.setBrush(QBrush(QColor(color)))
        font = QFont()
        font.setBold(True)
        self.label.setFont(font)

        for item in (self.line, self.head, self.label):
            self.addToGroup(item)

    def set_vector(self, x: float, y: float, length: float) -> None:
        arrow = geometry.vector_arrow(x, y + self.vertical_offset, length)
        if arrow is None:
            self.setVisible(False)
            return
        self.setVisible(True)
        self.line.setLine(*arrow.start, *arrow.end)
        self.head.setPolygon(QPolygonF([QPointF(px, py) for px, py in arrow.head]))
        rect = self.label.boundingRect()
        lx, ly = arrow.label_pos
        self.label.setPos(lx - rect.width() / 2, ly - rect.height())


class SpringScene(QGraphicsView):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setMinimumHeight(400)

        self.width_px = config.SCENE_WIDTH
        self.height_px = config.SCENE_HEIGHT
        self.center_x = self.width_px / 2

        self._scene = QGraphicsScene(0, 0, self.width_px, self.height_px, self)
        self._scene.setBackgroundBrush(QBrush(QColor("#f8fafc")))
        self.setScene(self._scene)

        self._build_static_items()
        self._build_dynamic_items()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def _build_static_items(self) -> None:
        s = self._scene
        self.wall = s.addLine(0, 0, 0, 0, _pen("#334155", 4))
        self.floor = s.addLine(0, 0, 0, 0, _pen("#cbd5e1", 2))
        self.equilibrium = s.addLine(0, 0, 0, 0, _pen("#94a3b8", 1, Qt.PenStyle.DashLine))
        self.equilibrium_label = s.addSimpleText("x = 0 (equilibrium)")
        self.equilibrium_label.setBrush(QBrush(QColor("#64748b")))

        # Ruler -3 m .. 3 m
        ruler_y = self.height_px - 40
        half = 3 * config.SCALE_PX_PER_METER
        s.addLine(self.center_x - half, ruler_y, self.center_x + half, ruler_y, _pen("#64748b"))
        for val in range(-3, 4):
            tx = self.center_x + geometry.meters_to_px(val)
            s.addLine(tx, ruler_y - 5, tx, ruler_y + 5, _pen("#64748b"))
            tick_label = s.addSimpleText(f"{val}m")
            tick_label.setBrush(QBrush(QColor("#64748b")))
            tick_label.setPos(tx - tick_label.boundingRect().width() / 2, ruler_y + 8)
        self.ruler_y = ruler_y

    def _build_dynamic_items(self) -> None:
        s = self._scene

        # Reference circle group
        ghost = config.COLORS["circle_ghost"]
        self.circle_group = QGraphicsItemGroup()
        self.circle_outline = QGraphicsEllipseItem()
        self.circle_outline.setPen(_pen("#cbd5e1", 1, Qt.PenStyle.DashLine))
        self.circle_radius_line = QGraphicsLineItem()
        self.circle_radius_line.setPen(_pen(ghost, 2))
        self.circle_particle = QGraphicsEllipseItem(-8, -8, 16, 16)
        self.circle_particle.setBrush(QBrush(QColor(ghost)))
        self.circle_particle.setPen(QPen(Qt.PenStyle.NoPen))
        self.circle_projection = QGraphicsLineItem()
        self.circle_projection.setPen(_pen(ghost, 1, Qt.PenStyle.DashLine))
        self.circle_caption = QGraphicsSimpleTextItem("Reference: uniform circular motion")
        self.circle_caption.setBrush(QBrush(QColor("#64748b")))
        self.circle_caption.setPos(10, 14)
        for item in (self.circle_outline, self.circle_radius_line, self.circle_particle,
                     self.circle_projection, self.circle_caption):
            self.circle_group.addToGroup(item)
        s.addItem(self.circle_group)

        self.spring = QGraphicsPathItem()
        self.spring.setPen(_pen(config.COLORS["spring"], 3))
        s.addItem(self.spring)

        half = config.BLOCK_SIZE / 2
        self.block = QGraphicsRectItem(-half, -half, config.BLOCK_SIZE, config.BLOCK_SIZE)
        self.block.setBrush(QBrush(QColor(config.COLORS["mass"])))
        self.block.setPen(QPen(Qt.PenStyle.NoPen))
        s.addItem(self.block)
        self.block_label = QGraphicsSimpleTextItem("M", self.block)
        self.block_label.setBrush(QBrush(QColor("white")))
        rect = self.block_label.boundingRect()
        self.block_label.setPos(-rect.width() / 2, -rect.height() / 2)

        # Vectors
        self.vectors_group = QGraphicsItemGroup()
        self.velocity_arrow = VectorArrowItem(config.COLORS["velocity"], "v", -50)
        self.acceleration_arrow = VectorArrowItem(config.COLORS["acceleration"], "a", -70)
        self.force_arrow = VectorArrowItem(config.COLORS["force"], "Fel", 60)
        for arrow in (self.velocity_arrow, self.acceleration_arrow, self.force_arrow):
            self.vectors_group.addToGroup(arrow)
        s.addItem(self.vectors_group)

        # Position marker on the ruler
        self.marker = QGraphicsPolygonItem(QPolygonF([QPointF(-6, -15), QPointF(6, -15), QPointF(0, 0)]))
        self.marker.setBrush(QBrush(QColor(config.COLORS["position"])))
        self.marker.setPen(QPen(Qt.PenStyle.NoPen))
        s.addItem(self.marker)
        self.marker_label = s.addSimpleText("")
        self.marker_label.setBrush(QBrush(QColor(config.COLORS["position"])))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def set_state(
        self,
        state: InstantaneousState,
        params: PhysicalParameters,
        display: DisplayConfig,
    ) -> None:
        """Move every dynamic item to match the given state."""
        cy = geometry.scene_center_y(display.show_circular_motion, self.height_px)
        bx = geometry.block_center_x(state.position, self.center_x)

        # Wall, floor, equilibrium line
        wall_x = config.WALL_X
        half = config.BLOCK_SIZE / 2
        self.wall.setLine(wall_x, cy - 60, wall_x, cy + 60)
        self.floor.setLine(wall_x, cy + half + 1, self.width_px - 50, cy + half + 1)
        self.equilibrium.setLine(self.center_x, cy - 50, self.center_x, cy + 50)
        lbl = self.equilibrium_label.boundingRect()
        self.equilibrium_label.setPos(self.center_x - lbl.width() / 2, cy + 60)

        # Spring + block
        pts = geometry.spring_points(wall_x, bx - half, cy)
        path = QPainterPath(QPointF(*pts[0]))
        for px, py in pts[1:]:
            path.lineTo(px, py)
        self.spring.setPath(path)
        self.block.setPos(bx, cy)

        # Vectors
        self.vectors_group.setVisible(display.show_vectors)
        if display.show_vectors:
            self.velocity_arrow.set_vector(bx, cy, state.velocity * config.VELOCITY_SCALE)
            self.acceleration_arrow.set_vector(bx, cy, state.acceleration * config.ACCELERATION_SCALE)
            self.force_arrow.set_vector(bx, cy, state.restoring_force * config.FORCE_SCALE)

        # Ruler marker
        self.marker.setPos(bx, self.ruler_y)
        self.marker_label.setText(f"{state.position:.2f}m")
        mrect = self.marker_label.boundingRect()
        self.marker_label.setPos(bx - mrect.width() / 2, self.ruler_y - 20 - mrect.height())

        # Circular-motion reference
        self.circle_group.setVisible(display.show_circular_motion)
        if display.show_circular_motion:
            self._update_circle(state, params, bx, cy)

    def _update_circle(
        self,
        state: InstantaneousState,
        params: PhysicalParameters,
        block_x: float,
        center_y: float,
    ) -> None:
        radius = geometry.meters_to_px(params.amplitude)
        ccy = config.CIRCLE_CENTER_Y
        theta = physics.reference_angle(state.sim_time, params)
        px, py = geometry.circle_point(self.center_x, ccy, radius, theta)

        self.circle_outline.setRect(QRectF(self.center_x - radius, ccy - radius, 2 * radius, 2 * radius))
        self.circle_radius_line.setLine(self.center_x, ccy, px, py)
        self.circle_particle.setPos(px, py)
        self.circle_projection.setLine(px, py, block_x, center_y - config.BLOCK_SIZE / 2)

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self.fitInView(self._scene.sceneRect(), Qt.AspectRatioMode.KeepAspectRatio)
