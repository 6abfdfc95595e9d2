from __future__ import annotations

from dataclasses import dataclass, field
from html import escape
from typing import Sequence

from .models import MOOD_MAX, MOOD_MIN, NO_DATA, mood_band
from .stats import SeriesPoint

MOOD_LINE_COLORS = {
    "low": "#b00020",
    "mid": "#b38600",
    "high": "#0b6b2a",
}
GRID_TICKS = (2, 4, 6, 8, 10)


@dataclass(frozen=True)
class ChartLayout:
    width: float = 800
    height: float = 300
    pad_top: float = 20
    pad_right: float = 20
    pad_bottom: float = 40
    pad_left: float = 40

    @property
    def plot_w(self) -> float:
        return max(1.0, self.width - self.pad_left - self.pad_right)

    @property
    def plot_h(self) -> float:
        return max(1.0, self.height - self.pad_top - self.pad_bottom)

    @property
    def baseline(self) -> float:
        return self.height - self.pad_bottom


@dataclass(frozen=True)
class ChartPoint:
    index: int
    label: str
    value: float
    x: float
    y: float
    color: str


@dataclass(frozen=True)
class ChartSlot:
    index: int
    label: str
    x: float
    point: ChartPoint | None

    @property
    def is_gap(self) -> bool:
        return self.point is None


@dataclass(frozen=True)
class ChartGeometry:
    slots: list[ChartSlot]
    points: list[ChartPoint] = field(default_factory=list)
    segments: list[list[ChartPoint]] = field(default_factory=list)
    line_path: str = ""
    area_path: str = ""
    color: str | None = None

    @property
    def empty(self) -> bool:
        return not self.points


def y_for(value: float, layout: ChartLayout) -> float:
    v = max(float(MOOD_MIN), min(float(MOOD_MAX), float(value)))
    span = MOOD_MAX - MOOD_MIN
    return layout.pad_top + (MOOD_MAX - v) * (layout.plot_h / span)


def x_for(index: int, count: int, layout: ChartLayout) -> float:
    if count <= 1:
        return layout.pad_left + layout.plot_w / 2
    return layout.pad_left + index * layout.plot_w / (count - 1)


def point_color(value: float) -> str:
    return MOOD_LINE_COLORS[mood_band(value)]


def y_ticks(layout: ChartLayout) -> list[tuple[int, float]]:
    return [(tick, y_for(tick, layout)) for tick in GRID_TICKS]


def _num(v: float) -> str:
    return f"{v:.2f}".rstrip("0").rstrip(".")


def _segments(points: list[ChartPoint]) -> list[list[ChartPoint]]:
    # a missing index breaks the line; never bridge across it
    out: list[list[ChartPoint]] = []
    for p in points:
        if out and out[-1][-1].index == p.index - 1:
            out[-1].append(p)
        else:
            out.append([p])
    return out


def _line_path(segments: list[list[ChartPoint]]) -> str:
    parts: list[str] = []
    for seg in segments:
        head, *rest = seg
        d = f"M {_num(head.x)} {_num(head.y)}"
        for p in rest:
            d += f" L {_num(p.x)} {_num(p.y)}"
        parts.append(d)
    return " ".join(parts)


def _area_path(segments: list[list[ChartPoint]], layout: ChartLayout) -> str:
    parts: list[str] = []
    base = _num(layout.baseline)
    for seg in segments:
        if len(seg) < 2:
            continue
        d = _line_path([seg])
        d += f" L {_num(seg[-1].x)} {base} L {_num(seg[0].x)} {base} Z"
        parts.append(d)
    return " ".join(parts)


def map_series(series: Sequence[SeriesPoint], layout: ChartLayout | None = None) -> ChartGeometry:
    """
    Map a series onto the canvas. Every label gets a horizontal slot; only
    points with data are plotted, and the line is split at each gap.
    """
    layout = layout or ChartLayout()
    n = len(series)

    slots: list[ChartSlot] = []
    points: list[ChartPoint] = []
    for i, sp in enumerate(series):
        x = x_for(i, n, layout)
        point = None
        if sp.value is not NO_DATA:
            value = float(sp.value)
            point = ChartPoint(
                index=i,
                label=sp.label,
                value=value,
                x=x,
                y=y_for(value, layout),
                color=point_color(value),
            )
            points.append(point)
        slots.append(ChartSlot(index=i, label=sp.label, x=x, point=point))

    if not points:
        return ChartGeometry(slots=slots)

    segments = _segments(points)
    mean = sum(p.value for p in points) / len(points)
    return ChartGeometry(
        slots=slots,
        points=points,
        segments=segments,
        line_path=_line_path(segments),
        area_path=_area_path(segments, layout),
        color=point_color(mean),
    )


# -------------------------
# SVG output
# -------------------------

def to_svg(geometry: ChartGeometry, layout: ChartLayout | None = None) -> str:
    layout = layout or ChartLayout()
    w, h = _num(layout.width), _num(layout.height)
    right = _num(layout.width - layout.pad_right)
    left = _num(layout.pad_left)

    lines = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" viewBox="0 0 {w} {h}">'
    ]
    for tick, y in y_ticks(layout):
        lines.append(
            f'  <line x1="{left}" y1="{_num(y)}" x2="{right}" y2="{_num(y)}" '
            f'stroke="rgba(0,0,0,0.1)" stroke-width="1" stroke-dasharray="4,4"/>'
        )
        lines.append(
            f'  <text x="{_num(layout.pad_left - 10)}" y="{_num(y + 4)}" text-anchor="end" '
            f'font-size="12" fill="#666">{tick}</text>'
        )

    if geometry.empty:
        lines.append(
            f'  <text x="{_num(layout.width / 2)}" y="{_num(layout.height / 2)}" text-anchor="middle" '
            f'fill="#666">No mood data</text>'
        )
    else:
        if geometry.area_path:
            lines.append(f'  <path d="{geometry.area_path}" fill="{geometry.color}" fill-opacity="0.1"/>')
        lines.append(
            f'  <path d="{geometry.line_path}" stroke="{geometry.color}" stroke-width="3" fill="none" '
            f'stroke-linecap="round" stroke-linejoin="round"/>'
        )
        for p in geometry.points:
            lines.append(
                f'  <circle cx="{_num(p.x)}" cy="{_num(p.y)}" r="5" fill="{p.color}" '
                f'stroke="white" stroke-width="2"/>'
            )

    label_y = _num(layout.baseline + 20)
    for slot in geometry.slots:
        lines.append(
            f'  <text x="{_num(slot.x)}" y="{label_y}" text-anchor="middle" font-size="11" '
            f'fill="#666">{escape(slot.label)}</text>'
        )
    lines.append("</svg>")
    return "\n".join(lines) + "\n"
