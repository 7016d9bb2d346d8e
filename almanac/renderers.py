import calendar
import subprocess
from datetime import datetime
from pathlib import Path

from loguru import logger
from reportlab.pdfgen import canvas
from reportlab.lib.colors import HexColor

import almanac.settings as settings
from almanac.layout import cell_origin, get_layout_config, get_page_size, lane_to_y
from almanac.logger import VISUAL
from almanac.models import DayCell, EventRun, MonthLayout
from almanac.utils import css_color_to_hex


def draw_rect_with_optional_round(c, x, y, w, h, radius,
                                  round_left=True, round_right=True,
                                  stroke=1, fill=1):
    """
    Draws a rectangle at (x,y) of width w, height h.
    If round_left is True, rounds the two left corners with `radius`.
    If round_right is True, rounds the two right corners.
    A bar clipped at a week edge keeps that side square.
    """
    p = c.beginPath()
    # start at bottom-left
    if round_left:
        p.moveTo(x + radius, y)
    else:
        p.moveTo(x, y)

    # bottom edge + right side
    if round_right:
        p.lineTo(x + w - radius, y)
        p.arcTo(x + w - 2*radius, y, x + w, y + 2*radius,
                startAng=270, extent=90)
        p.lineTo(x + w, y + h - radius)
        p.arcTo(x + w - 2*radius, y + h - 2*radius, x + w, y + h,
                startAng=0, extent=90)
    else:
        p.lineTo(x + w, y)
        p.lineTo(x + w, y + h)

    # top edge + left side
    if round_left:
        p.lineTo(x + radius, y + h)
        p.arcTo(x, y + h - 2*radius, x + 2*radius, y + h,
                startAng=90, extent=90)
        p.lineTo(x, y + radius)
        p.arcTo(x, y, x + 2*radius, y + 2*radius,
                startAng=180, extent=90)
    else:
        p.lineTo(x, y + h)
        p.lineTo(x, y)

    c.drawPath(p, stroke=stroke, fill=fill)


def ellipsize(c, text, font_name, font_size, max_w):
    if c.stringWidth(text, font_name, font_size) <= max_w:
        return text
    txt = text
    while txt and c.stringWidth(txt + "...", font_name, font_size) > max_w:
        txt = txt[:-1]
    return txt.rstrip() + "..."


def render_weekday_header(c, weekdays, layout, faces):
    c.setFillGray(0.2)
    c.setFont(faces["semibold"], layout["weekday_size"])
    y = layout["grid_top"] + layout["weekday_h"] / 2 - layout["weekday_size"] / 3
    for col, label in enumerate(weekdays):
        x, _ = cell_origin(0, col, layout)
        c.drawCentredString(x + layout["cell_w"] / 2, y, label)


def render_grid(c, month: MonthLayout, layout, faces):
    """Cell borders and day numbers; padding days from adjacent months are dimmed."""
    c.setStrokeColor(css_color_to_hex(settings.GRIDLINE_COLOR))
    c.setLineWidth(0.5)
    n_weeks = len(month.weeks)
    logger.log(VISUAL, "Drawing {}x7 grid, cell {w:.2f}×{h:.2f}", n_weeks, w=layout["cell_w"], h=layout["cell_h"])

    for row in range(n_weeks + 1):
        y = layout["grid_top"] - row * layout["cell_h"]
        c.line(layout["grid_left"], y, layout["grid_right"], y)
    for col in range(8):
        x = layout["grid_left"] + col * layout["cell_w"]
        c.line(x, layout["grid_bottom"], x, layout["grid_top"])

    for row, week in enumerate(month.weeks):
        for col, cell in enumerate(week):
            x, y = cell_origin(row, col, layout)
            if cell.in_month:
                c.setFillGray(0)
                c.setFont(faces["semibold"], 8)
            else:
                c.setFillColor(HexColor(css_color_to_hex(settings.PADDING_DAY_COLOR)))
                c.setFont(faces["regular"], 8)
            c.drawRightString(
                x + layout["cell_w"] - layout["text_padding"],
                y - layout["day_number_h"] + 3,
                str(cell.day.day),
            )


def render_run(c, run: EventRun, x, y, layout, faces, types):
    """One bar: color stripe where the event really starts, fill, and the ellipsized name."""
    pad = layout["text_padding"]
    stripe_w = 2
    left = x + (0 if run.overflow_left else pad)
    right = x + run.span * layout["cell_w"] - (0 if run.overflow_right else pad)
    w = right - left
    h = layout["lane_h"] - 1.5
    radius = min(3, h / 2)

    hex_color = types.get(run.event.type) or css_color_to_hex(settings.DEFAULT_TYPE_COLOR)
    round_left = not run.overflow_left
    round_right = not run.overflow_right

    c.setStrokeColor(css_color_to_hex(settings.EVENT_STROKE))
    c.setLineWidth(0.33)
    inner_left = left
    if not run.overflow_left:
        c.setFillColor(HexColor(hex_color))
        draw_rect_with_optional_round(c, left, y, w, h, radius, round_left, round_right, stroke=0, fill=1)
        inner_left = left + stripe_w
    c.setFillColor(css_color_to_hex(settings.EVENT_FILL))
    draw_rect_with_optional_round(c, inner_left, y, right - inner_left, h, radius,
                                  round_left, round_right, stroke=1, fill=1)

    fs = h * 0.7
    label = ellipsize(c, run.event.name, faces["regular"], fs, (right - inner_left) - 2 * pad)
    c.setFillGray(0)
    c.setFont(faces["regular"], fs)
    c.drawString(inner_left + pad, y + (h - fs) / 2 + 1, label)
    logger.log(VISUAL, "Bar '{}' lane {} span {} at x={x:.2f} w={w:.2f}", run.event.name, run.lane, run.span, x=left, w=w)


def render_cell_entries(c, cell: DayCell, lanes, x, y, layout, faces):
    """
    Timed entries below the reserved lanes, followed by a "+N more" marker
    for anything that did not fit (hidden bars included).
    """
    pad = layout["text_padding"]
    lane_h = layout["lane_h"]
    max_lanes = layout["max_lanes"]
    fs = lane_h * 0.7

    hidden = sum(1 for event in cell.lane_events if lanes.get(event, 0) >= max_lanes)
    reserved = min(cell.depth, max_lanes)
    top = y - layout["day_number_h"] - reserved * lane_h
    slots = int((layout["cell_h"] - layout["day_number_h"] - reserved * lane_h) // lane_h)

    def slot_bottom(i):
        return top - (i + 1) * lane_h

    entries = cell.timed
    if hidden or len(entries) > slots:
        shown = min(len(entries), max(0, slots - 1))
        hidden += len(entries) - shown
        entries = entries[:shown]

    c.setFillGray(0.1)
    c.setFont(faces["regular"], fs)
    max_w = layout["cell_w"] - 2 * pad
    for i, entry in enumerate(entries):
        text = ellipsize(c, f"{entry.time_label} - {entry.event.name}", faces["regular"], fs, max_w)
        c.drawString(x + pad, slot_bottom(i) + 2, text)

    if hidden and slots > 0:
        c.setFillGray(0.4)
        c.setFont(faces["semibold"], fs)
        c.drawString(x + pad, slot_bottom(len(entries)) + 2, f"+{hidden} more")


def render_month_pdf(month: MonthLayout, output_path: str, faces: dict, types: dict | None = None):
    """
    Draw one month page:
      • title
      • weekday header and grid
      • full-day bars per lane, clipped at week edges
      • timed entries in start order
      • footer
    """
    types = types or {}
    width, height = get_page_size()
    c = canvas.Canvas(output_path, pagesize=(width, height))
    layout = get_layout_config(width, height, len(month.weeks))

    logger.log(VISUAL, "Page size: {w:.2f}×{h:.2f}", w=width, h=height)

    # Header/title
    c.setFillGray(0)
    title_y = layout["page_top"] - layout["heading_ascent"]
    c.setFont(faces["bold"], layout["heading_size"])
    c.drawCentredString(width / 2, title_y, f"{calendar.month_name[month.month + 1]} {month.year}")

    render_weekday_header(c, month.weekdays, layout, faces)
    render_grid(c, month, layout, faces)

    for row, week in enumerate(month.weeks):
        lanes = {run.event: run.lane for cell in week for run in cell.runs}
        for col, cell in enumerate(week):
            x, y = cell_origin(row, col, layout)
            for run in cell.runs:
                if run.lane >= layout["max_lanes"]:
                    continue
                render_run(c, run, x, lane_to_y(y, run.lane, layout), layout, faces, types)
            render_cell_entries(c, cell, lanes, x, y, layout, faces)

    footer = settings.FOOTER
    if footer == "updatedat":
        footer_text = datetime.now(settings.TZ_LOCAL).strftime("Updated: %Y-%m-%d %H:%M %Z")
    else:
        footer_text = footer
    if footer != "disabled":
        c.setFont(faces["light"], 6)
        c.setFillColor(css_color_to_hex(settings.FOOTER_COLOR))
        c.drawCentredString(width / 2, layout["page_bottom"], footer_text)

    c.save()
    logger.debug("Rendered {}-{:02d} to {}", month.year, month.month + 1, output_path)


def export_pdf_to_png(pdf_path: str,
                      months: list,
                      output_dir: str = None,
                      dpi: int = 150):
    """
    Calls Poppler's pdftocairo to rasterize each page of `pdf_path` to PNG.
    Output files are named almanac_YYYY-MM.png, one per (month, year) page.
    """
    base = Path(pdf_path).with_suffix('')
    out_dir = Path(output_dir or f"{base}_png")
    out_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Rendering PNGs...")

    # prefix for pdftocairo (it will append -1.png, -2.png, etc)
    prefix = str(out_dir / "page")
    subprocess.run([
        "pdftocairo",
        "-png",
        "-r", str(dpi),
        str(pdf_path),
        prefix
    ], check=True)

    # pdftocairo zero-pads the page number when there are 10+ pages
    for file in sorted(out_dir.glob("page-*.png")):
        idx = int(file.stem.split('-')[1])  # 1-based page number
        month, year = months[idx - 1]
        file.rename(out_dir / f"almanac_{year}-{month + 1:02d}.png")

    return str(out_dir)
