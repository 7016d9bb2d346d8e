from reportlab.lib.pagesizes import landscape, letter
from loguru import logger

import almanac.settings as settings


def get_layout_config(width, height, n_weeks):
    # Raw page margins from environment
    page_left   = settings.PDF_MARGIN_LEFT
    page_right  = width - settings.PDF_MARGIN_RIGHT
    page_top    = height - settings.PDF_MARGIN_TOP
    page_bottom = settings.PDF_MARGIN_BOTTOM

    # Fixed dimensions
    heading_size   = 16
    heading_ascent = heading_size * 0.75
    weekday_size   = 8
    weekday_h      = weekday_size * 2
    element_pad    = 8
    text_padding   = 3
    footer_h       = 10
    day_number_h   = 12

    # Grid extents
    grid_top    = page_top - heading_ascent - (2 * element_pad) - weekday_h
    grid_bottom = page_bottom + footer_h
    grid_left   = page_left
    grid_right  = page_right

    cell_w = (grid_right - grid_left) / 7
    cell_h = (grid_top - grid_bottom) / max(n_weeks, 1)

    lane_h = settings.LANE_HEIGHT
    # Never reserve more lanes than the cell can hold under the day number
    max_lanes = max(0, min(settings.MAX_LANES, int((cell_h - day_number_h) // lane_h)))

    return {
        "grid_top":       grid_top,
        "grid_bottom":    grid_bottom,
        "grid_left":      grid_left,
        "grid_right":     grid_right,
        "cell_w":         cell_w,
        "cell_h":         cell_h,
        "lane_h":         lane_h,
        "max_lanes":      max_lanes,
        "day_number_h":   day_number_h,
        "heading_size":   heading_size,
        "heading_ascent": heading_ascent,
        "weekday_size":   weekday_size,
        "weekday_h":      weekday_h,
        "page_left":      page_left,
        "page_right":     page_right,
        "page_top":       page_top,
        "page_bottom":    page_bottom,
        "element_pad":    element_pad,
        "text_padding":   text_padding,
    }


def cell_origin(row: int, col: int, layout: dict[str, float]) -> tuple[float, float]:
    """Top-left corner of a grid cell (ReportLab y grows upwards)."""
    x = layout["grid_left"] + col * layout["cell_w"]
    y = layout["grid_top"] - row * layout["cell_h"]
    return x, y


def lane_to_y(cell_top: float, lane: int, layout: dict[str, float]) -> float:
    """Bottom edge of a lane's bar inside a cell whose top edge is cell_top."""
    return cell_top - layout["day_number_h"] - (lane + 1) * layout["lane_h"]


def pixels_to_points(pixels, dpi):
    return pixels * 72 / dpi


def get_page_size():
    env_size = settings.PDF_PAGE_SIZE
    env_dpi = settings.PDF_DPI
    try:
        px_width, px_height = map(int, env_size.lower().split("x"))
        width_pt = pixels_to_points(px_width, dpi=env_dpi)
        height_pt = pixels_to_points(px_height, dpi=env_dpi)
        return width_pt, height_pt
    except ValueError as e:
        logger.warning("Invalid DOC_PAGE_DIMENSIONS or DOC_PAGE_DPI: {}. Using landscape letter.", e)
        return landscape(letter)
