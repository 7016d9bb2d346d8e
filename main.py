import os
from collections import Counter

from PyPDF2 import PdfMerger
from loguru import logger

import almanac.settings as settings
from almanac.fonts import init_fonts
from almanac.config import load_config
from almanac.event_processing import layout_month
from almanac.utils import parse_month_range
from almanac.renderers import render_month_pdf, export_pdf_to_png
from almanac.logger import configure_logging


def main():
    # 0) Set up logs
    configure_logging()
    # 1) Initialize fonts once
    faces = init_fonts()

    # 2) Build list of months to render
    logger.debug("Timezone: {}", settings.TIMEZONE)
    months = parse_month_range(settings.MONTH_RANGE, settings.TZ_LOCAL)

    # 3) Load config and events
    config = load_config(settings.CONFIG_PATH)
    events = config["events"]
    types = config["types"]

    counts = Counter(event.type or "untyped" for event in events)
    logger.debug("Event count by type:")
    for tag, cnt in counts.items():
        logger.debug("   • {}: {} events", tag, cnt)

    merger = PdfMerger()
    temp_files = []

    # 4) Per-month layout & rendering
    for month, year in months:
        logger.info("Processing {}-{:02d}", year, month + 1)
        month_layout = layout_month(events, month, year, settings.WEEK_START)

        tmp = f"/tmp/almanac_{year}-{month + 1:02d}.pdf"
        render_month_pdf(month_layout, tmp, faces, types)
        merger.append(tmp)
        temp_files.append(tmp)

    # 5) Write merged PDF
    out_path = settings.OUTPUT_PDF
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "wb") as f:
        merger.write(f)
    merger.close()
    logger.info("Wrote PDF to {}", out_path)

    if settings.FORMAT in ('png', 'both'):
        png_dir = export_pdf_to_png(
            pdf_path=out_path,
            months=months,
            output_dir=settings.OUTPUT_PNG,
            dpi=settings.PDF_DPI,
        )
        logger.info("Exported PNGs to {}", png_dir)

        # If the user only wants PNGs, remove the PDF:
        if settings.FORMAT == 'png':
            os.remove(out_path)
            logger.info("Removed merged PDF at {}", out_path)

    first, last = months[0], months[-1]
    logger.info("✅ Completed generation for {}-{:02d}:{}-{:02d}", first[1], first[0] + 1, last[1], last[0] + 1)

    # 6) Clean up
    for fpath in temp_files:
        os.remove(fpath)


if __name__ == '__main__':
    main()
