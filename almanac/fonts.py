from pathlib import Path
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from loguru import logger

from almanac.settings import FONTS_DIR

# role -> (custom face, TTF file, built-in fallback)
FONTS = {
    "regular":  ("Montserrat-Regular",  "Montserrat-Regular.ttf",  "Helvetica"),
    "semibold": ("Montserrat-SemiBold", "Montserrat-SemiBold.ttf", "Helvetica-Bold"),
    "bold":     ("Montserrat-Bold",     "Montserrat-Bold.ttf",     "Helvetica-Bold"),
    "light":    ("Montserrat-Light",    "Montserrat-Light.ttf",    "Helvetica"),
}


def init_fonts(fonts_dir: Path | None = None) -> dict[str, str]:
    """
    Register the custom fonts with ReportLab and return the face name to use
    for each role. Tries fonts_dir, then FONTS_DIR, then the package-local
    fonts folder; a role with no TTF anywhere falls back to a base-14 font.
    """
    candidates = []
    if fonts_dir:
        candidates.append(Path(fonts_dir))
    candidates.append(Path(FONTS_DIR))  # primary
    candidates.append(Path(__file__).resolve().parent / "fonts")  # fallback

    faces = {}
    for role, (name, fname, builtin) in FONTS.items():
        for base in candidates:
            font_path = (base / fname).resolve()
            if font_path.is_file():
                logger.debug("Loading font {} from {}", name, str(font_path))
                pdfmetrics.registerFont(TTFont(name, str(font_path)))
                faces[role] = name
                break
        else:
            logger.warning(
                "Font '{}' not found in: {}; using {}",
                fname, ", ".join(str(p) for p in candidates), builtin,
            )
            faces[role] = builtin
    return faces
