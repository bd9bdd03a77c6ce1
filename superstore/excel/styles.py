"""
Workbook palette: fonts, fills, borders, alignments and number formats.
"""
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side

# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------
INK = "1B2A41"
TEAL = "0F6E74"
MUTED = "5F6B7A"
STRIPE = "F2F6F7"
GRID = "C9D3D6"
FLAG = "FDE2E1"
WHITE = "FFFFFF"

_FONT = "Calibri"

# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------
TITLE_FONT = Font(name=_FONT, size=22, bold=True, color=INK)
SUBTITLE_FONT = Font(name=_FONT, size=11, italic=True, color=MUTED)
SECTION_FONT = Font(name=_FONT, size=13, bold=True, color=TEAL)
HEADER_FONT = Font(name=_FONT, size=11, bold=True, color=WHITE)
CELL_FONT = Font(name=_FONT, size=10, color=INK)
KPI_VALUE_FONT = Font(name=_FONT, size=24, bold=True, color=INK)
KPI_LABEL_FONT = Font(name=_FONT, size=9, color=MUTED)


def _solid(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


# ---------------------------------------------------------------------------
# Fills
# ---------------------------------------------------------------------------
HEADER_FILL = _solid(TEAL)
STRIPE_FILL = _solid(STRIPE)
FLAG_FILL = _solid(FLAG)

# ---------------------------------------------------------------------------
# Borders / alignment
# ---------------------------------------------------------------------------
_thin = Side(style="thin", color=GRID)
CELL_BORDER = Border(left=_thin, right=_thin, top=_thin, bottom=_thin)
HEADER_BORDER = Border(left=_thin, right=_thin, top=_thin, bottom=Side(style="medium", color=INK))

CENTER = Alignment(horizontal="center", vertical="center")
LEFT = Alignment(horizontal="left", vertical="center")
RIGHT = Alignment(horizontal="right", vertical="center")

# ---------------------------------------------------------------------------
# Column kind → number format. Kinds missing here are written as text.
# ---------------------------------------------------------------------------
NUMBER_FORMATS = {
    "currency": '"$"#,##0.00',
    "percent": '0.00"%"',      # value already scaled to 0-100
    "fraction": "0.0%",        # value in 0-1
    "number": "#,##0",
    "decimal": "0.00",
    "date": "yyyy-mm-dd",
}
