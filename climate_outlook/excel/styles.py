"""
Workbook colors, fonts, fills, borders, and alignments for outlook exports.
"""
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------
OCEAN_BLUE = "1565C0"
DEEP_BLUE = "0D2B4E"
SKY_TINT = "E3F2FD"
ROW_STRIPE = "F4F7FB"
WHITE = "FFFFFF"
INK = "1A1A1A"
MUTED = "607080"
HEAT_RED = "C62828"
HEAT_TINT = "FDECEA"
GRID = "C9D3DF"

# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------
TITLE_FONT = Font(name="Calibri", size=22, bold=True, color=DEEP_BLUE)
SUBTITLE_FONT = Font(name="Calibri", size=11, italic=True, color=MUTED)
SECTION_FONT = Font(name="Calibri", size=14, bold=True, color=OCEAN_BLUE)
HEADER_FONT = Font(name="Calibri", size=11, bold=True, color=WHITE)
DATA_FONT = Font(name="Calibri", size=10, color=INK)
KPI_VALUE_FONT = Font(name="Calibri", size=24, bold=True, color=DEEP_BLUE)
KPI_LABEL_FONT = Font(name="Calibri", size=10, color=MUTED)

# ---------------------------------------------------------------------------
# Fills
# ---------------------------------------------------------------------------
HEADER_FILL = PatternFill(start_color=DEEP_BLUE, end_color=DEEP_BLUE, fill_type="solid")
STRIPE_FILL = PatternFill(start_color=ROW_STRIPE, end_color=ROW_STRIPE, fill_type="solid")
SKY_FILL = PatternFill(start_color=SKY_TINT, end_color=SKY_TINT, fill_type="solid")
HEAT_FILL = PatternFill(start_color=HEAT_TINT, end_color=HEAT_TINT, fill_type="solid")

# ---------------------------------------------------------------------------
# Borders
# ---------------------------------------------------------------------------
THIN_BORDER = Border(
    left=Side(style="thin", color=GRID),
    right=Side(style="thin", color=GRID),
    top=Side(style="thin", color=GRID),
    bottom=Side(style="thin", color=GRID),
)
HEADER_BORDER = Border(
    left=Side(style="thin", color=DEEP_BLUE),
    right=Side(style="thin", color=DEEP_BLUE),
    top=Side(style="thin", color=DEEP_BLUE),
    bottom=Side(style="medium", color=DEEP_BLUE),
)

# ---------------------------------------------------------------------------
# Alignments
# ---------------------------------------------------------------------------
CENTER = Alignment(horizontal="center", vertical="center")
LEFT = Alignment(horizontal="left", vertical="center")
RIGHT = Alignment(horizontal="right", vertical="center")

# ---------------------------------------------------------------------------
# Highlight name → fill
# ---------------------------------------------------------------------------
HIGHLIGHT_FILLS = {
    "exceed": HEAT_FILL,
    "info": SKY_FILL,
}
