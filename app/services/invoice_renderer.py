"""
Invoice PDF renderer.

Rendering is split in two passes:

1. Layout: each block (header band, issuer, bill-to, item table, summary,
   EMI schedule, footer) takes a `Cursor`, returns its draw operations and
   the advanced cursor. Coordinates are top-down points on an A4 page.
2. Paint: the operations are replayed on a ReportLab canvas.

The layout pass is pure, so the page can be inspected without parsing PDF.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from io import BytesIO
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple, Union

from pydantic import ValidationError
from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from app.config import settings
from app.core.exceptions import InvoiceRenderError, MalformedInvoiceError
from app.core.logging import get_logger
from app.schemas.invoice import InvoiceDocument
from app.utils.amount_words import amount_to_words
from app.utils.time import get_local_today

logger = get_logger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Page geometry (points)
PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 30
START_X = 40
CONTENT_WIDTH = 515
ISSUER_SHARE = 0.6
SUMMARY_LABEL_SHARE = 0.7
ROW_HEIGHT = 20
HEADER_BAND_HEIGHT = 20
ISSUER_BLOCK_HEIGHT = 90
BILL_TO_HEIGHT = 60
SUMMARY_GAP = 10
EMI_GAP = 15
EMI_LINE_HEIGHT = 12
CELL_PADDING = 5
FOOTER_Y = 780

# Palette
MAIN_COLOR = "#2d334a"
LIGHT_COLOR = "#f4f6f9"
ACCENT_COLOR = "#6366f1"
BADGE_FILL = "#eff6ff"
MUTED_COLOR = "#666666"
BALANCE_COLOR = "#ff0000"

FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"
DATE_FORMAT = "%d/%m/%Y"


@dataclass(frozen=True)
class Column:
    label: str
    width: float
    align: str = "left"


ITEM_COLUMNS: Tuple[Column, ...] = (
    Column("#", 30),
    Column("Item name", 225),
    Column("HSN/ SAC", 60),
    Column("Qty", 40, "right"),
    Column("Price/ Unit(Rs)", 80, "right"),
    Column("Amount(Rs)", 80, "right"),
)


# ---------------------------------------------------------------------------
# Layout model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Box:
    x: float
    y: float
    width: float
    height: float
    stroke: str = MAIN_COLOR
    fill: Optional[str] = None
    role: str = ""


@dataclass(frozen=True)
class Text:
    text: str
    x: float
    y: float
    size: float
    color: str = MAIN_COLOR
    font: str = FONT
    align: str = "left"
    width: Optional[float] = None
    role: str = ""


@dataclass(frozen=True)
class Picture:
    path: Path
    x: float
    y: float
    width: float
    height: float


DrawOp = Union[Box, Text, Picture]


@dataclass(frozen=True)
class Cursor:
    """Running vertical position, top of the next block."""
    y: float

    def advance(self, dy: float) -> "Cursor":
        return replace(self, y=self.y + dy)


@dataclass
class InvoiceLayout:
    ops: List[DrawOp] = field(default_factory=list)
    cursor: Cursor = Cursor(MARGIN)
    invoice_no: str = ""

    @property
    def overflows(self) -> bool:
        """True when content reaches the fixed footer line."""
        return self.cursor.y > FOOTER_Y

    def boxes(self, role: str) -> List[Box]:
        return [op for op in self.ops if isinstance(op, Box) and op.role == role]

    def texts(self, role: Optional[str] = None) -> List[Text]:
        return [
            op for op in self.ops
            if isinstance(op, Text) and (role is None or op.role == role)
        ]


BlockResult = Tuple[List[DrawOp], Cursor]


def display_invoice_number(display_id: str) -> str:
    """Human-facing invoice number: last 6 characters, upper-cased."""
    return str(display_id)[-6:].upper()


def format_money(value: Any) -> str:
    return f"{value:.2f}"


def format_quantity(value: Any) -> str:
    if value == int(value):
        return str(int(value))
    return format(value.normalize(), "f") if hasattr(value, "normalize") else str(value)


def fit_text(text: str, width: float, size: float, font: str = FONT) -> str:
    """Trim text with an ellipsis so it fits inside a table cell."""
    if stringWidth(text, font, size) <= width:
        return text
    while text and stringWidth(text + "...", font, size) > width:
        text = text[:-1]
    return text + "..."


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

def layout_header_band(cursor: Cursor) -> BlockResult:
    ops: List[DrawOp] = [
        Box(START_X, cursor.y, CONTENT_WIDTH, HEADER_BAND_HEIGHT, fill=LIGHT_COLOR, role="header-band"),
        Text("Tax Invoice", START_X, cursor.y + 5, 10, align="center", width=CONTENT_WIDTH, role="title"),
    ]
    return ops, cursor.advance(HEADER_BAND_HEIGHT)


def layout_issuer(cursor: Cursor, invoice_no: str, issued_on: date, logo_path: Optional[Path]) -> BlockResult:
    """Issuer box on the left, invoice number and date box on the right."""
    top = cursor.y
    issuer_width = CONTENT_WIDTH * ISSUER_SHARE
    meta_x = START_X + issuer_width
    ops: List[DrawOp] = [Box(START_X, top, issuer_width, ISSUER_BLOCK_HEIGHT, role="issuer")]

    if logo_path is not None:
        ops.append(Picture(logo_path, START_X + 8, top + 8, 65, 75))
    else:
        ops.append(Box(START_X + 10, top + 10, 60, 70, stroke=ACCENT_COLOR, fill=BADGE_FILL, role="monogram"))
        ops.append(Text(settings.COMPANY_MONOGRAM, START_X + 18, top + 35, 22, color=ACCENT_COLOR, role="monogram"))

    text_x = START_X + 80
    ops += [
        Text(settings.COMPANY_NAME, text_x, top + 20, 14, font=BOLD_FONT, role="issuer"),
        Text(f"Phone: {settings.COMPANY_PHONE}", text_x, top + 45, 8, role="issuer"),
        Text(f"Email: {settings.COMPANY_EMAIL}", text_x, top + 58, 8, role="issuer"),
        Box(meta_x, top, CONTENT_WIDTH - issuer_width, ISSUER_BLOCK_HEIGHT, role="meta"),
        Text(f"Invoice No.: {invoice_no}", meta_x + 10, top + 15, 9, role="invoice-no"),
        Text(f"Date: {issued_on.strftime(DATE_FORMAT)}", meta_x + 10, top + 35, 9, role="invoice-date"),
    ]
    return ops, cursor.advance(ISSUER_BLOCK_HEIGHT)


def layout_bill_to(cursor: Cursor, invoice: InvoiceDocument) -> BlockResult:
    top = cursor.y
    ops: List[DrawOp] = [
        Box(START_X, top, CONTENT_WIDTH, BILL_TO_HEIGHT, role="bill-to"),
        Text("Bill To:", START_X + 5, top + 5, 8, role="bill-to"),
        Text(invoice.client_name, START_X + 5, top + 20, 10, font=BOLD_FONT, role="client-name"),
        Text(f"Account: {invoice.account_number}", START_X + 5, top + 38, 8, color=MUTED_COLOR, role="account"),
    ]
    return ops, cursor.advance(BILL_TO_HEIGHT)


def _item_row_values(index: int, item) -> List[str]:
    return [
        str(index),
        item.item_name,
        item.hsn or "",
        format_quantity(item.quantity),
        format_money(item.price),
        format_money(item.amount),
    ]


def layout_item_table(cursor: Cursor, invoice: InvoiceDocument) -> BlockResult:
    """Six-column item table. An empty list gets a single "No items listed" row."""
    ops: List[DrawOp] = []
    x = START_X
    for column in ITEM_COLUMNS:
        ops.append(Box(x, cursor.y, column.width, ROW_HEIGHT, fill=LIGHT_COLOR, role="item-header"))
        ops.append(Text(column.label, x, cursor.y + 6, 8, align="center", width=column.width, role="item-header"))
        x += column.width
    cursor = cursor.advance(ROW_HEIGHT)

    if not invoice.items:
        ops.append(Box(START_X, cursor.y, CONTENT_WIDTH, ROW_HEIGHT, role="empty-row"))
        ops.append(Text("No items listed", START_X + CELL_PADDING, cursor.y + 6, 8, role="empty-row"))
        return ops, cursor.advance(ROW_HEIGHT)

    for index, item in enumerate(invoice.items, start=1):
        x = START_X
        for column, value in zip(ITEM_COLUMNS, _item_row_values(index, item)):
            inner = column.width - 2 * CELL_PADDING
            ops.append(Box(x, cursor.y, column.width, ROW_HEIGHT, role="item-cell"))
            ops.append(Text(
                fit_text(value, inner, 8),
                x + CELL_PADDING, cursor.y + 6, 8,
                align=column.align, width=inner, role="item-cell",
            ))
            x += column.width
        cursor = cursor.advance(ROW_HEIGHT)
    return ops, cursor


def layout_summary_row(cursor: Cursor, label: str, value: str, color: str = MAIN_COLOR) -> BlockResult:
    """Bordered label/value row. Height grows when the value wraps."""
    label_width = CONTENT_WIDTH * SUMMARY_LABEL_SHARE
    value_width = CONTENT_WIDTH - label_width
    inner = value_width - 2 * CELL_PADDING
    lines = simpleSplit(value, FONT, 9, inner) or [""]
    height = max(ROW_HEIGHT, len(lines) * 11 + 9)

    ops: List[DrawOp] = [
        Box(START_X, cursor.y, label_width, height, role="summary-label"),
        Box(START_X + label_width, cursor.y, value_width, height, role="summary-value"),
        Text(label, START_X + CELL_PADDING, cursor.y + 5, 9, color=color, role="summary-label"),
    ]
    for n, line in enumerate(lines):
        ops.append(Text(
            line, START_X + label_width + CELL_PADDING, cursor.y + 5 + n * 11, 9,
            color=color, align="right", width=inner, role=f"summary:{label}",
        ))
    return ops, cursor.advance(height)


def layout_summary(cursor: Cursor, invoice: InvoiceDocument) -> BlockResult:
    """Totals block. Sub Total and Total both print total_amount."""
    total = f"Rs {format_money(invoice.total_amount)}"
    rows = [
        ("Sub Total", total, MAIN_COLOR),
        ("Total", total, MAIN_COLOR),
        ("Invoice Amount in Words", amount_to_words(invoice.total_amount), MAIN_COLOR),
        ("Received (Paid)", f"Rs {format_money(invoice.paid_amount)}", MAIN_COLOR),
        ("Balance (Remaining)", f"Rs {format_money(invoice.remaining_amount)}", BALANCE_COLOR),
    ]
    ops: List[DrawOp] = []
    cursor = cursor.advance(SUMMARY_GAP)
    for label, value, color in rows:
        row_ops, cursor = layout_summary_row(cursor, label, value, color)
        ops += row_ops
    return ops, cursor


def layout_emi_schedule(cursor: Cursor, invoice: InvoiceDocument) -> BlockResult:
    cursor = cursor.advance(EMI_GAP)
    ops: List[DrawOp] = [
        Text("EMI Payment Schedule:", START_X, cursor.y, 10, font=BOLD_FONT, role="emi-heading"),
    ]
    cursor = cursor.advance(EMI_GAP)
    for index, emi in enumerate(invoice.emi_details, start=1):
        line = (
            f"{index}. Rs {format_money(emi.amount)} | "
            f"Due: {emi.due_date.strftime(DATE_FORMAT)} | "
            f"Status: {emi.status.value.upper()}"
        )
        ops.append(Text(line, START_X + 10, cursor.y, 8, role="emi-line"))
        cursor = cursor.advance(EMI_LINE_HEIGHT)
    return ops, cursor


def layout_footer() -> List[DrawOp]:
    """Pinned to FOOTER_Y regardless of content above."""
    return [
        Text(
            settings.INVOICE_FOOTER_TEXT, START_X, FOOTER_Y, 7,
            color=MUTED_COLOR, align="center", width=CONTENT_WIDTH, role="footer",
        )
    ]


def build_layout(
    invoice: InvoiceDocument,
    display_id: str,
    issued_on: date,
    logo_path: Optional[Path] = None,
) -> InvoiceLayout:
    invoice_no = display_invoice_number(display_id)
    cursor = Cursor(MARGIN)
    ops: List[DrawOp] = []

    block, cursor = layout_header_band(cursor)
    ops += block
    block, cursor = layout_issuer(cursor, invoice_no, issued_on, logo_path)
    ops += block
    block, cursor = layout_bill_to(cursor, invoice)
    ops += block
    block, cursor = layout_item_table(cursor, invoice)
    ops += block
    block, cursor = layout_summary(cursor, invoice)
    ops += block
    block, cursor = layout_emi_schedule(cursor, invoice)
    ops += block
    ops += layout_footer()

    return InvoiceLayout(ops=ops, cursor=cursor, invoice_no=invoice_no)


# ---------------------------------------------------------------------------
# Paint
# ---------------------------------------------------------------------------

def _paint_text(c: canvas.Canvas, op: Text) -> None:
    c.setFont(op.font, op.size)
    c.setFillColor(HexColor(op.color))
    baseline = PAGE_HEIGHT - op.y - op.size * 0.8
    width = op.width or 0
    if op.align == "center":
        c.drawCentredString(op.x + width / 2, baseline, op.text)
    elif op.align == "right":
        c.drawRightString(op.x + width, baseline, op.text)
    else:
        c.drawString(op.x, baseline, op.text)


def paint(c: canvas.Canvas, ops: Sequence[DrawOp]) -> None:
    """Replay layout operations on a canvas, flipping to PDF's bottom-up axis."""
    for op in ops:
        if isinstance(op, Box):
            c.setStrokeColor(HexColor(op.stroke))
            if op.fill is not None:
                c.setFillColor(HexColor(op.fill))
            c.rect(
                op.x, PAGE_HEIGHT - op.y - op.height, op.width, op.height,
                stroke=1, fill=1 if op.fill is not None else 0,
            )
        elif isinstance(op, Text):
            _paint_text(c, op)
        elif isinstance(op, Picture):
            c.drawImage(
                ImageReader(str(op.path)),
                op.x, PAGE_HEIGHT - op.y - op.height,
                width=op.width, height=op.height,
                preserveAspectRatio=True, mask="auto",
            )


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def resolve_logo_path(configured: Optional[str] = None) -> Optional[Path]:
    """
    Logo file if it exists and reads as an image; relative paths are taken
    from the project root. A bad file falls back to the monogram.
    """
    configured = settings.INVOICE_LOGO_PATH if configured is None else configured
    if not configured:
        return None
    path = Path(configured)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    if not path.is_file():
        return None
    try:
        ImageReader(str(path)).getSize()
    except Exception as e:
        logger.warning(
            "Invoice logo is unreadable, drawing monogram instead",
            extra={"logo_path": str(path), "error": str(e)},
        )
        return None
    return path


def coerce_document(record: Any) -> InvoiceDocument:
    """Validate an ORM row or mapping into the renderer's input type."""
    if isinstance(record, InvoiceDocument):
        return record
    try:
        return InvoiceDocument.model_validate(record)
    except ValidationError as e:
        raise MalformedInvoiceError(
            "Invoice record has missing or invalid fields",
            errors=e.errors(include_url=False, include_context=False, include_input=False),
        ) from e


def render_invoice_pdf(record: Any, display_id: str, issued_on: Optional[date] = None) -> bytes:
    """
    Render one invoice as a single A4 page.

    Args:
        record: InvoiceDocument, ORM Invoice or mapping with the same fields
        display_id: Invoice identifier; its tail becomes the printed number
        issued_on: Date printed on the invoice, today when omitted

    Returns:
        The complete PDF file

    Raises:
        MalformedInvoiceError: record is missing fields or has bad values
        InvoiceRenderError: drawing failed
    """
    document = coerce_document(record)
    layout = build_layout(
        document,
        display_id,
        issued_on or get_local_today(),
        resolve_logo_path(),
    )

    if layout.overflows:
        logger.warning(
            "Invoice content overlaps the footer",
            extra={
                "invoice_no": layout.invoice_no,
                "item_count": len(document.items),
                "emi_count": len(document.emi_details),
                "content_bottom": layout.cursor.y,
            },
        )

    buffer = BytesIO()
    try:
        pdf = canvas.Canvas(buffer, pagesize=A4, invariant=1)
        pdf.setTitle(f"Tax Invoice {layout.invoice_no}")
        pdf.setAuthor(settings.COMPANY_NAME)
        paint(pdf, layout.ops)
        pdf.showPage()
        pdf.save()
    except Exception as e:
        raise InvoiceRenderError(f"Failed to render invoice: {e}", invoice_no=layout.invoice_no) from e

    return buffer.getvalue()
