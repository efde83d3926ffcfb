import csv
import io
from datetime import datetime
from typing import Iterable, Mapping

import openpyxl
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from fastapi.responses import Response
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
CSV_MEDIA_TYPE  = "text/csv; charset=utf-8"
PDF_MEDIA_TYPE  = "application/pdf"


def _text(value) -> str:
    return "" if value is None else str(value)


# ─── XLSX ─────────────────────────────────────────────────────────────────────
def build_xlsx(sheet_title: str, headers: list[str], rows: Iterable[Mapping]) -> bytes:
    """One sheet, bold header row, one row per mapping (keyed by header label)."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = sheet_title

    header_fill = PatternFill(start_color="1F3A8A", end_color="1F3A8A", fill_type="solid")
    header_font = Font(bold=True, color="FFFFFF")

    for col, header in enumerate(headers, 1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="center", vertical="center")

    widths = [len(h) for h in headers]
    for row_idx, row in enumerate(rows, 2):
        for col, header in enumerate(headers, 1):
            value = row.get(header)
            ws.cell(row=row_idx, column=col, value=value)
            widths[col - 1] = max(widths[col - 1], len(_text(value)))

    for col, width in enumerate(widths, 1):
        ws.column_dimensions[get_column_letter(col)].width = min(width + 2, 50)

    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


# ─── CSV ──────────────────────────────────────────────────────────────────────
def build_csv(headers: list[str], rows: Iterable[Mapping]) -> str:
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=headers, extrasaction="ignore")
    writer.writeheader()
    for row in rows:
        writer.writerow({h: _text(row.get(h)) for h in headers})
    return buf.getvalue()


# ─── PDF ──────────────────────────────────────────────────────────────────────
def build_pdf_table(title: str, headers: list[str], rows: Iterable[Mapping]) -> bytes:
    """A landscape A4 table with a title line, repeated headers and page numbers."""
    buffer = io.BytesIO()
    page_size = landscape(A4)
    pdf = canvas.Canvas(buffer, pagesize=page_size)
    width, height = page_size
    margin = 14 * mm
    row_height = 16
    col_width = (width - 2 * margin) / max(len(headers), 1)
    header_bg = colors.HexColor("#1F3A8A")
    stripe_bg = colors.HexColor("#F1F5F9")

    def start_page(page_number: int) -> float:
        pdf.setFillColor(colors.black)
        pdf.setFont("Helvetica-Bold", 14)
        pdf.drawString(margin, height - margin, title)
        pdf.setFont("Helvetica", 8)
        pdf.drawString(margin, height - margin - 12, f"Generated {datetime.now().strftime('%b %d, %Y %H:%M')}")
        pdf.drawRightString(width - margin, margin / 2, f"Page {page_number}")
        return height - margin - 32

    def draw_header(y: float) -> float:
        pdf.setFillColor(header_bg)
        pdf.rect(margin, y - 4, width - 2 * margin, row_height, stroke=0, fill=1)
        pdf.setFillColor(colors.white)
        pdf.setFont("Helvetica-Bold", 9)
        for i, header in enumerate(headers):
            pdf.drawString(margin + i * col_width + 4, y + 2, header)
        pdf.setFont("Helvetica", 9)
        return y - row_height

    page_number = 1
    y = draw_header(start_page(page_number))
    for index, row in enumerate(rows):
        if y < margin + row_height:
            pdf.showPage()
            page_number += 1
            y = draw_header(start_page(page_number))
        if index % 2:
            pdf.setFillColor(stripe_bg)
            pdf.rect(margin, y - 4, width - 2 * margin, row_height, stroke=0, fill=1)
        pdf.setFillColor(colors.black)
        for i, header in enumerate(headers):
            # Clip long cells so they stay inside their column
            text = _text(row.get(header))
            max_chars = max(int(col_width / 5), 4)
            if len(text) > max_chars:
                text = text[: max_chars - 3] + "..."
            pdf.drawString(margin + i * col_width + 4, y + 2, text)
        y -= row_height

    pdf.save()
    return buffer.getvalue()


# ─── Response helper ──────────────────────────────────────────────────────────
def file_response(content: bytes | str, filename: str, media_type: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
