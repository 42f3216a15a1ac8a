from __future__ import annotations
from datetime import date
from typing import Any, Dict, List, Optional
from xml.sax.saxutils import escape
import io

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from roi_services.exports.reports import (
    Row,
    breakdown_rows,
    executive_summary,
    input_rows,
    result_rows,
)

ACCENT = colors.HexColor("#007bff")
MARGIN = 20  # points


def _styles() -> Dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle("ReportTitle", parent=base["Heading1"], textColor=ACCENT, alignment=TA_CENTER),
        "subtitle": ParagraphStyle("ReportSubtitle", parent=base["Heading2"], alignment=TA_CENTER),
        "center": ParagraphStyle("ReportCenter", parent=base["Normal"], alignment=TA_CENTER),
        "section": ParagraphStyle("ReportSection", parent=base["Heading2"], textColor=ACCENT, spaceBefore=12),
        "body": base["Normal"],
        "footer": ParagraphStyle("ReportFooter", parent=base["Normal"], fontSize=8,
                                 textColor=colors.grey, alignment=TA_CENTER, spaceBefore=24),
    }


def _grid(rows: List[Row], styles: Dict[str, ParagraphStyle]) -> Table:
    """Two-column grid of label/value cells."""
    cells = [
        Paragraph(f"<b>{escape(label)}:</b><br/>{escape(value)}", styles["body"])
        for label, value in rows
    ]
    data = [cells[i:i + 2] for i in range(0, len(cells), 2)]
    if len(data[-1]) < 2:
        data[-1].append("")
    half = (A4[0] - 2 * MARGIN - 12) / 2  # frame keeps 6pt padding per side
    t = Table(data, colWidths=[half, half])
    t.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, -1), colors.HexColor("#f8f9fa")),
        ("GRID", (0, 0), (-1, -1), 4, colors.white),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("TOPPADDING", (0, 0), (-1, -1), 8),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
    ]))
    return t


def render_pdf(scenario: Dict[str, Any], generated_on: Optional[date] = None) -> bytes:
    """Render a stored scenario (inputs + results) as an A4 PDF document."""
    styles = _styles()
    generated_on = generated_on or date.today()
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=MARGIN,
        rightMargin=MARGIN,
        topMargin=MARGIN,
        bottomMargin=MARGIN,
        title="ROI Analysis Report",
    )
    story: List[Any] = [
        Paragraph("Invoice Processing ROI Analysis", styles["title"]),
        Paragraph(f"Scenario: {escape(str(scenario['scenario_name']))}", styles["subtitle"]),
        Paragraph(f"Generated on: {generated_on.strftime('%m/%d/%Y')}", styles["center"]),
        Spacer(1, 12),
        Paragraph("Input Parameters", styles["section"]),
        _grid(input_rows(scenario), styles),
        Paragraph("ROI Analysis Results", styles["section"]),
        _grid(result_rows(scenario), styles),
        Paragraph("Cost Breakdown", styles["section"]),
        _grid(breakdown_rows(scenario), styles),
        Paragraph("Executive Summary", styles["section"]),
    ]
    for para in executive_summary(scenario):
        story.append(Paragraph(escape(para), styles["body"]))
        story.append(Spacer(1, 6))
    story.append(Paragraph(
        "This report was generated automatically by the Invoice Processing ROI Calculator",
        styles["footer"],
    ))
    doc.build(story)
    return buf.getvalue()
