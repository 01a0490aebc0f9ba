"""
PDF Report Generation for Import Summaries.

Creates a PDF of the bookings found in a confirmation, grouped by month,
with the fields that need review marked. A plain text report is written
instead if the PDF cannot be built.
"""

from collections import defaultdict
from datetime import datetime
from pathlib import Path

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from .airports import get_airport_display

MONTH_NAMES = ['January', 'February', 'March', 'April', 'May', 'June',
               'July', 'August', 'September', 'October', 'November', 'December']

# Field holding the date a booking is filed under
_DATE_FIELDS = {
    'flight': 'departure_datetime',
    'transport': 'departure_datetime',
    'car': 'pickup_datetime',
    'lodging': 'check_in_datetime',
}

_KIND_LABELS = {
    'flight': 'Flight',
    'transport': 'Bus/Train',
    'car': 'Car',
    'lodging': 'Stay',
}


def primary_datetime(record):
    return getattr(record, _DATE_FIELDS.get(record.kind, ''), None)


def parse_date_components(timestamp):
    """Extract year, month, day from an ISO timestamp.

    Returns:
        Tuple of (year, month_num, month_name, day)
    """
    if not timestamp:
        return (9999, 0, "Unknown", 0)
    try:
        dt = datetime.fromisoformat(timestamp)
    except ValueError:
        return (9999, 0, "Unknown", 0)
    return (dt.year, dt.month, MONTH_NAMES[dt.month - 1], dt.day)


def describe_record(record):
    """One-line summary of a booking for the report table."""
    if record.kind == 'flight':
        route = ""
        if record.origin or record.destination:
            route = f"{get_airport_display(record.origin) or '?'} -> {get_airport_display(record.destination) or '?'}"
        return f"{record.flight_number or ''} {route}".strip()
    if record.kind == 'transport':
        return f"{record.operator or ''} {record.origin or '?'} -> {record.destination or '?'}".strip()
    if record.kind == 'car':
        return record.company or ""
    if record.kind == 'lodging':
        return record.property_name or ""
    return ""


def format_cost(record):
    if record.cost_amount is None:
        return ""
    return f"{record.cost_amount:,.2f} {record.cost_currency or ''}".strip()


def review_flags(item):
    flags = [f"missing {name}" for name in item.missing]
    flags.extend(f"defaulted {name}" for name in item.defaulted)
    flags.extend(item.notes)
    return "; ".join(flags)


def group_items_by_month(items):
    """Group preview items by (year, month), each group sorted by day.

    Returns:
        Dict of (year, month_num, month_name) -> list of items, sorted
    """
    by_month = defaultdict(list)
    for item in items:
        year, month_num, month_name, day = parse_date_components(primary_datetime(item.record))
        by_month[(year, month_num, month_name)].append((day, item))

    result = {}
    for key in sorted(by_month):
        result[key] = [item for day, item in sorted(by_month[key], key=lambda pair: pair[0])]
    return result


def generate_pdf_report(items, output_path, title="Import Summary"):
    """Generate a PDF report of preview items grouped by month.

    Args:
        items: List of PreviewItem
        output_path: Path to save the PDF
        title: Title for the report

    Returns:
        Path to the generated PDF (or text fallback), or None if there is nothing to report
    """
    if not items:
        print("      No bookings to include in PDF")
        return None

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    by_month = group_items_by_month(items)

    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=letter,
        rightMargin=0.5*inch,
        leftMargin=0.5*inch,
        topMargin=0.5*inch,
        bottomMargin=0.5*inch
    )

    styles = getSampleStyleSheet()

    title_style = ParagraphStyle(
        'CustomTitle',
        parent=styles['Heading1'],
        fontSize=22,
        spaceAfter=6,
        fontName='Helvetica-Bold',
        textColor=colors.HexColor('#1a1a1a'),
        alignment=1  # Center
    )

    subtitle_style = ParagraphStyle(
        'Subtitle',
        parent=styles['Normal'],
        fontSize=10,
        textColor=colors.HexColor('#666666'),
        alignment=1  # Center
    )

    month_style = ParagraphStyle(
        'MonthHeader',
        parent=styles['Heading2'],
        fontSize=12,
        spaceBefore=12,
        spaceAfter=6,
        fontName='Helvetica-Bold',
        textColor=colors.HexColor('#34495e')
    )

    cell_style = ParagraphStyle(
        'Cell',
        parent=styles['Normal'],
        fontSize=8,
        leading=10,
        textColor=colors.HexColor('#333333')
    )

    review_style = ParagraphStyle(
        'Review',
        parent=cell_style,
        textColor=colors.HexColor('#b35c00')
    )

    story = []
    story.append(Paragraph(title, title_style))
    story.append(Spacer(1, 4))

    needs_review = sum(1 for item in items if item.needs_review)
    story.append(Paragraph(
        f"{len(items)} bookings  •  {needs_review} to review  •  "
        f"generated {datetime.now().strftime('%B %d, %Y')}",
        subtitle_style
    ))
    story.append(Spacer(1, 20))

    for (year, month_num, month_name), month_items in by_month.items():
        header = f"{month_name} {year}" if month_num else "Date unknown"
        story.append(Paragraph(header, month_style))

        table_data = [['Date', 'Type', 'Booking', 'Confirmation', 'Cost', 'Review']]
        for item in month_items:
            record = item.record
            _, _, _, day = parse_date_components(primary_datetime(record))
            display_date = f"{month_name[:3]} {day}" if day else ""
            table_data.append([
                display_date,
                _KIND_LABELS.get(record.kind, record.kind),
                Paragraph(describe_record(record), cell_style),
                record.confirmation_number or "------",
                format_cost(record),
                Paragraph(review_flags(item), review_style),
            ])

        table = Table(table_data, colWidths=[0.6*inch, 0.7*inch, 2.3*inch, 1.0*inch, 0.9*inch, 2.0*inch])
        table.setStyle(TableStyle([
            # Header row
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, 0), 9),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.HexColor('#666666')),
            ('BOTTOMPADDING', (0, 0), (-1, 0), 6),
            ('LINEBELOW', (0, 0), (-1, 0), 1, colors.HexColor('#cccccc')),
            # Data rows
            ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
            ('FONTSIZE', (0, 1), (-1, -1), 8),
            ('TEXTCOLOR', (0, 1), (-1, -1), colors.HexColor('#333333')),
            ('TOPPADDING', (0, 1), (-1, -1), 4),
            ('BOTTOMPADDING', (0, 1), (-1, -1), 4),
            ('VALIGN', (0, 0), (-1, -1), 'TOP'),
            ('LINEBELOW', (0, 1), (-1, -2), 0.5, colors.HexColor('#eeeeee')),
        ]))

        story.append(table)
        story.append(Spacer(1, 15))

    try:
        doc.build(story)
        return output_path
    except Exception as e:
        print(f"      Error generating PDF: {e}")
        return generate_text_report(items, output_path.with_suffix('.txt'), title)


def generate_text_report(items, output_path, title="Import Summary"):
    """Generate a plain text report of preview items grouped by month.

    Returns:
        Path to the generated file or None on failure
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    lines = []
    lines.append("=" * 70)
    lines.append(f"  {title}")
    lines.append("=" * 70)
    lines.append(f"  Generated: {datetime.now().strftime('%B %d, %Y at %I:%M %p')}")
    lines.append(f"  Total Bookings: {len(items)}")
    lines.append("")

    for (year, month_num, month_name), month_items in group_items_by_month(items).items():
        header = f"{month_name.upper()} {year}" if month_num else "DATE UNKNOWN"
        lines.append("")
        lines.append("=" * 70)
        lines.append(f"  {header}  ({len(month_items)} bookings)")
        lines.append("=" * 70)
        lines.append("")

        for item in month_items:
            record = item.record
            conf = record.confirmation_number or "------"
            kind = _KIND_LABELS.get(record.kind, record.kind)
            lines.append(f"  {conf:<12} {kind:<10} {describe_record(record)}")
            when = primary_datetime(record)
            if when:
                lines.append(f"               Date: {when}")
            cost = format_cost(record)
            if cost:
                lines.append(f"               Cost: {cost}")
            flags = review_flags(item)
            if flags:
                lines.append(f"               Review: {flags}")
            lines.append("")

    lines.append("")
    lines.append("=" * 70)

    try:
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write('\n'.join(lines))
        return output_path
    except OSError as e:
        print(f"      Error generating report: {e}")
        return None
