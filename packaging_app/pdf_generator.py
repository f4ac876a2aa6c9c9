"""
PDF packaging report.

Generates a one-document summary of a saved packaging configuration.
Uses fpdf2 (pure Python, no system dependencies).

Sections, always in this order:
1. Header + configuration summary
2. Inputs (product, box, pallet, order)
3. Packaging structure
4. Weight and cost
5. Truck load
6. Production timeline
7. Insights
"""

from datetime import datetime

from fpdf import FPDF


def _fmt(amount, symbol: str = "") -> str:
    """Format a cost as {symbol}X,XXX.XX"""
    try:
        return f"{symbol}{float(amount):,.2f}"
    except (ValueError, TypeError):
        return f"{symbol}0.00"


def _num(value, decimals: int = 0) -> str:
    """Thousands-separated number, '-' for missing values."""
    if value is None:
        return "-"
    try:
        return f"{float(value):,.{decimals}f}"
    except (ValueError, TypeError):
        return "-"


def _dims(width, length, height) -> str:
    if not (width and length and height):
        return "-"
    return f"{_num(width)} x {_num(length)} x {_num(height)} mm"


def _date(value) -> str:
    if not value:
        return "-"
    return value.strftime("%b %d, %Y")


def _safe(text: str) -> str:
    """Replace Unicode chars that can't be rendered by built-in PDF fonts (latin-1)."""
    if not text:
        return ""
    return (
        text
        .replace("\u2022", "-")    # bullet
        .replace("\u2014", " - ")  # em dash
        .replace("\u2013", "-")    # en dash
        .replace("\u00d7", "x")    # multiplication sign
        .encode("latin-1", errors="replace")
        .decode("latin-1")
    )


def generate_summary(data, results: dict) -> str:
    """Plain-language one-liner used under the report title."""
    if data.has_box:
        packing = f"{results['unitsPerBox']} units per box, {results['boxesPerPalletLayer']} boxes per layer"
    else:
        packing = f"{results['boxesPerPalletLayer']} units per layer (no secondary packaging)"
    pallets = results["totalPalletsNeeded"]
    return (
        f"{packing}, {results['layersPerPallet']} layers per pallet. "
        f"{_num(results['totalUnitsPerPallet'])} units per pallet, "
        f"{pallets} pallet{'s' if pallets != 1 else ''} in total."
    )


class ReportPDF(FPDF):
    """Custom PDF class for packaging reports."""

    def __init__(self, company_name=""):
        super().__init__()
        self.company_name = company_name
        self.set_auto_page_break(auto=True, margin=20)

    def header(self):
        pass  # Headers are drawn per section

    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(150, 150, 150)
        self.cell(0, 10, f"Page {self.page_no()}/{{nb}}", align="C")

    def section_header(self, title):
        """Render a section header bar."""
        self.set_font("Helvetica", "B", 11)
        self.set_fill_color(45, 55, 72)
        self.set_text_color(255, 255, 255)
        self.cell(0, 8, f"  {title}", fill=True, new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(0, 0, 0)
        self.ln(2)

    def key_value_rows(self, rows, label_width=70):
        """Two-column label / value rows."""
        for label, value in rows:
            self.set_font("Helvetica", "", 9)
            self.cell(label_width, 5.5, _safe(label))
            self.set_font("Helvetica", "B", 9)
            self.cell(0, 5.5, _safe(str(value)), new_x="LMARGIN", new_y="NEXT")
        self.ln(3)

    def table_header(self, cols):
        """Render a table header row. cols: [(label, width), ...]"""
        self.set_font("Helvetica", "B", 8)
        self.set_fill_color(240, 240, 240)
        for i, (label, width) in enumerate(cols):
            align = "L" if i == 0 else "R"
            self.cell(width, 6, label, border="B", fill=True, align=align)
        self.ln()

    def table_row(self, values, widths):
        self.set_font("Helvetica", "", 8)
        for i, (val, width) in enumerate(zip(values, widths)):
            align = "L" if i == 0 else "R"
            self.cell(width, 5.5, _safe(str(val)), align=align)
        self.ln()


def generate_configuration_pdf(header: dict, data, report: dict) -> bytearray:
    """
    Generate the packaging report PDF.

    Args:
        header: company_name, currency_symbol, configuration_name, product_name,
            sku, notes, updated_at
        data: ProductData the report was computed from
        report: output of build_report() — results, timeline, truck, analysis

    Returns:
        PDF bytes
    """
    results = report["results"]
    timeline = report["timeline"]
    truck = report["truck"]
    analysis = report["analysis"]
    currency = header.get("currency_symbol") or ""

    pdf = ReportPDF(company_name=header.get("company_name") or "")
    pdf.alias_nb_pages()
    pdf.add_page()
    pw = pdf.w - pdf.l_margin - pdf.r_margin  # printable width

    # ── SECTION 1: Header ──
    pdf.set_font("Helvetica", "B", 18)
    pdf.cell(0, 10, _safe(pdf.company_name or "Packaging Report"), new_x="LMARGIN", new_y="NEXT")

    pdf.set_font("Helvetica", "B", 13)
    pdf.cell(0, 8, _safe(f"PACKAGING REPORT - {header.get('configuration_name', '')}"),
             new_x="LMARGIN", new_y="NEXT")

    updated = header.get("updated_at") or datetime.utcnow()
    pdf.set_font("Helvetica", "", 10)
    pdf.cell(0, 5, f"Date: {updated.strftime('%B %d, %Y')}", new_x="LMARGIN", new_y="NEXT")
    product_line = header.get("product_name") or ""
    if header.get("sku"):
        product_line = f"{product_line} ({header['sku']})"
    if product_line:
        pdf.cell(0, 5, _safe(f"Product: {product_line}"), new_x="LMARGIN", new_y="NEXT")

    pdf.ln(3)
    pdf.set_font("Helvetica", "", 9)
    pdf.multi_cell(0, 4.5, _safe(generate_summary(data, results)))
    if header.get("notes"):
        pdf.set_font("Helvetica", "I", 9)
        pdf.multi_cell(0, 4.5, _safe(header["notes"]))
    pdf.ln(4)

    # ── SECTION 2: Inputs ──
    pdf.section_header("INPUTS")
    pdf.key_value_rows([
        ("Product (W x L x H)", _dims(data.product_width, data.product_length, data.product_height)),
        ("Box (W x L x H)", _dims(data.box_width, data.box_length, data.box_height)),
        ("Pallet footprint", f"{_num(data.pallet_width)} x {_num(data.pallet_length)} mm"),
        ("Pallet max height", f"{_num(data.pallet_max_height or 1800)} mm"),
        ("Unit weight / box weight", f"{_num(data.product_weight, 3)} kg / {_num(data.box_weight or 0, 3)} kg"),
        ("Unit cost / box cost", f"{_fmt(data.product_cost, currency)} / {_fmt(data.box_cost or 0, currency)}"),
        ("Production", f"{_num(data.production_speed)} units/day, {data.working_days} days/week"),
    ])

    # ── SECTION 3: Packaging structure ──
    pdf.section_header("PACKAGING STRUCTURE")
    pdf.key_value_rows([
        ("Units per box", _num(results["unitsPerBox"])),
        ("Boxes per pallet layer", _num(results["boxesPerPalletLayer"])),
        ("Layers per pallet", _num(results["layersPerPallet"])),
        ("Units per pallet", _num(results["totalUnitsPerPallet"])),
        ("Total boxes", _num(results["totalBoxesNeeded"])),
        ("Total pallets", _num(results["totalPalletsNeeded"])),
        ("Pallet utilization", f"{_num(results['palletUtilization'], 1)}% ({analysis['pallet_rating']})"),
        ("Box utilization", f"{_num(results['boxUtilization'], 1)}% ({analysis['box_rating']})"),
    ])

    # ── SECTION 4: Weight and cost ──
    pdf.section_header("WEIGHT AND COST")
    cols = [("Level", 70), ("Weight (kg)", 60), ("Cost", 60)]
    widths = [c[1] for c in cols]
    pdf.table_header(cols)
    for label, weight_key, cost_key in (
        ("Per box", "weightPerBox", "costPerBox"),
        ("Per pallet layer", "weightPerPalletLayer", "costPerPalletLayer"),
        ("Per pallet", "weightPerPallet", "costPerPallet"),
        ("Total", "totalWeight", "totalCost"),
    ):
        pdf.table_row([label, _num(results[weight_key], 2), _fmt(results[cost_key], currency)], widths)
    pdf.ln(4)

    # ── SECTION 5: Truck load ──
    pdf.section_header("TRUCK LOAD")
    pdf.key_value_rows([
        ("Truck bed", f"{_num(truck['truck_width'])} x {_num(truck['truck_length'])} mm"),
        ("Pallet layout", f"{truck['pallets_across']} x {truck['pallets_along']}"),
        ("Pallets per truck", truck["pallets_per_truck"]),
        ("Pallets loaded (first truck)", truck["pallets_loaded"]),
        ("Trucks needed", truck["trucks_needed"]),
        ("Truck utilization", f"{_num(truck['truck_utilization'], 1)}%"),
    ])

    # ── SECTION 6: Timeline ──
    pdf.section_header("PRODUCTION TIMELINE")
    pdf.key_value_rows([
        ("Daily production", f"{_num(results['dailyProduction'])} units"),
        ("Estimated duration", f"{_num(timeline['estimated_days'], 1)} days"),
        ("Estimated completion", _date(timeline["estimated_completion_date"])),
    ])
    deadline = timeline.get("deadline")
    if deadline:
        pdf.set_font("Helvetica", "B", 9)
        if deadline["conflict"]:
            pdf.set_text_color(180, 30, 30)
        pdf.multi_cell(0, 4.5, _safe(deadline["message"]))
        pdf.set_text_color(0, 0, 0)
        pdf.ln(2)

    cols = [("Phase", 70), ("Days", 25), ("Units", 35), ("Dates", 60)]
    widths = [c[1] for c in cols]
    pdf.table_header(cols)
    for phase in timeline["phases"]:
        pdf.table_row([
            phase["name"],
            phase["duration"],
            _num(phase["units"]),
            f"{_date(phase['start_date'])} - {_date(phase['end_date'])}",
        ], widths)
    pdf.ln(4)

    # ── SECTION 7: Insights ──
    insights = analysis.get("insights", [])
    if insights:
        pdf.section_header("INSIGHTS")
        pdf.set_font("Helvetica", "", 8)
        for insight in insights:
            pdf.set_x(pdf.l_margin)
            pdf.multi_cell(pw, 4.5, _safe(f"  - {insight['message']}"), new_x="LMARGIN", new_y="NEXT")

    return pdf.output()
