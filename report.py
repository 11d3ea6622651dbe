import io
import logging

import pandas as pd
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from plot_calculator import SIDES, PlotDimensions, Unit, to_feet

logger = logging.getLogger(__name__)


def dimensions_table(dimensions: PlotDimensions, unit: Unit) -> pd.DataFrame:
    """One row per side: the entered value and the same length in feet."""
    unit = Unit(unit)
    feet = to_feet(dimensions, unit)
    return pd.DataFrame({
        "Side": [side.title() for side in SIDES],
        f"Entered ({unit.value})": list(dimensions.as_tuple()),
        "Feet": list(feet.as_tuple()),
    })


def _require_result(result):
    if not result:
        raise ValueError("Calculate the area before exporting a report")


# Excel exporter
def to_excel_bytes(dimensions: PlotDimensions, unit: Unit, result: str) -> io.BytesIO:
    _require_result(result)
    summary = pd.DataFrame([{"Unit": Unit(unit).value, "Result": result}])

    output = io.BytesIO()
    writer = pd.ExcelWriter(output, engine='openpyxl')
    dimensions_table(dimensions, unit).to_excel(writer, index=False, sheet_name='Dimensions')
    summary.to_excel(writer, index=False, sheet_name='Result')
    writer.close()
    output.seek(0)
    logger.info("Exported Excel report (%d bytes)", output.getbuffer().nbytes)
    return output


def to_pdf_bytes(dimensions: PlotDimensions, unit: Unit, result: str) -> io.BytesIO:
    _require_result(result)
    unit = Unit(unit)

    buffer = io.BytesIO()
    p = canvas.Canvas(buffer, pagesize=letter)
    width, height = letter
    y = height - 50

    p.setFont("Helvetica-Bold", 16)
    p.drawString(50, y, "Plot Measurement Report")
    y -= 30

    p.setFont("Helvetica", 12)
    p.drawString(50, y, f"Unit: {unit.value.title()}")
    y -= 20

    p.setFont("Helvetica", 10)
    for side, value in zip(SIDES, dimensions.as_tuple()):
        p.drawString(60, y, f"{side.title()} side: {value:.2f} {unit.value}")
        y -= 15
    y -= 15

    p.setFont("Helvetica-Bold", 12)
    p.drawString(50, y, f"Area: {result}")

    p.save()
    buffer.seek(0)
    logger.info("Exported PDF report (%d bytes)", buffer.getbuffer().nbytes)
    return buffer
