import logging
import os

from flask import Flask, render_template, request, send_file, flash, redirect, url_for, session
from flask_wtf import FlaskForm, CSRFProtect
from wtforms import StringField, SelectField, SubmitField

from plot_calculator import SIDES, PlotCalculator, PlotDimensions, Unit, format_side
from report import to_pdf_bytes

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config['SECRET_KEY'] = os.environ.get('PLOT_CALCULATOR_SECRET_KEY', 'dev-secret-key')  # Set a secure key in production
csrf = CSRFProtect(app)

UNIT_CHOICES = [(Unit.FEET.value, 'Feet'), (Unit.YARDS.value, 'Yards')]


# Form for the plot sides
class PlotForm(FlaskForm):
    back = StringField('Back Side')
    front = StringField('Front Side')
    left = StringField('Left Side')
    right = StringField('Right Side')
    unit = SelectField('Unit', choices=UNIT_CHOICES, default=Unit.FEET.value)
    calculate_area = SubmitField('Calculate Area')
    find_missing = SubmitField('Find Missing Side')


def save_plot(calculator: PlotCalculator) -> None:
    session["plot"] = {
        "dimensions": list(calculator.dimensions.as_tuple()),
        "unit": calculator.unit.value,
        "result": calculator.result,
    }


@app.route("/", methods=["GET", "POST"])
def index():
    form = PlotForm()

    if request.method == "GET":
        # A page load starts over
        session.pop("plot", None)
        return render_template("index.html", form=form, result=None)

    previous = session.get("plot") or {}
    if not form.validate_on_submit():
        for field_name, errors in form.errors.items():
            for error in errors:
                flash(f"{field_name}: {error}", "error")
        return render_template("index.html", form=form, result=previous.get("result"))

    calculator = PlotCalculator(notify=flash, unit=form.unit.data, result=previous.get("result"))
    for side in SIDES:
        calculator.set_side(side, getattr(form, side).data)

    if form.find_missing.data:
        before = calculator.dimensions
        if calculator.calculate_missing_side():
            for side in SIDES:
                if calculator.dimensions.get(side) != before.get(side):
                    getattr(form, side).data = format_side(calculator.dimensions.get(side))
    elif form.calculate_area.data:
        calculator.calculate_area()

    save_plot(calculator)
    return render_template("index.html", form=form, result=calculator.result)


@app.route("/download", methods=["POST"])
def download_pdf():
    plot = session.get("plot") or {}
    try:
        dimensions = PlotDimensions(*plot.get("dimensions", ()))
        buffer = to_pdf_bytes(dimensions, plot.get("unit", Unit.FEET.value), plot.get("result"))
    except ValueError as e:
        flash(f"Error generating PDF: {str(e)}", "error")
        return redirect(url_for("index"))

    logger.info("Sending PDF report for %s", plot.get("result"))
    return send_file(buffer, as_attachment=True, download_name="plot_report.pdf", mimetype="application/pdf")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True)
