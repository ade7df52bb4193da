"""Flask web application for the fleet service dashboard."""

import logging
from typing import Optional

from dateutil.parser import isoparse
from flask import Flask, render_template, request, redirect, url_for, flash

from api_client import ApiClient
from config import Settings, load_settings
from dashboard import Dashboard
from models import Status, car_status
from web.proxy import create_proxy_blueprint


def format_km(km):
    """Format kilometres with comma separator."""
    if km is None:
        return "—"
    return f"{km:,.0f} km"


def format_cost(cost):
    """Format cost with two decimals."""
    if cost is None:
        return "—"
    return f"{cost:,.2f}"


def format_date(date_str):
    """Format an ISO date as e.g. 'Oct 19, 2026'; unparseable values pass through."""
    if not date_str:
        return "—"
    try:
        return isoparse(date_str).strftime("%b %d, %Y")
    except ValueError:
        return date_str


def status_badge_color(status: Status) -> str:
    """Get Tailwind color classes for status badge."""
    colors = {
        Status.OVERDUE: "bg-red-500 text-white",
        Status.OK: "bg-green-500 text-white",
        Status.UNKNOWN: "bg-gray-400 text-white",
    }
    return colors.get(status, "bg-gray-500 text-white")


def _parse_car_id(value: Optional[str]) -> Optional[int]:
    try:
        return int(value) if value else None
    except ValueError:
        return None


def create_app(
    settings: Optional[Settings] = None, client: Optional[ApiClient] = None
) -> Flask:
    """Build the app: dashboard pages plus the /api pass-through proxy."""
    settings = settings or load_settings()
    client = client or ApiClient(settings.api_base, timeout=settings.timeout)

    app = Flask(__name__)
    app.secret_key = settings.secret_key
    app.config["SETTINGS"] = settings
    app.register_blueprint(create_proxy_blueprint(settings.proxy_target))

    app.jinja_env.filters["format_km"] = format_km
    app.jinja_env.filters["format_cost"] = format_cost
    app.jinja_env.filters["format_date"] = format_date
    app.jinja_env.filters["status_badge_color"] = status_badge_color
    app.jinja_env.globals["car_status"] = car_status

    def load_dashboard(car_id: Optional[int] = None) -> Dashboard:
        dashboard = Dashboard(client)
        dashboard.mount(car_id)
        return dashboard

    def flash_error(dashboard: Dashboard) -> bool:
        if dashboard.error_message:
            flash(dashboard.error_message, "error")
            return True
        return False

    @app.route("/")
    def index():
        """Dashboard: car list, selected car details and service history."""
        dashboard = load_dashboard(_parse_car_id(request.args.get("car")))
        dashboard.set_query(request.args.get("q", ""))

        dialog = request.args.get("dialog")
        if dialog == "service" and dashboard.selected_car:
            dashboard.open_service_dialog()
        elif dialog == "car":
            dashboard.open_car_dialog()

        return render_template("index.html", dashboard=dashboard, Status=Status)

    @app.route("/cars", methods=["POST"])
    def create_car():
        """Handle add car form submission."""
        dashboard = Dashboard(client)
        dashboard.open_car_dialog(
            reg_number=request.form.get("reg_number", ""),
            model=request.form.get("model", ""),
            mileage=request.form.get("mileage", ""),
            release_year=request.form.get("release_year", ""),
            owner=request.form.get("owner", ""),
        )
        created = dashboard.submit_car()
        if created is None:
            if not flash_error(dashboard):
                flash("Car was created but the backend returned no record", "success")
                return redirect(url_for("index"))
            return redirect(url_for("index", dialog="car"))

        flash(f"Added car: {created.reg_number}", "success")
        return redirect(url_for("index", car=dashboard.selected_car_id))

    @app.route("/cars/<int:car_id>/service-records", methods=["POST"])
    def log_service(car_id: int):
        """Handle service record form submission."""
        dashboard = load_dashboard(car_id)
        if flash_error(dashboard):
            return redirect(url_for("index", car=car_id))
        if dashboard.selected_car_id != car_id:
            flash(f"Car {car_id} not found", "error")
            return redirect(url_for("index"))

        dashboard.open_service_dialog(
            date=request.form.get("date", ""),
            type=request.form.get("type", ""),
            mileage=request.form.get("mileage", ""),
            notes=request.form.get("notes", ""),
            cost=request.form.get("cost", ""),
        )
        if dashboard.submit_service_record():
            flash(f"Logged service: {dashboard.service_form.type.strip()}", "success")
            return redirect(url_for("index", car=car_id))

        flash_error(dashboard)
        return redirect(url_for("index", car=car_id, dialog="service"))

    @app.route("/cars/<int:car_id>/delete", methods=["GET"])
    def confirm_delete(car_id: int):
        """Confirmation step before deleting a car."""
        dashboard = load_dashboard(car_id)
        car = dashboard.selected_car
        if car is None or car.id != car_id:
            if not flash_error(dashboard):
                flash(f"Car {car_id} not found", "error")
            return redirect(url_for("index"))
        return render_template(
            "confirm_delete.html", car=car, prompt=dashboard.delete_prompt(car)
        )

    @app.route("/cars/<int:car_id>/delete", methods=["POST"])
    def delete_car(car_id: int):
        """Delete a car once the confirmation form says yes."""
        dashboard = load_dashboard(car_id)
        car = dashboard.selected_car
        if car is None or car.id != car_id:
            if not flash_error(dashboard):
                flash(f"Car {car_id} not found", "error")
            return redirect(url_for("index"))

        confirmed = request.form.get("confirm") == "yes"
        if dashboard.delete_selected_car(lambda prompt: confirmed):
            flash(f"Deleted car: {car.reg_number}", "success")
            return redirect(url_for("index", car=dashboard.selected_car_id))

        if not confirmed:
            flash("Delete not confirmed", "error")
        else:
            flash_error(dashboard)
        return redirect(url_for("index", car=car_id))

    return app


def main():
    """Run the development server (python -m web.app)."""
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level, format="%(levelname)s %(name)s: %(message)s"
    )
    # Access from phone: use your computer's local IP (e.g., 192.168.1.x:5001)
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    create_app(settings).run(debug=True, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
