import logging
import os

from dotenv import load_dotenv
from flask import Flask, render_template, jsonify

from models import db
import directory
import weather_api as weather_api

load_dotenv()

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

# Helper: formats the reading's UTC instant the way clients expect it ("2024-01-31 13:05:00 UTC").
def _format_time(moment):
    return moment.strftime(TIME_FORMAT) + " UTC"

def _weather_payload(reading):
    """Return the client-facing dict for a WeatherReading. Only the time is reformatted."""
    return {
        "cityName": reading.city_name,
        "countryName": reading.country_name,
        "time": _format_time(reading.time),
        "windSpeed": reading.wind_speed,
        "windDirection": reading.wind_direction,
        "visibility": reading.visibility,
        "skyConditions": reading.sky_conditions,
        "temperatureFahrenheit": reading.temperature_fahrenheit,
        "temperatureCelsius": reading.temperature_celsius,
        "dewPoint": reading.dew_point,
        "humidity": reading.humidity,
        "pressure": reading.pressure,
    }

def _error(code, message, status):
    return jsonify({"error": code, "message": message}), status

# App factory — sets configuration, seeds the directory, and registers routes.
def create_app():
    app = Flask(__name__)
    app.config["SECRET_KEY"] = os.environ.get("SECRET_KEY", "dev-secret")
    app.config["SQLALCHEMY_DATABASE_URI"] = os.environ.get("DATABASE_URL", "sqlite:///:memory:")
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.config["OPENWEATHER_API_KEY"] = os.environ.get("OPENWEATHER_API_KEY", "")
    app.config["OPENWEATHER_API_URL"] = os.environ.get("OPENWEATHER_API_URL", weather_api.OPENWEATHER_URL)
    app.config["WEATHER_TIMEOUT"] = float(os.environ.get("WEATHER_TIMEOUT", weather_api.DEFAULT_TIMEOUT))

    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not app.config["OPENWEATHER_API_KEY"]:
        app.logger.warning("OPENWEATHER_API_KEY is not set; weather lookups will fail.")

    db.init_app(app)

    with app.app_context():
        db.create_all()
        inserted = directory.seed_directory()
        if inserted:
            app.logger.info("Seeded directory with %d countries.", inserted)

    @app.route("/", methods=["GET"])
    def index():
        return render_template("index.html")

    @app.route("/api/countries", methods=["GET"])
    def countries():
        return jsonify([{"name": c.name, "code": c.code} for c in directory.list_countries()])

    # Unknown codes give an empty list rather than a 404.
    @app.route("/api/countries/<country_code>/cities", methods=["GET"])
    def cities(country_code):
        return jsonify([{"name": c.name} for c in directory.list_cities_for_country(country_code)])

    # Weather route — one live provider call per request; not-found and provider failures stay distinct.
    @app.route("/api/weather/<city_name>", methods=["GET"])
    def weather(city_name):
        if not city_name.strip():
            return _error("invalid_city", "City name must not be empty.", 400)

        try:
            reading = weather_api.fetch_weather(
                city_name,
                api_key=app.config["OPENWEATHER_API_KEY"],
                base_url=app.config["OPENWEATHER_API_URL"],
                timeout=app.config["WEATHER_TIMEOUT"],
            )
        except weather_api.CityNotFound:
            return _error("city_not_found", f"City '{city_name}' was not found. Try a different name.", 404)
        except weather_api.WeatherProviderError:
            return _error("weather_provider_error", "The weather service is unavailable. Try again later.", 502)

        return jsonify(_weather_payload(reading))

    # Flask has already logged the traceback by the time this runs.
    @app.errorhandler(500)
    def internal_error(e):
        return _error("internal_error", "Something went wrong. Try again later.", 500)

    return app

if __name__ == "__main__":
    app = create_app()
    app.run(debug=True)
