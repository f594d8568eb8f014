from sqlalchemy import func

from models import db, Country, City

# Seed table — (name, code, cities). Order here is the listing order.
SEED_COUNTRIES = [
    ("United States", "US", ["New York", "Los Angeles", "Chicago", "Houston", "Miami"]),
    ("United Kingdom", "UK", ["London", "Manchester", "Birmingham", "Glasgow", "Liverpool"]),
    ("Japan", "JP", ["Tokyo", "Osaka", "Kyoto", "Sapporo", "Yokohama"]),
    ("Australia", "AU", ["Sydney", "Melbourne", "Brisbane", "Perth", "Adelaide"]),
    ("Germany", "DE", ["Berlin", "Munich", "Hamburg", "Frankfurt", "Cologne"]),
    ("Indonesia", "ID", [
        "Jakarta", "Surabaya", "Bandung", "Medan", "Makassar",
        "Semarang", "Palembang", "Tangerang", "Depok", "Yogyakarta",
    ]),
]

# Inserts the seed countries and cities unless the table already has rows.
def seed_directory():
    """
    Populate the directory tables from SEED_COUNTRIES.
    Returns the number of countries inserted (0 when already seeded).
    """
    if db.session.query(Country.id).first() is not None:
        return 0

    for name, code, city_names in SEED_COUNTRIES:
        country = Country(name=name, code=code)
        country.cities = [City(name=city_name) for city_name in city_names]
        db.session.add(country)
    db.session.commit()
    return len(SEED_COUNTRIES)

def list_countries():
    return Country.query.order_by(Country.id.asc()).all()

# Case-insensitive exact match on the two-letter code.
def get_country_by_code(code: str):
    if not code:
        return None
    return Country.query.filter(func.upper(Country.code) == code.upper()).first()

def list_cities_for_country(code: str):
    """Cities for the given country code, or an empty list when the code is unknown."""
    country = get_country_by_code(code)
    if country is None:
        return []
    return list(country.cities)
