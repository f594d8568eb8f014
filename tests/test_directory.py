import directory
from models import Country, City

def test_seed_inserts_every_country_and_city(app):
    assert Country.query.count() == len(directory.SEED_COUNTRIES)
    assert City.query.count() == sum(len(cities) for _, _, cities in directory.SEED_COUNTRIES)

def test_seed_is_idempotent(app):
    assert directory.seed_directory() == 0
    assert Country.query.count() == 6

def test_list_countries_keeps_insertion_order(app):
    codes = [c.code for c in directory.list_countries()]
    assert codes == ["US", "UK", "JP", "AU", "DE", "ID"]

def test_get_country_by_code_is_case_insensitive(app):
    assert directory.get_country_by_code("de").name == "Germany"
    assert directory.get_country_by_code("De").name == "Germany"
    assert directory.get_country_by_code("XX") is None
    assert directory.get_country_by_code("") is None

def test_list_cities_for_country(app):
    names = [c.name for c in directory.list_cities_for_country("us")]
    assert names == ["New York", "Los Angeles", "Chicago", "Houston", "Miami"]

def test_indonesia_has_ten_cities(app):
    assert len(directory.list_cities_for_country("ID")) == 10

def test_unknown_country_code_gives_empty_list(app):
    assert directory.list_cities_for_country("ZZ") == []

def test_country_code_match_is_exact(app):
    assert directory.get_country_by_code(" us ") is None
    assert directory.list_cities_for_country("USA") == []
