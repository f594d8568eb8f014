from models import Country, City

# Section: test_model_repr — ensures model __repr__ returns a meaningful string without errors.
def test_country_repr():
    c = Country(id=1, name="Japan", code="JP")
    assert "Japan" in repr(c)
    assert "JP" in repr(c)

def test_city_repr():
    c = City(id=11, name="Tokyo", country_id=3)
    assert "Tokyo" in repr(c)

def test_city_belongs_to_country(app):
    tokyo = City.query.filter_by(name="Tokyo").one()
    assert tokyo.country.code == "JP"
