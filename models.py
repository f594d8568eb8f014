from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

class Country(db.Model):
    __tablename__ = "countries"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    code = db.Column(db.String(2), nullable=False, unique=True, index=True)

    cities = db.relationship("City", back_populates="country", order_by="City.id")

    def __repr__(self):
        return f"<Country {self.id} {self.name} ({self.code})>"


class City(db.Model):
    __tablename__ = "cities"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False, index=True)
    country_id = db.Column(db.Integer, db.ForeignKey("countries.id"), nullable=False, index=True)

    country = db.relationship("Country", back_populates="cities")

    def __repr__(self):
        return f"<City {self.id} {self.name}>"
