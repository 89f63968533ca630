from schoolhub import db

class School(db.Model):
    __tablename__ = 'schools'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(255), nullable=False)
    address = db.Column(db.Text)
    city = db.Column(db.String(255))
    state = db.Column(db.String(255))
    contact = db.Column(db.String(255))  # Digits only, kept as text
    email = db.Column(db.String(255))
    image = db.Column(db.String(255))  # Public path, e.g. /schoolimage/<file>

    # Columns returned by the listing endpoint
    LIST_COLUMNS = ('id', 'name', 'address', 'city', 'image')

    def __repr__(self):
        return f'<School {self.id} {self.name!r}>'
