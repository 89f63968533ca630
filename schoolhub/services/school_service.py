from flask import current_app
from sqlalchemy import and_, insert, or_, select
from schoolhub.models.school import School
from schoolhub.services import image_storage
from schoolhub.utils import database

# Form field -> column. The form posts ``email_id``; ``email`` is accepted too.
REQUIRED_FIELDS = ('name', 'address', 'city', 'state', 'contact', 'email_id')


class SchoolValidationError(ValueError):
    """The request is missing a required field or the image file."""


class RecordInsertError(Exception):
    """The insert ran but reported no affected rows."""


def _field(form, name):
    value = form.get(name)
    if value is None and name == 'email_id':
        value = form.get('email')
    return (value or '').strip()


def ensure_schools_table():
    """Create the schools table if it does not exist yet. Safe to repeat."""
    with database.transaction() as connection:
        School.__table__.create(bind=connection, checkfirst=True)


def create_school(form, files):
    """Store the uploaded image and insert one school row.

    Returns the new row id. The image file only survives if the row is
    committed; any failure after the file was written removes it again.
    """
    missing = [name for name in REQUIRED_FIELDS if not _field(form, name)]
    if missing:
        raise SchoolValidationError(f"Missing required fields: {', '.join(missing)}")

    image_file = files.get('image')
    if image_file is None or not image_file.filename:
        raise SchoolValidationError('Image file is required.')

    image = image_storage.stage_image(
        image_file,
        current_app.config['UPLOAD_FOLDER'],
        current_app.config.get('IMAGE_URL_PREFIX', '/schoolimage'),
    )

    values = {
        'name': _field(form, 'name'),
        'address': _field(form, 'address'),
        'city': _field(form, 'city'),
        'state': _field(form, 'state'),
        'contact': _field(form, 'contact'),
        'email': _field(form, 'email_id'),
        'image': image.public_path,
    }

    try:
        with database.transaction() as connection:
            result = database.query(insert(School.__table__), values, connection=connection)
            if result.affected_rows < 1:
                raise RecordInsertError('Failed to insert data into the database.')
            image_storage.commit_image(image)
    except Exception:
        image_storage.discard_image(image)
        raise

    current_app.logger.info(f"Added school {result.last_insert_id} with image {image.filename}")
    return result.last_insert_id


def _clean_cities(cities):
    return [city.strip() for city in (cities or []) if city and city.strip()]


def list_schools(search=None, cities=None):
    """Return schools matching every filter that is given.

    ``search`` matches name, address or city as a case-insensitive substring;
    ``%`` and ``_`` in it match literally. ``cities`` keeps only rows whose
    city is one of the values.
    """
    ensure_schools_table()

    table = School.__table__
    statement = select(*[table.c[column] for column in School.LIST_COLUMNS])

    conditions = []
    search = (search or '').strip()
    if search:
        conditions.append(or_(
            table.c.name.icontains(search, autoescape=True),
            table.c.address.icontains(search, autoescape=True),
            table.c.city.icontains(search, autoescape=True),
        ))

    cities = _clean_cities(cities)
    if cities:
        conditions.append(table.c.city.in_(cities))

    if conditions:
        statement = statement.where(and_(*conditions))

    return database.query(statement.order_by(table.c.id))


def list_cities():
    """Distinct non-empty cities, sorted, for the listing page filter."""
    ensure_schools_table()
    table = School.__table__
    statement = (
        select(table.c.city)
        .where(table.c.city.isnot(None), table.c.city != '')
        .distinct()
        .order_by(table.c.city)
    )
    return [row['city'] for row in database.query(statement)]
