import io
import os
import pytest
from sqlalchemy import insert
from config import Config
from schoolhub import create_app, db
from schoolhub.models.school import School
from schoolhub.utils import database

PNG_BYTES = b'\x89PNG\r\n\x1a\n' + b'\x00' * 64


@pytest.fixture
def app(tmp_path):
    class TestConfig(Config):
        TESTING = True
        SECRET_KEY = 'test-secret'
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'schools.db'}"
        SQLALCHEMY_ENGINE_OPTIONS = {}
        UPLOAD_FOLDER = str(tmp_path / 'schoolimage')
        BASE_URL = ''

    app = create_app(TestConfig)
    yield app

    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_image():
    def _make_image(filename='valid.png', content_type='image/png', content=PNG_BYTES):
        return (io.BytesIO(content), filename, content_type)
    return _make_image


@pytest.fixture
def school_form(make_image):
    """A complete, valid multipart payload. Each call builds a fresh image stream."""
    def _school_form(**overrides):
        data = {
            'name': 'Oak School',
            'address': '1 Main St',
            'city': 'Rajkot',
            'state': 'GJ',
            'contact': '9998887776',
            'email_id': 'a@b.com',
            'image': make_image(),
        }
        data.update(overrides)
        return {key: value for key, value in data.items() if value is not None}
    return _school_form


@pytest.fixture
def add_rows(app):
    """Insert school rows directly, bypassing the upload flow."""
    def _add_rows(*rows):
        with app.app_context():
            for row in rows:
                values = {'state': 'GJ', 'contact': '9998887776', 'email': 'info@school.test',
                          'image': '/schoolimage/placeholder.png'}
                values.update(row)
                database.query(insert(School.__table__), values)
    return _add_rows


def count_schools(app):
    with app.app_context():
        return database.query("SELECT COUNT(*) AS total FROM schools")[0]['total']


def stored_files(app):
    return sorted(os.listdir(app.config['UPLOAD_FOLDER']))
