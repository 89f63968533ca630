import os
import click
from flask import current_app
from schoolhub.services.school_service import ensure_schools_table

def register_commands(app):
    @app.cli.command('init-db')
    def init_db():
        """Create the schools table and the image upload folder."""
        ensure_schools_table()
        folder = current_app.config['UPLOAD_FOLDER']
        os.makedirs(folder, exist_ok=True)
        click.echo(f"schools table ready, images stored in {folder}")
