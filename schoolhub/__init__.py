import os
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from config import Config

# PyMySQL stands in for MySQLdb so SQLAlchemy's mysql dialect finds a driver
import pymysql
pymysql.install_as_MySQLdb()

db = SQLAlchemy()
migrate = Migrate()

def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(app)
    migrate.init_app(app, db)

    os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)

    with app.app_context():
        # Import models and routes here to register with the app
        from schoolhub.models import School
        from schoolhub.routes import main, api
        from schoolhub import cli

        app.register_blueprint(main.bp)
        app.register_blueprint(api.bp)
        cli.register_commands(app)

        # Create all database tables (if not already created)
        db.create_all()

        register_error_handlers(app)

    return app

def register_error_handlers(app):
    """Register global error handlers"""
    from flask import render_template, request, jsonify
    from werkzeug.exceptions import HTTPException

    def wants_json():
        return request.path.startswith('/api/')

    @app.errorhandler(404)
    def not_found_error(error):
        if wants_json():
            return jsonify({'error': 'Not found.'}), 404
        return render_template('errors/404.html'), 404

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        if wants_json():
            return jsonify({'success': False, 'error': 'An error occurred on the server.'}), 500
        return render_template('errors/500.html'), 500

    @app.errorhandler(Exception)
    def handle_exception(e):
        # HTTP errors (405, 413, ...) keep their own status
        if isinstance(e, HTTPException):
            if wants_json():
                return jsonify({'error': e.description}), e.code
            return e

        app.logger.error(f'Unhandled exception: {str(e)}')
        db.session.rollback()
        if wants_json():
            return jsonify({'success': False, 'error': 'An error occurred on the server.'}), 500
        return render_template('errors/500.html'), 500
