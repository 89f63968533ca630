#!/usr/bin/env python3
"""
School Management App Deployment Script
Creates the MySQL database, the schools table and the image folder, then
checks that the application answers.
"""

import os
import sys
import mysql.connector
from mysql.connector import Error
from dotenv import load_dotenv

load_dotenv()

def print_step(step_name):
    """Print a formatted step header"""
    print("\n" + "="*60)
    print(f"STEP: {step_name}")
    print("="*60)

def print_success(message):
    print(f"[ok]    {message}")

def print_error(message):
    print(f"[error] {message}")

def print_info(message):
    print(f"[info]  {message}")

def check_python_version():
    """Check if Python version is compatible"""
    print_step("Checking Python Version")

    version = sys.version_info
    if version < (3, 9):
        print_error(f"Python 3.9+ required. Current version: {version.major}.{version.minor}")
        return False

    print_success(f"Python version {version.major}.{version.minor}.{version.micro} is compatible")
    return True

def check_mysql_connection():
    """Check MySQL connection and create the database if needed"""
    print_step("Checking MySQL Connection")

    db_name = os.environ.get('DB_NAME', 'schoolhub')
    try:
        connection = mysql.connector.connect(
            host=os.environ.get('DB_HOST', '127.0.0.1'),
            port=int(os.environ.get('DB_PORT', 3306)),
            user=os.environ.get('DB_USER', 'root'),
            password=os.environ.get('DB_PASSWORD', 'root'),
        )
    except Error as e:
        print_error(f"MySQL connection failed: {e}")
        print_info("Please ensure MySQL is running and the DB_* settings are correct")
        return False

    try:
        cursor = connection.cursor()
        # Database names cannot be bound as parameters
        cursor.execute(f"CREATE DATABASE IF NOT EXISTS `{db_name.replace('`', '')}`")
        print_success(f"Database '{db_name}' is ready")
        cursor.close()
        return True
    except Error as e:
        print_error(f"Could not create database '{db_name}': {e}")
        return False
    finally:
        connection.close()

def setup_database():
    """Create the schools table, stamp migrations and create the image folder"""
    print_step("Setting Up Database")

    try:
        from schoolhub import create_app
        from schoolhub.services.school_service import ensure_schools_table
        from flask_migrate import stamp

        app = create_app()
        with app.app_context():
            ensure_schools_table()
            print_success("Table 'schools' is ready")
            # create_all() built the schema, so mark the migration head as applied
            stamp()
            print_success("Migrations stamped at head")
            print_success(f"Image folder: {app.config['UPLOAD_FOLDER']}")
        return True

    except Exception as e:
        print_error(f"Database setup failed: {e}")
        return False

def verify_installation():
    """Verify that the installation is working"""
    print_step("Verifying Installation")

    try:
        from schoolhub import create_app

        app = create_app()
        with app.test_client() as client:
            for path in ('/', '/schools', '/api/get-schools'):
                response = client.get(path)
                if response.status_code != 200:
                    print_error(f"GET {path} answered {response.status_code}")
                    return False
                print_success(f"GET {path} works")

            count = len(client.get('/api/get-schools').get_json()['schools'])
            print_success(f"Database connection verified ({count} schools found)")
        return True

    except Exception as e:
        print_error(f"Installation verification failed: {e}")
        return False

def print_deployment_summary():
    print_step("Deployment Summary")
    print_success("School Management App deployed successfully!")
    print("\nNEXT STEPS:")
    print("1. Start the application:")
    print("   python app.py")
    print("2. Open the address printed at startup and add a school from /add-school")

def main():
    """Main deployment function"""
    print("School Management App Deployment")
    print("=" * 60)

    steps = [
        ("Python Version Check", check_python_version),
        ("MySQL Connection", check_mysql_connection),
        ("Database Setup", setup_database),
        ("Installation Verification", verify_installation),
    ]

    failed_steps = []
    for step_name, step_function in steps:
        if not step_function():
            failed_steps.append(step_name)
            print_error(f"Step '{step_name}' failed!")

            response = input("\nDo you want to continue with the next step? (y/n): ")
            if response.lower() != 'y':
                print_error("Deployment aborted by user")
                return False

    if failed_steps:
        print_step("Deployment Completed with Issues")
        print_error("The following steps had issues:")
        for step in failed_steps:
            print(f"  - {step}")
    else:
        print_deployment_summary()

    return len(failed_steps) == 0

if __name__ == "__main__":
    try:
        sys.exit(0 if main() else 1)
    except KeyboardInterrupt:
        print_error("\nDeployment interrupted by user")
        sys.exit(1)
