#!/usr/bin/env python3
"""
Database Configuration Checker for the School Management App

Prints the database settings read from the environment (or .env) and tries
to open a connection with them.
"""

import os
import sys
import pymysql
from dotenv import load_dotenv

REQUIRED_VARS = ['DB_HOST', 'DB_PORT', 'DB_NAME', 'DB_USER', 'DB_PASSWORD']


def check_db_config():
    """Check if database configuration is properly set up"""
    print("School Management App - Database Configuration Checker")
    print("=" * 50)

    load_dotenv()

    missing_vars = []
    for var in REQUIRED_VARS:
        value = os.environ.get(var)
        if not value:
            missing_vars.append(var)
        elif var == 'DB_PASSWORD':
            print(f"OK  {var}: {'*' * len(value)}")
        else:
            print(f"OK  {var}: {value}")

    base_url = os.environ.get('BASE_URL')
    print(f"    BASE_URL: {base_url or '(same origin)'}")

    if os.environ.get('DATABASE_URL'):
        print("\nDATABASE_URL is set and overrides the DB_* settings")

    if missing_vars:
        print(f"\nMissing required environment variables: {', '.join(missing_vars)}")
        return False

    try:
        port = int(os.environ['DB_PORT'])
    except ValueError:
        print(f"\nDB_PORT must be a number, got {os.environ['DB_PORT']!r}")
        return False

    try:
        connection = pymysql.connect(
            host=os.environ['DB_HOST'],
            port=port,
            user=os.environ['DB_USER'],
            password=os.environ['DB_PASSWORD'],
            database=os.environ['DB_NAME'],
            connect_timeout=5,
        )
    except pymysql.MySQLError as e:
        print(f"\nCould not connect to the database: {e}")
        return False

    with connection.cursor() as cursor:
        cursor.execute("SELECT VERSION()")
        version = cursor.fetchone()[0]
    connection.close()

    print(f"\nConnected to MySQL {version}")
    print("Database configuration looks good!")
    return True


if __name__ == "__main__":
    sys.exit(0 if check_db_config() else 1)
