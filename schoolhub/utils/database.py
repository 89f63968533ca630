from collections import namedtuple
from contextlib import contextmanager
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from schoolhub import db

# What a statement that returns no rows (INSERT, DDL) reports back
WriteResult = namedtuple('WriteResult', ['affected_rows', 'last_insert_id'])


class DatabaseError(Exception):
    """A statement could not be executed. The message is the driver's own."""


def _driver_message(error):
    original = getattr(error, 'orig', None)
    return str(original) if original is not None else str(error)


def _execute(connection, statement, values):
    if isinstance(statement, str):
        statement = text(statement)
    result = connection.execute(statement, values or {})
    if result.returns_rows:
        return [dict(row) for row in result.mappings()]
    return WriteResult(result.rowcount, result.lastrowid)


@contextmanager
def transaction():
    """Check a connection out of the pool and run the block in one transaction.

    Commits when the block exits normally and rolls back when it raises.
    """
    try:
        with db.engine.begin() as connection:
            yield connection
    except SQLAlchemyError as e:
        raise DatabaseError(_driver_message(e)) from e


def query(statement, values=None, connection=None):
    """Execute one parameterised statement.

    ``statement`` is either SQL text using ``:name`` placeholders or a
    SQLAlchemy Core construct; ``values`` maps placeholder names to bind
    values. Returns a list of row dicts for statements that produce rows and a
    ``WriteResult`` otherwise.

    Pass ``connection`` to run inside a transaction opened with
    ``transaction()``; without it the statement gets its own pooled
    connection and is committed immediately.
    """
    if connection is not None:
        try:
            return _execute(connection, statement, values)
        except SQLAlchemyError as e:
            raise DatabaseError(_driver_message(e)) from e

    with transaction() as connection:
        return _execute(connection, statement, values)
