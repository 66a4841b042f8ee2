"""
File: db_manager.py
Purpose: Manage the MySQL connection pool and execute queries for the DAOs.
"""
import logging

import mysql.connector
from mysql.connector import pooling

from passport_registry.errors import DatabaseError

logger = logging.getLogger(__name__)


class DBManager:
    """
    Thin client over a mysql.connector connection pool.

    The pool is created on first use so that building the application
    (and running the test suite) never needs a live server.
    """

    def __init__(self, config, pool_name="passports_pool"):
        self.config = config
        self.pool_name = pool_name
        self._connection_pool = None

    def _initialize_pool(self):
        """Creates the connection pool from the configured settings."""
        try:
            self._connection_pool = pooling.MySQLConnectionPool(
                pool_name=self.pool_name,
                pool_size=self.config.db_pool_size,
                pool_reset_session=True,
                **self.config.db_settings
            )
            logger.info("Connection pool '%s' created (size=%d)",
                        self.pool_name, self.config.db_pool_size)
        except mysql.connector.Error as e:
            logger.error("Failed to create connection pool: %s", e)
            raise DatabaseError(str(e)) from e

    def get_connection(self):
        """Retrieves a connection from the pool."""
        if self._connection_pool is None:
            self._initialize_pool()
        try:
            return self._connection_pool.get_connection()
        except mysql.connector.Error as e:
            logger.error("Error getting connection: %s", e)
            raise DatabaseError(str(e)) from e

    def execute_query(self, query, params=None):
        """Executes INSERT, UPDATE or DELETE queries and returns the affected row count."""
        connection = self.get_connection()
        cursor = None
        try:
            cursor = connection.cursor(dictionary=True)
            cursor.execute(query, params or ())
            connection.commit()
            return cursor.rowcount
        except mysql.connector.Error as e:
            logger.error("Query error: %s", e)
            connection.rollback()
            raise DatabaseError(str(e)) from e
        finally:
            if cursor:
                cursor.close()
            connection.close()

    def fetch_all(self, query, params=None):
        """Executes a SELECT query and returns all rows as a list of dictionaries."""
        connection = self.get_connection()
        cursor = None
        try:
            cursor = connection.cursor(dictionary=True)
            cursor.execute(query, params or ())
            return cursor.fetchall()
        except mysql.connector.Error as e:
            logger.error("Error executing query: %s", e)
            raise DatabaseError(str(e)) from e
        finally:
            if cursor:
                cursor.close()
            connection.close()

    def fetch_one(self, query, params=None):
        """Executes a SELECT query and returns a single row (or None)."""
        connection = self.get_connection()
        cursor = None
        try:
            cursor = connection.cursor(dictionary=True)
            cursor.execute(query, params or ())
            row = cursor.fetchone()
            # Drain what is left so the connection goes back to the pool clean
            cursor.fetchall()
            return row
        except mysql.connector.Error as e:
            logger.error("Error executing query: %s", e)
            raise DatabaseError(str(e)) from e
        finally:
            if cursor:
                cursor.close()
            connection.close()

    def execute_sql_script(self, file_path):
        """Executes a multi-statement SQL script file and returns the statement count."""
        logger.info("Reading SQL script: %s", file_path)
        with open(file_path, 'r', encoding='utf-8') as f:
            sql_script = f.read()

        statements = [s.strip() for s in sql_script.split(';') if s.strip()]

        connection = self.get_connection()
        cursor = None
        try:
            cursor = connection.cursor()
            for statement in statements:
                cursor.execute(statement)
            connection.commit()
        except mysql.connector.Error as e:
            logger.error("Error executing SQL script: %s", e)
            connection.rollback()
            raise DatabaseError(str(e)) from e
        finally:
            if cursor:
                cursor.close()
            connection.close()

        logger.info("Executed %d SQL statements from %s", len(statements), file_path)
        return len(statements)
