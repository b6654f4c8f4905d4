""" Tools for testing """

from .profile import timeit

from .recreate_tables import created_tables
from .table_data import insert, insert_articles
from .stmt_text import stmt2sql
from .query_logger import QueryCounter
