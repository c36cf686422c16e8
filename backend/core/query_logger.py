# backend/core/query_logger.py

import logging
import re
import time
from contextlib import contextmanager
from typing import Any, Dict

from sqlalchemy import event
from sqlalchemy.engine import Engine

from core.config import get_settings

logger = logging.getLogger("sqlalchemy.engine")
query_logger = logging.getLogger("query_performance")

settings = get_settings()

TABLE_PATTERN = re.compile(r"\b(?:FROM|JOIN|UPDATE|INTO)\s+([\w.\"`]+)", re.IGNORECASE)


class QueryStats:
    """Accumulated SQL statistics for development and debugging"""

    def __init__(self, slow_query_threshold: float):
        self.slow_query_threshold = slow_query_threshold
        self.reset()

    def reset(self):
        self.total_queries = 0
        self.slow_queries = 0
        self.total_time = 0.0
        self.queries_by_table: Dict[str, int] = {}

    def record(self, statement: str, elapsed: float) -> bool:
        """Record a finished statement. Returns True when it was slow."""
        self.total_queries += 1
        self.total_time += elapsed
        for table in extract_tables_from_query(statement):
            self.queries_by_table[table] = self.queries_by_table.get(table, 0) + 1

        if elapsed > self.slow_query_threshold:
            self.slow_queries += 1
            return True
        return False

    def as_dict(self) -> Dict[str, Any]:
        return {
            "total_queries": self.total_queries,
            "slow_queries": self.slow_queries,
            "total_time": round(self.total_time, 3),
            "average_time": round(self.total_time / max(self.total_queries, 1), 3),
            "queries_by_table": dict(self.queries_by_table),
        }


query_stats = QueryStats(settings.slow_query_threshold_seconds)


def setup_query_logging(engine: Engine):
    """
    Attach timing listeners to an SQLAlchemy engine.

    Every statement is counted; statements slower than the configured
    threshold are logged as warnings on the ``query_performance`` logger.
    """

    @event.listens_for(engine, "before_cursor_execute")
    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("query_start_time", []).append(time.perf_counter())
        if settings.log_sql_queries:
            logger.debug("Start Query: %s", statement)

    @event.listens_for(engine, "after_cursor_execute")
    def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        total_time = time.perf_counter() - conn.info["query_start_time"].pop(-1)

        if query_stats.record(statement, total_time):
            query_logger.warning(
                "SLOW QUERY (%.3fs): %s...", total_time, statement[:200]
            )

        if settings.log_sql_queries:
            logger.debug("Query Complete in %.3fs", total_time)


def extract_tables_from_query(query: str) -> list:
    """Table names referenced after FROM, JOIN, UPDATE or INTO, schema prefix dropped."""
    tables = set()
    for match in TABLE_PATTERN.finditer(query):
        name = match.group(1).split(".")[-1].strip("\"'`").lower()
        if name:
            tables.add(name)
    return sorted(tables)


@contextmanager
def log_query_performance(operation_name: str, threshold: int = 10):
    """
    Log how many queries an operation issued and how long it took.

    Example:
        with log_query_performance("load_fixtures"):
            loader.load()
    """
    start_queries = query_stats.total_queries
    start_time = time.perf_counter()

    try:
        yield
    finally:
        elapsed_time = time.perf_counter() - start_time
        query_count = query_stats.total_queries - start_queries

        query_logger.info(
            "Operation '%s': %d queries in %.3fs", operation_name, query_count, elapsed_time
        )
        if query_count > threshold:
            query_logger.warning(
                "Operation '%s' executed %d queries (threshold %d)",
                operation_name,
                query_count,
                threshold,
            )
