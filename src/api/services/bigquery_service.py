"""
BigQuery service for executing queries.
"""

from datetime import date, datetime
from typing import Any

from google.cloud import bigquery

from src.common.exceptions import StorageError
from src.common.logging_utils import get_logger

logger = get_logger(__name__)


class BigQueryService:
    """Service for interacting with BigQuery."""

    def __init__(
        self,
        client: bigquery.Client,
        project_id: str,
        dataset: str,
        timeout: float | None = None,
    ):
        self.client = client
        self.project_id = project_id
        self.dataset = dataset
        self.timeout = timeout

    def execute_query(
        self,
        query: str,
        parameters: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """
        Execute a query and return results as list of dicts.

        Args:
            query: SQL query to execute
            parameters: Query parameters; list values become ARRAY parameters

        Returns:
            List of result rows as dictionaries

        Raises:
            StorageError: If the query fails or exceeds the configured timeout
        """
        job_config = bigquery.QueryJobConfig()

        if parameters:
            job_config.query_parameters = [
                self._build_parameter(name, value) for name, value in parameters.items()
            ]

        try:
            result = self.client.query(query, job_config=job_config).result(timeout=self.timeout)
            return [dict(row) for row in result]
        except Exception as e:
            logger.error(f"Query execution failed: {e}", query=query[:100])
            raise StorageError(f"Query execution failed: {e}") from e

    def _build_parameter(self, name: str, value: Any):
        if isinstance(value, (list, tuple)):
            element_type = self._infer_param_type(value[0]) if value else "STRING"
            return bigquery.ArrayQueryParameter(name, element_type, list(value))
        return bigquery.ScalarQueryParameter(name, self._infer_param_type(value), value)

    def _infer_param_type(self, value: Any) -> str:
        """Infer BigQuery parameter type from Python value."""
        if isinstance(value, bool):
            return "BOOL"
        if isinstance(value, int):
            return "INT64"
        if isinstance(value, float):
            return "FLOAT64"
        if isinstance(value, datetime):
            return "TIMESTAMP"
        if isinstance(value, date):
            return "DATE"
        return "STRING"

    def get_table_ref(self, table_name: str) -> str:
        """Get fully qualified table reference."""
        return f"`{self.project_id}.{self.dataset}.{table_name}`"
