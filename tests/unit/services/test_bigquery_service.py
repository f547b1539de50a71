"""
Unit tests for the BigQuery service.
"""

from datetime import date, datetime
from unittest.mock import MagicMock

import pytest

from src.api.services.bigquery_service import BigQueryService
from src.common.exceptions import StorageError


class TestBigQueryService:
    """Tests for BigQuery service."""

    def test_execute_query(self):
        """Test query execution."""
        mock_client = MagicMock()
        mock_client.query.return_value.result.return_value = [{"id": "1", "value": "test"}]

        service = BigQueryService(mock_client, "test-project", "test_dataset")
        results = service.execute_query("SELECT * FROM table")

        assert results == [{"id": "1", "value": "test"}]
        mock_client.query.assert_called_once()

    def test_execute_query_with_parameters(self):
        """Test query execution with scalar parameters."""
        mock_client = MagicMock()
        mock_client.query.return_value.result.return_value = []

        service = BigQueryService(mock_client, "test-project", "test_dataset")
        service.execute_query(
            "SELECT * FROM table WHERE id = @id",
            parameters={"id": "123"},
        )

        job_config = mock_client.query.call_args[1]["job_config"]
        [param] = job_config.query_parameters
        assert param.name == "id"
        assert param.type_ == "STRING"
        assert param.value == "123"

    def test_list_parameter_becomes_array(self):
        """Test that list values are sent as ARRAY parameters."""
        mock_client = MagicMock()
        mock_client.query.return_value.result.return_value = []

        service = BigQueryService(mock_client, "test-project", "test_dataset")
        service.execute_query(
            "SELECT * FROM table WHERE zone_id IN UNNEST(@zone_ids)",
            parameters={"zone_ids": ["zone-1", "zone-2"]},
        )

        [param] = mock_client.query.call_args[1]["job_config"].query_parameters
        assert param.array_type == "STRING"
        assert param.values == ["zone-1", "zone-2"]

    def test_timeout_passed_to_result(self):
        """Test that the configured timeout bounds the storage read."""
        mock_client = MagicMock()
        mock_client.query.return_value.result.return_value = []

        service = BigQueryService(mock_client, "test-project", "test_dataset", timeout=12.5)
        service.execute_query("SELECT 1")

        mock_client.query.return_value.result.assert_called_once_with(timeout=12.5)

    def test_failure_raises_storage_error(self):
        """Test that client failures surface as StorageError."""
        mock_client = MagicMock()
        mock_client.query.side_effect = RuntimeError("connection reset")

        service = BigQueryService(mock_client, "test-project", "test_dataset")

        with pytest.raises(StorageError) as exc_info:
            service.execute_query("SELECT 1")
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_infer_param_types(self):
        """Test parameter type inference."""
        service = BigQueryService(MagicMock(), "project", "dataset")

        assert service._infer_param_type("string") == "STRING"
        assert service._infer_param_type(123) == "INT64"
        assert service._infer_param_type(1.5) == "FLOAT64"
        assert service._infer_param_type(True) == "BOOL"
        assert service._infer_param_type(date.today()) == "DATE"
        assert service._infer_param_type(datetime.now()) == "TIMESTAMP"

    def test_table_ref(self):
        """Test fully qualified table references."""
        service = BigQueryService(MagicMock(), "project", "dataset")

        assert service.get_table_ref("deliveries") == "`project.dataset.deliveries`"
