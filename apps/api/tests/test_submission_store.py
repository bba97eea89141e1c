"""
Unit tests for the submission store service and DB plumbing
"""
import json
import logging
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

import core.database as database
from core.exceptions import InvalidPayloadError, StoreUnavailableError
from core.config import settings
from core.logging import SERVICE_NAME, JSONFormatter, setup_logging
from models import Submission
from services.submission_store import (
    create_submission,
    list_submissions,
    resolve_limit,
    validate_payload,
)


class TestResolveLimit:

    def test_default_when_missing(self):
        """Missing or blank limit uses the default page size"""
        assert resolve_limit(None) == 500
        assert resolve_limit("") == 500

    def test_clamped_to_max(self):
        assert resolve_limit(5000) == 2000
        assert resolve_limit("2001") == 2000

    def test_passthrough(self):
        assert resolve_limit("25") == 25

    def test_negative_clamped_to_zero(self):
        """Negative limit means an empty page, not an error"""
        assert resolve_limit(-3) == 0

    def test_garbage_rejected(self):
        with pytest.raises(InvalidPayloadError):
            resolve_limit("ten")


class TestValidatePayload:

    def test_valid(self, valid_payload):
        data = validate_payload(valid_payload)
        assert data.probability == 42

    def test_bool_is_not_an_integer(self, valid_payload):
        with pytest.raises(InvalidPayloadError) as exc_info:
            validate_payload({**valid_payload, "probability": True})
        assert "probability" in exc_info.value.detail

    def test_integral_float_is_an_integer(self, valid_payload):
        """50.0 is coerced to 50, 50.5 is not"""
        data = validate_payload({**valid_payload, "probability": 50.0, "day_of_month": 32.0})
        assert data.probability == 50
        assert type(data.probability) is int
        assert data.day_of_month == 32

        with pytest.raises(InvalidPayloadError):
            validate_payload({**valid_payload, "probability": 50.5})

    def test_numeric_string_is_not_an_integer(self, valid_payload):
        with pytest.raises(InvalidPayloadError) as exc_info:
            validate_payload({**valid_payload, "year": "27"})
        assert "year" in exc_info.value.detail

    def test_status_code_is_400(self, valid_payload):
        with pytest.raises(InvalidPayloadError) as exc_info:
            validate_payload({**valid_payload, "month_index": 17})
        assert exc_info.value.status_code == 400


class TestStoreOperations:

    def test_create_and_list(self, db_session, valid_payload):
        """Stored row is returned as-is by the list read"""
        stored = create_submission(db_session, valid_payload)

        result = list_submissions(db_session, "Deniusth")

        assert result["submissions"] == [stored]
        assert isinstance(stored, Submission)
        assert stored.created_at is not None

    def test_empty_character(self, db_session):
        result = list_submissions(db_session, "Nobody")
        assert result == {"submissions": [], "aggregates": []}

    def test_rejected_payload_writes_nothing(self, db_session, valid_payload):
        with pytest.raises(InvalidPayloadError):
            create_submission(db_session, {**valid_payload, "probability": 101})
        assert db_session.query(Submission).count() == 0


class TestDatabasePlumbing:

    def test_get_db_surfaces_store_unavailable(self, monkeypatch):
        """Failing connectivity check is a 500 and the session is closed"""
        broken = MagicMock()
        broken.execute.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))
        monkeypatch.setattr(database, "SessionLocal", lambda: broken)

        with pytest.raises(StoreUnavailableError) as exc_info:
            next(database.get_db())

        assert exc_info.value.status_code == 500
        assert exc_info.value.detail == "Database not available"
        broken.close.assert_called_once()

    def test_ensure_schema_is_idempotent(self, db_session):
        """Repeated ensure leaves the table alone"""
        database.ensure_schema()
        database.ensure_schema()
        assert db_session.query(Submission).count() == 0

    def test_check_db_connection(self):
        assert database.check_db_connection() is True


class TestJSONFormatter:

    @staticmethod
    def _record(message="stored", **extra_fields):
        record = logging.LogRecord("services.submission_store", logging.INFO, __file__, 1, message, None, None)
        if extra_fields:
            record.extra_fields = extra_fields
        return record

    def test_extra_fields_merged(self):
        output = json.loads(JSONFormatter().format(self._record(submission_id=7)))

        assert output["submission_id"] == 7
        assert output["message"] == "stored"

    def test_tagged_with_service_and_environment(self):
        """Every line names the service and where it runs"""
        output = json.loads(JSONFormatter(environment="production").format(self._record()))

        assert output["service"] == SERVICE_NAME
        assert output["environment"] == "production"
        assert output["logger"] == "services.submission_store"

    def test_environment_defaults_to_settings(self):
        output = json.loads(JSONFormatter().format(self._record()))
        assert output["environment"] == settings.ENVIRONMENT

    def test_extra_fields_cannot_override_envelope(self):
        """A handler passing `level` or `service` does not rewrite the record"""
        output = json.loads(JSONFormatter().format(self._record(level="DEBUG", service="other", character="Erin")))

        assert output["level"] == "INFO"
        assert output["service"] == SERVICE_NAME
        assert output["character"] == "Erin"


class TestSetupLogging:

    def test_uvicorn_access_log_quieted(self):
        """Request middleware already logs each call"""
        setup_logging()

        assert logging.getLogger("uvicorn.access").level == logging.WARNING
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_single_stdout_handler(self):
        root = setup_logging()
        setup_logging()

        assert len(root.handlers) == 1
