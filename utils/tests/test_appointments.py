"""Comprehensive tests for utils.appointments module."""

from datetime import date, datetime, timezone

import pytest

from utils.appointments import (
    Appointment,
    create_appointment,
    is_valid_date_string,
    normalize_event_title,
    parse_appointment_date,
)


class TestCreateAppointment:
    """Tests for create_appointment function."""

    def test_create_appointment_basic(self):
        """Test basic appointment creation via function."""
        appointment = create_appointment(
            title="team standup",
            when="2024-01-15T09:00:00",
            description="Daily team standup meeting",
        )

        assert isinstance(appointment, Appointment)
        assert appointment.title == "team standup"  # Case is kept
        assert appointment.date == datetime(2024, 1, 15, 9, 0, 0)
        assert appointment.description == "Daily team standup meeting"

    def test_create_appointment_no_description(self):
        """Test appointment creation without description."""
        appointment = create_appointment(title="lunch break", when="2024-01-15T12:00:00")

        assert appointment.description == ""

    def test_create_appointment_from_date(self):
        """Date-only values are scheduled at midnight."""
        appointment = create_appointment("Holiday", date(2024, 12, 25))

        assert appointment.date == datetime(2024, 12, 25, 0, 0)

    def test_create_appointment_with_timezone(self):
        """Test appointment creation with timezone-aware timestamps."""
        appointment = create_appointment(
            title="remote meeting",
            when="2024-01-15T09:00:00+00:00",
            description="International team call",
        )

        assert appointment.date.tzinfo is None
        assert appointment.date.year == 2024
        assert appointment.date.month == 1

    def test_create_appointment_invalid_datetime(self):
        """Test appointment creation with invalid datetime strings."""
        with pytest.raises(ValueError):
            create_appointment(title="Invalid Meeting", when="invalid-datetime")

    def test_create_appointment_microseconds(self):
        """Test appointment creation with microsecond precision."""
        appointment = create_appointment("precise meeting", "2024-01-15T09:00:00.123456")

        assert appointment.date.microsecond == 123456


class TestNormalizeEventTitle:
    """Tests for normalize_event_title function."""

    def test_normalize_extra_whitespace(self):
        """Test normalization with extra whitespace."""
        assert normalize_event_title("  meeting   with    client  ") == "meeting with client"
        assert normalize_event_title("\t\nteam\n\tstandup\t\n") == "team standup"
        assert normalize_event_title("   ") == ""

    def test_normalize_keeps_case_and_punctuation(self):
        """Titles are user text; only whitespace is touched."""
        assert normalize_event_title("MeEtInG wItH cLiEnT") == "MeEtInG wItH cLiEnT"
        assert normalize_event_title("client's q4 review (urgent)") == "client's q4 review (urgent)"

    def test_normalize_empty(self):
        assert normalize_event_title("") == ""


class TestParseAppointmentDate:
    """Tests for parse_appointment_date function."""

    def test_datetime_passes_through(self):
        when = datetime(2024, 5, 1, 9, 30)
        assert parse_appointment_date(when) is when

    def test_iso_strings(self):
        assert parse_appointment_date("2024-05-01") == datetime(2024, 5, 1)
        assert parse_appointment_date("2024-05-01T09:30") == datetime(2024, 5, 1, 9, 30)

    def test_browser_utc_string_is_local_naive(self):
        parsed = parse_appointment_date("2024-05-01T12:00:00.000Z")
        expected = datetime(2024, 5, 1, 12, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)

        assert parsed == expected

    def test_loose_text_fallback(self):
        assert parse_appointment_date("May 1 2024 9:30") == datetime(2024, 5, 1, 9, 30)

    @pytest.mark.boundary
    @pytest.mark.parametrize("value", ["", "   ", "not a date"])
    def test_rejects_unparseable_text(self, value):
        with pytest.raises(ValueError):
            parse_appointment_date(value)

    @pytest.mark.boundary
    @pytest.mark.parametrize("value", [None, 20240501, ["2024-05-01"]])
    def test_rejects_other_types(self, value):
        with pytest.raises(TypeError):
            parse_appointment_date(value)


class TestIsValidDateString:
    """Tests for is_valid_date_string function."""

    def test_valid_date_strings(self):
        """Test valid date string formats."""
        valid_dates = [
            "2024-01-15",
            "2024-12-31",
            "2023-02-28",
            "2024-02-29",  # Leap year
            "2000-01-01",
            "0001-01-01",
            "9999-12-31",
        ]

        for date_str in valid_dates:
            assert is_valid_date_string(date_str), f"Should be valid: {date_str}"

    def test_invalid_date_strings(self):
        """Test invalid date string formats."""
        invalid_dates = [
            "2024-13-01",  # Invalid month
            "2024-01-32",  # Invalid day
            "2023-02-29",  # Not a leap year
            "2024-1-15",  # Non-zero-padded month
            "2024/01/15",  # Wrong separator
            " 2024-01-15",  # Leading space
            "2024-01-15T00:00:00",  # With time
            "",
            "invalid",
        ]

        for date_str in invalid_dates:
            assert not is_valid_date_string(date_str), f"Should be invalid: {date_str}"

    def test_non_string_inputs(self):
        """Test non-string inputs."""
        for input_val in [None, 123, datetime(2024, 1, 15), ["2024-01-15"]]:
            assert not is_valid_date_string(input_val), f"Should be invalid: {input_val}"


class TestAppointmentsIntegration:
    """Integration tests for appointments module."""

    @pytest.mark.integration
    def test_appointment_list_operations(self):
        """Test filtering a list of appointments by day."""
        appointments = [
            create_appointment("Meeting 1", "2024-01-15T09:00:00"),
            create_appointment("Meeting 2", "2024-01-16T11:00:00"),
            create_appointment("Meeting 3", "2024-01-15T23:59:00"),
        ]

        on_15th = [a.title for a in appointments if a.occurs_on(date(2024, 1, 15))]
        assert on_15th == ["Meeting 1", "Meeting 3"]

    @pytest.mark.boundary
    def test_extreme_datetime_values(self):
        """Test appointments with extreme datetime values."""
        assert create_appointment("Early", "0001-01-01T00:00:00").date.year == 1
        assert create_appointment("Late", "9999-12-31T23:59:59").date.year == 9999
