import uuid
import unittest
from pydantic import ValidationError
from backend.dto.booking_create_dto import BookingCreateDto


class TestBookingCreateDto(unittest.TestCase):
    def setUp(self):
        self.payload = {
            "mentorId": str(uuid.uuid4()),
            "date": "2024-01-15T09:00:00Z",
            "durationMinutes": 60,
            "topic": "Career",
        }

    def test_accepts_duration_aliases(self):
        """Test both duration and durationMinutes populate the duration."""
        dto = BookingCreateDto.model_validate(self.payload)
        self.assertEqual(dto.duration_minutes, 60)

        payload = dict(self.payload)
        payload["duration"] = payload.pop("durationMinutes")
        self.assertEqual(BookingCreateDto.model_validate(payload).duration_minutes, 60)

    def test_rejects_missing_fields(self):
        """Test every booking field is required."""
        for field in self.payload:
            with self.subTest(field=field):
                payload = {k: v for k, v in self.payload.items() if k != field}
                with self.assertRaises(ValidationError):
                    BookingCreateDto.model_validate(payload)

    def test_rejects_non_positive_duration(self):
        """Test the duration must be greater than zero."""
        with self.assertRaises(ValidationError):
            BookingCreateDto.model_validate({**self.payload, "durationMinutes": 0})

    def test_rejects_blank_topic(self):
        """Test a whitespace-only topic is rejected."""
        with self.assertRaises(ValidationError):
            BookingCreateDto.model_validate({**self.payload, "topic": "   "})

    def test_rejects_unknown_keys(self):
        """Test unexpected keys are rejected."""
        with self.assertRaises(ValidationError):
            BookingCreateDto.model_validate({**self.payload, "price": 1})


if __name__ == "__main__":
    unittest.main()
