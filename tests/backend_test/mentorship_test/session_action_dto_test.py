import unittest
from pydantic import ValidationError
from backend.common.mentorship_enums import SessionAction
from backend.dto.session_action_dto import SessionActionDto


class TestSessionActionDto(unittest.TestCase):
    def test_to_db_dict_keeps_only_sent_fields(self):
        """Test unset feedback fields are not dumped."""
        dto = SessionActionDto.model_validate({"action": "update", "rating": 4})

        self.assertEqual(dto.to_db_dict(), {"action": SessionAction.UPDATE, "rating": 4})

    def test_to_db_dict_include(self):
        """Test the include whitelist drops other fields."""
        dto = SessionActionDto.model_validate(
            {"action": "update", "feedback": "  Great  ", "notes": "n"}
        )

        self.assertEqual(
            dto.to_db_dict(include={"feedback", "rating"}), {"feedback": "Great"}
        )

    def test_rejects_rating_out_of_range(self):
        for rating in (0, 6):
            with self.subTest(rating=rating):
                with self.assertRaises(ValidationError):
                    SessionActionDto.model_validate({"action": "update", "rating": rating})

    def test_rejects_unknown_action(self):
        with self.assertRaises(ValidationError):
            SessionActionDto.model_validate({"action": "reschedule"})


if __name__ == "__main__":
    unittest.main()
