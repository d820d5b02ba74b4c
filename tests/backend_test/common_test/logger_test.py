import logging
from unittest import TestCase, main
from unittest.mock import patch
from backend.common import logger as logger_module


class TestLogger(TestCase):
    def setUp(self):
        logger_module._logger_initialized = False
        self.deep_logger = logging.getLogger("deep")
        self.original_level = self.deep_logger.level

    def tearDown(self):
        logger_module._logger_initialized = False
        self.deep_logger.setLevel(self.original_level)

    @patch("backend.common.logger.logging.basicConfig")
    @patch.dict("os.environ", {"LOG_LEVEL": "debug"})
    def test_level_applied_to_service_logger(self, mock_basic_config):
        logger = logger_module.get_logger()

        self.assertEqual(logger.name, "deep")
        self.assertEqual(logger.level, logging.DEBUG)
        _, kwargs = mock_basic_config.call_args
        self.assertNotIn("level", kwargs)
        self.assertIn("%(name)s", kwargs["format"])

    @patch("backend.common.logger.logging.basicConfig")
    @patch.dict("os.environ", {"LOG_LEVEL": "nonsense"})
    def test_unknown_level_falls_back_to_info(self, mock_basic_config):
        logger_module.get_logger()

        self.assertEqual(self.deep_logger.level, logging.INFO)

    @patch("backend.common.logger.logging.basicConfig")
    @patch.dict("os.environ", {"LOG_LEVEL": "warning"})
    def test_component_logger_is_child_of_service_logger(self, mock_basic_config):
        logger = logger_module.get_logger("errors")

        self.assertEqual(logger.name, "deep.errors")
        self.assertIs(logger.parent, self.deep_logger)
        self.assertEqual(logger.getEffectiveLevel(), logging.WARNING)

    @patch("backend.common.logger.logging.basicConfig")
    def test_configured_once(self, mock_basic_config):
        logger_module.get_logger()
        logger_module.get_logger("init_db")

        mock_basic_config.assert_called_once()


if __name__ == "__main__":
    main()
