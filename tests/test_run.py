"""
Unit tests for run.py

Tests the CLI entry point:
- Argument parsing
- Logging configuration
- Package and health checks
- Summary printing
- Dashboard launch guards
"""

import io
import logging
import unittest
from unittest.mock import patch, MagicMock
from pathlib import Path
import sys

# Add parent directory to path to import run module
sys.path.insert(0, str(Path(__file__).parent.parent))

import run
from aba_insights.core.config import DASHBOARD_PORT, DEFAULT_SEED
from aba_insights.models.data_models import SummaryStats


class TestArgumentParsing(unittest.TestCase):
    """Test suite for command-line argument parsing."""

    def test_parse_args_defaults(self):
        args = run.parse_args([])

        self.assertEqual(args.port, DASHBOARD_PORT)
        self.assertEqual(args.seed, DEFAULT_SEED)
        self.assertFalse(args.no_browser)
        self.assertFalse(args.summary)
        self.assertFalse(args.verbose)
        self.assertFalse(args.health_check)

    def test_parse_args_from_sys_argv(self):
        with patch('sys.argv', ['run.py', '--verbose']):
            args = run.parse_args()

            self.assertTrue(args.verbose)

    def test_parse_args_custom_port_and_seed(self):
        args = run.parse_args(['--port', '8502', '--seed', '7'])

        self.assertEqual(args.port, 8502)
        self.assertEqual(args.seed, 7)

    def test_parse_args_modes(self):
        self.assertTrue(run.parse_args(['--summary']).summary)
        self.assertTrue(run.parse_args(['--health-check']).health_check)
        self.assertTrue(run.parse_args(['--no-browser']).no_browser)


class TestLogging(unittest.TestCase):
    """Test suite for logging configuration."""

    def tearDown(self):
        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            handler.close()
            root_logger.removeHandler(handler)

    def test_setup_logging_verbose_mode(self):
        with patch('sys.stdout', new_callable=io.StringIO):
            log_file = run.setup_logging(verbose=True)

        self.assertIsInstance(log_file, Path)
        self.assertEqual(log_file.parent.name, 'logs')

        root_logger = logging.getLogger()
        self.assertEqual(root_logger.level, logging.DEBUG)
        self.assertEqual(len(root_logger.handlers), 2)

    def test_setup_logging_replaces_handlers(self):
        with patch('sys.stdout', new_callable=io.StringIO):
            run.setup_logging()
            run.setup_logging()

        self.assertEqual(len(logging.getLogger().handlers), 2)


class TestHealthCheck(unittest.TestCase):
    """Test suite for health check functionality."""

    @patch('run.check_dataset')
    @patch('run.check_required_packages')
    def test_health_check_all_pass(self, mock_packages, mock_dataset):
        mock_packages.return_value = (True, [])
        mock_dataset.return_value = (True, "19 clients")

        with patch('sys.stdout', new_callable=io.StringIO):
            result = run.health_check()

        self.assertTrue(result)

    @patch('run.check_dataset')
    @patch('run.check_required_packages')
    def test_health_check_missing_packages(self, mock_packages, mock_dataset):
        mock_packages.return_value = (False, ['plotly'])

        with patch('sys.stdout', new_callable=io.StringIO) as out:
            result = run.health_check()

        self.assertFalse(result)
        mock_dataset.assert_not_called()
        self.assertIn('pip install plotly', out.getvalue())

    @patch('run.check_dataset')
    @patch('run.check_required_packages')
    def test_health_check_dataset_failure(self, mock_packages, mock_dataset):
        mock_packages.return_value = (True, [])
        mock_dataset.return_value = (False, "no events")

        with patch('sys.stdout', new_callable=io.StringIO):
            result = run.health_check(seed=3)

        self.assertFalse(result)
        mock_dataset.assert_called_once_with(3)

    def test_check_required_packages_all_installed(self):
        all_installed, missing = run.check_required_packages()

        self.assertIsInstance(all_installed, bool)
        self.assertIsInstance(missing, list)

    @patch('builtins.__import__')
    def test_check_required_packages_missing(self, mock_import):
        def import_side_effect(name, *args, **kwargs):
            if name in ['plotly', 'streamlit']:
                raise ImportError(f"No module named '{name}'")
            return MagicMock()

        mock_import.side_effect = import_side_effect

        all_installed, missing = run.check_required_packages()

        self.assertFalse(all_installed)
        self.assertEqual(missing, ['streamlit', 'plotly'])

    def test_check_dataset(self):
        ok, detail = run.check_dataset(seed=5)

        self.assertTrue(ok)
        self.assertIn('sessions', detail)


class TestSummary(unittest.TestCase):
    """Test suite for the --summary mode."""

    def test_print_summary(self):
        with patch('sys.stdout', new_callable=io.StringIO) as out:
            summary = run.print_summary(seed=5)

        self.assertIsInstance(summary, SummaryStats)
        self.assertGreater(summary.total_trials, 0)
        self.assertIn('Mastered Targets', out.getvalue())

    @patch('run.setup_logging')
    @patch('run.print_summary')
    def test_main_dispatches_summary(self, mock_summary, mock_logging):
        run.main(['--summary', '--seed', '4'])

        mock_summary.assert_called_once_with(seed=4)
        mock_logging.assert_called_once_with(verbose=False)

    @patch('run.setup_logging')
    @patch('run.health_check')
    def test_main_health_check_exit_code(self, mock_health, mock_logging):
        mock_health.return_value = False

        with self.assertRaises(SystemExit) as context:
            run.main(['--health-check'])

        self.assertEqual(context.exception.code, 1)


class TestLaunchDashboard(unittest.TestCase):
    """Test suite for the managed dashboard launch."""

    @patch('aba_insights.dashboard.app.get_dashboard_path')
    def test_missing_dashboard(self, mock_path):
        mock_path.return_value = Path('/nonexistent/dashboard.py')

        with patch('sys.stdout', new_callable=io.StringIO):
            result = run.launch_dashboard(port=8600, open_browser=False)

        self.assertFalse(result)

    @patch('run.subprocess.Popen')
    @patch('run._port_in_use')
    def test_port_in_use(self, mock_in_use, mock_popen):
        mock_in_use.return_value = True

        with patch('sys.stdout', new_callable=io.StringIO):
            result = run.launch_dashboard(port=8600, open_browser=False)

        self.assertFalse(result)
        mock_popen.assert_not_called()

    @patch('run.subprocess.Popen')
    @patch('run._port_in_use')
    def test_launch_waits_for_process(self, mock_in_use, mock_popen):
        mock_in_use.return_value = False
        process = MagicMock()
        process.poll.return_value = 0
        mock_popen.return_value = process

        with patch('sys.stdout', new_callable=io.StringIO):
            result = run.launch_dashboard(port=8600, open_browser=False, seed=9)

        self.assertTrue(result)
        process.wait.assert_called_once()
        cmd = mock_popen.call_args[0][0]
        self.assertEqual(cmd[-2:], ['--seed', '9'])


if __name__ == '__main__':
    unittest.main()
