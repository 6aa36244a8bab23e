#!/usr/bin/env python3
"""
ABA Insights - Main CLI Entry Point
===================================

Command-line entry point for the ABA progress dashboard.  It can:

    * launch the Streamlit dashboard as a managed subprocess (default)
    * print the headline figures for the default filters (--summary)
    * run a quick environment diagnostic (--health-check)

The dashboard works on a synthetic dataset generated from a seed, so the
same seed always yields the same clients, programs, targets and sessions.

Usage:
    python run.py                  # Launch dashboard on port 8501
    python run.py --port 8502      # Custom port
    python run.py --seed 7         # Different synthetic dataset
    python run.py --summary        # Print KPI summary and exit
    python run.py --health-check   # Diagnostics and exit
"""

import logging
import sys
import subprocess
import argparse
import webbrowser
from pathlib import Path
import time
import atexit
import socket

from aba_insights.core.config import DASHBOARD_PORT, DEFAULT_SEED, DASHBOARD_TITLE


# ==========================================
# LOGGING CONFIGURATION
# ==========================================
# Dual-output logging: a DEBUG-level log file for post-mortem debugging and a
# quieter console handler (WARNING by default, INFO with --verbose).

def setup_logging(verbose: bool = False):
    """
    Configure the root logger with file and console handlers.

    Every run produces a dedicated log file under logs/ with a timestamp in
    the filename.  The file handler always captures DEBUG-level messages,
    while the console handler shows only warnings (or info in verbose mode).

    Args:
        verbose: When True, lower the console handler to INFO level.

    Returns:
        Path: Absolute path to the newly created log file.
    """
    log_dir = Path(__file__).parent / "logs"
    log_dir.mkdir(exist_ok=True)

    timestamp = time.strftime('%Y%m%d_%H%M%S')
    log_file = log_dir / f"aba_insights_{timestamp}.log"

    file_formatter = logging.Formatter(
        '%(asctime)s | %(name)s | %(levelname)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_formatter = logging.Formatter(
        '%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%H:%M:%S'
    )

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(file_formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    console_handler.setFormatter(console_formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Avoid duplicate lines when called more than once
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    if verbose:
        print(f"\U0001f4dd Verbose logging enabled. Log file: {log_file}")
    else:
        print(f"\U0001f4dd Logging to: {log_file}")

    return log_file


logger = logging.getLogger(__name__)


# ==========================================
# HEALTH CHECK UTILITIES
# ==========================================

def check_required_packages():
    """
    Verify that core Python packages are importable.

    Returns:
        Tuple of (all_installed: bool, missing_packages: list[str]).
        missing_packages contains pip install names, not import names.
    """
    # Mapping: Python import name -> pip install name
    required = {
        'pandas': 'pandas',
        'numpy': 'numpy',
        'streamlit': 'streamlit',
        'plotly': 'plotly',
    }

    missing = []
    for import_name, package_name in required.items():
        try:
            __import__(import_name)
        except ImportError:
            missing.append(package_name)

    return len(missing) == 0, missing


def check_dataset(seed: int = DEFAULT_SEED):
    """
    Generate the synthetic dataset once and report its size.

    Returns:
        Tuple of (ok: bool, detail: str).
    """
    try:
        from aba_insights.data.generator import GeneratorConfig, generate_dataset
        dataset = generate_dataset(GeneratorConfig(seed=seed))
    except (ImportError, ValueError) as e:
        logger.error(f"Dataset generation failed: {e}")
        return False, str(e)

    detail = (f"{len(dataset.clients)} clients, {len(dataset.programs)} programs, "
              f"{len(dataset.targets)} targets, {len(dataset.events):,} sessions")
    return len(dataset.events) > 0, detail


def health_check(seed: int = DEFAULT_SEED):
    """
    Run a diagnostic check and print a human-readable report.

    Checks performed:
        1. Python version (>= 3.9 required)
        2. Required Python packages
        3. Project directory structure
        4. Synthetic dataset generation for ``seed``

    Returns:
        bool: True if every check passed.
    """
    print()
    print("=" * 60)
    print("  \U0001f3e5 ABA INSIGHTS - HEALTH CHECK")
    print("=" * 60)
    print()

    # --- Python version ---
    python_version = sys.version_info
    python_ok = python_version >= (3, 9)
    status = "✅" if python_ok else "❌"
    print(f"{status} Python Version: {python_version.major}.{python_version.minor}.{python_version.micro}")
    if not python_ok:
        print(f"   Required: Python 3.9+")

    # --- Python packages ---
    packages_ok, missing = check_required_packages()
    status = "✅" if packages_ok else "❌"
    print(f"{status} Required Packages: {'All installed' if packages_ok else f'{len(missing)} missing'}")
    if missing:
        print(f"   Missing: {', '.join(missing)}")
        print(f"   Install with: pip install {' '.join(missing)}")

    # --- Project directory structure ---
    project_root = Path(__file__).parent
    required_paths = ['aba_insights', 'aba_insights/pipeline', 'aba_insights/dashboard', 'dashboard.py']
    structure_ok = all((project_root / p).exists() for p in required_paths)
    status = "✅" if structure_ok else "❌"
    print(f"{status} Project Structure: {'Valid' if structure_ok else 'Missing files'}")

    # --- Dataset (only meaningful once the packages import) ---
    if packages_ok:
        dataset_ok, detail = check_dataset(seed)
    else:
        dataset_ok, detail = False, "skipped"
    status = "✅" if dataset_ok else "❌"
    print(f"{status} Synthetic Dataset (seed {seed}): {detail}")

    print()
    print("=" * 60)

    all_ok = python_ok and packages_ok and structure_ok and dataset_ok
    if all_ok:
        print("  ✅ All checks passed!")
    else:
        print("  ❌ Some checks failed. Please fix the issues above.")
    print("=" * 60)
    print()

    return all_ok


def parse_args(argv=None):
    """
    Parse and return command-line arguments.

    Returns:
        argparse.Namespace with the parsed flags.
    """
    parser = argparse.ArgumentParser(
        description=f'{DASHBOARD_TITLE} - ABA therapy progress analytics',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run.py                  Launch dashboard
  python run.py --port 8502      Use custom port for dashboard
  python run.py --seed 7         Use a different synthetic dataset
  python run.py --summary        Print KPI summary for the default filters
        """
    )

    parser.add_argument(
        '--port',
        type=int,
        default=DASHBOARD_PORT,
        help=f'Port for Streamlit dashboard (default: {DASHBOARD_PORT})'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=DEFAULT_SEED,
        help=f'Seed for the synthetic dataset (default: {DEFAULT_SEED})'
    )

    parser.add_argument(
        '--no-browser',
        action='store_true',
        help='Do not automatically open browser'
    )

    parser.add_argument(
        '--summary',
        action='store_true',
        help='Print the summary figures for the default filters and exit'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show detailed logging output'
    )

    parser.add_argument(
        '--health-check',
        action='store_true',
        help='Run system health check and exit'
    )

    return parser.parse_args(argv)


def print_summary(seed: int = DEFAULT_SEED):
    """
    Print the dashboard's headline figures for the default filters.

    Returns:
        SummaryStats for the default (last six months, no facets) view.
    """
    from aba_insights.data.generator import GeneratorConfig, generate_dataset
    from aba_insights.models.data_models import FilterSpec
    from aba_insights.pipeline.orchestrator import build_view

    dataset = generate_dataset(GeneratorConfig(seed=seed))
    spec = FilterSpec.default()
    view = build_view(dataset, spec)
    summary = view.summary

    print()
    print("=" * 60)
    print(f"  \U0001f4ca {DASHBOARD_TITLE} (seed {seed})")
    print(f"     {spec.start:%Y-%m-%d} to {spec.end:%Y-%m-%d}")
    print("=" * 60)
    print(f"  Active Clients:    {summary.active_clients:,}")
    print(f"  Avg Accuracy:      {summary.avg_accuracy:.1f}%")
    print(f"  Total Trials:      {summary.total_trials:,}")
    print(f"  Active Programs:   {summary.active_programs:,}")
    print(f"  Mastered Targets:  {summary.mastered_targets:,}")
    print("=" * 60)
    print()

    if not view.programs.empty:
        print("  Top programs by trial volume:")
        for row in view.programs.head(5).itertuples(index=False):
            print(f"    {row.program:<30} {row.total:>7,} trials  {row.accuracy}%")
        print()

    return summary


def _port_in_use(port: int) -> bool:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        return sock.connect_ex(('localhost', port)) == 0
    finally:
        sock.close()


def launch_dashboard(port: int = DASHBOARD_PORT, open_browser: bool = True,
                     seed: int = DEFAULT_SEED):
    """
    Launch the Streamlit dashboard as a managed subprocess.

    This function:
        1. Checks that the dashboard.py entry point exists.
        2. Refuses to start if the requested port is already in use.
        3. Optionally opens the default browser after a 3-second delay.
        4. Registers an atexit handler that terminates the Streamlit
           subprocess on exit.

    Args:
        port: TCP port for the Streamlit HTTP server.
        open_browser: If True, auto-open http://localhost:{port}.
        seed: Synthetic dataset seed passed through to the app.

    Returns:
        bool: True if the dashboard ran and exited cleanly (including Ctrl+C
              shutdown), False on errors (missing files, port conflicts, etc.).
    """
    from aba_insights.dashboard.app import get_dashboard_path, build_streamlit_command

    print()
    print("=" * 60)
    print("  \U0001f310 Launching ABA Progress Dashboard")
    print("=" * 60)
    print()

    dashboard_path = get_dashboard_path()
    if not dashboard_path.exists():
        print(f"❌ Error: Dashboard not found at {dashboard_path}")
        return False

    try:
        if _port_in_use(port):
            print(f"⚠️  Port {port} is already in use")
            print("   Please use a different port with --port flag")
            return False
    except OSError as e:
        logger.warning(f"Could not check port status: {e}")

    print(f"  \U0001f4ca Starting Streamlit server on port {port} (seed {seed})...")
    print(f"  \U0001f517 URL: http://localhost:{port}")
    print()
    print("  Press Ctrl+C to stop the dashboard")
    print("-" * 60)
    sys.stdout.flush()

    cmd = build_streamlit_command(port=port, seed=seed, headless=True)
    logger.debug(f"Streamlit command: {' '.join(cmd)}")

    streamlit_process = None

    def cleanup():
        """Terminate the Streamlit subprocess, escalating to kill after 5s."""
        if streamlit_process and streamlit_process.poll() is None:
            print("\n\U0001f9f9 Cleaning up dashboard process...")
            streamlit_process.terminate()
            try:
                streamlit_process.wait(timeout=5)
            except subprocess.TimeoutExpired:
                print("   Force killing process...")
                streamlit_process.kill()

    atexit.register(cleanup)

    try:
        if open_browser:
            def open_browser_delayed():
                time.sleep(3)
                try:
                    webbrowser.open(f"http://localhost:{port}")
                except webbrowser.Error as e:
                    logger.warning(f"Failed to open browser: {e}")

            import threading
            threading.Thread(target=open_browser_delayed, daemon=True).start()

        streamlit_process = subprocess.Popen(cmd)
        streamlit_process.wait()
        return True

    except KeyboardInterrupt:
        print("\n\n✅ Dashboard stopped by user.")
        cleanup()
        return True
    except FileNotFoundError:
        print("\n❌ Streamlit not found. Install with: pip install streamlit plotly")
        return False
    except OSError as e:
        print(f"\n❌ Error launching dashboard: {e}")
        logger.error("Dashboard launch failed", exc_info=True)
        cleanup()
        return False


def main(argv=None):
    """
    Top-level entry point: parse CLI args and dispatch to the requested mode.

    Execution modes:
        --health-check -> run diagnostics, print report, exit
        --summary      -> print the default-filter KPIs, exit
        (default)      -> launch the Streamlit dashboard
    """
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    if args.health_check:
        success = health_check(seed=args.seed)
        sys.exit(0 if success else 1)

    try:
        if args.summary:
            print_summary(seed=args.seed)
        else:
            success = launch_dashboard(port=args.port, open_browser=not args.no_browser,
                                       seed=args.seed)
            if not success:
                sys.exit(1)
    except KeyboardInterrupt:
        print("\n\n\U0001f44b Cancelled by user.")
        sys.exit(0)


if __name__ == "__main__":
    main()
