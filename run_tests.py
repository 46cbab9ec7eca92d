"""
Simple test runner script.
Run with: python run_tests.py

Uses pytest discovery on the tests/ directory (see [tool.pytest.ini_options]).
"""

import subprocess
import sys

if __name__ == "__main__":
    result = subprocess.run(
        [
            sys.executable, "-m", "pytest",
            "-v",              # Verbose output
            "--tb=short",      # Short traceback format
            "tests/",
        ],
        cwd="."
    )
    sys.exit(result.returncode)
