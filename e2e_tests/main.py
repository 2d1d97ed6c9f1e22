#!/usr/bin/env python

# e2e_tests/main.py

import argparse
import sys

from rich.console import Console
from rich.panel import Panel

from components.config import load_configuration
from components.pre_flight import verify_aws_connectivity
from components.runner import E2ETestRunner


def main():
    """Main entry point for the test runner script."""
    parser = argparse.ArgumentParser(
        description="End-to-end test for the deployed certificate-checker function.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("-c", "--config", help="Path to a JSON configuration file.")
    parser.add_argument("--function-name", help="Name or ARN of the Lambda function.")
    parser.add_argument(
        "--invocations", type=int, help="Number of invocations to verify (default 3)."
    )
    parser.add_argument("--aws-region", help="AWS region of the function.")
    parser.add_argument("--report-file", help="Write a JUnit XML report to this path.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=None,
        help="Enable verbose output, including log tails and full tracebacks.",
    )

    args = parser.parse_args()

    # 1. Load the configuration object first.
    try:
        config = load_configuration(args)
    except (FileNotFoundError, ValueError) as e:
        Console().print(Panel(str(e), title="Configuration Error", border_style="red"))
        sys.exit(2)

    # 2. Run the pre-flight check. This function will exit the script on failure.
    session = verify_aws_connectivity(config)

    # 3. If the check passes, we can safely create and run the E2ETestRunner.
    runner = E2ETestRunner(config, session=session)
    sys.exit(runner.run())


if __name__ == "__main__":
    main()
