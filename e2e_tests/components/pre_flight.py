import sys
from typing import NoReturn

import boto3
from botocore.exceptions import ClientError, NoCredentialsError, NoRegionError
from rich.console import Console
from rich.panel import Panel

from .config import Config


def _fail(console: Console, message: str, title: str) -> NoReturn:
    console.print("\n[bold red]❌ PRE-FLIGHT CHECK FAILED[/bold red]\n")
    console.print(Panel(message, title=title, border_style="red"))
    sys.exit(2)


def verify_aws_connectivity(config: Config) -> boto3.Session:
    """
    Performs pre-flight checks before the test runner is even instantiated.
    - Initializes a boto3 session.
    - Verifies credentials and region are configured.
    - Verifies the target Lambda function exists and is readable.
    - Exits with code 2 and a clear error message on failure.
    """
    console = Console()
    console.print("\n--- [bold blue]Pre-flight Checks[/bold blue] ---")

    try:
        session_args = {}
        if config.aws_region:
            session_args["region_name"] = config.aws_region

        session = boto3.Session(**session_args)
        lambda_client = session.client("lambda")
        console.log(
            f"[green]✓[/green] Boto3 Lambda client initialized in region '{lambda_client.meta.region_name}'."
        )

        function = lambda_client.get_function_configuration(
            FunctionName=config.function_name
        )
        console.log(
            f"[green]✓[/green] Access confirmed for Lambda function: '{config.function_name}' "
            f"(runtime: {function.get('Runtime', 'unknown')}, handler: {function.get('Handler', 'unknown')})"
        )

        console.print("[bold green]✅ Pre-flight checks passed.[/bold green]")
        return session

    except NoCredentialsError:
        _fail(
            console,
            "AWS credentials not found. Please configure them using one of the following methods:\n"
            "  1. Environment variables (AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY)\n"
            "  2. A shared credentials file (~/.aws/credentials) with a profile.\n"
            "  3. An IAM role attached to the EC2 instance or ECS task.",
            "Authentication Error",
        )

    except NoRegionError:
        _fail(
            console,
            "An AWS region was not specified. Please configure it using one of the following methods:\n"
            "  1. The --aws-region command-line flag.\n"
            "  2. The 'aws_region' key in your JSON config file.\n"
            "  3. The AWS_REGION or AWS_DEFAULT_REGION environment variables.\n"
            "  4. The 'region' setting in your ~/.aws/config file.",
            "Configuration Error",
        )

    except ClientError as e:
        error_code = e.response["Error"]["Code"]
        if error_code == "ResourceNotFoundException":
            error_message = f"Lambda function not found: '{config.function_name}'. Please check the function name."
        elif error_code in ("AccessDeniedException", "403"):
            error_message = "Access Denied when trying to read the Lambda function. Please check your IAM permissions."
        else:
            error_message = f"An unexpected AWS API error occurred: {e}"
        _fail(console, error_message, "AWS API Error")
