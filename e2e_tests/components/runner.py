# e2e_tests/components/runner.py
import base64
import json
import re
import uuid
import xml.etree.ElementTree as ET
from typing import Any, List, Optional, TypedDict

import boto3
from botocore.client import Config as BotocoreConfig
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import Config

# --- Data Structures ---


class ValidationResult(TypedDict):
    request_id: str
    status: str  # 'PASS' or 'FAIL'
    details: str


# --- Constants ---
START_LINE_PATTERN = re.compile(r"^START RequestId: (\S+)", re.MULTILINE)


def decode_log_tail(response: dict[str, Any]) -> str:
    """Decodes the base64 'LogResult' returned by an Invoke call with LogType=Tail."""
    return base64.b64decode(response.get("LogResult", b"")).decode("utf-8")


def find_request_id(response: dict[str, Any], log_result: str) -> Optional[str]:
    """
    The START line in the log tail is authoritative; the API request id is
    the fallback when the tail was truncated past it.
    """
    match = START_LINE_PATTERN.search(log_result)
    if match:
        return match.group(1)
    return response.get("ResponseMetadata", {}).get("RequestId")


def validate_invocation(response: dict[str, Any], payload: bytes) -> ValidationResult:
    """Checks one Invoke response for the greeting line and a null result."""
    log_result = decode_log_tail(response)
    request_id = find_request_id(response, log_result)

    if response.get("FunctionError"):
        return {
            "request_id": request_id or "unknown",
            "status": "FAIL",
            "details": f"Function returned an error: {response['FunctionError']}",
        }

    if not request_id:
        return {
            "request_id": "unknown",
            "status": "FAIL",
            "details": "No request id found in the response or the log tail.",
        }

    expected_line = f"Hello {request_id}n"
    if expected_line not in log_result.splitlines():
        return {
            "request_id": request_id,
            "status": "FAIL",
            "details": f"Greeting line '{expected_line}' not found in the log tail.",
        }

    if payload.strip() not in (b"", b"null"):
        return {
            "request_id": request_id,
            "status": "FAIL",
            "details": f"Expected a null result, got {payload[:80]!r}.",
        }

    return {"request_id": request_id, "status": "PASS", "details": "OK"}


class E2ETestRunner:
    """Invokes the deployed function and verifies its greeting output."""

    def __init__(self, config: Config, session: Optional[boto3.Session] = None):
        self.config = config

        self.lambda_client_config = BotocoreConfig(
            read_timeout=60, connect_timeout=10, retries={"max_attempts": 2}
        )
        session = session or boto3.Session(region_name=config.aws_region)
        self.lambda_client = session.client("lambda", config=self.lambda_client_config)

        self.console = Console()
        self.run_id = f"e2e-test-{uuid.uuid4().hex[:8]}"

    def _invoke_once(self, index: int) -> ValidationResult:
        payload = {"e2e_run_id": self.run_id, "index": index}
        try:
            response = self.lambda_client.invoke(
                FunctionName=self.config.function_name,
                InvocationType="RequestResponse",
                LogType="Tail",
                Payload=json.dumps(payload),
            )
        except Exception as e:
            return {
                "request_id": "unknown",
                "status": "FAIL",
                "details": f"Lambda invocation failed: {e}",
            }

        body = response["Payload"].read() if "Payload" in response else b""
        if self.config.verbose:
            self.console.print(
                Panel(decode_log_tail(response), title=f"Log Tail #{index}", border_style="yellow")
            )
        return validate_invocation(response, body)

    def _display_and_report(self, results: List[ValidationResult]):
        """Displays results to console and generates JUnit XML report if requested."""
        table = Table(title="Validation Results")
        table.add_column("Request Id", style="cyan", no_wrap=True)
        table.add_column("Status", justify="center")
        table.add_column("Details", style="yellow")

        for res in results:
            style = "green" if res["status"] == "PASS" else "red"
            table.add_row(
                res["request_id"], f"[{style}]{res['status']}[/{style}]", res["details"]
            )

        self.console.print(table)

        if self.config.report_file:
            self._generate_junit_report(results)
            self.console.print(
                f"JUnit XML report saved to: [bold blue]{self.config.report_file}[/bold blue]"
            )

    def _generate_junit_report(self, results: List[ValidationResult]):
        """Creates a JUnit XML file from the validation results."""
        failures = sum(1 for r in results if r["status"] == "FAIL")
        test_suite = ET.Element(
            "testsuite",
            name="CertificateCheckerE2ETest",
            tests=str(len(results)),
            failures=str(failures),
        )
        for i, res in enumerate(results):
            test_case = ET.SubElement(
                test_suite,
                "testcase",
                name=f"invocation-{i}-{res['request_id']}",
                classname="E2EGreetingValidation",
            )
            if res["status"] == "FAIL":
                failure = ET.SubElement(test_case, "failure", message=res["details"])
                failure.text = f"RequestId: {res['request_id']}\nDetails: {res['details']}"

        tree = ET.ElementTree(test_suite)
        ET.indent(tree, space="  ")
        tree.write(self.config.report_file, encoding="utf-8", xml_declaration=True)

    def run(self) -> int:
        """Executes the full test lifecycle."""
        try:
            self.console.print(
                Panel(
                    f"[cyan bold]{self.config.description}[/cyan bold]\n\n"
                    f"Run ID: [bold blue]{self.run_id}[/bold blue]\n"
                    f"Function: {self.config.function_name}",
                    title="Test Case",
                    expand=False,
                )
            )

            results = [
                self._invoke_once(i) for i in range(self.config.invocations)
            ]
            self._display_and_report(results)

            request_ids = [r["request_id"] for r in results if r["status"] == "PASS"]
            if len(set(request_ids)) != len(request_ids):
                self.console.print(
                    "[bold red]❌ TEST FAILED: request ids were reused across invocations.[/bold red]"
                )
                return 1

            if all(r["status"] == "PASS" for r in results):
                self.console.print("\n[bold green]✅ TEST PASSED[/bold green]")
                return 0
            return 1

        except Exception as e:
            self.console.print(
                "\n[bold red]An unexpected error occurred during the test run.[/bold red]"
            )
            if self.config.verbose:
                self.console.print_exception(show_locals=True)
            else:
                self.console.print(f"Error details: {e}")
                self.console.print(
                    "\n[dim]Run with the --verbose flag for a full traceback.[/dim]"
                )
            return 1
