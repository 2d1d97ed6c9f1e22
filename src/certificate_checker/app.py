"""
The Lambda entry point for the Certificate Checker function.

This module is responsible for:
1.  Initializing and configuring AWS Lambda Powertools (Logger, Tracer and
    Metrics) once per execution environment.
2.  Reading the request id from the runtime-supplied invocation context,
    degrading to an empty id instead of failing.
3.  Writing the greeting line to standard output.
4.  Reporting success to the runtime on every invocation.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.logging.utils import copy_config_to_registered_loggers
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from .config import get_config
from .core import emit_greeting, resolve_invocation

# --- Global & Reusable Components ---
CONFIG = get_config()

logger = Logger(service=CONFIG.service_name, level=CONFIG.log_level)
tracer = Tracer(service=CONFIG.service_name)
metrics = Metrics(
    namespace=CONFIG.metrics_namespace,
    service=CONFIG.service_name,
)
metrics.set_default_dimensions(environment=CONFIG.environment)

# Route the package's stdlib loggers through the same JSON formatter.
copy_config_to_registered_loggers(
    source_logger=logger, include={"certificate_checker"}
)


@tracer.capture_lambda_handler
@metrics.log_metrics
def handler(event: dict[str, Any], context: LambdaContext) -> None:
    """
    Main Lambda handler. The event is ignored; the only output is the
    greeting line. Returning None signals success to the runtime.
    """
    invocation = resolve_invocation(context)

    # Overwrite every key so nothing from the previous invocation survives.
    logger.append_keys(**invocation.log_keys())

    if CONFIG.is_test_env:
        logger.debug("Received event", extra={"event": event})

    tracer.put_annotation(key="RequestId", value=invocation.aws_request_id)

    emit_greeting(invocation.aws_request_id)

    metrics.add_metric(name="GreetingsEmitted", unit=MetricUnit.Count, value=1)
    logger.info(
        "Greeting emitted",
        extra={"request_id_present": bool(invocation.aws_request_id)},
    )
