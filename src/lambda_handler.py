"""AWS Lambda handler for API Gateway events.

The FastAPI application is wrapped with the Mangum ASGI adapter. Dependencies are built
once per Lambda container during cold start and reused on warm invocations.
"""

import logging
import os
from typing import Any

from mangum import Mangum

from lambda_dependencies import get_fastapi_app, initialize_lambda_environment

# Initialize Lambda environment during cold start (skip in test mode)
if os.getenv("ENVIRONMENT") != "test":
    initialize_lambda_environment()

logger = logging.getLogger(__name__)

# Create FastAPI app and Mangum adapter (cached for warm starts, skip in test mode)
if os.getenv("ENVIRONMENT") != "test":
    app = get_fastapi_app()
    mangum_handler = Mangum(app, lifespan="off")
else:
    app = None  # type: ignore
    mangum_handler = None  # type: ignore


def is_api_gateway_event(event: dict[str, Any]) -> bool:
    """Determine if the event comes from API Gateway (REST or HTTP API).

    Args:
        event: The Lambda event payload

    Returns:
        True if this is an API Gateway request, False otherwise
    """
    return isinstance(event.get("requestContext"), dict)


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Lambda entry point serving website and back-office requests.

    Args:
        event: The Lambda event payload (API Gateway)
        context: The Lambda context object

    Returns:
        Response dict with statusCode and body
    """
    logger.info(f"Received Lambda invocation, request_id: {context.aws_request_id}")

    if not is_api_gateway_event(event):
        logger.warning("Unsupported Lambda event: not an API Gateway request")
        return {
            "statusCode": 400,
            "body": '{"error": "Unsupported event type"}',
        }

    try:
        result: dict[str, Any] = mangum_handler(event, context)
        return result
    except Exception as e:
        logger.exception(f"Unhandled error in Lambda handler: {e}")
        return {
            "statusCode": 500,
            "body": '{"error": "Internal server error"}',
        }
