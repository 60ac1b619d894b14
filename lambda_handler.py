"""
AWS Lambda handler for the Marketplace Pricing API.

This is the production entry point for AWS Lambda deployments.
For local development, use main.py (Flask app) instead.
"""

import base64
import json
import logging
import os

from pricing import FeeEngine
from pricing.config import load_fee_config
from pricing.price_sheet import PriceSheetBuilder

# Configure logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)

# Environment (dev, staging, prod)
ENVIRONMENT = os.environ.get("ENVIRONMENT", "dev")

# Initialize engine (reused across warm invocations)
engine = FeeEngine(load_fee_config())
price_sheet_builder = PriceSheetBuilder(engine)

# CORS headers for API Gateway
CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}

POST_ROUTES = {
    "/calculate": engine.process_from_dict,
    "/service_fee": engine.service_fee_from_dict,
    "/price_sheet": price_sheet_builder.build_from_dict,
}


def lambda_handler(event, context):
    """
    Main Lambda entry point.

    Handles API Gateway events for:
    - GET /health
    - GET /api
    - POST /calculate, /service_fee, /price_sheet
    - OPTIONS (CORS preflight)
    """
    # Handle CORS preflight
    http_method = event.get("httpMethod") or event.get("requestContext", {}).get("http", {}).get("method", "")
    if http_method == "OPTIONS":
        return {"statusCode": 200, "headers": CORS_HEADERS, "body": ""}

    # Get path (supports both REST API and HTTP API formats)
    path = event.get("path") or event.get("rawPath", "")

    # Route to appropriate handler
    if path == "/health" and http_method == "GET":
        return handle_health()
    elif path == "/api" and http_method == "GET":
        return handle_api_info()
    elif path in POST_ROUTES and http_method == "POST":
        return handle_post(event, path)
    else:
        return {"statusCode": 404, "headers": CORS_HEADERS, "body": json.dumps({"error": "Not found", "path": path})}


def handle_health():
    """Health check endpoint."""
    return {
        "statusCode": 200,
        "headers": CORS_HEADERS,
        "body": json.dumps({"status": "healthy", "environment": ENVIRONMENT}),
    }


def handle_api_info():
    """API information endpoint."""
    return {
        "statusCode": 200,
        "headers": CORS_HEADERS,
        "body": json.dumps(
            {
                "status": "ok",
                "message": "Marketplace Pricing API",
                "version": "1.0",
                "environment": ENVIRONMENT,
                "runtime": "AWS Lambda",
                "endpoints": {route: f"{route} [POST]" for route in POST_ROUTES} | {"health": "/health [GET]"},
            }
        ),
    }


def handle_post(event, path):
    """Run the engine operation bound to `path`."""
    try:
        # Parse request body
        body = event.get("body", "")
        if isinstance(body, str):
            if not body:
                return {
                    "statusCode": 400,
                    "headers": CORS_HEADERS,
                    "body": json.dumps({"error": "No input data provided", "status": "failed"}),
                }
            # Handle base64 encoded body (API Gateway)
            if event.get("isBase64Encoded"):
                body = base64.b64decode(body).decode("utf-8")
            input_data = json.loads(body)
        else:
            input_data = body

        if not isinstance(input_data, dict):
            raise ValueError("Request body must be a JSON object")

        logger.info(f"Processing {path} request")

        result = POST_ROUTES[path](input_data)

        return {"statusCode": 200, "headers": CORS_HEADERS, "body": json.dumps(result)}

    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error: {str(e)}")
        return {
            "statusCode": 400,
            "headers": CORS_HEADERS,
            "body": json.dumps({"error": f"Invalid JSON: {str(e)}", "status": "failed"}),
        }

    except (ValueError, KeyError, TypeError) as e:
        # Validation errors from engine (unknown direction, bad overrides, etc.)
        logger.error(f"Validation error: {str(e)}")
        return {
            "statusCode": 400,
            "headers": CORS_HEADERS,
            "body": json.dumps({"error": f"Validation error: {str(e)}", "status": "validation_failed"}),
        }

    except Exception as e:
        # Unexpected errors - log details but return generic message to avoid information disclosure
        logger.error(f"Unexpected processing error: {str(e)}", exc_info=True)
        return {
            "statusCode": 500,
            "headers": CORS_HEADERS,
            "body": json.dumps({"error": "An unexpected error occurred during processing", "status": "failed"}),
        }
