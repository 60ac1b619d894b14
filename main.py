from flask import Flask, request, jsonify
from flask_cors import CORS
from pricing import FeeEngine
from pricing.config import load_fee_config
from pricing.price_sheet import PriceSheetBuilder
import os
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)

# Enable CORS for all routes (the catalog and calculator screens call the API from the browser)
CORS(app)

# Initialize the fee engine
engine = FeeEngine(load_fee_config())
price_sheet_builder = PriceSheetBuilder(engine)


@app.route("/api", methods=["GET"])
def api_info():
    """API information endpoint"""
    return jsonify({
        "status": "ok",
        "message": "Marketplace Pricing API",
        "version": "1.0",
        "endpoints": {
            "calculate": "/calculate [POST]",
            "service_fee": "/service_fee [POST]",
            "price_sheet": "/price_sheet [POST]",
            "health": "/health [GET]"
        }
    }), 200


@app.route("/health", methods=["GET"])
def health():
    """Health check for monitoring"""
    return jsonify({"status": "healthy"}), 200


def _handle(handler, label):
    try:
        input_data = request.get_json(force=True, silent=True)

        if not input_data:
            return jsonify({
                "error": "No input data provided",
                "status": "failed"
            }), 400

        if not isinstance(input_data, dict):
            raise ValueError("Request body must be a JSON object")

        logger.info(f"Processing {label} request")
        result = handler(input_data)
        return jsonify(result), 200

    except (ValueError, KeyError, TypeError) as e:
        logger.error(f"Validation error: {str(e)}")
        return jsonify({
            "error": str(e),
            "status": "validation_failed"
        }), 400

    except Exception as e:
        logger.error(f"Processing error: {str(e)}", exc_info=True)
        return jsonify({
            "error": "An unexpected error occurred during processing",
            "status": "failed"
        }), 500


@app.route("/calculate", methods=["POST"])
def calculate():
    """Price one amount on every channel"""
    return _handle(engine.process_from_dict, "calculate")


@app.route("/service_fee", methods=["POST"])
def service_fee():
    """Bracketed channel service fee for a gross price"""
    return _handle(engine.service_fee_from_dict, "service_fee")


@app.route("/price_sheet", methods=["POST"])
def price_sheet():
    """Channel prices for a list of catalog products"""
    return _handle(price_sheet_builder.build_from_dict, "price_sheet")


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    app.run(host="0.0.0.0", port=port, debug=False)
