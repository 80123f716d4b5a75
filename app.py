#!/usr/bin/env python3
"""
Base Chain Web Interface

JSON API over the conversion engine:
- POST /api/encrypt   {payload, bases, charset}
- POST /api/decrypt   {payload, bases, charset}
- POST /api/convert   {number, base_from, base_to, charset}
- GET  /api/charsets
"""

from flask import Flask, jsonify, request

import chain_pipeline
from base_converter import checked_convert
from digits import CHARSETS, BaseChainError, resolve_charset

# ==========================================
# CONFIGURATION
# ==========================================

# Conversion time grows quadratically with payload length
MAX_PAYLOAD_SIZE = 64 * 1024  # 64KB
DEFAULT_CHARSET_NAME = "default"

app = Flask(__name__)
app.config["MAX_CONTENT_LENGTH"] = MAX_PAYLOAD_SIZE
app.config["DEFAULT_CHARSET"] = DEFAULT_CHARSET_NAME


# ==========================================
# UTILITIES
# ==========================================

def error_response(message, status=400):
    return jsonify({"success": False, "error": message}), status


def read_request():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")

    charset = data.get("charset") or app.config["DEFAULT_CHARSET"]
    if not isinstance(charset, str):
        raise ValueError("charset must be a string")

    return data, resolve_charset(charset)


def read_bases(data):
    bases = data.get("bases", [])

    if isinstance(bases, str):
        return chain_pipeline.parse_base_sequence(bases)

    if not isinstance(bases, list):
        raise ValueError("bases must be a list or a whitespace-separated string")

    return bases


def run_pipeline(operation):
    try:
        data, charset = read_request()
        payload = data.get("payload", "")
        if not isinstance(payload, str):
            raise ValueError("payload must be a string")
        bases = read_bases(data)
    except (ValueError, BaseChainError) as e:
        return error_response(str(e))

    result = operation(payload, bases, charset)

    if not result.ok:
        print(f"[ERROR] {request.path}: {result.error}")
        return error_response(str(result.error))

    return jsonify({
        "success": True,
        "result": result.payload,
        "steps": result.steps
    })


# ==========================================
# ROUTES
# ==========================================

@app.route("/api/charsets")
def api_charsets():
    return jsonify({
        "success": True,
        "charsets": {name: len(alphabet) for name, alphabet in CHARSETS.items()}
    })


@app.route("/api/encrypt", methods=["POST"])
def api_encrypt():
    return run_pipeline(chain_pipeline.encrypt)


@app.route("/api/decrypt", methods=["POST"])
def api_decrypt():
    return run_pipeline(chain_pipeline.decrypt)


@app.route("/api/convert", methods=["POST"])
def api_convert():
    try:
        data, charset = read_request()
        number = data.get("number", "")
        if not isinstance(number, str):
            raise ValueError("number must be a string")
        result = checked_convert(
            number,
            data.get("base_from"),
            data.get("base_to"),
            charset
        )
    except (ValueError, BaseChainError) as e:
        return error_response(str(e))

    return jsonify({"success": True, "result": result})


# ==========================================
# ENTRYPOINT
# ==========================================

if __name__ == "__main__":
    print("=" * 60)
    print("Base Chain Web Interface")
    print("=" * 60)
    print("Server running at http://localhost:5000")
    print()

    app.run(host="127.0.0.1", port=5000)
