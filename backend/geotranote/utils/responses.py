from flask import jsonify


def _json(payload: dict, status_code: int):
    response = jsonify(payload)
    response.status_code = status_code
    return response


def success_response(data=None, message="OK", status_code=200):
    payload = {"success": True, "message": message}
    if data is not None:
        payload["data"] = data
    return _json(payload, status_code)


def error_response(message="Erro", status_code=400, errors=None):
    """Envelope de erro da API: ``{"success": false, "message": ..., "errors"?: ...}``."""
    payload = {"success": False, "message": message}
    if errors:
        payload["errors"] = errors
    return _json(payload, status_code)
