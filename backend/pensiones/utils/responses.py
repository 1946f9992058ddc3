from flask import jsonify


def success_response(data=None, message="OK", status_code=200, meta=None):
    body = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    if meta:
        body["meta"] = meta
    response = jsonify(body)
    response.status_code = status_code
    return response
