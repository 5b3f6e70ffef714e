from typing import Dict

from promptlab.exceptions import user_message_for


def create_response(success: bool, message: str, data=None, error=None):
    response = {"success": success, "message": message}
    if data is not None:
        response["data"] = data
    if error is not None:
        response["error"] = error
    return response


def error_body(exc: Exception, default: str) -> Dict[str, str]:
    """
    Body for failed generation / evaluation calls.
    Only the user-facing message is exposed, never the provider error text.
    """
    return {"error": user_message_for(exc, default)}
