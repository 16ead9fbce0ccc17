def message(text: str):
    """Body for delete endpoints."""
    return {"message": text}


def error(code: str = "internal_error", message: str = "An internal error occurred"):
    """Standard error envelope."""
    return {"ok": False, "data": None, "error": {"code": code, "message": message}}
