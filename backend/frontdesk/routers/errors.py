"""
Service error to HTTP mapping
"""
from fastapi import HTTPException, status


def http_error(e: ValueError) -> HTTPException:
    """Lookups that found nothing become 404, other rule violations 400"""
    message = str(e)
    if "not found" in message.lower():
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
