"""
Response envelopes and MongoDB document helpers.

Every endpoint answers with one of two shapes:

    {"success": true,  "message": "...", "data": ...}
    {"success": false, "error": "...", "code": 403, "data": ...}
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from bson import ObjectId
from fastapi import HTTPException, status
from fastapi.responses import JSONResponse


def to_jsonable(value: Any) -> Any:
    """Convert BSON and Python values a document may hold into JSON types."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_jsonable(v) for v in value]
    return value


def serialize_mongo_doc(doc):
    """JSON-ready copy of a document (or list of documents); None stays None."""
    if doc is None:
        return None
    return to_jsonable(doc)


def parse_object_id(id_str: str, label: str = "ID") -> ObjectId:
    """Convert a path parameter to ObjectId or fail with 400."""
    if not ObjectId.is_valid(id_str):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {label}",
        )
    return ObjectId(id_str)


def success_response(
    data: Optional[Any] = None,
    message: str = "Success",
    code: int = 200,
) -> JSONResponse:
    content = {"success": True, "message": message}
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=code, content=content)


def error_response(
    message: str,
    code: int = 400,
    data: Optional[Any] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    """`error` is always a plain string; details such as field errors go in `data`."""
    content = {"success": False, "error": message, "code": code}
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=code, content=content, headers=headers)
