from .helpers import (
    to_jsonable,
    serialize_mongo_doc,
    success_response,
    error_response,
    parse_object_id,
)
from .logger import Logger, configure_logging

__all__ = [
    "to_jsonable",
    "serialize_mongo_doc",
    "success_response",
    "error_response",
    "parse_object_id",
    "Logger",
    "configure_logging",
]
