from libs.orm.base import JSONDocument, TimestampMixin

__all__ = [
    "JSONDocument",
    "TimestampMixin",
]
