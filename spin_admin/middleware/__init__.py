"""ASGI middleware."""

from spin_admin.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
