import time
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.utils.logging_config import (
    LogContext,
    get_logger,
    log_api_access,
    log_security_event,
)

logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle request/response logging and context management
    """

    def __init__(self, app: FastAPI, log_requests: bool = True, log_responses: bool = True):
        super().__init__(app)
        self.log_requests = log_requests
        self.log_responses = log_responses

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        client_ip = self.get_client_ip(request)
        user_agent = request.headers.get("user-agent", "unknown")
        path = str(request.url.path)

        with LogContext(req_id=request_id):
            start_time = time.time()

            if self.log_requests:
                logger.info(
                    f"Incoming request: {request.method} {path}",
                    extra={
                        "extra_fields": {
                            "http_method": request.method,
                            "path": path,
                            "client_ip": client_ip,
                            "user_agent": user_agent,
                            "action": "request_received",
                        }
                    },
                )

            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    f"Request failed: {request.method} {path}",
                    extra={
                        "extra_fields": {
                            "http_method": request.method,
                            "path": path,
                            "error_type": type(e).__name__,
                            "response_time_seconds": round(time.time() - start_time, 4),
                            "client_ip": client_ip,
                            "action": "request_failed",
                        }
                    },
                    exc_info=True,
                )
                raise

            response_time = time.time() - start_time
            status_code = response.status_code

            if self.log_responses:
                logger.info(
                    f"Request completed: {request.method} {path} - {status_code}",
                    extra={
                        "extra_fields": {
                            "http_method": request.method,
                            "path": path,
                            "status_code": status_code,
                            "response_time_seconds": round(response_time, 4),
                            "client_ip": client_ip,
                            "action": "request_completed",
                        }
                    },
                )

            log_api_access(
                method=request.method,
                path=path,
                status_code=status_code,
                response_time=response_time,
                ip_address=client_ip,
            )

            if path.endswith("/auth/login"):
                log_security_event(
                    event_type="successful_login"
                    if status_code == 200
                    else "failed_login_attempt",
                    ip_address=client_ip,
                    user_agent=user_agent,
                )

            response.headers["X-Request-ID"] = request_id
            return response

    def get_client_ip(self, request: Request) -> str:
        """Extract client IP address from request"""
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return "unknown"
