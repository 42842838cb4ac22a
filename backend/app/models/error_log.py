"""
Error Log Model
Stores server-side failures for later inspection.

Captures:
- Timestamp and severity
- Request details (method, path, query, client)
- User context when the request was authenticated
- Full traceback and additional context
"""

from sqlalchemy import Column, String, Text, JSON, DateTime, Uuid
from datetime import datetime, timezone

from app.models.base import BaseModel


class ErrorLog(BaseModel):
    """
    Error Log Model

    One row per logged failure. Written by app.services.error_logging,
    never by request handlers directly.
    """
    __tablename__ = "error_logs"

    timestamp = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True
    )

    # Error classification
    error_type = Column(String(255), nullable=False, index=True)  # e.g., "ServerError", "OSError"
    error_code = Column(String(50), nullable=True)  # HTTP status code when known
    severity = Column(String(20), default="error", nullable=False)  # warning, error, critical

    # Location info
    module = Column(String(255), nullable=True)
    function = Column(String(255), nullable=True)
    line_number = Column(String(20), nullable=True)

    # User context (nullable for anonymous requests)
    user_id = Column(Uuid(as_uuid=True), nullable=True, index=True)
    user_email = Column(String(255), nullable=True)

    # Request context
    request_method = Column(String(10), nullable=True)
    request_path = Column(String(500), nullable=True)
    request_query = Column(Text, nullable=True)
    client_ip = Column(String(50), nullable=True)
    user_agent = Column(String(500), nullable=True)

    # Error details
    message = Column(Text, nullable=False)
    stack_trace = Column(Text, nullable=True)
    context_data = Column(JSON, nullable=True)

    def __repr__(self):
        return f"<ErrorLog(id={self.id}, type={self.error_type}, message={self.message[:50]}...)>"
