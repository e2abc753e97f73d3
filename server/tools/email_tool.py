"""E-mail handler (delivery is simulated)."""
from typing import Dict, Any
import logging

from tools.base import BaseTool, ToolSchema, ToolParameter, ToolMetadata
from database.repositories.student_repo import StudentRepository

logger = logging.getLogger(__name__)

DEFAULT_SUBJECT = "Thông báo từ hệ thống"


class EmailSendTool(BaseTool):
    """Send an e-mail to an address or to a student's parent."""

    def __init__(self, student_repo: StudentRepository):
        self.student_repo = student_repo

    def _build_schema(self) -> ToolSchema:
        return ToolSchema(
            name="email_send",
            description="Gửi email tới địa chỉ cho trước hoặc tới phụ huynh của học sinh.",
            metadata=ToolMetadata(mock_mode=True),
            parameters=[
                ToolParameter(name="email", description="địa chỉ email người nhận"),
                ToolParameter(name="student_name", description="tên học sinh"),
                ToolParameter(name="subject", description="tiêu đề", default=DEFAULT_SUBJECT),
                ToolParameter(name="message", description="nội dung"),
            ],
        )

    async def validate_parameters(self, **kwargs) -> bool:
        if not kwargs.get("email") and not kwargs.get("student_name"):
            raise ValueError("Không tìm thấy địa chỉ email để gửi.")
        return True

    async def execute(self, **kwargs) -> Dict[str, Any]:
        await self.validate_parameters(**kwargs)

        recipient = kwargs.get("email")
        if not recipient:
            student = await self.student_repo.find_by_name(kwargs["student_name"])
            if student:
                recipient = student.get("email_ph1")

        if not recipient:
            return {"success": False, "message": "Không tìm thấy địa chỉ email để gửi."}

        email = {
            "to": recipient,
            "subject": kwargs.get("subject") or DEFAULT_SUBJECT,
            "message": kwargs.get("message") or "",
        }
        # TODO: hand off to the mail delivery function once SMTP credentials are provisioned
        logger.info(f"Simulated email to {email['to']}: {email['subject']}")

        return {
            "success": True,
            "message": f"Đã gửi email tới {recipient}.",
            "data": email,
        }
