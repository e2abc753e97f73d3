"""Class scheduling handler"""
from typing import Dict, Any
import logging

from tools.base import BaseTool, ToolSchema, ToolParameter, ToolMetadata
from database.repositories.class_repo import ClassRepository
from database.repositories.task_repo import TaskRepository

logger = logging.getLogger(__name__)


class ClassScheduleTool(BaseTool):
    """
    Record a scheduling request for a class.

    Commands rarely carry a full date, time and room, so the request is
    filed as a pending task for staff to place on the timetable.
    """

    def __init__(self, class_repo: ClassRepository, task_repo: TaskRepository):
        self.class_repo = class_repo
        self.task_repo = task_repo

    def _build_schema(self) -> ToolSchema:
        return ToolSchema(
            name="class_schedule",
            description="Tạo yêu cầu xếp lịch học cho một lớp.",
            metadata=ToolMetadata(destructive_hint=True),
            parameters=[
                ToolParameter(name="class_name", description="lớp học", required=True),
                ToolParameter(name="message", description="chi tiết lịch học"),
            ],
        )

    async def execute(self, **kwargs) -> Dict[str, Any]:
        await self.validate_parameters(**kwargs)
        class_name = kwargs["class_name"]

        klass = await self.class_repo.find_by_name(class_name)
        if not klass:
            return {"success": False, "message": f"Không tìm thấy lớp {class_name}."}

        task = await self.task_repo.create_task(
            title=f"Xếp lịch học lớp {klass['ten_lop']}",
            description=kwargs.get("message"),
            target_type="class",
            target_id=klass["id"],
        )
        if not task:
            return {"success": False, "message": f"Không thể tạo lịch học cho lớp {klass['ten_lop']}."}

        logger.info(f"Created scheduling task {task.get('id')} for class {klass['id']}")
        return {
            "success": True,
            "message": f"Đã tạo yêu cầu xếp lịch học cho lớp {klass['ten_lop']}.",
            "data": task,
        }
