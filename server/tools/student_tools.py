"""Student handlers: create, update, and look up records."""
from typing import Dict, Any
import logging

from tools.base import BaseTool, ToolSchema, ToolParameter, ToolMetadata
from database.repositories.student_repo import StudentRepository
from database.repositories.class_repo import ClassRepository

logger = logging.getLogger(__name__)


def _student_name_param(required: bool = True) -> ToolParameter:
    return ToolParameter(name="student_name", description="tên học sinh", required=required)


class StudentCreateTool(BaseTool):
    """Add a student, optionally enrolling them in a class."""

    def __init__(self, student_repo: StudentRepository, class_repo: ClassRepository):
        self.student_repo = student_repo
        self.class_repo = class_repo

    def _build_schema(self) -> ToolSchema:
        return ToolSchema(
            name="student_create",
            description="Thêm học sinh mới, có thể ghi danh vào lớp.",
            metadata=ToolMetadata(destructive_hint=True),
            parameters=[
                _student_name_param(),
                ToolParameter(name="parent_name", description="tên phụ huynh"),
                ToolParameter(name="phone", description="số điện thoại phụ huynh"),
                ToolParameter(name="email", description="email phụ huynh"),
                ToolParameter(name="class_name", description="lớp học"),
            ],
        )

    async def execute(self, **kwargs) -> Dict[str, Any]:
        await self.validate_parameters(**kwargs)
        name = kwargs["student_name"]
        class_name = kwargs.get("class_name")

        student = await self.student_repo.create_student(
            name=name,
            parent_name=kwargs.get("parent_name"),
            phone=kwargs.get("phone"),
            email=kwargs.get("email"),
        )
        if not student:
            return {"success": False, "message": f"Không thể thêm học sinh {name}."}

        logger.info(f"Created student {student.get('id')}: {name}")
        message = f"Đã thêm học sinh {name}."

        if class_name:
            klass = await self.class_repo.find_by_name(class_name)
            if klass:
                await self.class_repo.enroll_student(student["id"], klass["id"])
                message = f"Đã thêm học sinh {name} vào lớp {klass['ten_lop']}."
            else:
                message += f" Không tìm thấy lớp {class_name} để ghi danh."

        return {"success": True, "message": message, "data": student}


class StudentUpdateTool(BaseTool):
    """Update parent contact details of an existing student."""

    # entity slot -> students column
    FIELD_MAP = {
        "phone": "sdt_ph1",
        "parent_name": "ten_ph",
        "email": "email_ph1",
    }

    def __init__(self, student_repo: StudentRepository):
        self.student_repo = student_repo

    def _build_schema(self) -> ToolSchema:
        return ToolSchema(
            name="student_update",
            description="Cập nhật thông tin liên hệ của học sinh.",
            metadata=ToolMetadata(destructive_hint=True, idempotent_hint=True),
            parameters=[
                _student_name_param(),
                ToolParameter(name="parent_name", description="tên phụ huynh"),
                ToolParameter(name="phone", description="số điện thoại phụ huynh"),
                ToolParameter(name="email", description="email phụ huynh"),
            ],
        )

    async def validate_parameters(self, **kwargs) -> bool:
        if not kwargs.get("student_name"):
            raise ValueError("Không tìm thấy tên học sinh để cập nhật.")
        return True

    async def execute(self, **kwargs) -> Dict[str, Any]:
        await self.validate_parameters(**kwargs)
        name = kwargs["student_name"]

        student = await self.student_repo.find_by_name(name)
        if not student:
            return {"success": False, "message": f"Không tìm thấy học sinh có tên {name}."}

        updates = {
            column: kwargs[slot]
            for slot, column in self.FIELD_MAP.items()
            if kwargs.get(slot)
        }
        if not updates:
            return {"success": False, "message": "Không có thông tin nào để cập nhật."}

        rows = await self.student_repo.update_student(student["id"], updates)
        logger.info(f"Updated student {student['id']}: {sorted(updates)}")

        return {
            "success": True,
            "message": f"Đã cập nhật thông tin học sinh {name} thành công.",
            "data": rows,
        }


class StudentLookupTool(BaseTool):
    """Read student or class details."""

    def __init__(self, student_repo: StudentRepository, class_repo: ClassRepository):
        self.student_repo = student_repo
        self.class_repo = class_repo

    def _build_schema(self) -> ToolSchema:
        return ToolSchema(
            name="student_lookup",
            description="Kiểm tra thông tin học sinh hoặc lớp học.",
            metadata=ToolMetadata(read_only_hint=True, idempotent_hint=True),
            parameters=[
                _student_name_param(required=False),
                ToolParameter(name="class_name", description="lớp học"),
            ],
        )

    async def validate_parameters(self, **kwargs) -> bool:
        if not kwargs.get("student_name") and not kwargs.get("class_name"):
            raise ValueError("Cần tên học sinh hoặc tên lớp để kiểm tra thông tin.")
        return True

    async def execute(self, **kwargs) -> Dict[str, Any]:
        await self.validate_parameters(**kwargs)

        if kwargs.get("student_name"):
            return await self._lookup_student(kwargs["student_name"])
        return await self._lookup_class(kwargs["class_name"])

    async def _lookup_student(self, name: str) -> Dict[str, Any]:
        student = await self.student_repo.find_by_name(name)
        if not student:
            return {"success": False, "message": f"Không tìm thấy học sinh có tên {name}."}

        details = {
            "ten_hoc_sinh": student.get("ten_hoc_sinh"),
            "ten_ph": student.get("ten_ph"),
            "sdt_ph1": student.get("sdt_ph1"),
            "email_ph1": student.get("email_ph1"),
            "trang_thai": student.get("trang_thai"),
        }
        parts = [f"Học sinh {details['ten_hoc_sinh']}"]
        if details["ten_ph"]:
            parts.append(f"phụ huynh {details['ten_ph']}")
        if details["sdt_ph1"]:
            parts.append(f"SĐT {details['sdt_ph1']}")
        if details["email_ph1"]:
            parts.append(f"email {details['email_ph1']}")
        if details["trang_thai"]:
            parts.append(f"trạng thái {details['trang_thai']}")

        return {"success": True, "message": ", ".join(parts) + ".", "data": details}

    async def _lookup_class(self, class_name: str) -> Dict[str, Any]:
        klass = await self.class_repo.find_by_name(class_name)
        if not klass:
            return {"success": False, "message": f"Không tìm thấy lớp {class_name}."}

        student_count = await self.class_repo.count_enrollments(klass["id"])
        details = {
            "ten_lop": klass.get("ten_lop"),
            "ten_lop_full": klass.get("ten_lop_full"),
            "ct_hoc": klass.get("ct_hoc"),
            "gv_chinh": klass.get("gv_chinh"),
            "tinh_trang": klass.get("tinh_trang"),
            "so_hoc_sinh": student_count,
        }
        message = f"Lớp {details['ten_lop']} có {student_count} học sinh"
        if details["gv_chinh"]:
            message += f", giáo viên chính {details['gv_chinh']}"
        if details["ct_hoc"]:
            message += f", chương trình {details['ct_hoc']}"

        return {"success": True, "message": message + ".", "data": details}
