from .file_service import FileService
from .group_service import GroupService
from .input_service import InputService
from .report_service import ReportService

__all__ = ["FileService", "GroupService", "InputService", "ReportService"]
