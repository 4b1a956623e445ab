from .action_service import DuplicateAction, ActionDispatcher
from .file_service import FileService
from .report_service import ReportService

__all__ = ["DuplicateAction", "ActionDispatcher", "FileService", "ReportService"]
