# prerender/reports/__init__.py
from .report import ReportAccumulator, list_saved_reports, load_report, report_filename, save_report

__all__ = ["ReportAccumulator", "save_report", "load_report", "list_saved_reports", "report_filename"]
