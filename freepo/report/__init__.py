"""Report generation from a list of selected paths."""

from freepo.report.builtin import render_file_map, render_report
from freepo.report.runner import ReportError, ReportRunner, write_path_list

__all__ = [
    "ReportError",
    "ReportRunner",
    "render_file_map",
    "render_report",
    "write_path_list",
]
