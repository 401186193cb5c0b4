from pmtracker.application.services.report_compiler import ReportCompiler

__all__ = ["ReportCompiler"]
