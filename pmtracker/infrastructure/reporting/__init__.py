from pmtracker.infrastructure.reporting.pdf_renderer import ReportLabRenderer

__all__ = ["ReportLabRenderer"]
