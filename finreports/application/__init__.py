"""Application layer - Use cases and DTOs."""

from finreports.application.report_service import ReportService
