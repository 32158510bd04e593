"""Export service turning a project snapshot into a downloadable artifact."""

import asyncio
import logging
import re
import time
from dataclasses import dataclass
from urllib.parse import quote

from menu_render_service.models.export_models import ExportFormat
from menu_render_service.models.menu_models import MenuProject
from menu_render_service.observability.decorators import traced
from menu_render_service.observability.metrics import (
    record_export_duration,
    record_export_failure,
    record_export_success,
)
from menu_render_service.rendering.bitmap_exporter import render_bitmap
from menu_render_service.rendering.document_exporter import (
    DEFAULT_PRINT_SETTLE_DELAY_MS,
    render_document,
    render_print_document,
)

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "menu"

HTML_MEDIA_TYPE = "text/html; charset=utf-8"
PNG_MEDIA_TYPE = "image/png"

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]+")

EXPORT_FAILED_MESSAGES = {
    ExportFormat.DOCUMENT: "Failed to export the menu as an HTML document",
    ExportFormat.BITMAP: "Failed to export the menu as an image",
    ExportFormat.HARDCOPY: "Failed to prepare the menu for printing",
}


@dataclass
class ExportResult:
    """Result of one export.

    Attributes:
        success: Whether the artifact was produced
        export_format: Requested export surface
        filename: Suggested filename for the artifact
        media_type: MIME type of ``content``
        content: Encoded artifact, empty on failure
        disposition: "attachment" for downloads, "inline" for the print surface
        error_message: Human-readable failure message, None on success
    """

    success: bool
    export_format: ExportFormat
    filename: str
    media_type: str
    content: bytes = b""
    disposition: str = "attachment"
    error_message: str | None = None

    @property
    def content_disposition(self) -> str:
        return content_disposition(self.disposition, self.filename)


def export_filename(project: MenuProject, extension: str) -> str:
    """``<project name>.<extension>``, falling back to "menu" for unnamed projects."""
    stem = project.name.strip() or DEFAULT_FILENAME
    return f"{stem}.{extension}"


def content_disposition(disposition: str, filename: str) -> str:
    """Build a Content-Disposition header value.

    Control characters are replaced with spaces so the value stays a single
    header line. Non-ASCII filenames get an ASCII fallback plus an RFC 5987
    ``filename*``.
    """
    filename = _CONTROL_CHARS.sub(" ", filename)
    try:
        filename.encode("ascii")
    except UnicodeEncodeError:
        fallback = filename.encode("ascii", "replace").decode("ascii").replace("?", "_")
        return f"{disposition}; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"
    escaped = filename.replace("\\", "\\\\").replace('"', '\\"')
    return f'{disposition}; filename="{escaped}"'


class ExportService:
    """Runs exports and converts failures into a single user-facing message.

    Exports never modify the project and are not retried.
    """

    def __init__(self, print_settle_delay_ms: int = DEFAULT_PRINT_SETTLE_DELAY_MS) -> None:
        """Initialize the ExportService.

        Args:
            print_settle_delay_ms: Delay before the print surface opens the print dialog
        """
        self.print_settle_delay_ms = print_settle_delay_ms

    def _render(
        self, project: MenuProject, show_currency_flag: bool, export_format: ExportFormat
    ) -> ExportResult:
        if export_format == ExportFormat.DOCUMENT:
            return ExportResult(
                success=True,
                export_format=export_format,
                filename=export_filename(project, "html"),
                media_type=HTML_MEDIA_TYPE,
                content=render_document(project, show_currency_flag).encode("utf-8"),
            )
        if export_format == ExportFormat.BITMAP:
            return ExportResult(
                success=True,
                export_format=export_format,
                filename=export_filename(project, "png"),
                media_type=PNG_MEDIA_TYPE,
                content=render_bitmap(project, show_currency_flag),
            )
        html = render_print_document(project, show_currency_flag, self.print_settle_delay_ms)
        return ExportResult(
            success=True,
            export_format=export_format,
            filename=export_filename(project, "html"),
            media_type=HTML_MEDIA_TYPE,
            content=html.encode("utf-8"),
            disposition="inline",
        )

    @traced("export_menu")
    async def export(
        self,
        project: MenuProject,
        show_currency_flag: bool,
        export_format: ExportFormat,
    ) -> ExportResult:
        """Export ``project`` to ``export_format``.

        Args:
            project: Menu project snapshot
            show_currency_flag: Whether prices carry the currency flag
            export_format: Target surface

        Returns:
            ExportResult; on failure ``success`` is False and ``error_message`` is set
        """
        start = time.perf_counter()
        try:
            result = await asyncio.to_thread(
                self._render, project, show_currency_flag, export_format
            )
        except Exception as e:
            logger.exception(f"Export of project {project.id} to {export_format.value} failed")
            record_export_failure(export_format.value, type(e).__name__)
            return ExportResult(
                success=False,
                export_format=export_format,
                filename="",
                media_type="",
                error_message=EXPORT_FAILED_MESSAGES[export_format],
            )
        finally:
            record_export_duration(export_format.value, time.perf_counter() - start)

        record_export_success(export_format.value)
        logger.info(
            f"Exported project {project.id} to {export_format.value} ({len(result.content)} bytes)"
        )
        return result
