"""Export service: implements ExportPort.

Both exports carry the same pretty-printed JSON text. Neither touches
cart or session state, and neither raises on delivery failure: the
outcome comes back as an ExportResult for the user.
"""

import logging

from .models import ExportResult
from .ports import CartPort, ClipboardPort, ExportPort, ExportSinkPort

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "cart.json"
EXPORT_INDENT = 2

COPY_SUCCESS_MESSAGE = "Cart copied to clipboard!"
COPY_FAILURE_MESSAGE = (
    "Could not copy. Please allow clipboard permission or try manually."
)


class CartExportService(ExportPort):
    """Core implementation of ExportPort."""

    def __init__(
        self,
        cart: CartPort,
        sink: ExportSinkPort,
        clipboard: ClipboardPort,
    ):
        """Initialize the export service.

        Args:
            cart: CartPort whose contents are exported.
            sink: ExportSinkPort receiving the cart.json download.
            clipboard: ClipboardPort receiving the copied text.
        """
        self.cart = cart
        self.sink = sink
        self.clipboard = clipboard

    def render(self) -> str:
        return self.cart.serialize(indent=EXPORT_INDENT)

    async def download(self) -> ExportResult:
        try:
            location = await self.sink.save(EXPORT_FILENAME, self.render())
        except OSError as e:
            logger.error(f"Failed to save {EXPORT_FILENAME}: {e}", exc_info=True)
            return ExportResult(success=False, message=f"Could not save cart: {e}")

        logger.info(f"Cart saved to {location}", extra={"location": location})
        return ExportResult(success=True, message=f"Cart saved to {location}", location=location)

    async def copy(self) -> ExportResult:
        try:
            await self.clipboard.write_text(self.render())
        except Exception as e:
            logger.warning(f"Clipboard write failed: {e}")
            return ExportResult(success=False, message=COPY_FAILURE_MESSAGE)

        logger.info("Cart copied to clipboard")
        return ExportResult(success=True, message=COPY_SUCCESS_MESSAGE)
