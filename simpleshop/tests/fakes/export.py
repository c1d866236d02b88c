"""Fake ExportSinkPort implementation for testing."""

from simpleshop.core.ports import ExportSinkPort


class FakeExportSink(ExportSinkPort):
    """Captures downloaded files in memory."""

    def __init__(self, should_fail: bool = False):
        self.should_fail = should_fail
        self.files: dict[str, str] = {}

    async def save(self, filename: str, content: str) -> str:
        if self.should_fail:
            raise OSError("Disk full")
        self.files[filename] = content
        return f"memory://{filename}"
