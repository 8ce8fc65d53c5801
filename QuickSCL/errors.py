"""Error handling for QuickSCL.

The compiler itself never raises on source text; problems are recorded as
warnings in a DiagnosticCollector. Exceptions are reserved for the layout
engine, the exporter and persisted diagram loading.
"""


class SCLError(Exception):
    """Base exception for QuickSCL errors.

    Attributes:
        message: Error description
        line_number: Optional line number where error occurred (1-indexed)
    """

    def __init__(self, message: str, line_number: int = None):
        self.message = message
        self.line_number = line_number
        super().__init__(self._format_message())

    def _format_message(self):
        """Format error message with line number if available."""
        if self.line_number is not None:
            return f"Line {self.line_number}: {self.message}"
        return self.message


class SCLWarning(SCLError):
    """A source line that was ignored or degraded during compilation."""
    pass


class LayoutError(SCLError):
    """Layout engine failure or missing anchor for a submitted node."""
    pass


class DiagramFormatError(SCLError):
    """Persisted diagram payload cannot be reloaded."""
    pass


class ExportError(SCLError):
    """Invalid exporter configuration."""
    pass


class DiagnosticCollector:
    """Collects warnings during compilation for later reporting.

    Compilation is lenient: every dropped or overwritten line is recorded
    here instead of failing the parse.
    """

    def __init__(self):
        self.warnings = []

    def add(self, warning: SCLWarning):
        """Add a warning to the collection.

        Args:
            warning: SCLWarning instance to add
        """
        self.warnings.append(warning)

    def warn(self, message: str, line_number: int = None):
        """Record a warning built from a message and line number."""
        self.add(SCLWarning(message, line_number))

    def has_warnings(self):
        """Return True if any warnings have been collected."""
        return len(self.warnings) > 0

    def sorted_warnings(self):
        """Return warnings sorted by line number (None values sort to end)."""
        return sorted(
            self.warnings,
            key=lambda w: (w.line_number is None, w.line_number or 0)
        )

    def format(self):
        """Format all warnings as a numbered report."""
        lines = ["SCL compilation produced the following warnings:\n"]
        for i, warning in enumerate(self.sorted_warnings(), 1):
            lines.append(f"  {i}. {warning}")
        return "\n".join(lines)

    def raise_if_any(self):
        """Raise a combined exception if any warnings exist.

        Raises:
            SCLError: If any warnings have been collected
        """
        if not self.has_warnings():
            return
        raise SCLError(self.format())
