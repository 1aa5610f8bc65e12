class ExportStrategy:
    """
    Interface for result exporters.

    A strategy only renders bytes; ExportManager owns the filesystem.
    """

    def generate_export(self, result) -> list[tuple[str, bytes]]:
        """Return a list[(filename, bytes)] for this export."""
        raise NotImplementedError()
