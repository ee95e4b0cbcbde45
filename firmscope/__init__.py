"""FirmScope: website content extraction and firm-size classification."""

__version__ = "0.1.0"
