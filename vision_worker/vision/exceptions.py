class VisionAnalysisError(Exception):
    """Raised when the vision service rejects or cannot answer a detection request."""


class VisionNetworkError(VisionAnalysisError):
    """Raised when the vision call fails due to network/infrastructure issues."""
