"""
Error types raised by the report layout engine.
"""


class ReportLayoutError(Exception):
	"""
	Base class for report layout errors.
	"""


class InvalidImageDimensions(ReportLayoutError, ValueError):
	"""
	A photo reported a non-positive intrinsic width or height.
	"""

	def __init__(self, width: float, height: float) -> None:
		super().__init__(f"Invalid image dimensions {width}x{height}")
		self.width = width
		self.height = height


class ImageLoadFailed(ReportLayoutError):
	"""
	A photo could not be fetched or decoded.
	"""

	def __init__(self, locator: str, reason: str) -> None:
		super().__init__(f"Failed to load image {locator}: {reason}")
		self.locator = locator
		self.reason = reason


class NoPhotosSelected(ReportLayoutError):
	"""
	A folder report was requested with zero photos.
	"""


class UnsupportedPhotoCount(ReportLayoutError, ValueError):
	"""
	The grid resolver was asked for more photos than a page can hold.
	"""

	def __init__(self, count: int) -> None:
		super().__init__(f"Unsupported photo count {count}; pages hold 0 to 8 photos")
		self.count = count


class ReportCancelled(ReportLayoutError):
	"""
	The report job was cancelled before completion.
	"""
