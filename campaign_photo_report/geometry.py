"""
Rectangle geometry, image fitting and photo grid layout.
"""

# Standard Library
import dataclasses

# local repo modules
import campaign_photo_report as cpr
import campaign_photo_report.config
import campaign_photo_report.errors


InvalidImageDimensions = cpr.errors.InvalidImageDimensions
UnsupportedPhotoCount = cpr.errors.UnsupportedPhotoCount

HERO_WIDTH_RATIO = cpr.config.HERO_WIDTH_RATIO
MAX_PHOTOS_PER_PAGE = cpr.config.MAX_PHOTOS_PER_PAGE

# cells per row, top to bottom; 3 photos use the hero layout instead
ROW_LAYOUTS = {
	1: (1,),
	2: (2,),
	4: (2, 2),
	5: (3, 2),
	6: (3, 3),
	7: (4, 3),
	8: (4, 4),
}


@dataclasses.dataclass(frozen=True)
class Rect:
	x: float
	y: float
	width: float
	height: float

	@property
	def right(self) -> float:
		return self.x + self.width

	@property
	def bottom(self) -> float:
		return self.y + self.height

	def shrink(self, amount: float) -> "Rect":
		return Rect(
			self.x + amount,
			self.y + amount,
			self.width - amount * 2.0,
			self.height - amount * 2.0,
		)

	def as_box(self) -> tuple[float, float, float, float]:
		return (self.x, self.y, self.right, self.bottom)


#============================================
def boxes_intersect(
	box_a: tuple[float, float, float, float],
	box_b: tuple[float, float, float, float],
) -> bool:
	"""
	Check whether two bounding boxes overlap with positive area.

	Args:
		box_a: Box (x0, y0, x1, y1).
		box_b: Box (x0, y0, x1, y1).

	Returns:
		True if the boxes overlap.
	"""
	left = max(box_a[0], box_b[0])
	right = min(box_a[2], box_b[2])
	top = max(box_a[1], box_b[1])
	bottom = min(box_a[3], box_b[3])
	return right > left and bottom > top


#============================================
def rect_contains(outer: Rect, inner: Rect, epsilon: float = 1e-9) -> bool:
	"""
	Check that one rectangle lies entirely inside another.

	Args:
		outer: Containing rectangle.
		inner: Candidate rectangle.
		epsilon: Tolerance for float rounding.

	Returns:
		True if inner is within outer.
	"""
	return (
		inner.x >= outer.x - epsilon
		and inner.y >= outer.y - epsilon
		and inner.right <= outer.right + epsilon
		and inner.bottom <= outer.bottom + epsilon
	)


#============================================
def fit_image(
	intrinsic_width: float,
	intrinsic_height: float,
	max_width: float,
	max_height: float,
) -> tuple[float, float]:
	"""
	Compute the largest size with the image aspect ratio inside a box.

	Args:
		intrinsic_width: Image width in pixels.
		intrinsic_height: Image height in pixels.
		max_width: Available width.
		max_height: Available height.

	Returns:
		Tuple of (width, height). One side equals its limit.
	"""
	if intrinsic_width <= 0 or intrinsic_height <= 0:
		raise InvalidImageDimensions(intrinsic_width, intrinsic_height)
	if max_width <= 0 or max_height <= 0:
		raise ValueError(f"Fit box must be positive, got {max_width}x{max_height}")
	scale_width = max_width / intrinsic_width
	scale_height = max_height / intrinsic_height
	if scale_width <= scale_height:
		# width is the binding side
		return (max_width, intrinsic_height * scale_width)
	return (intrinsic_width * scale_height, max_height)


#============================================
def place_image(
	intrinsic_width: float,
	intrinsic_height: float,
	cell: Rect,
	inset: float,
) -> Rect:
	"""
	Center a fitted image inside a cell after removing the inset.

	Args:
		intrinsic_width: Image width in pixels.
		intrinsic_height: Image height in pixels.
		cell: Cell rectangle.
		inset: Padding between the cell border and the image.

	Returns:
		Image placement rectangle.
	"""
	available_width = cell.width - inset * 2.0
	available_height = cell.height - inset * 2.0
	fit_width, fit_height = fit_image(
		intrinsic_width,
		intrinsic_height,
		available_width,
		available_height,
	)
	offset_x = inset + (available_width - fit_width) / 2.0
	offset_y = inset + (available_height - fit_height) / 2.0
	return Rect(cell.x + offset_x, cell.y + offset_y, fit_width, fit_height)


#============================================
def split_span(start: float, span: float, count: int, gap: float) -> list[tuple[float, float]]:
	"""
	Split a span into equal parts separated by a gap.

	Args:
		start: Span start coordinate.
		span: Span length.
		count: Number of parts.
		gap: Space between neighbouring parts.

	Returns:
		List of (offset, length) pairs.
	"""
	size = (span - gap * (count - 1)) / count
	return [(start + index * (size + gap), size) for index in range(count)]


#============================================
def resolve_hero_layout(body: Rect, gap: float) -> list[Rect]:
	"""
	Lay out three photos: a large left cell and two stacked right cells.
	"""
	left_width = (body.width - gap) * HERO_WIDTH_RATIO
	right_width = body.width - gap - left_width
	right_x = body.x + left_width + gap
	halves = split_span(body.y, body.height, 2, gap)
	cells = [Rect(body.x, body.y, left_width, body.height)]
	for row_y, row_height in halves:
		cells.append(Rect(right_x, row_y, right_width, row_height))
	return cells


#============================================
def resolve_grid(photo_count: int, body: Rect, gap: float) -> list[Rect]:
	"""
	Compute the cell rectangles for a page holding a number of photos.

	Layouts are fixed per count rather than derived from a formula:
	3 photos get a hero column, 5 and 7 photos use uneven rows
	(3 over 2, 4 over 3), the rest are regular grids. Gaps separate
	siblings only; cells touch the outer edges of the body.

	Args:
		photo_count: Number of photos, 0 to 8. Callers cap longer lists.
		body: Body rectangle available for cells.
		gap: Space between neighbouring cells.

	Returns:
		Cell rectangles in reading order; empty for zero photos.
	"""
	if photo_count < 0 or photo_count > MAX_PHOTOS_PER_PAGE:
		raise UnsupportedPhotoCount(photo_count)
	if photo_count == 0:
		return []
	if photo_count == 3:
		return resolve_hero_layout(body, gap)

	row_counts = ROW_LAYOUTS[photo_count]
	rows = split_span(body.y, body.height, len(row_counts), gap)
	cells: list[Rect] = []
	for (row_y, row_height), columns in zip(rows, row_counts):
		for cell_x, cell_width in split_span(body.x, body.width, columns, gap):
			cells.append(Rect(cell_x, row_y, cell_width, row_height))
	return cells
