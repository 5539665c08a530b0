"""
Shared configuration and constants.
"""

import dataclasses


POINTS_PER_INCH = 72.0
MAX_PHOTOS_PER_PAGE = 8
MAX_VISIT_PHOTOS = 4
ALLOWED_PHOTOS_PER_PAGE = (1, 2, 3, 4, 6, 8)
DEFAULT_PHOTOS_PER_PAGE = 8
HERO_WIDTH_RATIO = 0.6
# header may take at most this share of the space between margins
HEADER_MAX_SHARE = 0.5

DEFAULT_FORMAT = "wide"
DEFAULT_FONT_REGULAR = "Helvetica"
DEFAULT_FONT_SERIF = "Times-Roman"
DEFAULT_SLIDE_FONT_SERIF = "Times New Roman"
CUSTOM_FONT_NAME = "BookmanOldStyle"
CUSTOM_FONT_FACE = "Bookman Old Style"
DEFAULT_FONT_PATHS = (
	"fonts/bookman-old-style.ttf",
	"fonts/BOOKOS.TTF",
)
FOOTER_TEXT = "Submitted by : Global Digital Connect"

NO_PHOTOS_MESSAGE = "No photos for this visit"
NO_VISITS_MESSAGE = "No visits match the selected criteria."
IMAGE_LOAD_FAILED_TEXT = "[Image load failed]"
INVALID_IMAGE_TEXT = "[Invalid image size]"
CELL_TOO_SMALL_TEXT = "[Cell too small]"
IMAGE_ERROR_TEXT = "Image Error"
EMPTY_NOTES = "—"
HEADER_CLIPPED_MARK = " …"

BOX_GRAY = 180
CELL_GRAY = 200
FOOTER_GRAY = 100
PLACEHOLDER_GRAY = 136
PLACEHOLDER_FONT_SIZE = 10.0

EMBED_MAX_WIDTH = 800
EMBED_MAX_HEIGHT = 600
PDF_JPEG_QUALITY = 65
SLIDE_JPEG_QUALITY = 85
LOADER_WORKERS = 4
PROGRESS_BAR_WIDTH = 20


@dataclasses.dataclass(frozen=True)
class PageFormat:
	name: str
	target: str
	units: str
	width: float
	height: float
	margin: float
	header_pad: float
	header_gap: float
	line_height: float
	font_size: float
	body_pad: float
	gap: float
	inset: float
	box_radius: float
	cell_radius: float
	footer_font_size: float
	footer_right_pad: float
	footer_bottom_offset: float
	footer_height: float
	footer_reserve: float

	@property
	def content_width(self) -> float:
		return self.width - self.margin * 2.0

	@property
	def extension(self) -> str:
		if self.target == "pptx":
			return "pptx"
		return "pdf"


@dataclasses.dataclass
class ReportConfig:
	format_name: str
	photos_per_page: int
	footer_text: str
	font_paths: tuple[str, ...]
	loader_workers: int
	embed_max_width: int
	embed_max_height: int
	jpeg_quality: int
	verbose: bool


@dataclasses.dataclass
class ReportResult:
	data: bytes
	pages: int
	placed_photos: int
	failed_photos: int
	cells_per_page: list[int]
	failures: list[dict[str, str]]
	format_name: str
	footer_font: str
	clipped_headers: list[int] = dataclasses.field(default_factory=list)


#============================================
def inches_to_points(value: float) -> float:
	"""
	Convert inches to points.

	Args:
		value: Inches value.

	Returns:
		Points value.
	"""
	return value * POINTS_PER_INCH


def _document_format(name: str, width: float, height: float) -> PageFormat:
	return PageFormat(
		name=name,
		target="pdf",
		units="pt",
		width=width,
		height=height,
		margin=24.0,
		header_pad=8.0,
		header_gap=10.0,
		line_height=16.0,
		font_size=12.0,
		body_pad=10.0,
		gap=10.0,
		inset=8.0,
		box_radius=8.0,
		cell_radius=6.0,
		footer_font_size=10.0,
		footer_right_pad=5.0,
		footer_bottom_offset=8.0,
		footer_height=12.0,
		footer_reserve=0.0,
	)


PAGE_FORMATS = {
	"wide": _document_format("wide", 960.0, 540.0),
	"standard": _document_format("standard", 960.0, 720.0),
	# reportlab landscape(A4)
	"a4": _document_format("a4", 841.8897637795277, 595.2755905511812),
	"slide": PageFormat(
		name="slide",
		target="pptx",
		units="in",
		width=13.333,
		height=7.5,
		margin=0.33,
		header_pad=0.12,
		header_gap=0.15,
		line_height=0.25,
		font_size=12.0,
		body_pad=0.12,
		gap=0.15,
		inset=0.1,
		box_radius=0.15,
		cell_radius=0.12,
		footer_font_size=11.0,
		footer_right_pad=0.0,
		footer_bottom_offset=0.05,
		footer_height=0.3,
		footer_reserve=0.3,
	),
}

FORMAT_LABELS = {
	"wide": "16x9",
	"standard": "4x3",
	"a4": "A4",
	"slide": "slides",
}


#============================================
def get_page_format(name: str) -> PageFormat:
	"""
	Look up a page format by name.

	Args:
		name: Format name (wide, standard, a4, slide).

	Returns:
		PageFormat.
	"""
	key = name.strip().lower()
	if key not in PAGE_FORMATS:
		known = ", ".join(sorted(PAGE_FORMATS))
		raise ValueError(f"Unknown page format {name!r}; expected one of: {known}")
	return PAGE_FORMATS[key]


#============================================
def default_config(format_name: str = DEFAULT_FORMAT) -> ReportConfig:
	"""
	Build a ReportConfig with default values for a format.

	Args:
		format_name: Page format name.

	Returns:
		ReportConfig.
	"""
	page_format = get_page_format(format_name)
	jpeg_quality = PDF_JPEG_QUALITY
	if page_format.target == "pptx":
		jpeg_quality = SLIDE_JPEG_QUALITY
	return ReportConfig(
		format_name=page_format.name,
		photos_per_page=DEFAULT_PHOTOS_PER_PAGE,
		footer_text=FOOTER_TEXT,
		font_paths=DEFAULT_FONT_PATHS,
		loader_workers=LOADER_WORKERS,
		embed_max_width=EMBED_MAX_WIDTH,
		embed_max_height=EMBED_MAX_HEIGHT,
		jpeg_quality=jpeg_quality,
		verbose=False,
	)
