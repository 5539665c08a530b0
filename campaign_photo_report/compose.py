"""
Page composition: header, photo grid and footer geometry for each page.
"""

# Standard Library
import dataclasses
import math
import os

# PIP3 modules
import reportlab.pdfbase.pdfmetrics
import reportlab.pdfbase.ttfonts

# local repo modules
import campaign_photo_report as cpr
import campaign_photo_report.config
import campaign_photo_report.errors
import campaign_photo_report.geometry
import campaign_photo_report.header
import campaign_photo_report.images


Rect = cpr.geometry.Rect
PageFormat = cpr.config.PageFormat
ReportConfig = cpr.config.ReportConfig
PhotoSlot = cpr.images.PhotoSlot
InvalidImageDimensions = cpr.errors.InvalidImageDimensions

DEFAULT_FONT_REGULAR = cpr.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_SERIF = cpr.config.DEFAULT_FONT_SERIF
DEFAULT_SLIDE_FONT_SERIF = cpr.config.DEFAULT_SLIDE_FONT_SERIF
CUSTOM_FONT_NAME = cpr.config.CUSTOM_FONT_NAME
CUSTOM_FONT_FACE = cpr.config.CUSTOM_FONT_FACE
NO_PHOTOS_MESSAGE = cpr.config.NO_PHOTOS_MESSAGE
IMAGE_LOAD_FAILED_TEXT = cpr.config.IMAGE_LOAD_FAILED_TEXT
INVALID_IMAGE_TEXT = cpr.config.INVALID_IMAGE_TEXT
CELL_TOO_SMALL_TEXT = cpr.config.CELL_TOO_SMALL_TEXT
HEADER_CLIPPED_MARK = cpr.config.HEADER_CLIPPED_MARK
HEADER_MAX_SHARE = cpr.config.HEADER_MAX_SHARE

STATE_AWAITING_RECORD = "AWAITING_RECORD"
STATE_RENDERING_HEADER = "RENDERING_HEADER"
STATE_RENDERING_BODY = "RENDERING_BODY"
STATE_RENDERING_FOOTER = "RENDERING_FOOTER"
STATE_PAGE_COMPLETE = "PAGE_COMPLETE"
STATE_ALL_PAGES_COMPLETE = "ALL_PAGES_COMPLETE"


@dataclasses.dataclass(frozen=True)
class StyleContext:
	header_font: str
	footer_font: str
	footer_font_face: str
	footer_text: str
	box_gray: int
	cell_gray: int
	footer_gray: int
	placeholder_gray: int
	placeholder_font_size: float
	custom_font_loaded: bool


@dataclasses.dataclass(frozen=True)
class TextRun:
	text: str
	rect: Rect
	align: str
	role: str


@dataclasses.dataclass(frozen=True)
class CellPlan:
	cell_rect: Rect
	image_placement: Rect | None
	locator: str | None
	placeholder_text: str | None = None


@dataclasses.dataclass(frozen=True)
class LayoutPlan:
	page_index: int
	format_name: str
	page_width: float
	page_height: float
	header_rect: Rect
	header_lines: tuple[TextRun, ...]
	body_outer_rect: Rect
	cells: tuple[CellPlan, ...]
	footer: TextRun
	placeholder: TextRun | None = None
	clipped_header_lines: int = 0

	@property
	def placed_count(self) -> int:
		return sum(1 for cell in self.cells if cell.image_placement is not None)

	@property
	def failed_cells(self) -> list[CellPlan]:
		return [cell for cell in self.cells if cell.image_placement is None]


@dataclasses.dataclass
class PageContent:
	header_lines: list[str]
	slots: list[PhotoSlot]
	empty_message: str = NO_PHOTOS_MESSAGE


#============================================
def _try_register_font(path: str) -> bool:
	if not os.path.isfile(path):
		return False
	try:
		font = reportlab.pdfbase.ttfonts.TTFont(CUSTOM_FONT_NAME, path)
	except (OSError, reportlab.pdfbase.ttfonts.TTFError):
		return False
	reportlab.pdfbase.pdfmetrics.registerFont(font)
	return True


#============================================
def _font_available(font_name: str) -> bool:
	try:
		reportlab.pdfbase.pdfmetrics.getFont(font_name)
	except KeyError:
		return False
	return True


#============================================
def resolve_style(config: ReportConfig) -> StyleContext:
	"""
	Resolve fonts and colours once for a report job.

	The footer font falls back from the first loadable custom TTF to the
	serif standard font and then to the default font.

	Args:
		config: Report configuration.

	Returns:
		StyleContext.
	"""
	footer_font = DEFAULT_FONT_REGULAR
	footer_face = DEFAULT_SLIDE_FONT_SERIF
	custom_loaded = False
	for path in config.font_paths:
		if _try_register_font(path):
			footer_font = CUSTOM_FONT_NAME
			footer_face = CUSTOM_FONT_FACE
			custom_loaded = True
			break
	if not custom_loaded and _font_available(DEFAULT_FONT_SERIF):
		footer_font = DEFAULT_FONT_SERIF
	return StyleContext(
		header_font=DEFAULT_FONT_REGULAR,
		footer_font=footer_font,
		footer_font_face=footer_face,
		footer_text=config.footer_text,
		box_gray=cpr.config.BOX_GRAY,
		cell_gray=cpr.config.CELL_GRAY,
		footer_gray=cpr.config.FOOTER_GRAY,
		placeholder_gray=cpr.config.PLACEHOLDER_GRAY,
		placeholder_font_size=cpr.config.PLACEHOLDER_FONT_SIZE,
		custom_font_loaded=custom_loaded,
	)


#============================================
def plan_cell(slot: PhotoSlot, cell_rect: Rect, inset: float) -> CellPlan:
	"""
	Place one photo in its cell, or mark the cell as a placeholder.

	Args:
		slot: Loaded photo slot.
		cell_rect: Cell rectangle.
		inset: Padding between cell border and image.

	Returns:
		CellPlan.
	"""
	if slot.photo is None:
		return CellPlan(cell_rect, None, slot.locator, IMAGE_LOAD_FAILED_TEXT)
	if cell_rect.width <= inset * 2.0 or cell_rect.height <= inset * 2.0:
		return CellPlan(cell_rect, None, slot.locator, CELL_TOO_SMALL_TEXT)
	try:
		placement = cpr.geometry.place_image(
			slot.photo.intrinsic_width,
			slot.photo.intrinsic_height,
			cell_rect,
			inset,
		)
	except InvalidImageDimensions:
		return CellPlan(cell_rect, None, slot.locator, INVALID_IMAGE_TEXT)
	return CellPlan(cell_rect, placement, slot.locator)


class ReportComposer:
	"""
	Builds LayoutPlans page by page for one report job.

	Each page walks RENDERING_HEADER, RENDERING_BODY, RENDERING_FOOTER and
	PAGE_COMPLETE before returning to AWAITING_RECORD; finish() moves to
	ALL_PAGES_COMPLETE and no further pages are accepted.
	"""

	def __init__(self, page_format: PageFormat, style: StyleContext) -> None:
		self.page_format = page_format
		self.style = style
		self.measure = cpr.header.build_measure(
			page_format,
			style.header_font,
			page_format.font_size,
		)
		self.page_index = 0
		self.state = STATE_AWAITING_RECORD
		self.history = [STATE_AWAITING_RECORD]

	def _enter(self, state: str) -> None:
		self.state = state
		self.history.append(state)

	#============================================
	def max_header_lines(self) -> int:
		"""
		Number of wrapped header lines that still leave the body its share
		of the page.
		"""
		fmt = self.page_format
		usable = fmt.height - fmt.margin * 2.0 - fmt.footer_reserve - fmt.header_gap
		limit = usable * HEADER_MAX_SHARE - fmt.header_pad * 2.0
		return max(1, math.floor(limit / fmt.line_height + 1e-9))

	#============================================
	def compose_header(self, lines: list[str]) -> tuple[Rect, tuple[TextRun, ...], int]:
		"""
		Wrap the header lines and lay them out in the header box.

		Text beyond the header's share of the page is cut; the last kept
		line gets a clip mark.

		Args:
			lines: Header text lines.

		Returns:
			Tuple of (header rect, text runs, number of lines cut).
		"""
		fmt = self.page_format
		block = cpr.header.compose_header(
			lines,
			fmt.content_width - fmt.header_pad * 2.0,
			fmt.line_height,
			fmt.header_pad,
			self.measure,
		)
		kept = block.flat_lines
		height = block.total_height
		clipped = 0
		max_lines = self.max_header_lines()
		if len(kept) > max_lines:
			clipped = len(kept) - max_lines
			kept = kept[:max_lines]
			kept[-1] = kept[-1] + HEADER_CLIPPED_MARK
			height = fmt.header_pad * 2.0 + max_lines * fmt.line_height
		header_rect = Rect(fmt.margin, fmt.margin, fmt.content_width, height)
		runs = []
		for index, text in enumerate(kept):
			line_rect = Rect(
				fmt.margin + fmt.header_pad,
				fmt.margin + fmt.header_pad + index * fmt.line_height,
				fmt.content_width - fmt.header_pad * 2.0,
				fmt.line_height,
			)
			runs.append(TextRun(text, line_rect, "LEFT", "header"))
		return (header_rect, tuple(runs), clipped)

	#============================================
	def compose_body(self, header_rect: Rect, slots: list[PhotoSlot]) -> tuple[Rect, tuple[CellPlan, ...]]:
		fmt = self.page_format
		top = header_rect.bottom + fmt.header_gap
		bottom = fmt.height - fmt.margin - fmt.footer_reserve
		body_outer = Rect(fmt.margin, top, fmt.content_width, bottom - top)
		inner = body_outer.shrink(fmt.body_pad)
		cell_rects = cpr.geometry.resolve_grid(len(slots), inner, fmt.gap)
		cells = tuple(
			plan_cell(slot, cell_rect, fmt.inset)
			for slot, cell_rect in zip(slots, cell_rects)
		)
		return (body_outer, cells)

	#============================================
	def compose_footer(self) -> TextRun:
		fmt = self.page_format
		footer_rect = Rect(
			fmt.margin,
			fmt.height - fmt.footer_bottom_offset - fmt.footer_height,
			fmt.content_width - fmt.footer_right_pad,
			fmt.footer_height,
		)
		return TextRun(self.style.footer_text, footer_rect, "RIGHT", "footer")

	#============================================
	def compose_page(self, content: PageContent) -> LayoutPlan:
		"""
		Compose the geometry for one page.

		Args:
			content: Header lines and loaded photo slots (at most 8).

		Returns:
			LayoutPlan for the page.
		"""
		if self.state == STATE_ALL_PAGES_COMPLETE:
			raise RuntimeError("Report job already finished")
		self._enter(STATE_RENDERING_HEADER)
		header_rect, header_runs, clipped = self.compose_header(content.header_lines)

		self._enter(STATE_RENDERING_BODY)
		body_outer, cells = self.compose_body(header_rect, content.slots)
		placeholder = None
		if not cells:
			placeholder = TextRun(content.empty_message, body_outer, "CENTER", "placeholder")

		self._enter(STATE_RENDERING_FOOTER)
		footer = self.compose_footer()

		plan = LayoutPlan(
			page_index=self.page_index,
			format_name=self.page_format.name,
			page_width=self.page_format.width,
			page_height=self.page_format.height,
			header_rect=header_rect,
			header_lines=header_runs,
			body_outer_rect=body_outer,
			cells=cells,
			footer=footer,
			placeholder=placeholder,
			clipped_header_lines=clipped,
		)
		self._enter(STATE_PAGE_COMPLETE)
		self.page_index += 1
		self._enter(STATE_AWAITING_RECORD)
		return plan

	#============================================
	def finish(self) -> None:
		self._enter(STATE_ALL_PAGES_COMPLETE)

	#============================================
	def compose_all(self, contents: list[PageContent]) -> list[LayoutPlan]:
		plans = [self.compose_page(content) for content in contents]
		self.finish()
		return plans
