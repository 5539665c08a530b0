"""
Turn layout plans into draw calls, and the PDF drawing backend.
"""

# Standard Library
import io
import typing

# PIP3 modules
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import campaign_photo_report as cpr
import campaign_photo_report.compose
import campaign_photo_report.config
import campaign_photo_report.geometry
import campaign_photo_report.images


Rect = cpr.geometry.Rect
PageFormat = cpr.config.PageFormat
ReportConfig = cpr.config.ReportConfig
StyleContext = cpr.compose.StyleContext
LayoutPlan = cpr.compose.LayoutPlan
CellPlan = cpr.compose.CellPlan
TextRun = cpr.compose.TextRun
OpenerFunc = cpr.images.OpenerFunc

IMAGE_ERROR_TEXT = cpr.config.IMAGE_ERROR_TEXT
DECODE_ERRORS = cpr.images.DECODE_ERRORS


class DrawingSink(typing.Protocol):
	def start_page(self, plan: LayoutPlan) -> None: ...

	def draw_rect(self, rect: Rect, role: str) -> None: ...

	def draw_text(self, run: TextRun) -> None: ...

	def draw_image(self, cell: CellPlan) -> bool: ...

	def end_page(self) -> None: ...

	def finish(self) -> bytes: ...


#============================================
def emit_plan(sink: DrawingSink, plan: LayoutPlan) -> list[CellPlan]:
	"""
	Send one page's draw operations to a sink, in painting order.

	Args:
		sink: Drawing backend.
		plan: Page layout.

	Returns:
		Cells whose photo the sink could not embed.
	"""
	unembedded: list[CellPlan] = []
	sink.start_page(plan)
	sink.draw_rect(plan.header_rect, "header")
	for run in plan.header_lines:
		sink.draw_text(run)
	sink.draw_rect(plan.body_outer_rect, "body")
	for cell in plan.cells:
		sink.draw_rect(cell.cell_rect, "cell")
		if cell.image_placement is not None:
			if not sink.draw_image(cell):
				unembedded.append(cell)
		elif cell.placeholder_text:
			sink.draw_text(TextRun(cell.placeholder_text, cell.cell_rect, "CENTER", "placeholder"))
	if plan.placeholder is not None:
		sink.draw_text(plan.placeholder)
	sink.draw_text(plan.footer)
	sink.end_page()
	return unembedded


#============================================
def gray_to_rgb(value: int) -> tuple[float, float, float]:
	level = value / 255.0
	return (level, level, level)


class PdfSink:
	"""
	Draws layout plans onto a ReportLab canvas held in memory.
	"""

	def __init__(
		self,
		page_format: PageFormat,
		style: StyleContext,
		config: ReportConfig,
		opener: OpenerFunc = cpr.images.open_photo,
	) -> None:
		self.page_format = page_format
		self.opener = opener
		self.style = style
		self.config = config
		self.buffer = io.BytesIO()
		self.pdf = reportlab.pdfgen.canvas.Canvas(
			self.buffer,
			pagesize=(page_format.width, page_format.height),
		)
		self.page_height = page_format.height

	def _pdf_y(self, rect: Rect) -> float:
		# plans use a top-left origin
		return self.page_height - rect.y - rect.height

	def start_page(self, plan: LayoutPlan) -> None:
		self.page_height = plan.page_height
		self.pdf.setPageSize((plan.page_width, plan.page_height))

	def draw_rect(self, rect: Rect, role: str) -> None:
		if role == "cell":
			gray = self.style.cell_gray
			radius = self.page_format.cell_radius
		else:
			gray = self.style.box_gray
			radius = self.page_format.box_radius
		red, green, blue = gray_to_rgb(gray)
		self.pdf.setStrokeColorRGB(red, green, blue)
		self.pdf.setLineWidth(1.0)
		self.pdf.roundRect(rect.x, self._pdf_y(rect), rect.width, rect.height, radius, stroke=1, fill=0)

	def _text_style(self, role: str) -> tuple[str, float, int]:
		if role == "footer":
			return (self.style.footer_font, self.page_format.footer_font_size, self.style.footer_gray)
		if role == "placeholder":
			return (self.style.header_font, self.style.placeholder_font_size, self.style.placeholder_gray)
		return (self.style.header_font, self.page_format.font_size, 0)

	def draw_text(self, run: TextRun) -> None:
		font_name, font_size, gray = self._text_style(run.role)
		self.pdf.setFont(font_name, font_size)
		red, green, blue = gray_to_rgb(gray)
		self.pdf.setFillColorRGB(red, green, blue)

		rect = run.rect
		if run.role == "footer":
			baseline = self._pdf_y(rect)
		else:
			# vertically centre a single line in its box
			baseline = self._pdf_y(rect) + (rect.height - font_size * 0.7) / 2.0
		if run.align == "RIGHT":
			self.pdf.drawRightString(rect.right, baseline, run.text)
		elif run.align == "CENTER":
			self.pdf.drawCentredString(rect.x + rect.width / 2.0, baseline, run.text)
		else:
			self.pdf.drawString(rect.x, baseline, run.text)

	def draw_image(self, cell: CellPlan) -> bool:
		placement = cell.image_placement
		try:
			image = self.opener(
				cell.locator,
				self.config.embed_max_width,
				self.config.embed_max_height,
			)
			image_reader = reportlab.lib.utils.ImageReader(
				cpr.images.encode_jpeg(image, self.config.jpeg_quality)
			)
		except DECODE_ERRORS:
			self.draw_text(TextRun(IMAGE_ERROR_TEXT, cell.cell_rect, "CENTER", "placeholder"))
			return False
		self.pdf.drawImage(
			image_reader,
			placement.x,
			self._pdf_y(placement),
			width=placement.width,
			height=placement.height,
			mask=None,
			preserveAspectRatio=False,
			anchor="sw",
		)
		return True

	def end_page(self) -> None:
		self.pdf.showPage()

	def finish(self) -> bytes:
		self.pdf.save()
		return self.buffer.getvalue()
