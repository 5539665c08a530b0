"""
Slide deck drawing backend built on python-pptx.
"""

# Standard Library
import io

# PIP3 modules
import pptx
import pptx.dml.color
import pptx.enum.shapes
import pptx.enum.text
import pptx.util

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
BLANK_LAYOUT_INDEX = 6

ALIGNMENTS = {
	"LEFT": pptx.enum.text.PP_ALIGN.LEFT,
	"RIGHT": pptx.enum.text.PP_ALIGN.RIGHT,
	"CENTER": pptx.enum.text.PP_ALIGN.CENTER,
}


#============================================
def gray_color(value: int) -> pptx.dml.color.RGBColor:
	return pptx.dml.color.RGBColor(value, value, value)


class SlideSink:
	"""
	Draws layout plans as slides; plan units are inches.
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
		self.presentation = pptx.Presentation()
		self.presentation.slide_width = pptx.util.Inches(page_format.width)
		self.presentation.slide_height = pptx.util.Inches(page_format.height)
		self.slide = None

	def start_page(self, plan: LayoutPlan) -> None:
		layout = self.presentation.slide_layouts[BLANK_LAYOUT_INDEX]
		self.slide = self.presentation.slides.add_slide(layout)

	def draw_rect(self, rect: Rect, role: str) -> None:
		if role == "cell":
			gray = self.style.cell_gray
			radius = self.page_format.cell_radius
		else:
			gray = self.style.box_gray
			radius = self.page_format.box_radius
		shape = self.slide.shapes.add_shape(
			pptx.enum.shapes.MSO_SHAPE.ROUNDED_RECTANGLE,
			pptx.util.Inches(rect.x),
			pptx.util.Inches(rect.y),
			pptx.util.Inches(rect.width),
			pptx.util.Inches(rect.height),
		)
		shortest = min(rect.width, rect.height)
		if shortest > 0:
			shape.adjustments[0] = min(0.5, radius / shortest)
		shape.fill.background()
		shape.line.color.rgb = gray_color(gray)
		shape.line.width = pptx.util.Pt(1)
		shape.shadow.inherit = False

	def draw_text(self, run: TextRun) -> None:
		rect = run.rect
		box = self.slide.shapes.add_textbox(
			pptx.util.Inches(rect.x),
			pptx.util.Inches(rect.y),
			pptx.util.Inches(rect.width),
			pptx.util.Inches(rect.height),
		)
		frame = box.text_frame
		frame.word_wrap = False
		frame.margin_left = 0
		frame.margin_right = 0
		frame.margin_top = 0
		frame.margin_bottom = 0
		frame.vertical_anchor = pptx.enum.text.MSO_ANCHOR.MIDDLE
		paragraph = frame.paragraphs[0]
		paragraph.alignment = ALIGNMENTS.get(run.align, pptx.enum.text.PP_ALIGN.LEFT)
		text_run = paragraph.add_run()
		text_run.text = run.text
		font = text_run.font
		if run.role == "footer":
			font.name = self.style.footer_font_face
			font.size = pptx.util.Pt(self.page_format.footer_font_size)
			font.color.rgb = gray_color(self.style.footer_gray)
		elif run.role == "placeholder":
			font.size = pptx.util.Pt(self.style.placeholder_font_size)
			font.color.rgb = gray_color(self.style.placeholder_gray)
		else:
			font.size = pptx.util.Pt(self.page_format.font_size)
			font.color.rgb = gray_color(0)

	def draw_image(self, cell: CellPlan) -> bool:
		placement = cell.image_placement
		try:
			image = self.opener(
				cell.locator,
				self.config.embed_max_width,
				self.config.embed_max_height,
			)
			stream = cpr.images.encode_jpeg(image, self.config.jpeg_quality)
		except DECODE_ERRORS:
			self.draw_text(TextRun(IMAGE_ERROR_TEXT, cell.cell_rect, "CENTER", "placeholder"))
			return False
		self.slide.shapes.add_picture(
			stream,
			pptx.util.Inches(placement.x),
			pptx.util.Inches(placement.y),
			width=pptx.util.Inches(placement.width),
			height=pptx.util.Inches(placement.height),
		)
		return True

	def end_page(self) -> None:
		self.slide = None

	def finish(self) -> bytes:
		buffer = io.BytesIO()
		self.presentation.save(buffer)
		return buffer.getvalue()
