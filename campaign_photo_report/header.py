"""
Header block text wrapping and sizing.
"""

# Standard Library
import collections.abc
import dataclasses

# PIP3 modules
import reportlab.pdfbase.pdfmetrics

# local repo modules
import campaign_photo_report as cpr
import campaign_photo_report.config


PageFormat = cpr.config.PageFormat

MeasureFunc = collections.abc.Callable[[str], float]


@dataclasses.dataclass
class HeaderBlock:
	wrapped_lines: list[list[str]]
	total_height: float

	@property
	def flat_lines(self) -> list[str]:
		return [line for group in self.wrapped_lines for line in group]


#============================================
def build_measure(page_format: PageFormat, font_name: str, font_size: float) -> MeasureFunc:
	"""
	Build a text width function in the page's units.

	Args:
		page_format: Target page format.
		font_name: Registered ReportLab font name.
		font_size: Font size in points.

	Returns:
		Callable mapping text to its rendered width.
	"""
	divisor = 1.0
	if page_format.units == "in":
		divisor = cpr.config.inches_to_points(1.0)

	def measure(text: str) -> float:
		width = reportlab.pdfbase.pdfmetrics.stringWidth(text, font_name, font_size)
		return width / divisor

	return measure


#============================================
def wrap_text(text: str, max_width: float, measure: MeasureFunc) -> list[str]:
	"""
	Greedy word wrap that never splits a word.

	Args:
		text: Input text.
		max_width: Maximum line width.
		measure: Text width function.

	Returns:
		Wrapped lines. An empty input still yields one empty line, and a
		word wider than max_width sits alone on its line.
	"""
	words = text.split()
	if not words:
		return [""]
	lines: list[str] = []
	current = words[0]
	for word in words[1:]:
		candidate = f"{current} {word}"
		if measure(candidate) <= max_width:
			current = candidate
			continue
		lines.append(current)
		current = word
	lines.append(current)
	return lines


#============================================
def compose_header(
	lines: collections.abc.Sequence[str],
	max_width: float,
	line_height: float,
	padding: float,
	measure: MeasureFunc,
) -> HeaderBlock:
	"""
	Wrap header lines and compute the header box height.

	Args:
		lines: Header text lines, each wrapped independently.
		max_width: Maximum text width inside the box.
		line_height: Height of one wrapped line.
		padding: Padding above and below the text.
		measure: Text width function.

	Returns:
		HeaderBlock with wrapped lines and total height.
	"""
	wrapped = [wrap_text(line, max_width, measure) for line in lines]
	line_count = sum(len(group) for group in wrapped)
	total_height = padding * 2.0 + line_count * line_height
	return HeaderBlock(wrapped_lines=wrapped, total_height=total_height)
