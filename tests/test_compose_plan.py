import itertools

import pytest

import campaign_photo_report.compose
import campaign_photo_report.config
import campaign_photo_report.errors
import campaign_photo_report.geometry
import campaign_photo_report.images
import campaign_photo_report.records


PhotoRef = campaign_photo_report.records.PhotoRef
PageContent = campaign_photo_report.compose.PageContent
EPSILON = 1e-6

FAKE_SIZES = {
	"four_three.jpg": (1600, 1200),
	"square.jpg": (900, 900),
	"sixteen_nine.jpg": (1920, 1080),
	"portrait.jpg": (1080, 1920),
	"zero.jpg": (0, 0),
}


#============================================
def fake_loader(locator: str) -> PhotoRef:
	"""
	Resolve photo sizes from a table; unknown names fail to load.
	"""
	if locator not in FAKE_SIZES:
		raise campaign_photo_report.errors.ImageLoadFailed(locator, "not found")
	width, height = FAKE_SIZES[locator]
	return PhotoRef(source_locator=locator, intrinsic_width=width, intrinsic_height=height)


#============================================
def build_composer(format_name: str = "wide") -> campaign_photo_report.compose.ReportComposer:
	config = campaign_photo_report.config.default_config(format_name)
	config.font_paths = ()
	style = campaign_photo_report.compose.resolve_style(config)
	page_format = campaign_photo_report.config.get_page_format(format_name)
	return campaign_photo_report.compose.ReportComposer(page_format, style)


#============================================
def build_content(locators: list[str], notes: str = "Poster checked") -> PageContent:
	slots = campaign_photo_report.images.load_slots(locators, fake_loader, workers=2)
	header_lines = [
		"Campaign: Spring",
		"Place: Central Mall",
		"Date: 2024-03-01 09:15 UTC",
		f"Notes: {notes}",
	]
	return PageContent(header_lines=header_lines, slots=slots)


#============================================
def assert_plan_invariants(plan: campaign_photo_report.compose.LayoutPlan) -> None:
	"""
	Cells sit inside the body, never overlap, and images sit inside their cells.
	"""
	page = campaign_photo_report.geometry.Rect(0.0, 0.0, plan.page_width, plan.page_height)
	assert campaign_photo_report.geometry.rect_contains(page, plan.header_rect)
	assert campaign_photo_report.geometry.rect_contains(page, plan.body_outer_rect)
	assert plan.body_outer_rect.y > plan.header_rect.bottom
	for cell in plan.cells:
		assert campaign_photo_report.geometry.rect_contains(plan.body_outer_rect, cell.cell_rect)
		if cell.image_placement is not None:
			assert campaign_photo_report.geometry.rect_contains(cell.cell_rect, cell.image_placement)
	for first, second in itertools.combinations(plan.cells, 2):
		a = first.cell_rect
		shrunk = (a.x + EPSILON, a.y + EPSILON, a.right - EPSILON, a.bottom - EPSILON)
		assert not campaign_photo_report.geometry.boxes_intersect(shrunk, second.cell_rect.as_box())


#============================================
def test_three_photo_visit_scenario() -> None:
	"""
	Hero cell at 60% of the inner width, two half-height cells on the right.
	"""
	composer = build_composer("wide")
	content = build_content(["four_three.jpg", "square.jpg", "sixteen_nine.jpg"])
	plan = composer.compose_page(content)
	assert_plan_invariants(plan)
	assert plan.page_width == 960.0
	assert plan.page_height == 540.0
	assert plan.body_outer_rect.x == 24.0
	assert plan.body_outer_rect.width == 912.0

	inner = plan.body_outer_rect.shrink(10.0)
	hero, upper, lower = (cell.cell_rect for cell in plan.cells)
	assert hero.width == pytest.approx((inner.width - 10.0) * 0.6)
	assert hero.height == pytest.approx(inner.height)
	assert upper.width == pytest.approx((inner.width - 10.0) * 0.4)
	assert upper.height == pytest.approx((inner.height - 10.0) / 2.0)
	assert lower.height == pytest.approx(upper.height)

	for cell, name in zip(plan.cells, ["four_three.jpg", "square.jpg", "sixteen_nine.jpg"]):
		photo = fake_loader(name)
		placement = cell.image_placement
		assert placement is not None
		assert abs(placement.width / placement.height - photo.aspect_ratio) < 1e-6
		assert campaign_photo_report.geometry.rect_contains(cell.cell_rect.shrink(8.0), placement)


#============================================
def test_failed_photo_becomes_placeholder_cell() -> None:
	"""
	A photo that fails to load keeps its cell and the page still completes.
	"""
	composer = build_composer("wide")
	content = build_content(["square.jpg", "portrait.jpg", "missing.jpg", "sixteen_nine.jpg"])
	plan = composer.compose_page(content)
	assert len(plan.cells) == 4
	assert plan.cells[2].image_placement is None
	assert plan.cells[2].placeholder_text == campaign_photo_report.config.IMAGE_LOAD_FAILED_TEXT
	assert plan.cells[2].locator == "missing.jpg"
	for index in (0, 1, 3):
		assert plan.cells[index].image_placement is not None
	assert plan.placed_count == 3
	assert composer.state == campaign_photo_report.compose.STATE_AWAITING_RECORD


#============================================
def test_zero_size_photo_becomes_placeholder_cell() -> None:
	composer = build_composer("wide")
	plan = composer.compose_page(build_content(["zero.jpg", "square.jpg"]))
	assert plan.cells[0].image_placement is None
	assert plan.cells[0].placeholder_text == campaign_photo_report.config.INVALID_IMAGE_TEXT
	assert plan.cells[1].image_placement is not None


#============================================
def test_visit_without_photos_gets_message() -> None:
	composer = build_composer("standard")
	plan = composer.compose_page(build_content([]))
	assert plan.cells == ()
	assert plan.placeholder is not None
	assert plan.placeholder.text == campaign_photo_report.config.NO_PHOTOS_MESSAGE
	assert plan.placeholder.rect == plan.body_outer_rect


#============================================
def test_more_than_eight_photos_rejected() -> None:
	composer = build_composer("wide")
	content = build_content(["square.jpg"] * 9)
	with pytest.raises(campaign_photo_report.errors.UnsupportedPhotoCount):
		composer.compose_page(content)


#============================================
def test_compose_is_deterministic() -> None:
	"""
	The same input composes to identical plans.
	"""
	locators = ["square.jpg", "portrait.jpg", "four_three.jpg", "sixteen_nine.jpg", "square.jpg"]
	first = build_composer("a4").compose_all([build_content(locators)])
	second = build_composer("a4").compose_all([build_content(locators)])
	assert first == second


#============================================
def test_longer_notes_push_body_down() -> None:
	"""
	Header height follows the wrapped text, and the body starts below it.
	"""
	composer = build_composer("wide")
	short_plan = composer.compose_page(build_content(["square.jpg"], notes="ok"))
	long_plan = composer.compose_page(build_content(["square.jpg"], notes="long text " * 80))
	assert long_plan.header_rect.height > short_plan.header_rect.height
	assert long_plan.body_outer_rect.y > short_plan.body_outer_rect.y
	assert len(long_plan.header_lines) > len(short_plan.header_lines)
	expected = 8.0 * 2 + len(long_plan.header_lines) * 16.0
	assert long_plan.header_rect.height == pytest.approx(expected)
	assert_plan_invariants(long_plan)


#============================================
def test_footer_right_aligned_near_bottom() -> None:
	composer = build_composer("wide")
	plan = composer.compose_page(build_content(["square.jpg"]))
	footer = plan.footer
	assert footer.align == "RIGHT"
	assert footer.text == campaign_photo_report.config.FOOTER_TEXT
	assert footer.rect.right == pytest.approx(960.0 - 24.0 - 5.0)
	assert footer.rect.bottom == pytest.approx(540.0 - 8.0)


#============================================
def test_slide_format_reserves_footer_space() -> None:
	composer = build_composer("slide")
	plan = composer.compose_page(build_content(["square.jpg", "portrait.jpg"]))
	assert_plan_invariants(plan)
	assert plan.body_outer_rect.bottom == pytest.approx(7.5 - 0.33 - 0.3)
	assert plan.footer.rect.y >= plan.body_outer_rect.bottom


#============================================
def test_state_walk_per_page() -> None:
	composer = build_composer("wide")
	composer.compose_all([build_content(["square.jpg"]), build_content([])])
	page_states = [
		campaign_photo_report.compose.STATE_RENDERING_HEADER,
		campaign_photo_report.compose.STATE_RENDERING_BODY,
		campaign_photo_report.compose.STATE_RENDERING_FOOTER,
		campaign_photo_report.compose.STATE_PAGE_COMPLETE,
		campaign_photo_report.compose.STATE_AWAITING_RECORD,
	]
	expected = [campaign_photo_report.compose.STATE_AWAITING_RECORD]
	expected += page_states * 2
	expected.append(campaign_photo_report.compose.STATE_ALL_PAGES_COMPLETE)
	assert composer.history == expected
	with pytest.raises(RuntimeError):
		composer.compose_page(build_content([]))


#============================================
def test_footer_font_falls_back_to_serif() -> None:
	config = campaign_photo_report.config.default_config("wide")
	config.font_paths = ("/nonexistent/bookman.ttf",)
	style = campaign_photo_report.compose.resolve_style(config)
	assert style.footer_font == campaign_photo_report.config.DEFAULT_FONT_SERIF
	assert style.custom_font_loaded is False


#============================================
def test_very_long_notes_clip_header() -> None:
	"""
	Notes too long for the page are cut and the photos keep their room.
	"""
	composer = build_composer("wide")
	plan = composer.compose_page(build_content(["square.jpg"] * 4, notes="word " * 2500))
	assert plan.clipped_header_lines > 0
	assert len(plan.header_lines) == composer.max_header_lines()
	assert plan.header_lines[-1].text.endswith(campaign_photo_report.config.HEADER_CLIPPED_MARK)
	usable = 540.0 - 24.0 * 2 - 10.0
	assert plan.header_rect.height <= usable * campaign_photo_report.config.HEADER_MAX_SHARE + EPSILON
	assert plan.placed_count == 4
	assert_plan_invariants(plan)


#============================================
@pytest.mark.parametrize("format_name", ["wide", "a4", "slide"])
def test_growing_notes_keep_cells_valid(format_name: str) -> None:
	"""
	However long the notes get, every cell stays inside the body and holds its photo.
	"""
	composer = build_composer(format_name)
	for word_count in range(1, 1400, 60):
		plan = composer.compose_page(build_content(["square.jpg"] * 4, notes="word " * word_count))
		assert_plan_invariants(plan)
		assert plan.placed_count == 4
		for cell in plan.cells:
			assert cell.cell_rect.height > 0.0


#============================================
def test_short_notes_not_clipped() -> None:
	plan = build_composer("wide").compose_page(build_content(["square.jpg"]))
	assert plan.clipped_header_lines == 0
	assert not plan.header_lines[-1].text.endswith(campaign_photo_report.config.HEADER_CLIPPED_MARK)


#============================================
def test_cell_smaller_than_inset_becomes_placeholder() -> None:
	slot = campaign_photo_report.images.PhotoSlot("square.jpg", fake_loader("square.jpg"))
	tiny = campaign_photo_report.geometry.Rect(0.0, 0.0, 12.0, 40.0)
	cell = campaign_photo_report.compose.plan_cell(slot, tiny, 8.0)
	assert cell.image_placement is None
	assert cell.placeholder_text == campaign_photo_report.config.CELL_TOO_SMALL_TEXT
	assert cell.locator == "square.jpg"
