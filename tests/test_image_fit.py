import pytest

import campaign_photo_report.errors
import campaign_photo_report.geometry


Rect = campaign_photo_report.geometry.Rect

IMAGE_SIZES = [(4000, 3000), (3000, 4000), (1920, 1080), (1000, 1000), (1, 500), (640, 1)]
BOX_SIZES = [(400.0, 300.0), (120.5, 80.25), (0.9, 2.3), (900.0, 20.0)]


#============================================
@pytest.mark.parametrize("image_size", IMAGE_SIZES)
@pytest.mark.parametrize("box_size", BOX_SIZES)
def test_fit_keeps_ratio_and_bounds(image_size: tuple[int, int], box_size: tuple[float, float]) -> None:
	"""
	The fitted size keeps the aspect ratio, stays in the box and fills one side.
	"""
	image_width, image_height = image_size
	max_width, max_height = box_size
	width, height = campaign_photo_report.geometry.fit_image(image_width, image_height, max_width, max_height)
	assert width <= max_width + 1e-9
	assert height <= max_height + 1e-9
	assert abs(width / height - image_width / image_height) < 1e-6 * (image_width / image_height)
	assert abs(width - max_width) < 1e-9 or abs(height - max_height) < 1e-9


#============================================
def test_fit_upscales_small_images() -> None:
	width, height = campaign_photo_report.geometry.fit_image(40, 30, 400.0, 400.0)
	assert width == pytest.approx(400.0)
	assert height == pytest.approx(300.0)


#============================================
@pytest.mark.parametrize("image_size", [(0, 100), (100, 0), (-5, 10)])
def test_fit_rejects_degenerate_images(image_size: tuple[int, int]) -> None:
	with pytest.raises(campaign_photo_report.errors.InvalidImageDimensions):
		campaign_photo_report.geometry.fit_image(image_size[0], image_size[1], 100.0, 100.0)


#============================================
def test_place_image_centred_with_inset() -> None:
	"""
	A wide image in a square cell is centred vertically inside the inset.
	"""
	cell = Rect(100.0, 50.0, 216.0, 216.0)
	placement = campaign_photo_report.geometry.place_image(1600, 900, cell, 8.0)
	assert placement.x == pytest.approx(108.0)
	assert placement.width == pytest.approx(200.0)
	assert placement.height == pytest.approx(112.5)
	expected_y = 50.0 + 8.0 + (200.0 - 112.5) / 2.0
	assert placement.y == pytest.approx(expected_y)
	assert campaign_photo_report.geometry.rect_contains(cell.shrink(8.0), placement)


#============================================
def test_place_image_tall_image_in_wide_cell() -> None:
	cell = Rect(0.0, 0.0, 300.0, 120.0)
	placement = campaign_photo_report.geometry.place_image(300, 600, cell, 10.0)
	assert placement.height == pytest.approx(100.0)
	assert placement.width == pytest.approx(50.0)
	left_margin = placement.x - cell.x
	right_margin = cell.right - placement.right
	assert left_margin == pytest.approx(right_margin)
