import math

import pytest

import campaign_photo_report.errors
import campaign_photo_report.pagination
import campaign_photo_report.records


FolderPhoto = campaign_photo_report.records.FolderPhoto
VisitRecord = campaign_photo_report.records.VisitRecord


#============================================
def build_photos(count: int) -> list[FolderPhoto]:
	"""
	Build folder photos in reverse filename order.
	"""
	photos = []
	for index in reversed(range(count)):
		filename = f"IMG_{index:03d}.jpg"
		photos.append(FolderPhoto(photo_id=str(index), filename=filename, locator=f"/photos/{filename}"))
	return photos


#============================================
@pytest.mark.parametrize("count", [1, 3, 4, 5, 8, 9, 17])
def test_groups_of_four(count: int) -> None:
	"""
	Page count is ceil(N/4) and pages concatenate back to the sorted input.
	"""
	photos = build_photos(count)
	pages = campaign_photo_report.pagination.plan_groups(photos, 4, "Depot")
	assert len(pages) == math.ceil(count / 4)
	assert all(len(page.photos) <= 4 for page in pages)
	joined = [photo for page in pages for photo in page.photos]
	assert joined == sorted(photos, key=lambda photo: photo.filename)
	assert [page.page_index for page in pages] == list(range(len(pages)))


#============================================
def test_ten_photos_eight_per_page() -> None:
	pages = campaign_photo_report.pagination.plan_groups(build_photos(10), 8, "Depot")
	assert [len(page.photos) for page in pages] == [8, 2]


#============================================
def test_group_label_lists_clean_names() -> None:
	pages = campaign_photo_report.pagination.plan_groups(build_photos(3), 2, "Harbour Road")
	assert pages[0].group_label == "Harbour Road-IMG_000, IMG_001"
	assert pages[1].group_label == "Harbour Road-IMG_002"


#============================================
def test_sort_is_case_insensitive() -> None:
	photos = [
		FolderPhoto("1", "beta.jpg", "/p/beta.jpg"),
		FolderPhoto("2", "Alpha.jpg", "/p/Alpha.jpg"),
		FolderPhoto("3", "alpha2.jpg", "/p/alpha2.jpg"),
	]
	pages = campaign_photo_report.pagination.plan_groups(photos, 8)
	assert [photo.filename for photo in pages[0].photos] == ["Alpha.jpg", "alpha2.jpg", "beta.jpg"]


#============================================
def test_empty_folder_rejected() -> None:
	with pytest.raises(campaign_photo_report.errors.NoPhotosSelected):
		campaign_photo_report.pagination.plan_groups([], 4)


#============================================
@pytest.mark.parametrize("per_page", [0, 5, 7, 9])
def test_per_page_must_be_allowed(per_page: int) -> None:
	with pytest.raises(ValueError):
		campaign_photo_report.pagination.plan_groups(build_photos(3), per_page)


#============================================
def test_plan_visits_keeps_order() -> None:
	visits = [
		VisitRecord("B", "2024-05-02T10:00:00Z"),
		VisitRecord("A", "2024-05-01T10:00:00Z"),
	]
	planned = campaign_photo_report.pagination.plan_visits(visits)
	assert planned == visits
	assert planned is not visits


#============================================
def test_page_count() -> None:
	assert campaign_photo_report.pagination.page_count(0, 4) == 0
	assert campaign_photo_report.pagination.page_count(8, 8) == 1
	assert campaign_photo_report.pagination.page_count(9, 8) == 2
