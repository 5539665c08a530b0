"""
Split report content into pages.
"""

# Standard Library
import collections.abc
import dataclasses

# local repo modules
import campaign_photo_report as cpr
import campaign_photo_report.config
import campaign_photo_report.errors
import campaign_photo_report.records


FolderPhoto = cpr.records.FolderPhoto
VisitRecord = cpr.records.VisitRecord
NoPhotosSelected = cpr.errors.NoPhotosSelected

ALLOWED_PHOTOS_PER_PAGE = cpr.config.ALLOWED_PHOTOS_PER_PAGE


@dataclasses.dataclass
class PhotoGroupPage:
	page_index: int
	photos: list[FolderPhoto]
	group_label: str


#============================================
def filename_sort_key(photo: FolderPhoto) -> tuple[str, str]:
	return (photo.filename.casefold(), photo.filename)


#============================================
def page_count(total: int, per_page: int) -> int:
	"""
	Number of pages needed for a number of items.
	"""
	if total <= 0:
		return 0
	return (total + per_page - 1) // per_page


#============================================
def plan_visits(records: collections.abc.Sequence[VisitRecord]) -> list[VisitRecord]:
	"""
	One page per visit, in the order given.

	Args:
		records: Visits, already filtered and sorted by the caller.

	Returns:
		Visits in page order.
	"""
	return list(records)


#============================================
def plan_groups(
	photos: collections.abc.Sequence[FolderPhoto],
	per_page: int,
	location: str = "",
	key: collections.abc.Callable[[FolderPhoto], object] = filename_sort_key,
) -> list[PhotoGroupPage]:
	"""
	Sort folder photos and slice them into fixed-size pages.

	Args:
		photos: Folder photos in any order.
		per_page: Photos per page, one of 1, 2, 3, 4, 6 or 8.
		location: Folder location used in each page's label.
		key: Stable sort key; defaults to the filename.

	Returns:
		Pages in order. Only the final page may be short.
	"""
	if per_page not in ALLOWED_PHOTOS_PER_PAGE:
		allowed = ", ".join(str(value) for value in ALLOWED_PHOTOS_PER_PAGE)
		raise ValueError(f"photos per page must be one of {allowed}, got {per_page}")
	if not photos:
		raise NoPhotosSelected("No photos selected for report generation")

	ordered = sorted(photos, key=key)
	pages: list[PhotoGroupPage] = []
	for page_index in range(page_count(len(ordered), per_page)):
		start = page_index * per_page
		window = ordered[start:start + per_page]
		label = cpr.records.build_group_label(location, [photo.locator for photo in window])
		pages.append(PhotoGroupPage(page_index=page_index, photos=window, group_label=label))
	return pages
