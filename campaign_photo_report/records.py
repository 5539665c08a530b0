"""
Report input records and the text derived from them.
"""

# Standard Library
import dataclasses
import datetime
import os
import re
import urllib.parse

# local repo modules
import campaign_photo_report as cpr
import campaign_photo_report.config


MAX_VISIT_PHOTOS = cpr.config.MAX_VISIT_PHOTOS
EMPTY_NOTES = cpr.config.EMPTY_NOTES
FORMAT_LABELS = cpr.config.FORMAT_LABELS

DATE_MODES = ("all", "single", "range")


@dataclasses.dataclass(frozen=True)
class PhotoRef:
	source_locator: str
	intrinsic_width: int
	intrinsic_height: int

	@property
	def aspect_ratio(self) -> float:
		return self.intrinsic_width / self.intrinsic_height


@dataclasses.dataclass
class VisitRecord:
	location: str
	timestamp_utc: str
	notes: str | None = None
	photos: list[str] = dataclasses.field(default_factory=list)

	def __post_init__(self) -> None:
		if len(self.photos) > MAX_VISIT_PHOTOS:
			raise ValueError(
				f"Visit at {self.location!r} has {len(self.photos)} photos; "
				f"at most {MAX_VISIT_PHOTOS} are allowed"
			)


@dataclasses.dataclass(frozen=True)
class FolderPhoto:
	photo_id: str
	filename: str
	locator: str


@dataclasses.dataclass
class Folder:
	location: str
	photos: list[FolderPhoto] = dataclasses.field(default_factory=list)


#============================================
def visit_from_dict(data: dict, verbose: bool = False) -> VisitRecord:
	"""
	Build a VisitRecord from a JSON mapping.

	Photos past the per-visit limit are dropped.

	Args:
		data: Mapping with location, date, notes and photos keys.
		verbose: Print a warning when photos are dropped.

	Returns:
		VisitRecord.
	"""
	photos = [str(photo) for photo in data.get("photos", []) if photo]
	if len(photos) > MAX_VISIT_PHOTOS:
		if verbose:
			print(
				f"WARNING: visit at {data['location']!r} has {len(photos)} photos; "
				f"keeping the first {MAX_VISIT_PHOTOS}"
			)
		photos = photos[:MAX_VISIT_PHOTOS]
	return VisitRecord(
		location=str(data["location"]),
		timestamp_utc=str(data["date"]),
		notes=data.get("notes"),
		photos=photos,
	)


#============================================
def folder_from_dict(data: dict) -> Folder:
	"""
	Build a Folder from a JSON mapping.

	Args:
		data: Mapping with location and photos ({id, filename, path}) keys.

	Returns:
		Folder.
	"""
	photos = []
	for index, entry in enumerate(data.get("photos", [])):
		locator = str(entry["path"])
		filename = str(entry.get("filename") or os.path.basename(locator))
		photo_id = str(entry.get("id", index))
		photos.append(FolderPhoto(photo_id=photo_id, filename=filename, locator=locator))
	return Folder(location=str(data["location"]), photos=photos)


#============================================
def parse_timestamp(value: str) -> datetime.datetime | None:
	"""
	Parse an ISO 8601 timestamp, treating naive values as UTC.

	Args:
		value: Timestamp string.

	Returns:
		Aware datetime in UTC, or None when unparseable.
	"""
	text = value.strip()
	if text.endswith("Z"):
		text = text[:-1] + "+00:00"
	try:
		parsed = datetime.datetime.fromisoformat(text)
	except ValueError:
		return None
	if parsed.tzinfo is None:
		parsed = parsed.replace(tzinfo=datetime.timezone.utc)
	return parsed.astimezone(datetime.timezone.utc)


#============================================
def format_visit_date(value: str) -> str:
	"""
	Render a visit timestamp for the header.

	Args:
		value: ISO timestamp string.

	Returns:
		"YYYY-MM-DD HH:MM UTC", or the raw value when it cannot be parsed.
	"""
	parsed = parse_timestamp(value)
	if parsed is None:
		return value
	return parsed.strftime("%Y-%m-%d %H:%M UTC")


#============================================
def visit_day(value: str) -> str | None:
	parsed = parse_timestamp(value)
	if parsed is None:
		return None
	return parsed.strftime("%Y-%m-%d")


#============================================
def filter_visits(
	visits: list[VisitRecord],
	mode: str = "all",
	selected_date: str | None = None,
	start_date: str | None = None,
	end_date: str | None = None,
) -> list[VisitRecord]:
	"""
	Filter visits by calendar day.

	Args:
		visits: Visits in report order.
		mode: One of all, single or range.
		selected_date: YYYY-MM-DD day for single mode.
		start_date: Inclusive YYYY-MM-DD start for range mode.
		end_date: Inclusive YYYY-MM-DD end for range mode.

	Returns:
		Matching visits, order preserved. A mode without its dates keeps
		every visit.
	"""
	if mode not in DATE_MODES:
		raise ValueError(f"Unknown date filter mode {mode!r}")
	if mode == "single" and selected_date:
		return [visit for visit in visits if visit_day(visit.timestamp_utc) == selected_date]
	if mode == "range" and start_date and end_date:
		result = []
		for visit in visits:
			day = visit_day(visit.timestamp_utc)
			if day is not None and start_date <= day <= end_date:
				result.append(visit)
		return result
	return list(visits)


#============================================
def select_photos(photos: list[FolderPhoto], selected_ids: list[str] | None) -> list[FolderPhoto]:
	"""
	Keep only the selected photos; no selection keeps all of them.
	"""
	if not selected_ids:
		return list(photos)
	wanted = set(selected_ids)
	return [photo for photo in photos if photo.photo_id in wanted]


#============================================
def clean_filename(locator: str) -> str:
	"""
	Turn a photo locator into a display name.

	Args:
		locator: Path or URL of the photo.

	Returns:
		Decoded last path segment without a "visit-" prefix or any extensions.
	"""
	name = locator.replace("\\", "/").rsplit("/", 1)[-1]
	name = urllib.parse.unquote(name)
	if name.startswith("visit-"):
		name = name[len("visit-"):]
	while re.search(r"\.[^/.]+$", name):
		name = re.sub(r"\.[^/.]+$", "", name)
	return name


#============================================
def visit_header_lines(campaign_name: str, visit: VisitRecord) -> list[str]:
	notes = visit.notes or EMPTY_NOTES
	return [
		f"Campaign: {campaign_name}",
		f"Place: {visit.location}",
		f"Date: {format_visit_date(visit.timestamp_utc)}",
		f"Notes: {notes}",
	]


#============================================
def build_group_label(location: str, locators: list[str]) -> str:
	"""
	Build the location label for one page of folder photos.

	Args:
		location: Folder location.
		locators: Photo locators on the page.

	Returns:
		"<location>-<name>, <name>, ..." label.
	"""
	names = ", ".join(clean_filename(locator) for locator in locators)
	return f"{location}-{names}"


#============================================
def folder_header_lines(campaign_name: str, group_label: str) -> list[str]:
	return [
		f"Campaign: {campaign_name}",
		f"Location: {group_label}",
	]


#============================================
def sanitize_token(value: str) -> str:
	"""
	Sanitize a string for filenames.

	Args:
		value: Input string.

	Returns:
		Sanitized string.
	"""
	result: list[str] = []
	for char in value:
		if char.isalnum() or char in "-_":
			result.append(char)
		else:
			result.append("_")
	sanitized = "".join(result).strip("_")
	if not sanitized:
		return "report"
	return sanitized


#============================================
def build_folder_filename(location: str, campaign_name: str, day: str, extension: str) -> str:
	location_token = sanitize_token(location)
	campaign_token = sanitize_token(campaign_name)
	return f"{location_token}-{campaign_token}-Photos-{day}.{extension}"


#============================================
def build_visit_filename(
	campaign_name: str,
	format_name: str,
	extension: str,
	mode: str = "all",
	selected_date: str | None = None,
	start_date: str | None = None,
	end_date: str | None = None,
) -> str:
	"""
	Build the download filename for a visit report.

	Args:
		campaign_name: Campaign name.
		format_name: Page format name.
		extension: File extension without the dot.
		mode: Date filter mode.
		selected_date: Day for single mode.
		start_date: Range start.
		end_date: Range end.

	Returns:
		Filename string.
	"""
	campaign_token = sanitize_token(campaign_name)
	format_label = FORMAT_LABELS.get(format_name, format_name)
	if mode == "single" and selected_date:
		stem = f"daily-report-{campaign_token}-{selected_date}-{format_label}"
	elif mode == "range" and start_date and end_date:
		stem = f"range-report-{campaign_token}-{start_date}-to-{end_date}-{format_label}"
	else:
		stem = f"complete-report-{campaign_token}-{format_label}"
	return f"{stem}.{extension}"
