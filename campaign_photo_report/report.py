"""
Report jobs: visit reports and folder photo reports.
"""

# Standard Library
import json
import pathlib
import threading

# local repo modules
import campaign_photo_report as cpr
import campaign_photo_report.compose
import campaign_photo_report.config
import campaign_photo_report.errors
import campaign_photo_report.images
import campaign_photo_report.pagination
import campaign_photo_report.records
import campaign_photo_report.render
import campaign_photo_report.slides


ReportConfig = cpr.config.ReportConfig
ReportResult = cpr.config.ReportResult
PageFormat = cpr.config.PageFormat
StyleContext = cpr.compose.StyleContext
LayoutPlan = cpr.compose.LayoutPlan
PageContent = cpr.compose.PageContent
ReportComposer = cpr.compose.ReportComposer
VisitRecord = cpr.records.VisitRecord
Folder = cpr.records.Folder
ReportCancelled = cpr.errors.ReportCancelled
NoPhotosSelected = cpr.errors.NoPhotosSelected
LoaderFunc = cpr.images.LoaderFunc
OpenerFunc = cpr.images.OpenerFunc

MAX_PHOTOS_PER_PAGE = cpr.config.MAX_PHOTOS_PER_PAGE
NO_VISITS_MESSAGE = cpr.config.NO_VISITS_MESSAGE
IMAGE_ERROR_TEXT = cpr.config.IMAGE_ERROR_TEXT
PROGRESS_BAR_WIDTH = cpr.config.PROGRESS_BAR_WIDTH


#============================================
def print_progress(prefix: str, current: int, total: int) -> None:
	"""
	Print a simple progress bar.

	Args:
		prefix: Label text.
		current: Current count.
		total: Total count.
	"""
	if total <= 0:
		return
	percent = int(round((current / total) * 100.0))
	filled = int(round(PROGRESS_BAR_WIDTH * percent / 100.0))
	bar = "#" * filled + "-" * (PROGRESS_BAR_WIDTH - filled)
	print(f"{prefix} [{bar}] {current}/{total} ({percent}%)", end="\r")


#============================================
def build_sink(
	page_format: PageFormat,
	style: StyleContext,
	config: ReportConfig,
	opener: OpenerFunc = cpr.images.open_photo,
) -> cpr.render.DrawingSink:
	"""
	Pick the drawing backend for a page format.
	"""
	if page_format.target == "pptx":
		return cpr.slides.SlideSink(page_format, style, config, opener)
	return cpr.render.PdfSink(page_format, style, config, opener)


#============================================
def _check_cancel(cancel_event: threading.Event | None) -> None:
	if cancel_event is not None and cancel_event.is_set():
		raise ReportCancelled("Report job cancelled")


#============================================
def run_job(
	page_sources: list[tuple[list[str], list[str], str]],
	config: ReportConfig,
	loader: LoaderFunc,
	sink: cpr.render.DrawingSink | None = None,
	cancel_event: threading.Event | None = None,
	opener: OpenerFunc = cpr.images.open_photo,
) -> tuple[ReportResult, list[LayoutPlan]]:
	"""
	Load, compose and draw every page of a report in order.

	Args:
		page_sources: Per page: (header lines, photo locators, empty message).
		config: Report configuration.
		loader: Photo loader.
		sink: Drawing backend; chosen from the format when None.
		cancel_event: Set to abandon the job.
		opener: Opens a photo for embedding in the document.

	Returns:
		Tuple of (ReportResult, layout plans).
	"""
	page_format = cpr.config.get_page_format(config.format_name)
	style = cpr.compose.resolve_style(config)
	composer = ReportComposer(page_format, style)
	if sink is None:
		sink = build_sink(page_format, style, config, opener)

	plans: list[LayoutPlan] = []
	failures: list[dict[str, str]] = []
	clipped_headers: list[int] = []
	unembedded = 0
	total = len(page_sources)
	for index, (header_lines, locators, empty_message) in enumerate(page_sources):
		_check_cancel(cancel_event)
		slots = cpr.images.load_slots(
			locators,
			loader,
			config.loader_workers,
			cancel_event,
			config.verbose,
		)
		content = PageContent(header_lines=header_lines, slots=slots, empty_message=empty_message)
		plan = composer.compose_page(content)
		for cell in plan.failed_cells:
			failures.append({
				"page": str(plan.page_index),
				"locator": cell.locator or "",
				"reason": cell.placeholder_text or "",
			})
		for cell in cpr.render.emit_plan(sink, plan):
			unembedded += 1
			failures.append({
				"page": str(plan.page_index),
				"locator": cell.locator or "",
				"reason": IMAGE_ERROR_TEXT,
			})
		if plan.clipped_header_lines:
			clipped_headers.append(plan.page_index)
			if config.verbose:
				print(f"WARNING: page {plan.page_index} header cut by {plan.clipped_header_lines} lines")
		plans.append(plan)
		if config.verbose:
			print_progress("Pages", index + 1, total)
	composer.finish()
	if config.verbose and total > 0:
		print()

	_check_cancel(cancel_event)
	data = sink.finish()
	result = ReportResult(
		data=data,
		pages=len(plans),
		placed_photos=sum(plan.placed_count for plan in plans) - unembedded,
		failed_photos=len(failures),
		cells_per_page=[len(plan.cells) for plan in plans],
		failures=failures,
		format_name=page_format.name,
		footer_font=style.footer_font,
		clipped_headers=clipped_headers,
	)
	return (result, plans)


#============================================
def generate_visit_report(
	visits: list[VisitRecord],
	campaign_name: str,
	config: ReportConfig,
	loader: LoaderFunc = cpr.images.load_photo,
	sink: cpr.render.DrawingSink | None = None,
	cancel_event: threading.Event | None = None,
	opener: OpenerFunc = cpr.images.open_photo,
) -> ReportResult:
	"""
	Build a report with one page or slide per visit.

	An empty visit list still produces a single page carrying a
	"no visits" message.

	Args:
		visits: Visits in page order, already filtered.
		campaign_name: Campaign name for the headers.
		config: Report configuration.
		loader: Photo loader.
		sink: Drawing backend; chosen from the format when None.
		cancel_event: Set to abandon the job.
		opener: Opens a photo for embedding in the document.

	Returns:
		ReportResult with the document bytes.
	"""
	page_sources = []
	for visit in cpr.pagination.plan_visits(visits):
		header_lines = cpr.records.visit_header_lines(campaign_name, visit)
		page_sources.append((header_lines, list(visit.photos), cpr.config.NO_PHOTOS_MESSAGE))
	if not page_sources:
		page_sources.append(([f"Campaign: {campaign_name}"], [], NO_VISITS_MESSAGE))
	result, _plans = run_job(page_sources, config, loader, sink, cancel_event, opener)
	return result


#============================================
def generate_folder_report(
	folder: Folder,
	campaign_name: str,
	config: ReportConfig,
	selected_ids: list[str] | None = None,
	loader: LoaderFunc = cpr.images.load_photo,
	sink: cpr.render.DrawingSink | None = None,
	cancel_event: threading.Event | None = None,
	opener: OpenerFunc = cpr.images.open_photo,
) -> ReportResult:
	"""
	Build a report of folder photos, several per page.

	Args:
		folder: Folder with its photos.
		campaign_name: Campaign name for the headers.
		config: Report configuration; photos_per_page is capped at 8.
		selected_ids: Optional photo ids to include.
		loader: Photo loader.
		sink: Drawing backend; chosen from the format when None.
		cancel_event: Set to abandon the job.
		opener: Opens a photo for embedding in the document.

	Returns:
		ReportResult with the document bytes.
	"""
	photos = cpr.records.select_photos(folder.photos, selected_ids)
	if not photos:
		raise NoPhotosSelected("No photos selected for report generation")
	per_page = min(config.photos_per_page, MAX_PHOTOS_PER_PAGE)
	pages = cpr.pagination.plan_groups(photos, per_page, folder.location)
	page_sources = []
	for page in pages:
		header_lines = cpr.records.folder_header_lines(campaign_name, page.group_label)
		locators = [photo.locator for photo in page.photos]
		page_sources.append((header_lines, locators, cpr.config.NO_PHOTOS_MESSAGE))
	result, _plans = run_job(page_sources, config, loader, sink, cancel_event, opener)
	return result


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	result: ReportResult,
	config: ReportConfig,
	output_path: pathlib.Path | None = None,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		result: Report result.
		config: Report configuration.
		output_path: Path of the written report, if any.
	"""
	page_format = cpr.config.get_page_format(result.format_name)
	data = {
		"output": str(output_path) if output_path is not None else None,
		"pages": result.pages,
		"cells_per_page": result.cells_per_page,
		"placed_photos": result.placed_photos,
		"failed_photos": result.failed_photos,
		"failures": result.failures,
		"clipped_headers": result.clipped_headers,
		"bytes": len(result.data),
		"layout": {
			"format": page_format.name,
			"target": page_format.target,
			"units": page_format.units,
			"width": page_format.width,
			"height": page_format.height,
			"margin": page_format.margin,
			"gap": page_format.gap,
			"inset": page_format.inset,
			"photos_per_page": config.photos_per_page,
		},
		"fonts": {
			"footer": result.footer_font,
		},
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)
