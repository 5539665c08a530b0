"""
CLI entry points for campaign photo reports.
"""

# Standard Library
import argparse
import datetime
import json
import pathlib
import time

# local repo modules
import campaign_photo_report as cpr
import campaign_photo_report.config
import campaign_photo_report.records
import campaign_photo_report.report


ReportConfig = cpr.config.ReportConfig

PAGE_FORMATS = cpr.config.PAGE_FORMATS
ALLOWED_PHOTOS_PER_PAGE = cpr.config.ALLOWED_PHOTOS_PER_PAGE
DEFAULT_PHOTOS_PER_PAGE = cpr.config.DEFAULT_PHOTOS_PER_PAGE
DEFAULT_FORMAT = cpr.config.DEFAULT_FORMAT


#============================================
def build_config(args: argparse.Namespace) -> ReportConfig:
	"""
	Build report config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		ReportConfig.
	"""
	config = cpr.config.default_config(args.format_name)
	config.photos_per_page = args.per_page
	config.verbose = args.verbose
	if args.font_paths:
		config.font_paths = tuple(args.font_paths)
	return config


#============================================
def parse_args() -> argparse.Namespace:
	"""
	Parse command line arguments.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Generate campaign photo reports as PDF or PPTX.")

	input_group = parser.add_argument_group("Input")
	input_group.add_argument("-i", "--input", dest="input_path", required=True, help="Report JSON input.")
	input_group.add_argument(
		"-m", "--mode", dest="mode", choices=("visits", "folder"), default="visits",
		help="One page per visit, or folder photos several per page.",
	)

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", required=True, help="Output PDF or PPTX path.")
	output_group.add_argument("-j", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")
	output_group.add_argument(
		"-f", "--format", dest="format_name", choices=sorted(PAGE_FORMATS), default=DEFAULT_FORMAT,
		help="Page format.",
	)
	output_group.add_argument("--font", dest="font_paths", action="append", default=None, help="Footer TTF font path.")

	filter_group = parser.add_argument_group("Filters")
	filter_group.add_argument("-d", "--date", dest="selected_date", default=None, help="Only visits on this YYYY-MM-DD day.")
	filter_group.add_argument(
		"-r", "--range", dest="date_range", nargs=2, metavar=("START", "END"), default=None,
		help="Only visits between two YYYY-MM-DD days, inclusive.",
	)
	filter_group.add_argument("-s", "--select", dest="selected_ids", nargs="+", default=None, help="Folder photo ids to include.")
	filter_group.add_argument(
		"-n", "--per-page", dest="per_page", type=int, choices=ALLOWED_PHOTOS_PER_PAGE,
		default=DEFAULT_PHOTOS_PER_PAGE, help="Folder photos per page.",
	)

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("-v", "--verbose", dest="verbose", action="store_true", help="Print progress and warnings.")

	args = parser.parse_args()
	return args


#============================================
def load_input(path: pathlib.Path) -> dict:
	text = path.read_text(encoding="utf-8")
	return json.loads(text)


#============================================
def date_filter(args: argparse.Namespace) -> tuple[str, str | None, str | None, str | None]:
	if args.selected_date:
		return ("single", args.selected_date, None, None)
	if args.date_range:
		return ("range", None, args.date_range[0], args.date_range[1])
	return ("all", None, None, None)


#============================================
def run_pipeline(args: argparse.Namespace) -> None:
	"""
	Run a report job from JSON input to an output file.

	Args:
		args: Parsed argparse namespace.
	"""
	print("Campaign photo report")
	print(f"Mode: {args.mode}")
	print(f"Format: {args.format_name}")
	print(f"Output: {args.output_path}")

	payload = load_input(pathlib.Path(args.input_path))
	campaign_name = str(payload.get("campaign", ""))
	config = build_config(args)

	extension = PAGE_FORMATS[args.format_name].extension
	today = datetime.date.today().isoformat()
	start_time = time.perf_counter()
	if args.mode == "folder":
		folder = cpr.records.folder_from_dict(payload["folder"])
		print(f"Folder photos: {len(folder.photos)}")
		print(f"Photos per page: {config.photos_per_page}")
		result = cpr.report.generate_folder_report(folder, campaign_name, config, args.selected_ids)
		suggested = cpr.records.build_folder_filename(folder.location, campaign_name, today, extension)
	else:
		visits = [cpr.records.visit_from_dict(entry, args.verbose) for entry in payload.get("visits", [])]
		mode, selected_date, start_date, end_date = date_filter(args)
		visits = cpr.records.filter_visits(visits, mode, selected_date, start_date, end_date)
		print(f"Visits selected: {len(visits)}")
		result = cpr.report.generate_visit_report(visits, campaign_name, config)
		suggested = cpr.records.build_visit_filename(
			campaign_name, args.format_name, extension, mode, selected_date, start_date, end_date,
		)

	output_path = pathlib.Path(args.output_path)
	output_path.write_bytes(result.data)
	total_time = time.perf_counter() - start_time
	print(f"Pages written: {result.pages}")
	print(f"Photos placed: {result.placed_photos}")
	print(f"Photos failed: {result.failed_photos}")
	print(f"Footer font: {result.footer_font}")

	manifest_path = args.manifest_path
	if manifest_path is None:
		manifest_path = f"{output_path}.json"
	cpr.report.write_manifest(pathlib.Path(manifest_path), result, config, output_path)
	print(f"Timing: total={total_time:.2f}s")
	print(f"Manifest written: {manifest_path}")

	print(f"Suggested download name: {suggested}")


#============================================
def main() -> None:
	"""
	Main entry point.
	"""
	args = parse_args()
	run_pipeline(args)
