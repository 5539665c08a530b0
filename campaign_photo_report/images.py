"""
Photo loading from the filesystem.
"""

# Standard Library
import collections.abc
import concurrent.futures
import dataclasses
import io
import threading

# PIP3 modules
import PIL.Image
import PIL.ImageOps

# local repo modules
import campaign_photo_report as cpr
import campaign_photo_report.config
import campaign_photo_report.errors
import campaign_photo_report.records


PhotoRef = cpr.records.PhotoRef
ImageLoadFailed = cpr.errors.ImageLoadFailed
ReportCancelled = cpr.errors.ReportCancelled

LOADER_WORKERS = cpr.config.LOADER_WORKERS

LoaderFunc = collections.abc.Callable[[str], PhotoRef]
OpenerFunc = collections.abc.Callable[[str, int, int], PIL.Image.Image]

DECODE_ERRORS = (OSError, ValueError, PIL.Image.DecompressionBombError)


@dataclasses.dataclass(frozen=True)
class PhotoSlot:
	locator: str
	photo: PhotoRef | None
	error: str | None = None


#============================================
def load_photo(locator: str) -> PhotoRef:
	"""
	Decode a photo and read its upright pixel size.

	Args:
		locator: Filesystem path of the photo.

	Returns:
		PhotoRef with dimensions after EXIF orientation.
	"""
	try:
		with PIL.Image.open(locator) as image:
			upright = PIL.ImageOps.exif_transpose(image)
			width, height = upright.size
	except DECODE_ERRORS as error:
		raise ImageLoadFailed(locator, str(error)) from error
	return PhotoRef(source_locator=locator, intrinsic_width=width, intrinsic_height=height)


#============================================
def open_photo(locator: str, max_width: int, max_height: int) -> PIL.Image.Image:
	"""
	Open a photo for embedding: upright, RGB, and shrunk to a size limit.

	Args:
		locator: Filesystem path of the photo.
		max_width: Maximum embedded width in pixels.
		max_height: Maximum embedded height in pixels.

	Returns:
		Loaded PIL image.
	"""
	with PIL.Image.open(locator) as image:
		upright = PIL.ImageOps.exif_transpose(image)
		rgb = upright.convert("RGB")
	rgb.thumbnail((max_width, max_height), PIL.Image.Resampling.LANCZOS)
	return rgb


#============================================
def encode_jpeg(image: PIL.Image.Image, quality: int) -> io.BytesIO:
	buffer = io.BytesIO()
	image.save(buffer, format="JPEG", quality=quality)
	buffer.seek(0)
	return buffer


#============================================
def load_slots(
	locators: list[str],
	loader: LoaderFunc = load_photo,
	workers: int = LOADER_WORKERS,
	cancel_event: threading.Event | None = None,
	verbose: bool = False,
) -> list[PhotoSlot]:
	"""
	Load the photos of one page concurrently.

	A photo that fails to load becomes a slot with an error instead of
	failing the page.

	Args:
		locators: Photo locators in cell order.
		loader: Function resolving a locator to a PhotoRef.
		workers: Thread pool size.
		cancel_event: Set to abandon the job.
		verbose: Print a warning per failed photo.

	Returns:
		Slots in the same order as locators.
	"""
	if cancel_event is not None and cancel_event.is_set():
		raise ReportCancelled("Report job cancelled")
	if not locators:
		return []

	slots: list[PhotoSlot | None] = [None] * len(locators)
	executor = concurrent.futures.ThreadPoolExecutor(max_workers=max(1, workers))
	try:
		futures = {executor.submit(loader, locator): index for index, locator in enumerate(locators)}
		for future in concurrent.futures.as_completed(futures):
			if cancel_event is not None and cancel_event.is_set():
				raise ReportCancelled("Report job cancelled while loading photos")
			index = futures[future]
			locator = locators[index]
			try:
				photo = future.result()
			except ImageLoadFailed as error:
				if verbose:
					print(f"WARNING: {error}")
				slots[index] = PhotoSlot(locator=locator, photo=None, error=error.reason)
				continue
			slots[index] = PhotoSlot(locator=locator, photo=photo)
	finally:
		executor.shutdown(wait=True, cancel_futures=True)
	return [slot for slot in slots if slot is not None]
