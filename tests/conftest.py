"""
Pytest configuration for local imports and shared photo fixtures.
"""

# Standard Library
import os
import pathlib
import sys

# PIP3 modules
import PIL.Image
import pytest

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()


#============================================
@pytest.fixture
def make_photo(tmp_path: pathlib.Path):
	"""
	Factory writing a solid colour JPEG and returning its path as a string.
	"""
	def factory(name: str, width: int, height: int, color: tuple[int, int, int] = (200, 30, 30)) -> str:
		path = tmp_path / name
		image = PIL.Image.new("RGB", (width, height), color)
		image.save(path, format="JPEG", quality=95)
		return str(path)

	return factory


#============================================
@pytest.fixture
def broken_photo(tmp_path: pathlib.Path) -> str:
	"""
	A file with an image extension that is not an image.
	"""
	path = tmp_path / "broken.jpg"
	path.write_bytes(b"not an image")
	return str(path)
