"""
Shared fixtures for fingerprinting and deduplication tests.
Creates isolated temporary archive trees with controlled file contents.
"""
import pytest
from pathlib import Path
from typing import Dict
import sys

# Add src/ to sys.path so 'dirdiff' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))


@pytest.fixture
def temp_dir(tmp_path):
    """Isolated temporary directory, auto-cleanup after test."""
    return tmp_path


@pytest.fixture
def archive_tree(temp_dir) -> Dict[str, Path]:
    """
    Creates a small photo archive:
    - vacation/beach.jpg and 2023-01-01/beach.jpg, 2023-01-02/beach_copy.jpg (same bytes)
    - 2023-01-03/sunset.jpg and 2023-01-04/sunset.jpg (same bytes, only date folders)
    - family/portrait.jpg (unique)
    - 2023-02-01/unique.jpg (unique, date folder)
    """
    files = {}

    def write(rel: str, content: bytes) -> Path:
        path = temp_dir / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    beach = b"BEACH" * 2048
    files["album_beach"] = write("vacation/beach.jpg", beach)
    files["date_beach1"] = write("2023-01-01/beach.jpg", beach)
    files["date_beach2"] = write("2023-01-02/beach_copy.jpg", beach)

    sunset = b"SUNSET" * 1024
    files["date_sunset1"] = write("2023-01-03/sunset.jpg", sunset)
    files["date_sunset2"] = write("2023-01-04/sunset.jpg", sunset)

    files["album_portrait"] = write("family/portrait.jpg", b"PORTRAIT" * 512)
    files["date_unique"] = write("2023-02-01/unique.jpg", b"UNIQUE" * 100)

    return files
