"""
Resolve relative media paths into public download URLs.
"""

from fakeyou.config import STORAGE_BASE_URL


def resolve_url(relative_path: str, storage_base: str = STORAGE_BASE_URL) -> str:
    """
    Build the public URL of a media file.

    The path is appended to the storage base as-is; jobs return paths with a
    leading slash, e.g. ``/tts_inference_output/.../result.wav``.

    Args:
        relative_path: Path returned by a completed job
        storage_base: Bucket URL to prepend

    Returns:
        str: Absolute URL
    """
    return f"{storage_base}{relative_path}"
