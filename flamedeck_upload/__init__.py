"""
Upload trace files to Flamedeck from the command line.

Programmatic use:

    from flamedeck_upload import UploadOptions, upload_trace
    result = upload_trace(UploadOptions(api_key=..., scenario=..., file_path="cpu.json"))
    print(result.view_url)
"""

from .errors import UploadError
from .options import UploadOptions, UploadResult
from .uploader import upload_trace

__version__ = "0.1.0"

__all__ = ["UploadError", "UploadOptions", "UploadResult", "upload_trace", "__version__"]
