from .loader import ConfigLoaderError, dump_settings, load_settings
from .schema import JobRequest, JobRequestError, SubmitSettings

__all__ = [
    "ConfigLoaderError",
    "JobRequest",
    "JobRequestError",
    "SubmitSettings",
    "dump_settings",
    "load_settings",
]
