from constants.encoding import UTF8
from constants.files import AUDIO_EXTENSIONS, DOCUMENT_EXTENSIONS, FILE_CATEGORIES
from constants.files import IMAGE_EXTENSIONS, URL_FILE_TYPE, VIDEO_EXTENSIONS
from constants.flow import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

__all__ = [
    "UTF8",
    "AUDIO_EXTENSIONS",
    "DOCUMENT_EXTENSIONS",
    "FILE_CATEGORIES",
    "IMAGE_EXTENSIONS",
    "URL_FILE_TYPE",
    "VIDEO_EXTENSIONS",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
]
