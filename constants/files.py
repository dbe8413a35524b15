from enums import FileCategory

DOCUMENT_EXTENSIONS = frozenset(
    {
        "pdf",
        "doc",
        "docx",
        "odt",
        "rtf",
        "txt",
        "text",
        "md",
        "markdown",
        "html",
        "htm",
        "csv",
        "tsv",
        "xls",
        "xlsx",
        "ppt",
        "pptx",
        "json",
        "xml",
        "epub",
        "eml",
    }
)
IMAGE_EXTENSIONS = frozenset(
    {"png", "jpg", "jpeg", "tiff", "tif", "bmp", "gif", "webp", "heic"}
)
AUDIO_EXTENSIONS = frozenset({"mp3", "wav", "m4a", "ogg", "flac", "aac"})
VIDEO_EXTENSIONS = frozenset({"mp4", "mov", "avi", "mkv", "webm"})

FILE_CATEGORIES: dict[str, FileCategory] = {
    **dict.fromkeys(DOCUMENT_EXTENSIONS, FileCategory.DOCUMENT),
    **dict.fromkeys(IMAGE_EXTENSIONS, FileCategory.IMAGE),
    **dict.fromkeys(AUDIO_EXTENSIONS, FileCategory.AUDIO),
    **dict.fromkeys(VIDEO_EXTENSIONS, FileCategory.VIDEO),
}

URL_FILE_TYPE = "url"
