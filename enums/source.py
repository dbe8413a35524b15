from enum import StrEnum, auto


class SourceStatus(StrEnum):
    NEW = "New"
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    FAILED = "Failed"
    UNKNOWN = "Unknown"


class FileSource(StrEnum):
    LOCAL = "local file"
    URL = "url"
    GITHUB = "github"
    YOUTUBE = "youtube"

    @classmethod
    def from_host(cls, host: str) -> "FileSource":
        """Resolve the source kind of an imported URL from its host.

        Args:
            host: The URL host name.

        Returns:
            The file source kind.

        """
        host = host.lower().removeprefix("www.")
        if host == "github.com":
            return cls.GITHUB
        if host in {"youtube.com", "m.youtube.com", "youtu.be"}:
            return cls.YOUTUBE
        return cls.URL


class PartitionMethod(StrEnum):
    BASIC = auto()
    OCR = auto()
    YOLOX = auto()
    ADVANCED = auto()
    GRAPHORLM = auto()


class FileCategory(StrEnum):
    DOCUMENT = auto()
    IMAGE = auto()
    AUDIO = auto()
    VIDEO = auto()

    @property
    def default_partition_method(self) -> PartitionMethod:
        if self == FileCategory.IMAGE:
            return PartitionMethod.OCR
        if self in {FileCategory.AUDIO, FileCategory.VIDEO}:
            return PartitionMethod.ADVANCED
        return PartitionMethod.BASIC
