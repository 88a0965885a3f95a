"""Selected source image and target drives."""

from dataclasses import dataclass

from .store import Store


@dataclass(frozen=True)
class DriveInfo:
    device: str
    description: str = ""
    display_name: str = ""
    size: int | None = None


@dataclass(frozen=True)
class SourceMetadata:
    """Image chosen in the source step.

    ``drive`` is set when the source is itself a drive being cloned.
    """

    path: str
    name: str = ""
    size: int | None = None
    logo: str | None = None
    drive: DriveInfo | None = None
    support_url: str | None = None


class SelectionState:
    """Holds the current image and the ordered list of target drives."""

    def __init__(self, store: Store):
        self._store = store
        self._image: SourceMetadata | None = None
        self._drives: list[DriveInfo] = []

    # -- mutations --

    def select_image(self, image: SourceMetadata) -> None:
        self._image = image
        # A drive cannot be both source and target
        if image.drive is not None:
            self._drives = [
                d for d in self._drives if d.device != image.drive.device
            ]
        self._store.notify()

    def deselect_image(self) -> None:
        self._image = None
        self._store.notify()

    def select_drive(self, drive: DriveInfo) -> None:
        if any(d.device == drive.device for d in self._drives):
            return
        self._drives.append(drive)
        self._store.notify()

    def deselect_drive(self, device: str) -> None:
        self._drives = [d for d in self._drives if d.device != device]
        self._store.notify()

    def clear(self) -> None:
        self._image = None
        self._drives = []
        self._store.notify()

    # -- queries --

    def has_image(self) -> bool:
        return self._image is not None

    def has_drive(self) -> bool:
        return bool(self._drives)

    def get_image(self) -> SourceMetadata | None:
        return self._image

    def get_selected_drives(self) -> list[DriveInfo]:
        return list(self._drives)

    def get_drive_list_label(self) -> str:
        return "\n".join(
            f"{d.description} ({d.display_name})" for d in self._drives
        )
