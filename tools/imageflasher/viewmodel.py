"""Display-ready projection of the selection and flash stores.

Everything here is a pure function of the stores' current state: no
caching, no I/O. The page calls :func:`project` on every store
notification and replaces its previous snapshot with the result.
"""

import os
from dataclasses import dataclass

from .resources import NO_TARGETS_TITLE, UNTITLED_DEVICE_TITLE

_BYTE_UNITS = ("B", "kB", "MB", "GB", "TB", "PB")


@dataclass(frozen=True)
class SelectionSnapshot:
    is_flashing: bool = False
    has_image: bool = False
    has_drive: bool = False
    image_name: str = ""
    image_logo: str | None = None
    image_size: int | None = None
    drive_title: str = NO_TARGETS_TITLE
    drive_label: str = ""


@dataclass(frozen=True)
class StepGates:
    drive_step_disabled: bool
    flash_step_disabled: bool


def get_drives_title(drives) -> str:
    if len(drives) == 1:
        return drives[0].description or UNTITLED_DEVICE_TITLE
    if not drives:
        return NO_TARGETS_TITLE
    return f"{len(drives)} Targets"


def get_image_basename(image) -> str:
    if image is None:
        return ""
    if image.drive is not None:
        return image.drive.description
    # Paths may come from either platform
    basename = os.path.basename(image.path.replace("\\", "/"))
    return image.name or basename


def project(selection, flash) -> SelectionSnapshot:
    image = selection.get_image()
    drives = selection.get_selected_drives()
    return SelectionSnapshot(
        is_flashing=flash.is_flashing(),
        has_image=image is not None,
        has_drive=bool(drives),
        image_name=get_image_basename(image),
        image_logo=image.logo if image is not None else None,
        image_size=image.size if image is not None else None,
        drive_title=get_drives_title(drives),
        drive_label=selection.get_drive_list_label(),
    )


def gate_steps(snapshot: SelectionSnapshot) -> StepGates:
    return StepGates(
        drive_step_disabled=not snapshot.has_image,
        flash_step_disabled=not snapshot.has_image or not snapshot.has_drive,
    )


@dataclass(frozen=True)
class ReducedFlashingInfos:
    """Summary shown beside the promo panel in split view."""

    image_logo: str | None
    image_name: str
    image_size: str
    drive_title: str
    drive_label: str


def reduced_flashing_infos(snapshot: SelectionSnapshot) -> ReducedFlashingInfos:
    return ReducedFlashingInfos(
        image_logo=snapshot.image_logo,
        image_name=snapshot.image_name,
        image_size=pretty_bytes(snapshot.image_size),
        drive_title=snapshot.drive_title,
        drive_label=snapshot.drive_label,
    )


def pretty_bytes(size: int | None) -> str:
    """Human readable size in decimal units, e.g. ``1.34 kB``."""
    if not isinstance(size, int) or isinstance(size, bool):
        return ""
    value = float(size)
    unit = 0
    # Compare the rounded value so 999999 becomes "1 MB", not "1e+03 kB"
    while float(f"{value:.3g}") >= 1000 and unit < len(_BYTE_UNITS) - 1:
        value /= 1000
        unit += 1
    if unit == 0:
        return f"{size} B"
    return f"{value:.3g} {_BYTE_UNITS[unit]}"
