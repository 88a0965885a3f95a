import itertools

import pytest

from imageflasher.selection import DriveInfo, SourceMetadata
from imageflasher.viewmodel import (
    SelectionSnapshot,
    gate_steps,
    get_drives_title,
    get_image_basename,
    pretty_bytes,
    project,
    reduced_flashing_infos,
)


@pytest.mark.parametrize("has_image,has_drive", list(itertools.product([False, True], repeat=2)))
def test_gates_follow_image_and_drive(has_image, has_drive):
    gates = gate_steps(SelectionSnapshot(has_image=has_image, has_drive=has_drive))
    assert gates.drive_step_disabled == (not has_image)
    assert gates.flash_step_disabled == (not has_image or not has_drive)


def test_drives_title_none_selected():
    assert get_drives_title([]) == "No targets found"


def test_drives_title_single_uses_description():
    assert get_drives_title([DriveInfo("/dev/sdb", description="X")]) == "X"


def test_drives_title_single_without_description():
    assert get_drives_title([DriveInfo("/dev/sdb")]) == "Untitled Device"


def test_drives_title_counts_multiple():
    drives = [DriveInfo(f"/dev/sd{c}", description=c) for c in "bcd"]
    assert get_drives_title(drives) == "3 Targets"


def test_image_basename_without_image():
    assert get_image_basename(None) == ""


def test_image_basename_prefers_source_drive():
    image = SourceMetadata(path="/dev/sdc", name="ignored", drive=DriveInfo("/dev/sdc", "SD Card"))
    assert get_image_basename(image) == "SD Card"


def test_image_basename_declared_name():
    image = SourceMetadata(path="/tmp/x/other.img", name="raspbian.img")
    assert get_image_basename(image) == "raspbian.img"


def test_image_basename_falls_back_to_path():
    assert get_image_basename(SourceMetadata(path="/tmp/x/raspbian.img")) == "raspbian.img"
    assert get_image_basename(SourceMetadata(path="C:\\images\\win.iso")) == "win.iso"


def test_project_without_image_keeps_invariant(selection, flash):
    snapshot = project(selection, flash)
    assert snapshot.has_image is False
    assert snapshot.image_name == ""
    assert snapshot.image_size is None
    assert snapshot.drive_title == "No targets found"


def test_project_reads_both_stores(selection, flash):
    selection.select_image(SourceMetadata(path="/tmp/a.img", size=2_000_000, logo="<svg/>"))
    selection.select_drive(DriveInfo("/dev/sdb", description="USB Stick", display_name="/dev/sdb"))
    flash.set_flashing_flag()

    snapshot = project(selection, flash)

    assert snapshot.is_flashing is True
    assert snapshot.has_image and snapshot.has_drive
    assert snapshot.image_name == "a.img"
    assert snapshot.image_logo == "<svg/>"
    assert snapshot.image_size == 2_000_000
    assert snapshot.drive_title == "USB Stick"
    assert snapshot.drive_label == "USB Stick (/dev/sdb)"


def test_project_is_idempotent(selection, flash):
    selection.select_image(SourceMetadata(path="/tmp/a.img", size=10))
    selection.select_drive(DriveInfo("/dev/sdb", description="USB"))
    assert project(selection, flash) == project(selection, flash)


def test_reduced_infos_formats_size():
    infos = reduced_flashing_infos(
        SelectionSnapshot(has_image=True, image_name="a.img", image_size=4_500_000_000, drive_title="2 Targets")
    )
    assert infos.image_size == "4.5 GB"
    assert infos.drive_title == "2 Targets"


@pytest.mark.parametrize("size,expected", [
    (None, ""),
    (0, "0 B"),
    (999, "999 B"),
    (1337, "1.34 kB"),
    (999_999, "1 MB"),
    (4_000_000_000, "4 GB"),
])
def test_pretty_bytes(size, expected):
    assert pretty_bytes(size) == expected
