import shutil
from pathlib import Path

import pytest

from config_drive.core.errors import MountError, UnmountError
from config_drive.discovery import fs_inspector
from config_drive.storage.drive_mounter import DriveMounter


def blkid_export(fstype: str, label: str = None, **extra) -> str:
    """Format output the way `blkid -p -o export` prints it."""
    # blkid escapes shell metacharacters with a backslash
    def escape(value):
        return str(value).replace(" ", "\\ ")

    lines = []
    if label is not None:
        lines.append("LABEL=" + escape(label))
    for key, value in extra.items():
        lines.append(f"{key.upper()}={escape(value)}")
    lines.append(f"TYPE={fstype}")
    lines.append("USAGE=filesystem")
    return "\n".join(lines)


def iso9660_blkid(label: str) -> str:
    return blkid_export("iso9660", label, block_size=2048, version="Joliet Extension")


def vfat_blkid(label: str) -> str:
    return blkid_export("vfat", label, sec_type="msdos", version="FAT32")


class FakeHost:
    """A fake sysfs block class and /dev directory, with recorded blkid output."""

    def __init__(self, root: Path):
        self.sys_block = root / "sys" / "class" / "block"
        self.dev = root / "dev"
        self.sys_block.mkdir(parents=True)
        self.dev.mkdir()
        self.blkid = {}
        self.commands = []

    @property
    def block_glob(self) -> str:
        return str(self.sys_block / "*")

    def add_device(self, name: str, blkid: str = None, present: bool = True) -> str:
        """
        Register a block device. Without blkid output the device carries
        no filesystem; without present the device node is missing.
        """
        (self.sys_block / name).mkdir()
        node = self.dev / name
        if present:
            node.write_bytes(b"\x00" * 4096)
        if blkid is not None:
            self.blkid[str(node)] = blkid
        return str(node)

    def run_command(self, command, check=True, capture_output=True, timeout=30):
        self.commands.append(command)
        device = command[-1]
        if device in self.blkid:
            return True, self.blkid[device], ""
        # blkid -p exits 2 with no output when nothing is detected
        return False, "", ""


class FakeMounter(DriveMounter):
    """Mounts by copying a prepared directory tree onto the mount point."""

    def __init__(self, media=None, mount_error=None, unmount_error=None, **kwargs):
        super().__init__(**kwargs)
        self.media = dict(media or {})
        self.mount_error = mount_error
        self.unmount_error = unmount_error
        self.active = {}
        self.mount_calls = []
        self.unmount_calls = []

    def mount(self, device, mount_point, fstype="iso9660"):
        self.mount_calls.append((device, Path(mount_point), fstype))
        if self.mount_error is not None:
            raise self.mount_error
        if device not in self.media:
            raise MountError(f"Mount command failed for {device}: no medium", device)
        shutil.copytree(self.media[device], mount_point, dirs_exist_ok=True)
        self.active[Path(mount_point)] = device

    def unmount(self, mount_point):
        mount_point = Path(mount_point)
        self.unmount_calls.append(mount_point)
        if self.unmount_error is not None:
            raise self.unmount_error
        if mount_point not in self.active:
            raise UnmountError(f"Failed to unmount {mount_point}: not mounted")
        for child in mount_point.iterdir():
            if child.is_dir():
                shutil.rmtree(child)
            else:
                child.unlink()
        del self.active[mount_point]


def make_medium(root: Path, userdata=None, metadata=None) -> Path:
    """Lay out an openstack/latest tree for a fake medium."""
    latest = root / "openstack" / "latest"
    latest.mkdir(parents=True)
    if userdata is not None:
        (latest / "user_data").write_bytes(userdata)
    if metadata is not None:
        (latest / "meta_data.json").write_bytes(metadata)
    return root


@pytest.fixture
def fake_host(tmp_path, monkeypatch):
    host = FakeHost(tmp_path / "host")
    monkeypatch.setattr(fs_inspector, "run_command", host.run_command)
    return host


@pytest.fixture
def media_root(tmp_path):
    root = tmp_path / "media"
    root.mkdir()
    return root
