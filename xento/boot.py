"""Builds a bootable disk image for a kernel binary and runs it in QEMU."""

from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Optional, Sequence

__all__ = ["QEMU", "RUN_ARGS", "create_disk_image", "main"]

QEMU = "qemu-system-x86_64"
RUN_ARGS = ("--no-reboot", "-s", "-d", "int,cpu_reset,guest_errors", "-D", "qemu.log")
_BOOTLOADER_PACKAGE = "bootloader"


def _cargo() -> str:
    return os.environ.get("CARGO", "cargo")


def _cargo_output(*args: str) -> str:
    result = subprocess.run(
        [_cargo(), *args], capture_output=True, text=True, check=True
    )
    return result.stdout


def _locate_bootloader() -> Path:
    metadata = json.loads(_cargo_output("metadata", "--format-version", "1"))
    for package in metadata.get("packages", []):
        if package.get("name") == _BOOTLOADER_PACKAGE:
            return Path(package["manifest_path"])
    raise RuntimeError(f"dependency `{_BOOTLOADER_PACKAGE}` not found")


def _locate_manifest() -> Path:
    output = _cargo_output("locate-project", "--workspace", "--message-format", "plain")
    return Path(output.strip())


def create_disk_image(kernel_binary_path: Path) -> Path:
    """Build the BIOS disk image for a kernel binary and return its path."""
    kernel_binary_path = Path(kernel_binary_path)
    bootloader_manifest = _locate_bootloader()
    kernel_manifest = _locate_manifest()
    out_dir = kernel_binary_path.parent

    command = [
        _cargo(),
        "builder",
        "--kernel-manifest",
        str(kernel_manifest),
        "--kernel-binary",
        str(kernel_binary_path),
        "--target-dir",
        str(kernel_manifest.parent / "target"),
        "--out-dir",
        str(out_dir),
        "--quiet",
    ]
    if subprocess.run(command, cwd=bootloader_manifest.parent).returncode != 0:
        raise RuntimeError("build failed")

    disk_image = out_dir / f"boot-bios-{kernel_binary_path.name}.img"
    if not disk_image.exists():
        raise FileNotFoundError(
            f"Disk image does not exist at {disk_image} after bootloader build"
        )
    return disk_image


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Build the disk image and boot it, unless ``--no-run`` is given."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        raise SystemExit("usage: boot KERNEL_BINARY [--no-run]")
    kernel_binary_path = Path(args[0]).resolve(strict=True)
    no_boot = False
    if len(args) > 1:
        if args[1] != "--no-run":
            raise SystemExit(f"unexpected argument `{args[1]}`")
        no_boot = True

    image = create_disk_image(kernel_binary_path)
    if no_boot:
        print(f"Created disk image at `{image}`")
        return 0

    result = subprocess.run([QEMU, "-drive", f"format=raw,file={image}", *RUN_ARGS])
    if result.returncode == 0:
        return 0
    return result.returncode if result.returncode > 0 else 1


if __name__ == "__main__":
    sys.exit(main())