"""
Tailwind CSS compiler adapter.

Drives the Tailwind CSS v3 standalone CLI, downloading it on first use.
Each compile runs in a fresh temporary directory holding the generated
``tailwind.config.js`` and ``input.css``; the CLI handles utility
generation, vendor prefixing, and ``--minify``.

Configuration resolution uses ``tailwindcss/resolveConfig`` through Node.js,
which must be able to require ``tailwindcss`` (see ``node_path``).
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import platform
import re
import shutil
import stat
import tempfile
import urllib.request
from pathlib import Path
from typing import Any

from presetsmith.core.errors import CompileError

logger = logging.getLogger(__name__)

_TAILWIND_VERSION = "3.4.17"
_TAILWIND_BASE_URL = (
    f"https://github.com/tailwindlabs/tailwindcss/releases/download/v{_TAILWIND_VERSION}"
)
_BINARY_NAME = "tailwindcss"
_VERSION_STAMP = "tailwindcss.version"

# Release assets are named tailwindcss-<os>-<arch>[.exe]
_RELEASE_OS = {"darwin": "macos", "linux": "linux", "windows": "windows"}
_RELEASE_ARCH = {"x86_64": "x64", "amd64": "x64", "arm64": "arm64", "aarch64": "arm64"}

# "/tmp/x/input.css:12:5: The `foo` class does not exist."
_LOCATION_RE = re.compile(r"input\.css:(\d+):(\d+):\s*(.+)")

# ".btn__icon {", "x-btn.x-btn-primary::part(component)"
_CLASS_RE = re.compile(r"\.(-?[A-Za-z_][\w-]*)")

_RESOLVE_SCRIPT = """
const resolveConfig = require('tailwindcss/resolveConfig');
let input = '';
process.stdin.on('data', (chunk) => { input += chunk; });
process.stdin.on('end', () => {
  process.stdout.write(JSON.stringify(resolveConfig(JSON.parse(input))));
});
"""


def _cache_dir(base: Path | None = None) -> Path:
    """Return the cache directory for CLI binaries."""
    cache = base or Path(
        os.environ.get("PRESETSMITH_CACHE_DIR", Path.home() / ".presetsmith" / "cache")
    )
    cache.mkdir(parents=True, exist_ok=True)
    return cache


def _get_platform_key() -> tuple[str, str]:
    """(system, machine) of the running interpreter, lowercased."""
    return platform.system().lower(), platform.machine().lower()


def _release_asset(system: str, machine: str) -> str | None:
    """Name of the standalone CLI release asset for a platform, if one is published."""
    os_name = _RELEASE_OS.get(system)
    arch = _RELEASE_ARCH.get(machine)
    if os_name is None or arch is None:
        return None
    suffix = ".exe" if os_name == "windows" else ""
    return f"tailwindcss-{os_name}-{arch}{suffix}"


def _download_binary(url: str, target: Path, stamp: Path) -> Path | None:
    logger.info("Downloading Tailwind CSS CLI v%s from %s", _TAILWIND_VERSION, url)
    try:
        with urllib.request.urlopen(url, timeout=60) as resp:
            target.write_bytes(resp.read())
    except OSError as e:
        logger.error("Failed to download Tailwind CSS CLI: %s", e)
        return None

    target.chmod(target.stat().st_mode | stat.S_IEXEC)
    stamp.write_text(_TAILWIND_VERSION)
    return target


def get_tailwind_binary(cache_dir: Path | None = None) -> Path | None:
    """
    Locate the Tailwind CSS CLI.

    Lookup order: ``tailwindcss`` on PATH, then a cached download whose
    version stamp matches, then a fresh download into the cache.

    Returns:
        Path to the binary, or None if it is unavailable.
    """
    on_path = shutil.which(_BINARY_NAME)
    if on_path:
        return Path(on_path)

    system, machine = _get_platform_key()
    asset = _release_asset(system, machine)
    if asset is None:
        logger.warning(
            "No Tailwind CSS standalone CLI is published for %s/%s; "
            "set PRESETSMITH_TAILWIND_BIN to a local build.",
            system,
            machine,
        )
        return None

    cache = _cache_dir(cache_dir)
    binary = cache / _BINARY_NAME
    stamp = cache / _VERSION_STAMP
    if binary.is_file() and stamp.is_file() and stamp.read_text().strip() == _TAILWIND_VERSION:
        return binary

    return _download_binary(f"{_TAILWIND_BASE_URL}/{asset}", binary, stamp)


def template_classes(template: str) -> list[str]:
    """Class names used in the template's selectors, in first-seen order."""
    return list(dict.fromkeys(_CLASS_RE.findall(template)))


def write_config_module(config: dict[str, Any], path: Path, template: str = "") -> Path:
    """Write the configuration as a CommonJS module the CLI can load.

    Without an explicit ``content`` entry the template's own class names are
    the only content, so every component rule survives Tailwind's purge.
    """
    module_config = dict(config)
    module_config.setdefault(
        "content", [{"raw": " ".join(template_classes(template)), "extension": "html"}]
    )
    path.write_text(f"module.exports = {json.dumps(module_config, indent=2)};\n")
    return path


def compile_error_from_output(stderr: str, template: str) -> CompileError:
    """Translate CLI error output into a CompileError with the offending line."""
    match = _LOCATION_RE.search(stderr)
    if match:
        line_no = int(match.group(1))
        lines = template.splitlines()
        source = lines[line_no - 1].strip() if 0 < line_no <= len(lines) else None
        return CompileError(match.group(3).strip(), source=source)

    lines = [line.strip() for line in stderr.splitlines() if line.strip()]
    message = next((line for line in lines if "Error" in line), lines[-1] if lines else "")
    return CompileError(message or "Tailwind CSS build failed")


class TailwindCliCompiler:
    """StyleCompiler backed by the Tailwind CSS standalone CLI."""

    def __init__(
        self,
        binary: Path | None = None,
        cache_dir: Path | None = None,
        node_path: Path | None = None,
        timeout: float = 60.0,
    ):
        self._binary = binary
        self.cache_dir = cache_dir
        self.node_path = node_path
        self.timeout = timeout

    async def _get_binary(self) -> Path:
        if self._binary is None:
            self._binary = await asyncio.to_thread(get_tailwind_binary, self.cache_dir)
        if self._binary is None:
            raise CompileError(
                "Tailwind CSS CLI not available. Install it with: npm install -g tailwindcss"
            )
        return self._binary

    async def compile(self, config: dict[str, Any], template: str, *, minify: bool = False) -> str:
        tw_bin = await self._get_binary()

        with tempfile.TemporaryDirectory() as tmp:
            tmp_dir = Path(tmp)
            input_css = tmp_dir / "input.css"
            output_css = tmp_dir / "index.css"
            input_css.write_text(template)
            config_js = write_config_module(config, tmp_dir / "tailwind.config.js", template)

            cmd = [
                str(tw_bin),
                "--config",
                str(config_js),
                "--input",
                str(input_css),
                "--output",
                str(output_css),
            ]
            if minify:
                cmd.append("--minify")

            logger.debug("Building CSS: %s", " ".join(cmd))
            stderr = await self._run(cmd, cwd=tmp_dir)
            if stderr is not None:
                raise compile_error_from_output(stderr, template)

            return output_css.read_text()

    async def _run(self, cmd: list[str], cwd: Path) -> str | None:
        """Run the CLI; returns stderr on failure, None on success."""
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                cwd=str(cwd),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise CompileError(f"Tailwind CSS CLI not found at {cmd[0]}") from e

        _, stderr = await self._communicate(proc, None, "Tailwind CSS build")
        if proc.returncode != 0:
            return stderr.decode("utf-8", errors="replace")
        return None

    async def _communicate(
        self, proc: asyncio.subprocess.Process, stdin: bytes | None, action: str
    ) -> tuple[bytes, bytes]:
        """Wait for the process; on timeout it is killed and reaped before raising."""
        try:
            return await asyncio.wait_for(proc.communicate(stdin), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            proc.kill()
            await proc.wait()
            raise CompileError(f"{action} timed out") from e

    async def resolve_config(self, config: dict[str, Any]) -> dict[str, Any]:
        node = shutil.which("node")
        if node is None:
            raise CompileError("Resolving configuration requires Node.js with tailwindcss installed")

        env = dict(os.environ)
        if self.node_path is not None:
            env["NODE_PATH"] = str(self.node_path)

        try:
            proc = await asyncio.create_subprocess_exec(
                node,
                "-e",
                _RESOLVE_SCRIPT,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=env,
            )
        except FileNotFoundError as e:
            raise CompileError(f"Node.js not found at {node}") from e

        stdout, stderr = await self._communicate(
            proc, json.dumps(config).encode("utf-8"), "Configuration resolution"
        )
        if proc.returncode != 0:
            raise compile_error_from_output(stderr.decode("utf-8", errors="replace"), "")

        try:
            resolved: dict[str, Any] = json.loads(stdout)
        except json.JSONDecodeError as e:
            raise CompileError(f"Configuration resolution returned invalid JSON: {e}") from e
        return resolved
