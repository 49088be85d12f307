"""
commands.py

Responsibility: one handler per gojo subcommand.

Each handler takes the raw tokens after the subcommand plus the invocation
directory, and returns a process exit code. Handlers never change the process
working directory or environment. `init` derives every path from `cwd`;
every other command trusts the persisted `project_root`/`build_dir`.

Flag parsing: `arguments.py`. Persistence: `config.py`. File text:
`renderer.py`. External tools: `process.py`.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import tempfile
import time
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

from rich.markup import escape

from gojo import renderer
from gojo.arguments import canonicalize, is_flag, parse_arguments, require_choice, require_value
from gojo.config import (
    COMPILERS,
    CONFIG_FILE,
    CXX_STANDARDS,
    DEFAULT_BUILD_DIR,
    DEFAULT_STD,
    DEFAULT_STYLE,
    FORMAT_STYLES,
    HEADER_EXTENSIONS,
    SOURCE_EXTENSIONS,
    STYLE_FILE,
    ProjectConfig,
    default_hdr_ext,
    default_src_ext,
    load_config,
    write_config,
)
from gojo.console import console, elapsed, status
from gojo.errors import ConfigError, NotFoundError, UsageError
from gojo.process import cpu_count, run_interactive, run_tool
from gojo.sources import collect_source_files
from gojo.usage import COMMAND_HELP, HELP

logger = logging.getLogger(__name__)

DEPS_DIR = "_deps"
STYLE_FILE_NAME = ".clang-format"
TEST_COLOR_ENV = "GTEST_COLOR"

Handler = Callable[..., int]


def _aliases(*groups: tuple[str, ...]) -> dict[str, str]:
    """Map every spelling in each group to the group's first (canonical) spelling."""
    return {spelling: group[0] for group in groups for spelling in group}


INIT_FLAGS = _aliases(
    ("--std",),
    ("--src-extension", "-s"),
    ("--hdr-extension", "-h"),
    ("--build-dir", "-b"),
    ("--compiler",),
    ("--description",),
    ("--no-test",),
    ("--no-git",),
    ("--quiet", "-q"),
    ("--help",),
)
BUILD_FLAGS = _aliases(("--release", "-r"), ("--tests", "-t"), ("--clean", "-c"), ("--quiet", "-q"), ("--help",))
FMT_FLAGS = _aliases(("--style",), ("--file",), ("--in-place", "-i"), ("--help",))
CHECK_FLAGS = _aliases(("--quiet", "-q"), ("--help",))
HELP_ONLY = _aliases(("--help",))


def _parse(args: Sequence[str], accepted: Mapping[str, str], command: str) -> dict[str, str | None] | None:
    """Parse and validate flags; print the command help and return None on --help."""
    flags = canonicalize(parse_arguments(args), accepted, command)
    if "--help" in flags:
        console.print(COMMAND_HELP[command])
        return None
    return flags


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------


def _validate_name(name: str) -> str:
    if is_flag(name) or name in {".", ".."} or Path(name).name != name:
        raise UsageError(f"invalid project name '{name}'\ngojo init <name> [options]", command="init")
    return name


def _project_files(
    *,
    name: str,
    std: str,
    src: str,
    hdr: str,
    build_name: str,
    compiler: str | None,
    description: str,
    create_tests: bool,
) -> dict[str, str]:
    files = {
        "CMakeLists.txt": renderer.root_cmake_lists(name, std, src, compiler=compiler, description=description),
        f"src/main.{src}": renderer.main_source(hdr),
        f"src/lib/hello_world.{src}": renderer.lib_source(hdr),
        f"src/lib/hello_world.{hdr}": renderer.lib_header(hdr),
        "src/lib/CMakeLists.txt": renderer.lib_cmake_lists(src),
        "README.md": renderer.readme(name, description),
        ".clang-tidy": renderer.clang_tidy(),
        ".gitignore": renderer.gitignore(build_name),
    }
    if create_tests:
        files[f"test/hello_world_test.{src}"] = renderer.test_source(hdr)
        files["test/CMakeLists.txt"] = renderer.test_cmake_lists(src)
    return files


def init_cmd(args: Sequence[str], *, cwd: str | Path) -> int:
    if not args:
        raise UsageError("gojo init <name> [options]", command="init")
    if args[0] == "--help":
        console.print(COMMAND_HELP["init"])
        return 0

    name = _validate_name(args[0])
    flags = _parse(args[1:], INIT_FLAGS, "init")
    if flags is None:
        return 0

    std = require_choice("--std", flags["--std"], CXX_STANDARDS, "init") if "--std" in flags else DEFAULT_STD
    src = (
        require_choice("--src-extension", flags["--src-extension"], SOURCE_EXTENSIONS, "init")
        if "--src-extension" in flags
        else default_src_ext()
    )
    hdr = (
        require_choice("--hdr-extension", flags["--hdr-extension"], HEADER_EXTENSIONS, "init")
        if "--hdr-extension" in flags
        else default_hdr_ext()
    )
    build_name = require_value("--build-dir", flags["--build-dir"], "init") if "--build-dir" in flags else DEFAULT_BUILD_DIR
    compiler = require_choice("--compiler", flags["--compiler"], COMPILERS, "init") if "--compiler" in flags else None
    description = require_value("--description", flags["--description"], "init") if "--description" in flags else ""
    create_tests = "--no-test" not in flags
    create_git = "--no-git" not in flags
    quiet = "--quiet" in flags

    project_root = Path(cwd).absolute() / name
    build_dir = project_root / build_name
    files = _project_files(
        name=name,
        std=std,
        src=src,
        hdr=hdr,
        build_name=build_name if not Path(build_name).is_absolute() else DEFAULT_BUILD_DIR,
        compiler=compiler,
        description=description,
        create_tests=create_tests,
    )
    config = ProjectConfig(
        project_root=str(project_root),
        build_dir=str(build_dir),
        name=name,
        std=std,
        src_ext=src,
        hdr_ext=hdr,
        fmt_style=DEFAULT_STYLE,
        clang_tidy=True,
        cppcheck=True,
        quiet=quiet,
    )

    # Raises FileExistsError when the target already exists.
    project_root.mkdir()
    (project_root / "src" / "lib").mkdir(parents=True)
    build_dir.mkdir(parents=True, exist_ok=True)
    if create_tests:
        (project_root / "test").mkdir()

    for rel, text in files.items():
        (project_root / rel).write_text(text, encoding="utf-8", newline="\n")
        logger.debug("Wrote %s", project_root / rel)

    config_file = write_config(config)

    if create_git:
        status("\n[magenta]Initializing Git repository...[/magenta]", quiet=quiet)
        run_tool(["git", "init"], cwd=project_root, quiet=quiet)

    status(
        f"\n[bold green]Created gojo project:[/bold green] {escape(name)}\n"
        f"\t[bold magenta]root:[/bold magenta] {escape(str(project_root))}\n"
        f"\t[bold magenta]config:[/bold magenta] {escape(str(config_file))}",
        quiet=quiet,
    )
    return 0


# ---------------------------------------------------------------------------
# build / clean
# ---------------------------------------------------------------------------


def _generate(config: ProjectConfig, *, build_type: str, testing: bool, static_check: bool = False) -> None:
    cmd = [
        "cmake",
        f"-DCMAKE_BUILD_TYPE={build_type}",
        f"-DBUILD_TESTING={'ON' if testing else 'OFF'}",
    ]
    if static_check:
        cmd.append("-DSTATIC_CHECK=ON")
    cmd += ["-S", config.project_root, "-B", config.build_dir]
    # Generator chatter is discarded; its errors still reach stderr.
    run_tool(cmd, cwd=config.project_root, quiet=True)


def _compile(config: ProjectConfig, *, quiet: bool) -> None:
    run_tool(["cmake", "--build", config.build_dir, "-j", str(cpu_count())], cwd=config.project_root, quiet=quiet)


def build_cmd(args: Sequence[str], *, cwd: str | Path) -> int:
    flags = _parse(args, BUILD_FLAGS, "build")
    if flags is None:
        return 0

    config = load_config(cwd)
    quiet = "--quiet" in flags or config.quiet
    descriptor = config.root_path / "CMakeLists.txt"
    if not descriptor.is_file():
        raise NotFoundError(f"no CMakeLists.txt found in {config.project_root}", hint="try 'gojo init <name>'")

    if "--clean" in flags:
        clean_build_dir(config.build_path)
    config.build_path.mkdir(parents=True, exist_ok=True)

    build_type = "Release" if "--release" in flags else "Debug"
    status(f"\n[magenta]Initializing CMake in[/magenta] {escape(config.build_dir)}", quiet=quiet)
    _generate(config, build_type=build_type, testing="--tests" in flags)

    status(
        f"[bold magenta]Compiling[/bold magenta] {escape(config.name)} [bold magenta]in[/bold magenta] "
        f"[bold cyan]{build_type}[/bold cyan] [bold magenta]mode[/bold magenta]\n",
        quiet=quiet,
    )
    start = time.perf_counter()
    _compile(config, quiet=quiet)
    status(f"\n[bold green]Build successful[/bold green] ({elapsed(start)})\n", quiet=quiet)
    return 0


def clean_build_dir(build_dir: Path) -> None:
    """Recreate `build_dir` empty, except for a `_deps` subdirectory which survives."""
    build_dir.mkdir(parents=True, exist_ok=True)
    deps = build_dir / DEPS_DIR
    if not deps.is_dir():
        shutil.rmtree(build_dir)
        build_dir.mkdir()
        return

    # Must share a filesystem with build_dir for rename().
    holding = Path(tempfile.mkdtemp(prefix=".gojo-deps-", dir=build_dir.parent))
    stashed = holding / DEPS_DIR
    deps.rename(stashed)
    try:
        shutil.rmtree(build_dir)
    finally:
        build_dir.mkdir(parents=True, exist_ok=True)
        stashed.rename(deps)
        holding.rmdir()


def clean_cmd(args: Sequence[str], *, cwd: str | Path) -> int:
    if _parse(args, HELP_ONLY, "clean") is None:
        return 0
    config = load_config(cwd)
    clean_build_dir(config.build_path)
    status(f"[bold green]Cleaned[/bold green] {escape(config.build_dir)}", quiet=config.quiet)
    return 0


# ---------------------------------------------------------------------------
# run / test
# ---------------------------------------------------------------------------


def run_cmd(args: Sequence[str], *, cwd: str | Path) -> int:
    if args and args[0] == "--help":
        console.print(COMMAND_HELP["run"])
        return 0

    config = load_config(cwd)
    if not config.build_path.is_dir():
        raise NotFoundError("no build directory discovered for this project", hint="try 'gojo build'")

    if args and not is_flag(args[0]):
        exe = args[0]
        local = Path(cwd) / exe
        return run_interactive([str(local) if local.is_file() else exe, *args[1:]], cwd=cwd)

    target = config.build_path / config.name
    if not config.name or not target.is_file():
        raise NotFoundError("no executable target found", hint="try 'gojo build'")
    return run_interactive([str(target), *args], cwd=cwd)


def test_cmd(args: Sequence[str], *, cwd: str | Path) -> int:
    if _parse(args, HELP_ONLY, "test") is None:
        return 0
    config = load_config(cwd)
    config.build_path.mkdir(parents=True, exist_ok=True)

    env = dict(os.environ)
    env[TEST_COLOR_ENV] = "1"
    run_tool(["ctest", "-V"], cwd=config.build_path, env=env)
    console.print()
    return 0


# ---------------------------------------------------------------------------
# fmt / check
# ---------------------------------------------------------------------------


def _collect(config: ProjectConfig) -> list[Path]:
    files: list[Path] = []
    for sub in ("src", "test"):
        root = config.root_path / sub
        if root.is_dir():
            files += collect_source_files(root, config.src_ext, config.hdr_ext)
    return files


def _split_args(key: str, text: str) -> list[str]:
    try:
        return shlex.split(text)
    except ValueError as e:
        raise ConfigError(f"cannot split '{key}' in {CONFIG_FILE}: {e}") from e


def fmt_cmd(args: Sequence[str], *, cwd: str | Path) -> int:
    flags = _parse(args, FMT_FLAGS, "fmt")
    if flags is None:
        return 0

    config = load_config(cwd)
    style = config.fmt_style or DEFAULT_STYLE
    if "--style" in flags:
        style = require_choice("--style", flags["--style"], FORMAT_STYLES, "fmt")
    if "--file" in flags:
        if not (config.root_path / STYLE_FILE_NAME).is_file():
            raise NotFoundError(f"no {STYLE_FILE_NAME} file found", hint="see 'gojo help fmt'")
        style = STYLE_FILE

    config = config.with_style(style)
    write_config(config)

    files = _collect(config)
    if not files:
        status("[yellow]No source files to format[/yellow]", quiet=config.quiet)
        return 0

    cmd = ["clang-format", f"-style={style}", "-i", *_split_args("fmt_args", config.fmt_args), *map(str, files)]
    run_tool(cmd, cwd=config.project_root)
    status(f"[bold green]Formatted[/bold green] {len(files)} files ({escape(style)} style)", quiet=config.quiet)
    return 0


def _timed(label: str, action: Callable[[], None], *, quiet: bool) -> None:
    status(f"[magenta]Running {label}...[/magenta]\n", quiet=quiet)
    start = time.perf_counter()
    action()
    status(f"\n[bold green]{label} passed[/bold green] ({elapsed(start)})\n", quiet=quiet)


def check_cmd(args: Sequence[str], *, cwd: str | Path) -> int:
    flags = _parse(args, CHECK_FLAGS, "check")
    if flags is None:
        return 0

    config = load_config(cwd)
    quiet = "--quiet" in flags or config.quiet
    config.build_path.mkdir(parents=True, exist_ok=True)

    if not (config.cpplint or config.cppcheck or config.clang_tidy):
        status("[yellow]No analyzers enabled in .gojo[/yellow]", quiet=quiet)
        return 0

    status("[bold magenta]Running checks...[/bold magenta]", quiet=quiet)
    start = time.perf_counter()
    files = [str(f) for f in _collect(config)] if (config.cpplint or config.cppcheck) else []

    if config.cpplint:
        cmd = [
            "cpplint",
            f"--extensions={config.src_ext},{config.hdr_ext}",
            *_split_args("cpplint_args", config.cpplint_args),
            *files,
        ]
        _timed("cpplint", lambda: run_tool(cmd, cwd=config.project_root), quiet=quiet)

    if config.cppcheck:
        cmd = [
            "cppcheck",
            "--enable=warning,performance,portability",
            "--force",
            "--language=c++",
            f"--std=c++{config.std}",
            *_split_args("cppcheck_args", config.cppcheck_args),
            *files,
        ]
        _timed("cppcheck", lambda: run_tool(cmd, cwd=config.project_root), quiet=quiet)

    if config.clang_tidy:

        def tidy() -> None:
            status(f"[magenta]Initializing CMake in[/magenta] {escape(config.build_dir)}", quiet=quiet)
            _generate(config, build_type="Release", testing=True, static_check=True)
            status(
                f"[bold magenta]Compiling[/bold magenta] {escape(config.name)} [bold magenta]in[/bold magenta] "
                "[bold cyan]Release[/bold cyan] [bold magenta]mode[/bold magenta]",
                quiet=quiet,
            )
            _compile(config, quiet=True)

        _timed("clang-tidy", tidy, quiet=quiet)

    status(f"[bold green]All checks passed[/bold green] ({elapsed(start)})\n", quiet=quiet)
    return 0


# ---------------------------------------------------------------------------
# help
# ---------------------------------------------------------------------------


def help_cmd(args: Sequence[str], *, cwd: str | Path | None = None) -> int:
    if not args:
        console.print(HELP)
        return 0
    topic = args[0]
    if topic not in COMMAND_HELP:
        raise UsageError(f"command not recognized: {topic}")
    console.print(COMMAND_HELP[topic])
    return 0


COMMANDS: dict[str, Handler] = {
    "init": init_cmd,
    "build": build_cmd,
    "run": run_cmd,
    "test": test_cmd,
    "clean": clean_cmd,
    "fmt": fmt_cmd,
    "check": check_cmd,
    "help": help_cmd,
}
