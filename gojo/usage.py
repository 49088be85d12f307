"""
usage.py

Responsibility: the static help text for `gojo help` and each `--help` flag,
written in Rich markup.
"""

from __future__ import annotations

from gojo import __version__

BANNER = f"[bold magenta]gojo[/bold magenta] {__version__}\n"

HELP = """[bold green]gojo:[/bold green] a modern build system for C++

[bold green]Usage:[/bold green] [bold cyan]gojo <COMMAND> [OPTIONS][/bold cyan]

[bold green]Commands:[/bold green]
    [bold cyan]init <NAME> [OPTIONS][/bold cyan]       create a new gojo project in ./<NAME>
    [bold cyan]build [OPTIONS][/bold cyan]             build the project with CMake
    [bold cyan]run [<PATH>] [ARGS...][/bold cyan]      run the compiled executable
    [bold cyan]test[/bold cyan]                        run unit tests with CTest
    [bold cyan]clean[/bold cyan]                       remove build files and CMake cache
    [bold cyan]fmt [OPTIONS][/bold cyan]               format sources with clang-format
    [bold cyan]check [OPTIONS][/bold cyan]             run the static analyzers enabled in .gojo
    [bold cyan]help <COMMAND>[/bold cyan]              print help

See '[bold cyan]gojo help <COMMAND>[/bold cyan]' for more information on a specific command.
Flags that take no value must come last or be written as [bold cyan]--flag=1[/bold cyan].
"""

COMMAND_HELP: dict[str, str] = {
    "init": """[bold green]Usage:[/bold green] [bold cyan]gojo init <NAME> [OPTIONS][/bold cyan]

Create ./<NAME> with a CMake project skeleton, a git repository and a .gojo config file.

[bold green]Options:[/bold green]
    --std <11|14|17|20|23>                C++ standard (default: 20)
    -s, --src-extension <cc|cpp|cxx|c++>  source file extension
    -h, --hdr-extension <h|hpp|hxx|h++>   header file extension
    -b, --build-dir <DIR>                 build directory (default: build)
    --compiler <g++|clang++>              pin CMAKE_CXX_COMPILER
    --description <TEXT>                  project description
    --no-test                             skip the test/ directory
    --no-git                              skip 'git init'
    -q, --quiet                           suppress non-essential output
""",
    "build": """[bold green]Usage:[/bold green] [bold cyan]gojo build [OPTIONS][/bold cyan]

Configure the project with CMake and compile it.

[bold green]Options:[/bold green]
    -r, --release   optimized build (default: debug)
    -t, --tests     build unit tests
    -c, --clean     run 'gojo clean' first
    -q, --quiet     discard compiler output
""",
    "run": """[bold green]Usage:[/bold green] [bold cyan]gojo run [<PATH>] [ARGS...][/bold cyan]

Run <PATH>, or the project executable <build_dir>/<name>, forwarding ARGS.
""",
    "test": """[bold green]Usage:[/bold green] [bold cyan]gojo test[/bold cyan]

Run 'ctest -V' in the build directory. Build with 'gojo build --tests' first.
""",
    "clean": """[bold green]Usage:[/bold green] [bold cyan]gojo clean[/bold cyan]

Recreate the build directory, keeping fetched dependencies in <build_dir>/_deps.
""",
    "fmt": """[bold green]Usage:[/bold green] [bold cyan]gojo fmt [OPTIONS][/bold cyan]

Format every source and header under src/ and test/ with clang-format.
The chosen style is saved to .gojo and reused by later runs.

[bold green]Options:[/bold green]
    --style <llvm|google|chromium|mozilla|webkit|microsoft|gnu>
    --file            use the .clang-format file at the project root
    -i, --in-place    edit files in place (always on)
""",
    "check": """[bold green]Usage:[/bold green] [bold cyan]gojo check [OPTIONS][/bold cyan]

Run cpplint, cppcheck and clang-tidy, each when enabled in .gojo.

[bold green]Options:[/bold green]
    -q, --quiet       discard build output from the clang-tidy pass
""",
    "help": """[bold green]Usage:[/bold green] [bold cyan]gojo help [<COMMAND>][/bold cyan]
""",
}
