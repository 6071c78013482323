"""Program-wide and per-project builder settings with their defaults."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_ROMNAME = "homebrew.n64"
DEFAULT_BUILD_SUBFOLDER = "build"
DEFAULT_ROMHEADER_NAME = "MY HOMEBREW GAME"
DEFAULT_ROMHEADER_MANUF = "N"
DEFAULT_ROMHEADER_ID = "HB"
DEFAULT_ROMHEADER_COUNTRY = "E"
DEFAULT_MILDFLAGS = ""

DEFAULT_LIBULTRAPATH = "C:/ultra"
DEFAULT_TOOLKITPATH = "C:/ultra/GCC/MIPSE/BIN"
DEFAULT_MOVEPATH = "Z:"
DEFAULT_DISASSEMBLY = "disassembly.txt"
DEFAULT_USEEXEW32 = True
DEFAULT_SEPARATEDEBUG = True
DEFAULT_USEBUILD = True
DEFAULT_USENRDC = True
DEFAULT_USEMAKEMASK = True
DEFAULT_USEMOVE = False
DEFAULT_USEUPLOAD = False
DEFAULT_PROMPTMOVE = True
DEFAULT_PROMPTUPLOAD = True
DEFAULT_PROMPTDISASS = False
DEFAULT_PROMPTCLEAN = True

# Maximum lengths of the ROM header fields.
ROMHEADER_NAME_LENGTH = 20
ROMHEADER_MANUF_LENGTH = 1
ROMHEADER_ID_LENGTH = 2
ROMHEADER_COUNTRY_LENGTH = 1


def default_gcc_flags(libultra_path: str) -> str:
    """Compiler flags used for a new project, pointing at libultra."""
    return (
        "-Wall "
        "-I. "
        f"-I{libultra_path}/usr/include/PR "
        f"-I{libultra_path}/usr/include "
        "-G 0 "
        "-DF3DEX_GBI_2 -DNOT_SPEC -D_MIPS_SZLONG=32 -D_MIPS_SZINT=32 "
    )


def default_ld_flags(libultra_path: str) -> str:
    """Linker flags used for a new project, pointing at libultra."""
    return (
        "-L. "
        f"-L{libultra_path}/usr/lib "
        f"-L{libultra_path}/usr/lib/PR "
        f"-L{libultra_path}/gcc/mipse/lib -lkmc"
    )


def default_build_folder(project_path: str) -> str:
    """Build folder used when none is configured for a project."""
    return f"{project_path}/{DEFAULT_BUILD_SUBFOLDER}"


@dataclass
class ProgramConfig:
    """Settings shared by every project the builder opens."""

    path_libultra: str = DEFAULT_LIBULTRAPATH
    path_toolkit: str = DEFAULT_TOOLKITPATH
    path_move: str = DEFAULT_MOVEPATH
    disassembly_name: str = DEFAULT_DISASSEMBLY
    use_exew32: bool = DEFAULT_USEEXEW32
    separate_debug: bool = DEFAULT_SEPARATEDEBUG
    use_build: bool = DEFAULT_USEBUILD
    use_nrdc: bool = DEFAULT_USENRDC
    use_makemask: bool = DEFAULT_USEMAKEMASK
    use_move: bool = DEFAULT_USEMOVE
    use_upload: bool = DEFAULT_USEUPLOAD
    prompt_move: bool = DEFAULT_PROMPTMOVE
    prompt_upload: bool = DEFAULT_PROMPTUPLOAD
    prompt_disassembly: bool = DEFAULT_PROMPTDISASS
    prompt_clean: bool = DEFAULT_PROMPTCLEAN


@dataclass
class ProjectConfig:
    """Settings belonging to one project folder."""

    project_path: str = ""
    target_name: str = DEFAULT_ROMNAME
    build_folder: str = ""
    rom_header_name: str = DEFAULT_ROMHEADER_NAME
    rom_header_manufacturer: str = DEFAULT_ROMHEADER_MANUF
    rom_header_id: str = DEFAULT_ROMHEADER_ID
    rom_header_country: str = DEFAULT_ROMHEADER_COUNTRY
    flags_gcc: str = ""
    flags_ld: str = ""
    flags_mild: str = DEFAULT_MILDFLAGS


def default_program_config() -> ProgramConfig:
    """A program configuration holding every default value."""
    return ProgramConfig()


def default_project_config(project_path, program_config=None) -> ProjectConfig:
    """A project configuration with defaults for the given project folder.

    The compiler and linker flags refer to the libultra path of
    ``program_config``, or of the default program configuration.
    """
    program = program_config if program_config is not None else ProgramConfig()
    project_path = str(project_path)
    return ProjectConfig(
        project_path=project_path,
        target_name=DEFAULT_ROMNAME,
        build_folder=default_build_folder(project_path),
        rom_header_name=DEFAULT_ROMHEADER_NAME,
        rom_header_manufacturer=DEFAULT_ROMHEADER_MANUF,
        rom_header_id=DEFAULT_ROMHEADER_ID,
        rom_header_country=DEFAULT_ROMHEADER_COUNTRY,
        flags_gcc=default_gcc_flags(program.path_libultra),
        flags_ld=default_ld_flags(program.path_libultra),
        flags_mild=DEFAULT_MILDFLAGS,
    )