"""Editing logic of the preferences form: field rules and enabled states."""

from __future__ import annotations

from dataclasses import dataclass

from n64build.settings import (
    DEFAULT_DISASSEMBLY,
    DEFAULT_LIBULTRAPATH,
    DEFAULT_MOVEPATH,
    DEFAULT_ROMNAME,
    DEFAULT_TOOLKITPATH,
    ROMHEADER_COUNTRY_LENGTH,
    ROMHEADER_ID_LENGTH,
    ROMHEADER_MANUF_LENGTH,
    ROMHEADER_NAME_LENGTH,
    ProgramConfig,
    ProjectConfig,
    default_build_folder,
)

# Check boxes that map straight onto a ProgramConfig attribute.
OPTION_NAMES = frozenset(
    {
        "use_exew32",
        "separate_debug",
        "use_nrdc",
        "use_makemask",
        "use_move",
        "use_upload",
        "prompt_move",
        "prompt_upload",
        "prompt_disassembly",
        "prompt_clean",
    }
)

_ALWAYS_ENABLED = frozenset(
    {
        "target_name",
        "gcc_flags",
        "ld_flags",
        "makerom_flags",
        "libultra_path",
        "toolkit_path",
        "disassembly_name",
        "use_exew32",
        "objects_next_to_source",
        "separate_debug",
        "use_makemask",
        "use_nrdc",
        "use_move",
        "use_upload",
        "prompt_disassembly",
        "prompt_clean",
        "close",
    }
)

_ROM_HEADER_FIELDS = frozenset(
    {"rom_header", "rom_title", "rom_manufacturer", "rom_id", "rom_country"}
)


@dataclass
class PreferencesForm:
    """Applies edits from the preferences form to the live configurations."""

    project: ProjectConfig
    program: ProgramConfig

    def set_target_name(self, value: str) -> None:
        self.project.target_name = value or DEFAULT_ROMNAME

    def set_build_folder(self, value: str) -> None:
        self.project.build_folder = value or default_build_folder(
            self.project.project_path
        )

    def set_rom_title(self, value: str) -> None:
        self.project.rom_header_name = value[:ROMHEADER_NAME_LENGTH]

    def set_rom_manufacturer(self, value: str) -> None:
        self.project.rom_header_manufacturer = value[:ROMHEADER_MANUF_LENGTH]

    def set_rom_id(self, value: str) -> None:
        self.project.rom_header_id = value[:ROMHEADER_ID_LENGTH]

    def set_rom_country(self, value: str) -> None:
        self.project.rom_header_country = value[:ROMHEADER_COUNTRY_LENGTH]

    def set_gcc_flags(self, value: str) -> None:
        self.project.flags_gcc = value

    def set_ld_flags(self, value: str) -> None:
        self.project.flags_ld = value

    def set_makerom_flags(self, value: str) -> None:
        self.project.flags_mild = value

    # Clearing one of the three path fields resets the disassembly name,
    # not the path itself; the form has always behaved this way.
    def set_libultra_path(self, value: str) -> None:
        self.program.path_libultra = value
        if not value:
            self.program.disassembly_name = DEFAULT_LIBULTRAPATH

    def set_toolkit_path(self, value: str) -> None:
        self.program.path_toolkit = value
        if not value:
            self.program.disassembly_name = DEFAULT_TOOLKITPATH

    def set_move_folder(self, value: str) -> None:
        self.program.path_move = value
        if not value:
            self.program.disassembly_name = DEFAULT_MOVEPATH

    def set_disassembly_name(self, value: str) -> None:
        self.program.disassembly_name = value or DEFAULT_DISASSEMBLY

    def set_option(self, name: str, checked: bool) -> None:
        """Set one of the program's boolean options from its check box."""
        if name not in OPTION_NAMES:
            raise ValueError(f"unknown option: {name!r}")
        setattr(self.program, name, bool(checked))

    def set_objects_next_to_source(self, checked: bool) -> None:
        """Leaving objects next to the source disables the build folder."""
        self.program.use_build = not checked

    def enabled_fields(self) -> frozenset[str]:
        """Names of the form fields that currently accept input."""
        enabled = set(_ALWAYS_ENABLED)
        if self.program.use_build:
            enabled.update({"build_folder_label", "build_folder"})
        if self.program.use_nrdc:
            enabled.update(_ROM_HEADER_FIELDS)
        if self.program.use_move:
            enabled.update({"move_folder_label", "move_folder", "prompt_move"})
        if self.program.use_upload:
            enabled.add("prompt_upload")
        return frozenset(enabled)