"""Persistent storage of builder settings in an INI-style configuration file."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Mapping

from n64build.settings import (
    DEFAULT_DISASSEMBLY,
    DEFAULT_LIBULTRAPATH,
    DEFAULT_MOVEPATH,
    DEFAULT_PROMPTCLEAN,
    DEFAULT_PROMPTDISASS,
    DEFAULT_PROMPTMOVE,
    DEFAULT_PROMPTUPLOAD,
    DEFAULT_SEPARATEDEBUG,
    DEFAULT_TOOLKITPATH,
    DEFAULT_USEBUILD,
    DEFAULT_USEEXEW32,
    DEFAULT_USEMAKEMASK,
    DEFAULT_USEMOVE,
    DEFAULT_USENRDC,
    DEFAULT_USEUPLOAD,
    ProgramConfig,
    ProjectConfig,
    default_program_config,
    default_project_config,
)

CODE_SEGMENT = "codesegment"
EXTERNAL_GROUP = "/N64Project"
PROGRAM_GROUP = "/ProgramConfig"

_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}
_UNESCAPES = {"n": "\n", "r": "\r", "t": "\t"}
_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off", ""})

# Text fields of the program configuration and the keys they are stored under.
_PROGRAM_TEXT_FIELDS = (
    ("Path_Libultra", "path_libultra"),
    ("Path_Toolkit", "path_toolkit"),
    ("Path_Move", "path_move"),
    ("Path_DisassemblyName", "disassembly_name"),
)

# Boolean fields with the key they are loaded from and their default.
_PROGRAM_BOOL_FIELDS = (
    ("Use_EXEW32", "use_exew32", DEFAULT_USEEXEW32),
    ("SeparateDebug", "separate_debug", DEFAULT_SEPARATEDEBUG),
    ("Use_Build", "use_build", DEFAULT_USEBUILD),
    ("Use_NRDC", "use_nrdc", DEFAULT_USENRDC),
    ("Use_Makemask", "use_makemask", DEFAULT_USEMAKEMASK),
    ("Use_Move", "use_move", DEFAULT_USEMOVE),
    ("Use_Upload", "use_upload", DEFAULT_USEUPLOAD),
    ("Prompt_Move", "prompt_move", DEFAULT_PROMPTMOVE),
    ("Prompt_Upload", "prompt_upload", DEFAULT_PROMPTUPLOAD),
    ("Prompt_Disassembly", "prompt_disassembly", DEFAULT_PROMPTDISASS),
    ("Prompt_Clean", "prompt_clean", DEFAULT_PROMPTCLEAN),
)

_PROJECT_FIELDS = (
    ("TargetName", "target_name"),
    ("BuildFolder", "build_folder"),
    ("ROMHeader_Name", "rom_header_name"),
    ("ROMHeader_Manufacturer", "rom_header_manufacturer"),
    ("ROMHeader_ID", "rom_header_id"),
    ("ROMHeader_Country", "rom_header_country"),
    ("Flags_GCC", "flags_gcc"),
    ("Flags_LD", "flags_ld"),
    ("Flags_MILD", "flags_mild"),
)


def _split_key(key: str) -> tuple[str, str]:
    group, _, name = key.lstrip("/").rpartition("/")
    if not name:
        raise ValueError(f"invalid configuration key: {key!r}")
    return group, name


def _escape(value: str) -> str:
    text = "".join(_ESCAPES.get(ch, ch) for ch in value)
    if text != text.strip(" "):
        text = f'"{text}"'
    return text


def _unescape(raw: str) -> str:
    if len(raw) >= 2 and raw.startswith('"') and raw.endswith('"'):
        raw = raw[1:-1]
    out = []
    chars = iter(raw)
    for ch in chars:
        if ch == "\\":
            following = next(chars, "")
            out.append(_UNESCAPES.get(following, following))
        else:
            out.append(ch)
    return "".join(out)


class ConfigFile:
    """Grouped key/value settings, optionally backed by a file on disk.

    Keys are slash separated paths such as ``/ProgramConfig/Use_NRDC``;
    everything before the last slash names the group.
    """

    def __init__(self, path=None):
        self.path = Path(path) if path is not None else None
        self._groups: dict[str, dict[str, str]] = {}
        if self.path is not None and self.path.exists():
            self._parse(self.path.read_text(encoding="utf-8"))

    def _parse(self, text: str) -> None:
        group = ""
        for line in text.splitlines():
            stripped = line.strip()
            if not stripped or stripped[0] in "#;":
                continue
            if stripped.startswith("[") and stripped.endswith("]"):
                group = stripped[1:-1]
                self._groups.setdefault(group, {})
                continue
            name, sep, raw = stripped.partition("=")
            if not sep:
                continue
            self._groups.setdefault(group, {})[name.strip()] = _unescape(raw.strip())

    def read(self, key: str, default=None):
        """The text stored under ``key``, or ``default`` if there is none."""
        group, name = _split_key(key)
        return self._groups.get(group, {}).get(name, default)

    def read_bool(self, key: str, default: bool) -> bool:
        """The boolean stored under ``key``, or ``default``."""
        value = self.read(key)
        if value is None:
            return default
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        return default

    def write(self, key: str, value) -> None:
        """Store ``value`` under ``key``; booleans are kept as 1 and 0."""
        group, name = _split_key(key)
        if isinstance(value, bool):
            text = "1" if value else "0"
        else:
            text = str(value)
        self._groups.setdefault(group, {})[name] = text

    def has_entry(self, key: str) -> bool:
        group, name = _split_key(key)
        return name in self._groups.get(group, {})

    def flush(self) -> None:
        """Write the settings to the backing file, if there is one."""
        if self.path is None:
            return
        lines = []
        for name, value in self._groups.get("", {}).items():
            lines.append(f"{name}={_escape(value)}")
        for group, entries in self._groups.items():
            if not group:
                continue
            if lines:
                lines.append("")
            lines.append(f"[{group}]")
            lines.extend(f"{name}={_escape(value)}" for name, value in entries.items())
        self.path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def _after_first(text: str, char: str) -> str:
    _, sep, rest = text.partition(char)
    return rest if sep else ""


def parse_quoted_list(text: str) -> list[str]:
    """Split a list written as ``"a" "b" `` into its items."""
    items = []
    rest = text
    while rest:
        rest = _after_first(rest, '"')
        items.append(rest.partition('"')[0])
        rest = _after_first(rest, '"')
        rest = _after_first(rest, " ")
    return items


def format_quoted_list(items: Iterable[str]) -> str:
    """Join items as a list of quoted strings, each followed by a space."""
    return "".join(f'"{item}" ' for item in items)


def _relative_to_project(path: str, project_path: str) -> str:
    if not project_path or not os.path.isabs(path):
        return path
    try:
        relative = os.path.relpath(path, project_path)
    except ValueError:
        return path
    return relative.replace(os.sep, "/")


def _project_key(project_path: str, name: str) -> str:
    return f"/Project_{project_path}/{name}"


def save_program_config(store: ConfigFile, config: ProgramConfig) -> None:
    """Store the program configuration and flush the file."""
    for key, attr in _PROGRAM_TEXT_FIELDS:
        store.write(f"{PROGRAM_GROUP}/{key}", getattr(config, attr))
    store.write(f"{PROGRAM_GROUP}/Use_EXEW32", config.use_exew32)
    # The separate-debug flag has always been saved over the EXEW32 entry.
    store.write(f"{PROGRAM_GROUP}/Use_EXEW32", config.separate_debug)
    for key, attr, _ in _PROGRAM_BOOL_FIELDS[2:]:
        store.write(f"{PROGRAM_GROUP}/{key}", getattr(config, attr))
    store.flush()


def load_program_config(store: ConfigFile, config: ProgramConfig) -> ProgramConfig:
    """Fill ``config`` from the store; missing flags take their defaults."""
    for key, attr in _PROGRAM_TEXT_FIELDS:
        setattr(config, attr, store.read(f"{PROGRAM_GROUP}/{key}", getattr(config, attr)))
    for key, attr, default in _PROGRAM_BOOL_FIELDS:
        setattr(config, attr, store.read_bool(f"{PROGRAM_GROUP}/{key}", default))
    return config


def apply_program_defaults(store: ConfigFile) -> ProgramConfig:
    """Return the default program configuration, storing any missing entry."""
    config = default_program_config()
    fields = [(key, attr) for key, attr in _PROGRAM_TEXT_FIELDS]
    fields += [(key, attr) for key, attr, _ in _PROGRAM_BOOL_FIELDS]
    for key, attr in fields:
        full_key = f"{PROGRAM_GROUP}/{key}"
        if not store.has_entry(full_key):
            store.write(full_key, getattr(config, attr))
    store.flush()
    return config


def save_project_config(store: ConfigFile, project: ProjectConfig) -> None:
    """Store the project's settings under its own group and flush."""
    for key, attr in _PROJECT_FIELDS:
        value = getattr(project, attr)
        if attr == "build_folder":
            value = _relative_to_project(value, project.project_path)
        store.write(_project_key(project.project_path, key), value)
    store.flush()


def load_project_config(store: ConfigFile, project: ProjectConfig) -> ProjectConfig:
    """Fill ``project`` from its group in the store, keeping missing fields."""
    for key, attr in _PROJECT_FIELDS:
        full_key = _project_key(project.project_path, key)
        setattr(project, attr, store.read(full_key, getattr(project, attr)))
    return project


def apply_project_defaults(store: ConfigFile, project_path, program_config=None) -> ProjectConfig:
    """Return a default project configuration, storing any missing entry."""
    project = default_project_config(project_path, program_config)
    for key, attr in _PROJECT_FIELDS:
        full_key = _project_key(project.project_path, key)
        if not store.has_entry(full_key):
            store.write(full_key, getattr(project, attr))
    store.flush()
    return project


def save_external_project(path, project: ProjectConfig, segments: Mapping[str, Iterable] = None) -> None:
    """Write a shareable project file holding settings and segment lists.

    ``segments`` maps a segment name to the source files placed in it;
    files in the code segment are not listed.
    """
    file = ConfigFile(path)
    for key, attr in _PROJECT_FIELDS:
        value = getattr(project, attr)
        if attr == "build_folder":
            value = _relative_to_project(value, project.project_path)
        file.write(f"{EXTERNAL_GROUP}/{key}", value)
    file.flush()

    grouped = {
        name: [str(item) for item in files]
        for name, files in (segments or {}).items()
        if name != CODE_SEGMENT
    }
    if not grouped:
        return
    names = sorted(grouped)
    file.write(f"{EXTERNAL_GROUP}/SegmentList", format_quoted_list(names))
    for name in names:
        files = [_relative_to_project(item, project.project_path) for item in grouped[name]]
        file.write(f"{EXTERNAL_GROUP}/Segment_{name}", format_quoted_list(files))
    file.flush()


def load_external_project(path, project: ProjectConfig, store: ConfigFile) -> ProjectConfig:
    """Read a shareable project file into ``project``.

    Segment lists found in it are copied into the project's group of
    ``store``.
    """
    file = ConfigFile(path)
    for key, attr in _PROJECT_FIELDS:
        setattr(project, attr, file.read(f"{EXTERNAL_GROUP}/{key}", getattr(project, attr)))

    list_key = f"{EXTERNAL_GROUP}/SegmentList"
    if file.has_entry(list_key):
        segment_list = file.read(list_key, "")
        store.write(_project_key(project.project_path, "SegmentList"), segment_list)
        for name in parse_quoted_list(segment_list):
            store.write(
                _project_key(project.project_path, f"Segment_{name}"),
                file.read(f"{EXTERNAL_GROUP}/Segment_{name}", ""),
            )
        store.flush()
    return project