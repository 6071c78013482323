# n64build

Helpers for building N64 homebrew ROMs with the libultra toolchain. The
package has no dependencies outside the standard library.

## Modules

### `n64build.memory_map`

Describes the RAM layout the engine runtime expects for a chosen TV mode.

- `TvMode` (`NTSC`, `PAL`, `MPAL`) and `ThreadId` enumerations.
- `target_framerate(tv_mode)`: 50 for PAL, 60 otherwise.
- `screen_size(tv_mode, high_resolution)`: 320x240 / 640x480 for NTSC,
  320x288 / 640x576 for PAL and MPAL.
- `thread_priority(thread_id)`: the scheduling priority of a runtime thread.
- `build_memory_map(tv_mode, dram_stack_size)` returns a `MemoryMap` with the
  thread stacks (`boot`, `idle`, `main`, `controller`, `scheduler`,
  `graphics`, `audio`), the RCP DRAM stack and the RDP FIFO buffer laid out
  from the second RAM bank, plus the SD and HD framebuffer addresses and the
  heap locations.
- `MemoryMap.stack(name)` returns a `StackRegion` (`start`, `size`, `end`,
  `real_start`, `alignment`); an unknown name raises `KeyError`.
- `MemoryMap.validate(min_stack_size, dram_stack_size)` raises `ValueError`
  when a stack is misaligned or smaller than allowed.

An invalid TV mode raises `ValueError`.

### `n64build.settings`

`ProgramConfig` (toolchain paths and build options shared by all projects) and
`ProjectConfig` (target name, build folder, ROM header fields and compiler,
linker and MakeROM flags), with `default_program_config()`,
`default_project_config(project_path, program_config=None)`,
`default_gcc_flags(libultra_path)` and `default_ld_flags(libultra_path)`.
The default build folder is `<project_path>/build`.

### `n64build.preferences`

`PreferencesForm(project, program)` applies edits to the two configurations
with the rules of the builder's preferences dialog:

- ROM header title, manufacturer, ID and country are cut to 20, 1, 2 and 1
  characters.
- Clearing the target name, build folder or disassembly name restores its
  default. Clearing the libultra, toolkit or move path instead sets the
  disassembly name to that path's default.
- `set_option(name, checked)` sets one of the boolean program options and
  raises `ValueError` for an unknown name; `set_objects_next_to_source(checked)`
  turns the build folder off.
- `enabled_fields()` returns the names of the fields that currently accept
  input, e.g. the ROM header fields only while ROM registration is on.

### `n64build.project_tree`

- `build_tree(root, extensions)` scans a directory into a `TreeNode` tree.
  Entries are sorted by name, files come before subdirectories, only files
  with a whitelisted extension are kept, and directories holding none are left
  out. `.c` files get `NodeKind.SOURCE`, other files `NodeKind.FILE`.
- `TreeNode.walk()` yields a node and its descendants; `TreeNode.path()` gives
  its location on disk.
- `delete_files(node, extensions)` removes every whitelisted file under a node
  and returns the paths it removed.
- `is_whitelisted(extension, extensions)` checks one extension.

### `n64build.config_store`

- `ConfigFile(path=None)` keeps grouped settings addressed by keys such as
  `/ProgramConfig/Use_NRDC`, with `read`, `read_bool`, `write`, `has_entry`
  and `flush`. With a path, it is loaded from and flushed to an INI-style file;
  without one it lives only in memory. Booleans are stored as `1` and `0`.
- `save_program_config`, `load_program_config` and `apply_program_defaults`
  handle the `/ProgramConfig` group. Note that saving writes the
  separate-debug flag over the `Use_EXEW32` entry, while loading reads it from
  `SeparateDebug`.
- `save_project_config`, `load_project_config` and `apply_project_defaults`
  handle a project's own `/Project_<project path>` group. The build folder is
  saved relative to the project folder.
- `save_external_project(path, project, segments=None)` writes a shareable
  project file, including the source files of each segment other than
  `codesegment`; `load_external_project(path, project, store)` reads one back
  and copies its segment lists into the project's group of `store`.
- `parse_quoted_list` and `format_quoted_list` handle lists written as
  `"a" "b" `.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from n64build.memory_map import TvMode, build_memory_map
from n64build.settings import default_program_config, default_project_config
from n64build.config_store import ConfigFile, save_project_config

layout = build_memory_map(TvMode.PAL, dram_stack_size=0x400)
layout.validate(min_stack_size=0x48, dram_stack_size=0x400)
print(hex(layout.stack("main").start))

program = default_program_config()
project = default_project_config("/home/me/mygame", program)

store = ConfigFile("builder.ini")
save_project_config(store, project)
```

## What it does not do

The package is a library only. It has no command-line program and no
graphical preferences window, and it does not run the compiler, linker or ROM
tools, nor register, move or upload ROMs: it holds the settings for those
steps, not the steps themselves.