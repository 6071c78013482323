import pytest

from n64build.config_store import (
    ConfigFile,
    apply_program_defaults,
    apply_project_defaults,
    format_quoted_list,
    load_external_project,
    load_program_config,
    load_project_config,
    parse_quoted_list,
    save_external_project,
    save_program_config,
    save_project_config,
)
from n64build.settings import (
    DEFAULT_LIBULTRAPATH,
    DEFAULT_ROMNAME,
    ProgramConfig,
    ProjectConfig,
    default_gcc_flags,
    default_program_config,
    default_project_config,
)


def test_write_read_round_trip_through_disk(tmp_path):
    path = tmp_path / "builder.ini"
    store = ConfigFile(path)
    awkward = ' lead "quoted" back\\slash\nline trailing '
    store.write("/Group/Value", awkward)
    store.write("/Group/Flags", "-Wall -I. ")
    store.flush()
    reloaded = ConfigFile(path)
    assert reloaded.read("/Group/Value") == awkward
    assert reloaded.read("/Group/Flags") == "-Wall -I. "


def test_missing_entry_returns_default():
    store = ConfigFile()
    assert store.read("/Group/Missing", "fallback") == "fallback"
    assert store.has_entry("/Group/Missing") is False
    store.write("/Group/Missing", "now")
    assert store.has_entry("/Group/Missing") is True


def test_booleans_stored_as_digits(tmp_path):
    path = tmp_path / "builder.ini"
    store = ConfigFile(path)
    store.write("/ProgramConfig/Use_NRDC", True)
    store.flush()
    text = path.read_text(encoding="utf-8")
    assert "[ProgramConfig]" in text
    assert "Use_NRDC=1" in text
    assert ConfigFile(path).read_bool("/ProgramConfig/Use_NRDC", False) is True
    assert store.read_bool("/ProgramConfig/Absent", True) is True


def test_invalid_key_raises():
    with pytest.raises(ValueError):
        ConfigFile().write("/Group/", "x")


def test_parse_quoted_list():
    assert parse_quoted_list('"alpha" "beta" ') == ["alpha", "beta"]
    assert parse_quoted_list("") == []
    items = ["one", "two words", "three"]
    assert parse_quoted_list(format_quoted_list(items)) == items


def test_program_config_round_trip_with_separate_debug_quirk():
    store = ConfigFile()
    config = ProgramConfig(
        path_libultra="D:/sdk",
        use_exew32=True,
        separate_debug=False,
        use_move=True,
        prompt_clean=False,
    )
    save_program_config(store, config)
    loaded = load_program_config(store, default_program_config())
    assert loaded.path_libultra == "D:/sdk"
    assert loaded.use_move is True
    assert loaded.prompt_clean is False
    # The separate-debug flag lands in the EXEW32 entry.
    assert loaded.use_exew32 is False
    assert loaded.separate_debug is default_program_config().separate_debug


def test_program_defaults_keep_existing_entries():
    store = ConfigFile()
    store.write("/ProgramConfig/Path_Libultra", "D:/sdk")
    config = apply_program_defaults(store)
    assert config.path_libultra == DEFAULT_LIBULTRAPATH
    assert store.read("/ProgramConfig/Path_Libultra") == "D:/sdk"
    assert store.has_entry("/ProgramConfig/SeparateDebug")
    assert store.read_bool("/ProgramConfig/Use_Move", True) is config.use_move


def test_project_config_round_trip(tmp_path):
    project_path = str(tmp_path / "game")
    store = ConfigFile(tmp_path / "builder.ini")
    project = default_project_config(project_path)
    project.target_name = "demo.n64"
    project.flags_mild = "-r"
    save_project_config(store, project)
    assert store.read(f"/Project_{project_path}/BuildFolder") == "build"

    loaded = load_project_config(
        ConfigFile(tmp_path / "builder.ini"), ProjectConfig(project_path=project_path)
    )
    assert loaded.target_name == "demo.n64"
    assert loaded.flags_mild == "-r"
    assert loaded.flags_gcc == project.flags_gcc


def test_project_defaults_written_under_project_group(tmp_path):
    project_path = str(tmp_path)
    store = ConfigFile()
    store.write(f"/Project_{project_path}/TargetName", "kept.n64")
    project = apply_project_defaults(store, project_path, ProgramConfig(path_libultra="D:/sdk"))
    assert project.target_name == DEFAULT_ROMNAME
    assert store.read(f"/Project_{project_path}/TargetName") == "kept.n64"
    assert store.read(f"/Project_{project_path}/Flags_GCC") == default_gcc_flags("D:/sdk")


def test_external_project_with_segments(tmp_path):
    project_path = str(tmp_path)
    project = default_project_config(project_path)
    project.rom_header_name = "SHARED"
    segments = {
        "zeta": [f"{project_path}/z.c"],
        "alpha": [f"{project_path}/a.c", f"{project_path}/b.c"],
        "codesegment": [f"{project_path}/main.c"],
    }
    external = tmp_path / "game.n64proj"
    save_external_project(external, project, segments)

    store = ConfigFile()
    loaded = load_external_project(external, ProjectConfig(project_path=project_path), store)
    assert loaded.rom_header_name == "SHARED"
    segment_list = store.read(f"/Project_{project_path}/SegmentList")
    assert parse_quoted_list(segment_list) == sorted(["zeta", "alpha"])
    alpha = parse_quoted_list(store.read(f"/Project_{project_path}/Segment_alpha"))
    assert alpha == ["a.c", "b.c"]
    assert not store.has_entry(f"/Project_{project_path}/Segment_codesegment")


def test_external_project_without_segments(tmp_path):
    project_path = str(tmp_path)
    project = default_project_config(project_path)
    external = tmp_path / "plain.n64proj"
    save_external_project(external, project, {"codesegment": ["main.c"]})
    assert not ConfigFile(external).has_entry("/N64Project/SegmentList")

    store = ConfigFile()
    loaded = load_external_project(external, ProjectConfig(project_path=project_path), store)
    assert loaded.target_name == project.target_name
    assert not store.has_entry(f"/Project_{project_path}/SegmentList")