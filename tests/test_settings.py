from n64build.settings import (
    ProgramConfig,
    ProjectConfig,
    default_gcc_flags,
    default_ld_flags,
    default_program_config,
    default_project_config,
)


def test_gcc_flags_reference_libultra_includes():
    path = "/opt/libultra"
    tokens = default_gcc_flags(path).split()
    assert tokens[0] == "-Wall"
    assert f"-I{path}/usr/include/PR" in tokens
    assert f"-I{path}/usr/include" in tokens
    assert "-DF3DEX_GBI_2" in tokens


def test_gcc_flags_end_with_space():
    assert default_gcc_flags("x").endswith(" ")


def test_ld_flags_reference_libultra_libs():
    path = "/opt/libultra"
    flags = default_ld_flags(path)
    tokens = flags.split()
    assert tokens[0] == "-L."
    assert f"-L{path}/usr/lib" in tokens
    assert f"-L{path}/usr/lib/PR" in tokens
    assert f"-L{path}/gcc/mipse/lib" in tokens
    assert flags.endswith("-lkmc")


def test_default_program_config_values():
    config = default_program_config()
    assert config.path_libultra == "C:/ultra"
    assert config.path_toolkit == "C:/ultra/GCC/MIPSE/BIN"
    assert config.path_move == "Z:"
    assert config.disassembly_name == "disassembly.txt"
    assert config.use_exew32 is True
    assert config.use_move is False
    assert config.use_upload is False
    assert config.prompt_disassembly is False
    assert config.prompt_clean is True


def test_default_program_config_matches_plain_construction():
    assert default_program_config() == ProgramConfig()


def test_default_project_config_values():
    project = default_project_config("/home/dev/game")
    assert project.project_path == "/home/dev/game"
    assert project.target_name == "homebrew.n64"
    assert project.build_folder == "/home/dev/game/build"
    assert project.rom_header_name == "MY HOMEBREW GAME"
    assert project.rom_header_manufacturer == "N"
    assert project.rom_header_id == "HB"
    assert project.rom_header_country == "E"
    assert project.flags_mild == ""


def test_default_project_config_uses_program_libultra_path():
    program = ProgramConfig(path_libultra="/sdk")
    project = default_project_config("/p", program)
    assert project.flags_gcc == default_gcc_flags("/sdk")
    assert project.flags_ld == default_ld_flags("/sdk")


def test_default_project_config_without_program_uses_defaults():
    project = default_project_config("/p")
    assert project.flags_gcc == default_gcc_flags(ProgramConfig().path_libultra)


def test_configs_are_mutable_and_independent():
    first = default_project_config("/a")
    second = default_project_config("/a")
    first.target_name = "other.n64"
    assert second.target_name == "homebrew.n64"
    assert isinstance(second, ProjectConfig) and first != second