from chipette.utils import debug_enabled, debug_log, info_log, reset_categories, set_category


def test_disabled_without_environment(capsys):
    assert not debug_enabled("cpu")
    debug_log("cpu", "hidden %d", 1)

    assert capsys.readouterr().out == ""


def test_environment_categories(monkeypatch, capsys):
    monkeypatch.setenv("CHIPETTE_DEBUG", "CPU, input")
    reset_categories()

    assert debug_enabled("cpu")
    assert debug_enabled("input")
    assert not debug_enabled("audio")

    debug_log("cpu", "pc=%04x", 0x200)
    assert capsys.readouterr().out == "[CHIPETTE][cpu] pc=0200\n"


def test_all_enables_everything(monkeypatch):
    monkeypatch.setenv("CHIPETTE_DEBUG", "all")
    reset_categories()

    assert debug_enabled("anything")


def test_runtime_override():
    set_category("frame", True)
    assert debug_enabled("frame")

    set_category("frame", False)
    assert not debug_enabled("frame")


def test_bad_format_arguments_do_not_raise(monkeypatch, capsys):
    monkeypatch.setenv("CHIPETTE_DEBUG", "cpu")
    reset_categories()

    debug_log("cpu", "value=%d", "not-a-number")
    assert "value=%d" in capsys.readouterr().out


def test_info_log_always_prints(capsys):
    info_log("CHIP MODE: %s", "CHIP-8")

    assert capsys.readouterr().out == "CHIP MODE: CHIP-8\n"
