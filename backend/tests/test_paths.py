from pathlib import Path

from alphafix.paths import get_save_path


def test_no_options_overwrites_input():
    path = Path("assets/ui/icon.png")
    assert get_save_path(path) == path


def test_directory_and_append():
    out = get_save_path("assets/ui/icon.png", directory="out/", append="_fix")
    assert out == Path("out/icon_fix.png")


def test_directory_append_and_opaque():
    out = get_save_path("assets/ui/icon.png", directory="out", append="_fix", opaque=True)
    assert out == Path("out/icon_fix_opaque.png")


def test_opaque_only_stays_next_to_input():
    assert get_save_path("assets/ui/icon.png", opaque=True) == Path("assets/ui/icon_opaque.png")


def test_append_only():
    assert get_save_path("icon.webp", append="-bled") == Path("icon-bled.webp")


def test_directory_only_keeps_name():
    assert get_save_path("assets/ui/icon.png", directory=Path("build")) == Path("build/icon.png")
