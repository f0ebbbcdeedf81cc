from __future__ import annotations

from pathlib import Path

from snap.path_utils import APP_STORE_SUFFIX, MOCKUP_SUFFIX, abs_path, output_path_for, scoped_access


def test_output_names_follow_mode(tmp_path: Path) -> None:
    src = tmp_path / "foo.png"

    assert output_path_for(src, APP_STORE_SUFFIX) == tmp_path.resolve() / "foo_appstore.png"
    assert output_path_for(src, MOCKUP_SUFFIX) == tmp_path.resolve() / "foo_iphone_mockup.png"


def test_output_is_always_png_and_beside_source(tmp_path: Path) -> None:
    src = tmp_path / "sub" / "Screen Shot 2025.06.23.jpeg"

    out = output_path_for(src, APP_STORE_SUFFIX)

    assert out.parent == (tmp_path / "sub").resolve()
    assert out.name == "Screen Shot 2025.06.23_appstore.png"


def test_output_path_is_deterministic(tmp_path: Path) -> None:
    src = tmp_path / "shot.png"
    assert output_path_for(src, MOCKUP_SUFFIX) == output_path_for(str(src), MOCKUP_SUFFIX)


def test_abs_path_does_not_require_existence(tmp_path: Path) -> None:
    p = abs_path(tmp_path / "missing" / "x.png")
    assert p.is_absolute()
    assert not p.exists()


def test_scoped_access_granted_for_writable_dir(tmp_path: Path) -> None:
    f = tmp_path / "a.png"
    f.write_bytes(b"x")

    with scoped_access(f) as granted:
        assert granted is True

    with scoped_access(tmp_path) as granted:
        assert granted is True


def test_scoped_access_missing_dir_is_not_fatal(tmp_path: Path) -> None:
    entered = False
    with scoped_access(tmp_path / "nope" / "a.png") as granted:
        entered = True
        assert granted is False
    assert entered
